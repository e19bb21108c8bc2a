"""
Process-wide in-memory TLE cache.

The key space is bounded by the fixed category set, so there is no
eviction or capacity limit. Freshness is judged by the caller.
"""
from dataclasses import dataclass
from threading import Lock
from typing import Dict, List, Optional, Sequence, Tuple

from services.tle_parser import SatelliteRecord

CACHE_KEY_PREFIX = 'satellites_'
DEFAULT_TTL_MS = 24 * 60 * 60 * 1000


def cache_key(category: str) -> str:
    return f"{CACHE_KEY_PREFIX}{category}"


@dataclass(frozen=True)
class CacheEntry:
    records: Tuple[SatelliteRecord, ...]
    timestamp: int  # ms since epoch

    def age_ms(self, now_ms: int) -> int:
        return now_ms - self.timestamp


def is_fresh(entry: CacheEntry, now_ms: int, ttl_ms: int = DEFAULT_TTL_MS) -> bool:
    """An entry is fresh while now - timestamp < ttl."""
    return entry.age_ms(now_ms) < ttl_ms


class TLECacheStore:
    """Keyed store of (records, timestamp) pairs with whole-entry replace."""

    def __init__(self):
        self._lock = Lock()
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, records: Sequence[SatelliteRecord], timestamp: int) -> CacheEntry:
        entry = CacheEntry(records=tuple(records), timestamp=int(timestamp))
        with self._lock:
            self._entries[key] = entry
        return entry

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def __len__(self):
        with self._lock:
            return len(self._entries)
