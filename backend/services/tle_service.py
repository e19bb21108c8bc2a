"""
TLE (Two-Line Element) data service.
Handles fetching, parsing, and caching satellite TLE data per category.

Flow per request:
1. Validate category against the source registry (no I/O on failure)
2. Serve from the in-memory cache while the entry is fresh (24h by default)
3. Otherwise fetch from CelesTrak, parse, replace the cache entry, respond

Concurrent misses for the same category share a single upstream fetch.
"""
import logging
import time
from dataclasses import dataclass
from threading import Event, Lock
from typing import Callable, Dict, List, Optional, Tuple

import requests
from flask import current_app

from services.cache_store import CacheEntry, TLECacheStore, cache_key, is_fresh
from services.exceptions import (
    InvalidCategoryError,
    UpstreamFetchError,
    UpstreamHTTPError,
    UpstreamTransportError,
)
from services.source_registry import SourceRegistry
from services.tle_parser import SatelliteRecord, parse_tle_text

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class SatelliteDataResult:
    """Outcome of a successful lookup."""
    category: str
    records: Tuple[SatelliteRecord, ...]
    cached: bool
    timestamp: int
    stale: bool = False

    @property
    def count(self) -> int:
        return len(self.records)

    def to_dict(self) -> Dict:
        payload = {
            'data': [record.to_dict() for record in self.records],
            'cached': self.cached,
            'timestamp': self.timestamp,
        }
        if not self.cached:
            payload['count'] = self.count
        if self.stale:
            payload['stale'] = True
        return payload


class _InFlight:
    """A fetch in progress that late arrivals wait on."""

    def __init__(self):
        self.done = Event()
        self.entry: Optional[CacheEntry] = None
        self.fetched = False
        self.error: Optional[BaseException] = None


class SatelliteDataService:
    """
    Service for serving categorized TLE data from CelesTrak.
    The cache store, HTTP session and clock are injected so the owning
    application (or a test) controls their lifetime.
    """

    DEFAULT_TTL_SECONDS = 86400
    DEFAULT_FETCH_TIMEOUT = 30

    def __init__(
        self,
        registry: Optional[SourceRegistry] = None,
        cache: Optional[TLECacheStore] = None,
        session: Optional[requests.Session] = None,
        clock: Optional[Callable[[], int]] = None,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT,
        serve_stale_on_error: bool = False,
        user_agent: Optional[str] = None,
    ):
        self.registry = registry or SourceRegistry()
        self.cache = cache if cache is not None else TLECacheStore()
        self.session = session or requests.Session()
        if user_agent:
            self.session.headers['User-Agent'] = user_agent
        self.clock = clock or _now_ms
        self.ttl_ms = int(ttl_seconds * 1000)
        self.fetch_timeout = fetch_timeout
        self.serve_stale_on_error = serve_stale_on_error

        # Single-flight registry: {cache_key: _InFlight}
        self._inflight_lock = Lock()
        self._inflight: Dict[str, _InFlight] = {}

    @classmethod
    def from_config(cls, app_config, **overrides) -> 'SatelliteDataService':
        """Build a service from a Flask config mapping."""
        options = {
            'registry': SourceRegistry(app_config['CELESTRAK_BASE_URL']),
            'ttl_seconds': app_config['TLE_CACHE_TTL'],
            'fetch_timeout': app_config['TLE_FETCH_TIMEOUT'],
            'serve_stale_on_error': app_config['TLE_SERVE_STALE_ON_ERROR'],
            'user_agent': app_config.get('USER_AGENT'),
        }
        options.update(overrides)
        return cls(**options)

    # ==================== Lookup ====================

    def validate_category(self, category: str) -> str:
        if not self.registry.is_valid(category):
            logger.info(f"[TLEService] Invalid category received: {category!r}")
            raise InvalidCategoryError(category, self.registry.categories())
        return category

    def get_satellites(self, category: str) -> SatelliteDataResult:
        """
        Get TLE records for a category, from cache when fresh.

        Raises:
            InvalidCategoryError: category is not registered
            UpstreamFetchError: cache miss and the upstream fetch failed
        """
        self.validate_category(category)
        key = cache_key(category)

        cached = self.cache.get(key)
        if cached is not None and is_fresh(cached, self.clock(), self.ttl_ms):
            logger.debug(f"[TLEService] Serving cached data for {category}")
            return SatelliteDataResult(category, cached.records, True, cached.timestamp)

        try:
            entry, fetched = self._load(category, key)
        except UpstreamFetchError as e:
            if self.serve_stale_on_error and cached is not None:
                logger.warning(
                    f"[TLEService] Upstream failed for {category}, serving stale entry "
                    f"from {cached.timestamp}: {e}"
                )
                return SatelliteDataResult(category, cached.records, True, cached.timestamp, stale=True)
            raise

        return SatelliteDataResult(category, entry.records, not fetched, entry.timestamp)

    def refresh(self, category: str) -> SatelliteDataResult:
        """Fetch a category from upstream regardless of cache freshness."""
        self.validate_category(category)
        entry, _ = self._load(category, cache_key(category), force=True)
        return SatelliteDataResult(category, entry.records, False, entry.timestamp)

    def refresh_all(self) -> Dict[str, Optional[int]]:
        """
        Refresh every registered category.
        Returns {category: record count}, with None for categories that failed.
        """
        results = {}
        for category in self.registry.categories():
            try:
                results[category] = self.refresh(category).count
            except UpstreamFetchError as e:
                logger.error(f"[TLEService] Refresh failed for {category}: {e}")
                results[category] = None
        return results

    # ==================== Fetching ====================

    def _load(self, category: str, key: str, force: bool = False) -> Tuple[CacheEntry, bool]:
        """
        Fetch, parse and store, sharing one fetch between concurrent callers.

        Unless forced, the leader first re-reads the cache: a peer may have
        stored a fresh entry after this caller saw a miss.
        Returns the entry and whether it came from upstream.
        """
        with self._inflight_lock:
            call = self._inflight.get(key)
            is_leader = call is None
            if is_leader:
                call = _InFlight()
                self._inflight[key] = call

        if not is_leader:
            logger.debug(f"[TLEService] Joining in-flight fetch for {category}")
            call.done.wait()
            if call.error is not None:
                raise call.error
            return call.entry, call.fetched

        try:
            current = None if force else self.cache.get(key)
            if current is not None and is_fresh(current, self.clock(), self.ttl_ms):
                call.entry = current
            else:
                call.entry = self._fetch_and_store(category, key)
                call.fetched = True
            return call.entry, call.fetched
        except BaseException as e:
            call.error = e
            raise
        finally:
            with self._inflight_lock:
                self._inflight.pop(key, None)
            call.done.set()

    def _fetch_and_store(self, category: str, key: str) -> CacheEntry:
        tle_text = self.fetch_tle_text(category)
        records = parse_tle_text(tle_text)
        entry = self.cache.put(key, records, self.clock())
        logger.info(f"[TLEService] Cached {len(records)} satellites for {category}")
        return entry

    def fetch_tle_text(self, category: str) -> str:
        """
        Fetch raw TLE text for a category from its upstream URL.
        Any non-2xx status is a failure of the whole fetch.
        """
        url = self.registry.url_for(category)
        logger.info(f"[CelesTrak] Fetching fresh TLE data for {category}")

        try:
            response = self.session.get(url, timeout=self.fetch_timeout)
        except requests.RequestException as e:
            logger.error(f"[CelesTrak] Transport error fetching {category}: {e}")
            raise UpstreamTransportError(category, f"Failed to fetch TLE data for {category}: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.error(
                f"[CelesTrak] HTTP {response.status_code} {response.reason} fetching {category}"
            )
            raise UpstreamHTTPError(category, response.status_code, response.reason)

        tle_text = response.text
        logger.info(f"[CelesTrak] Fetched {len(tle_text)} bytes for {category}")
        return tle_text

    # ==================== Status ====================

    def status(self) -> Dict[str, Dict]:
        """Cache state per category."""
        now = self.clock()
        report = {}
        for category in self.registry.categories():
            entry = self.cache.get(cache_key(category))
            if entry is None:
                report[category] = {'cached': False}
                continue
            report[category] = {
                'cached': True,
                'count': len(entry.records),
                'timestamp': entry.timestamp,
                'age_ms': entry.age_ms(now),
                'fresh': is_fresh(entry, now, self.ttl_ms),
            }
        return report

    def categories(self) -> List[str]:
        return self.registry.categories()


# ==================== Application wiring ====================

EXTENSION_KEY = 'tle_service'


def init_tle_service(app, service: Optional[SatelliteDataService] = None) -> SatelliteDataService:
    """Attach a service (and its cache) to the application."""
    if service is None:
        service = SatelliteDataService.from_config(app.config)
    app.extensions[EXTENSION_KEY] = service
    return service


def get_tle_service(app=None) -> SatelliteDataService:
    """Service owned by the given (or current) application."""
    app = app or current_app
    return app.extensions[EXTENSION_KEY]
