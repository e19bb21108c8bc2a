"""
Business logic services for the Satellite TLE API.

Services:
- tle_parser: TLE text to satellite records
- source_registry: category to CelesTrak feed URL
- cache_store: in-memory TLE cache with TTL freshness
- tle_service: fetch/parse/cache orchestration per category
- scheduler_service: background cache pre-warm
"""

from .exceptions import (
    SatelliteServiceError,
    InvalidCategoryError,
    UpstreamFetchError,
    UpstreamHTTPError,
    UpstreamTransportError,
)
from .tle_parser import SatelliteRecord, parse_tle_text
from .source_registry import SatelliteCategory, SourceRegistry
from .cache_store import CacheEntry, TLECacheStore, is_fresh
from .tle_service import (
    SatelliteDataResult,
    SatelliteDataService,
    init_tle_service,
    get_tle_service,
)
from .scheduler_service import (
    scheduler,
    initialize_scheduler,
    shutdown_scheduler,
    get_scheduler_status,
    trigger_manual_update,
)

__all__ = [
    # Errors
    'SatelliteServiceError',
    'InvalidCategoryError',
    'UpstreamFetchError',
    'UpstreamHTTPError',
    'UpstreamTransportError',

    # Parsing
    'SatelliteRecord',
    'parse_tle_text',

    # Registry
    'SatelliteCategory',
    'SourceRegistry',

    # Cache
    'CacheEntry',
    'TLECacheStore',
    'is_fresh',

    # TLE
    'SatelliteDataResult',
    'SatelliteDataService',
    'init_tle_service',
    'get_tle_service',

    # Scheduler
    'scheduler',
    'initialize_scheduler',
    'shutdown_scheduler',
    'get_scheduler_status',
    'trigger_manual_update',
]
