"""Tests for the in-memory TLE cache store."""
from services.cache_store import (
    DEFAULT_TTL_MS,
    CacheEntry,
    TLECacheStore,
    cache_key,
    is_fresh,
)
from services.tle_parser import parse_tle_text
from tle_samples import ISS_TLE, STATIONS_FEED

T0 = 1704067200000


class TestCacheKey:

    def test_prefix(self):
        assert cache_key('starlink') == 'satellites_starlink'


class TestTLECacheStore:

    def test_missing_key_returns_none(self):
        assert TLECacheStore().get('satellites_gps') is None

    def test_put_then_get(self):
        store = TLECacheStore()
        records = parse_tle_text(STATIONS_FEED)

        entry = store.put('satellites_stations', records, T0)

        assert store.get('satellites_stations') is entry
        assert entry.records == tuple(records)
        assert entry.timestamp == T0

    def test_put_replaces_whole_entry(self):
        store = TLECacheStore()
        store.put('satellites_stations', parse_tle_text(STATIONS_FEED), T0)

        store.put('satellites_stations', parse_tle_text(ISS_TLE), T0 + 5)

        entry = store.get('satellites_stations')
        assert [r.norad_id for r in entry.records] == [25544]
        assert entry.timestamp == T0 + 5

    def test_entries_are_independent_of_caller_list(self):
        store = TLECacheStore()
        records = parse_tle_text(STATIONS_FEED)
        store.put('satellites_stations', records, T0)

        records.clear()

        assert len(store.get('satellites_stations').records) == 2

    def test_keys_and_len(self):
        store = TLECacheStore()
        store.put('satellites_gps', [], T0)
        store.put('satellites_geo', [], T0)
        store.put('satellites_gps', [], T0 + 1)

        assert sorted(store.keys()) == ['satellites_geo', 'satellites_gps']
        assert len(store) == 2

    def test_empty_record_list_is_a_valid_entry(self):
        store = TLECacheStore()

        store.put('satellites_debris', [], T0)

        assert store.get('satellites_debris') == CacheEntry(records=(), timestamp=T0)


class TestFreshness:

    def test_default_ttl_is_24_hours(self):
        assert DEFAULT_TTL_MS == 86_400_000

    def test_fresh_just_before_ttl(self):
        entry = CacheEntry(records=(), timestamp=T0)

        assert is_fresh(entry, T0 + 86_399_999)

    def test_stale_at_ttl(self):
        entry = CacheEntry(records=(), timestamp=T0)

        assert not is_fresh(entry, T0 + 86_400_000)
        assert not is_fresh(entry, T0 + 86_400_001)

    def test_custom_ttl(self):
        entry = CacheEntry(records=(), timestamp=T0)

        assert is_fresh(entry, T0 + 999, ttl_ms=1000)
        assert not is_fresh(entry, T0 + 1000, ttl_ms=1000)

    def test_stale_entries_stay_readable(self):
        store = TLECacheStore()
        store.put('satellites_gps', [], T0)

        entry = store.get('satellites_gps')

        assert not is_fresh(entry, T0 + 10 * DEFAULT_TTL_MS)
        assert store.get('satellites_gps') is entry
