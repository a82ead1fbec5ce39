"""
LookupCache behaviour: bounded eviction, key normalisation, code lookup
and graceful degradation when the backing store misbehaves.
"""

import json

import pytest

from airdesk.adapters.simulator_storage import InMemoryKeyValueStore
from airdesk.adapters.sqlite_storage import SqliteKeyValueStore
from airdesk.domain.lookup_cache import CACHE_KEY, MAX_CACHE, CacheStore, LookupCache


TXL = {"iataCode": "TXL", "name": "Tegel", "cityName": "Berlin"}
BER = {"iataCode": "BER", "name": "Brandenburg", "cityName": "Berlin"}


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def cache(store):
    return LookupCache(store)


def _persisted(store) -> dict:
    return json.loads(store.get(CACHE_KEY))


# ---------------------------------------------------------------------------
# read / write
# ---------------------------------------------------------------------------


def test_read_empty_store_gives_empty_cache(cache):
    assert cache.read() == CacheStore()


def test_read_corrupt_json_gives_empty_cache(store, cache):
    store.set(CACHE_KEY, "{not json")
    assert cache.read() == CacheStore()


def test_read_wrong_shape_gives_empty_cache(store, cache):
    store.set(CACHE_KEY, json.dumps(["berlin"]))
    assert cache.read() == CacheStore()


def test_read_deeply_nested_blob_gives_empty_cache(store, cache):
    store.set(CACHE_KEY, "[" * 100000 + "]" * 100000)
    assert cache.read() == CacheStore()
    assert cache.get("berlin") is None


def test_read_failure_gives_empty_cache(store, cache):
    cache.put("berlin", [TXL])
    store.fail_reads = True
    assert cache.read() == CacheStore()
    assert cache.get("berlin") is None
    assert cache.find_by_code("TXL") is None


def test_write_failure_is_silent(store, cache):
    store.fail_writes = True
    results = [TXL]
    assert cache.put("berlin", results) is results
    store.fail_writes = False
    assert cache.get("berlin") is None


def test_read_repairs_inconsistent_order(store, cache):
    store.set(CACHE_KEY, json.dumps({
        "entries": {
            "berlin": {"results": [TXL], "ts": 1},
            "orphan": {"results": [BER], "ts": 2},
        },
        "order": ["berlin", "berlin", "dangling"],
    }))
    loaded = cache.read()
    assert loaded.order == ["berlin"]
    assert set(loaded.entries) == {"berlin"}
    assert cache.find_by_code("BER") is None


def test_persisted_layout(store, cache):
    cache.put("Berlin", [TXL])
    data = _persisted(store)
    assert data["order"] == ["berlin"]
    assert data["entries"]["berlin"]["results"] == [TXL]
    assert isinstance(data["entries"]["berlin"]["ts"], int)


# ---------------------------------------------------------------------------
# put / get
# ---------------------------------------------------------------------------


def test_put_returns_results_unchanged(cache):
    results = [TXL, BER]
    assert cache.put("berlin", results) is results


def test_key_is_lowercased(cache):
    cache.put("BeRLin", [TXL])
    assert cache.get("berlin") == [TXL]
    assert cache.get("BERLIN") == [TXL]


def test_empty_results_are_a_hit(cache):
    cache.put("nowhere", [])
    assert cache.get("nowhere") == []


def test_unknown_keyword_is_a_miss(cache):
    assert cache.get("berlin") is None


def test_put_moves_key_to_front(cache):
    cache.put("a", [])
    cache.put("b", [])
    cache.put("a", [TXL])
    assert cache.keywords() == ["a", "b"]
    assert cache.get("a") == [TXL]


def test_result_order_preserved(cache):
    cache.put("berlin", [BER, TXL])
    assert cache.get("berlin") == [BER, TXL]


def test_instances_share_the_store(store):
    LookupCache(store).put("berlin", [TXL])
    assert LookupCache(store).get("berlin") == [TXL]


def test_clear_empties_cache(cache):
    cache.put("berlin", [TXL])
    cache.clear()
    assert cache.keywords() == []
    assert cache.get("berlin") is None


# ---------------------------------------------------------------------------
# Eviction
# ---------------------------------------------------------------------------


def test_bound_keeps_most_recent_keywords(store, cache):
    for i in range(MAX_CACHE + 5):
        cache.put(f"kw{i}", [{"iataCode": f"C{i:02d}"}])

    order = cache.keywords()
    assert len(order) == MAX_CACHE
    assert order == [f"kw{i}" for i in reversed(range(5, MAX_CACHE + 5))]
    for i in range(5):
        assert cache.get(f"kw{i}") is None


def test_evicted_entries_removed_from_storage(store, cache):
    for i in range(MAX_CACHE + 1):
        cache.put(f"kw{i}", [])
    data = _persisted(store)
    assert "kw0" not in data["entries"]
    assert len(data["entries"]) == MAX_CACHE
    assert set(data["entries"]) == set(data["order"])


def test_reinserting_does_not_evict(cache):
    for i in range(MAX_CACHE):
        cache.put(f"kw{i}", [])
    cache.put("kw0", [])
    assert len(cache.keywords()) == MAX_CACHE
    assert cache.keywords()[0] == "kw0"
    assert cache.get("kw1") == []


def test_custom_bound(store):
    cache = LookupCache(store, max_entries=2)
    cache.put("a", [])
    cache.put("b", [])
    cache.put("c", [])
    assert cache.keywords() == ["c", "b"]


# ---------------------------------------------------------------------------
# find_by_code
# ---------------------------------------------------------------------------


def test_find_by_code_case_insensitive(cache):
    cache.put("berlin", [BER, TXL])
    assert cache.find_by_code("txl") == TXL


def test_find_by_code_missing(cache):
    cache.put("berlin", [BER, TXL])
    assert cache.find_by_code("IST") is None


def test_find_by_code_prefers_most_recent_keyword(cache):
    older = {"iataCode": "TXL", "name": "Tegel (old)"}
    newer = {"iataCode": "TXL", "name": "Tegel (new)"}
    cache.put("tegel", [older])
    cache.put("berlin", [BER, newer])
    assert cache.find_by_code("TXL") == newer


def test_find_by_code_first_match_within_entry(cache):
    first = {"iataCode": "TXL", "name": "First"}
    second = {"iataCode": "txl", "name": "Second"}
    cache.put("berlin", [first, second])
    assert cache.find_by_code("TXL") == first


def test_find_by_code_accepts_plain_code_field(cache):
    record = {"code": "muc", "name": "Franz Josef Strauss"}
    cache.put("munich", [record])
    assert cache.find_by_code("MUC") == record


def test_find_by_code_ignores_records_without_code(cache):
    cache.put("berlin", [{"name": "Somewhere"}, "garbage", TXL])
    assert cache.find_by_code("TXL") == TXL


# ---------------------------------------------------------------------------
# SQLite backing
# ---------------------------------------------------------------------------


def test_cache_survives_reopen(tmp_path):
    db_path = str(tmp_path / "lookup.db")
    LookupCache(SqliteKeyValueStore(db_path)).put("Berlin", [TXL])

    reopened = LookupCache(SqliteKeyValueStore(db_path))
    assert reopened.get("berlin") == [TXL]
    assert reopened.find_by_code("txl") == TXL
