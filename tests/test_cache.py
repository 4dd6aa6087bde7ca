"""QueryKey normalization and QueryCache TTL behaviour."""

from __future__ import annotations

from services.cache import QueryCache, QueryKey
from services.mapper import RawResult, map_result


def _items(*ids: str):
    return [map_result(RawResult(video_id=i)) for i in ids]


def test_query_key_normalizes_fields():
    key = QueryKey.normalize("  Arijit Singh ", 500, " MUSIC ")
    assert key == QueryKey("Arijit Singh", 50, "music")

    assert QueryKey.normalize("x", 0).max_results == 1
    assert QueryKey.normalize("x", -3).max_results == 1
    assert QueryKey.normalize("x", 10, None).filter_mode == ""


def test_query_key_normalization_is_idempotent():
    for key in (
        QueryKey.normalize("  lofi  ", 99, "Music"),
        QueryKey.normalize("a b", 1, ""),
        QueryKey.normalize("x", 25, "VIDEO"),
    ):
        assert key.normalized() == key
        assert hash(key.normalized()) == hash(key)


def test_equal_keys_share_an_entry(clock):
    cache = QueryCache(ttl_seconds=60, clock=clock)
    cache.put(QueryKey.normalize(" lofi", 10, "Music"), _items("a"))

    assert cache.get(QueryKey.normalize("lofi ", 10, "music")) == _items("a")
    assert len(cache) == 1


def test_get_after_ttl_is_a_miss(clock):
    cache = QueryCache(ttl_seconds=60, clock=clock)
    key = QueryKey.normalize("lofi", 10)
    cache.put(key, _items("a", "b"))

    clock.advance(59.9)
    assert cache.get(key) == _items("a", "b")

    clock.advance(0.1)
    assert cache.get(key) is None
    assert len(cache) == 0


def test_put_overwrites_and_restarts_ttl(clock):
    cache = QueryCache(ttl_seconds=60, clock=clock)
    key = QueryKey.normalize("lofi", 10)
    cache.put(key, _items("a"))
    clock.advance(50)
    cache.put(key, _items("b"))
    clock.advance(50)

    assert cache.get(key) == _items("b")
    assert len(cache) == 1


def test_put_accepts_per_entry_ttl(clock):
    cache = QueryCache(ttl_seconds=60, clock=clock)
    key = QueryKey.normalize("lofi", 10)
    cache.put(key, _items("a"), ttl_seconds=5)
    clock.advance(5)
    assert cache.get(key) is None


def test_sweep_removes_only_expired(clock):
    cache = QueryCache(ttl_seconds=60, clock=clock)
    cache.put(QueryKey.normalize("old", 10), _items("a"))
    clock.advance(30)
    cache.put(QueryKey.normalize("new", 10), _items("b"))
    clock.advance(31)

    assert cache.sweep() == 1
    assert len(cache) == 1
    assert cache.get(QueryKey.normalize("new", 10)) == _items("b")


def test_max_entries_evicts_least_recently_used(clock):
    cache = QueryCache(ttl_seconds=60, max_entries=2, clock=clock)
    a, b, c = (QueryKey.normalize(q, 10) for q in ("a", "b", "c"))
    cache.put(a, _items("a"))
    cache.put(b, _items("b"))
    cache.get(a)
    cache.put(c, _items("c"))

    assert cache.get(b) is None
    assert cache.get(a) == _items("a")
    assert cache.get(c) == _items("c")


def test_cached_value_is_not_aliased(clock):
    cache = QueryCache(ttl_seconds=60, clock=clock)
    key = QueryKey.normalize("lofi", 10)
    items = _items("a")
    cache.put(key, items)
    items.append(_items("b")[0])

    assert cache.get(key) == _items("a")
