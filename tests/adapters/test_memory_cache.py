import time

from trailhop.adapters.cache import InMemoryCache, NullCache


def test_none_values_are_cached():
    cache = InMemoryCache(name="test")
    calls = []

    def compute():
        calls.append(1)
        return None

    assert cache.get_or_compute("missing", compute) is None
    assert cache.get_or_compute("missing", compute) is None
    assert len(calls) == 1
    assert cache.contains("missing")


def test_entries_expire(monkeypatch):
    cache = InMemoryCache(name="test", default_ttl_seconds=10)
    now = time.time()
    monkeypatch.setattr(time, "time", lambda: now)
    cache.set("k", "v")

    monkeypatch.setattr(time, "time", lambda: now + 11)

    assert cache.get("k") is None
    assert not cache.contains("k")


def test_max_size_evicts_oldest():
    cache = InMemoryCache(name="test", max_size=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)

    assert cache.size() == 2
    assert cache.get("a") is None
    assert cache.get("c") == 3
    assert cache.clear() == 2


def test_null_cache_always_computes():
    cache = NullCache()
    assert cache.get_or_compute("k", lambda: 5) == 5
    assert cache.get("k") is None
    assert not cache.contains("k")
