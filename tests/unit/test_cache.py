# ABOUTME: Unit tests for BoundedCache.
# ABOUTME: Covers TTL expiry with a fake clock, LRU eviction order, and negative-result caching.

import pytest

from booklookup.metadata import BoundedCache

_MISSING = object()


class TestBoundedCacheBasics:
    """Tests for get/set/delete/clear."""

    def test_miss_returns_default(self) -> None:
        cache: BoundedCache[str] = BoundedCache()
        assert cache.get("nope") is None
        assert cache.get("nope", "fallback") == "fallback"

    def test_set_then_get(self) -> None:
        cache: BoundedCache[str] = BoundedCache()
        cache.set("a", "alpha")
        assert cache.get("a") == "alpha"
        assert len(cache) == 1

    def test_repeated_reads_are_stable(self) -> None:
        """Reading an entry does not change its value."""
        cache: BoundedCache[str] = BoundedCache()
        cache.set("a", "alpha")
        assert [cache.get("a") for _ in range(3)] == ["alpha"] * 3

    def test_cached_none_distinct_from_miss(self) -> None:
        """A stored None is returned as None, not as the default."""
        cache: BoundedCache[None] = BoundedCache()
        cache.set("negative", None)
        assert cache.get("negative", _MISSING) is None
        assert cache.get("absent", _MISSING) is _MISSING

    def test_overwrite_replaces_value(self) -> None:
        cache: BoundedCache[str] = BoundedCache(max_size=2)
        cache.set("a", "one")
        cache.set("a", "two")
        assert cache.get("a") == "two"
        assert cache.size == 1

    def test_delete(self) -> None:
        cache: BoundedCache[str] = BoundedCache()
        cache.set("a", "alpha")
        assert cache.delete("a") is True
        assert cache.delete("a") is False
        assert cache.get("a") is None

    def test_clear(self) -> None:
        cache: BoundedCache[int] = BoundedCache()
        for i in range(5):
            cache.set(str(i), i)
        cache.clear()
        assert cache.size == 0
        assert cache.get("0") is None

    @pytest.mark.parametrize("kwargs", [{"max_size": 0}, {"ttl": 0}, {"ttl": -1.0}])
    def test_invalid_settings_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            BoundedCache(**kwargs)


class TestBoundedCacheExpiry:
    """Tests for time-to-live expiry."""

    def test_entry_alive_at_ttl_boundary(self, clock) -> None:
        cache: BoundedCache[str] = BoundedCache(ttl=10.0, clock=clock)
        cache.set("a", "alpha")
        clock.advance(10.0)
        assert cache.get("a") == "alpha"

    def test_entry_expires_after_ttl(self, clock) -> None:
        cache: BoundedCache[str] = BoundedCache(ttl=10.0, clock=clock)
        cache.set("a", "alpha")
        clock.advance(10.5)
        assert cache.get("a") is None

    def test_expired_entry_removed_on_read(self, clock) -> None:
        """Expiry is lazy: the entry is dropped when it is next read."""
        cache: BoundedCache[str] = BoundedCache(ttl=1.0, clock=clock)
        cache.set("a", "alpha")
        clock.advance(2.0)
        assert cache.size == 1
        cache.get("a")
        assert cache.size == 0

    def test_overwrite_resets_age(self, clock) -> None:
        cache: BoundedCache[str] = BoundedCache(ttl=10.0, clock=clock)
        cache.set("a", "old")
        clock.advance(8.0)
        cache.set("a", "new")
        clock.advance(8.0)
        assert cache.get("a") == "new"

    def test_expired_negative_result_is_a_miss(self, clock) -> None:
        cache: BoundedCache[None] = BoundedCache(ttl=5.0, clock=clock)
        cache.set("negative", None)
        clock.advance(6.0)
        assert cache.get("negative", _MISSING) is _MISSING


class TestBoundedCacheEviction:
    """Tests for least-recently-used eviction."""

    def test_evicts_oldest_at_capacity(self) -> None:
        cache: BoundedCache[int] = BoundedCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        assert cache.get("a") is None
        assert cache.get("b") == 2
        assert cache.get("c") == 3
        assert cache.size == 2

    def test_read_refreshes_recency(self) -> None:
        """A read moves the entry to most-recently-used."""
        cache: BoundedCache[int] = BoundedCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)
        assert cache.get("a") == 1
        assert cache.get("b") is None

    def test_overwrite_does_not_evict(self) -> None:
        cache: BoundedCache[int] = BoundedCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("b", 20)
        assert cache.get("a") == 1
        assert cache.get("b") == 20

    def test_never_exceeds_max_size(self) -> None:
        cache: BoundedCache[int] = BoundedCache(max_size=3)
        for i in range(50):
            cache.set(str(i), i)
        assert cache.size == 3
        assert [cache.get(str(i)) for i in (47, 48, 49)] == [47, 48, 49]
