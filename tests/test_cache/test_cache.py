"""Tests for the TTLCache module."""

from __future__ import annotations

import pytest

from ccstatus.cache import TTLCache
from ccstatus.models import CacheConfig


@pytest.fixture()
def cache(clock) -> TTLCache:
    """A cache with a 300 s default TTL and room for three entries."""
    return TTLCache(ttl=300, max_entries=3, clock=clock)


# ------------------------------------------------------------------ #
# Core get/set behaviour
# ------------------------------------------------------------------ #


class TestGetSet:
    def test_set_then_get_returns_value(self, cache: TTLCache) -> None:
        cache.set("incidents", ["a", "b"])
        assert cache.get("incidents") == ["a", "b"]

    def test_miss_returns_none(self, cache: TTLCache) -> None:
        assert cache.get("missing") is None

    def test_miss_returns_default(self, cache: TTLCache) -> None:
        sentinel = object()
        assert cache.get("missing", sentinel) is sentinel

    def test_set_replaces_previous_value(self, cache: TTLCache) -> None:
        cache.set("k", 1)
        cache.set("k", 2)
        assert cache.get("k") == 2
        assert cache.size() == 1

    def test_falsy_values_are_stored(self, cache: TTLCache) -> None:
        cache.set("empty", [])
        assert cache.has("empty")
        assert cache.get("empty") == []

    def test_has_and_contains(self, cache: TTLCache) -> None:
        cache.set("k", "v")
        assert cache.has("k")
        assert "k" in cache
        assert "other" not in cache
        assert 42 not in cache


# ------------------------------------------------------------------ #
# TTL expiry
# ------------------------------------------------------------------ #


class TestTTL:
    def test_entry_live_until_ttl_elapses(self, cache: TTLCache, clock) -> None:
        cache.set("k", "v")
        clock.advance(300)
        assert cache.get("k") == "v"

    def test_entry_expires_after_ttl(self, cache: TTLCache, clock) -> None:
        cache.set("k", "v")
        clock.advance(300.5)
        assert cache.get("k") is None

    def test_custom_ttl_overrides_default(self, cache: TTLCache, clock) -> None:
        cache.set("short", "v", ttl=60)
        cache.set("long", "v")
        clock.advance(61)
        assert cache.get("short") is None
        assert cache.get("long") == "v"

    def test_get_purges_expired_entry(self, cache: TTLCache, clock) -> None:
        cache.set("k", "v", ttl=10)
        clock.advance(11)
        assert cache.get("k") is None
        # Purged on access, so delete finds nothing.
        assert cache.delete("k") is False

    def test_has_purges_expired_entry(self, cache: TTLCache, clock) -> None:
        cache.set("k", "v", ttl=10)
        clock.advance(11)
        assert cache.has("k") is False
        assert cache.delete("k") is False

    def test_size_excludes_expired(self, cache: TTLCache, clock) -> None:
        cache.set("a", 1, ttl=10)
        cache.set("b", 2)
        clock.advance(11)
        assert cache.size() == 1
        assert len(cache) == 1
        assert cache.keys() == ["b"]

    @pytest.mark.parametrize("ttl", [0, -5])
    def test_non_positive_ttl_rejected(self, cache: TTLCache, ttl: float) -> None:
        with pytest.raises(ValueError):
            cache.set("k", "v", ttl=ttl)


# ------------------------------------------------------------------ #
# Capacity and eviction
# ------------------------------------------------------------------ #


class TestEviction:
    def test_inserting_past_capacity_evicts_oldest(self, cache: TTLCache) -> None:
        for key in ("a", "b", "c", "d"):
            cache.set(key, key)
        assert cache.size() == 3
        assert cache.get("a") is None
        assert cache.keys() == ["b", "c", "d"]

    def test_reads_do_not_refresh_position(self, cache: TTLCache) -> None:
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        assert cache.get("a") == 1  # not LRU: "a" stays oldest
        cache.set("d", 4)
        assert cache.get("a") is None
        assert cache.get("b") == 2

    def test_expired_entries_swept_before_evicting(self, cache: TTLCache, clock) -> None:
        cache.set("a", 1)
        cache.set("b", 2, ttl=5)
        cache.set("c", 3)
        clock.advance(6)
        cache.set("d", 4)
        # "b" was swept, so nothing live had to be evicted.
        assert cache.keys() == ["a", "c", "d"]

    def test_full_cache_evicts_oldest_even_when_key_exists(self, cache: TTLCache) -> None:
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        cache.set("c", 30)
        assert cache.get("a") is None
        assert cache.get("c") == 30
        assert cache.size() == 2

    def test_single_entry_cache(self, clock) -> None:
        c = TTLCache(ttl=10, max_entries=1, clock=clock)
        c.set("a", 1)
        c.set("b", 2)
        assert c.keys() == ["b"]

    @pytest.mark.parametrize("n", [1, 2, 5, 10])
    def test_n_plus_one_inserts_leave_n(self, clock, n: int) -> None:
        c = TTLCache(ttl=10, max_entries=n, clock=clock)
        for i in range(n + 1):
            c.set(f"k{i}", i)
        assert c.size() == n
        assert "k0" not in c
        assert f"k{n}" in c


# ------------------------------------------------------------------ #
# Delete and clear
# ------------------------------------------------------------------ #


class TestDeleteAndClear:
    def test_delete_existing_returns_true(self, cache: TTLCache) -> None:
        cache.set("k", "v")
        assert cache.delete("k") is True
        assert cache.get("k") is None

    def test_delete_missing_returns_false(self, cache: TTLCache) -> None:
        assert cache.delete("nope") is False

    def test_clear_removes_everything(self, cache: TTLCache) -> None:
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert cache.size() == 0
        assert cache.get("a") is None


# ------------------------------------------------------------------ #
# Stats and construction
# ------------------------------------------------------------------ #


class TestStats:
    def test_stats_empty_cache(self, cache: TTLCache) -> None:
        assert cache.stats() == {
            "size": 0,
            "max_entries": 3,
            "ttl_seconds": 300,
            "keys": [],
        }

    def test_stats_after_inserts_and_expiry(self, cache: TTLCache, clock) -> None:
        cache.set("a", 1, ttl=1)
        cache.set("b", 2)
        clock.advance(2)
        s = cache.stats()
        assert s["size"] == 1
        assert s["keys"] == ["b"]


class TestConstruction:
    def test_from_config(self, clock) -> None:
        c = TTLCache.from_config(CacheConfig(ttl_seconds=120, max_size=7), clock=clock)
        assert c.ttl == 120
        assert c.max_entries == 7

    @pytest.mark.parametrize("kwargs", [{"ttl": 0}, {"max_entries": 0}])
    def test_invalid_arguments(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            TTLCache(**kwargs)
