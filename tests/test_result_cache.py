"""Unit tests for ResultCache."""

import pytest

from cmdhints.core.cache import ResultCache


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class TestResultCache:
    """Test TTL expiry and access-count eviction."""

    def test_set_and_get(self):
        cache = ResultCache[str](max_size=3, ttl=1000)
        cache.set("build:ja", "hint")
        assert cache.get("build:ja") == "hint"
        assert cache.get("missing") is None

    def test_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            ResultCache(max_size=0, ttl=1000)

    def test_lowest_access_count_is_evicted(self):
        """A and C read, B never read: inserting D evicts B."""
        cache = ResultCache[str](max_size=3, ttl=60_000)
        cache.set("A", "a")
        cache.set("B", "b")
        cache.set("C", "c")
        cache.get("A")
        cache.get("C")

        cache.set("D", "d")

        assert "B" not in cache
        assert cache.get("A") == "a"
        assert cache.get("C") == "c"
        assert cache.get("D") == "d"
        assert len(cache) == 3

    def test_eviction_ties_go_to_first_inserted(self):
        cache = ResultCache[int](max_size=2, ttl=60_000)
        cache.set("first", 1)
        cache.set("second", 2)

        cache.set("third", 3)

        assert not cache.has("first")
        assert cache.has("second")
        assert cache.has("third")

    def test_frequently_read_old_entry_survives_fresh_unread_entry(self):
        """Eviction is by access count, not by recency."""
        clock = FakeClock()
        cache = ResultCache[str](max_size=2, ttl=1_000_000, clock=clock)
        cache.set("old", "o")
        for _ in range(5):
            cache.get("old")
        clock.advance(10_000)
        cache.set("fresh", "f")

        cache.set("newest", "n")

        assert cache.has("old")
        assert not cache.has("fresh")

    def test_rewriting_key_resets_access_count(self):
        cache = ResultCache[str](max_size=2, ttl=60_000)
        cache.set("A", "a")
        cache.get("A")
        cache.get("A")
        cache.set("B", "b")
        cache.get("B")
        # A back to 1 access, B has 2
        cache.set("A", "a2")

        cache.set("C", "c")

        assert not cache.has("A")
        assert cache.get("B") == "b"

    def test_rewriting_existing_key_at_capacity_does_not_evict(self):
        cache = ResultCache[str](max_size=2, ttl=60_000)
        cache.set("A", "a")
        cache.set("B", "b")
        cache.set("A", "a2")
        assert len(cache) == 2
        assert cache.get("A") == "a2"
        assert cache.get("B") == "b"

    def test_expired_entry_is_a_miss_and_removed(self):
        clock = FakeClock()
        cache = ResultCache[str](max_size=3, ttl=100, clock=clock)
        cache.set("k", "v")

        clock.advance(100)
        assert cache.get("k") == "v"

        clock.advance(1)
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_has_does_not_count_access(self):
        cache = ResultCache[str](max_size=2, ttl=60_000)
        cache.set("A", "a")
        cache.set("B", "b")
        cache.get("B")
        assert cache.has("A")

        cache.set("C", "c")

        assert not cache.has("A")
        assert cache.has("B")

    def test_expired_entry_reported_missing_by_has(self):
        clock = FakeClock()
        cache = ResultCache[str](max_size=2, ttl=10, clock=clock)
        cache.set("k", "v")
        clock.advance(11)
        assert cache.has("k") is False
        assert cache.size() == 0

    def test_delete_and_clear(self):
        cache = ResultCache[str](max_size=3, ttl=60_000)
        cache.set("A", "a")
        cache.set("B", "b")

        assert cache.delete("A") is True
        assert cache.delete("A") is False
        assert cache.size() == 1

        cache.clear()
        assert len(cache) == 0

    def test_never_exceeds_capacity(self):
        cache = ResultCache[int](max_size=4, ttl=60_000)
        for i in range(20):
            cache.set(f"k{i}", i)
            assert len(cache) <= 4
