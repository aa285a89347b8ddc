"""Tests for the in-memory per-symbol cache."""

from chartfeed.cache import MemoryCache


class TestMemoryCache:
    def test_store_and_retrieve(self, sample_bars):
        cache = MemoryCache()
        cache.store("SMH", tuple(sample_bars))
        result = cache.get("SMH")
        assert result == tuple(sample_bars)
        assert cache.has("SMH")

    def test_miss(self):
        cache = MemoryCache()
        assert cache.get("SMH") is None
        assert not cache.has("SMH")

    def test_key_is_case_sensitive(self, sample_bars):
        cache = MemoryCache()
        cache.store("SMH", tuple(sample_bars))
        assert cache.get("smh") is None

    def test_stores_immutable_copy(self, sample_bars):
        cache = MemoryCache()
        bars = list(sample_bars)
        cache.store("SMH", bars)
        bars.pop()
        assert len(cache.get("SMH")) == len(sample_bars)

    def test_never_expires(self, sample_bars):
        cache = MemoryCache()
        for i in range(2000):
            cache.store(f"SYM{i}", tuple(sample_bars))
        assert len(cache) == 2000
        assert cache.get("SYM0") is not None

    def test_clear_symbol(self, sample_bars):
        cache = MemoryCache()
        cache.store("SMH", tuple(sample_bars))
        cache.store("SPY", tuple(sample_bars))
        cache.clear("SMH")
        assert cache.get("SMH") is None
        assert cache.get("SPY") is not None
        assert cache.symbols() == ["SPY"]

    def test_clear_missing_symbol(self):
        MemoryCache().clear("SMH")

    def test_clear_all(self, sample_bars):
        cache = MemoryCache()
        cache.store("SMH", tuple(sample_bars))
        cache.store("SPY", tuple(sample_bars))
        cache.clear_all()
        assert len(cache) == 0
