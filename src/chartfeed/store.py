"""BarStore: fetch once, cache by symbol, slice to window."""

from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Any, Callable, Sequence, TypeVar

import pandas as pd

from chartfeed.cache import MemoryCache
from chartfeed.config import ChartFeedConfig, ProviderType
from chartfeed.errors import DataUnavailable, ErrorCode, MalformedInput
from chartfeed.models.bar import Bar
from chartfeed.models.short_volume import ShortVolume
from chartfeed.providers import create_provider
from chartfeed.providers.base import BaseBarProvider
from chartfeed.quality import validate_bars

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BarStore:
    """Daily bar sequences per symbol, fetched once and kept for the
    lifetime of the store.

    Usage::

        store = BarStore(ChartFeedConfig(api_key="..."))
        bars = store.fetch("SMH")          # trailing history_limit bars
        everything = store.fetch("SMH", limit=10_000)

    Concurrent first fetches for the same symbol share a single provider
    call. A failed fetch caches nothing, so the next call retries.
    """

    def __init__(
        self,
        config: ChartFeedConfig | None = None,
        provider: BaseBarProvider | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.config = config or ChartFeedConfig()
        self.provider = provider or self._build_provider(self.config)
        self._today = today

        self.cache: MemoryCache[Bar] = MemoryCache()
        self.short_volume_cache: MemoryCache[ShortVolume] = MemoryCache()

        self._locks: dict[tuple[str, str], threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @staticmethod
    def _build_provider(config: ChartFeedConfig) -> BaseBarProvider:
        kwargs: dict[str, Any] = {}
        if config.provider is ProviderType.POLYGON:
            kwargs["api_key"] = config.api_key
            kwargs["base_url"] = config.base_url
            kwargs["timeout"] = config.timeout_seconds
        return create_provider(config.provider, **kwargs)

    # ----------------------------------------------------------------- bars

    def fetch(self, symbol: str, limit: int | None = None) -> tuple[Bar, ...]:
        """Return the trailing ``limit`` bars for ``symbol``.

        ``limit`` defaults to ``config.history_limit``. The cache holds
        the full fetched range, so a later call with a larger limit is
        served without a new request.

        Raises:
            DataUnavailable: If the provider call fails or its bars fail
                the quality gate.
        """
        limit = self.config.history_limit if limit is None else limit
        if limit < 1:
            raise MalformedInput(f"limit must be >= 1, got {limit}")

        bars = self._get_or_load("bars", self.cache, symbol, self._download_bars)
        return bars[-limit:]

    def _download_bars(self, symbol: str) -> tuple[Bar, ...]:
        start, end = self.date_range()
        bars = tuple(
            self.provider.get_daily_bars(symbol, start, end, self.config.result_cap)
        )

        if self.config.validate:
            result = validate_bars(bars)
            if not result.passed:
                raise DataUnavailable(
                    f"Validation failed for {symbol}: {result.summary()}",
                    code=ErrorCode.VALIDATION_FAILED,
                )
        return bars

    # --------------------------------------------------------- short volume

    def fetch_short_volume(self, symbol: str) -> tuple[ShortVolume, ...]:
        """Return the daily short-volume history for ``symbol``.

        Cached with the same fetch-once semantics as ``fetch``.
        """
        if "short_volume" not in self.provider.capabilities():
            raise DataUnavailable(
                f"{type(self.provider).__name__} does not serve short volume",
                code=ErrorCode.NO_DATA,
            )
        return self._get_or_load(
            "short_volume", self.short_volume_cache, symbol, self._download_short_volume,
        )

    def _download_short_volume(self, symbol: str) -> tuple[ShortVolume, ...]:
        start, end = self.date_range()
        return tuple(self.provider.get_short_volume(symbol, start, end))

    # ------------------------------------------------------------ invalidation

    def invalidate(self, symbol: str) -> None:
        """Drop every cached sequence for ``symbol``."""
        self.cache.clear(symbol)
        self.short_volume_cache.clear(symbol)
        logger.debug("Invalidated cache for %s", symbol)

    def clear(self) -> None:
        """Drop every cached sequence and the per-symbol fetch locks."""
        self.cache.clear_all()
        self.short_volume_cache.clear_all()
        with self._locks_guard:
            self._locks.clear()

    def cached_symbols(self) -> list[str]:
        return self.cache.symbols()

    # ------------------------------------------------------------ internal

    def date_range(self) -> tuple[date, date]:
        """Requested history: ``lookback_months`` back from today."""
        end = self._today()
        start = (pd.Timestamp(end) - pd.DateOffset(months=self.config.lookback_months)).date()
        return start, end

    def _lock_for(self, kind: str, symbol: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault((kind, symbol), threading.Lock())

    def _get_or_load(
        self,
        kind: str,
        cache: MemoryCache[T],
        symbol: str,
        loader: Callable[[str], Sequence[T]],
    ) -> tuple[T, ...]:
        cached = cache.get(symbol)
        if cached is not None:
            logger.debug("Cache hit for %s %s", kind, symbol)
            return cached

        with self._lock_for(kind, symbol):
            # Another caller may have finished the fetch while we waited.
            cached = cache.get(symbol)
            if cached is not None:
                return cached

            try:
                items = tuple(loader(symbol))
            except DataUnavailable as exc:
                logger.warning("Fetching %s for %s failed: %s", kind, symbol, exc)
                raise

            cache.store(symbol, items)
            logger.info("Cached %d %s records for %s", len(items), kind, symbol)
            return items
