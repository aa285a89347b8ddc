"""Mock provider for testing and offline use; no API key required."""

from __future__ import annotations

import threading
import time
from collections import Counter
from datetime import date, timedelta

from chartfeed.errors import ChartFeedError
from chartfeed.models.bar import Bar
from chartfeed.models.short_volume import ShortVolume
from chartfeed.providers.base import BaseBarProvider


class MockProvider(BaseBarProvider):
    """In-memory provider that returns configurable static data.

    Use ``set_bars`` / ``set_short_volume`` to pre-load data, or leave
    defaults for auto-generated synthetic weekday bars. Every call is
    counted in ``calls`` keyed by ``(method, symbol)``.

    Args:
        delay: Seconds each call sleeps before answering.
    """

    def __init__(self, delay: float = 0.0) -> None:
        self.delay = delay
        self.calls: Counter[tuple[str, str]] = Counter()
        self._lock = threading.Lock()
        self._bars: dict[str, list[Bar]] = {}
        self._short_volume: dict[str, list[ShortVolume]] = {}
        self._errors: dict[str, ChartFeedError] = {}

    # --- Pre-load helpers ---

    def set_bars(self, symbol: str, bars: list[Bar]) -> None:
        self._bars[symbol] = list(bars)

    def set_short_volume(self, symbol: str, records: list[ShortVolume]) -> None:
        self._short_volume[symbol] = list(records)

    def fail_with(self, symbol: str, error: ChartFeedError | None) -> None:
        """Make every call for ``symbol`` raise ``error`` (None to stop)."""
        if error is None:
            self._errors.pop(symbol, None)
        else:
            self._errors[symbol] = error

    def call_count(self, symbol: str, method: str = "get_daily_bars") -> int:
        return self.calls[(method, symbol)]

    # --- Provider implementation ---

    def get_daily_bars(
        self,
        symbol: str,
        start: date,
        end: date,
        limit: int,
    ) -> list[Bar]:
        self._record("get_daily_bars", symbol)
        if symbol in self._bars:
            bars = [
                b for b in self._bars[symbol]
                if start.isoformat() <= b.time <= end.isoformat()
            ]
        else:
            bars = self._generate_bars(start, end)
        return bars[:limit]

    def get_short_volume(self, symbol: str, start: date, end: date) -> list[ShortVolume]:
        self._record("get_short_volume", symbol)
        return [
            r for r in self._short_volume.get(symbol, [])
            if start.isoformat() <= r.time <= end.isoformat()
        ]

    def capabilities(self) -> set[str]:
        return {"bars", "short_volume"}

    # --- internal ---

    def _record(self, method: str, symbol: str) -> None:
        with self._lock:
            self.calls[(method, symbol)] += 1
        if self.delay:
            time.sleep(self.delay)
        error = self._errors.get(symbol)
        if error is not None:
            raise error

    @staticmethod
    def _generate_bars(start: date, end: date) -> list[Bar]:
        """Synthetic weekday bars between ``start`` and ``end``."""
        bars: list[Bar] = []
        current = start
        i = 0
        while current <= end:
            if current.weekday() < 5:
                o = 150.0 + (i % 10) * 0.5
                c = o + (0.4 if i % 3 else -0.3)
                bars.append(Bar(
                    time=current.isoformat(),
                    open=round(o, 2),
                    high=round(max(o, c) + 0.6, 2),
                    low=round(min(o, c) - 0.5, 2),
                    close=round(c, 2),
                    volume=1_000_000.0 + (i % 7) * 25_000,
                ))
                i += 1
            current += timedelta(days=1)
        return bars
