"""Heikin-Ashi candle data model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class HeikinAshiBar:
    """Smoothed candle derived from a source Bar.

    ``time`` and ``volume`` are copied from the source bar; the prices are
    the Heikin-Ashi open/high/low/close.
    """

    time: str
    open: float
    high: float
    low: float
    close: float
    volume: float

    @property
    def is_bullish(self) -> bool:
        return self.close >= self.open

    def to_dict(self) -> dict[str, Any]:
        return {
            "time": self.time,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }
