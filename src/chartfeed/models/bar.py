"""Bar (daily OHLCV) data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Bar:
    """Single trading-day price bar.

    Attributes:
        time: Calendar date of the session, ``YYYY-MM-DD``.
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
        volume: Trading volume.
    """

    time: str
    open: float
    high: float
    low: float
    close: float
    volume: float

    @property
    def is_up(self) -> bool:
        """True when the session closed at or above its open."""
        return self.close >= self.open

    @property
    def typical_price(self) -> float:
        """(high + low + close) / 3."""
        return (self.high + self.low + self.close) / 3
