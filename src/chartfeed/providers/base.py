"""Abstract base class for market data providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from chartfeed.models.bar import Bar
from chartfeed.models.short_volume import ShortVolume


class BaseBarProvider(ABC):
    """Abstract base for daily bar providers.

    Subclasses must implement ``get_daily_bars``. ``get_short_volume``
    defaults to ``NotImplementedError``; providers advertise what they
    support via ``capabilities()``.
    """

    @abstractmethod
    def get_daily_bars(
        self,
        symbol: str,
        start: date,
        end: date,
        limit: int,
    ) -> list[Bar]:
        """Fetch daily OHLCV bars.

        Args:
            symbol: Ticker symbol, passed through as supplied.
            start: Start date (inclusive).
            end: End date (inclusive).
            limit: Maximum number of records to request.

        Returns:
            List of Bar objects ordered by date ascending.

        Raises:
            DataUnavailable: On any transport, status or payload failure.
        """
        ...

    def get_short_volume(self, symbol: str, start: date, end: date) -> list[ShortVolume]:
        """Fetch daily short-sale volume."""
        raise NotImplementedError

    def capabilities(self) -> set[str]:
        """Return the set of supported features: ``bars``, ``short_volume``."""
        return {"bars"}
