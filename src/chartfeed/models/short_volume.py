"""Daily short-volume data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ShortVolume:
    """Short-sale volume reported for one session.

    Attributes:
        time: Calendar date, ``YYYY-MM-DD``.
        short_volume: Shares sold short.
        total_volume: Total shares traded.
    """

    time: str
    short_volume: float
    total_volume: float

    @property
    def short_ratio(self) -> float | None:
        """Short volume as a fraction of total volume."""
        if self.total_volume <= 0:
            return None
        return self.short_volume / self.total_volume
