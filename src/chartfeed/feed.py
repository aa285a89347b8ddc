"""Assembly of the series the dashboard chart renders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from chartfeed.config import ChartFeedConfig
from chartfeed.heikin_ashi import heikin_ashi
from chartfeed.models.bar import Bar
from chartfeed.models.heikin_ashi import HeikinAshiBar
from chartfeed.models.series import LogicalRange, VolumePoint, VwapPoint
from chartfeed.vwap import anchored_vwap


@dataclass(frozen=True)
class ChartFeed:
    """Assembled chart series for one bar sequence.

    Attributes:
        candles: Heikin-Ashi candles, one per source bar.
        volume: Volume histogram, one point per source bar.
        long_vwap: Anchored VWAP over the long window.
        short_vwap: Anchored VWAP over the short window.
        visible_range: Initial logical view, or None for an empty feed.
    """

    candles: tuple[HeikinAshiBar, ...]
    volume: tuple[VolumePoint, ...]
    long_vwap: tuple[VwapPoint, ...]
    short_vwap: tuple[VwapPoint, ...]
    visible_range: Optional[LogicalRange]

    @property
    def is_empty(self) -> bool:
        return not self.candles

    def to_dict(self) -> dict[str, Any]:
        """Renderer payload as lists of ``{"time": ...}`` records."""
        return {
            "candles": [c.to_dict() for c in self.candles],
            "volume": [v.to_dict() for v in self.volume],
            "long_vwap": [p.to_dict() for p in self.long_vwap],
            "short_vwap": [p.to_dict() for p in self.short_vwap],
            "visible_range": (
                self.visible_range.to_dict() if self.visible_range is not None else None
            ),
        }


def volume_series(
    bars: Sequence[Bar],
    up_color: str,
    down_color: str,
) -> tuple[VolumePoint, ...]:
    """Colour each bar's volume by the direction of the original bar."""
    return tuple(
        VolumePoint(
            time=b.time,
            value=b.volume,
            color=up_color if b.is_up else down_color,
        )
        for b in bars
    )


def visible_range(length: int, window: int) -> Optional[LogicalRange]:
    """Logical range covering at most the trailing ``window`` points."""
    if length <= 0:
        return None
    return LogicalRange(start=max(0, length - window), end=length - 1)


def assemble_feed(
    bars: Sequence[Bar],
    config: ChartFeedConfig | None = None,
) -> ChartFeed:
    """Build every chart series from ``bars``.

    Raises:
        MalformedInput: If the bars fail the transform preconditions.
    """
    config = config or ChartFeedConfig()

    candles = heikin_ashi(bars)
    return ChartFeed(
        candles=candles,
        volume=volume_series(bars, config.volume_up_color, config.volume_down_color),
        long_vwap=anchored_vwap(bars, config.long_anchor),
        short_vwap=anchored_vwap(bars, config.short_anchor),
        visible_range=visible_range(len(candles), config.visible_window),
    )
