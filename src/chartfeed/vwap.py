"""Anchored volume-weighted average price."""

from __future__ import annotations

from typing import Sequence

from chartfeed.errors import MalformedInput
from chartfeed.models.bar import Bar
from chartfeed.models.series import VwapPoint
from chartfeed.quality import ensure_well_formed


def anchor_index(length: int, anchor_days: int) -> int:
    """Index of the first bar inside an anchor window of ``anchor_days``.

    Clamps to 0 when the window is longer than the history.
    """
    return max(0, length - anchor_days)


def anchored_vwap(bars: Sequence[Bar], anchor_days: int) -> tuple[VwapPoint, ...]:
    """Cumulative VWAP from the anchor bar to the end of ``bars``.

    The anchor is the bar ``anchor_days`` from the end, so the result has
    ``min(anchor_days, len(bars))`` points. Each point uses the typical
    price (high + low + close) / 3 weighted by volume. While the
    cumulative volume is still zero the point's value is None.

    Raises:
        MalformedInput: If ``anchor_days`` is not a positive integer, or
            the bars fail the transform preconditions.
    """
    if isinstance(anchor_days, bool) or not isinstance(anchor_days, int) or anchor_days < 1:
        raise MalformedInput(f"anchor_days must be a positive integer, got {anchor_days!r}")
    ensure_well_formed(bars)

    cumulative_tpv = 0.0
    cumulative_volume = 0.0
    points: list[VwapPoint] = []
    for bar in bars[anchor_index(len(bars), anchor_days):]:
        cumulative_tpv += bar.typical_price * bar.volume
        cumulative_volume += bar.volume
        value = cumulative_tpv / cumulative_volume if cumulative_volume > 0 else None
        points.append(VwapPoint(time=bar.time, value=value))
    return tuple(points)
