"""Heikin-Ashi candle smoothing.

HA_Close = (O + H + L + C) / 4
HA_Open  = (prev_HA_Open + prev_HA_Close) / 2   [first: O]
HA_High  = max(H, HA_Open, HA_Close)
HA_Low   = min(L, HA_Open, HA_Close)

Each candle depends on the previous derived candle, so the series is built
as a left fold over the source bars.
"""

from __future__ import annotations

from typing import Optional, Sequence

from chartfeed.models.bar import Bar
from chartfeed.models.heikin_ashi import HeikinAshiBar
from chartfeed.quality import ensure_well_formed


def heikin_ashi(bars: Sequence[Bar]) -> tuple[HeikinAshiBar, ...]:
    """Return the Heikin-Ashi series for ``bars`` (oldest first).

    Raises:
        MalformedInput: If dates are not strictly increasing or a value
            is not finite.
    """
    ensure_well_formed(bars)

    series: list[HeikinAshiBar] = []
    prev: Optional[HeikinAshiBar] = None
    for bar in bars:
        prev = _next_candle(bar, prev)
        series.append(prev)
    return tuple(series)


def _next_candle(bar: Bar, prev: Optional[HeikinAshiBar]) -> HeikinAshiBar:
    ha_close = (bar.open + bar.high + bar.low + bar.close) / 4
    if prev is None:
        ha_open = bar.open
    else:
        ha_open = (prev.open + prev.close) / 2

    return HeikinAshiBar(
        time=bar.time,
        open=ha_open,
        high=max(bar.high, ha_open, ha_close),
        low=min(bar.low, ha_open, ha_close),
        close=ha_close,
        volume=bar.volume,
    )
