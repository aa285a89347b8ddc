"""pandas conversions for bar sequences and assembled feeds."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from chartfeed.feed import ChartFeed
from chartfeed.models.bar import Bar

BAR_COLUMNS = ["time", "open", "high", "low", "close", "volume"]


def bars_to_frame(bars: Sequence[Bar]) -> pd.DataFrame:
    """One row per bar, columns ``time`` + OHLCV."""
    records = [
        {
            "time": b.time,
            "open": b.open,
            "high": b.high,
            "low": b.low,
            "close": b.close,
            "volume": b.volume,
        }
        for b in bars
    ]
    return pd.DataFrame(records, columns=BAR_COLUMNS)


def frame_to_bars(df: pd.DataFrame) -> tuple[Bar, ...]:
    """Inverse of ``bars_to_frame``.

    ``time`` may be strings or datetimes; it is normalized to
    ``YYYY-MM-DD``. Rows are returned in frame order.
    """
    bars: list[Bar] = []
    for _, row in df.iterrows():
        bars.append(Bar(
            time=pd.Timestamp(row["time"]).date().isoformat(),
            open=float(row["open"]),
            high=float(row["high"]),
            low=float(row["low"]),
            close=float(row["close"]),
            volume=float(row["volume"]),
        ))
    return tuple(bars)


def feed_to_frame(feed: ChartFeed) -> pd.DataFrame:
    """Flatten a feed into one frame indexed by ``time``.

    VWAP columns are NaN outside their anchor window and where the
    value is undefined.
    """
    candles = pd.DataFrame(
        [
            {
                "time": c.time,
                "ha_open": c.open,
                "ha_high": c.high,
                "ha_low": c.low,
                "ha_close": c.close,
            }
            for c in feed.candles
        ],
        columns=["time", "ha_open", "ha_high", "ha_low", "ha_close"],
    ).set_index("time")

    volume = pd.DataFrame(
        [{"time": v.time, "volume": v.value, "volume_color": v.color} for v in feed.volume],
        columns=["time", "volume", "volume_color"],
    ).set_index("time")

    long_vwap = pd.Series(
        {p.time: p.value for p in feed.long_vwap}, name="long_vwap", dtype="float64",
    )
    short_vwap = pd.Series(
        {p.time: p.value for p in feed.short_vwap}, name="short_vwap", dtype="float64",
    )

    frame = candles.join(volume).join(long_vwap).join(short_vwap)
    frame.index.name = "time"
    return frame
