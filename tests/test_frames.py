"""Tests for pandas conversions."""

import math

import pandas as pd

from chartfeed.config import ChartFeedConfig
from chartfeed.feed import assemble_feed
from chartfeed.frames import BAR_COLUMNS, bars_to_frame, feed_to_frame, frame_to_bars
from conftest import make_daily_bars


class TestBarFrames:
    def test_bars_to_frame(self, sample_bars):
        df = bars_to_frame(sample_bars)
        assert list(df.columns) == BAR_COLUMNS
        assert len(df) == 5
        assert df.iloc[0]["time"] == "2024-01-15"

    def test_empty(self):
        df = bars_to_frame([])
        assert list(df.columns) == BAR_COLUMNS
        assert df.empty

    def test_frame_to_bars(self, sample_bars):
        assert frame_to_bars(bars_to_frame(sample_bars)) == tuple(sample_bars)

    def test_frame_to_bars_normalizes_timestamps(self):
        df = pd.DataFrame([{
            "time": pd.Timestamp("2024-01-15 14:30", tz="UTC"),
            "open": 1, "high": 2, "low": 0.5, "close": 1.5, "volume": 10,
        }])
        (bar,) = frame_to_bars(df)
        assert bar.time == "2024-01-15"
        assert bar.volume == 10.0


class TestFeedFrame:
    def test_columns_and_index(self):
        feed = assemble_feed(make_daily_bars(12))
        df = feed_to_frame(feed)
        assert df.index.name == "time"
        assert len(df) == 12
        assert list(df.columns) == [
            "ha_open", "ha_high", "ha_low", "ha_close",
            "volume", "volume_color", "long_vwap", "short_vwap",
        ]

    def test_vwap_outside_window_is_nan(self):
        config = ChartFeedConfig(long_anchor=10, short_anchor=3)
        feed = assemble_feed(make_daily_bars(12), config)
        df = feed_to_frame(feed)
        assert df["long_vwap"].isna().sum() == 2
        assert df["short_vwap"].isna().sum() == 9
        assert math.isclose(df["short_vwap"].iloc[-1], feed.short_vwap[-1].value)

    def test_empty_feed(self):
        df = feed_to_frame(assemble_feed([]))
        assert df.empty
