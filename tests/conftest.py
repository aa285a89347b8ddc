"""Shared fixtures for chartfeed tests."""

from __future__ import annotations

import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from chartfeed.config import ChartFeedConfig, ProviderType
from chartfeed.models.bar import Bar
from chartfeed.providers.mock import MockProvider
from chartfeed.store import BarStore

TODAY = date(2024, 6, 28)


def make_daily_bars(n: int, start: date = date(2023, 1, 2), volume: float = 1000.0) -> list[Bar]:
    """``n`` consecutive weekday bars with a gentle up/down pattern."""
    bars: list[Bar] = []
    day = start
    i = 0
    while len(bars) < n:
        if day.weekday() < 5:
            o = 100.0 + i * 0.25
            c = o + (0.5 if i % 2 == 0 else -0.4)
            bars.append(Bar(
                time=day.isoformat(),
                open=o,
                high=max(o, c) + 1.0,
                low=min(o, c) - 1.0,
                close=c,
                volume=volume,
            ))
            i += 1
        day += timedelta(days=1)
    return bars


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def two_bars() -> list[Bar]:
    return [
        Bar(time="2024-01-01", open=10.0, high=12.0, low=9.0, close=11.0, volume=100.0),
        Bar(time="2024-01-02", open=11.0, high=13.0, low=10.0, close=12.0, volume=200.0),
    ]


@pytest.fixture
def sample_bars() -> list[Bar]:
    """5 contiguous daily bars."""
    return make_daily_bars(5, start=date(2024, 1, 15))


@pytest.fixture
def mock_config() -> ChartFeedConfig:
    return ChartFeedConfig(provider=ProviderType.MOCK, history_limit=300)


@pytest.fixture
def store(mock_config, mock_provider) -> BarStore:
    return BarStore(mock_config, provider=mock_provider, today=lambda: TODAY)
