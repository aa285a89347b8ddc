"""Chart feed configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ProviderType(Enum):
    """Supported data provider backends."""

    POLYGON = "polygon"
    MOCK = "mock"


@dataclass
class ChartFeedConfig:
    """Configuration for BarStore and the chart feed assembler.

    Attributes:
        provider: Provider backend used by the store.
        api_key: Provider API key (Polygon falls back to POLYGON_API_KEY).
        base_url: Provider REST root.
        history_limit: Trailing bars returned by ``BarStore.fetch``.
        lookback_months: Calendar months of history requested per symbol.
        result_cap: Maximum records requested from the provider.
        timeout_seconds: HTTP timeout for a single provider call.
        validate: Whether to run quality checks on fetched bars.
        long_anchor: Anchor window (bars) of the long-run VWAP.
        short_anchor: Anchor window (bars) of the short-run VWAP.
        visible_window: Trailing points shown by the default visible range.
        volume_up_color: Histogram colour for bars with close >= open.
        volume_down_color: Histogram colour for bars with close < open.
    """

    provider: ProviderType = ProviderType.POLYGON
    api_key: str | None = None
    base_url: str = "https://api.polygon.io"

    history_limit: int = 300
    lookback_months: int = 24
    result_cap: int = 756
    timeout_seconds: float = 10.0
    validate: bool = True

    long_anchor: int = 365
    short_anchor: int = 100
    visible_window: int = 365
    volume_up_color: str = "rgba(211, 211, 211, 0.2)"
    volume_down_color: str = "rgba(169, 169, 169, 0.1)"
