"""chartfeed: daily bar store and chart series for a stock dashboard.

Fetches daily OHLCV bars once per symbol, caches them for the life of the
process, and derives Heikin-Ashi candles, anchored VWAP lines and a
coloured volume histogram for the chart renderer.

Quick start::

    from chartfeed import assemble_feed, create_store_from_env
    store = create_store_from_env()
    feed = assemble_feed(store.fetch("SMH"))
    payload = feed.to_dict()
"""

from __future__ import annotations

import os

from chartfeed.config import ChartFeedConfig, ProviderType
from chartfeed.errors import ChartFeedError, DataUnavailable, ErrorCode, MalformedInput
from chartfeed.feed import ChartFeed, assemble_feed
from chartfeed.heikin_ashi import heikin_ashi
from chartfeed.models.bar import Bar
from chartfeed.models.heikin_ashi import HeikinAshiBar
from chartfeed.models.series import LogicalRange, VolumePoint, VwapPoint
from chartfeed.models.short_volume import ShortVolume
from chartfeed.session import ChartSession
from chartfeed.store import BarStore
from chartfeed.vwap import anchored_vwap

__version__ = "0.1.0"

__all__ = [
    # Store
    "BarStore",
    "ChartSession",
    "create_store_from_env",
    # Transforms
    "heikin_ashi",
    "anchored_vwap",
    "assemble_feed",
    "ChartFeed",
    # Config
    "ChartFeedConfig",
    "ProviderType",
    # Errors
    "ChartFeedError",
    "DataUnavailable",
    "MalformedInput",
    "ErrorCode",
    # Models
    "Bar",
    "HeikinAshiBar",
    "VwapPoint",
    "VolumePoint",
    "LogicalRange",
    "ShortVolume",
]


def create_store_from_env() -> BarStore:
    """Zero-config factory that reads provider settings from env vars.

    Environment variables:
        CHARTFEED_PROVIDER: "polygon" or "mock" (default: "polygon").
        POLYGON_API_KEY: Polygon.io API key.
        CHARTFEED_BASE_URL: Provider REST root (default: "https://api.polygon.io").
        CHARTFEED_HISTORY_LIMIT: Trailing bars returned per fetch (default: 300).
        CHARTFEED_LOOKBACK_MONTHS: Months of history requested (default: 24).
        CHARTFEED_RESULT_CAP: Maximum records per request (default: 756).
        CHARTFEED_TIMEOUT: HTTP timeout in seconds (default: 10).
    """
    config = ChartFeedConfig(
        provider=ProviderType(os.getenv("CHARTFEED_PROVIDER", "polygon").strip()),
        api_key=os.getenv("POLYGON_API_KEY"),
        base_url=os.getenv("CHARTFEED_BASE_URL", "https://api.polygon.io"),
        history_limit=int(os.getenv("CHARTFEED_HISTORY_LIMIT", "300")),
        lookback_months=int(os.getenv("CHARTFEED_LOOKBACK_MONTHS", "24")),
        result_cap=int(os.getenv("CHARTFEED_RESULT_CAP", "756")),
        timeout_seconds=float(os.getenv("CHARTFEED_TIMEOUT", "10")),
    )
    return BarStore(config)
