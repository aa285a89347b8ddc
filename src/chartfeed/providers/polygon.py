"""Polygon.io daily aggregates provider (REST via ``requests``)."""

from __future__ import annotations

import logging
import os
from datetime import date, datetime, timezone
from typing import Any

import requests

from chartfeed.errors import DataUnavailable, ErrorCode
from chartfeed.models.bar import Bar
from chartfeed.models.short_volume import ShortVolume
from chartfeed.providers.base import BaseBarProvider

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.polygon.io"


class PolygonProvider(BaseBarProvider):
    """Fetch daily bars and short volume from the Polygon.io REST API.

    Capabilities: bars, short_volume.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key or os.getenv("POLYGON_API_KEY")
        if not self.api_key:
            raise DataUnavailable(
                "Polygon API key required. Set POLYGON_API_KEY env var or pass api_key.",
                code=ErrorCode.AUTH_FAILED,
            )
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def capabilities(self) -> set[str]:
        return {"bars", "short_volume"}

    # ------------------------------------------------------------------ bars

    def get_daily_bars(
        self,
        symbol: str,
        start: date,
        end: date,
        limit: int,
    ) -> list[Bar]:
        url = (
            f"{self.base_url}/v2/aggs/ticker/{symbol}"
            f"/range/1/day/{start.isoformat()}/{end.isoformat()}"
        )
        params: dict[str, Any] = {
            "apiKey": self.api_key,
            "adjusted": "true",
            "sort": "asc",
            "limit": limit,
        }
        results = self._get_results(url, params, what=f"bars for {symbol}")

        try:
            return [
                Bar(
                    time=epoch_ms_to_day(r["t"]),
                    open=float(r["o"]),
                    high=float(r["h"]),
                    low=float(r["l"]),
                    close=float(r["c"]),
                    volume=float(r["v"]),
                )
                for r in results
            ]
        except (KeyError, TypeError, ValueError) as exc:
            raise DataUnavailable(
                f"Malformed aggregate record for {symbol}: {exc}",
                code=ErrorCode.PROVIDER_ERROR,
            ) from exc

    # --------------------------------------------------------- short volume

    def get_short_volume(self, symbol: str, start: date, end: date) -> list[ShortVolume]:
        url = (
            f"{self.base_url}/v2/stock/short-volume/{symbol}"
            f"/{start.isoformat()}/{end.isoformat()}"
        )
        results = self._get_results(
            url, {"apiKey": self.api_key}, what=f"short volume for {symbol}",
        )

        try:
            return [
                ShortVolume(
                    time=str(r["date"])[:10],
                    short_volume=float(r["short_volume"]),
                    total_volume=float(r["total_volume"]),
                )
                for r in results
            ]
        except (KeyError, TypeError, ValueError) as exc:
            raise DataUnavailable(
                f"Malformed short volume record for {symbol}: {exc}",
                code=ErrorCode.PROVIDER_ERROR,
            ) from exc

    # ------------------------------------------------------------ internal

    def _get_results(self, url: str, params: dict[str, Any], what: str) -> list[dict[str, Any]]:
        """GET ``url`` and return its ``results`` list."""
        logger.info("Requesting %s from Polygon", what)
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as exc:
            raise DataUnavailable(
                f"Polygon request for {what} timed out after {self.timeout}s",
                code=ErrorCode.TIMEOUT,
                retryable=True,
            ) from exc
        except requests.RequestException as exc:
            raise DataUnavailable(
                f"Polygon request for {what} failed: {exc}",
                code=ErrorCode.PROVIDER_ERROR,
                retryable=True,
            ) from exc

        self._check_response(resp)

        try:
            data = resp.json()
        except ValueError as exc:
            raise DataUnavailable(
                f"Polygon returned a non-JSON body for {what}",
                code=ErrorCode.PROVIDER_ERROR,
            ) from exc

        if not isinstance(data, dict):
            raise DataUnavailable(
                "Unexpected data format from Polygon.io",
                code=ErrorCode.PROVIDER_ERROR,
            )
        if data.get("status") == "ERROR":
            raise DataUnavailable(
                data.get("error") or f"Failed to fetch {what} from Polygon.io",
                code=ErrorCode.PROVIDER_ERROR,
            )
        results = data.get("results")
        if not isinstance(results, list):
            raise DataUnavailable(
                "Unexpected data format from Polygon.io",
                code=ErrorCode.NO_DATA,
            )
        return results

    @staticmethod
    def _check_response(resp: Any) -> None:
        """Raise DataUnavailable for a non-2xx response."""
        status = resp.status_code
        if 200 <= status < 300:
            return
        if status in (401, 403):
            raise DataUnavailable(
                f"Polygon auth failed (HTTP {status})",
                code=ErrorCode.AUTH_FAILED,
            )
        if status == 404:
            raise DataUnavailable(
                "Polygon resource not found (HTTP 404)",
                code=ErrorCode.NOT_FOUND,
            )
        if status == 429:
            raise DataUnavailable(
                "Polygon rate limit exceeded (HTTP 429)",
                code=ErrorCode.RATE_LIMITED,
                retryable=True,
            )
        raise DataUnavailable(
            f"HTTP error! status: {status}",
            code=ErrorCode.PROVIDER_ERROR,
            retryable=status >= 500,
        )


def epoch_ms_to_day(ms: float) -> str:
    """Epoch milliseconds to the UTC calendar date, ``YYYY-MM-DD``."""
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).date().isoformat()
