"""Tests for PolygonProvider response handling (no network)."""

from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from chartfeed.errors import DataUnavailable, ErrorCode
from chartfeed.models.bar import Bar
from chartfeed.models.short_volume import ShortVolume
from chartfeed.providers.polygon import PolygonProvider, epoch_ms_to_day

START = date(2022, 6, 28)
END = date(2024, 6, 28)

# 2024-01-02 and 2024-01-03, 05:00 UTC
AGGS_OK = {
    "status": "OK",
    "results": [
        {"t": 1704171600000, "o": 10, "h": 12, "l": 9, "c": 11, "v": 100},
        {"t": 1704258000000, "o": 11, "h": 13, "l": 10, "c": 12, "v": 200},
    ],
}


def _response(status: int = 200, body=None, json_error: bool = False) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    if json_error:
        resp.json.side_effect = ValueError("not json")
    else:
        resp.json.return_value = body
    return resp


def _provider(resp=None, side_effect=None) -> tuple[PolygonProvider, MagicMock]:
    session = MagicMock()
    if side_effect is not None:
        session.get.side_effect = side_effect
    else:
        session.get.return_value = resp
    provider = PolygonProvider(
        api_key="test-key", base_url="https://example.test/", timeout=3.0, session=session,
    )
    return provider, session


class TestPolygonBars:
    def test_parses_results(self):
        provider, _ = _provider(_response(body=AGGS_OK))
        bars = provider.get_daily_bars("SMH", START, END, 756)
        assert bars == [
            Bar(time="2024-01-02", open=10.0, high=12.0, low=9.0, close=11.0, volume=100.0),
            Bar(time="2024-01-03", open=11.0, high=13.0, low=10.0, close=12.0, volume=200.0),
        ]

    def test_request_shape(self):
        provider, session = _provider(_response(body=AGGS_OK))
        provider.get_daily_bars("SMH", START, END, 756)
        args, kwargs = session.get.call_args
        assert args[0] == "https://example.test/v2/aggs/ticker/SMH/range/1/day/2022-06-28/2024-06-28"
        assert kwargs["params"] == {
            "apiKey": "test-key", "adjusted": "true", "sort": "asc", "limit": 756,
        }
        assert kwargs["timeout"] == 3.0

    def test_symbol_passed_as_supplied(self):
        provider, session = _provider(_response(body=AGGS_OK))
        provider.get_daily_bars("brk.b", START, END, 10)
        assert "/ticker/brk.b/" in session.get.call_args[0][0]

    def test_empty_results_list(self):
        provider, _ = _provider(_response(body={"status": "OK", "results": []}))
        assert provider.get_daily_bars("SMH", START, END, 10) == []

    @pytest.mark.parametrize("status,code,retryable", [
        (401, ErrorCode.AUTH_FAILED, False),
        (403, ErrorCode.AUTH_FAILED, False),
        (404, ErrorCode.NOT_FOUND, False),
        (429, ErrorCode.RATE_LIMITED, True),
        (500, ErrorCode.PROVIDER_ERROR, True),
        (418, ErrorCode.PROVIDER_ERROR, False),
    ])
    def test_http_status(self, status, code, retryable):
        provider, _ = _provider(_response(status=status, body={}))
        with pytest.raises(DataUnavailable) as exc_info:
            provider.get_daily_bars("SMH", START, END, 10)
        assert exc_info.value.code == code
        assert exc_info.value.retryable is retryable

    def test_error_envelope(self):
        provider, _ = _provider(_response(body={"status": "ERROR", "error": "Unknown API Key"}))
        with pytest.raises(DataUnavailable, match="Unknown API Key"):
            provider.get_daily_bars("SMH", START, END, 10)

    def test_error_envelope_without_message(self):
        provider, _ = _provider(_response(body={"status": "ERROR"}))
        with pytest.raises(DataUnavailable, match="Polygon.io"):
            provider.get_daily_bars("SMH", START, END, 10)

    @pytest.mark.parametrize("body", [
        {"status": "OK"},
        {"status": "OK", "results": None},
        {"status": "OK", "results": {"t": 1}},
        ["not", "an", "envelope"],
    ])
    def test_results_not_a_list(self, body):
        provider, _ = _provider(_response(body=body))
        with pytest.raises(DataUnavailable, match="Unexpected data format"):
            provider.get_daily_bars("SMH", START, END, 10)

    def test_non_json_body(self):
        provider, _ = _provider(_response(json_error=True))
        with pytest.raises(DataUnavailable):
            provider.get_daily_bars("SMH", START, END, 10)

    def test_malformed_record(self):
        body = {"status": "OK", "results": [{"t": 1704171600000, "o": 10}]}
        provider, _ = _provider(_response(body=body))
        with pytest.raises(DataUnavailable) as exc_info:
            provider.get_daily_bars("SMH", START, END, 10)
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_timeout(self):
        provider, _ = _provider(side_effect=requests.Timeout("slow"))
        with pytest.raises(DataUnavailable) as exc_info:
            provider.get_daily_bars("SMH", START, END, 10)
        assert exc_info.value.code == ErrorCode.TIMEOUT
        assert exc_info.value.retryable

    def test_connection_error(self):
        provider, _ = _provider(side_effect=requests.ConnectionError("refused"))
        with pytest.raises(DataUnavailable) as exc_info:
            provider.get_daily_bars("SMH", START, END, 10)
        assert exc_info.value.code == ErrorCode.PROVIDER_ERROR


class TestPolygonShortVolume:
    def test_parses_results(self):
        body = {
            "status": "OK",
            "results": [{"date": "2024-01-02", "short_volume": 400, "total_volume": 1000}],
        }
        provider, session = _provider(_response(body=body))
        records = provider.get_short_volume("SMH", START, END)
        assert records == [ShortVolume("2024-01-02", 400.0, 1000.0)]
        assert session.get.call_args[0][0] == (
            "https://example.test/v2/stock/short-volume/SMH/2022-06-28/2024-06-28"
        )

    def test_error_envelope(self):
        provider, _ = _provider(_response(body={"status": "ERROR", "error": "forbidden"}))
        with pytest.raises(DataUnavailable, match="forbidden"):
            provider.get_short_volume("SMH", START, END)


class TestPolygonSetup:
    def test_requires_api_key(self, monkeypatch):
        monkeypatch.delenv("POLYGON_API_KEY", raising=False)
        with pytest.raises(DataUnavailable) as exc_info:
            PolygonProvider()
        assert exc_info.value.code == ErrorCode.AUTH_FAILED

    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("POLYGON_API_KEY", "env-key")
        assert PolygonProvider(session=MagicMock()).api_key == "env-key"

    def test_capabilities(self):
        provider, _ = _provider(_response(body=AGGS_OK))
        assert provider.capabilities() == {"bars", "short_volume"}


class TestEpochToDay:
    def test_utc_date(self):
        assert epoch_ms_to_day(1704171600000) == "2024-01-02"

    def test_midnight_utc(self):
        assert epoch_ms_to_day(1704153600000) == "2024-01-02"
