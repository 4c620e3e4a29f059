from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
import requests

import smart_converter.tools.rate_source as rate_source
from smart_converter.core.rate_cache import RateCache
from smart_converter.tools.currency_client import COMMON_CURRENCIES, CurrencyClient
from smart_converter.tools.rate_source import ExchangeRateSource, RateSourceError


def test_same_currency_is_identity_without_network(make_rate_source):
    source = make_rate_source(error="should not be called")
    client = CurrencyClient(rate_source=source, rate_cache=RateCache())

    result = client.convert(123.45, "usd", "USD")

    assert result.success
    assert result.data["rate"] == 1
    assert result.data["result"] == 123.45
    assert result.data["source"] == "identity"
    assert source.calls == []


def test_live_rate_is_cached_and_learns_new_codes(make_rate_source):
    source = make_rate_source(rates={"USD": {"EUR": 0.9, "XYZ": 2.0}})
    client = CurrencyClient(rate_source=source, rate_cache=RateCache())

    first = client.convert(100, "USD", "EUR")
    second = client.convert(100, "USD", "EUR")

    assert first.success and first.data["source"] == "live"
    assert first.data["result"] == pytest.approx(90.0)
    assert first.formatted == "100 USD = 90.00 EUR"
    assert second.data["source"] == "cache"
    assert source.calls == ["USD"]
    assert client.is_currency_supported("xyz")


def test_fallback_table_covers_major_pairs(make_rate_source):
    client = CurrencyClient(rate_source=make_rate_source(error="offline"), rate_cache=RateCache())

    result = client.convert(50, "USD", "GBP")

    assert result.success
    assert result.data["source"] == "fallback"
    assert result.data["result"] == pytest.approx(36.5)


def test_missing_fallback_pair_returns_the_original_error(make_rate_source):
    client = CurrencyClient(rate_source=make_rate_source(error="offline"), rate_cache=RateCache())

    result = client.convert(10, "EUR", "CAD")

    assert not result.success
    assert result.error == "offline"
    assert result.data == {"from_amount": 10, "from_currency": "EUR", "to_currency": "CAD"}


def test_handle_conversion_parses_and_converts(make_rate_source):
    client = CurrencyClient(rate_source=make_rate_source(error="offline"), rate_cache=RateCache())

    result = client.handle_conversion("50 dollars to pounds")

    assert result.success
    assert result.formatted == "50 USD = 36.50 GBP"


def test_handle_conversion_no_match(make_rate_source):
    client = CurrencyClient(rate_source=make_rate_source(), rate_cache=RateCache())
    result = client.handle_conversion("Convert 5 miles to km")
    assert not result.success
    assert not result.matched


def test_supported_set_is_seeded_with_common_codes(make_rate_source):
    client = CurrencyClient(rate_source=make_rate_source(), rate_cache=RateCache())
    assert len(COMMON_CURRENCIES) >= 45
    assert client.is_currency_supported("EUR")
    assert client.is_currency_supported("dollars")
    assert not client.is_currency_supported("XYZ")


def test_clear_cache(make_rate_source):
    source = make_rate_source(rates={"USD": {"EUR": 0.9}})
    client = CurrencyClient(rate_source=source, rate_cache=RateCache())
    client.convert(1, "USD", "EUR")
    client.clear_cache()
    client.convert(1, "USD", "EUR")
    assert source.calls == ["USD", "USD"]


def test_rate_cache_expires_after_ttl(make_clock):
    clock = make_clock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))
    cache = RateCache(ttl_minutes=10, clock=clock)
    cache.put("USD", "EUR", 0.9)

    clock.now += timedelta(minutes=9, seconds=59)
    assert cache.get("usd", "eur") == 0.9

    clock.now += timedelta(seconds=1)
    assert cache.get("USD", "EUR") is None
    assert len(cache) == 1


class _FakeResponse:
    def __init__(self, payload=None, status_code=200, bad_json=False):
        self.payload = payload
        self.status_code = status_code
        self.bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self.bad_json:
            raise ValueError("not json")
        return self.payload


def test_rate_source_reads_rates(monkeypatch):
    seen = {}

    def fake_get(url, timeout):
        seen["url"] = url
        return _FakeResponse({"base": "USD", "rates": {"eur": 0.9, "GBP": "0.75"}})

    monkeypatch.setattr(rate_source.requests, "get", fake_get)

    rates = ExchangeRateSource(base_url="https://rates.example/v4/latest/").fetch_rates("usd")

    assert seen["url"] == "https://rates.example/v4/latest/USD"
    assert rates == {"EUR": 0.9, "GBP": 0.75}


@pytest.mark.parametrize(
    "response",
    [
        _FakeResponse(status_code=503),
        _FakeResponse(bad_json=True),
        _FakeResponse({"result": "error"}),
        _FakeResponse({"rates": {"EUR": "n/a"}}),
    ],
)
def test_rate_source_failures_become_rate_source_errors(monkeypatch, response):
    monkeypatch.setattr(rate_source.requests, "get", lambda url, timeout: response)
    with pytest.raises(RateSourceError):
        ExchangeRateSource(base_url="https://rates.example").fetch_rates("USD")


def test_rate_source_transport_error(monkeypatch):
    def boom(url, timeout):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(rate_source.requests, "get", boom)
    with pytest.raises(RateSourceError, match="unreachable"):
        ExchangeRateSource(base_url="https://rates.example").fetch_rates("USD")
