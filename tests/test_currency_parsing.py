from __future__ import annotations

import pytest

from smart_converter.models.intent import CurrencyIntent
from smart_converter.utils.currency import parse_currency_query


@pytest.mark.parametrize(
    "query, expected",
    [
        ("50 dollars to pounds", CurrencyIntent(50, "USD", "GBP")),
        ("convert 100 usd to eur", CurrencyIntent(100, "USD", "EUR")),
        ("How much is 10,000 JPY in INR", CurrencyIntent(10000, "JPY", "INR")),
        ("200 euros in yen", CurrencyIntent(200, "EUR", "JPY")),
        ("What's 1000 JPY in USD and what day was 30 days ago?", CurrencyIntent(1000, "JPY", "USD")),
        ("Convert 100 USD to EUR and what's 25°C in Fahrenheit?", CurrencyIntent(100, "USD", "EUR")),
    ],
)
def test_extracts_currency_intent(query, expected):
    assert parse_currency_query(query) == expected


@pytest.mark.parametrize("query", ["Convert 5 miles to km", "10 pounds to kg", "asdf 12345", "", "usd to eur"])
def test_non_currency_queries_return_none(query):
    assert parse_currency_query(query) is None
