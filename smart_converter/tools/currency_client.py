# Role: Currency calculator. Same-currency requests short-circuit; otherwise a live rate is read through the
# 10-minute cache, falling back to a small hardcoded table. Always returns a ConversionResult, never raises.

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Optional, Set, Tuple

import smart_converter.config as config
from smart_converter.core.rate_cache import RateCache
from smart_converter.models.result import ConversionResult
from smart_converter.tools.rate_source import ExchangeRateSource, RateSourceError
from smart_converter.utils.currency import parse_currency_query
from smart_converter.utils.normalization import normalize_currency

COMMON_CURRENCIES = (
    "USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF", "CNY", "INR", "KRW",
    "SEK", "NOK", "DKK", "PLN", "CZK", "HUF", "BGN", "RON", "HRK",
    "RUB", "TRY", "BRL", "MXN", "ARS", "CLP", "COP", "PEN",
    "ZAR", "EGP", "MAD", "NGN", "KES", "GHS",
    "AED", "SAR", "QAR", "KWD", "BHD", "OMR",
    "SGD", "HKD", "TWD", "THB", "MYR", "IDR", "PHP", "VND",
)

# Sample rates for a few major pairs, used only when the rate source is unreachable.
FALLBACK_RATES: Dict[Tuple[str, str], float] = {
    ("USD", "EUR"): 0.85,
    ("EUR", "USD"): 1.18,
    ("USD", "GBP"): 0.73,
    ("GBP", "USD"): 1.37,
    ("USD", "JPY"): 110.0,
    ("JPY", "USD"): 0.009,
    ("EUR", "GBP"): 0.86,
    ("GBP", "EUR"): 1.16,
    ("USD", "CAD"): 1.25,
    ("CAD", "USD"): 0.80,
    ("USD", "AUD"): 1.35,
    ("AUD", "USD"): 0.74,
}

POPULAR_PAIRS = (("USD", "EUR"), ("USD", "GBP"), ("EUR", "USD"), ("USD", "JPY"), ("GBP", "USD"))


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


class CurrencyClient:
    EXAMPLES = (
        "Convert 100 USD to EUR",
        "50 dollars to pounds",
        "How much is 1000 JPY in USD",
        "200 EUR in GBP",
        "500 CAD to AUD",
    )

    def __init__(
        self,
        rate_source: Optional[ExchangeRateSource] = None,
        rate_cache: Optional[RateCache] = None,
    ) -> None:
        self.rate_source = rate_source or ExchangeRateSource()
        self.rate_cache = rate_cache or RateCache(ttl_minutes=config.rate_cache_ttl_minutes())
        # Key line: seeded with common codes; enlarged by codes seen in successful rate responses.
        self.supported_currencies: Set[str] = {c.lower() for c in COMMON_CURRENCIES}

    def is_currency_supported(self, currency: str) -> bool:
        normalized = normalize_currency(currency)
        return (
            normalized.lower() in self.supported_currencies
            or currency.strip().lower() in self.supported_currencies
        )

    def get_fallback_rate(self, from_ccy: str, to_ccy: str) -> Optional[float]:
        return FALLBACK_RATES.get((from_ccy.upper(), to_ccy.upper()))

    def get_exchange_rate(self, from_ccy: str, to_ccy: str) -> Tuple[float, str]:
        # 1) Cache hit -> ("cache")
        # 2) Live fetch, cache the pair, learn new codes -> ("live")
        # 3) On failure -> fallback table ("fallback"), else re-raise the original error
        cached = self.rate_cache.get(from_ccy, to_ccy)
        if cached is not None:
            return cached, "cache"

        try:
            rates = self.rate_source.fetch_rates(from_ccy)
            self.supported_currencies.update(code.lower() for code in rates)
            self.supported_currencies.add(from_ccy.lower())

            rate = rates.get(to_ccy.upper())
            if rate is None:
                raise RateSourceError(f"Exchange rate not available for {from_ccy} to {to_ccy}")

            self.rate_cache.put(from_ccy, to_ccy, rate)
            return rate, "live"

        except RateSourceError as e:
            if config.DEBUG:
                print(f"[currency] rate source failed: {e}")

            fallback_rate = self.get_fallback_rate(from_ccy, to_ccy)
            if fallback_rate is not None:
                return fallback_rate, "fallback"
            raise

    def convert(self, amount: float, from_ccy: str, to_ccy: str) -> ConversionResult:
        from_code = from_ccy.strip().upper()
        to_code = to_ccy.strip().upper()

        if from_code == to_code:
            # Key line: identity conversion never touches the network.
            return ConversionResult.ok(
                f"{_format_number(amount)} {from_code} = {_format_number(amount)} {to_code}",
                result=amount,
                rate=1,
                from_amount=amount,
                from_currency=from_code,
                to_currency=to_code,
                source="identity",
            )

        try:
            rate, source = self.get_exchange_rate(from_code, to_code)
        except RateSourceError as e:
            return ConversionResult.fail(
                str(e),
                from_amount=amount,
                from_currency=from_ccy,
                to_currency=to_ccy,
            )

        result = float(amount) * float(rate)

        if config.DEBUG:
            print("\n--- CURRENCY TOOL ---")
            print("REQUEST:", amount, from_code, "->", to_code)
            print("RATE / SOURCE:", rate, source)
            print("---------------------\n")

        return ConversionResult.ok(
            f"{_format_number(amount)} {from_code} = {result:.2f} {to_code}",
            result=result,
            rate=float(rate),
            from_amount=amount,
            from_currency=from_code,
            to_currency=to_code,
            source=source,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    def handle_conversion(self, query: str) -> ConversionResult:
        # 1) Parse query -> CurrencyIntent (miss -> "no match")
        # 2) Reject unsupported codes
        # 3) Convert
        intent = parse_currency_query(query)
        if intent is None:
            return ConversionResult.no_match("Could not parse currency conversion from query", query)

        if not self.is_currency_supported(intent.from_currency) or not self.is_currency_supported(intent.to_currency):
            return ConversionResult.fail(
                f"Unsupported currency. From: {intent.from_currency}, To: {intent.to_currency}",
                query=query,
                from_amount=intent.amount,
                from_currency=intent.from_currency,
                to_currency=intent.to_currency,
            )

        return self.convert(intent.amount, intent.from_currency, intent.to_currency)

    def clear_cache(self) -> None:
        self.rate_cache.clear()
