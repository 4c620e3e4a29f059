# Role: External tool adapter for exchange rates. Calls the rates API for one base currency and returns
# {code: rate}; every transport or payload problem surfaces as a RateSourceError.

from __future__ import annotations

from typing import Dict, Optional

import requests

import smart_converter.config as config


class RateSourceError(RuntimeError):
    pass


class ExchangeRateSource:
    _TIMEOUT_SECONDS = 15

    def __init__(self, base_url: Optional[str] = None) -> None:
        self.base_url = (base_url or config.rates_api_url()).rstrip("/")

    def fetch_rates(self, base_currency: str) -> Dict[str, float]:
        # 1) GET {base_url}/{BASE}
        # 2) Validate the "rates" object
        # 3) Return upper-case code -> float rate
        base = base_currency.strip().upper()
        try:
            r = requests.get(f"{self.base_url}/{base}", timeout=self._TIMEOUT_SECONDS)
            r.raise_for_status()
            payload = r.json()
        except requests.RequestException as e:
            raise RateSourceError(f"Exchange rate request failed: {e}") from e
        except ValueError as e:
            raise RateSourceError(f"Bad exchange rate payload: {e}") from e

        rates = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(rates, dict) or not rates:
            raise RateSourceError("API response format invalid")

        try:
            out = {str(code).upper(): float(rate) for code, rate in rates.items()}
        except (TypeError, ValueError) as e:
            raise RateSourceError(f"Bad exchange rate payload: {e}") from e

        if config.DEBUG:
            print("\n--- RATE SOURCE ---")
            print("BASE:", base)
            print("RATES RETURNED:", len(out))
            print("-------------------\n")

        return out
