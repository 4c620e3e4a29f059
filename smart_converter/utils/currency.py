# Role: Deterministic parsing helpers for currency conversion. Extracts (amount, from, to) from natural language
# so the router never relies on the LLM for basic string parsing.

from __future__ import annotations

from typing import Optional

from smart_converter.models.intent import CurrencyIntent
from smart_converter.utils.matching import NUMBER, MatchRule, compile_all, narrow_then_match, parse_number
from smart_converter.utils.normalization import MAJOR_CURRENCY_CODES, normalize_currency

_CODES = "|".join(MAJOR_CURRENCY_CODES)
_NAMES = r"dollars?|euros?|pounds?|yen|yuan|won|rupees?"
_CCY = rf"(?:{_CODES}|{_NAMES})"

CURRENCY_PORTION_PATTERNS = compile_all(
    (
        rf"convert\s+{NUMBER}\s*{_CCY}\s+(?:to|in|into)\s+{_CCY}\b",
        rf"how\s+much\s+is\s+{NUMBER}\s*{_CCY}\s+in\s+{_CCY}\b",
        rf"{NUMBER}\s*{_CCY}\s+(?:to|in)\s+{_CCY}\b",
    )
)


def _parse_amount_str(raw: str) -> Optional[float]:
    # Role: parse "1,200" safely.
    if not raw:
        return None
    try:
        return parse_number(raw)
    except ValueError:
        return None


def _build(amount_raw: str, from_token: str, to_token: str) -> Optional[CurrencyIntent]:
    amount = _parse_amount_str(amount_raw)
    if amount is None:
        return None
    return CurrencyIntent(
        amount=amount,
        from_currency=normalize_currency(from_token),
        to_currency=normalize_currency(to_token),
    )


_INTENT_PATTERNS = compile_all(
    (
        rf"(?:convert\s+)?({NUMBER})\s*({_CCY})\s+(?:to|in|into)\s+({_CCY})\b",
        rf"how\s+much\s+is\s+({NUMBER})\s*({_CCY})\s+in\s+({_CCY})\b",
        rf"({NUMBER})\s*({_CCY})\s+in\s+({_CCY})\b",
    )
)

CURRENCY_RULES = tuple(
    MatchRule(name, pattern, lambda m: _build(m.group(1), m.group(2), m.group(3)))
    for name, pattern in zip(("amount_ccy_to_ccy", "how_much_is", "amount_ccy_in_ccy"), _INTENT_PATTERNS)
)


def parse_currency_query(text: str) -> Optional[CurrencyIntent]:
    """
    Parses full patterns like:
      - "convert 100 usd to eur"
      - "50 dollars to pounds"
      - "How much is 10,000 JPY in INR"
    Returns None when the text holds no complete currency conversion.
    """
    return narrow_then_match(text or "", CURRENCY_PORTION_PATTERNS, CURRENCY_RULES, label="currency")
