# Role: Deterministic unit-conversion extractor. Narrows a mixed query to its unit phrase, then matches one of
# three intent shapes and normalizes the unit tokens ("miles" -> "mi", "°F" -> "F").

from __future__ import annotations

from typing import Optional

from smart_converter.models.intent import UnitIntent
from smart_converter.utils.matching import NUMBER, MatchRule, compile_all, narrow_then_match, parse_number
from smart_converter.utils.normalization import is_currency_token, is_known_unit, normalize_unit

# "fl oz" (the one two-word unit), or letters (optionally led by a degree sign) with an optional
# "-oz" style suffix and an optional square marker ("m2").
_UNIT = r"(?:fl\s+oz\b|°?[a-zA-Z]+(?:-[a-zA-Z]+)?2?)"
_TEMP = r"°[CFKcfk]"

UNIT_PORTION_PATTERNS = compile_all(
    (
        rf"convert\s+{NUMBER}\s*{_UNIT}\s+(?:to|in|into)\s+{_UNIT}",
        rf"{NUMBER}\s*{_UNIT}\s+(?:to|in|into)\s+{_UNIT}",
        rf"{NUMBER}\s*{_UNIT}\s+(?:in|as)\s+{_UNIT}",
        rf"how\s+many\s+{_UNIT}\s+(?:are\s+in|in|are)\s+{NUMBER}\s*{_UNIT}",
        rf"{NUMBER}\s*{_TEMP}\s+(?:to|in)\s+°?[CFKcfk]\b",
        rf"what'?s\s+{NUMBER}\s*{_TEMP}\s+in\s+°?[CFKcfk]\b",
    )
)


def _build(value: str, from_unit: str, to_unit: str) -> Optional[UnitIntent]:
    # Key lines: "100 USD to EUR" is not a unit query; "5 furlongs to m" is (and fails later, in the calculator).
    if any(is_currency_token(t) and not is_known_unit(t) for t in (from_unit, to_unit)):
        return None
    if not (is_known_unit(from_unit) or is_known_unit(to_unit)):
        return None
    try:
        number = parse_number(value)
    except ValueError:
        return None
    return UnitIntent(value=number, from_unit=normalize_unit(from_unit), to_unit=normalize_unit(to_unit))


_INTENT_PATTERNS = compile_all(
    (
        rf"(?:convert\s+)?({NUMBER})\s*({_UNIT})\s+(?:to|in|into)\s+({_UNIT})\b",
        rf"({NUMBER})\s*({_UNIT})\s+(?:in|as)\s+({_UNIT})\b",
        rf"how\s+many\s+({_UNIT})\s+(?:are\s+in|in|are)\s+({NUMBER})\s*({_UNIT})\b",
    )
)

UNIT_RULES = (
    MatchRule("value_unit_to_unit", _INTENT_PATTERNS[0], lambda m: _build(m.group(1), m.group(2), m.group(3))),
    MatchRule("value_unit_as_unit", _INTENT_PATTERNS[1], lambda m: _build(m.group(1), m.group(2), m.group(3))),
    # Key line: "how many X in N Y" reverses operand order (quantity follows the second unit).
    MatchRule("how_many_in", _INTENT_PATTERNS[2], lambda m: _build(m.group(2), m.group(3), m.group(1))),
)


def extract_unit_intent(query: str) -> Optional[UnitIntent]:
    """
    Parses unit conversions like:
      - "Convert 5 miles to km"
      - "1,000 grams as kg"
      - "100°F to °C"
      - "How many inches in 1 meter"
    Returns None when the query is not a unit conversion.
    """
    return narrow_then_match(query or "", UNIT_PORTION_PATTERNS, UNIT_RULES, label="unit")
