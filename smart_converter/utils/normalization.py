# Role: Static alias tables (units, temperature symbols, currencies, timezones) -> canonical codes.
# lookup() is the typed primitive (None when unknown); the normalize_* helpers decide pass-through explicitly.

from __future__ import annotations

from typing import Mapping, Optional

TEMPERATURE_ALIASES: Mapping[str, str] = {
    "°c": "C", "celsius": "C", "c": "C",
    "°f": "F", "fahrenheit": "F", "f": "F",
    "°k": "K", "kelvin": "K", "k": "K",
    "°r": "R", "rankine": "R",
}

UNIT_ALIASES: Mapping[str, str] = {
    # Length
    "m": "m", "meter": "m", "meters": "m", "metre": "m", "metres": "m",
    "km": "km", "kilometer": "km", "kilometers": "km", "kilometre": "km", "kilometres": "km",
    "cm": "cm", "centimeter": "cm", "centimeters": "cm", "centimetre": "cm", "centimetres": "cm",
    "mm": "mm", "millimeter": "mm", "millimeters": "mm", "millimetre": "mm", "millimetres": "mm",
    "mi": "mi", "mile": "mi", "miles": "mi",
    "ft": "ft", "foot": "ft", "feet": "ft",
    "in": "in", "inch": "in", "inches": "in",
    "yd": "yd", "yard": "yd", "yards": "yd",
    # Mass
    "g": "g", "gram": "g", "grams": "g",
    "kg": "kg", "kilogram": "kg", "kilograms": "kg", "kilo": "kg", "kilos": "kg",
    "lb": "lb", "lbs": "lb", "pound": "lb", "pounds": "lb",
    "oz": "oz", "ounce": "oz", "ounces": "oz",
    "ton": "ton", "tons": "ton", "tonne": "ton", "tonnes": "ton",
    # Volume
    "l": "l", "liter": "l", "liters": "l", "litre": "l", "litres": "l",
    "ml": "ml", "milliliter": "ml", "milliliters": "ml", "millilitre": "ml", "millilitres": "ml",
    "gal": "gal", "gallon": "gal", "gallons": "gal",
    "qt": "qt", "quart": "qt", "quarts": "qt",
    "pt": "pt", "pint": "pt", "pints": "pt",
    "cup": "cup", "cups": "cup",
    "fl-oz": "fl-oz", "floz": "fl-oz", "fl oz": "fl-oz",
    # Time
    "s": "s", "sec": "s", "secs": "s", "second": "s", "seconds": "s",
    "min": "min", "mins": "min", "minute": "min", "minutes": "min",
    "h": "h", "hr": "h", "hrs": "h", "hour": "h", "hours": "h",
    "d": "d", "day": "d", "days": "d",
    "week": "week", "weeks": "week",
    "month": "month", "months": "month",
    "year": "year", "years": "year",
    # Area
    "m2": "m2", "km2": "km2", "cm2": "cm2", "in2": "in2", "ft2": "ft2", "yd2": "yd2", "mi2": "mi2",
    "acre": "acre", "acres": "acre",
    "hectare": "hectare", "hectares": "hectare", "ha": "hectare",
}

CURRENCY_ALIASES: Mapping[str, str] = {
    "dollar": "USD", "dollars": "USD", "$": "USD",
    "euro": "EUR", "euros": "EUR", "€": "EUR",
    "pound": "GBP", "pounds": "GBP", "£": "GBP",
    "yen": "JPY",
    "yuan": "CNY",
    "won": "KRW",
    "rupee": "INR", "rupees": "INR",
}

# Codes the currency extractor recognizes in free text.
MAJOR_CURRENCY_CODES = ("USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF", "CNY", "INR", "KRW")

TIMEZONE_ALIASES: Mapping[str, str] = {
    "utc": "UTC",
    "gmt": "UTC",
    "est": "America/New_York",
    "edt": "America/New_York",
    "eastern": "America/New_York",
    "cst": "America/Chicago",
    "cdt": "America/Chicago",
    "central": "America/Chicago",
    "mst": "America/Denver",
    "mdt": "America/Denver",
    "mountain": "America/Denver",
    "pst": "America/Los_Angeles",
    "pdt": "America/Los_Angeles",
    "pacific": "America/Los_Angeles",
    "bst": "Europe/London",
    "cet": "Europe/Paris",
    "jst": "Asia/Tokyo",
    "ist": "Asia/Kolkata",
    "cst_china": "Asia/Shanghai",
    "aest": "Australia/Sydney",
    # Major cities
    "new york": "America/New_York",
    "chicago": "America/Chicago",
    "denver": "America/Denver",
    "los angeles": "America/Los_Angeles",
    "tokyo": "Asia/Tokyo",
    "japan": "Asia/Tokyo",
    "london": "Europe/London",
    "paris": "Europe/Paris",
    "berlin": "Europe/Berlin",
    "sydney": "Australia/Sydney",
    "melbourne": "Australia/Melbourne",
    "shanghai": "Asia/Shanghai",
    "beijing": "Asia/Shanghai",
    "mumbai": "Asia/Kolkata",
    "delhi": "Asia/Kolkata",
    "dubai": "Asia/Dubai",
    "moscow": "Europe/Moscow",
    "singapore": "Asia/Singapore",
    "hongkong": "Asia/Hong_Kong",
    "hong kong": "Asia/Hong_Kong",
    "seoul": "Asia/Seoul",
    "bangkok": "Asia/Bangkok",
    "jakarta": "Asia/Jakarta",
}


def lookup(table: Mapping[str, str], alias: str) -> Optional[str]:
    # Role: case-insensitive alias lookup; None means "unknown alias", never an error.
    if not alias:
        return None
    # Inner whitespace collapses, so "fl  oz" and "new  york" still match.
    return table.get(" ".join(alias.split()).lower())


def is_known_unit(token: str) -> bool:
    return lookup(TEMPERATURE_ALIASES, token) is not None or lookup(UNIT_ALIASES, token) is not None


def is_currency_token(token: str) -> bool:
    return lookup(CURRENCY_ALIASES, token) is not None or token.strip().upper() in MAJOR_CURRENCY_CODES


def normalize_unit(token: str) -> str:
    # Temperature symbols first, so "c"/"f"/"k" never collide with other tables.
    temp = lookup(TEMPERATURE_ALIASES, token)
    if temp is not None:
        return temp
    unit = lookup(UNIT_ALIASES, token)
    # Key line: unknown units pass through unchanged; the calculator reports them.
    return unit if unit is not None else token.strip()


def normalize_currency(token: str) -> str:
    code = lookup(CURRENCY_ALIASES, token)
    # Key line: unknown tokens are treated as already-canonical codes.
    return code if code is not None else token.strip().upper()


def normalize_timezone(zone: Optional[str]) -> str:
    if not zone or not zone.strip():
        return "UTC"
    tz_name = lookup(TIMEZONE_ALIASES, zone)
    return tz_name if tz_name is not None else zone.strip()
