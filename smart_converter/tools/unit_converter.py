# Role: Deterministic unit calculator. Units live in disjoint categories, each with a ratio to one base unit;
# temperature is converted through Celsius with the linear formulas instead of ratios.

from __future__ import annotations

from typing import Dict, List, Optional

import smart_converter.config as config
from smart_converter.models.result import ConversionResult
from smart_converter.utils.unit_parsing import extract_unit_intent

# category -> unit code -> ratio to the category's base unit
UNIT_RATIOS: Dict[str, Dict[str, float]] = {
    "length": {
        "m": 1, "km": 1000, "cm": 0.01, "mm": 0.001,
        "in": 0.0254, "ft": 0.3048, "yd": 0.9144, "mi": 1609.344,
    },
    "mass": {
        "g": 1, "kg": 1000, "lb": 453.592, "oz": 28.3495, "ton": 1000000,
    },
    "volume": {
        "l": 1, "ml": 0.001, "gal": 3.78541, "qt": 0.946353,
        "pt": 0.473176, "cup": 0.236588, "fl-oz": 0.0295735,
    },
    "time": {
        "s": 1, "min": 60, "h": 3600, "d": 86400,
        "week": 604800, "month": 2629746, "year": 31556952,
    },
    "area": {
        "m2": 1, "km2": 1000000, "cm2": 0.0001, "in2": 0.00064516, "ft2": 0.092903,
        "yd2": 0.836127, "mi2": 2589988.11, "acre": 4046.86, "hectare": 10000,
    },
}

TEMPERATURE_UNITS = ("C", "F", "K", "R")


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _to_celsius(value: float, unit: str) -> float:
    if unit == "C":
        return value
    if unit == "F":
        return (value - 32) * 5 / 9
    if unit == "K":
        return value - 273.15
    if unit == "R":
        return (value - 491.67) * 5 / 9
    raise ValueError(f"Unknown temperature unit: {unit}")


def _from_celsius(celsius: float, unit: str) -> float:
    if unit == "C":
        return celsius
    if unit == "F":
        return celsius * 9 / 5 + 32
    if unit == "K":
        return celsius + 273.15
    if unit == "R":
        return celsius * 9 / 5 + 491.67
    raise ValueError(f"Unknown temperature unit: {unit}")


def convert_temperature(value: float, from_unit: str, to_unit: str) -> float:
    if from_unit == to_unit and from_unit in TEMPERATURE_UNITS:
        return value
    return _from_celsius(_to_celsius(value, from_unit), to_unit)


class UnitConverter:
    EXAMPLES = (
        "Convert 5 miles to km",
        "10 pounds to kg",
        "100°F to °C",
        "2 gallons in liters",
        "How many inches in 1 meter",
    )

    def categories(self) -> List[str]:
        return [*UNIT_RATIOS.keys(), "temperature"]

    def units_for(self, category: str) -> List[str]:
        if category == "temperature":
            return list(TEMPERATURE_UNITS)
        return list(UNIT_RATIOS.get(category, {}).keys())

    def find_category(self, unit: str) -> Optional[str]:
        if unit in TEMPERATURE_UNITS:
            return "temperature"
        for category, units in UNIT_RATIOS.items():
            if unit in units:
                return category
        return None

    def can_convert(self, from_unit: str, to_unit: str) -> bool:
        from_category = self.find_category(from_unit)
        return from_category is not None and from_category == self.find_category(to_unit)

    def convert(self, value: float, from_unit: str, to_unit: str) -> ConversionResult:
        # 1) Resolve both categories
        # 2) Temperature -> formulas via Celsius; other categories -> value * from_ratio / to_ratio
        # 3) Never raise: every failure is a ConversionResult naming the inputs
        inputs = {"from_value": value, "from_unit": from_unit, "to_unit": to_unit}

        from_category = self.find_category(from_unit)
        to_category = self.find_category(to_unit)

        try:
            if from_category == "temperature" and to_category in (None, "temperature"):
                result = convert_temperature(value, from_unit, to_unit)
            elif from_category is None or from_category != to_category:
                return ConversionResult.fail(
                    f"Cannot convert from {from_unit} to {to_unit}. Units may be incompatible or not supported.",
                    **inputs,
                )
            else:
                ratios = UNIT_RATIOS[from_category]
                result = value * ratios[from_unit] / ratios[to_unit]
        except ValueError as e:
            return ConversionResult.fail(str(e), **inputs)

        if config.DEBUG:
            print(f"[unit converter] {value} {from_unit} -> {result} {to_unit}")

        return ConversionResult.ok(
            f"{_format_number(value)} {from_unit} = {result:.6f} {to_unit}",
            result=result,
            category=from_category,
            **inputs,
        )

    def handle_conversion(self, query: str) -> ConversionResult:
        # Role: query -> UnitIntent -> calculation. An extraction miss is reported as "no match".
        intent = extract_unit_intent(query)
        if intent is None:
            return ConversionResult.no_match("Could not parse unit conversion from query", query)
        return self.convert(intent.value, intent.from_unit, intent.to_unit)
