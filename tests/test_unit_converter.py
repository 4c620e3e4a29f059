from __future__ import annotations

import pytest

from smart_converter.tools.unit_converter import UNIT_RATIOS, UnitConverter, convert_temperature


@pytest.fixture
def converter():
    return UnitConverter()


def test_miles_to_km(converter):
    result = converter.convert(5, "mi", "km")
    assert result.success
    assert result.data["result"] == pytest.approx(8.04672)
    assert result.formatted == "5 mi = 8.046720 km"


def test_fahrenheit_to_celsius_uses_formula(converter):
    result = converter.convert(100, "F", "C")
    assert result.success
    assert result.data["result"] == pytest.approx(37.777777, rel=1e-6)
    assert result.data["category"] == "temperature"
    assert result.formatted == "100 F = 37.777778 C"


@pytest.mark.parametrize(
    "category, a, b",
    [(category, a, b) for category, units in UNIT_RATIOS.items() for a in units for b in list(units)[:3]],
)
def test_same_category_round_trip(converter, category, a, b):
    there = converter.convert(12.5, a, b)
    back = converter.convert(there.data["result"], b, a)
    assert back.data["result"] == pytest.approx(12.5, rel=1e-9)


@pytest.mark.parametrize("unit", ["F", "K", "R"])
@pytest.mark.parametrize("value", [-40.0, 0.0, 37.5, 451.0])
def test_temperature_round_trip_through_celsius(unit, value):
    celsius = convert_temperature(value, unit, "C")
    assert convert_temperature(celsius, "C", unit) == pytest.approx(value, abs=1e-9)


def test_cross_category_is_rejected_with_both_units(converter):
    result = converter.convert(5, "mi", "kg")
    assert not result.success
    assert result.error == "Cannot convert from mi to kg. Units may be incompatible or not supported."
    assert result.data == {"from_value": 5, "from_unit": "mi", "to_unit": "kg"}


def test_unknown_temperature_unit_names_the_symbol(converter):
    result = converter.convert(5, "C", "X")
    assert not result.success
    assert result.error == "Unknown temperature unit: X"


def test_unit_catalogue(converter):
    assert "temperature" in converter.categories()
    assert converter.units_for("temperature") == ["C", "F", "K", "R"]
    assert converter.find_category("cup") == "volume"
    assert converter.find_category("parsec") is None
    assert converter.can_convert("acre", "hectare")
    assert not converter.can_convert("acre", "kg")


def test_handle_conversion_reports_no_match(converter):
    result = converter.handle_conversion("asdf 12345")
    assert not result.success
    assert not result.matched


def test_handle_conversion_end_to_end(converter):
    result = converter.handle_conversion("How many inches in 1 meter")
    assert result.success
    assert result.data["result"] == pytest.approx(39.370079, rel=1e-6)
