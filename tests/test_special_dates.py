from __future__ import annotations

from datetime import datetime

import pytest

from smart_converter.tools.datetime_helper import DateTimeHelper
from smart_converter.utils.special_dates import SpecialDateResolver, thanksgiving


def _resolver(now: datetime) -> SpecialDateResolver:
    return SpecialDateResolver(clock=lambda: now)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("christmas", datetime(2026, 12, 25)),
        ("  CHRISTMAS ", datetime(2026, 12, 25)),
        ("halloween", datetime(2026, 10, 31)),
        ("valentines", datetime(2027, 2, 14)),
        ("thanksgiving", datetime(2026, 11, 26)),
        ("New Year", datetime(2027, 1, 1)),
    ],
)
def test_resolves_next_occurrence(name, expected):
    assert _resolver(datetime(2026, 10, 19, 9, 30)).resolve(name) == expected


def test_passed_holiday_advances_exactly_one_year():
    assert _resolver(datetime(2026, 12, 26)).resolve("christmas") == datetime(2027, 12, 25)


def test_passed_thanksgiving_reruns_the_weekday_rule():
    assert _resolver(datetime(2026, 11, 27)).resolve("thanksgiving") == datetime(2027, 11, 25)


@pytest.mark.parametrize(
    "now",
    [datetime(2026, 1, 1, 0, 0), datetime(2026, 6, 15), datetime(2026, 12, 31, 23, 59)],
)
def test_new_year_is_always_a_later_year(now):
    resolved = _resolver(now).resolve("new years")
    assert (resolved.month, resolved.day) == (1, 1)
    assert resolved.year == now.year + 1


@pytest.mark.parametrize("year, day", [(2018, 22), (2023, 23), (2024, 28), (2025, 27), (2026, 26), (2027, 25), (2028, 23)])
def test_thanksgiving_is_fourth_thursday(year, day):
    date = thanksgiving(year)
    assert (date.month, date.day) == (11, day)
    assert date.weekday() == 3


def test_unknown_names_resolve_to_none():
    resolver = _resolver(datetime(2026, 10, 19))
    assert resolver.resolve("easter") is None
    assert resolver.resolve("") is None
    assert "thanksgiving" in resolver.known_names()


@pytest.mark.parametrize(
    "name, expected",
    [
        ("New Year's", datetime(2027, 1, 1)),
        ("New Year’s Day", datetime(2027, 1, 1)),
        ("Valentine's Day", datetime(2027, 2, 14)),
        ("Christmas Day", datetime(2026, 12, 25)),
    ],
)
def test_possessive_and_day_suffix_names(name, expected):
    assert _resolver(datetime(2026, 10, 19)).resolve(name) == expected


def test_days_until_possessive_holiday_end_to_end():
    helper = DateTimeHelper(clock=lambda: datetime(2026, 10, 19))
    result = helper.handle_request("How many days until New Year's Day?")
    assert result.success
    assert result.data["difference"] == 74
