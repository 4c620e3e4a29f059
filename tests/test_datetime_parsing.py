from __future__ import annotations

import pytest

from smart_converter.models.intent import (
    CurrentTimeIntent,
    DateTimeIntentType,
    DaysUntilIntent,
    Direction,
    RelativeDayIntent,
    TimezoneConvertIntent,
)
from smart_converter.utils.datetime_parsing import parse_datetime_query


@pytest.mark.parametrize(
    "query, expected",
    [
        ("What day is 30 days from now?", RelativeDayIntent(30, Direction.FUTURE)),
        ("What day was 30 days ago?", RelativeDayIntent(30, Direction.PAST)),
        ("What day is 2 days before today?", RelativeDayIntent(2, Direction.PAST)),
        ("What day is 5 days after today", RelativeDayIntent(5, Direction.FUTURE)),
        ("What day will it be in 10 days?", RelativeDayIntent(10, Direction.FUTURE)),
        ("What day is tomorrow?", RelativeDayIntent(1, Direction.FUTURE)),
        ("What day was yesterday?", RelativeDayIntent(1, Direction.PAST)),
        ("How many days until Christmas?", DaysUntilIntent("Christmas")),
        ("How many days until December 31, 2026?", DaysUntilIntent("December 31, 2026")),
        ("Convert 3 PM PST to EST", TimezoneConvertIntent("3 PM", "PST", "EST")),
        ("convert 3:30pm EST to Tokyo", TimezoneConvertIntent("3:30pm", "EST", "Tokyo")),
        ("What time is it in Tokyo?", CurrentTimeIntent("Tokyo")),
        ("What time is it in New York?", CurrentTimeIntent("New York")),
    ],
)
def test_extracts_datetime_intent(query, expected):
    assert parse_datetime_query(query) == expected


def test_numeric_offset_wins_over_generic_phrasing():
    intent = parse_datetime_query("What day is 3 days before today?")
    assert intent == RelativeDayIntent(3, Direction.PAST)
    assert intent.type == DateTimeIntentType.PAST_DAY
    assert intent.operation == "subtract"


def test_target_stops_at_a_following_clause():
    assert parse_datetime_query("How many days until Christmas and convert 10 pounds to kg?") == DaysUntilIntent(
        "Christmas"
    )


def test_timezone_phrase_inside_mixed_query():
    intent = parse_datetime_query("Convert 3 PM PST to EST and 500 ml to cups")
    assert intent == TimezoneConvertIntent("3 PM", "PST", "EST")
    assert intent.type == DateTimeIntentType.TIMEZONE


def test_relative_day_inside_mixed_query():
    intent = parse_datetime_query("What's 1000 JPY in USD and what day was 30 days ago?")
    assert intent == RelativeDayIntent(30, Direction.PAST)


@pytest.mark.parametrize("query", ["asdf 12345", "", "Convert 5 miles to km", "100 USD to EUR"])
def test_non_datetime_queries_return_none(query):
    assert parse_datetime_query(query) is None
