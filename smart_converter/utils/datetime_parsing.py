# Role: Deterministic date/time extractor. Narrows a mixed query to its date/time phrase, then matches an ordered
# rule table. Rule order matters: numeric offsets are tried before the generic yesterday/tomorrow phrasings.

from __future__ import annotations

import re
from typing import Optional

from smart_converter.models.intent import (
    CurrentTimeIntent,
    DateTimeIntent,
    DaysUntilIntent,
    Direction,
    RelativeDayIntent,
    TimezoneConvertIntent,
)
from smart_converter.utils.matching import MatchRule, compile_all, narrow_then_match
from smart_converter.utils.normalization import TIMEZONE_ALIASES, lookup

_WHAT_DAY = r"what\s+(?:day|date)\s+(?:(?:is|was|will\s+it\s+be)\s+)?(?:it\s+)?"
_CLOCK = r"\d{1,2}(?::\d{2})?\s*(?:AM|PM)?"
# One or two words ("PST", "Tokyo", "New York", "America/New_York").
_ZONE = r"[A-Za-z][\w/]*(?:\s+(?!(?:and|to|in|into)\b)[A-Za-z][\w/]*)?"
# A phrase ends at punctuation, the end of the text, or where a second " and ..." request starts.
_END = r"(?=\s+and\b|\s*[?!.,;]|\s*$)"
_TARGET_END = r"(?=\s+and\s+|\s*[?!;]|\.(?:\s|$)|\s*$)"

DATETIME_PORTION_PATTERNS = compile_all(
    (
        rf"{_WHAT_DAY}\d+\s+days?\s+(?:before|after)\s+today",
        rf"(?:{_WHAT_DAY})?\b\d+\s+days?\s+from\s+(?:now|today)",
        rf"(?:{_WHAT_DAY})?\b\d+\s+days?\s+ago",
        rf"{_WHAT_DAY}in\s+\d+\s+days?",
        r"how\s+many\s+days\s+(?:are\s+there\s+)?(?:until|till|to|between\s+(?:today|now)\s+and)\s+[^?!]+",
        r"what\s+time\s+is\s+it\s+(?:now\s+)?in\s+[^?!.]+",
        rf"convert\s+{_CLOCK}\s+{_ZONE}\s+(?:to|in|into)\s+{_ZONE}",
        rf"{_WHAT_DAY}(?:the\s+day\s+(?:before|after)\s+today|yesterday|tomorrow)",
    )
)


def _relative(days: str, direction: Direction) -> Optional[RelativeDayIntent]:
    try:
        return RelativeDayIntent(offset_days=int(days), direction=direction)
    except ValueError:
        return None


_EXPLICIT_CLOCK = re.compile(r":|AM|PM", re.IGNORECASE)


def _timezone_convert(clock: str, from_zone: str, to_zone: str) -> Optional[TimezoneConvertIntent]:
    # Key line: a bare number ("convert 5 miles to km") only reads as a time when a known zone follows it.
    if not _EXPLICIT_CLOCK.search(clock) and lookup(TIMEZONE_ALIASES, from_zone) is None and "/" not in from_zone:
        return None
    return TimezoneConvertIntent(time_expression=clock, from_zone=from_zone, to_zone=to_zone)


def _days_until(target: str) -> Optional[DaysUntilIntent]:
    cleaned = target.strip().strip(",")
    return DaysUntilIntent(target_date_expression=cleaned) if cleaned else None


_P = compile_all(
    (
        rf"{_WHAT_DAY}(\d+)\s+days?\s+before\s+today{_END}",
        rf"{_WHAT_DAY}(\d+)\s+days?\s+after\s+today{_END}",
        rf"(?:{_WHAT_DAY})?\b(\d+)\s+days?\s+from\s+(?:now|today){_END}",
        rf"(?:{_WHAT_DAY})?\b(\d+)\s+days?\s+ago{_END}",
        rf"{_WHAT_DAY}in\s+(\d+)\s+days?{_END}",
        r"how\s+many\s+days\s+(?:are\s+there\s+)?(?:until|till|to|between\s+(?:today|now)\s+and)\s+(.+?)"
        + _TARGET_END,
        rf"convert\s+({_CLOCK})\s+({_ZONE})\s+(?:to|in|into)\s+({_ZONE}){_END}",
        rf"(?:what\s+time\s+is\s+it\s+(?:now\s+)?|(?:current|local)\s+time\s+)in\s+({_ZONE}){_END}",
        rf"{_WHAT_DAY}(?:the\s+day\s+before\s+today|yesterday){_END}",
        rf"{_WHAT_DAY}(?:the\s+day\s+after\s+today|tomorrow){_END}",
    )
)

DATETIME_RULES = (
    MatchRule("days_before_today", _P[0], lambda m: _relative(m.group(1), Direction.PAST)),
    MatchRule("days_after_today", _P[1], lambda m: _relative(m.group(1), Direction.FUTURE)),
    MatchRule("days_from_now", _P[2], lambda m: _relative(m.group(1), Direction.FUTURE)),
    MatchRule("days_ago", _P[3], lambda m: _relative(m.group(1), Direction.PAST)),
    MatchRule("in_n_days", _P[4], lambda m: _relative(m.group(1), Direction.FUTURE)),
    MatchRule("days_until", _P[5], lambda m: _days_until(m.group(1))),
    MatchRule(
        "timezone_convert",
        _P[6],
        lambda m: _timezone_convert(m.group(1).strip(), m.group(2).strip(), m.group(3).strip()),
    ),
    MatchRule("current_time_in", _P[7], lambda m: CurrentTimeIntent(zone=m.group(1).strip())),
    MatchRule("yesterday", _P[8], lambda m: RelativeDayIntent(offset_days=1, direction=Direction.PAST)),
    MatchRule("tomorrow", _P[9], lambda m: RelativeDayIntent(offset_days=1, direction=Direction.FUTURE)),
)


def parse_datetime_query(query: str) -> Optional[DateTimeIntent]:
    """
    Parses date/time requests like:
      - "What day is 30 days from now?" / "What day was 30 days ago?"
      - "What day is 2 days before today?" / "What day is tomorrow?"
      - "How many days until Christmas?"
      - "Convert 3 PM PST to EST"
      - "What time is it in Tokyo?"
    Returns None when the query holds no date/time request.
    """
    return narrow_then_match(query or "", DATETIME_PORTION_PATTERNS, DATETIME_RULES, label="datetime")
