# Role: Date/time calculator. Day-offset arithmetic, signed differences, weekday lookup and timezone display,
# plus handle_request() which dispatches a parsed DateTimeIntent. Calendar primitives come from python-dateutil.

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Any, Callable, Optional, Tuple

from dateutil import parser as date_parser
from dateutil import tz
from dateutil.relativedelta import relativedelta

import smart_converter.config as config
from smart_converter.models.intent import (
    CurrentTimeIntent,
    DateTimeIntent,
    DaysUntilIntent,
    RelativeDayIntent,
    TimezoneConvertIntent,
)
from smart_converter.models.result import ConversionResult
from smart_converter.utils.datetime_parsing import parse_datetime_query
from smart_converter.utils.normalization import normalize_timezone
from smart_converter.utils.special_dates import SpecialDateResolver

Clock = Callable[[], datetime]

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_UNIT_SECONDS = {
    "seconds": 1,
    "minutes": 60,
    "hours": 3600,
    "days": 86400,
    "weeks": 604800,
}
_CALENDAR_UNITS = ("months", "years")

_CLOCK_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(AM|PM)?$", re.IGNORECASE)


def _short_date(value: datetime) -> str:
    # "Oct 19, 2026"
    return f"{MONTH_NAMES[value.month - 1][:3]} {value.day:02d}, {value.year}"


def _count(n: int, plural_unit: str) -> str:
    # "1 day", "2 days"; every supported unit name is a plain "-s" plural.
    return f"{n} {plural_unit[:-1] if n == 1 else plural_unit}"


def _long_date(value: datetime) -> str:
    # "October 19, 2026"
    return f"{MONTH_NAMES[value.month - 1]} {value.day:02d}, {value.year}"


def _zone_format(value: datetime) -> str:
    # en-US style: "10/19/2026, 15:00:00 PDT"
    return f"{value:%m/%d/%Y, %H:%M:%S} {value.tzname() or ''}".rstrip()


def _coerce_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str) and value.strip():
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as e:
            raise ValueError("Invalid date format") from e
    raise ValueError("Invalid date format")


def _align(d1: datetime, d2: datetime) -> Tuple[datetime, datetime]:
    # Key line: a naive value is read in the other value's zone so naive/aware pairs stay comparable.
    if d1.tzinfo is None and d2.tzinfo is not None:
        return d1.replace(tzinfo=d2.tzinfo), d2
    if d2.tzinfo is None and d1.tzinfo is not None:
        return d1, d2.replace(tzinfo=d1.tzinfo)
    return d1, d2


def parse_clock_time(expression: str) -> Tuple[int, int]:
    """
    Parse "3 PM", "3:30pm", "12 AM", "15:00".
    Without AM/PM an hour up to 12 is read as PM; larger hours are read on the 24-hour clock.
    """
    m = _CLOCK_RE.match((expression or "").strip())
    if not m:
        raise ValueError(f"Invalid time: {expression}")

    hours = int(m.group(1))
    minutes = int(m.group(2) or 0)
    period = (m.group(3) or "").upper()

    if not period and 1 <= hours <= 12:
        period = "PM"

    if period == "PM" and hours < 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0

    if hours > 23 or minutes > 59 or (period and int(m.group(1)) > 12):
        raise ValueError(f"Invalid time: {expression}")

    return hours, minutes


class DateTimeHelper:
    EXAMPLES = (
        "What day is 50 days from now?",
        "How many days until Christmas?",
        "Convert 3 PM PST to EST",
        "What time is it in Tokyo?",
        "What day was 30 days ago?",
    )

    def __init__(
        self,
        clock: Optional[Clock] = None,
        special_dates: Optional[SpecialDateResolver] = None,
    ) -> None:
        self._clock = clock or datetime.now
        self.special_dates = special_dates or SpecialDateResolver(clock=self._clock)

    def add_subtract_days(self, value: Any, days: int, operation: str = "add") -> ConversionResult:
        try:
            if operation not in {"add", "subtract"}:
                raise ValueError(f"Unsupported operation: {operation}")
            base = _coerce_datetime(value)
            delta = timedelta(days=int(days))
            # Key line: whole-day offsets only; time-of-day is untouched.
            result = base - delta if operation == "subtract" else base + delta
        except (TypeError, ValueError, OverflowError) as e:
            return ConversionResult.fail(str(e), date=str(value), days=days, operation=operation)

        sign = "+" if operation == "add" else "-"
        return ConversionResult.ok(
            f"{_short_date(base)} {sign} {_count(days, 'days')} = {_short_date(result)}",
            original_date=base.isoformat(),
            result_date=result.isoformat(),
            days=days,
            operation=operation,
        )

    def calculate_difference(self, date1: Any, date2: Any, unit: str = "days") -> ConversionResult:
        # Signed d2 - d1 truncated toward zero; magnitude and direction are reported separately.
        try:
            d1, d2 = _align(_coerce_datetime(date1), _coerce_datetime(date2))

            if unit in _UNIT_SECONDS:
                difference = int((d2 - d1).total_seconds() / _UNIT_SECONDS[unit])
            elif unit in _CALENDAR_UNITS:
                rd = relativedelta(d2, d1)
                months = rd.years * 12 + rd.months
                difference = months if unit == "months" else int(months / 12)
            else:
                raise ValueError(f"Unsupported unit: {unit}")
        except (TypeError, ValueError, OverflowError) as e:
            return ConversionResult.fail(str(e), date1=str(date1), date2=str(date2), unit=unit)

        magnitude = abs(difference)
        is_in_future = difference > 0

        if is_in_future:
            verb = "is" if magnitude == 1 else "are"
            formatted = f"There {verb} {_count(magnitude, unit)} until {_short_date(d2)}"
        else:
            formatted = f"{_short_date(d2)} was {_count(magnitude, unit)} ago"

        return ConversionResult.ok(
            formatted,
            date1=d1.isoformat(),
            date2=d2.isoformat(),
            difference=magnitude,
            unit=unit,
            is_in_future=is_in_future,
        )

    def find_day_of_week(self, value: Any) -> ConversionResult:
        try:
            target = _coerce_datetime(value)
        except ValueError as e:
            return ConversionResult.fail(str(e), date=str(value))

        # Key line: 0 = Sunday ... 6 = Saturday.
        day_of_week = (target.weekday() + 1) % 7
        day_name = DAY_NAMES[day_of_week]

        return ConversionResult.ok(
            f"{_short_date(target)} is a {day_name}",
            date=target.isoformat(),
            day_of_week=day_of_week,
            day_name=day_name,
        )

    def convert_timezone(self, value: Any, from_zone: str, to_zone: str) -> ConversionResult:
        # 1) Resolve aliases -> IANA names via the normalization table
        # 2) A naive wall-clock time is read in from_zone; an aware value keeps its instant
        # 3) Format the same instant in both zones
        from_tz_name = normalize_timezone(from_zone)
        to_tz_name = normalize_timezone(to_zone)
        inputs = {"date_time": str(value), "from_timezone": from_zone, "to_timezone": to_zone}

        try:
            moment = _coerce_datetime(value)
            from_tz = tz.gettz(from_tz_name)
            to_tz = tz.gettz(to_tz_name)
            if from_tz is None:
                raise ValueError(f"Unknown timezone: {from_zone}")
            if to_tz is None:
                raise ValueError(f"Unknown timezone: {to_zone}")

            if moment.tzinfo is None:
                moment = moment.replace(tzinfo=from_tz)

            in_from = moment.astimezone(from_tz)
            in_to = moment.astimezone(to_tz)
        except (TypeError, ValueError, OverflowError) as e:
            return ConversionResult.fail(str(e), **inputs)

        from_formatted = _zone_format(in_from)
        to_formatted = _zone_format(in_to)

        return ConversionResult.ok(
            f"{from_formatted} ({from_tz_name}) = {to_formatted} ({to_tz_name})",
            original_date=in_from.isoformat(),
            from_timezone=from_tz_name,
            to_timezone=to_tz_name,
            from_formatted=from_formatted,
            to_formatted=to_formatted,
        )

    def execute(self, intent: DateTimeIntent, query: str = "") -> ConversionResult:
        now = self._clock()

        if isinstance(intent, RelativeDayIntent):
            shifted = self.add_subtract_days(now, intent.offset_days, intent.operation)
            if not shifted.success:
                return shifted

            result_date = _coerce_datetime(shifted.data["result_date"])
            day_info = self.find_day_of_week(result_date)
            if intent.operation == "add":
                phrase = f"{_count(intent.offset_days, 'days')} from now will be"
            else:
                phrase = f"{_count(intent.offset_days, 'days')} ago was"

            return ConversionResult.ok(
                f"{phrase} {day_info.data['day_name']}, {_long_date(result_date)}",
                type=intent.type.value,
                **shifted.data,
                day_info=day_info.to_dict(),
            )

        if isinstance(intent, DaysUntilIntent):
            expression = intent.target_date_expression
            target = self.special_dates.resolve(expression)
            if target is None:
                try:
                    target = date_parser.parse(expression, default=datetime(now.year, now.month, now.day))
                except (ValueError, OverflowError):
                    return ConversionResult.fail(f"Could not parse date: {expression}", query=query)

            result = self.calculate_difference(now, target, "days")
            if not result.success:
                return result
            return ConversionResult.ok(
                result.formatted or "",
                type=intent.type.value,
                target_date=expression,
                **result.data,
            )

        if isinstance(intent, TimezoneConvertIntent):
            try:
                hours, minutes = parse_clock_time(intent.time_expression)
            except ValueError as e:
                return ConversionResult.fail(
                    str(e),
                    query=query,
                    time=intent.time_expression,
                    from_timezone=intent.from_zone,
                    to_timezone=intent.to_zone,
                )
            # Key line: the clock time is taken on today's calendar date.
            wall_clock = datetime.combine(now.date(), time(hours, minutes))
            return self.convert_timezone(wall_clock, intent.from_zone, intent.to_zone)

        if isinstance(intent, CurrentTimeIntent):
            now_utc = now.astimezone(tz.UTC)
            return self.convert_timezone(now_utc, "UTC", intent.zone)

        return ConversionResult.fail("Unsupported date/time operation", query=query)

    def handle_request(self, query: str) -> ConversionResult:
        # 1) Parse the query into one of the five intent types (miss -> "no match")
        # 2) Execute it
        intent = parse_datetime_query(query)
        if intent is None:
            return ConversionResult.no_match("Could not parse date/time request from query", query)

        if config.DEBUG:
            print(f"[datetime] parsed as {intent.type.value}: {intent}")

        return self.execute(intent, query)
