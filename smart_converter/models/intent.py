# Role: Typed conversion intents produced by the extractors. An intent only exists when every required
# field was present in the query; the extractors return None otherwise ("not this domain").

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Tool(str, Enum):
    UNIT = "unit"
    CURRENCY = "currency"
    DATETIME = "datetime"


class DateTimeIntentType(str, Enum):
    PAST_DAY = "pastDay"
    FUTURE_DAY = "futureDay"
    DAYS_BETWEEN = "daysBetween"
    TIMEZONE = "timezone"
    CURRENT_TIME = "currentTime"


class Direction(str, Enum):
    PAST = "past"
    FUTURE = "future"


@dataclass(frozen=True)
class UnitIntent:
    value: float
    from_unit: str
    to_unit: str


@dataclass(frozen=True)
class CurrencyIntent:
    amount: float
    from_currency: str
    to_currency: str


@dataclass(frozen=True)
class RelativeDayIntent:
    offset_days: int
    direction: Direction

    @property
    def type(self) -> DateTimeIntentType:
        if self.direction == Direction.PAST:
            return DateTimeIntentType.PAST_DAY
        return DateTimeIntentType.FUTURE_DAY

    @property
    def operation(self) -> str:
        return "subtract" if self.direction == Direction.PAST else "add"


@dataclass(frozen=True)
class DaysUntilIntent:
    target_date_expression: str

    @property
    def type(self) -> DateTimeIntentType:
        return DateTimeIntentType.DAYS_BETWEEN


@dataclass(frozen=True)
class TimezoneConvertIntent:
    time_expression: str
    from_zone: str
    to_zone: str

    @property
    def type(self) -> DateTimeIntentType:
        return DateTimeIntentType.TIMEZONE


@dataclass(frozen=True)
class CurrentTimeIntent:
    zone: str

    @property
    def type(self) -> DateTimeIntentType:
        return DateTimeIntentType.CURRENT_TIME


DateTimeIntent = Union[RelativeDayIntent, DaysUntilIntent, TimezoneConvertIntent, CurrentTimeIntent]
ConversionIntent = Union[UnitIntent, CurrencyIntent, DateTimeIntent]
