# Role: Resolves holiday names ("Christmas", "Thanksgiving") to the next occurrence on or after "now".
# Calendar arithmetic (dateutil relativedelta) over an injectable clock, so results are deterministic under test.

from __future__ import annotations

import re
from datetime import datetime
from typing import Callable, Dict, Optional, Tuple

from dateutil.relativedelta import TH, relativedelta

import smart_converter.config as config

Clock = Callable[[], datetime]

# name -> (month, day) for fixed-date holidays.
_FIXED_HOLIDAYS: Dict[str, Tuple[int, int]] = {
    "christmas": (12, 25),
    "halloween": (10, 31),
    "valentine": (2, 14),
    "valentines": (2, 14),
}

_NEW_YEAR_NAMES = {"new year", "new years"}
_THANKSGIVING_NAMES = {"thanksgiving"}


def thanksgiving(year: int, tzinfo=None) -> datetime:
    """US Thanksgiving: the 4th Thursday of November."""
    return datetime(year, 11, 1, tzinfo=tzinfo) + relativedelta(weekday=TH(4))


class SpecialDateResolver:
    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or datetime.now

    def known_names(self) -> list[str]:
        return sorted({*_FIXED_HOLIDAYS, *_NEW_YEAR_NAMES, *_THANKSGIVING_NAMES})

    def resolve(self, name: str) -> Optional[datetime]:
        # 1) Normalize the name (case-insensitive, trimmed)
        # 2) "new year" is always next January 1st
        # 3) Fixed dates and Thanksgiving roll forward exactly one year once passed
        if not name:
            return None

        normalized = name.strip().lower().replace("’", "'")
        # "New Year's Day" -> "new year", "Valentine's Day" -> "valentine".
        normalized = re.sub(r"'s\b", "", normalized)
        normalized = re.sub(r"\s+day$", "", normalized).strip()
        now = self._clock()
        tz = now.tzinfo

        if normalized in _NEW_YEAR_NAMES:
            # Key line: unconditionally next year, even on December 31st.
            result = datetime(now.year + 1, 1, 1, tzinfo=tz)

        elif normalized in _THANKSGIVING_NAMES:
            result = thanksgiving(now.year, tz)
            if result < now:
                # Key line: re-run the weekday rule for next year rather than adding a fixed offset.
                result = thanksgiving(now.year + 1, tz)

        elif normalized in _FIXED_HOLIDAYS:
            month, day = _FIXED_HOLIDAYS[normalized]
            result = datetime(now.year, month, day, tzinfo=tz)
            if result < now:
                result = datetime(now.year + 1, month, day, tzinfo=tz)

        else:
            return None

        if config.DEBUG:
            print(f"[special dates] {normalized!r} -> {result.date().isoformat()}")

        return result
