"""
Calendar bounds for scheduling a recording.

The default leap-year rule is the full Gregorian one. Older clients used
"divisible by 4 and not by 100" with no 400-year exception; pass
legacy_leap_rule=True to reproduce their answers exactly.
"""

from datetime import MINYEAR, MAXYEAR

from bbcd.core.constants import MONTH_LENGTHS
from bbcd.core.error_codes import InvalidMonth, InvalidDay


def is_leap_year(year: int, legacy_leap_rule: bool = False) -> bool:
    if legacy_leap_rule:
        return year % 4 == 0 and year % 100 != 0
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def max_day(year: int, month: int, legacy_leap_rule: bool = False) -> int:
    """Number of days in the given month. Month must be 1..12."""
    if isinstance(month, bool) or not isinstance(month, int) or month not in MONTH_LENGTHS:
        raise InvalidMonth(f"month must be 1..12, got {month!r}")
    if month == 2 and is_leap_year(year, legacy_leap_rule):
        return 29
    return MONTH_LENGTHS[month]


def validate_day(year: int, month: int, day: int, legacy_leap_rule: bool = False) -> int:
    """Reject a day that does not exist in the given month. Never clamps."""
    if isinstance(year, bool) or not isinstance(year, int) or not MINYEAR <= year <= MAXYEAR:
        raise InvalidDay(f"year must be {MINYEAR}..{MAXYEAR}, got {year!r}")
    last = max_day(year, month, legacy_leap_rule)
    if isinstance(day, bool) or not isinstance(day, int) or not 1 <= day <= last:
        raise InvalidDay(f"day must be 1..{last} for {year}-{month:02d}, got {day!r}")
    return day
