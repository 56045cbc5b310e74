"""
Enumerated tokens used by recurrence patterns.

Values match the descriptor tokens callers send (camelCase types,
lowercase weekday names), so enums compare equal to the raw strings.
"""

from enum import Enum


class RecurrenceType(str, Enum):
    """
    How a pattern repeats.

    - daily: every `interval` days
    - weekly: on daysOfWeek, every `interval` weeks
    - absoluteMonthly: on dayOfMonth, every `interval` months
    - relativeMonthly: on the nth of daysOfWeek in the month, every `interval` months
    - absoluteYearly: on dayOfMonth of month, every `interval` years
    - relativeYearly: on the nth of daysOfWeek in month, every `interval` years
    """

    DAILY = "daily"
    WEEKLY = "weekly"
    ABSOLUTE_MONTHLY = "absoluteMonthly"
    RELATIVE_MONTHLY = "relativeMonthly"
    ABSOLUTE_YEARLY = "absoluteYearly"
    RELATIVE_YEARLY = "relativeYearly"


class Weekday(str, Enum):
    """Day of the week."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def number(self) -> int:
        """Weekday number as returned by date.weekday() (monday=0)."""
        return _WEEKDAY_NUMBERS[self]


class WeekIndex(str, Enum):
    """Which matching weekday within a month to pick."""

    FIRST = "first"
    SECOND = "second"
    THIRD = "third"
    FOURTH = "fourth"
    LAST = "last"

    @property
    def ordinal(self) -> int:
        """1-based position from the front, or -1 for the last match."""
        return _WEEK_INDEX_ORDINALS[self]


class Frequency(str, Enum):
    """Unit a recurrence rule steps by."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


_WEEKDAY_NUMBERS = {day: number for number, day in enumerate(Weekday)}

_WEEK_INDEX_ORDINALS = {
    WeekIndex.FIRST: 1,
    WeekIndex.SECOND: 2,
    WeekIndex.THIRD: 3,
    WeekIndex.FOURTH: 4,
    WeekIndex.LAST: -1,
}

FREQUENCY_BY_TYPE = {
    RecurrenceType.DAILY: Frequency.DAY,
    RecurrenceType.WEEKLY: Frequency.WEEK,
    RecurrenceType.ABSOLUTE_MONTHLY: Frequency.MONTH,
    RecurrenceType.RELATIVE_MONTHLY: Frequency.MONTH,
    RecurrenceType.ABSOLUTE_YEARLY: Frequency.YEAR,
    RecurrenceType.RELATIVE_YEARLY: Frequency.YEAR,
}


def coerce_token(enum_cls, value):
    """
    Convert a raw token to a member of enum_cls.

    Unknown tokens are returned unchanged so an invalid pattern stays
    inspectable instead of failing at construction.
    """
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return value

