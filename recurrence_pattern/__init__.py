"""
Recurring calendar event patterns and occurrence expansion.

Example:
    >>> from datetime import date
    >>> from recurrence_pattern import RecurrencePattern
    >>> pattern = RecurrencePattern(date(2024, 3, 1), "absoluteMonthly", 1, day_of_month=31)
    >>> pattern.occurrences(2)
    [datetime.date(2024, 3, 31), datetime.date(2024, 4, 30)]
"""

from recurrence_pattern.exceptions import InvalidPatternError, RecurrenceError
from recurrence_pattern.models import (
    ExclusionList,
    RecurrencePattern,
    RecurrenceType,
    Weekday,
    WeekIndex,
    parse_descriptor,
)
from recurrence_pattern.services import RecurrenceRule, derive_rule

__all__ = [
    "InvalidPatternError",
    "RecurrenceError",
    "ExclusionList",
    "RecurrencePattern",
    "RecurrenceType",
    "Weekday",
    "WeekIndex",
    "parse_descriptor",
    "RecurrenceRule",
    "derive_rule",
]
