"""
Recurrence pattern models.

Import order matters: types and variants are loaded before the pattern,
which pulls in the expansion services.
"""

# Enumerated tokens
from recurrence_pattern.models.types import (
    Frequency,
    RecurrenceType,
    Weekday,
    WeekIndex,
)

# Per-type validated descriptors
from recurrence_pattern.models.variants import (
    AbsoluteMonthlyPattern,
    AbsoluteYearlyPattern,
    DailyPattern,
    PatternDescriptor,
    RelativeMonthlyPattern,
    RelativeYearlyPattern,
    WeeklyPattern,
    parse_descriptor,
)

from recurrence_pattern.models.pattern import ExclusionList, RecurrencePattern

__all__ = [
    # Tokens
    "Frequency",
    "RecurrenceType",
    "Weekday",
    "WeekIndex",
    # Variants
    "DailyPattern",
    "WeeklyPattern",
    "AbsoluteMonthlyPattern",
    "RelativeMonthlyPattern",
    "AbsoluteYearlyPattern",
    "RelativeYearlyPattern",
    "PatternDescriptor",
    "parse_descriptor",
    # Pattern
    "ExclusionList",
    "RecurrencePattern",
]
