"""
Recurrence rule derivation.

Translates a validated pattern into a canonical RecurrenceRule and from
there into a dateutil rrule: frequency, interval, week start and the
BY* selectors applied inside each period.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

from dateutil.rrule import DAILY, MONTHLY, WEEKLY, YEARLY, rrule

from recurrence_pattern.models.types import FREQUENCY_BY_TYPE, Frequency, RecurrenceType, Weekday
from recurrence_pattern.models.variants import (
    AbsoluteMonthlyPattern,
    AbsoluteYearlyPattern,
    RelativeMonthlyPattern,
    RelativeYearlyPattern,
    WeeklyPattern,
)
from recurrence_pattern.services.calendar_math import DateLike, as_datetime

if TYPE_CHECKING:
    from recurrence_pattern.models.pattern import RecurrencePattern

logger = logging.getLogger(__name__)

RRULE_FREQUENCIES = {
    Frequency.DAY: DAILY,
    Frequency.WEEK: WEEKLY,
    Frequency.MONTH: MONTHLY,
    Frequency.YEAR: YEARLY,
}

# Days of month that exist in every month
_ALWAYS_PRESENT_DAYS = 28


@dataclass(frozen=True)
class RecurrenceRule:
    """
    Canonical form of a recurrence pattern.

    Attributes:
        frequency: Unit each period spans (day, week, month, year)
        interval: Number of units between periods
        week_start: Day weekly periods begin on
        dtstart: Anchor of the series; keeps its time of day
        by_weekday: Weekdays selected inside a period
        by_set_pos: Ordinal of the weekday match to keep (1-4, or -1 for last)
        by_month: Month selected inside a yearly period
        by_month_day: Requested day of month, clamped to each month's length
    """

    frequency: Frequency
    interval: int
    week_start: Weekday
    dtstart: DateLike
    by_weekday: tuple[Weekday, ...] = ()
    by_set_pos: Optional[int] = None
    by_month: Optional[int] = None
    by_month_day: Optional[int] = None

    @property
    def start(self) -> datetime:
        """Anchor as a datetime; plain dates start at midnight. rrule drops microseconds."""
        return as_datetime(self.dtstart).replace(microsecond=0)

    def rrule_options(self) -> dict[str, Any]:
        """
        Keyword arguments for dateutil.rrule.rrule.

        Days of month past 28 become the candidate set 28..day with the
        last existing one kept, so day 31 lands on April 30th and
        February 28th/29th.
        """
        options: dict[str, Any] = {
            "freq": RRULE_FREQUENCIES[self.frequency],
            "interval": self.interval,
            "wkst": self.week_start.number,
            "dtstart": self.start,
        }

        if self.by_weekday:
            options["byweekday"] = [day.number for day in self.by_weekday]

        if self.by_month_day is not None:
            if self.by_month_day > _ALWAYS_PRESENT_DAYS:
                options["bymonthday"] = list(range(_ALWAYS_PRESENT_DAYS, self.by_month_day + 1))
            else:
                options["bymonthday"] = self.by_month_day
            options["bysetpos"] = -1

        if self.by_set_pos is not None:
            options["bysetpos"] = self.by_set_pos

        if self.by_month is not None:
            options["bymonth"] = self.by_month

        return options

    def to_rrule(self, **overrides: Any) -> rrule:
        """Build the dateutil rrule, with optional option overrides (e.g. count)."""
        return rrule(**{**self.rrule_options(), **overrides})


def derive_rule(pattern: "RecurrencePattern") -> RecurrenceRule:
    """
    Derive the canonical rule for a pattern.

    Args:
        pattern: Pattern to translate; read, never modified

    Returns:
        RecurrenceRule ready for expansion

    Raises:
        InvalidPatternError: If the pattern is not valid for its type
    """
    variant = pattern.to_variant()
    recurrence_type = RecurrenceType(variant.type)

    by_weekday: tuple[Weekday, ...] = ()
    by_set_pos = None
    by_month = None
    by_month_day = None

    if isinstance(variant, (WeeklyPattern, RelativeMonthlyPattern, RelativeYearlyPattern)):
        # Keep the caller's order but drop repeats
        by_weekday = tuple(dict.fromkeys(variant.days_of_week))

    if isinstance(variant, (AbsoluteMonthlyPattern, AbsoluteYearlyPattern)):
        by_month_day = variant.day_of_month

    if isinstance(variant, (RelativeMonthlyPattern, RelativeYearlyPattern)):
        by_set_pos = variant.index.ordinal

    if isinstance(variant, (AbsoluteYearlyPattern, RelativeYearlyPattern)):
        by_month = variant.month

    rule = RecurrenceRule(
        frequency=FREQUENCY_BY_TYPE[recurrence_type],
        interval=variant.interval,
        week_start=variant.first_day_of_week,
        dtstart=variant.base_date,
        by_weekday=by_weekday,
        by_set_pos=by_set_pos,
        by_month=by_month,
        by_month_day=by_month_day,
    )
    logger.debug(
        f"Derived {recurrence_type.value} rule: every {rule.interval} {rule.frequency.value}(s)"
    )
    return rule
