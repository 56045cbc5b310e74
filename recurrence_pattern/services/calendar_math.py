"""
Date helpers shared by the pattern model and the expansion engine.

Calendar arithmetic itself is left to dateutil.rrule; these helpers only
move values between the caller's date/datetime and rrule's datetimes.
"""

from datetime import date, datetime, time, tzinfo
from typing import Optional, Union

DateLike = Union[date, datetime]


def as_date(value: DateLike) -> date:
    """Calendar date of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def as_datetime(value: DateLike, tz: Optional[tzinfo] = None) -> datetime:
    """
    Datetime of a date or datetime.

    Plain dates become midnight in `tz`, so they compare against an
    aware anchor. Datetimes are returned unchanged.
    """
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time(), tz)


def to_anchor_kind(anchor: DateLike, value: datetime) -> DateLike:
    """Return `value` as a date when the anchor is a plain date, else as-is."""
    if isinstance(anchor, datetime):
        return value
    return value.date()
