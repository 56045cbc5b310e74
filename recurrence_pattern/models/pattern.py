"""
RecurrencePattern and ExclusionList models.

Entities:
- RecurrencePattern: recurrence descriptor plus its exclusion dates
- ExclusionList: append-only collection of dates suppressed from results

A pattern is never rejected at construction. Invalid field combinations
are reported by is_valid()/validation_errors() and enforced when an
expansion or query is attempted.
"""

import re
import threading
from datetime import date
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, Optional, Union

from dateutil.parser import parse as parse_datetime
from pydantic import BaseModel

from recurrence_pattern.config import get_settings
from recurrence_pattern.exceptions import InvalidPatternError
from recurrence_pattern.models.types import RecurrenceType, Weekday, WeekIndex, coerce_token
from recurrence_pattern.models.variants import PatternDescriptor, parse_descriptor
from recurrence_pattern.services import expansion
from recurrence_pattern.services.calendar_math import DateLike, as_date
from recurrence_pattern.services.rules import RecurrenceRule, derive_rule

_DATE_ONLY = re.compile(r"\d{4}-\d{2}-\d{2}")

# Descriptor keys as callers send them, mapped to constructor arguments
_DESCRIPTOR_KEYS = {
    "baseDate": "base_date",
    "type": "type",
    "interval": "interval",
    "daysOfWeek": "days_of_week",
    "firstDayOfWeek": "first_day_of_week",
    "dayOfMonth": "day_of_month",
    "index": "index",
    "month": "month",
    "excludeDates": "exclude_dates",
}


def parse_date_value(value: Any) -> Any:
    """
    Parse a persisted date value.

    Strings holding only a date become `date`, strings with a time become
    `datetime`. Unparseable strings and non-strings are returned unchanged.
    """
    if not isinstance(value, str):
        return value
    try:
        parsed = parse_datetime(value)
    except (ValueError, OverflowError):
        return value
    if _DATE_ONLY.fullmatch(value.strip()):
        return parsed.date()
    return parsed


def _token_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class ExclusionList:
    """
    Append-only list of dates removed from query results.

    Writes are serialized by a lock. Queries work on snapshot(), so a
    concurrent append never changes an expansion already in progress.
    Matching is by calendar date; the time of day is ignored.
    """

    def __init__(self, dates: Optional[Iterable[DateLike]] = None):
        self._dates: list[DateLike] = []
        self._lock = threading.Lock()
        if dates:
            self.extend(dates)

    def append(self, value: DateLike) -> None:
        """
        Add one excluded date.

        Strings are parsed the same way as descriptor dates.

        Raises:
            TypeError: If the value is not a date, datetime or date string
        """
        value = parse_date_value(value)
        if not isinstance(value, date):
            raise TypeError(f"Exclusion must be a date or datetime, got {value!r}")
        with self._lock:
            self._dates.append(value)

    def extend(self, values: Iterable[DateLike]) -> None:
        for value in values:
            self.append(value)

    def snapshot(self) -> frozenset[date]:
        """Calendar dates excluded at this moment."""
        with self._lock:
            return frozenset(as_date(value) for value in self._dates)

    def __iter__(self) -> Iterator[DateLike]:
        with self._lock:
            return iter(list(self._dates))

    def __len__(self) -> int:
        with self._lock:
            return len(self._dates)

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, date):
            return False
        return as_date(value) in self.snapshot()

    def __repr__(self) -> str:
        return f"ExclusionList({self._dates!r})"


class RecurrencePattern:
    """
    A recurring calendar event.

    Fields are read-only after construction; only the exclusion list grows.
    Optional fields are normalized: daysOfWeek defaults to empty,
    firstDayOfWeek to monday, index to first, dayOfMonth and month to None.

    Example:
        >>> pattern = RecurrencePattern(
        ...     base_date=date(2024, 3, 21),
        ...     type="relativeMonthly",
        ...     interval=1,
        ...     days_of_week=["thursday"],
        ...     index="third",
        ... )
        >>> pattern.next_occurrence(date(2024, 3, 21))
        datetime.date(2024, 4, 18)
    """

    def __init__(
        self,
        base_date: DateLike,
        type: Union[RecurrenceType, str],
        interval: int,
        days_of_week: Optional[Iterable[Union[Weekday, str]]] = None,
        first_day_of_week: Optional[Union[Weekday, str]] = None,
        day_of_month: Optional[int] = None,
        index: Optional[Union[WeekIndex, str]] = None,
        month: Optional[int] = None,
        exclude_dates: Optional[Iterable[DateLike]] = None,
    ):
        self._base_date = base_date
        self._type = coerce_token(RecurrenceType, type)
        self._interval = interval
        self._days_of_week = tuple(coerce_token(Weekday, day) for day in (days_of_week or ()))
        self._first_day_of_week = coerce_token(
            Weekday, first_day_of_week or get_settings().default_first_day_of_week
        )
        self._day_of_month = day_of_month
        self._index = coerce_token(WeekIndex, index or WeekIndex.FIRST)
        self._month = month
        self._exclusions = ExclusionList(exclude_dates)

    @classmethod
    def from_descriptor(cls, data: Union[Mapping[str, Any], BaseModel]) -> "RecurrencePattern":
        """
        Build a pattern from a descriptor mapping or a validated variant.

        Accepts camelCase (baseDate, daysOfWeek, ...) or snake_case keys.
        String dates are parsed; unknown keys are ignored.
        """
        if isinstance(data, BaseModel):
            data = data.model_dump()

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _DESCRIPTOR_KEYS.get(key, key)
            if name in _DESCRIPTOR_KEYS.values():
                kwargs[name] = value

        kwargs["base_date"] = parse_date_value(kwargs.get("base_date"))
        if kwargs.get("exclude_dates"):
            kwargs["exclude_dates"] = [parse_date_value(d) for d in kwargs["exclude_dates"]]
        kwargs.setdefault("type", None)
        kwargs.setdefault("interval", None)
        return cls(**kwargs)

    # =========================================================================
    # Fields
    # =========================================================================

    @property
    def base_date(self) -> DateLike:
        return self._base_date

    @property
    def type(self) -> Union[RecurrenceType, str]:
        return self._type

    @property
    def interval(self) -> int:
        return self._interval

    @property
    def days_of_week(self) -> tuple:
        return self._days_of_week

    @property
    def first_day_of_week(self) -> Union[Weekday, str]:
        return self._first_day_of_week

    @property
    def day_of_month(self) -> Optional[int]:
        return self._day_of_month

    @property
    def index(self) -> Union[WeekIndex, str]:
        return self._index

    @property
    def month(self) -> Optional[int]:
        return self._month

    @property
    def exclusions(self) -> ExclusionList:
        return self._exclusions

    @property
    def exclude_dates(self) -> list[DateLike]:
        """Excluded dates in the order they were added."""
        return list(self._exclusions)

    # =========================================================================
    # Validity
    # =========================================================================

    def to_variant(self) -> PatternDescriptor:
        """
        Validate current field values into the variant for this pattern's type.

        Raises:
            InvalidPatternError: If required fields are missing or out of range
        """
        return parse_descriptor({
            "type": _token_value(self._type),
            "base_date": self._base_date,
            "interval": self._interval,
            "days_of_week": [_token_value(day) for day in self._days_of_week],
            "first_day_of_week": _token_value(self._first_day_of_week),
            "day_of_month": self._day_of_month,
            "index": _token_value(self._index),
            "month": self._month,
        })

    def validation_errors(self) -> list[str]:
        """Reasons this pattern is invalid; empty when it is valid."""
        try:
            self.to_variant()
        except InvalidPatternError as e:
            return e.errors
        return []

    def is_valid(self) -> bool:
        return not self.validation_errors()

    # =========================================================================
    # Exclusions
    # =========================================================================

    def add_exclude_date(self, value: DateLike) -> None:
        self._exclusions.append(value)

    def add_exclude_dates(self, values: Iterable[DateLike]) -> None:
        for value in values:
            self.add_exclude_date(value)

    # =========================================================================
    # Queries
    # =========================================================================

    def derive_rule(self) -> RecurrenceRule:
        """Canonical rule for this pattern. Raises InvalidPatternError."""
        return derive_rule(self)

    def next_occurrence(self, after: Optional[DateLike] = None) -> Optional[DateLike]:
        return expansion.next_occurrence(self, after)

    def previous_occurrence(self, before: Optional[DateLike] = None) -> Optional[DateLike]:
        return expansion.previous_occurrence(self, before)

    def occurrences_between(
        self,
        after: DateLike,
        before: DateLike,
        limit: Optional[int] = None,
    ) -> list[DateLike]:
        return expansion.occurrences_between(self, after, before, limit)

    def occurrences(self, limit: int) -> list[DateLike]:
        return expansion.occurrences(self, limit)

    def iter_occurrences(self, after: Optional[DateLike] = None) -> Iterator[DateLike]:
        return expansion.iter_occurrences(self, after)

    def __repr__(self) -> str:
        return (
            f"RecurrencePattern(type={_token_value(self._type)!r}, "
            f"base_date={self._base_date!r}, interval={self._interval!r})"
        )
