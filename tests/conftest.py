"""
Pytest configuration and fixtures for recurrence pattern tests.

Provides settings isolation and sample patterns for every recurrence type.
"""

from datetime import date
from typing import Generator

import pytest

from recurrence_pattern.config import get_settings
from recurrence_pattern.models import RecurrencePattern


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """
    Reload settings around each test.

    Tests that change RECURRENCE_* environment variables get a fresh
    Settings instance, and later tests do not see their overrides.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def base_date() -> date:
    """A Thursday in a leap year."""
    return date(2024, 3, 21)


@pytest.fixture
def daily_pattern(base_date: date) -> RecurrencePattern:
    return RecurrencePattern(base_date=base_date, type="daily", interval=1)


@pytest.fixture
def weekly_pattern(base_date: date) -> RecurrencePattern:
    """Every other Tuesday, weeks starting Monday."""
    return RecurrencePattern(
        base_date=base_date,
        type="weekly",
        interval=2,
        days_of_week=["tuesday"],
    )


@pytest.fixture
def absolute_monthly_pattern() -> RecurrencePattern:
    """Last day of every month, from March 2024."""
    return RecurrencePattern(
        base_date=date(2024, 3, 1),
        type="absoluteMonthly",
        interval=1,
        day_of_month=31,
    )


@pytest.fixture
def relative_monthly_pattern(base_date: date) -> RecurrencePattern:
    """Third Thursday of every month."""
    return RecurrencePattern(
        base_date=base_date,
        type="relativeMonthly",
        interval=1,
        days_of_week=["thursday"],
        index="third",
    )


@pytest.fixture
def absolute_yearly_pattern(base_date: date) -> RecurrencePattern:
    """Every February 29th, clamped to the 28th in common years."""
    return RecurrencePattern(
        base_date=base_date,
        type="absoluteYearly",
        interval=1,
        day_of_month=29,
        month=2,
    )


@pytest.fixture
def relative_yearly_pattern(base_date: date) -> RecurrencePattern:
    """Fourth Thursday of November every year."""
    return RecurrencePattern(
        base_date=base_date,
        type="relativeYearly",
        interval=1,
        days_of_week=["thursday"],
        index="fourth",
        month=11,
    )
