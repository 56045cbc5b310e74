"""
Validated per-type pattern descriptors.

Each recurrence type gets its own Pydantic model carrying only the fields
it needs, joined into a discriminated union keyed on `type`. Field
constraints on these models are the single source of pattern validity.
"""

from datetime import date, datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from recurrence_pattern.exceptions import InvalidPatternError
from recurrence_pattern.models.types import Weekday, WeekIndex


# =============================================================================
# Shared Fields
# =============================================================================


class _PatternVariant(BaseModel):
    """Fields common to every recurrence type."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    base_date: Union[datetime, date] = Field(
        ...,
        description="Anchor of the series; no occurrence falls before it",
    )
    interval: int = Field(
        ...,
        ge=1,
        description="Number of days, weeks, months or years between occurrence sets",
    )
    first_day_of_week: Weekday = Field(
        default=Weekday.MONDAY,
        description="Start of the week used to align weekly periods",
    )


class _WeekdaysMixin(BaseModel):
    days_of_week: list[Weekday] = Field(
        ...,
        min_length=1,
        description="Days of the week on which the event occurs",
    )


class _RelativeMixin(_WeekdaysMixin):
    index: WeekIndex = Field(
        default=WeekIndex.FIRST,
        description="Which matching weekday in the month to pick",
    )


class _DayOfMonthMixin(BaseModel):
    day_of_month: int = Field(
        ...,
        ge=1,
        le=31,
        description="Day of the month; clamped to the month's last day",
    )


class _MonthMixin(BaseModel):
    month: int = Field(..., ge=1, le=12, description="Month of the year (1-12)")


# =============================================================================
# Variants
# =============================================================================


class DailyPattern(_PatternVariant):
    """Every `interval` days. Example: every 3 days."""

    type: Literal["daily"]


class WeeklyPattern(_PatternVariant, _WeekdaysMixin):
    """On daysOfWeek every `interval` weeks. Example: Monday and Tuesday of every other week."""

    type: Literal["weekly"]


class AbsoluteMonthlyPattern(_PatternVariant, _DayOfMonthMixin):
    """On dayOfMonth every `interval` months. Example: quarterly on the 15th."""

    type: Literal["absoluteMonthly"]


class RelativeMonthlyPattern(_PatternVariant, _RelativeMixin):
    """On the nth matching weekday every `interval` months. Example: second Thursday every 3 months."""

    type: Literal["relativeMonthly"]


class AbsoluteYearlyPattern(_PatternVariant, _DayOfMonthMixin, _MonthMixin):
    """On dayOfMonth of month every `interval` years. Example: March 15th every 3 years."""

    type: Literal["absoluteYearly"]


class RelativeYearlyPattern(_PatternVariant, _RelativeMixin, _MonthMixin):
    """On the nth matching weekday of month every `interval` years. Example: second Thursday of November."""

    type: Literal["relativeYearly"]


PatternDescriptor = Annotated[
    Union[
        DailyPattern,
        WeeklyPattern,
        AbsoluteMonthlyPattern,
        RelativeMonthlyPattern,
        AbsoluteYearlyPattern,
        RelativeYearlyPattern,
    ],
    Field(discriminator="type"),
]

_descriptor_adapter: TypeAdapter = TypeAdapter(PatternDescriptor)


def format_validation_errors(error: ValidationError) -> list[str]:
    """
    Flatten a Pydantic ValidationError into readable messages.

    The first location element of a tagged union error is the tag itself,
    so it is dropped from the field path.
    """
    messages = []
    for detail in error.errors():
        field = ".".join(str(part) for part in detail["loc"][1:]) or "type"
        messages.append(f"{field}: {detail['msg']}")
    return messages


def parse_descriptor(data: Any) -> PatternDescriptor:
    """
    Validate raw pattern data into its per-type variant.

    Args:
        data: Mapping with camelCase or snake_case keys

    Returns:
        One of the six pattern variants

    Raises:
        InvalidPatternError: If the data does not satisfy its type's rules
    """
    try:
        return _descriptor_adapter.validate_python(data)
    except ValidationError as e:
        pattern_type = data.get("type") if isinstance(data, dict) else None
        errors = format_validation_errors(e)
        raise InvalidPatternError(
            f"Invalid {pattern_type or 'recurrence'} pattern: " + "; ".join(errors),
            errors=errors,
            pattern_type=pattern_type,
            original_error=e,
        ) from e
