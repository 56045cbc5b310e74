"""
Custom exceptions for recurrence pattern operations.

Validity is a property of caller-supplied data, so none of these are retryable.
"""

from typing import Optional


class RecurrenceError(Exception):
    """Base exception for recurrence pattern operations."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class InvalidPatternError(RecurrenceError):
    """
    Pattern fields do not satisfy the rules for its recurrence type.

    Causes:
    - Missing daysOfWeek for weekly, relativeMonthly or relativeYearly
    - Missing dayOfMonth for absoluteMonthly or absoluteYearly
    - Missing month for absoluteYearly or relativeYearly
    - Out-of-range interval, dayOfMonth or month
    - Unknown type, weekday or index token
    """

    def __init__(
        self,
        message: str,
        errors: Optional[list[str]] = None,
        pattern_type: Optional[str] = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error)
        self.errors = errors or []
        self.pattern_type = pattern_type
