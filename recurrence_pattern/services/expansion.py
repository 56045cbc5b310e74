"""
Recurrence expansion service.

Expands a RecurrencePattern into concrete occurrences on demand:
- Builds a dateutil rruleset from the derived rule
- Adds each excluded date as an exdate, so exclusions apply before any limit
- Answers next-after, previous-before, all-between and first-N queries

Bounds are exclusive: an occurrence equal to `after` or `before` is never
returned. A plain `date` bound means midnight in the anchor's timezone.
"""

import logging
from datetime import date, datetime
from itertools import islice, takewhile
from typing import TYPE_CHECKING, FrozenSet, Iterator, Optional

from dateutil.rrule import rruleset

from recurrence_pattern.config import get_settings
from recurrence_pattern.services.calendar_math import DateLike, as_datetime, to_anchor_kind
from recurrence_pattern.services.rules import RecurrenceRule, derive_rule

if TYPE_CHECKING:
    from recurrence_pattern.models.pattern import RecurrencePattern

logger = logging.getLogger(__name__)


# =============================================================================
# Rule Sets
# =============================================================================


def build_ruleset(rule: RecurrenceRule, excluded: FrozenSet[date] = frozenset()) -> rruleset:
    """
    Build the rruleset for a rule and a snapshot of excluded dates.

    Exdates carry the anchor's time of day and timezone so they compare
    equal to the occurrences they remove.
    """
    ruleset = rruleset()
    ruleset.rrule(rule.to_rrule())

    start_time = rule.start.timetz()
    for day in sorted(excluded):
        ruleset.exdate(datetime.combine(day, start_time))

    return ruleset


def _prepare(pattern: "RecurrencePattern") -> tuple[RecurrenceRule, rruleset]:
    rule = derive_rule(pattern)
    return rule, build_ruleset(rule, pattern.exclusions.snapshot())


def _bound(rule: RecurrenceRule, value: DateLike) -> datetime:
    return as_datetime(value, rule.start.tzinfo)


def _now_for(rule: RecurrenceRule) -> datetime:
    return datetime.now(rule.start.tzinfo)


def _check_limit(limit: Optional[int]) -> None:
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be zero or positive, got {limit}")


# =============================================================================
# Queries
# =============================================================================


def iter_occurrences(
    pattern: "RecurrencePattern",
    after: Optional[DateLike] = None,
) -> Iterator[DateLike]:
    """
    Lazily iterate occurrences in ascending order.

    The pattern is validated and the exclusion list snapshotted when this
    is called, not when iteration starts. Iteration ends at the last
    occurrence the calendar can represent.

    Args:
        pattern: Pattern to expand
        after: Only yield occurrences strictly after this (default: from the anchor)

    Raises:
        InvalidPatternError: If the pattern is invalid
    """
    rule, ruleset = _prepare(pattern)
    if after is None:
        source = iter(ruleset)
    else:
        source = ruleset.xafter(_bound(rule, after), inc=False)
    return (to_anchor_kind(rule.dtstart, occurrence) for occurrence in source)


def next_occurrence(
    pattern: "RecurrencePattern",
    after: Optional[DateLike] = None,
) -> Optional[DateLike]:
    """
    Get the first occurrence strictly after a date.

    Args:
        pattern: Pattern to expand
        after: Find occurrence after this (default: now)

    Returns:
        Next occurrence or None if the series has ended
    """
    rule, ruleset = _prepare(pattern)
    bound = _now_for(rule) if after is None else _bound(rule, after)

    try:
        occurrence = ruleset.after(bound, inc=False)
    except (ValueError, OverflowError) as e:
        logger.warning(f"Error finding next occurrence after {bound}: {e}")
        return None

    if occurrence is None:
        return None
    return to_anchor_kind(rule.dtstart, occurrence)


def previous_occurrence(
    pattern: "RecurrencePattern",
    before: Optional[DateLike] = None,
) -> Optional[DateLike]:
    """
    Get the last occurrence strictly before a date.

    Args:
        pattern: Pattern to expand
        before: Find occurrence before this (default: now)

    Returns:
        Previous occurrence or None if there is none
    """
    rule, ruleset = _prepare(pattern)
    bound = _now_for(rule) if before is None else _bound(rule, before)

    try:
        occurrence = ruleset.before(bound, inc=False)
    except (ValueError, OverflowError) as e:
        logger.warning(f"Error finding previous occurrence before {bound}: {e}")
        return None

    if occurrence is None:
        return None
    return to_anchor_kind(rule.dtstart, occurrence)


def occurrences_between(
    pattern: "RecurrencePattern",
    after: DateLike,
    before: DateLike,
    limit: Optional[int] = None,
) -> list[DateLike]:
    """
    Get occurrences inside an open interval.

    At most Settings.max_occurrences are returned even without a limit.

    Args:
        pattern: Pattern to expand
        after: Interval start (exclusive)
        before: Interval end (exclusive)
        limit: Return at most this many occurrences

    Returns:
        Occurrences with after < occurrence < before, ascending
    """
    _check_limit(limit)
    rule, ruleset = _prepare(pattern)

    start = _bound(rule, after)
    end = _bound(rule, before)
    if start >= end:
        return []

    max_occurrences = get_settings().max_occurrences
    cap = max_occurrences if limit is None else min(limit, max_occurrences)

    in_window = takewhile(
        lambda occurrence: occurrence < end,
        ruleset.xafter(start, inc=False),
    )
    try:
        found = list(islice(in_window, cap))
    except (ValueError, OverflowError) as e:
        logger.warning(f"Error expanding occurrences between {start} and {end}: {e}")
        return []

    if len(found) == max_occurrences and (limit is None or limit > max_occurrences):
        logger.warning(f"Reached max_occurrences limit ({max_occurrences}) between {start} and {end}")

    return [to_anchor_kind(rule.dtstart, occurrence) for occurrence in found]


def occurrences(pattern: "RecurrencePattern", limit: int) -> list[DateLike]:
    """
    Get the first occurrences of the series, starting at its anchor.

    Args:
        pattern: Pattern to expand
        limit: Number of occurrences to return

    Returns:
        Up to `limit` occurrences, ascending
    """
    if limit is None:
        raise ValueError("limit is required")
    _check_limit(limit)
    rule, ruleset = _prepare(pattern)

    try:
        found = list(islice(ruleset, limit))
    except (ValueError, OverflowError) as e:
        logger.warning(f"Error expanding the first {limit} occurrences: {e}")
        return []

    return [to_anchor_kind(rule.dtstart, occurrence) for occurrence in found]
