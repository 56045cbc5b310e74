"""
Service layer for recurrence expansion.

Provides:
- Rule derivation from a validated pattern
- dateutil rrulesets carrying the exclusions
- Occurrence queries (next, previous, between, first N)
"""

from recurrence_pattern.services.rules import RecurrenceRule, derive_rule

from recurrence_pattern.services.expansion import (
    build_ruleset,
    iter_occurrences,
    next_occurrence,
    previous_occurrence,
    occurrences_between,
    occurrences,
)

__all__ = [
    # Rules
    "RecurrenceRule",
    "derive_rule",
    # Expansion
    "build_ruleset",
    "iter_occurrences",
    "next_occurrence",
    "previous_occurrence",
    "occurrences_between",
    "occurrences",
]
