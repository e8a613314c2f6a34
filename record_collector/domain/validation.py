"""
Acceptance rules applied to every fetched record before it is collected.
"""
from __future__ import annotations

from typing import Optional

from record_collector.domain.errors import ValidationFailure
from record_collector.domain.models import CorruptedRecord, FetchOutcome, Record

MIN_YEAR = 1900
MAX_YEAR = 2100
MIN_SCORE = 0.0
MAX_SCORE = 10.0


def validate_record(outcome: FetchOutcome, item_id: Optional[int] = None) -> Record:
    """
    Return `outcome` if it is an acceptable Record, else raise ValidationFailure.

    `item_id` is the identifier that was fetched; it labels the failure when
    the fetch result does not carry an id of its own.
    """
    if isinstance(outcome, CorruptedRecord):
        raise ValidationFailure(outcome.id, outcome.reason)
    if not isinstance(outcome, Record):
        raise ValidationFailure(
            -1 if item_id is None else item_id,
            f"unexpected fetch result of type {type(outcome).__name__}",
        )

    if outcome.title is None or not outcome.title.strip():
        raise ValidationFailure(outcome.id, "missing title")
    if not MIN_YEAR <= outcome.year <= MAX_YEAR:
        raise ValidationFailure(outcome.id, f"year {outcome.year} out of range")
    if not MIN_SCORE <= outcome.score <= MAX_SCORE:
        raise ValidationFailure(outcome.id, f"score {outcome.score} out of range")
    return outcome


def is_valid(outcome: FetchOutcome) -> bool:
    try:
        validate_record(outcome)
    except ValidationFailure:
        return False
    return True


__all__ = ["MAX_SCORE", "MAX_YEAR", "MIN_SCORE", "MIN_YEAR", "is_valid", "validate_record"]
