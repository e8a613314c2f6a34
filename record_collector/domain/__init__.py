"""
Domain package for the Record Collector.

Exports the record types, the run aggregate, and the validation rules.
Keep this package focused on data definitions and validation concerns.
"""

from record_collector.domain.errors import CollectorError, ValidationFailure
from record_collector.domain.models import (
    CollectionResult,
    CorruptedRecord,
    FetchOutcome,
    Record,
)
from record_collector.domain.validation import is_valid, validate_record

__all__ = [
    "CollectionResult",
    "CollectorError",
    "CorruptedRecord",
    "FetchOutcome",
    "Record",
    "ValidationFailure",
    "is_valid",
    "validate_record",
]
