"""
Exception types for the Record Collector.
"""
from __future__ import annotations


class CollectorError(Exception):
    """Base class for collector errors."""


class ValidationFailure(CollectorError):
    """
    Raised when a fetched record fails validation.

    Workers catch this and count it as a failure; it never escapes `collect`.
    """

    def __init__(self, item_id: int, reason: str) -> None:
        super().__init__(f"item {item_id}: {reason}")
        self.item_id = item_id
        self.reason = reason

    def __reduce__(self):
        return (type(self), (self.item_id, self.reason))


__all__ = ["CollectorError", "ValidationFailure"]
