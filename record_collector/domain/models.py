"""
Domain models for the Record Collector.

A fetch function hands back either a `Record` or a `CorruptedRecord`. The two
are distinct types so a corrupted payload never has to masquerade as a record
with out-of-range fields. `CollectionResult` is the frozen aggregate produced
once per collection run.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from pydantic import BaseModel, Field


class Record(BaseModel):
    """
    A single collected record.
    """

    id: int = Field(..., description="Work item identifier the record was fetched for.")
    title: Optional[str] = Field(None, description="Display title; may be absent.")
    year: int = Field(..., description="Release year.")
    score: float = Field(..., description="Rating on a 0-10 scale.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    def __str__(self) -> str:
        return f"Record(id={self.id}, title={self.title!r}, year={self.year}, score={self.score:.1f})"


class CorruptedRecord(BaseModel):
    """
    Marker returned by a data source when the payload for `id` was unusable.
    """

    id: int = Field(..., description="Work item identifier the payload was fetched for.")
    reason: str = Field("corrupted payload", description="Why the payload was rejected.")

    model_config = {"frozen": True}


FetchOutcome = Union[Record, CorruptedRecord]


@dataclass(frozen=True)
class CollectionResult:
    """
    Aggregate outcome of one collection run.

    `records` keeps arrival order across workers, not identifier order.
    """

    records: Tuple[Record, ...]
    success_count: int
    error_count: int
    item_count: int
    worker_count: int
    duration_seconds: float
    strategy: str = field(default="threaded")

    @property
    def error_rate(self) -> float:
        """Percentage of attempted items that failed."""
        if self.item_count == 0:
            return 0.0
        return self.error_count * 100.0 / self.item_count

    @property
    def throughput_items_per_sec(self) -> float:
        if self.duration_seconds <= 0:
            return 0.0
        return self.item_count / self.duration_seconds

    def sample(self, n: int = 5) -> Tuple[Record, ...]:
        return self.records[: max(n, 0)]


__all__ = ["CollectionResult", "CorruptedRecord", "FetchOutcome", "Record"]
