"""
Worker pool interfaces for the Record Collector.

Concrete pools (threaded, multiprocessing) implement `CollectorPool.collect`
and return a `CollectionResult`. They share `process_item`, which turns one
identifier into either an accepted Record or a counted failure.
"""

from __future__ import annotations

import abc
from typing import Callable, Optional, Protocol, runtime_checkable

from record_collector.domain.errors import ValidationFailure
from record_collector.domain.models import CollectionResult, FetchOutcome, Record
from record_collector.domain.validation import validate_record
from record_collector.utils.logging import get_logger

log = get_logger(__name__)

FetchFn = Callable[[int], FetchOutcome]


def check_preconditions(item_count: int, worker_count: int) -> None:
    if item_count < 0:
        raise ValueError(f"item_count must be >= 0, got {item_count}")
    if worker_count < 1:
        raise ValueError(f"worker_count must be >= 1, got {worker_count}")


def process_item(item_id: int, fetch_fn: FetchFn) -> Optional[Record]:
    """
    Fetch and validate one identifier.

    Returns the accepted Record, or None when the item counts as a failure.
    Nothing raised by `fetch_fn` escapes.
    """
    try:
        return validate_record(fetch_fn(item_id), item_id)
    except ValidationFailure as exc:
        log.warning(
            f"Rejected item {item_id}: {exc.reason}",
            extra={"item_id": item_id, "reason": exc.reason},
        )
    except Exception:  # noqa: BLE001 - one bad item must not halt the run
        log.exception(f"Error processing item {item_id}", extra={"item_id": item_id})
    return None


@runtime_checkable
class CollectorPool(Protocol):
    """
    Common interface all worker pools implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of the approach.
    """

    name: str
    description: str

    def collect(self, item_count: int, worker_count: int, fetch_fn: FetchFn) -> CollectionResult:
        """
        Drain identifiers 1..item_count across `worker_count` workers.

        Returns only after every worker has terminated. The returned result
        always satisfies `success_count + error_count == item_count`.
        """
        ...


class AbstractCollectorPool(abc.ABC):
    """
    ABC helper for class-based pools.

    Subclasses set `name` and `description` and implement `collect`.
    """

    name: str
    description: str

    @abc.abstractmethod
    def collect(
        self, item_count: int, worker_count: int, fetch_fn: FetchFn
    ) -> CollectionResult:  # pragma: no cover - interface only
        raise NotImplementedError


__all__ = [
    "AbstractCollectorPool",
    "CollectorPool",
    "FetchFn",
    "check_preconditions",
    "process_item",
]
