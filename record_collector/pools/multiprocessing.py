"""
Process-based worker pool.

Each worker is a separate process, so validation and any CPU work in the fetch
function run truly in parallel. Identifiers are claimed from a Manager-backed
queue; each process keeps a local record list and failure count, and the pool
merges them once every process has returned.

The fetch function is pickled into the workers, so it must be importable at
module level (e.g. a `SyntheticSource` instance or a top-level function).
"""

from __future__ import annotations

import multiprocessing as mp
import queue
import time
from concurrent.futures import ProcessPoolExecutor
from typing import List, Optional, Tuple

from record_collector.domain.models import CollectionResult, Record
from record_collector.pools.abstract import (
    AbstractCollectorPool,
    FetchFn,
    check_preconditions,
    process_item,
)
from record_collector.utils.logging import (
    configure_logging,
    current_logging_options,
    get_logger,
)

log = get_logger(__name__)


def _drain_worker(work_queue, fetch_fn: FetchFn) -> Tuple[List[Record], int]:
    """
    Worker process body: claim identifiers until the queue is empty.
    """
    records: List[Record] = []
    errors = 0
    while True:
        try:
            item_id = work_queue.get_nowait()
        except queue.Empty:
            return records, errors
        record = process_item(item_id, fetch_fn)
        if record is None:
            errors += 1
        else:
            records.append(record)


class ProcessCollector(AbstractCollectorPool):
    """
    Fan identifiers out to exactly `worker_count` worker processes.

    The start method is applied to a local context only; the global
    multiprocessing start method is never changed.
    """

    name: str = "multiprocessing"
    description: str = "ProcessPoolExecutor draining a Manager queue, merged at join."

    def __init__(self, start_method: Optional[str] = "spawn") -> None:
        self.start_method = start_method

    def collect(self, item_count: int, worker_count: int, fetch_fn: FetchFn) -> CollectionResult:
        check_preconditions(item_count, worker_count)

        ctx = mp.get_context(self.start_method)
        log.info(
            f"Starting collection of {item_count} items with {worker_count} processes",
            extra={
                "pool": self.name,
                "items": item_count,
                "workers": worker_count,
                "start_method": self.start_method,
            },
        )

        records: List[Record] = []
        error_count = 0
        start = time.perf_counter()
        with ctx.Manager() as manager:
            work_queue = manager.Queue()
            for item_id in range(1, item_count + 1):
                work_queue.put(item_id)

            with ProcessPoolExecutor(
                max_workers=worker_count,
                mp_context=ctx,
                initializer=configure_logging,
                initargs=current_logging_options(),
            ) as executor:
                futures = [
                    executor.submit(_drain_worker, work_queue, fetch_fn)
                    for _ in range(worker_count)
                ]
                for future in futures:
                    local_records, local_errors = future.result()
                    records.extend(local_records)
                    error_count += local_errors
        duration = time.perf_counter() - start

        log.info(
            f"Collection finished: {len(records)} ok, {error_count} failed",
            extra={
                "pool": self.name,
                "success_count": len(records),
                "error_count": error_count,
                "duration_seconds": duration,
            },
        )
        return CollectionResult(
            records=tuple(records),
            success_count=len(records),
            error_count=error_count,
            item_count=item_count,
            worker_count=worker_count,
            duration_seconds=duration,
            strategy=self.name,
        )


__all__ = ["ProcessCollector"]
