"""
Thread-based worker pool.

A fixed number of threads drain a shared `queue.SimpleQueue` of identifiers.
Counters and the record list live in a single lock-protected tally so no
increment or append is ever lost.
"""

from __future__ import annotations

import queue
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List

from record_collector.domain.models import CollectionResult, Record
from record_collector.pools.abstract import (
    AbstractCollectorPool,
    FetchFn,
    check_preconditions,
    process_item,
)
from record_collector.utils.logging import get_logger

log = get_logger(__name__)


class _Tally:
    """Shared success/failure accounting for one run."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.records: List[Record] = []
        self.success_count = 0
        self.error_count = 0

    def success(self, record: Record) -> None:
        with self._lock:
            self.records.append(record)
            self.success_count += 1

    def failure(self) -> None:
        with self._lock:
            self.error_count += 1


class ThreadedCollector(AbstractCollectorPool):
    """
    Fan identifiers out to a ThreadPoolExecutor of exactly `worker_count` threads.

    Threads block only while fetching; the simulated latency releases the GIL,
    so workers overlap the way they would on real network I/O.
    """

    name: str = "threaded"
    description: str = "ThreadPoolExecutor draining a shared SimpleQueue."

    def __init__(self, thread_name_prefix: str = "collector-worker") -> None:
        self.thread_name_prefix = thread_name_prefix

    @staticmethod
    def _drain(work: "queue.SimpleQueue[int]", fetch_fn: FetchFn, tally: _Tally) -> int:
        processed = 0
        while True:
            try:
                item_id = work.get_nowait()
            except queue.Empty:
                return processed
            record = process_item(item_id, fetch_fn)
            if record is None:
                tally.failure()
            else:
                tally.success(record)
            processed += 1

    def collect(self, item_count: int, worker_count: int, fetch_fn: FetchFn) -> CollectionResult:
        check_preconditions(item_count, worker_count)

        work: "queue.SimpleQueue[int]" = queue.SimpleQueue()
        for item_id in range(1, item_count + 1):
            work.put(item_id)
        tally = _Tally()

        log.info(
            f"Starting collection of {item_count} items with {worker_count} threads",
            extra={"pool": self.name, "items": item_count, "workers": worker_count},
        )
        start = time.perf_counter()
        with ThreadPoolExecutor(
            max_workers=worker_count, thread_name_prefix=self.thread_name_prefix
        ) as executor:
            futures = [
                executor.submit(self._drain, work, fetch_fn, tally) for _ in range(worker_count)
            ]
            per_worker = [future.result() for future in futures]
        duration = time.perf_counter() - start

        log.info(
            f"Collection finished: {tally.success_count} ok, {tally.error_count} failed",
            extra={
                "pool": self.name,
                "success_count": tally.success_count,
                "error_count": tally.error_count,
                "per_worker": per_worker,
                "duration_seconds": duration,
            },
        )
        return CollectionResult(
            records=tuple(tally.records),
            success_count=tally.success_count,
            error_count=tally.error_count,
            item_count=item_count,
            worker_count=worker_count,
            duration_seconds=duration,
            strategy=self.name,
        )


__all__ = ["ThreadedCollector"]
