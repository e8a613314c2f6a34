"""
Worker pools for the Record Collector.

Re-exports the pool interfaces and the concrete pools so downstream code can
import from `record_collector.pools` directly.
"""

from record_collector.pools.abstract import (
    AbstractCollectorPool,
    CollectorPool,
    FetchFn,
    process_item,
)
from record_collector.pools.multiprocessing import ProcessCollector
from record_collector.pools.threaded import ThreadedCollector

__all__ = [
    # Abstracts
    "AbstractCollectorPool",
    "CollectorPool",
    "FetchFn",
    "process_item",
    # Concrete pools
    "ProcessCollector",
    "ThreadedCollector",
]
