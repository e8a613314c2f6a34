"""
Record Collector - concurrent collection of synthetic records.

A fixed-size worker pool drains a shared queue of work identifiers, fetches a
record for each from a pluggable data source, validates it, and reports the
aggregate outcome:

- Thread pool (default) with lock-protected shared counters
- Process pool with per-worker tallies merged at the join barrier
- Seeded synthetic data source with a configurable corruption rate
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from record_collector.config import Settings, get_settings
from record_collector.domain import (
    CollectionResult,
    CorruptedRecord,
    Record,
    ValidationFailure,
    is_valid,
    validate_record,
)
from record_collector.orchestrator import RunConfig, available_pools, get_pool, run_collection
from record_collector.pools import CollectorPool, ProcessCollector, ThreadedCollector
from record_collector.sources import SyntheticSource
from record_collector.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "CollectionResult",
    "CorruptedRecord",
    "Record",
    "ValidationFailure",
    "is_valid",
    "validate_record",
    # Pools and sources
    "CollectorPool",
    "ProcessCollector",
    "ThreadedCollector",
    "SyntheticSource",
    # Orchestration
    "RunConfig",
    "available_pools",
    "get_pool",
    "run_collection",
    # Logging
    "configure_logging",
    "get_logger",
]
