"""
Utilities package for the Record Collector.

Exports shared helpers for logging and profiling.
Keep this package lightweight and free of domain-specific logic.
"""

from record_collector.utils.logging import configure_logging, get_logger
from record_collector.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
