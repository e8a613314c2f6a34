"""
Data sources for the Record Collector.

A data source is any callable `(item_id) -> Record | CorruptedRecord`.
"""

from record_collector.sources.synthetic import SyntheticSource

__all__ = ["SyntheticSource"]
