"""
Key range analysis and split planning.

This module provides the byte-level range arithmetic used to turn a query's
scan ranges into partition-aligned splits for parallel execution.
"""

from rangesplit.analysis.chunker import (
    LocateHost,
    align_splits,
)
from rangesplit.analysis.inspector import (
    ValidationResult,
    covers_key_space_start,
    inspect_partition_boundaries,
)
from rangesplit.analysis.keys import (
    increment_key,
    round_to_group_key,
)
from rangesplit.analysis.ranges import (
    union_scan_ranges,
)

__all__ = [
    # keys
    "increment_key",
    "round_to_group_key",
    # ranges
    "union_scan_ranges",
    # inspector
    "ValidationResult",
    "inspect_partition_boundaries",
    "covers_key_space_start",
    # chunker
    "LocateHost",
    "align_splits",
]
