"""
rangesplit: partition-aligned split planning for aggregate queries over
range-partitioned key-value stores.
"""

from rangesplit.analysis import align_splits, increment_key, union_scan_ranges
from rangesplit.errors import (
    ExecutionError,
    GroupKeyLengthMismatch,
    IncompatiblePartitionSet,
    InvalidPartitionBoundaries,
    MissingPartitionIdentifier,
    PlanningError,
    PlanningIOFailure,
    RangeSplitError,
)
from rangesplit.execution import (
    JobConfig,
    SplitConsumer,
    open_split,
    plan_splits,
    stream_splits_to_callback,
)
from rangesplit.schema import OverallRange, ScanRange, Split

__version__ = "0.1.0"

__all__ = [
    "ScanRange",
    "OverallRange",
    "Split",
    "increment_key",
    "union_scan_ranges",
    "align_splits",
    "JobConfig",
    "plan_splits",
    "SplitConsumer",
    "open_split",
    "stream_splits_to_callback",
    # errors
    "RangeSplitError",
    "PlanningError",
    "IncompatiblePartitionSet",
    "GroupKeyLengthMismatch",
    "InvalidPartitionBoundaries",
    "PlanningIOFailure",
    "ExecutionError",
    "MissingPartitionIdentifier",
]
