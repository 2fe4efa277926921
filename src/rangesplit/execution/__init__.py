"""
Split planning and execution for rangesplit.
"""

from rangesplit.execution.callback import (
    SplitOutcome,
    stream_splits_to_callback,
)
from rangesplit.execution.config import JobConfig
from rangesplit.execution.consumer import SplitConsumer, open_split
from rangesplit.execution.planner import plan_splits
from rangesplit.execution.protocols import (
    Executor,
    PartitionMetadataSource,
    QueryPreparer,
)

__all__ = [
    "JobConfig",
    "QueryPreparer",
    "PartitionMetadataSource",
    "Executor",
    "plan_splits",
    "SplitConsumer",
    "open_split",
    # callback.py exports
    "SplitOutcome",
    "stream_splits_to_callback",
]
