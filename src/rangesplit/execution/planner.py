"""
Split planning for one query submission.

================================================================================
PLANNING PIPELINE
================================================================================

    JobConfig ──> QueryPreparer.prepare() ──> [ScanRange, ...]
                                                   │
                                      union_scan_ranges()
                                                   │
                                                   v
    PartitionMetadataSource ──────────────> OverallRange
      .list_partition_boundaries()                 │
      .resolve_host()  ──────────────────> align_splits()
                                                   │
                                                   v
                                           [Split, ...]

Every failure aborts the whole plan, no partial split list is returned:

    - IncompatiblePartitionSet / GroupKeyLengthMismatch /
      InvalidPartitionBoundaries propagate as raised
    - anything raised by the preparer or the metadata source is wrapped in
      PlanningIOFailure with the original exception chained

Nothing is retried here; retries belong to whoever submits the job.
================================================================================
"""

import logging
from typing import Any, Callable, List, TypeVar

from rangesplit.analysis.chunker import align_splits
from rangesplit.analysis.ranges import union_scan_ranges
from rangesplit.errors import PlanningIOFailure, RangeSplitError
from rangesplit.execution.config import JobConfig
from rangesplit.execution.protocols import PartitionMetadataSource, QueryPreparer
from rangesplit.schema.types import Split

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _call_collaborator(what: str, func: Callable[..., T], *args: Any) -> T:
    try:
        return func(*args)
    except RangeSplitError:
        raise
    except Exception as exc:
        raise PlanningIOFailure(f"Failed to {what}: {exc}") from exc


def plan_splits(
    config: JobConfig,
    preparer: QueryPreparer,
    metadata: PartitionMetadataSource,
) -> List[Split]:
    """
    Plan the splits of one aggregate query.

    Args:
        config: Query text and parameters
        preparer: Turns the query into scan ranges
        metadata: Partition boundaries and host lookup

    Returns:
        Splits in ascending key order (empty if the query scans nothing)

    Raises:
        PlanningError: any planning failure, see module docstring
    """
    # Results may be lazy: materialize them inside the wrapper
    scan_ranges = _call_collaborator(
        "prepare query",
        lambda: list(preparer.prepare(config.query_text, dict(config.parameters))),
    )
    if not scan_ranges:
        logger.info("Query prepared to no scan ranges, nothing to plan")
        return []

    overall = union_scan_ranges(scan_ranges)
    partition_set_id = overall.partition_set_id

    boundaries = _call_collaborator(
        f"list partition boundaries of {partition_set_id}",
        lambda: list(metadata.list_partition_boundaries(partition_set_id)),
    )

    def locate_host(key: bytes):
        return _call_collaborator(
            f"resolve host in {partition_set_id}",
            metadata.resolve_host,
            partition_set_id,
            key,
        )

    splits = align_splits(boundaries, overall, locate_host=locate_host)
    logger.info(
        "Planned %d splits from %d scan ranges on %s",
        len(splits),
        len(scan_ranges),
        partition_set_id,
    )
    return splits
