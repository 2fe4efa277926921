"""Range union for rangesplit.

================================================================================
DATA FLOW - SCAN RANGES TO OVERALL RANGE
================================================================================

A prepared query produces several ScanRanges, one per logical scan. Before
splits can be cut we need the single key interval that covers all of them.

INPUT (closed intervals, group_key_len = 2, partition set "cube_A"):

    ScanRange(start=01 00, end=01 FF)
    ScanRange(start=00 40, end=00 7F)
    ScanRange(start=03 00, end=03 0F)

STEP 1: Check every range targets the same partition set and grouping key
        length. A plan cannot span two partitioned tables.

STEP 2: Track min(start) and max(end) in one pass.
        start = 00 40, end = 03 0F

STEP 3: Make the end exclusive by incrementing the whole key.
        end = 03 10

        If every byte of the end is FF there is no successor and the overall
        range is unbounded on the right (end = None).

OUTPUT:

    OverallRange(start=00 40, end=03 10, group_key_len=2,
                 partition_set_id="cube_A")

================================================================================
"""

import logging
from typing import Iterable

from rangesplit.analysis.keys import increment_key
from rangesplit.errors import GroupKeyLengthMismatch, IncompatiblePartitionSet
from rangesplit.schema.types import OverallRange, ScanRange, format_key

logger = logging.getLogger(__name__)


def union_scan_ranges(ranges: Iterable[ScanRange]) -> OverallRange:
    """
    Merge scan ranges into one half-open overall range.

    Args:
        ranges: Scan ranges of one plan (at least one)

    Returns:
        OverallRange covering every range; ``end`` is None if unbounded

    Raises:
        IncompatiblePartitionSet: ranges target more than one partition set
        GroupKeyLengthMismatch: ranges disagree on the grouping key length
        ValueError: no ranges given
    """
    first = None
    start = end = b""

    for scan in ranges:
        if first is None:
            first = scan
            start, end = scan.start, scan.end
            continue

        if scan.partition_set_id != first.partition_set_id:
            raise IncompatiblePartitionSet(first.partition_set_id, scan.partition_set_id)
        if scan.group_key_len != first.group_key_len:
            raise GroupKeyLengthMismatch(first.group_key_len, scan.group_key_len)

        if scan.start < start:
            start = scan.start
        if scan.end > end:
            end = scan.end

    if first is None:
        raise ValueError("Cannot build an overall range from zero scan ranges")

    exclusive_end, overflow = increment_key(end, 0, len(end))

    overall = OverallRange(
        start=start,
        end=None if overflow else exclusive_end,
        group_key_len=first.group_key_len,
        partition_set_id=first.partition_set_id,
    )
    logger.debug(
        "Overall range for %s: [%s, %s)",
        overall.partition_set_id,
        format_key(overall.start),
        format_key(overall.end),
    )
    return overall
