"""
Partition-aligned split planning for rangesplit.

This module cuts the overall scan range of a query into splits that follow the
physical partitions of the store. Each split becomes a work item that one
worker executes independently, ideally on the host that serves its partition.

WHY ALIGN TO PARTITIONS AND GROUPS?
-----------------------------------

1. Locality - A split inside one partition is served by one host, so the
   worker can be scheduled next to its data
2. Correctness - Aggregates are computed per grouping key. A group cut in two
   would be aggregated twice and produce two partial rows
3. No waste - Splits outside the query's range, or containing no group at
   all, are never scheduled

ALIGNMENT ALGORITHM
-------------------

INPUT:
  boundaries    = ["", 05 90, 05 A0, 0A 10]   (4 partitions)
  group_key_len = 1
  overall       = [02, 09)

Step 1 - candidate ends are the next boundary, the last is unbounded:

    ["", 05 90)  [05 90, 05 A0)  [05 A0, 0A 10)  [0A 10, +inf)

Step 2 - round each end onto a grouping-key boundary (see keys.py):

    05 90 -> 06 00      05 A0 -> 06 00      0A 10 -> 0A 00

Step 3 - collapse degenerate candidates. [06 00, 06 00) holds no group, so
         its boundary is dropped and the partition merges into the next one:

    ["", 06 00)  [06 00, 0A 00)  [0A 00, +inf)

Step 4 - clip to the overall range, dropping what lies outside:

    [02, 06 00)  [06 00, 09)     (third candidate starts after 09: dropped)

Step 5 - ask the locality lookup for each split's host.

OUTPUT: splits in ascending key order, pairwise disjoint. Inner bounds are
grouping-key aligned; only the first start and last end follow the exact
overall range.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from rangesplit.analysis.inspector import (
    covers_key_space_start,
    inspect_partition_boundaries,
)
from rangesplit.analysis.keys import round_to_group_key
from rangesplit.errors import InvalidPartitionBoundaries
from rangesplit.schema.types import OverallRange, Split, format_key

logger = logging.getLogger(__name__)

LocateHost = Callable[[bytes], Optional[str]]


def align_splits(
    boundaries: Sequence[bytes],
    overall: OverallRange,
    group_key_len: Optional[int] = None,
    locate_host: Optional[LocateHost] = None,
) -> List[Split]:
    """
    Cut the overall range into partition- and group-aligned splits.

    Args:
        boundaries: Start key of every partition, strictly ascending
        overall: Half-open range the query needs to scan
        group_key_len: Grouping-key length (defaults to overall.group_key_len)
        locate_host: Maps a split start key to a host; None if unknown

    Returns:
        Splits in ascending key order

    Raises:
        InvalidPartitionBoundaries: boundaries are empty or not ascending
    """
    check = inspect_partition_boundaries(boundaries)
    if not check.is_valid:
        raise InvalidPartitionBoundaries(
            f"Cannot align splits for {overall.partition_set_id}: {check.reason}"
        )
    if not covers_key_space_start(boundaries):
        logger.warning(
            "First partition of %s starts at %s, keys before it are not covered",
            overall.partition_set_id,
            format_key(boundaries[0]),
        )

    if group_key_len is None:
        group_key_len = overall.group_key_len

    splits: List[Split] = []
    start = boundaries[0]
    ends: List[Optional[bytes]] = list(boundaries[1:])
    ends.append(None)

    for boundary in ends:
        end = None if boundary is None else round_to_group_key(boundary, group_key_len)

        if end is not None and end <= start:
            # No group fits: the next partition takes over this one's start
            logger.debug(
                "Collapsing degenerate split at %s (boundary %s)",
                format_key(start),
                format_key(boundary),
            )
            continue

        clipped = _clip_to_range(start, end, overall)
        if clipped is not None:
            split_start, split_end = clipped
            host = locate_host(split_start) if locate_host is not None else None
            splits.append(
                Split(
                    host=host,
                    partition_set_id=overall.partition_set_id,
                    start=split_start,
                    end=split_end,
                )
            )

        if end is None:
            # Unbounded end absorbs every remaining partition
            break
        if overall.end is not None and end >= overall.end:
            break
        start = end

    logger.info(
        "Planned %d splits over %d partitions of %s for [%s, %s)",
        len(splits),
        len(boundaries),
        overall.partition_set_id,
        format_key(overall.start),
        format_key(overall.end),
    )
    return splits


def _clip_to_range(
    start: bytes, end: Optional[bytes], overall: OverallRange
) -> Optional[Tuple[bytes, Optional[bytes]]]:
    """Intersect ``[start, end)`` with the overall range, None if disjoint."""
    if end is not None and end <= overall.start:
        return None
    if overall.end is not None and start >= overall.end:
        return None

    if start < overall.start:
        start = overall.start
    if overall.end is not None and (end is None or end > overall.end):
        end = overall.end
    return start, end
