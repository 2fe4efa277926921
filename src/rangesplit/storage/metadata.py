"""
In-memory partition metadata.

StaticPartitionMetadata answers the PartitionMetadataSource contract from a
fixed layout, e.g. loaded from a job file or built in tests:

    metadata = StaticPartitionMetadata({
        "cube_daily": [(b"", "rs1"), (b"\\x05", "rs2"), (b"\\x0a", None)],
    })
    metadata.list_partition_boundaries("cube_daily")  # [b"", b"\\x05", b"\\x0a"]
    metadata.resolve_host("cube_daily", b"\\x07")     # "rs2"
"""

from bisect import bisect_right
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

Partition = Tuple[bytes, Optional[str]]


class StaticPartitionMetadata:
    def __init__(self, partition_sets: Mapping[str, Sequence[Partition]]):
        self._boundaries: Dict[str, List[bytes]] = {}
        self._hosts: Dict[str, List[Optional[str]]] = {}
        for partition_set_id, partitions in partition_sets.items():
            ordered = sorted(partitions, key=lambda partition: partition[0])
            self._boundaries[partition_set_id] = [boundary for boundary, _ in ordered]
            self._hosts[partition_set_id] = [host for _, host in ordered]

    def list_partition_boundaries(self, partition_set_id: str) -> List[bytes]:
        if partition_set_id not in self._boundaries:
            raise KeyError(f"Unknown partition set: {partition_set_id}")
        return list(self._boundaries[partition_set_id])

    def resolve_host(self, partition_set_id: str, key: bytes) -> Optional[str]:
        """Host of the partition owning ``key``, None if no partition owns it."""
        boundaries = self.list_partition_boundaries(partition_set_id)
        index = bisect_right(boundaries, key) - 1
        if index < 0:
            return None
        return self._hosts[partition_set_id][index]
