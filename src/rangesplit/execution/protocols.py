"""
Collaborator interfaces consumed by rangesplit.

The planner and the split consumers never depend on concrete query engines or
metadata services, only on these structural protocols.
"""

from typing import Any, Iterator, Mapping, Optional, Protocol, Sequence

from rangesplit.schema.types import ScanRange


class QueryPreparer(Protocol):
    """Parses a query and binds its positional string parameters."""

    def prepare(
        self, query_text: str, parameters: Mapping[int, str]
    ) -> Sequence[ScanRange]: ...


class PartitionMetadataSource(Protocol):
    """Partition layout and locality of a partitioned table."""

    def list_partition_boundaries(self, partition_set_id: str) -> Sequence[bytes]: ...

    def resolve_host(self, partition_set_id: str, key: bytes) -> Optional[str]: ...


class Executor(Protocol):
    """Runs the aggregate query over one key range of one partition set."""

    def execute(
        self, start: bytes, end: Optional[bytes], partition_set_id: str
    ) -> Iterator[Any]: ...
