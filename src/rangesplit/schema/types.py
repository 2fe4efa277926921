"""
Value types shared by the planner and the split consumers.

Keys are plain ``bytes``. Python compares ``bytes`` as unsigned big-endian
strings where a prefix sorts before any longer key, which is exactly the
ordering of the underlying store. An unbounded end is represented by ``None``.

    ScanRange   -- one logical scan, closed interval [start, end]
    OverallRange -- union of all scan ranges, half-open [start, end)
    Split       -- one independently executable unit of work
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

Key = bytes


def format_key(key: Optional[Key]) -> str:
    """Render a key as hex for logs and reprs (``None`` is unbounded)."""
    if key is None:
        return "<unbounded>"
    if not key:
        return "<empty>"
    return key.hex()


@dataclass(frozen=True)
class ScanRange:
    """
    One scan produced by the query preparer.

    Both bounds are inclusive. ``group_key_len`` is the byte length of the
    grouping-key prefix of every key in the range.
    """

    start: Key
    end: Key
    group_key_len: int
    partition_set_id: str

    def __post_init__(self) -> None:
        if self.group_key_len < 0:
            raise ValueError(f"group_key_len must be >= 0, got {self.group_key_len}")
        if self.start > self.end:
            raise ValueError(
                f"Scan range start {format_key(self.start)} is after "
                f"end {format_key(self.end)}"
            )


@dataclass(frozen=True)
class OverallRange:
    """Union of a plan's scan ranges; ``end`` is exclusive, ``None`` if unbounded."""

    start: Key
    end: Optional[Key]
    group_key_len: int
    partition_set_id: str

    @property
    def is_unbounded(self) -> bool:
        return self.end is None


@dataclass(frozen=True)
class Split:
    """
    An independently executable unit of work.

    Covers ``[start, end)`` of one partition set; ``end`` of ``None`` means
    "to the end of the key space". ``host`` is a best-effort locality hint.

    Example:
        >>> split = Split(host="rs1", partition_set_id="cube_1",
        ...               start=b"\\x05", end=b"\\x09")
        >>> split.contains(b"\\x07")
        True
        >>> split.to_dict()["end"]
        b'\\t'
    """

    host: Optional[str]
    partition_set_id: str
    start: Key
    end: Optional[Key]

    @property
    def is_unbounded(self) -> bool:
        return self.end is None

    def contains(self, key: Key) -> bool:
        if key < self.start:
            return False
        return self.end is None or key < self.end

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form; ``end`` of ``None`` denotes unbounded."""
        return {
            "host": self.host,
            "partition_set_id": self.partition_set_id,
            "start": self.start,
            "end": self.end,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Split":
        end = data.get("end")
        return cls(
            host=data.get("host"),
            partition_set_id=data["partition_set_id"],
            start=bytes(data["start"]),
            end=None if end is None else bytes(end),
        )

    def __str__(self) -> str:
        return (
            f"Split({self.partition_set_id}@{self.host or '?'} "
            f"[{format_key(self.start)}, {format_key(self.end)}))"
        )
