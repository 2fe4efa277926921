"""
Partition metadata inspector for rangesplit.

This module decides whether a list of partition boundaries can be used to cut
splits. Boundaries come from an external metadata source, so they are checked
once before alignment instead of trusting them blindly.

A usable boundary list:

    - is non-empty (a table always has at least one partition)
    - is strictly ascending (partition i owns [b[i], b[i+1]))

The first boundary is normally the empty key, so the first partition covers
the start of the key space. A non-empty first boundary is still usable, but
keys before it belong to no partition and are never covered by a split.
"""

from typing import NamedTuple, Sequence

ACCEPTED = "ok"


class ValidationResult(NamedTuple):
    is_valid: bool
    reason: str = ACCEPTED


def inspect_partition_boundaries(boundaries: Sequence[bytes]) -> ValidationResult:
    """
    Check that partition boundaries form a strictly ascending, non-empty list.

    Returns:
        ValidationResult with the first problem found as ``reason``
    """
    if not boundaries:
        return ValidationResult(False, "no-partitions")

    for i in range(1, len(boundaries)):
        if boundaries[i] <= boundaries[i - 1]:
            return ValidationResult(False, f"not-ascending-at-{i}")

    return ValidationResult(True)


def covers_key_space_start(boundaries: Sequence[bytes]) -> bool:
    """True if the first partition starts at the empty key."""
    return bool(boundaries) and boundaries[0] == b""
