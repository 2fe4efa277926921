"""
Tests for inspector.py - partition boundary validation.
"""

from rangesplit.analysis.inspector import (
    ValidationResult,
    covers_key_space_start,
    inspect_partition_boundaries,
)


def test_valid_boundaries():
    assert inspect_partition_boundaries([b"", b"\x05", b"\x05\x01", b"\x0a"]) == ValidationResult(True)


def test_single_partition_is_valid():
    assert inspect_partition_boundaries([b""]).is_valid


def test_empty_list_rejected():
    result = inspect_partition_boundaries([])
    assert not result.is_valid
    assert result.reason == "no-partitions"


def test_duplicate_boundary_rejected():
    result = inspect_partition_boundaries([b"", b"\x05", b"\x05"])
    assert not result.is_valid
    assert result.reason == "not-ascending-at-2"


def test_descending_boundary_rejected():
    result = inspect_partition_boundaries([b"", b"\x0a", b"\x05"])
    assert not result.is_valid


def test_covers_key_space_start():
    assert covers_key_space_start([b"", b"\x05"])
    assert not covers_key_space_start([b"\x01", b"\x05"])
    assert not covers_key_space_start([])
