"""
Tests for callback.py - parallel streaming of split rows to a callback.

Splits are share-nothing: a failing split is recorded on its own outcome and
never prevents its siblings from completing.
"""

import threading

import pytest

from rangesplit.execution.callback import stream_splits_to_callback
from rangesplit.schema.types import Split


def make_splits(count):
    return [
        Split(host=None, partition_set_id="cube_A", start=bytes([i]), end=bytes([i + 1]))
        for i in range(count)
    ]


class RangeExecutor:
    """Yields three rows per split, tagged with the split start."""

    def execute(self, start, end, partition_set_id):
        for i in range(3):
            yield (start, i)


class FailingExecutor(RangeExecutor):
    def __init__(self, bad_start):
        self.bad_start = bad_start

    def execute(self, start, end, partition_set_id):
        if start == self.bad_start:
            raise OSError("region offline")
        return super().execute(start, end, partition_set_id)


class Collector:
    def __init__(self):
        self.rows = []
        self._lock = threading.Lock()

    def __call__(self, split, row):
        with self._lock:
            self.rows.append((split.start, row))


def test_all_rows_delivered():
    collector = Collector()
    outcomes = stream_splits_to_callback(make_splits(5), RangeExecutor(), collector, max_workers=3)

    assert [outcome.rows for outcome in outcomes] == [3] * 5
    assert all(outcome.ok for outcome in outcomes)
    assert len(collector.rows) == 15
    for split_start, (row_start, _) in collector.rows:
        assert split_start == row_start


def test_outcomes_in_split_order():
    splits = make_splits(8)
    outcomes = stream_splits_to_callback(splits, RangeExecutor(), Collector(), max_workers=4)
    assert [outcome.split for outcome in outcomes] == splits


def test_failing_split_isolated():
    splits = make_splits(4)
    collector = Collector()

    outcomes = stream_splits_to_callback(splits, FailingExecutor(b"\x02"), collector)

    assert [outcome.ok for outcome in outcomes] == [True, True, False, True]
    assert isinstance(outcomes[2].error, OSError)
    assert outcomes[2].rows == 0
    assert len(collector.rows) == 9


def test_callback_error_stops_only_its_split():
    def callback(split, row):
        if split.start == b"\x01" and row[1] == 1:
            raise ValueError("bad row")

    outcomes = stream_splits_to_callback(make_splits(3), RangeExecutor(), callback)

    assert outcomes[1].rows == 1
    assert not outcomes[1].ok
    assert isinstance(outcomes[1].error, ValueError)
    assert outcomes[0].rows == 3
    assert outcomes[2].rows == 3


def test_no_splits():
    assert stream_splits_to_callback([], RangeExecutor(), Collector()) == []


def test_invalid_worker_count():
    with pytest.raises(ValueError):
        stream_splits_to_callback(make_splits(1), RangeExecutor(), Collector(), max_workers=0)
