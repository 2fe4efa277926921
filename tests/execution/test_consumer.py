"""
Tests for consumer.py - pull-based iteration over one split's rows.

The consumer contract:

    advance() -> bool      False once rows are exhausted (or after close)
    current()              valid only after advance() returned True
    close()                idempotent, safe before any advance()

The executor is called exactly once, on open, with the split's start, end and
partition set id.
"""

import pytest

from rangesplit.errors import ExecutionError, MissingPartitionIdentifier
from rangesplit.execution.consumer import SplitConsumer, open_split
from rangesplit.schema.types import Split

SPLIT = Split(host="rs1", partition_set_id="cube_A", start=b"\x02", end=b"\x05")


class RecordingExecutor:
    """Executor yielding fixed rows from a generator and recording calls."""

    def __init__(self, rows):
        self.rows = rows
        self.calls = []
        self.produced = 0
        self.closed = False

    def execute(self, start, end, partition_set_id):
        self.calls.append((start, end, partition_set_id))
        return self._generate()

    def _generate(self):
        try:
            for row in self.rows:
                self.produced += 1
                yield row
        finally:
            self.closed = True


class ClosableIterator:
    def __init__(self, rows):
        self._rows = iter(rows)
        self.close_calls = 0

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._rows)

    def close(self):
        self.close_calls += 1


class ResultSet:
    """Iterable result set that is not its own iterator, like a DB cursor wrapper."""

    def __init__(self, rows):
        self._rows = list(rows)
        self.close_calls = 0

    def __iter__(self):
        return iter(self._rows)

    def close(self):
        self.close_calls += 1


class TestIteration:
    def test_delegates_to_executor(self):
        executor = RecordingExecutor([])
        open_split(SPLIT, executor)
        assert executor.calls == [(b"\x02", b"\x05", "cube_A")]

    def test_unbounded_end_passed_as_none(self):
        executor = RecordingExecutor([])
        open_split(Split(None, "cube_A", b"\x02", None), executor)
        assert executor.calls == [(b"\x02", None, "cube_A")]

    def test_advance_and_current(self):
        consumer = open_split(SPLIT, RecordingExecutor(["r1", "r2"]))
        assert consumer.advance()
        assert consumer.current() == "r1"
        assert consumer.advance()
        assert consumer.current() == "r2"
        assert not consumer.advance()
        assert not consumer.advance()
        assert consumer.rows_read == 2

    def test_current_before_advance_raises(self):
        consumer = open_split(SPLIT, RecordingExecutor(["r1"]))
        with pytest.raises(RuntimeError):
            consumer.current()

    def test_current_after_exhaustion_raises(self):
        consumer = open_split(SPLIT, RecordingExecutor(["r1"]))
        consumer.advance()
        consumer.advance()
        with pytest.raises(RuntimeError):
            consumer.current()

    def test_python_iteration(self):
        with open_split(SPLIT, RecordingExecutor([1, 2, 3])) as consumer:
            assert list(consumer) == [1, 2, 3]
        assert consumer.closed

    def test_rows_are_pulled_lazily(self):
        executor = RecordingExecutor(range(100))
        consumer = open_split(SPLIT, executor)
        consumer.advance()
        assert executor.produced == 1

    def test_executor_accepting_lists(self):
        class ListExecutor:
            def execute(self, start, end, partition_set_id):
                return ["a", "b"]

        consumer = SplitConsumer(SPLIT, ListExecutor())
        assert list(consumer) == ["a", "b"]
        consumer.close()


class TestClose:
    def test_close_twice(self):
        executor = RecordingExecutor(["r1"])
        consumer = open_split(SPLIT, executor)
        consumer.close()
        consumer.close()
        assert consumer.closed
        assert not consumer.advance()

    def test_close_before_advance_yields_nothing(self):
        consumer = open_split(SPLIT, RecordingExecutor(["r1", "r2"]))
        consumer.close()
        assert not consumer.advance()
        assert list(consumer) == []
        with pytest.raises(RuntimeError):
            consumer.current()

    def test_early_close_releases_executor_resources(self):
        executor = RecordingExecutor(range(100))
        consumer = open_split(SPLIT, executor)
        consumer.advance()
        consumer.close()
        assert executor.closed
        assert executor.produced == 1

    def test_close_calls_iterator_close_once(self):
        rows = ClosableIterator(["a"])

        class Executor:
            def execute(self, start, end, partition_set_id):
                return rows

        consumer = open_split(SPLIT, Executor())
        while consumer.advance():
            pass
        consumer.close()
        consumer.close()
        assert rows.close_calls == 1

    def test_close_releases_iterable_result_set(self):
        result_set = ResultSet(["a", "b"])

        class Executor:
            def execute(self, start, end, partition_set_id):
                return result_set

        consumer = open_split(SPLIT, Executor())
        assert consumer.advance()
        consumer.close()
        consumer.close()
        assert result_set.close_calls == 1
        assert not consumer.advance()

    def test_close_before_advance_releases_result_set(self):
        result_set = ResultSet(["a"])

        class Executor:
            def execute(self, start, end, partition_set_id):
                return result_set

        open_split(SPLIT, Executor()).close()
        assert result_set.close_calls == 1


class TestProgress:
    def test_progress_reaches_one_when_exhausted(self):
        consumer = open_split(SPLIT, RecordingExecutor(["r1"]))
        assert consumer.progress == 0.0
        consumer.advance()
        assert consumer.progress == 0.0
        consumer.advance()
        assert consumer.progress == 1.0


class TestMissingPartition:
    @pytest.mark.parametrize("partition_set_id", ["", None])
    def test_missing_partition_set_id(self, partition_set_id):
        executor = RecordingExecutor(["r1"])
        with pytest.raises(MissingPartitionIdentifier) as exc_info:
            open_split(Split("rs1", partition_set_id, b"", None), executor)
        assert isinstance(exc_info.value, ExecutionError)
        assert executor.calls == []
