"""
Pull-based consumption of one split's result rows.

A worker that received a Split opens a SplitConsumer on it. The consumer asks
the executor for the split's rows once, then hands them out one at a time:

    consumer = open_split(split, executor)
    try:
        while consumer.advance():
            handle(consumer.current())
    finally:
        consumer.close()

or, equivalently:

    with open_split(split, executor) as consumer:
        for row in consumer:
            handle(row)

The row sequence is forward-only and cannot be restarted. Closing early is the
only way to cancel: it releases whatever the executor opened and no further
rows are produced. close() may be called any number of times, including
before the first advance().
"""

import logging
from typing import Any, Iterator, Optional

from rangesplit.errors import MissingPartitionIdentifier
from rangesplit.execution.protocols import Executor
from rangesplit.schema.types import Split

logger = logging.getLogger(__name__)

_NO_ROW = object()


class SplitConsumer:
    """
    Iterates the result rows of one split.

    Not thread-safe: advance(), current() and close() are meant to be called
    by a single consumer.
    """

    def __init__(self, split: Split, executor: Executor):
        if not split.partition_set_id:
            raise MissingPartitionIdentifier(
                f"{split} has no partition set identifier; planning produced "
                f"an invalid split"
            )

        self.split = split
        self.rows_read = 0
        self._current: Any = _NO_ROW
        self._closed = False
        self._exhausted = False
        # Result sets may be iterable without being their own iterator
        self._result: Any = executor.execute(split.start, split.end, split.partition_set_id)
        self._rows: Optional[Iterator[Any]] = iter(self._result)
        logger.debug("Opened %s", split)

    @property
    def progress(self) -> float:
        """0.0 until the rows are exhausted, then 1.0; row totals are unknown upfront."""
        return 1.0 if self._exhausted else 0.0

    @property
    def closed(self) -> bool:
        return self._closed

    def advance(self) -> bool:
        """Move to the next row; False once the rows are exhausted or closed."""
        if self._rows is None or self._exhausted:
            return False

        row = next(self._rows, _NO_ROW)
        if row is _NO_ROW:
            self._current = _NO_ROW
            self._exhausted = True
            return False

        self._current = row
        self.rows_read += 1
        return True

    def current(self) -> Any:
        """Row reached by the last successful advance()."""
        if self._current is _NO_ROW:
            raise RuntimeError("No current row: call advance() first")
        return self._current

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        rows, self._rows = self._rows, None
        result, self._result = self._result, None
        self._current = _NO_ROW
        try:
            if rows is not result:
                _close_if_closable(rows)
        finally:
            _close_if_closable(result)
        logger.debug("Closed %s after %d rows", self.split, self.rows_read)

    def __iter__(self) -> Iterator[Any]:
        while self.advance():
            yield self._current

    def __enter__(self) -> "SplitConsumer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _close_if_closable(obj: Any) -> None:
    close = getattr(obj, "close", None)
    if close is not None:
        close()


def open_split(split: Split, executor: Executor) -> SplitConsumer:
    """Start executing ``split`` and return a consumer over its rows."""
    return SplitConsumer(split, executor)
