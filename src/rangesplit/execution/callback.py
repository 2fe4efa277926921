"""
Split-parallel callback streaming.

================================================================================
ARCHITECTURE - ONE CONSUMER PER SPLIT, ROWS TO CALLBACK
================================================================================

    [Split 0] ──> SplitConsumer ──> callback(split, row) ...
    [Split 1] ──> SplitConsumer ──> callback(split, row) ...     ThreadPoolExecutor
    [Split 2] ──> SplitConsumer ──> callback(split, row) ...     (max_workers)
       ...

Splits are share-nothing: each one is consumed by exactly one thread, and no
coordination is needed between them. Results come back as one SplitOutcome
per split, in split order, whatever order the threads finished in.

EDGE CASES HANDLED:
────────────────────────────────────────────────────────────────────────────────
    - Executor or callback raises -> recorded on that split's outcome, the
      consumer is closed, sibling splits keep running
    - No splits -> empty result, no pool is started
    - Executor and callback are shared by all threads and must be thread-safe

================================================================================
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from rangesplit.constants import DEFAULT_MAX_WORKERS
from rangesplit.execution.consumer import open_split
from rangesplit.execution.protocols import Executor
from rangesplit.schema.types import Split

logger = logging.getLogger(__name__)

RowCallback = Callable[[Split, Any], None]


@dataclass
class SplitOutcome:
    split: Split
    rows: int = 0
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _consume_split(split: Split, executor: Executor, callback: RowCallback) -> SplitOutcome:
    outcome = SplitOutcome(split=split)
    try:
        with open_split(split, executor) as consumer:
            for row in consumer:
                callback(split, row)
                outcome.rows += 1
    except Exception as exc:
        logger.error("Split %s failed after %d rows: %s", split, outcome.rows, exc)
        outcome.error = exc
    return outcome


def stream_splits_to_callback(
    splits: Sequence[Split],
    executor: Executor,
    callback: RowCallback,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> List[SplitOutcome]:
    """
    Execute splits in parallel and hand every result row to ``callback``.

    Args:
        splits: Planned splits
        executor: Shared executor used to open each split
        callback: Called as callback(split, row) from worker threads
        max_workers: Thread pool size

    Returns:
        One SplitOutcome per split, in the order of ``splits``
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")
    if not splits:
        return []

    with ThreadPoolExecutor(max_workers=min(max_workers, len(splits))) as pool:
        outcomes = list(
            pool.map(lambda split: _consume_split(split, executor, callback), splits)
        )

    failed = sum(1 for outcome in outcomes if not outcome.ok)
    logger.info(
        "Streamed %d rows from %d splits (%d failed)",
        sum(outcome.rows for outcome in outcomes),
        len(outcomes),
        failed,
    )
    return outcomes
