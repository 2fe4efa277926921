"""
Exception hierarchy for rangesplit.

PLANNING ERRORS abort the whole plan: no partial split list is ever returned.
EXECUTION ERRORS are local to one split and never affect its siblings.

Key-increment overflow is NOT an error. It is reported as a flag by
increment_key() and carried as ``None`` (unbounded) through the range logic.
"""


class RangeSplitError(Exception):
    """Base class for all rangesplit errors."""


class PlanningError(RangeSplitError):
    """Raised while turning a query into splits."""


class IncompatiblePartitionSet(PlanningError):
    """Scan ranges of one plan target more than one partition set."""

    def __init__(self, expected: str, found: str):
        self.expected = expected
        self.found = found
        super().__init__(
            f"Scan ranges target different partition sets "
            f"({expected!r} and {found!r}); cross-partition-set plans "
            f"are not supported"
        )


class GroupKeyLengthMismatch(PlanningError):
    """Scan ranges of one plan disagree on the grouping-key length."""

    def __init__(self, expected: int, found: int):
        self.expected = expected
        self.found = found
        super().__init__(
            f"Scan ranges use different grouping key lengths "
            f"({expected} and {found})"
        )


class InvalidPartitionBoundaries(PlanningError):
    """Partition boundaries are empty or not strictly ascending."""


class PlanningIOFailure(PlanningError):
    """A collaborator (query preparer, partition metadata) failed during planning."""


class ExecutionError(RangeSplitError):
    """Raised while executing a single split."""


class MissingPartitionIdentifier(ExecutionError):
    """A split reached execution without a partition set identifier."""
