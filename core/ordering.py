# core/ordering.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Causal ordering verdicts produced by vector clock comparison

from enum import Enum, auto


class EventOrdering(Enum):
    """Causal relationship between two vector clock snapshots.

    Values are read from the point of view of the first operand:
    ``HAPPENS_BEFORE`` means the first clock causally precedes the second.

    Values:
        IDENTICAL: Every coordinate is equal
        HAPPENS_BEFORE: No coordinate is greater and at least one is smaller
        HAPPENS_AFTER: No coordinate is smaller and at least one is greater
        CONCURRENT: Each clock has a coordinate greater than the other's
        NOT_COMPARABLE: The clocks track different node sets
    """

    IDENTICAL = auto()
    HAPPENS_BEFORE = auto()
    HAPPENS_AFTER = auto()
    CONCURRENT = auto()
    NOT_COMPARABLE = auto()

    def __str__(self) -> str:
        return self.name

    def inverse(self) -> "EventOrdering":
        """Return the verdict obtained by swapping the two operands."""
        if self is EventOrdering.HAPPENS_BEFORE:
            return EventOrdering.HAPPENS_AFTER
        if self is EventOrdering.HAPPENS_AFTER:
            return EventOrdering.HAPPENS_BEFORE
        return self

    def is_ordered(self) -> bool:
        """True if one clock causally dominates the other or they are equal."""
        return self in (
            EventOrdering.IDENTICAL,
            EventOrdering.HAPPENS_BEFORE,
            EventOrdering.HAPPENS_AFTER,
        )
