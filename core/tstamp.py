# core/tstamp.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Immutable logical timestamp with wraparound

from __future__ import annotations
from dataclasses import dataclass

from .exceptions import InvalidArgumentError

# Largest value a timestamp may hold; ticking past it wraps to zero.
TSTAMP_MAX = 2**63 - 1


@dataclass(frozen=True, order=True, slots=True)
class LogicalTstamp:
    """Immutable per-node logical timestamp.

    A timestamp is never modified in place. ``tick()`` and ``copy()`` build a
    new instance, so a timestamp handed out in a snapshot can be shared
    freely between threads.

    Attributes:
        value: Non-negative counter in ``[0, TSTAMP_MAX]``
    """

    value: int = 0

    def __post_init__(self) -> None:
        if self.value is None or isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidArgumentError(f"Timestamp value must be an integer, got {self.value!r}")
        if self.value < 0:
            raise InvalidArgumentError("Only non-negative timestamp values are allowed")
        if self.value > TSTAMP_MAX:
            raise InvalidArgumentError(f"Timestamp value exceeds maximum {TSTAMP_MAX}")

    @classmethod
    def curate(cls, value: int) -> LogicalTstamp:
        """Build a timestamp from a known integer, e.g. a merged-in remote value."""
        if value is None:
            raise InvalidArgumentError("Timestamp value cannot be None")
        if value < 0:
            raise InvalidArgumentError("Only non-negative timestamp values are allowed")
        return cls(value)

    def tick(self) -> LogicalTstamp:
        """Return the next timestamp, wrapping to zero after ``TSTAMP_MAX``."""
        if self.value == TSTAMP_MAX:
            return LogicalTstamp(0)
        return LogicalTstamp(self.value + 1)

    def before(self, other: LogicalTstamp) -> bool:
        return self.value < other.value

    def after(self, other: LogicalTstamp) -> bool:
        return self.value > other.value

    def copy(self) -> LogicalTstamp:
        return LogicalTstamp(self.value)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"Tstamp[val:{self.value}]"
