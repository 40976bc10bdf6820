# core/transition.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Outcome of applying one event to a vector clock

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .ordering import EventOrdering
from .tstamp import LogicalTstamp

if TYPE_CHECKING:
    from .event import Event
    from .interface import AbstractVectorClock


@dataclass(frozen=True, slots=True)
class VectorClockTransition:
    """Immutable report returned by ``record_event``.

    When ``conflict`` is true the receiving clock was left untouched and the
    RECEIVE has to be resolved by the caller before events that causally
    depend on it are processed.

    Attributes:
        event: The event that was applied
        clock: The receiving clock for RECEIVE events, None for LOCAL/SEND
        conflict: True if the sender clock was concurrent and the merge rejected
        ordering: Comparison of receiver against sender (RECEIVE only)
        previous_tstamp: Impacted node's timestamp before the event
        current_tstamp: Impacted node's timestamp after the event
    """

    event: Event
    clock: Optional[AbstractVectorClock] = None
    conflict: bool = False
    ordering: Optional[EventOrdering] = None
    previous_tstamp: Optional[LogicalTstamp] = None
    current_tstamp: Optional[LogicalTstamp] = None

    @property
    def merged(self) -> bool:
        """True if a sender clock was merged into the receiver."""
        return self.clock is not None and not self.conflict

    def __str__(self) -> str:
        parts = [str(self.event), f"previous {self.previous_tstamp}", f"current {self.current_tstamp}"]
        if self.ordering is not None:
            parts.append(f"ordering {self.ordering}")
        if self.conflict:
            parts.append("CONFLICT")
        return f"VectorClockTransition[{', '.join(parts)}]"
