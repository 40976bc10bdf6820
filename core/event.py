# core/event.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# State-changing occurrences fed to a vector clock

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .exceptions import InvalidArgumentError
from .interface import AbstractVectorClock
from .node import Node


class EventType(Enum):
    """Kind of occurrence at a node."""

    LOCAL = auto()
    SEND = auto()
    RECEIVE = auto()

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Event:
    """Occurrence at ``impacted_node`` that advances that node's clock entry.

    A RECEIVE event must carry the clock the sender attached to the message.
    The event stores its own deep copy of that clock, so ticking on the
    sender side afterwards can never reach back into this event. LOCAL and
    SEND events ignore any sender clock they are given.

    Attributes:
        event_type: LOCAL, SEND or RECEIVE
        impacted_node: Node whose timestamp advances
        sender_clock: Independent copy of the sender's clock (RECEIVE only)
    """

    event_type: EventType
    impacted_node: Node
    sender_clock: Optional[AbstractVectorClock] = None

    def __post_init__(self) -> None:
        if not isinstance(self.event_type, EventType):
            raise InvalidArgumentError(f"Unknown event type: {self.event_type!r}")
        if self.impacted_node is None:
            raise InvalidArgumentError("Event must name the impacted node")

        if self.event_type is EventType.RECEIVE:
            if self.sender_clock is None:
                raise InvalidArgumentError(
                    "RECEIVE events should be accompanied with their sender's vector clock"
                )
            object.__setattr__(self, "sender_clock", self.sender_clock.deep_copy())
        else:
            object.__setattr__(self, "sender_clock", None)

    @classmethod
    def local(cls, node: Node) -> Event:
        return cls(EventType.LOCAL, node)

    @classmethod
    def send(cls, node: Node) -> Event:
        return cls(EventType.SEND, node)

    @classmethod
    def receive(cls, node: Node, sender_clock: AbstractVectorClock) -> Event:
        return cls(EventType.RECEIVE, node, sender_clock)

    def __str__(self) -> str:
        return f"{self.event_type.name}@{self.impacted_node}"
