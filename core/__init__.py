# core/__init__.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Core module public API for vector clock causality tracking

"""Core components for tracking causal order with vector clocks.

This module provides the data structures that summarize the causal history
of a set of nodes without relying on wall-clock time. Each participant owns
a vector clock, feeds it the events it observes, and compares clocks to learn
whether two states are causally ordered, identical, or concurrent.

Primary Components:
    LogicalTstamp: Immutable per-node counter with wraparound
    Node: Opaque participant identity used as a clock key
    Event: LOCAL, SEND or RECEIVE occurrence at a node
    VectorClock: Node-to-timestamp map with record_event and compare_clocks
    VectorClockTransition: Report returned for every recorded event
    EventOrdering: Five-way causal comparison verdict

Example:
    >>> from core import VectorClock, Node, Event, EventOrdering
    >>> a, b = Node("a"), Node("b")
    >>> clock = VectorClock()
    >>> clock.init_node(a); clock.init_node(b)
    >>> before = clock.deep_copy()
    >>> transition = clock.record_event(Event.local(a))
    >>> VectorClock.compare_clocks(clock, before) is EventOrdering.HAPPENS_AFTER
    True
"""

from .exceptions import InvalidArgumentError
from .tstamp import LogicalTstamp, TSTAMP_MAX
from .node import Node, IdProvider, RandomIdProvider
from .ordering import EventOrdering
from .interface import AbstractVectorClock
from .event import Event, EventType
from .transition import VectorClockTransition
from .vector_clock import VectorClock, compare_clocks

__all__ = [
    "InvalidArgumentError",
    "LogicalTstamp",
    "TSTAMP_MAX",
    "Node",
    "IdProvider",
    "RandomIdProvider",
    "EventOrdering",
    "AbstractVectorClock",
    "Event",
    "EventType",
    "VectorClockTransition",
    "VectorClock",
    "compare_clocks",
]

__version__ = "1.0.0"
__description__ = "Core components for vector clock causality tracking"
