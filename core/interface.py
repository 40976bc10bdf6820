# core/interface.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Abstract capability set shared by vector clock implementations

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from .event import Event
    from .node import Node
    from .transition import VectorClockTransition
    from .tstamp import LogicalTstamp


class AbstractVectorClock(ABC):
    """Capabilities every vector clock exposes to its callers.

    ``VectorClock`` is the production implementation. Tests substitute
    doubles that record calls without reimplementing the algorithm.
    """

    @abstractmethod
    def init_node(self, node: Node) -> None:
        """Start tracking ``node`` at timestamp zero; no-op if already tracked."""

    @abstractmethod
    def remove_node(self, node: Node) -> bool:
        """Stop tracking ``node``; return whether it was tracked."""

    @abstractmethod
    def snapshot(self) -> Mapping[Node, LogicalTstamp]:
        """Return an independent, node-ordered, read-only copy of the clock."""

    @abstractmethod
    def record_event(self, event: Event) -> VectorClockTransition:
        """Apply ``event`` and describe the resulting transition."""

    @abstractmethod
    def deep_copy(self) -> AbstractVectorClock:
        """Return a fully independent clock with the same contents."""
