# core/vector_clock.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Mutable vector clock with event-driven transitions and causal comparison

"""Vector clock over a dynamic set of nodes.

A clock maps every node it has been told about to a ``LogicalTstamp``.
Timestamps only move through ``record_event``:

    LOCAL / SEND   tick the impacted node's entry
    RECEIVE        compare against the sender's clock; if the two are
                   concurrent the merge is rejected and reported as a
                   conflict, otherwise tick the impacted node and take the
                   component-wise maximum over the nodes both clocks track

``record_event`` runs under a per-clock lock and blocks until the lock is
free. ``snapshot`` and ``compare_clocks`` read without the lock and observe
a consistent copy of the map at some instant, not necessarily the latest.
"""

from __future__ import annotations
import threading
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Union

from utils.logger import get_logger

from .event import Event, EventType
from .exceptions import InvalidArgumentError
from .interface import AbstractVectorClock
from .node import Node
from .ordering import EventOrdering
from .transition import VectorClockTransition
from .tstamp import LogicalTstamp

ClockLike = Union[AbstractVectorClock, Mapping[Node, LogicalTstamp]]


class VectorClock(AbstractVectorClock):
    """Mapping from ``Node`` to ``LogicalTstamp`` owned by one participant.

    Args:
        reject_not_comparable: Treat a RECEIVE whose sender tracks a
            different node set like a concurrent conflict instead of
            merging over the shared nodes.
    """

    def __init__(self, reject_not_comparable: bool = False) -> None:
        self._tstamps: Dict[Node, LogicalTstamp] = {}
        self._lock = threading.Lock()
        self.reject_not_comparable = reject_not_comparable

    @classmethod
    def from_snapshot(
        cls,
        snapshot: Mapping[Node, Union[LogicalTstamp, int]],
        reject_not_comparable: bool = False,
    ) -> VectorClock:
        """Build a clock tracking exactly the nodes of ``snapshot``."""
        clock = cls(reject_not_comparable=reject_not_comparable)
        for node, tstamp in snapshot.items():
            if not isinstance(tstamp, LogicalTstamp):
                tstamp = LogicalTstamp.curate(tstamp)
            clock.init_node_with_timestamp(node, tstamp)
        return clock

    # ------------------------------------------------------------------
    # Node lifecycle
    # ------------------------------------------------------------------

    def init_node(self, node: Node) -> None:
        self.init_node_with_timestamp(node, LogicalTstamp())

    def init_node_with_timestamp(self, node: Node, tstamp: LogicalTstamp) -> None:
        """Track ``node`` seeded at ``tstamp``; an already tracked node keeps its value."""
        if node is None or tstamp is None:
            raise InvalidArgumentError("node and logical timestamp cannot be None")
        if not isinstance(tstamp, LogicalTstamp):
            raise InvalidArgumentError(f"Expected a LogicalTstamp, got {type(tstamp).__name__}")

        with self._lock:
            if node in self._tstamps:
                return
            self._tstamps[node] = tstamp

        get_logger().node_initialized(str(node), str(tstamp))

    def remove_node(self, node: Node) -> bool:
        if node is None:
            raise InvalidArgumentError("node cannot be None")

        with self._lock:
            removed = self._tstamps.pop(node, None) is not None

        if removed:
            get_logger().node_removed(str(node))
        return removed

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def snapshot(self) -> Mapping[Node, LogicalTstamp]:
        # dict() copies the live map in a single step; timestamps are immutable
        current = dict(self._tstamps)
        ordered = dict(sorted(current.items(), key=lambda item: item[0]))

        logger = get_logger()
        if logger.is_debug_enabled():
            logger.snapshot_taken(_format_entries(ordered))

        return MappingProxyType(ordered)

    def deep_copy(self) -> VectorClock:
        cloned = VectorClock(reject_not_comparable=self.reject_not_comparable)
        for node, tstamp in self.snapshot().items():
            cloned.init_node_with_timestamp(node, tstamp.copy())
        return cloned

    def get(self, node: Node) -> Optional[LogicalTstamp]:
        return self._tstamps.get(node)

    def nodes(self) -> frozenset:
        return frozenset(self._tstamps)

    def __contains__(self, node: object) -> bool:
        return node in self._tstamps

    def __len__(self) -> int:
        return len(self._tstamps)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.snapshot())

    def __str__(self) -> str:
        return f"[{_format_entries(self.snapshot())}]"

    __repr__ = __str__

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    @staticmethod
    def compare_clocks(clock_a: ClockLike, clock_b: ClockLike) -> EventOrdering:
        """Classify the causal relationship of ``clock_a`` relative to ``clock_b``.

        Both operands are snapshotted first. Clocks over different node sets
        are NOT_COMPARABLE. Otherwise entries are visited in node order and
        the scan stops as soon as each side has been seen ahead of the other.

        Args:
            clock_a: Clock or snapshot mapping
            clock_b: Clock or snapshot mapping

        Returns:
            EventOrdering of ``clock_a`` with respect to ``clock_b``
        """
        snap_a = _as_snapshot(clock_a)
        snap_b = _as_snapshot(clock_b)

        if len(snap_a) != len(snap_b) or snap_a.keys() != snap_b.keys():
            return EventOrdering.NOT_COMPARABLE

        a_after_b = False
        b_after_a = False
        for node in sorted(snap_a):
            tstamp_a = snap_a[node]
            tstamp_b = snap_b[node]
            if tstamp_a.after(tstamp_b):
                a_after_b = True
            elif tstamp_b.after(tstamp_a):
                b_after_a = True

            if a_after_b and b_after_a:
                return EventOrdering.CONCURRENT

        if a_after_b:
            return EventOrdering.HAPPENS_AFTER
        if b_after_a:
            return EventOrdering.HAPPENS_BEFORE
        return EventOrdering.IDENTICAL

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def record_event(self, event: Event) -> VectorClockTransition:
        if event is None:
            raise InvalidArgumentError("event cannot be None")

        logger = get_logger()
        node = event.impacted_node

        with self._lock:
            current = self._tstamps.get(node)
            if current is None:
                raise InvalidArgumentError(f"Clock does not track impacted node {node}")

            if event.event_type is not EventType.RECEIVE:
                ticked = current.tick()
                self._tstamps[node] = ticked
                logger.event_recorded(str(event), str(current), str(ticked))
                return VectorClockTransition(
                    event=event, previous_tstamp=current, current_tstamp=ticked
                )

            sender_snapshot = event.sender_clock.snapshot()
            ordering = compare_clocks(self._tstamps, sender_snapshot)

            rejected = ordering is EventOrdering.CONCURRENT or (
                ordering is EventOrdering.NOT_COMPARABLE and self.reject_not_comparable
            )
            if rejected:
                logger.conflict_detected(
                    str(event), f"[{_format_entries(self._tstamps)}]", f"[{_format_entries(sender_snapshot)}]"
                )
                return VectorClockTransition(
                    event=event,
                    clock=self,
                    conflict=True,
                    ordering=ordering,
                    previous_tstamp=current,
                    current_tstamp=current,
                )

            if ordering is EventOrdering.NOT_COMPARABLE:
                logger.not_comparable(
                    str(event), f"[{_format_entries(self._tstamps)}]", f"[{_format_entries(sender_snapshot)}]"
                )

            self._tstamps[node] = current.tick()
            self._merge(sender_snapshot)
            merged = self._tstamps[node]

        logger.event_recorded(str(event), str(current), str(merged))
        return VectorClockTransition(
            event=event,
            clock=self,
            conflict=False,
            ordering=ordering,
            previous_tstamp=current,
            current_tstamp=merged,
        )

    def _merge(self, sender_snapshot: Mapping[Node, LogicalTstamp]) -> None:
        # Caller holds the lock. Nodes unknown to this clock are not added.
        for node, remote in sender_snapshot.items():
            local = self._tstamps.get(node)
            if local is not None and local.before(remote):
                self._tstamps[node] = LogicalTstamp.curate(remote.value)


def compare_clocks(clock_a: ClockLike, clock_b: ClockLike) -> EventOrdering:
    """Module-level alias of ``VectorClock.compare_clocks``."""
    return VectorClock.compare_clocks(clock_a, clock_b)


def _as_snapshot(clock: ClockLike) -> Mapping[Node, LogicalTstamp]:
    if clock is None:
        raise InvalidArgumentError("Cannot compare a missing clock")
    if isinstance(clock, Mapping):
        return dict(clock)
    return clock.snapshot()


def _format_entries(entries: Mapping[Node, LogicalTstamp]) -> str:
    return ", ".join(f"{node}:{tstamp}" for node, tstamp in sorted(entries.items(), key=lambda item: item[0]))
