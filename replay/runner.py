# replay/runner.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Drives one vector clock per node over a recorded causal trace

"""
TraceReplayer: glue code that ties a CSV trace to the vector clock core.
Each node gets its own VectorClock initialized with every node of the
system; each trace record becomes an Event fed to the owning node's clock.
A receive record carries the clock captured right after the send record it
names, so messages may be delivered in any order after they were sent.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Union

from core.event import Event, EventType
from core.node import Node
from core.ordering import EventOrdering
from core.transition import VectorClockTransition
from core.vector_clock import VectorClock
from utils.clock_codec import format_clock, is_encodable_id
from utils.logger import get_logger
from utils.trace_reader import TraceFormatError, TraceRecord, get_trace_nodes, read_trace


@dataclass(frozen=True, slots=True)
class ConflictRecord:
    """A receive whose sender clock was rejected by the receiver.

    Attributes:
        eid: Receive event id
        source: Send event id whose clock was delivered
        node: Receiving node id
        receiver_clock: Encoded receiver clock at the time of the receive
        sender_clock: Encoded clock carried by the message
        ordering: Comparison result that caused the rejection
    """

    eid: str
    source: str
    node: str
    receiver_clock: str
    sender_clock: str
    ordering: EventOrdering

    def __str__(self) -> str:
        return (
            f"{self.eid}@{self.node}<-{self.source}: receiver [{self.receiver_clock}] "
            f"{self.ordering} sender [{self.sender_clock}]"
        )


@dataclass
class ReplayResult:
    """Everything observed while replaying a trace.

    Attributes:
        nodes: Node ids of the system, in initialization order
        history: Clock captured right after each event, keyed by eid
        clocks: Live clock of each node at the end of the replay
        transitions: Transition returned for each event, in trace order
        conflicts: Rejected receives, in trace order
        events_processed: Number of records applied
        halted: True if replay stopped at the first conflict
    """

    nodes: List[str]
    history: Dict[str, VectorClock] = field(default_factory=dict)
    clocks: Dict[str, VectorClock] = field(default_factory=dict)
    transitions: List[VectorClockTransition] = field(default_factory=list)
    conflicts: List[ConflictRecord] = field(default_factory=list)
    events_processed: int = 0
    halted: bool = False

    def clock_at(self, eid: str) -> Optional[VectorClock]:
        return self.history.get(eid)

    def final_clock(self, node: str) -> Optional[VectorClock]:
        return self.clocks.get(node)


class TraceReplayer:
    """
    Replays a causal trace through per-node vector clocks.

    Supports the optional "# nodes: a|b|..." directive; without it the node
    set is every node named in the trace, in order of first appearance.
    """

    def __init__(
        self,
        records: Iterable[TraceRecord],
        nodes: Optional[List[str]] = None,
        reject_not_comparable: bool = False,
    ):
        self._records = list(records)
        self._nodes = self._resolve_nodes(nodes)
        self._sends: Set[str] = set()

        self._result = ReplayResult(nodes=list(self._nodes))
        for node_id in self._nodes:
            clock = VectorClock(reject_not_comparable=reject_not_comparable)
            for other in self._nodes:
                clock.init_node(Node(other))
            self._result.clocks[node_id] = clock

    @classmethod
    def from_file(cls, trace_path: Union[str, Path], reject_not_comparable: bool = False) -> "TraceReplayer":
        """Build a replayer from a CSV trace file."""
        path = str(trace_path)
        directive = get_trace_nodes(path)
        return cls(read_trace(path), nodes=directive or None, reject_not_comparable=reject_not_comparable)

    @property
    def nodes(self) -> List[str]:
        return list(self._nodes)

    @property
    def result(self) -> ReplayResult:
        return self._result

    def _resolve_nodes(self, nodes: Optional[List[str]]) -> List[str]:
        if nodes:
            declared = list(dict.fromkeys(nodes))
            for node_id in declared:
                if not is_encodable_id(node_id):
                    raise TraceFormatError(f"Declared node id {node_id!r} may not contain ':' or ';'")
            for record in self._records:
                if record.node not in declared:
                    raise TraceFormatError(
                        f"Event {record.eid} occurs at node {record.node!r} outside the declared nodes"
                    )
            return declared

        seen: Dict[str, None] = {}
        for record in self._records:
            seen.setdefault(record.node, None)
        return list(seen)

    def apply(self, record: TraceRecord) -> VectorClockTransition:
        """Feed a single record to its node's clock and capture the outcome.

        Raises:
            TraceFormatError: On duplicate eids or a bad receive source
        """
        logger = get_logger()
        result = self._result

        if record.eid in result.history:
            raise TraceFormatError(f"Duplicate event id: {record.eid}")

        clock = result.clocks[record.node]
        node = Node(record.node)

        if record.event_type is EventType.RECEIVE:
            sender_clock = self._sender_clock(record)
            receiver_before = format_clock(clock)
            transition = clock.record_event(Event.receive(node, sender_clock))
            if transition.conflict:
                conflict = ConflictRecord(
                    eid=record.eid,
                    source=record.source,
                    node=record.node,
                    receiver_clock=receiver_before,
                    sender_clock=format_clock(sender_clock),
                    ordering=transition.ordering,
                )
                result.conflicts.append(conflict)
                logger.debug(f"Conflict recorded: {conflict}")
        else:
            transition = clock.record_event(Event(record.event_type, node))
            if record.event_type is EventType.SEND:
                self._sends.add(record.eid)

        result.history[record.eid] = clock.deep_copy()
        result.transitions.append(transition)
        result.events_processed += 1

        logger.info(f"{record} → [{format_clock(clock)}]{' CONFLICT' if transition.conflict else ''}")
        return transition

    def _sender_clock(self, record: TraceRecord) -> VectorClock:
        if record.source not in self._sends:
            if record.source in self._result.history:
                raise TraceFormatError(
                    f"Receive {record.eid} names {record.source}, which is not a send event"
                )
            raise TraceFormatError(
                f"Receive {record.eid} names unknown or later send event {record.source}"
            )
        return self._result.history[record.source]

    def run(self, *, stop_on_conflict: bool = False) -> ReplayResult:
        """
        Apply every record in order. If stop_on_conflict is True, halt
        right after the first rejected receive.
        """
        for record in self._records:
            transition = self.apply(record)
            if stop_on_conflict and transition.conflict:
                self._result.halted = True
                break

        get_logger().replay_summary(
            self._result.events_processed, len(self._result.conflicts), self._result.halted
        )
        return self._result
