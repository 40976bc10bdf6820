# tests/core_tests/test_record_event_scenarios.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Test suite for record_event transitions: local, send and receive merges

"""record_event – ticking, receive merges and conflict reporting.

Every scenario uses a three-node system X, Y, Z where each participant
starts from a clock tracking all three nodes at zero.
"""

import pytest
from core.event import Event
from core.exceptions import InvalidArgumentError
from core.node import Node
from core.ordering import EventOrdering
from core.tstamp import LogicalTstamp
from core.vector_clock import VectorClock, compare_clocks


def values(clock):
    return tuple(tstamp.value for tstamp in clock.snapshot().values())


class TestLocalAndSend:
    """LOCAL and SEND advance only the impacted coordinate."""

    def setup_method(self):
        self.x, self.y, self.z = Node("X"), Node("Y"), Node("Z")
        self.clocks = {}
        for node in (self.x, self.y, self.z):
            clock = VectorClock()
            for member in (self.x, self.y, self.z):
                clock.init_node(member)
            self.clocks[node] = clock

    def test_local_advances_only_local_coordinate(self):
        on_x = self.clocks[self.x]
        untouched = self.clocks[self.y]

        on_x.record_event(Event.local(self.x))

        assert values(on_x) == (1, 0, 0)
        assert compare_clocks(on_x, untouched) is EventOrdering.HAPPENS_AFTER
        assert compare_clocks(untouched, on_x) is EventOrdering.HAPPENS_BEFORE

    def test_send_advances_only_local_coordinate(self):
        on_y = self.clocks[self.y]
        on_y.record_event(Event.send(self.y))
        assert values(on_y) == (0, 1, 0)

    def test_independent_sends_are_concurrent_both_ways(self):
        on_y = self.clocks[self.y]
        on_z = self.clocks[self.z]

        on_y.record_event(Event.send(self.y))
        on_z.record_event(Event.send(self.z))

        assert compare_clocks(on_y, on_z) is EventOrdering.CONCURRENT
        assert compare_clocks(on_z, on_y) is EventOrdering.CONCURRENT

    def test_local_transition_carries_tstamps(self):
        on_x = self.clocks[self.x]
        transition = on_x.record_event(Event.local(self.x))

        assert transition.clock is None
        assert transition.conflict is False
        assert transition.ordering is None
        assert transition.previous_tstamp == LogicalTstamp(0)
        assert transition.current_tstamp == LogicalTstamp(1)

    def test_three_participant_walkthrough(self):
        on_x, on_y, on_z = (self.clocks[n] for n in (self.x, self.y, self.z))

        on_x.record_event(Event.local(self.x))
        assert values(on_x) == (1, 0, 0)

        on_y.record_event(Event.local(self.y))
        assert values(on_y) == (0, 1, 0)

        on_z.record_event(Event.send(self.z))
        assert values(on_z) == (0, 0, 1)

        transition = on_y.record_event(Event.receive(self.y, on_z.deep_copy()))
        assert transition.conflict is True
        assert values(on_y) == (0, 1, 0)

        on_x.record_event(Event.send(self.x))
        assert values(on_x) == (2, 0, 0)

        on_z.record_event(Event.send(self.z))
        assert values(on_z) == (0, 0, 2)

        assert compare_clocks(on_z, on_x) is EventOrdering.CONCURRENT
        assert compare_clocks(on_z, on_y) is EventOrdering.CONCURRENT
        assert compare_clocks(on_x, on_y) is EventOrdering.CONCURRENT


class TestReceive:
    """RECEIVE merge acceptance and rejection."""

    def test_concurrent_receive_is_rejected(self, make_clock, xyz_nodes):
        x, y, z = xyz_nodes
        receiver = make_clock(*xyz_nodes)
        sender = make_clock(*xyz_nodes)
        receiver.record_event(Event.local(y))
        sender.record_event(Event.send(z))

        transition = receiver.record_event(Event.receive(y, sender))

        assert transition.conflict is True
        assert transition.merged is False
        assert transition.ordering is EventOrdering.CONCURRENT
        assert transition.clock is receiver
        assert transition.previous_tstamp == transition.current_tstamp == LogicalTstamp(1)
        assert values(receiver) == (0, 1, 0)

    def test_receive_from_later_sender_merges(self, make_clock, xyz_nodes):
        x, y, z = xyz_nodes
        receiver = make_clock(*xyz_nodes)
        sender = make_clock(*xyz_nodes)
        sender.record_event(Event.send(z))

        transition = receiver.record_event(Event.receive(y, sender))

        assert transition.conflict is False
        assert transition.merged is True
        assert transition.ordering is EventOrdering.HAPPENS_BEFORE
        assert transition.clock is receiver
        assert transition.previous_tstamp == LogicalTstamp(0)
        assert transition.current_tstamp == LogicalTstamp(1)
        assert values(receiver) == (0, 1, 1)

    def test_receive_from_identical_sender_ticks_receiver(self, make_clock, xyz_nodes):
        _, y, _ = xyz_nodes
        receiver = make_clock(*xyz_nodes)
        sender = make_clock(*xyz_nodes)

        transition = receiver.record_event(Event.receive(y, sender))

        assert transition.ordering is EventOrdering.IDENTICAL
        assert values(receiver) == (0, 1, 0)

    def test_receive_from_older_sender_keeps_larger_entries(self, make_clock, xyz_nodes):
        x, y, _ = xyz_nodes
        receiver = make_clock(*xyz_nodes)
        sender = make_clock(*xyz_nodes)
        sender.record_event(Event.send(x))
        receiver.record_event(Event.receive(y, sender))
        receiver.record_event(Event.local(x))

        transition = receiver.record_event(Event.receive(y, sender))

        assert transition.ordering is EventOrdering.HAPPENS_AFTER
        assert values(receiver) == (2, 2, 0)

    def test_receive_does_not_modify_sender(self, make_clock, xyz_nodes):
        _, y, z = xyz_nodes
        receiver = make_clock(*xyz_nodes)
        sender = make_clock(*xyz_nodes)
        sender.record_event(Event.send(z))

        receiver.record_event(Event.receive(y, sender))

        assert values(sender) == (0, 0, 1)

    def test_receive_uses_sender_state_at_event_creation(self, make_clock, xyz_nodes):
        _, y, z = xyz_nodes
        receiver = make_clock(*xyz_nodes)
        sender = make_clock(*xyz_nodes)
        sender.record_event(Event.send(z))
        event = Event.receive(y, sender)

        sender.record_event(Event.local(z))
        sender.record_event(Event.local(z))
        receiver.record_event(event)

        assert values(receiver) == (0, 1, 1)

    def test_merge_never_adds_nodes(self, make_clock):
        a, b, c = Node("a"), Node("b"), Node("c")
        receiver = make_clock(a, b)
        sender = make_clock(a, b, c)
        sender.record_event(Event.send(c))
        sender.record_event(Event.send(a))

        transition = receiver.record_event(Event.receive(b, sender))

        assert transition.ordering is EventOrdering.NOT_COMPARABLE
        assert transition.conflict is False
        assert c not in receiver
        assert receiver.nodes() == frozenset({a, b})
        assert receiver.get(a) == LogicalTstamp(1)
        assert receiver.get(b) == LogicalTstamp(1)

    def test_not_comparable_rejected_when_configured(self, make_clock):
        a, b, c = Node("a"), Node("b"), Node("c")
        receiver = make_clock(a, b, reject_not_comparable=True)
        sender = make_clock(a, c)
        sender.record_event(Event.send(a))

        transition = receiver.record_event(Event.receive(b, sender))

        assert transition.conflict is True
        assert transition.ordering is EventOrdering.NOT_COMPARABLE
        assert values(receiver) == (0, 0)


class TestInvalidEvents:
    """Argument errors surface immediately."""

    def test_none_event(self, make_clock, xyz_nodes):
        with pytest.raises(InvalidArgumentError):
            make_clock(*xyz_nodes).record_event(None)

    @pytest.mark.parametrize("factory", [Event.local, Event.send])
    def test_untracked_impacted_node(self, make_clock, xyz_nodes, factory):
        clock = make_clock(*xyz_nodes)
        with pytest.raises(InvalidArgumentError):
            clock.record_event(factory(Node("W")))
        assert values(clock) == (0, 0, 0)

    def test_untracked_receiver(self, make_clock, xyz_nodes):
        clock = make_clock(*xyz_nodes)
        sender = make_clock(*xyz_nodes)
        with pytest.raises(InvalidArgumentError):
            clock.record_event(Event.receive(Node("W"), sender))
