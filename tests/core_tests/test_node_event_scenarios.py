# tests/core_tests/test_node_event_scenarios.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Test suite for Node identity, Event validation and transition values

"""Node, Event and VectorClockTransition value semantics."""

import uuid

import pytest
from core.event import Event, EventType
from core.exceptions import InvalidArgumentError
from core.node import Node, RandomIdProvider
from core.ordering import EventOrdering
from core.transition import VectorClockTransition
from core.tstamp import LogicalTstamp


class FixedIdProvider:
    def __init__(self, ident):
        self.ident = ident

    def id(self):
        return self.ident


class TestNode:
    """Identity, hashing and ordering of nodes."""

    def test_equal_ids_are_interchangeable_keys(self):
        mapping = {Node("a"): 1}
        assert mapping[Node("a")] == 1
        assert Node("a") == Node("a")
        assert hash(Node("a")) == hash(Node("a"))

    def test_different_ids_differ(self):
        assert Node("a") != Node("b")

    def test_nodes_sort_by_identity(self):
        assert sorted([Node("c"), Node("a"), Node("b")]) == [Node("a"), Node("b"), Node("c")]
        assert sorted([Node(3), Node(1), Node(2)]) == [Node(1), Node(2), Node(3)]

    def test_none_id_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Node(None)

    def test_generate_uses_provider(self):
        assert Node.generate(FixedIdProvider("fixed")) == Node("fixed")

    def test_generate_defaults_to_random_uuid(self):
        node = Node.generate()
        assert uuid.UUID(node.id).version == 4
        assert Node.generate() != node

    def test_random_provider_returns_distinct_ids(self):
        provider = RandomIdProvider()
        assert provider.id() != provider.id()

    def test_str_and_repr(self):
        assert str(Node("a")) == "a"
        assert repr(Node("a")) == "Node[id:a]"


class TestEvent:
    """Construction-time validation of events."""

    def test_receive_without_sender_clock_is_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Event(EventType.RECEIVE, Node("a"))

    def test_receive_factory_requires_clock(self):
        with pytest.raises(InvalidArgumentError):
            Event.receive(Node("a"), None)

    def test_local_and_send_ignore_sender_clock(self, make_clock):
        clock = make_clock(Node("a"))
        assert Event(EventType.LOCAL, Node("a"), clock).sender_clock is None
        assert Event(EventType.SEND, Node("a"), clock).sender_clock is None

    def test_missing_node_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Event(EventType.LOCAL, None)

    def test_unknown_type_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Event("LOCAL", Node("a"))

    def test_receive_holds_independent_copy_of_sender(self, make_clock):
        a = Node("a")
        sender = make_clock(a)
        event = Event.receive(a, sender)

        assert event.sender_clock is not sender
        sender.record_event(Event.local(a))
        sender.record_event(Event.local(a))

        assert event.sender_clock.snapshot()[a] == LogicalTstamp(0)
        assert sender.snapshot()[a] == LogicalTstamp(2)

    def test_factories(self):
        a = Node("a")
        assert Event.local(a).event_type is EventType.LOCAL
        assert Event.send(a).event_type is EventType.SEND

    def test_events_are_frozen(self):
        event = Event.local(Node("a"))
        with pytest.raises(AttributeError):
            event.impacted_node = Node("b")  # type: ignore[misc]

    def test_str(self):
        assert str(Event.send(Node("a"))) == "SEND@a"


class TestTransition:
    """VectorClockTransition value behaviour."""

    def test_local_style_transition_defaults(self):
        transition = VectorClockTransition(event=Event.local(Node("a")))
        assert transition.clock is None
        assert transition.conflict is False
        assert transition.ordering is None
        assert transition.merged is False

    def test_conflict_transition_is_not_merged(self, make_clock):
        clock = make_clock(Node("a"))
        transition = VectorClockTransition(
            event=Event.receive(Node("a"), clock),
            clock=clock,
            conflict=True,
            ordering=EventOrdering.CONCURRENT,
        )
        assert transition.merged is False
        assert "CONFLICT" in str(transition)

    def test_transitions_are_frozen(self):
        transition = VectorClockTransition(event=Event.local(Node("a")))
        with pytest.raises(AttributeError):
            transition.conflict = True  # type: ignore[misc]


class TestEventOrdering:
    """Helpers on the ordering enum."""

    @pytest.mark.parametrize(
        "ordering, inverse",
        [
            (EventOrdering.HAPPENS_BEFORE, EventOrdering.HAPPENS_AFTER),
            (EventOrdering.HAPPENS_AFTER, EventOrdering.HAPPENS_BEFORE),
            (EventOrdering.IDENTICAL, EventOrdering.IDENTICAL),
            (EventOrdering.CONCURRENT, EventOrdering.CONCURRENT),
            (EventOrdering.NOT_COMPARABLE, EventOrdering.NOT_COMPARABLE),
        ],
    )
    def test_inverse(self, ordering, inverse):
        assert ordering.inverse() is inverse

    def test_is_ordered(self):
        assert EventOrdering.IDENTICAL.is_ordered()
        assert EventOrdering.HAPPENS_BEFORE.is_ordered()
        assert not EventOrdering.CONCURRENT.is_ordered()
        assert not EventOrdering.NOT_COMPARABLE.is_ordered()
