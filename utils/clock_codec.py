# utils/clock_codec.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Text encoding of vector clock snapshots

"""Lossless text form for vector clocks with string node identities.

A clock is written as semicolon-separated ``id:value`` components sorted by
node id, e.g. ``a:1;b:0;c:2``. An empty string is the empty clock.
"""

from typing import Dict, Mapping, Union

from core.interface import AbstractVectorClock
from core.node import Node
from core.tstamp import LogicalTstamp, TSTAMP_MAX
from core.vector_clock import VectorClock


RESERVED_ID_CHARS = ":;"


class ClockFormatError(ValueError):
    """Raised when clock text cannot be decoded, or a clock cannot be encoded."""

    pass


def is_encodable_id(node_id: str) -> bool:
    """True if ``node_id`` survives an encode/decode cycle unchanged."""
    return (
        bool(node_id)
        and node_id == node_id.strip()
        and not any(char in node_id for char in RESERVED_ID_CHARS)
    )


def format_clock(clock: Union[AbstractVectorClock, Mapping[Node, LogicalTstamp]]) -> str:
    """Encode a clock or snapshot as ``id:value;...``.

    Args:
        clock: Clock (snapshotted first) or snapshot mapping

    Returns:
        Encoded clock with components sorted by node

    Raises:
        ClockFormatError: If a node id is empty, has surrounding whitespace
            or contains ':' or ';'
    """
    snapshot = clock if isinstance(clock, Mapping) else clock.snapshot()
    components = []
    for node, tstamp in sorted(snapshot.items(), key=lambda item: item[0]):
        node_id = str(node.id)
        if not is_encodable_id(node_id):
            raise ClockFormatError(f"Node id {node_id!r} cannot be encoded in a vector clock")
        components.append(f"{node_id}:{int(tstamp)}")
    return ";".join(components)


def parse_clock_components(text: str) -> Dict[str, int]:
    """Decode ``id:value;...`` into an ordered ``{id: value}`` dict.

    Raises:
        ClockFormatError: If a component is malformed, negative, too large,
            has a node id containing ':' or repeats a node id
    """
    components: Dict[str, int] = {}
    if not text.strip():
        return components

    for component in text.split(";"):
        component = component.strip()
        if not component:
            continue

        node_id, sep, value_str = component.rpartition(":")
        node_id = node_id.strip()
        value_str = value_str.strip()
        if not sep or not node_id or not value_str.isdecimal():
            raise ClockFormatError(f"Invalid vector clock component: {component}")
        if ":" in node_id:
            raise ClockFormatError(f"Node id may not contain ':' in component: {component}")

        value = int(value_str)
        if value > TSTAMP_MAX:
            raise ClockFormatError(f"Timestamp out of range in component: {component}")
        if node_id in components:
            raise ClockFormatError(f"Duplicate node in vector clock: {node_id}")
        components[node_id] = value

    return components


def parse_clock(text: str, reject_not_comparable: bool = False) -> VectorClock:
    """Decode ``id:value;...`` into a new ``VectorClock`` keyed by string nodes."""
    components = parse_clock_components(text)
    return VectorClock.from_snapshot(
        {Node(node_id): LogicalTstamp(value) for node_id, value in components.items()},
        reject_not_comparable=reject_not_comparable,
    )
