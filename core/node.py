# core/node.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Opaque participant identity used as a vector clock key

from __future__ import annotations
import uuid
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from .exceptions import InvalidArgumentError


class IdProvider(Protocol):
    """Source of fresh node identities."""

    def id(self) -> str: ...


class RandomIdProvider:
    """Identity provider backed by random (version 4) UUIDs."""

    def id(self) -> str:
        return str(uuid.uuid4())


@dataclass(frozen=True, order=True, slots=True)
class Node:
    """Participant whose local event history a vector clock tracks.

    Equality, hashing and ordering are defined on ``id`` alone, so two
    ``Node`` instances with the same identity are interchangeable as clock
    keys. Clocks never create nodes; callers supply them.

    Attributes:
        id: Opaque, hashable, totally-ordered identity token
    """

    id: Any

    def __post_init__(self) -> None:
        if self.id is None:
            raise InvalidArgumentError("Node id cannot be None")

    @classmethod
    def generate(cls, provider: Optional[IdProvider] = None) -> Node:
        """Create a node with an identity drawn from ``provider``."""
        return cls((provider or RandomIdProvider()).id())

    def __str__(self) -> str:
        return str(self.id)

    def __repr__(self) -> str:
        return f"Node[id:{self.id}]"
