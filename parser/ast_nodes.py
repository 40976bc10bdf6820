# parser/ast_nodes.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Abstract Syntax Tree node classes for causal queries

"""AST node classes for representing parsed causal queries.

A query relates two clock operands with one of the five causal orderings
and combines relations with Boolean connectives.

Node Types:
    EventRef: Clock captured right after a trace event
    NodeRef: A node's clock at the end of a replay
    ClockLiteral: Clock written inline as ``[id:value;...]``
    Relation: ``left OP right`` for OP in ``<``, ``>``, ``==``, ``~``, ``!~``
    Not, And, Or: Standard Boolean connectives

All nodes support the visitor design pattern for evaluation.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Tuple

from core.ordering import EventOrdering

# Surface syntax of each relation operator
RELATION_SYMBOLS = {
    EventOrdering.HAPPENS_BEFORE: "<",
    EventOrdering.HAPPENS_AFTER: ">",
    EventOrdering.IDENTICAL: "==",
    EventOrdering.CONCURRENT: "~",
    EventOrdering.NOT_COMPARABLE: "!~",
}


class Visitor(Protocol):
    """Interface for AST visitors implementing the visitor design pattern."""

    def visit_event_ref(self, n: EventRef): ...

    def visit_node_ref(self, n: NodeRef): ...

    def visit_clock_literal(self, n: ClockLiteral): ...

    def visit_relation(self, n: Relation): ...

    def visit_not(self, n: Not): ...

    def visit_and(self, n: And): ...

    def visit_or(self, n: Or): ...


@dataclass(frozen=True, slots=True)
class Expr:
    """Base class for all query AST nodes."""

    def accept(self, v: Visitor):
        """Dispatch to the appropriate visitor method.

        Args:
            v: Visitor instance to process this node

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        raise NotImplementedError

    def __str__(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class Operand(Expr):
    """Base class for expressions that denote a clock."""


@dataclass(frozen=True, slots=True)
class EventRef(Operand):
    """Clock of the node an event occurred at, captured right after the event.

    Attributes:
        eid: Trace event identifier
    """

    eid: str

    def accept(self, v: Visitor):
        return v.visit_event_ref(self)

    def __str__(self) -> str:
        return self.eid


@dataclass(frozen=True, slots=True)
class NodeRef(Operand):
    """Final clock of a node after the whole trace was replayed.

    Attributes:
        node: Node identifier
    """

    node: str

    def accept(self, v: Visitor):
        return v.visit_node_ref(self)

    def __str__(self) -> str:
        return f"@{self.node}"


@dataclass(frozen=True, slots=True)
class ClockLiteral(Operand):
    """Clock written inline.

    Attributes:
        entries: ``(node id, value)`` pairs in source order
    """

    entries: Tuple[Tuple[str, int], ...]

    def accept(self, v: Visitor):
        return v.visit_clock_literal(self)

    def __str__(self) -> str:
        body = ";".join(f"{node}:{value}" for node, value in self.entries)
        return f"[{body}]"


@dataclass(frozen=True, slots=True)
class Relation(Expr):
    """Assertion that ``compare_clocks(left, right)`` yields ``ordering``.

    Attributes:
        left: Left clock operand
        ordering: Expected causal ordering of left relative to right
        right: Right clock operand
    """

    left: Operand
    ordering: EventOrdering
    right: Operand

    def accept(self, v: Visitor):
        return v.visit_relation(self)

    def __str__(self) -> str:
        return f"{self.left} {RELATION_SYMBOLS[self.ordering]} {self.right}"


@dataclass(frozen=True, slots=True)
class Not(Expr):
    """Logical negation of a query.

    Attributes:
        operand: The expression being negated
    """

    operand: Expr

    def accept(self, v: Visitor):
        return v.visit_not(self)

    def __str__(self) -> str:
        if isinstance(self.operand, Relation):
            return f"!({self.operand})"
        return f"!{self.operand}"


@dataclass(frozen=True, slots=True)
class And(Expr):
    """Logical conjunction of two queries.

    Attributes:
        left: Left operand of the conjunction
        right: Right operand of the conjunction
    """

    left: Expr
    right: Expr

    def accept(self, v: Visitor):
        return v.visit_and(self)

    def __str__(self) -> str:
        return f"({self.left} & {self.right})"


@dataclass(frozen=True, slots=True)
class Or(Expr):
    """Logical disjunction of two queries.

    Attributes:
        left: Left operand of the disjunction
        right: Right operand of the disjunction
    """

    left: Expr
    right: Expr

    def accept(self, v: Visitor):
        return v.visit_or(self)

    def __str__(self) -> str:
        return f"({self.left} | {self.right})"


@dataclass(frozen=True, slots=True)
class Query:
    """One parsed line of a query file.

    Attributes:
        line: 1-based line number in the source text
        text: Query text with comments stripped
        expr: Parsed expression
    """

    line: int
    text: str
    expr: Expr
