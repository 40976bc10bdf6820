# replay/queries.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Evaluation of causal queries against a replayed trace

from dataclasses import dataclass
from typing import List

from core.node import Node
from core.ordering import EventOrdering
from core.vector_clock import VectorClock, compare_clocks
from parser.ast_nodes import And, ClockLiteral, EventRef, Expr, NodeRef, Not, Or, Query, Relation
from utils.logger import get_logger

from .runner import ReplayResult


class QueryError(Exception):
    """Raised when a query file is unusable, or a query refers to an event or
    node the replay does not know."""


@dataclass(frozen=True, slots=True)
class QueryOutcome:
    query: Query
    holds: bool


class QueryEvaluator:
    """Visitor that evaluates a query AST to a bool over a ReplayResult."""

    def __init__(self, result: ReplayResult):
        self._result = result

    def evaluate(self, expr: Expr) -> bool:
        return expr.accept(self)

    # Operands resolve to clocks
    def visit_event_ref(self, n: EventRef) -> VectorClock:
        clock = self._result.clock_at(n.eid)
        if clock is None:
            raise QueryError(f"Unknown event '{n.eid}'")
        return clock

    def visit_node_ref(self, n: NodeRef) -> VectorClock:
        clock = self._result.final_clock(n.node)
        if clock is None:
            raise QueryError(f"Unknown node '{n.node}'")
        return clock

    def visit_clock_literal(self, n: ClockLiteral) -> VectorClock:
        return VectorClock.from_snapshot({Node(node_id): value for node_id, value in n.entries})

    def visit_relation(self, n: Relation) -> bool:
        left = n.left.accept(self)
        right = n.right.accept(self)
        actual: EventOrdering = compare_clocks(left, right)
        get_logger().debug(f"      {n.left} vs {n.right}: {actual} (expected {n.ordering})")
        return actual is n.ordering

    def visit_not(self, n: Not) -> bool:
        return not n.operand.accept(self)

    def visit_and(self, n: And) -> bool:
        return n.left.accept(self) and n.right.accept(self)

    def visit_or(self, n: Or) -> bool:
        return n.left.accept(self) or n.right.accept(self)


def evaluate_queries(queries: List[Query], result: ReplayResult) -> List[QueryOutcome]:
    """Evaluate each query against ``result`` and log its outcome.

    Raises:
        QueryError: A query names an unknown event or node
    """
    logger = get_logger()
    evaluator = QueryEvaluator(result)
    outcomes: List[QueryOutcome] = []

    for query in queries:
        try:
            holds = evaluator.evaluate(query.expr)
        except QueryError as e:
            raise QueryError(f"Line {query.line}: {e}") from e
        logger.query_result(query.text, holds)
        outcomes.append(QueryOutcome(query=query, holds=holds))

    return outcomes
