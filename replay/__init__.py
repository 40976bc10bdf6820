# replay/__init__.py
# This file is part of Chronicle - Vector Clock Causality Tracking

"""Trace replay and causal query evaluation.

This package provides:
  • TraceReplayer: drives per-node vector clocks over a CSV trace
  • ReplayResult: clocks, transitions and conflicts observed during replay
  • ConflictRecord: a receive rejected because the clocks were concurrent
  • evaluate_queries: checks parsed causal queries against a ReplayResult
"""

from .runner import TraceReplayer, ReplayResult, ConflictRecord
from .queries import QueryEvaluator, QueryError, QueryOutcome, evaluate_queries

__all__ = [
    "TraceReplayer",
    "ReplayResult",
    "ConflictRecord",
    "QueryEvaluator",
    "QueryError",
    "QueryOutcome",
    "evaluate_queries",
]
