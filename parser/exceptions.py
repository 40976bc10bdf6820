# parser/exceptions.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Custom exceptions for causal query parsing

"""Domain-specific exceptions for causal query processing."""


class ParseError(RuntimeError):
    """Exception raised when query parsing fails due to syntax errors.

    Indicates that the input does not conform to the causal query grammar,
    for example a missing operand, an unknown operator, or a clock literal
    component whose value is not a non-negative integer.
    """

    pass
