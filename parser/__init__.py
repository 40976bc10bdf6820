# parser/__init__.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Query parsing components for causal assertions over replayed traces

"""Causal query parsing.

Queries assert how two clocks are causally related and may be combined with
Boolean connectives. They are evaluated against a replayed trace by
``replay.queries``.

Core Functions:
    parse: Converts a single query string into an Abstract Syntax Tree
    parse_queries: Parses a query file, one query per non-blank line

Example:
    >>> from parser import parse
    >>> ast = parse("e1 < e4 & !(e2 ~ e3)")
    >>> str(ast)
    '(e1 < e4 & !(e2 ~ e3))'
"""

from typing import List

from .exceptions import ParseError
from .grammar import _QueryParser
from .ast_nodes import Query
from utils.logger import get_logger


def parse(source: str):
    """Parse a query string into Abstract Syntax Tree representation.

    Uses a fresh parser instance for each invocation.

    Args:
        source: Well-formed query string to parse

    Returns:
        Root AST node representing the parsed query

    Raises:
        ParseError: Query syntax is malformed
    """
    logger = get_logger()
    logger.debug(f"Parsing query: {source}")

    parser = _QueryParser()

    try:
        return parser.parse(source)

    except ParseError:
        logger.debug("ParseError encountered during query parsing")
        raise

    except Exception as exc:
        logger.debug(f"Unexpected parsing error: {type(exc).__name__}: {exc}")
        raise ParseError(str(exc)) from exc


def parse_queries(text: str) -> List[Query]:
    """Parse a multi-line query file.

    Each non-blank line holds one query; ``#`` starts a comment that runs to
    the end of the line.

    Args:
        text: Contents of a query file

    Returns:
        Parsed queries in file order

    Raises:
        ParseError: A line fails to parse; the message names the line number
    """
    queries: List[Query] = []
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue
        try:
            expr = parse(line)
        except ParseError as e:
            raise ParseError(f"Line {lineno}: {e}") from e
        queries.append(Query(line=lineno, text=line, expr=expr))

    get_logger().debug(f"Parsed {len(queries)} queries")
    return queries


__all__ = ["parse", "parse_queries", "ParseError", "Query"]

__version__ = "1.0.0"
__description__ = "Causal query parsing components"
