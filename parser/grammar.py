# parser/grammar.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# LALR(1) grammar and parser for causal queries using SLY

"""Causal query grammar implementation using SLY parser generator.

Grammar Features:
- Relations between two clock operands using one of five causal orderings
- Operands: event ids, ``@node`` references and ``[id:value;...]`` literals
- Standard Boolean operators (AND, OR, NOT) with proper precedence
- Parenthetical grouping for precedence override

Operator Precedence (lowest to highest):
- OR ('|'): left-associative
- AND ('&'): left-associative
- NOT ('!'): right-associative
- Relations bind tighter than every Boolean operator
"""

from sly import Parser

from core.ordering import EventOrdering
from core.tstamp import TSTAMP_MAX
from .lexer import QueryLexer
from .ast_nodes import RELATION_SYMBOLS, Expr, Operand, EventRef, NodeRef, ClockLiteral, Relation, Not, And, Or
from .exceptions import ParseError
from utils.logger import get_logger

_ORDERING_BY_SYMBOL = {symbol: ordering for ordering, symbol in RELATION_SYMBOLS.items()}


class _QueryParser(Parser):
    """SLY-based LALR(1) parser for causal queries.

    Attributes:
        tokens: Token types from QueryLexer
        precedence: Operator precedence and associativity rules
    """

    tokens = QueryLexer.tokens

    precedence = (
        ("left", "OR"),
        ("left", "AND"),
        ("right", "NOT"),
    )

    @_("expr")
    def start(self, p) -> Expr:
        return p.expr

    # Boolean structure
    @_("NOT expr")
    def expr(self, p) -> Expr:
        return Not(p.expr)

    @_("expr AND expr")
    def expr(self, p) -> Expr:
        return And(p.expr0, p.expr1)

    @_("expr OR expr")
    def expr(self, p) -> Expr:
        return Or(p.expr0, p.expr1)

    @_("LPAREN expr RPAREN")
    def expr(self, p) -> Expr:
        return p.expr

    @_("relation")
    def expr(self, p) -> Expr:
        return p.relation

    # Relations
    @_("operand relop operand")
    def relation(self, p) -> Relation:
        return Relation(p.operand0, p.relop, p.operand1)

    @_("LT", "GT", "EQ", "CONC", "NCOMP")
    def relop(self, p) -> EventOrdering:
        return _ORDERING_BY_SYMBOL[p[0]]

    # Operands
    @_("ID")
    def operand(self, p) -> Operand:
        """Bare identifier names a trace event."""
        return EventRef(p.ID)

    @_("AT ID")
    def operand(self, p) -> Operand:
        return NodeRef(p.ID)

    @_("LBRACKET entries RBRACKET")
    def operand(self, p) -> Operand:
        seen = set()
        for node_id, _value in p.entries:
            if node_id in seen:
                raise ParseError(f"Duplicate node '{node_id}' in clock literal")
            seen.add(node_id)
        return ClockLiteral(tuple(p.entries))

    @_("LBRACKET RBRACKET")
    def operand(self, p) -> Operand:
        return ClockLiteral(())

    @_("entry")
    def entries(self, p):
        return [p.entry]

    @_("entries SEMI entry")
    def entries(self, p):
        return p.entries + [p.entry]

    @_("ID COLON ID")
    def entry(self, p):
        """Clock literal component ``node:value``."""
        value_str = p.ID1
        if not value_str.isdigit() or int(value_str) > TSTAMP_MAX:
            raise ParseError(f"Invalid timestamp '{value_str}' for node '{p.ID0}'")
        return (p.ID0, int(value_str))

    def parse(self, text: str) -> Expr:
        """Parse query text into AST.

        Args:
            text: Causal query string to parse

        Returns:
            Root AST node representing the parsed query

        Raises:
            ParseError: If the query is empty or contains syntax errors
        """
        logger = get_logger()
        logger.debug(f"Parsing query: {text}")

        if not text.strip():
            raise ParseError("Input query is empty.")

        try:
            ast_result = super().parse(QueryLexer().tokenize(text))

            if ast_result is None:
                raise ParseError("Failed to parse query (syntax error).")

            logger.debug(f"Successfully parsed query into {type(ast_result).__name__}")
            return ast_result

        except ParseError:
            logger.debug("Parse error encountered")
            raise
        except Exception as e:
            logger.debug(f"Unexpected parsing error: {e}")
            raise ParseError(f"Parse failed: {e}") from e

    def error(self, token):
        """Handle syntax errors during parsing.

        Raises:
            ParseError: Always raises with detailed error information
        """
        if token:
            error_msg = (
                f"Syntax error near '{token.value}' "
                f"(type: {token.type}) at line {token.lineno}, position {token.index}"
            )
        else:
            error_msg = "Syntax error: Unexpected end of query"

        raise ParseError(error_msg)
