# parser/lexer.py
# This file is part of Chronicle - Vector Clock Causality Tracking
#
# Lexical analyzer for causal query tokenization using SLY

"""Lexical analyzer for causal query strings.

Supported Tokens:
- Relations: <, >, ==, ~, !~
- Connectives: !, &, |, (, )
- Clock literals: [, ], :, ;
- Node references: @
- Identifiers: event ids, node ids and timestamp values
- Comments: '#' to end of line, ignored
- Whitespace: ignored during tokenization
"""

from sly import Lexer
from utils.logger import get_logger


class QueryLexer(Lexer):
    """SLY-based lexer for causal query tokenization.

    Patterns are tried in definition order, so ``!~`` is listed before
    ``!`` and ``==`` is a single token.

    Attributes:
        tokens: Set of valid token types
        ignore: Characters to skip during tokenization
    """

    tokens = {
        "ID",
        "AT",
        "LBRACKET",
        "RBRACKET",
        "COLON",
        "SEMI",
        "NCOMP",
        "CONC",
        "EQ",
        "LT",
        "GT",
        "NOT",
        "AND",
        "OR",
        "LPAREN",
        "RPAREN",
    }

    ignore = " \t\r\n"
    ignore_comment = r"\#.*"

    # Relation operators
    NCOMP = r"!~"
    CONC = r"~"
    EQ = r"=="
    LT = r"<"
    GT = r">"

    # Boolean connectives and grouping
    NOT = r"!"
    AND = r"&"
    OR = r"\|"
    LPAREN = r"\("
    RPAREN = r"\)"

    # Operand punctuation
    AT = r"@"
    LBRACKET = r"\["
    RBRACKET = r"\]"
    COLON = r":"
    SEMI = r";"

    # Event ids, node ids and numeric values share one pattern
    ID = r"[a-zA-Z0-9_][a-zA-Z0-9_.\-]*"

    def error(self, t):
        """Handle illegal characters during tokenization.

        Raises:
            ValueError: Always raised with character and position information
        """
        logger = get_logger()

        illegal_char = t.value[0]
        error_pos = self.index

        logger.debug(f"Illegal character '{illegal_char}' at position {error_pos}")

        self.index += 1

        raise ValueError(
            f"Illegal character '{illegal_char}' encountered at position {error_pos}"
        )
