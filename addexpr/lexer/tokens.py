"""
Token definitions for the addexpr lexer.

The language is deliberately tiny: identifiers, decimal number literals,
runs of spaces, parentheses and the plus operator.

Tokens do not copy their text out of the source. Each one keeps the
code-point range it covers and a reference to the shared source string,
and the text is only sliced out when `lexeme` is asked for.
"""

from enum import Enum, auto
from dataclasses import dataclass, field


class TokenType(Enum):
    """Enumeration of all token types in addexpr."""

    # Operands
    IDENTIFIER = auto()             # add, x, total
    NUMBER_LITERAL = auto()         # 42, 007

    # Layout
    WHITESPACE = auto()             # one run of spaces, collapsed

    # Punctuation (lexed, reserved for grouping)
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )

    # Operators
    PLUS = auto()                   # +


# Single-character tokens, looked up before the run-based rules
SINGLE_CHAR_TOKENS = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "+": TokenType.PLUS,
}

OPERAND_TYPES = frozenset({TokenType.IDENTIFIER, TokenType.NUMBER_LITERAL})


@dataclass(frozen=True)
class SourceLocation:
    """
    A position in the source text.

    Used for error reporting. `offset` counts code points from the start
    of the source; there are no newlines in the grammar so a column is
    all we need.
    """
    filename: str
    offset: int

    @property
    def column(self) -> int:
        return self.offset + 1

    def __str__(self) -> str:
        return f"{self.filename}:{self.column}"


@dataclass(frozen=True)
class Token:
    """
    A lexical token in addexpr.

    `start` and `end` form a half-open range into `source`. Two tokens are
    equal when they have the same type and cover the same range.
    """
    type: TokenType
    start: int
    end: int
    source: str = field(repr=False, compare=False)

    @property
    def lexeme(self) -> str:
        """Raw text of the token, sliced from the source on demand."""
        return self.source[self.start:self.end]

    @property
    def is_operand(self) -> bool:
        return self.type in OPERAND_TYPES

    def location(self, filename: str = "<string>") -> SourceLocation:
        return SourceLocation(filename, self.start)

    def __str__(self) -> str:
        if self.type in OPERAND_TYPES:
            return f"{self.type.name}({self.lexeme!r})"
        return self.type.name
