"""
addexpr AST builder

Folds a token stream into a single expression tree in one pass. The
builder holds exactly one expression (`current`) plus an explicit state,
and replaces `current` wholesale as each token arrives. Chained additions
fold the whole expression built so far into the next `Sum`'s left side,
which makes `a + b + c` come out as `(a + b) + c`.
"""

import logging
from enum import Enum, auto
from typing import Callable, Dict, Iterable, Optional

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.lexer import Lexer
from .ast_nodes import Expression, Empty, NumberLiteral, Identifier, Sum, SourceSpan
from .errors import (
    IntegerParseError, MalformedNumberError, NumberErrorKind,
    create_unexpected_token_error, create_unexpected_eof_error,
)

logger = logging.getLogger(__name__)

I32_MIN = -2 ** 31
I32_MAX = 2 ** 31 - 1


def parse_i32(text: str) -> int:
    """
    Parse a base-10 signed 32-bit integer.

    Accepts one optional leading sign and ASCII digits only. Unlike int(),
    whitespace, underscores and non-ASCII digits are rejected.

    Raises:
        IntegerParseError: with kind EMPTY, INVALID_DIGIT, OVERFLOW or UNDERFLOW
    """
    if not text:
        raise IntegerParseError(NumberErrorKind.EMPTY)

    negative = False
    digits = text
    if text[0] in "+-":
        negative = text[0] == "-"
        digits = text[1:]
        if not digits:
            raise IntegerParseError(NumberErrorKind.INVALID_DIGIT)

    # Digits are checked left to right, so an overflow reported before a
    # later bad digit wins.
    value = 0
    for char in digits:
        if not "0" <= char <= "9":
            raise IntegerParseError(NumberErrorKind.INVALID_DIGIT)
        digit = ord(char) - ord("0")
        if negative:
            value = value * 10 - digit
            if value < I32_MIN:
                raise IntegerParseError(NumberErrorKind.UNDERFLOW)
        else:
            value = value * 10 + digit
            if value > I32_MAX:
                raise IntegerParseError(NumberErrorKind.OVERFLOW)

    return value


class BuildState(Enum):
    """Where the builder is in the grammar."""
    AWAITING_OPERAND = auto()        # nothing read yet, current is Empty
    HAVE_VALUE = auto()              # current is a complete expression
    AWAITING_RIGHT_OPERAND = auto()  # current is a Sum with no right side


class AstBuilder:
    """
    Builds an addexpr expression tree from a token stream.

    Grammar:
        expression := operand (PLUS operand)*
        operand    := NUMBER_LITERAL | IDENTIFIER

    Whitespace tokens are skipped. Parentheses are lexed but not part of
    the grammar yet and are rejected.
    """

    def __init__(self, tokens: Iterable[Token], filename: Optional[str] = None):
        """
        Args:
            tokens: Token source, normally a Lexer
            filename: Name used in error locations; defaults to the lexer's
        """
        if filename is None:
            filename = getattr(tokens, "filename", "<string>")
        self.tokens = iter(tokens)
        self.filename = filename
        self.state = BuildState.AWAITING_OPERAND
        self.current: Expression = Empty()
        self.end_offset = 0
        self._built = False

        self._handlers: Dict[TokenType, Callable[[Token], None]] = {
            TokenType.NUMBER_LITERAL: self._apply_operand,
            TokenType.IDENTIFIER: self._apply_operand,
            TokenType.PLUS: self._apply_plus,
            TokenType.WHITESPACE: self._skip,
            TokenType.LEFT_PAREN: self._reject,
            TokenType.RIGHT_PAREN: self._reject,
        }
        missing = [t.name for t in TokenType if t not in self._handlers]
        if missing:
            raise RuntimeError(f"no builder handler for token types: {', '.join(missing)}")

    @classmethod
    def from_lexer(cls, lexer: Lexer) -> 'AstBuilder':
        return cls(lexer, lexer.filename)

    def build(self) -> Expression:
        """
        Consume every token and return the finished expression.

        The builder is single use; calling build() twice raises RuntimeError.

        Raises:
            UnexpectedTokenError: A token in a position the grammar forbids
            MalformedNumberError: A number literal outside the signed 32-bit range
            UnexpectedEndOfInputError: Empty input, or input ending in '+'
            LexerError: Propagated unchanged from the lexer
        """
        if self._built:
            raise RuntimeError("AstBuilder.build() can only be called once")
        self._built = True

        for token in self.tokens:
            self.end_offset = token.end
            self._handlers[token.type](token)

        return self._finish()

    def _apply_operand(self, token: Token):
        operand = self._make_operand(token)

        if self.state is BuildState.AWAITING_OPERAND:
            self._transition(operand, BuildState.HAVE_VALUE)
        elif self.state is BuildState.AWAITING_RIGHT_OPERAND:
            left = self.current.left
            self._transition(
                Sum(left, operand, span=self._span(left.span.start.offset, token.end)),
                BuildState.HAVE_VALUE,
            )
        else:
            self._fail(token, "Two operands need a '+' between them.")

    def _apply_plus(self, token: Token):
        if self.state is BuildState.HAVE_VALUE:
            left = self.current
            self._transition(
                Sum(left, None, span=self._span(left.span.start.offset, token.end)),
                BuildState.AWAITING_RIGHT_OPERAND,
            )
        elif self.state is BuildState.AWAITING_OPERAND:
            self._fail(token, "'+' needs an operand on its left.")
        else:
            self._fail(token, "Two '+' operators need an operand between them.")

    def _skip(self, token: Token):
        pass

    def _reject(self, token: Token):
        self._fail(token, "Grouping with parentheses is not supported yet.")

    def _make_operand(self, token: Token) -> Expression:
        span = self._span(token.start, token.end)
        if token.type is TokenType.IDENTIFIER:
            return Identifier(token.lexeme, span=span)

        literal = token.lexeme
        try:
            value = parse_i32(literal)
        except IntegerParseError as e:
            logger.debug("malformed number %r: %s", literal, e.kind.name)
            raise MalformedNumberError(e.kind, literal, token.location(self.filename), token=token) from e
        return NumberLiteral(value, span=span)

    def _transition(self, expr: Expression, state: BuildState):
        logger.debug("%s -> %s: %r", self.state.name, state.name, expr)
        self.current = expr
        self.state = state

    def _finish(self) -> Expression:
        if self.state is BuildState.HAVE_VALUE:
            return self.current

        location = SourceLocation(self.filename, self.end_offset)
        if self.state is BuildState.AWAITING_RIGHT_OPERAND:
            expected = "an operand after '+'"
        else:
            expected = "an operand"
        logger.debug("input ended in state %s", self.state.name)
        raise create_unexpected_eof_error(expected, location)

    def _fail(self, token: Token, reason: str):
        logger.debug("unexpected %s in state %s", token, self.state.name)
        raise create_unexpected_token_error(token, token.location(self.filename), reason)

    def _span(self, start: int, end: int) -> SourceSpan:
        return SourceSpan(SourceLocation(self.filename, start), SourceLocation(self.filename, end))


def parse_expression(source: str, filename: str = "<string>") -> Expression:
    """
    Convenience function to lex and build an expression in one call.

    Args:
        source: Expression source
        filename: Filename for error reporting

    Returns:
        The expression tree

    Raises:
        LexerError: If the source contains a character outside the grammar
        ParseError: If the tokens do not form an expression
    """
    return AstBuilder.from_lexer(Lexer(source, filename)).build()
