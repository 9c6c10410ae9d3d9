"""
Error handling for the addexpr parser.

Syntax errors are raised at the first offending token; there is no
recovery and no aggregation of later errors.
"""

from enum import Enum
from typing import Optional

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the builder encounters a syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
        )
        self.token = token

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class UnexpectedTokenError(ParseError):
    """A valid token in a position the grammar does not allow."""


class UnexpectedEndOfInputError(ParseError):
    """Input ended before a complete expression was read."""


class NumberErrorKind(Enum):
    """Why a number literal failed to parse as a signed 32-bit integer."""
    EMPTY = "cannot parse integer from empty string"
    INVALID_DIGIT = "invalid digit found in string"
    OVERFLOW = "number too large to fit in target type"
    UNDERFLOW = "number too small to fit in target type"


class IntegerParseError(ValueError):
    """Raised by parse_i32; carries the failure kind."""

    def __init__(self, kind: NumberErrorKind):
        super().__init__(kind.value)
        self.kind = kind


class MalformedNumberError(ParseError):
    """A number literal that is not a valid signed 32-bit integer."""

    def __init__(self, kind: NumberErrorKind, literal: str, location: SourceLocation,
                 token: Optional[Token] = None):
        super().__init__(
            message=f"Malformed number literal {literal!r}: {kind.value}",
            location=location,
            token=token,
            code="P002",
            help_text=_NUMBER_HELP[kind],
        )
        self.kind = kind
        self.literal = literal


_NUMBER_HELP = {
    NumberErrorKind.EMPTY: "A number literal needs at least one digit.",
    NumberErrorKind.INVALID_DIGIT: "Number literals may only contain the digits 0-9.",
    NumberErrorKind.OVERFLOW: "Number literals must be at most 2147483647.",
    NumberErrorKind.UNDERFLOW: "Number literals must be at least -2147483648.",
}


PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Malformed number literal",
    "P003": "Unexpected end of input",
    "P004": "Unsupported token",
}


# Helper functions for creating common parser errors

def create_unexpected_token_error(token: Token, location: SourceLocation, reason: str) -> UnexpectedTokenError:
    """Create an error for a token the grammar does not allow here."""
    if token.type in (TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN):
        return UnexpectedTokenError(
            message=f"Unsupported token {token}",
            location=location,
            token=token,
            code="P004",
            help_text="Grouping with parentheses is not supported yet.",
        )

    return UnexpectedTokenError(
        message=f"Unexpected token {token}",
        location=location,
        token=token,
        code="P001",
        help_text=reason,
    )


def create_unexpected_eof_error(expected: str, location: SourceLocation) -> UnexpectedEndOfInputError:
    """Create an error for unexpected end of input."""
    return UnexpectedEndOfInputError(
        message=f"Unexpected end of input, expected {expected}",
        location=location,
        code="P003",
        help_text=f"The input ended while the parser was still expecting {expected}.",
    )
