"""
Error handling for the addexpr lexer.

Lexical errors mean the input contains text the grammar does not define at
all. They are kept apart from the parser's syntax errors, which are about
valid tokens showing up in the wrong place.
"""

from typing import Optional
from dataclasses import dataclass

from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Error report shared by the lexer and the parser."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the lexer meets input it cannot tokenize.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
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

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class InvalidCharacterError(LexerError):
    """A character that starts no token."""

    def __init__(self, char: str, location: SourceLocation, help_text: Optional[str] = None):
        super().__init__(
            message=f"Invalid character: {char!r}",
            location=location,
            code="L001",
            help_text=help_text,
        )
        self.char = char


LEXER_ERROR_CODES = {
    "L001": "Invalid character",
}


def create_invalid_character_error(char: str, location: SourceLocation) -> InvalidCharacterError:
    """Create an error for an invalid character."""
    if char == "\t" or char == "\n" or char == "\r":
        help_text = "Only plain spaces are allowed between tokens."
    elif not char.isascii() and (char.isalpha() or char.isdigit()):
        help_text = "Identifiers and numbers are limited to ASCII letters and digits."
    elif char.isprintable():
        help_text = f"The character {char!r} is not valid in an addexpr expression."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return InvalidCharacterError(char, location, help_text=help_text)
