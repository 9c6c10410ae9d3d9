"""
addexpr Lexer - turns source text into tokens

Single pass, one character of lookahead. Every rule peeks the next code
point first and only consumes it once it knows the character belongs to
the token being built.
"""

import logging
from typing import Iterator, List, Optional

from .tokens import Token, TokenType, SourceLocation, SINGLE_CHAR_TOKENS
from .errors import create_invalid_character_error

logger = logging.getLogger(__name__)


def _is_ascii_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_ascii_alpha(char: str) -> bool:
    return char.isascii() and char.isalpha()


class Lexer:
    """
    addexpr lexical analyzer.

    A lazy, forward-only iterator over the tokens of `source`. It cannot be
    rewound; build a fresh Lexer to tokenize the same text again.
    """

    def __init__(self, source: str, filename: str = "<string>"):
        """
        Initialize the lexer with source text.

        Args:
            source: Expression source
            filename: Name used in error locations
        """
        self.source = source
        self.filename = filename
        self.pos = 0

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def next_token(self) -> Optional[Token]:
        """
        Return the next token, or None once the source is exhausted.

        Raises:
            InvalidCharacterError: If the next character starts no token
        """
        current_char = self._peek()
        if current_char is None:
            return None

        start_pos = self.pos

        token_type = SINGLE_CHAR_TOKENS.get(current_char)
        if token_type is not None:
            self._advance()
            return Token(token_type, start_pos, self.pos, self.source)

        if current_char == " ":
            self._advance_while(lambda c: c == " ")
            return Token(TokenType.WHITESPACE, start_pos, self.pos, self.source)

        if _is_ascii_digit(current_char):
            self._advance_while(_is_ascii_digit)
            return Token(TokenType.NUMBER_LITERAL, start_pos, self.pos, self.source)

        if _is_ascii_alpha(current_char):
            self._advance_while(_is_ascii_alpha)
            return Token(TokenType.IDENTIFIER, start_pos, self.pos, self.source)

        logger.debug("rejecting %r at offset %d of %s", current_char, start_pos, self.filename)
        raise create_invalid_character_error(
            current_char,
            SourceLocation(self.filename, start_pos)
        )

    def tokenize(self) -> List[Token]:
        """Consume the rest of the source and return its tokens as a list."""
        return list(self)

    def _peek(self) -> Optional[str]:
        """Next character without consuming it, None at end of input."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def _advance(self):
        self.pos += 1

    def _advance_while(self, predicate):
        # take_while would swallow the first non-matching character
        while True:
            char = self._peek()
            if char is None or not predicate(char):
                break
            self._advance()


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Expression source
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        InvalidCharacterError: If the source contains a character outside the grammar
    """
    return Lexer(source, filename).tokenize()
