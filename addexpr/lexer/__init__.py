"""
addexpr Lexer Package

Tokenizer for addexpr source text.

Key Features:
- Lazy, single-pass iteration with one character of lookahead
- Runs of spaces collapse into a single whitespace token
- Tokens reference the source by offset instead of copying text
- ASCII-only identifiers and numbers
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, tokenize_string
from .errors import Diagnostic, LexerError, InvalidCharacterError

__all__ = [
    "Lexer",
    "tokenize_string",
    "Token",
    "TokenType",
    "SourceLocation",
    "Diagnostic",
    "LexerError",
    "InvalidCharacterError",
]
