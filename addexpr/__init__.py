"""
addexpr

Front end for a tiny addition-only expression language: a lexer that turns
source text into tokens and a builder that folds those tokens into a
left-associative expression tree.

Architecture:
    addexpr/
    ├── lexer/           # Tokenization
    └── parser/          # AST construction
"""

import logging

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, SourceLocation, LexerError, InvalidCharacterError, tokenize_string
from .parser import (
    AstBuilder, parse_expression, Expression, Empty, NumberLiteral, Identifier, Sum,
    ParseError, UnexpectedTokenError, UnexpectedEndOfInputError, MalformedNumberError,
    NumberErrorKind,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core classes
    "Lexer",
    "AstBuilder",
    "tokenize_string",
    "parse_expression",

    # Tokens and tree
    "Token", "TokenType", "SourceLocation",
    "Expression", "Empty", "NumberLiteral", "Identifier", "Sum",

    # Errors
    "LexerError", "InvalidCharacterError",
    "ParseError", "UnexpectedTokenError", "UnexpectedEndOfInputError",
    "MalformedNumberError", "NumberErrorKind",

    # Version info
    "__version__",
    "__license__",
]
