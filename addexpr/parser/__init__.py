"""
addexpr Parser Package

Builds expression trees from the lexer's token stream.

Key Features:
- Single pass with one token of lookahead
- Left-associative chained addition
- Explicit builder state with an end-of-input completeness check
- Structurally comparable AST nodes with source spans
"""

from .ast_nodes import (
    ASTVisitor, Expression, Empty, NumberLiteral, Identifier, Sum, SourceSpan,
)
from .builder import AstBuilder, BuildState, parse_expression, parse_i32
from .errors import (
    ParseError, UnexpectedTokenError, UnexpectedEndOfInputError,
    MalformedNumberError, NumberErrorKind, IntegerParseError,
)

__all__ = [
    # Builder
    "AstBuilder", "BuildState", "parse_expression", "parse_i32",

    # AST nodes
    "ASTVisitor", "Expression", "Empty", "NumberLiteral", "Identifier", "Sum",
    "SourceSpan",

    # Error handling
    "ParseError", "UnexpectedTokenError", "UnexpectedEndOfInputError",
    "MalformedNumberError", "NumberErrorKind", "IntegerParseError",
]
