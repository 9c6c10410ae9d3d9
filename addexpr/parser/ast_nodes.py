"""
Abstract Syntax Tree node definitions for addexpr.

The tree is a closed set of expression nodes. Nodes are immutable and
compare structurally; source spans ride along for diagnostics but are left
out of equality so hand-built trees can be compared with parsed ones.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Any
from dataclasses import dataclass, field

from ..lexer.tokens import SourceLocation


@dataclass(frozen=True)
class SourceSpan:
    """Represents a span of source code (start and end locations)."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        return f"{self.start.filename}:{self.start.column}-{self.end.column}"


class ASTVisitor:
    """
    Visitor for expression trees.

    `visit` dispatches to a `visit_<NodeClass>` method, falling back to
    `generic_visit`.
    """

    def visit(self, node: 'Expression') -> Any:
        method = getattr(self, f"visit_{type(node).__name__}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: 'Expression') -> Any:
        raise NotImplementedError(f"{type(self).__name__} cannot visit {type(node).__name__}")


class Expression(ABC):
    """Base class for all expression nodes."""

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['Expression']:
        """Get all child nodes."""


@dataclass(frozen=True)
class Empty(Expression):
    """Value held before any operand has been read. Never part of a built tree."""
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    def children(self) -> List[Expression]:
        return []


@dataclass(frozen=True)
class NumberLiteral(Expression):
    """Decimal integer literal, in the signed 32-bit range."""
    value: int
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    def children(self) -> List[Expression]:
        return []


@dataclass(frozen=True)
class Identifier(Expression):
    """Bare identifier."""
    name: str
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    def children(self) -> List[Expression]:
        return []


@dataclass(frozen=True)
class Sum(Expression):
    """
    Addition node.

    `right` is None only while the builder is waiting for the right-hand
    operand; trees handed back by the builder are always complete.
    """
    left: Expression
    right: Optional[Expression] = None
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    @property
    def is_complete(self) -> bool:
        return self.right is not None

    def children(self) -> List[Expression]:
        if self.right is None:
            return [self.left]
        return [self.left, self.right]
