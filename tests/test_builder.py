"""
Test suite for the addexpr AST builder.

Tests cover:
- Single operands and chained additions
- Left associativity
- Every rejected transition
- End-of-input handling
- Number literal range checks
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from addexpr.lexer.lexer import Lexer
from addexpr.lexer.tokens import TokenType
from addexpr.lexer.errors import InvalidCharacterError
from addexpr.parser.ast_nodes import ASTVisitor, Empty, NumberLiteral, Identifier, Sum
from addexpr.parser.builder import AstBuilder, BuildState, parse_expression
from addexpr.parser.errors import (
    ParseError, UnexpectedTokenError, UnexpectedEndOfInputError,
    MalformedNumberError, NumberErrorKind,
)


class Evaluator(ASTVisitor):
    """Left-to-right evaluator used to check tree shape."""

    def __init__(self, env=None):
        self.env = env or {}
        self.order = []

    def visit_NumberLiteral(self, node):
        self.order.append(node.value)
        return node.value

    def visit_Identifier(self, node):
        self.order.append(node.name)
        return self.env[node.name]

    def visit_Sum(self, node):
        left = node.left.accept(self)
        return left + node.right.accept(self)


class TestAstBuilder(unittest.TestCase):
    """Test cases for successful builds."""

    def _build(self, source: str):
        return AstBuilder.from_lexer(Lexer(source)).build()

    def test_simple_add(self):
        self.assertEqual(self._build("1 + 2"), Sum(NumberLiteral(1), NumberLiteral(2)))

    def test_chained_add_is_left_associative(self):
        self.assertEqual(
            self._build("1 + 2 + 3"),
            Sum(Sum(NumberLiteral(1), NumberLiteral(2)), NumberLiteral(3)),
        )

    def test_single_number(self):
        self.assertEqual(self._build("42"), NumberLiteral(42))

    def test_single_identifier(self):
        self.assertEqual(self._build("add"), Identifier("add"))
        self.assertEqual(self._build("x"), Identifier("x"))

    def test_mixed_operands(self):
        self.assertEqual(
            self._build("x + 1 + y"),
            Sum(Sum(Identifier("x"), NumberLiteral(1)), Identifier("y")),
        )

    def test_whitespace_is_transparent(self):
        expected = Sum(Identifier("a"), Identifier("b"))
        for source in ("a+b", "a +b", "a+ b", "   a   +   b   "):
            with self.subTest(source=source):
                self.assertEqual(self._build(source), expected)

    def test_i32_bounds(self):
        self.assertEqual(self._build("2147483647"), NumberLiteral(2147483647))
        self.assertEqual(self._build("0"), NumberLiteral(0))
        self.assertEqual(self._build("00042"), NumberLiteral(42))

    def test_sum_of_literals_matches_naive_sum(self):
        cases = [
            [5],
            [1, 2],
            [10, 20, 30, 40],
            [2147483647, 1, 0],
            list(range(50)),
        ]
        for numbers in cases:
            source = " + ".join(str(n) for n in numbers)
            with self.subTest(source=source):
                evaluator = Evaluator()
                self.assertEqual(self._build(source).accept(evaluator), sum(numbers))
                self.assertEqual(evaluator.order, numbers)

    def test_tree_leans_left(self):
        tree = self._build("a + b + c + d")
        depth = 0
        node = tree
        while isinstance(node, Sum):
            self.assertNotIsInstance(node.right, Sum)
            node = node.left
            depth += 1
        self.assertEqual(depth, 3)
        self.assertEqual(node, Identifier("a"))

    def test_identifiers_evaluated_from_env(self):
        tree = self._build("x + y + 1")
        self.assertEqual(tree.accept(Evaluator({"x": 3, "y": 4})), 8)

    def test_result_has_no_incomplete_sum(self):
        def walk(node):
            yield node
            for child in node.children():
                yield from walk(child)

        for node in walk(self._build("1 + a + 2 + b")):
            self.assertNotIsInstance(node, Empty)
            if isinstance(node, Sum):
                self.assertTrue(node.is_complete)

    def test_spans(self):
        tree = self._build("12 + ab")
        self.assertEqual((tree.span.start.offset, tree.span.end.offset), (0, 7))
        self.assertEqual((tree.left.span.start.offset, tree.left.span.end.offset), (0, 2))
        self.assertEqual((tree.right.span.start.offset, tree.right.span.end.offset), (5, 7))

    def test_spans_ignored_by_equality(self):
        self.assertEqual(self._build("  7"), NumberLiteral(7))
        self.assertNotEqual(self._build("7"), NumberLiteral(8))

    def test_parse_expression(self):
        self.assertEqual(parse_expression("1+a"), Sum(NumberLiteral(1), Identifier("a")))

    def test_build_from_token_list(self):
        tokens = Lexer("3 + 4").tokenize()
        self.assertEqual(AstBuilder(tokens).build(), Sum(NumberLiteral(3), NumberLiteral(4)))

    def test_build_is_one_shot(self):
        builder = AstBuilder.from_lexer(Lexer("1"))
        builder.build()
        with self.assertRaises(RuntimeError):
            builder.build()

    def test_final_state(self):
        builder = AstBuilder.from_lexer(Lexer("1 + 2"))
        builder.build()
        self.assertIs(builder.state, BuildState.HAVE_VALUE)

    def test_every_token_type_has_handler(self):
        builder = AstBuilder([])
        self.assertEqual(set(builder._handlers), set(TokenType))


class TestAstBuilderErrors(unittest.TestCase):
    """Test cases for rejected input."""

    def _error(self, source: str, error_type=ParseError):
        with self.assertRaises(error_type) as ctx:
            parse_expression(source, "expr.add")
        return ctx.exception

    def test_leading_operator(self):
        err = self._error("+ 3", UnexpectedTokenError)
        self.assertEqual(err.token.type, TokenType.PLUS)
        self.assertEqual(err.location.offset, 0)
        self.assertEqual(err.diagnostic.code, "P001")

    def test_two_operands(self):
        err = self._error("1 2", UnexpectedTokenError)
        self.assertEqual(err.token.type, TokenType.NUMBER_LITERAL)
        self.assertEqual(err.token.lexeme, "2")
        self.assertEqual(err.location.offset, 2)

    def test_operand_after_complete_sum(self):
        err = self._error("1 + 2 x", UnexpectedTokenError)
        self.assertEqual(err.token.type, TokenType.IDENTIFIER)
        self.assertEqual(err.token.lexeme, "x")

    def test_two_operators(self):
        err = self._error("1 + + 2", UnexpectedTokenError)
        self.assertEqual(err.token.type, TokenType.PLUS)
        self.assertEqual(err.location.offset, 4)

    def test_parens_rejected(self):
        for source, token_type in (("(1)", TokenType.LEFT_PAREN), ("1 )", TokenType.RIGHT_PAREN),
                                   ("1 + (2)", TokenType.LEFT_PAREN)):
            with self.subTest(source=source):
                err = self._error(source, UnexpectedTokenError)
                self.assertEqual(err.token.type, token_type)
                self.assertEqual(err.diagnostic.code, "P004")

    def test_overflow(self):
        err = self._error("99999999999999", MalformedNumberError)
        self.assertIs(err.kind, NumberErrorKind.OVERFLOW)
        self.assertEqual(err.literal, "99999999999999")

    def test_just_past_i32_max(self):
        err = self._error("1 + 2147483648", MalformedNumberError)
        self.assertIs(err.kind, NumberErrorKind.OVERFLOW)
        self.assertEqual(err.location.offset, 4)

    def test_number_checked_before_transition(self):
        # the literal fails before the missing '+' is noticed
        err = self._error("1 99999999999", MalformedNumberError)
        self.assertIs(err.kind, NumberErrorKind.OVERFLOW)

    def test_trailing_operator(self):
        err = self._error("1 +", UnexpectedEndOfInputError)
        self.assertEqual(err.diagnostic.code, "P003")
        self.assertEqual(err.location.offset, 3)

    def test_trailing_operator_with_whitespace(self):
        err = self._error("1 + 2 +   ", UnexpectedEndOfInputError)
        self.assertEqual(err.location.offset, 10)

    def test_empty_input(self):
        self._error("", UnexpectedEndOfInputError)
        self._error("    ", UnexpectedEndOfInputError)

    def test_lexer_error_propagates_unchanged(self):
        with self.assertRaises(InvalidCharacterError) as ctx:
            parse_expression("1 + 2 * 3")
        self.assertNotIsInstance(ctx.exception, ParseError)
        self.assertEqual(ctx.exception.char, "*")

    def test_first_error_wins(self):
        err = self._error("+ + 1 2", UnexpectedTokenError)
        self.assertEqual(err.location.offset, 0)

    def test_diagnostic_rendering(self):
        err = self._error("1 2")
        rendered = str(err)
        self.assertIn("ERROR[P001]: Unexpected token NUMBER_LITERAL('2')", rendered)
        self.assertIn("--> expr.add:3", rendered)


if __name__ == '__main__':
    unittest.main()
