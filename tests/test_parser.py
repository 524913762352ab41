"""Unit tests for parser module."""

import unittest

import sympy as sp

from mathpro_pkg.config import MAX_INPUT_LENGTH
from mathpro_pkg.parser import (
    format_number,
    is_balanced,
    parse_preprocessed,
    preprocess,
    split_statements,
)
from mathpro_pkg.types import ParseError, ValidationError


class TestPreprocess(unittest.TestCase):
    """Test preprocessing functions."""

    def test_basic_arithmetic(self):
        self.assertEqual(preprocess("2+2"), "2+2")
        self.assertEqual(preprocess("10/5"), "10/5")

    def test_exponent_conversion(self):
        self.assertEqual(preprocess("2^3"), "2**3")
        self.assertEqual(preprocess("A^2"), "A**2")

    def test_unicode_symbols(self):
        self.assertEqual(preprocess("3 × 4 ÷ 2"), "3 * 4 / 2")
        self.assertEqual(preprocess("2π"), "2pi")
        self.assertEqual(preprocess("5 − 1"), "5 - 1")

    def test_strips_whitespace(self):
        self.assertEqual(preprocess("  1 + 1  "), "1 + 1")

    def test_forbidden_tokens(self):
        for text in ["__import__('os')", "import sys", "exec(1)"]:
            with self.subTest(text=text):
                with self.assertRaises(ValidationError) as ctx:
                    preprocess(text)
                self.assertEqual(ctx.exception.code, "FORBIDDEN_TOKEN")

    def test_input_length_limit(self):
        with self.assertRaises(ValidationError) as ctx:
            preprocess("1" * (MAX_INPUT_LENGTH + 1))
        self.assertEqual(ctx.exception.code, "TOO_LONG")

    def test_empty_input(self):
        with self.assertRaises(ValidationError) as ctx:
            preprocess("   ")
        self.assertEqual(ctx.exception.code, "EMPTY_INPUT")

    def test_parentheses_balancing(self):
        self.assertEqual(is_balanced("(1+2)"), (True, None))
        self.assertEqual(is_balanced("[(1+2)*3]"), (True, None))
        self.assertEqual(is_balanced("(1+2"), (False, 0))
        self.assertEqual(is_balanced("(1+2))"), (False, 5))
        self.assertEqual(is_balanced("[1+2)"), (False, 4))


class TestSplitStatements(unittest.TestCase):
    """Test statement splitting."""

    def test_split(self):
        self.assertEqual(
            split_statements("A = 5; B = 7; A + B"), ["A = 5", "B = 7", "A + B"]
        )

    def test_blank_statements_dropped(self):
        self.assertEqual(split_statements("A = 5; ; B = 7;"), ["A = 5", "B = 7"])
        self.assertEqual(split_statements(" ; "), [])


class TestParsePreprocessed(unittest.TestCase):
    """Test SymPy parsing against a variable map."""

    def test_variables_are_substituted(self):
        expr = parse_preprocessed("A * 2", {"A": 3.0})
        self.assertEqual(float(expr), 6.0)

    def test_unknown_names_stay_symbols(self):
        expr = parse_preprocessed("y + 1")
        self.assertEqual(expr.free_symbols, {sp.Symbol("y")})

    def test_syntax_error(self):
        with self.assertRaises(ParseError) as ctx:
            parse_preprocessed("2 +")
        self.assertEqual(ctx.exception.code, "SYNTAX_ERROR")


class TestFormatNumber(unittest.TestCase):
    """Test number formatting."""

    def test_precision(self):
        self.assertEqual(format_number(3.14159265), "3.14159")
        self.assertEqual(format_number(3.14159265, 3), "3.14")

    def test_integers_have_no_decimals(self):
        self.assertEqual(format_number(12.0), "12")

    def test_negative_zero(self):
        self.assertEqual(format_number(-0.0), "0")

    def test_non_numeric_fallback(self):
        self.assertEqual(format_number("abc"), "abc")


if __name__ == "__main__":
    unittest.main()
