"""Expression input preprocessing and parsing module.

This module handles:
- Input sanitization and validation
- Expression preprocessing (symbol conversion, exponent handling)
- Statement splitting for multi-statement input
- SymPy expression parsing against an explicit variable map
- Number formatting for display
"""

from __future__ import annotations

from tokenize import TokenError
from typing import Any, Mapping

import sympy as sp
from sympy.parsing.sympy_parser import parse_expr

from .config import (
    ALLOWED_FUNCTIONS,
    MAX_INPUT_LENGTH,
    OUTPUT_PRECISION,
    PARSE_GLOBALS,
    TRANSFORMATIONS,
)
from .logging_config import get_logger
from .types import ParseError, ValidationError

logger = get_logger("parser")

# Basic denylist to avoid dangerous tokens before SymPy parsing
FORBIDDEN_TOKENS = (
    "__",
    "import",
    "lambda",
    "eval",
    "exec",
    "open",
    "os.",
    "sys.",
    "subprocess",
    "builtins",
    "getattr",
    "setattr",
    "delattr",
    "compile",
    "globals",
    "locals",
)


def format_number(val: Any, precision: int = OUTPUT_PRECISION) -> str:
    """Format a numeric value with specified precision.

    Args:
        val: Numeric value to format
        precision: Number of significant digits (default: OUTPUT_PRECISION)

    Returns:
        Formatted string representation of the number
    """
    try:
        fmt = "{:." + str(int(precision)) + "g}"
        # Adding 0.0 turns -0.0 into 0.0
        return fmt.format(float(val) + 0.0)
    except (ValueError, TypeError, OverflowError):
        # Fallback for non-numeric or invalid values
        return str(val)


def is_balanced(input_str: str) -> tuple[bool, int | None]:
    """Check if parentheses/brackets are balanced. Returns (is_balanced, error_position)."""
    pairs = {"(": ")", "[": "]", "{": "}"}
    stack: list[tuple[str, int]] = []  # (char, position)
    for i, char in enumerate(input_str):
        if char in pairs:
            stack.append((char, i))
        elif char in pairs.values():
            if not stack:
                return False, i
            opening, _ = stack.pop()
            if pairs[opening] != char:
                return False, i
    if stack:
        return False, stack[0][1]  # Return position of first unmatched
    return True, None


def split_statements(input_str: str) -> list[str]:
    """Split ``"A = 5; B = 7; A + B"`` into its non-empty statements."""
    return [part.strip() for part in input_str.split(";") if part.strip()]


def preprocess(input_str: str) -> str:
    """Preprocess a single statement for parsing.

    Applies transformations:
    - Validates input length and forbidden tokens
    - Standardizes mathematical symbols (unicode variants to ASCII)
    - Converts exponents (^ to **)
    - Validates balanced parentheses/brackets

    Raises:
        ValidationError: If input is empty, too long, contains forbidden
                        tokens, or has unbalanced parentheses/brackets
    """
    input_str = input_str.strip() if input_str else ""
    if not input_str:
        raise ValidationError("Input cannot be empty", "EMPTY_INPUT")
    if len(input_str) > MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long (>{MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )

    lowered = input_str.lower()
    for tok in FORBIDDEN_TOKENS:
        if tok in lowered:
            logger.warning(
                "Blocked input containing forbidden token %r (length %d)",
                tok,
                len(input_str),
            )
            raise ValidationError(
                f"Input contains forbidden token: {tok}", "FORBIDDEN_TOKEN"
            )

    balanced, position = is_balanced(input_str)
    if not balanced:
        raise ValidationError(
            f"Unbalanced parentheses or brackets at position {position}",
            "UNBALANCED",
        )

    processed_str = input_str.replace("−", "-").replace("–", "-")
    processed_str = processed_str.replace("π", "pi")
    processed_str = processed_str.replace("×", "*").replace("÷", "/")
    processed_str = processed_str.replace("^", "**")
    return processed_str


def parse_preprocessed(
    expr_str: str, variables: Mapping[str, Any] | None = None
) -> sp.Expr:
    """Parse a preprocessed expression string into a SymPy expression.

    Names found in ``variables`` are replaced by their values; the allowed
    functions and constants are always available. Unknown names stay as
    free symbols for the caller to reject.
    """
    local_dict = dict(ALLOWED_FUNCTIONS)
    if variables:
        local_dict.update({name: sp.sympify(value) for name, value in variables.items()})
    try:
        return parse_expr(
            expr_str,
            local_dict=local_dict,
            global_dict=dict(PARSE_GLOBALS),
            transformations=TRANSFORMATIONS,
        )
    except (SyntaxError, TokenError) as e:
        raise ParseError(f"Invalid expression: {expr_str}", "SYNTAX_ERROR") from e
