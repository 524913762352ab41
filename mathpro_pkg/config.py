"""Centralized configuration for MathPro.

This module defines:
- Input validation limits
- Output precision and display formatting
- Polynomial root-finding iteration limits
- Allowed evaluator functions and SymPy transformations
- Regex patterns for parsing

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with MATHPRO_)
"""

import importlib.metadata
import os
import re

import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication,
    standard_transformations,
)

# Version is defined in pyproject.toml [project] section
try:
    VERSION = importlib.metadata.version("mathpro")
except importlib.metadata.PackageNotFoundError:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("MATHPRO_MAX_INPUT_LENGTH", "10000"))  # characters

# Output configuration
OUTPUT_PRECISION = int(os.getenv("MATHPRO_OUTPUT_PRECISION", "6"))
NUMERIC_TOLERANCE = float(
    os.getenv("MATHPRO_NUMERIC_TOLERANCE", "1e-9")
)  # Imaginary parts below this print as real roots
FACTOR_DECIMALS = 2
COEFFICIENT_DECIMALS = 2

# Polynomial configuration
DEFAULT_VARIABLE = os.getenv("MATHPRO_DEFAULT_VARIABLE", "x")
MAX_POLYNOMIAL_DEGREE = int(os.getenv("MATHPRO_MAX_POLYNOMIAL_DEGREE", "50"))

# Durand-Kerner limits are fixed; they are the only bound on root-finding work
DURAND_KERNER_MAX_ITERATIONS = 1000
DURAND_KERNER_TOLERANCE = 1e-10


def _round_half_away(value):
    return sp.sign(value) * sp.floor(sp.Abs(value) + sp.Rational(1, 2))


def _factorial(value):
    if value.is_number and value.is_negative:
        raise ValueError("factorial is not defined for negative numbers")
    return sp.factorial(value)


# Every callable takes a fixed number of arguments so a wrong call raises TypeError
ALLOWED_FUNCTIONS = {
    "pi": sp.pi,
    "e": sp.E,
    "sqrt": lambda value: sp.sqrt(value),
    "sin": lambda value: sp.sin(value),
    "cos": lambda value: sp.cos(value),
    "tan": lambda value: sp.tan(value),
    "fact": _factorial,
    "log": lambda value: sp.log(value),
    "log10": lambda value: sp.log(value, 10),
    "exp": lambda value: sp.exp(value),
    "pow": lambda base, exponent: sp.Pow(base, exponent),
    "abs": lambda value: sp.Abs(value),
    "ceil": lambda value: sp.ceiling(value),
    "floor": lambda value: sp.floor(value),
    "round": _round_half_away,
    "min": lambda first, second: sp.Min(first, second),
    "max": lambda first, second: sp.Max(first, second),
}

# Names the SymPy parser may reference; keeps sympy's star namespace (I, E, N, S...) out.
# Integer literals become Floats so powers such as 9^9^9 evaluate in floating point.
PARSE_GLOBALS = {
    "Integer": sp.Float,
    "Float": sp.Float,
    "Rational": sp.Rational,
    "Symbol": sp.Symbol,
    "Function": sp.Function,
    "factorial": sp.factorial,
}

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication,
    convert_xor,
)

VAR_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# One polynomial term: optional sign, optional magnitude, optional variable power
POLY_TERM_PATTERN = (
    r"(?P<sign>[+-])?"
    r"(?P<magnitude>\d+(?:\.\d*)?|\.\d+)?"
    r"(?:(?P<variable>{var})(?:\^(?P<exponent>\d+))?)?"
)
POLY_TERM_REGEX = re.compile(POLY_TERM_PATTERN.format(var=re.escape(DEFAULT_VARIABLE)))
