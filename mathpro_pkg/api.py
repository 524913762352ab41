"""Public API for MathPro - returns structured objects without raising."""

from __future__ import annotations

from typing import Iterable, MutableMapping, Sequence

from .config import DEFAULT_VARIABLE
from .evaluator import Evaluator
from .logging_config import get_logger
from .polynomial import factorize, find_roots, interpolate, parse_polynomial
from .types import (
    EvalResult,
    FactorResult,
    InterpolationResult,
    MathProError,
    RootsResult,
)

logger = get_logger("api")


def evaluate(
    expression: str, variables: MutableMapping[str, float] | None = None
) -> EvalResult:
    """Evaluate a mathematical expression.

    Args:
        expression: One or more ``;``-separated statements (e.g., "A = 5; A + 3")
        variables: Optional variable map; assignments are written into it

    Returns:
        EvalResult with the value of the last expression

    Example:
        >>> from mathpro_pkg.api import evaluate
        >>> evaluate("A = 5; B = 7; A + B").result
        12.0
    """
    try:
        value = Evaluator(variables).evaluate(expression)
    except MathProError as e:
        logger.debug("Evaluation of %r failed: %s", expression, e)
        return EvalResult(ok=False, error=e.message, code=e.code)
    return EvalResult(ok=True, result=value)


def polynomial_roots(text: str, variable: str = DEFAULT_VARIABLE) -> RootsResult:
    """Parse a polynomial and find its roots.

    Example:
        >>> from mathpro_pkg.api import polynomial_roots
        >>> sorted(r.real for r in polynomial_roots("x^2 - 5x + 6").roots)
        [2.0, 3.0]
    """
    try:
        roots = find_roots(parse_polynomial(text, variable))
    except MathProError as e:
        return RootsResult(ok=False, error=e.message, code=e.code)
    return RootsResult(ok=True, roots=roots)


def polynomial_factors(text: str, variable: str = DEFAULT_VARIABLE) -> FactorResult:
    """Parse a linear or quadratic polynomial and factor it.

    Example:
        >>> from mathpro_pkg.api import polynomial_factors
        >>> polynomial_factors("x^2 - 5x + 6").factors
        ['(x - 2.00)', '(x - 3.00)']
    """
    try:
        factors = factorize(parse_polynomial(text, variable), variable)
    except MathProError as e:
        return FactorResult(ok=False, error=e.message, code=e.code)
    return FactorResult(ok=True, factors=factors)


def interpolate_points(points: Iterable[Sequence[float]]) -> InterpolationResult:
    """Interpolate the polynomial through ``(x, y)`` points.

    Example:
        >>> from mathpro_pkg.api import interpolate_points
        >>> interpolate_points([(0, 1), (1, 3)]).coefficients
        [1.0, 2.0]
    """
    try:
        coefficients = interpolate(points)
    except MathProError as e:
        return InterpolationResult(ok=False, error=e.message, code=e.code)
    return InterpolationResult(ok=True, coefficients=coefficients)
