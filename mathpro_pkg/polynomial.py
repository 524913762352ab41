"""Polynomial analysis: parsing, root finding, factorization and interpolation.

Coefficient vectors are ordered by ascending power: index 0 holds the
constant term and index k the coefficient of x^k.

This module handles:
- Parsing polynomial text such as ``"x^2 - 5x + 6"`` into coefficients
- Closed-form roots for degree 1 and 2, Durand-Kerner iteration above that
- Factorization of linear and quadratic polynomials with real roots
- Interpolation through sample points via a Vandermonde system
"""

from __future__ import annotations

import cmath
import math
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Sequence

import numpy as np

from .config import (
    DEFAULT_VARIABLE,
    DURAND_KERNER_MAX_ITERATIONS,
    DURAND_KERNER_TOLERANCE,
    FACTOR_DECIMALS,
    MAX_INPUT_LENGTH,
    MAX_POLYNOMIAL_DEGREE,
    NUMERIC_TOLERANCE,
    OUTPUT_PRECISION,
    POLY_TERM_PATTERN,
    POLY_TERM_REGEX,
)
from .logging_config import get_logger
from .parser import format_number
from .types import (
    ComplexRootError,
    DegenerateCoefficientError,
    EmptyInputError,
    FormatError,
    SingularSystemError,
    UnsupportedDegreeError,
    ValidationError,
)

logger = get_logger("polynomial")


@dataclass(frozen=True)
class Term:
    """One additive unit of a polynomial string, e.g. ``-3x^2`` or ``+5``."""

    text: str
    sign: str
    magnitude: str | None
    power: int

    @property
    def coefficient(self) -> float:
        """Signed coefficient; a bare variable counts as magnitude 1."""
        if self.magnitude is None:
            value = 1.0
        else:
            try:
                value = float(self.magnitude)
            except ValueError as e:
                raise FormatError(f"invalid coefficient in term: {self.text}") from e
        return -value if self.sign == "-" else value


@lru_cache(maxsize=32)
def _term_regex(variable: str) -> re.Pattern[str]:
    if variable == DEFAULT_VARIABLE:
        return POLY_TERM_REGEX
    return re.compile(POLY_TERM_PATTERN.format(var=re.escape(variable)))


def _exponent(digits: str) -> int:
    digits = digits.lstrip("0") or "0"
    if len(digits) > len(str(MAX_POLYNOMIAL_DEGREE)) or int(digits) > MAX_POLYNOMIAL_DEGREE:
        raise ValidationError(
            f"polynomial degree {digits} exceeds the maximum of {MAX_POLYNOMIAL_DEGREE}",
            "DEGREE_TOO_HIGH",
        )
    return int(digits)


def tokenize_polynomial(text: str, variable: str = DEFAULT_VARIABLE) -> list[Term]:
    """Split polynomial text into terms.

    Whitespace is ignored. Every term after the first must start with an
    explicit ``+`` or ``-``, and the terms must cover the cleaned input
    exactly; anything else is a :class:`FormatError`. Exponents above
    ``MAX_POLYNOMIAL_DEGREE`` raise :class:`ValidationError`.
    """
    if len(text) > MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long (>{MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )
    cleaned = "".join(text.split())
    if not cleaned:
        raise FormatError("invalid polynomial format: no terms found")

    regex = _term_regex(variable)
    terms: list[Term] = []
    pos = 0
    while pos < len(cleaned):
        match = regex.match(cleaned, pos)
        if match.group("magnitude") is None and match.group("variable") is None:
            raise FormatError(
                f"invalid polynomial format: unexpected {cleaned[pos:]!r} in {cleaned!r}"
            )
        if terms and match.group("sign") is None:
            raise FormatError(
                f"invalid polynomial format: missing '+' or '-' before {match.group(0)!r}"
            )
        if match.group("exponent") is not None:
            power = _exponent(match.group("exponent"))
        elif match.group("variable") is not None:
            power = 1
        else:
            power = 0
        terms.append(
            Term(
                text=match.group(0),
                sign=match.group("sign") or "+",
                magnitude=match.group("magnitude"),
                power=power,
            )
        )
        pos = match.end()
    return terms


def parse_polynomial(text: str, variable: str = DEFAULT_VARIABLE) -> list[float]:
    """Parse polynomial text into a coefficient vector.

    Args:
        text: Polynomial such as ``"x^2 - 5x + 6"``
        variable: Variable letter used in the text (default: ``x``)

    Returns:
        Coefficients by ascending power, e.g. ``[6.0, -5.0, 1.0]``

    Raises:
        FormatError: If the text is empty or does not match the term grammar

    Example:
        >>> parse_polynomial("2x+1")
        [1.0, 2.0]
        >>> parse_polynomial("x + 2x")
        [0.0, 3.0]
    """
    terms = tokenize_polynomial(text, variable)
    degree = max(term.power for term in terms)

    coefficients = [0.0] * (degree + 1)
    for term in terms:
        coefficients[term.power] += term.coefficient

    logger.debug("Parsed %r as degree %d: %s", text, degree, coefficients)
    return coefficients


def evaluate_polynomial(coefficients: Sequence[float], point: complex) -> complex:
    """Evaluate the polynomial at ``point`` as a sum of ``c_k * point**k``.

    Durand-Kerner needs this form. Under Horner's scheme conjugate candidates
    stay exactly symmetric and cannot separate onto distinct real roots.
    """
    return sum(
        coefficient * point**power for power, coefficient in enumerate(coefficients)
    )


def _as_coefficients(coefficients: Iterable[float]) -> list[float]:
    values = [float(c) for c in coefficients]
    if not values:
        raise EmptyInputError("no coefficients provided")
    return values


def _linear_root(coefficients: Sequence[float]) -> float:
    c0, c1 = coefficients
    if c1 == 0:
        raise DegenerateCoefficientError(
            "invalid linear polynomial (coefficient of x cannot be zero)"
        )
    return -c0 / c1


def _discriminant(coefficients: Sequence[float]) -> float:
    c0, c1, c2 = coefficients
    if c2 == 0:
        raise DegenerateCoefficientError(
            "invalid quadratic polynomial (coefficient of x^2 cannot be zero)"
        )
    return c1 * c1 - 4 * c2 * c0


def _quadratic_roots(coefficients: Sequence[float]) -> tuple[complex, complex]:
    discriminant = _discriminant(coefficients)
    _, c1, c2 = coefficients
    if discriminant < 0:
        real = -c1 / (2 * c2)
        imag = math.sqrt(-discriminant) / (2 * c2)
        return complex(real, imag), complex(real, -imag)
    root_disc = math.sqrt(discriminant)
    return (
        complex((-c1 + root_disc) / (2 * c2), 0.0),
        complex((-c1 - root_disc) / (2 * c2), 0.0),
    )


def durand_kerner(
    coefficients: Sequence[float],
    max_iterations: int = DURAND_KERNER_MAX_ITERATIONS,
    tolerance: float = DURAND_KERNER_TOLERANCE,
) -> list[complex]:
    """Approximate all roots at once with the Durand-Kerner (Weierstrass) method.

    Candidates start equally spaced on the unit circle. Each round computes
    every new candidate from the previous round's full set. Iteration stops
    when no candidate moves by ``tolerance`` or more, or after
    ``max_iterations`` rounds; the last iterate is returned either way.
    """
    degree = len(coefficients) - 1
    leading = coefficients[-1]
    monic = [c / leading for c in coefficients]

    roots = [cmath.rect(1.0, 2 * math.pi * i / degree) for i in range(degree)]
    for iteration in range(1, max_iterations + 1):
        updated = []
        for i, root in enumerate(roots):
            denominator = complex(1.0, 0.0)
            for j, other in enumerate(roots):
                if i != j:
                    denominator *= root - other
            if denominator == 0:
                updated.append(root)
                continue
            updated.append(root - evaluate_polynomial(monic, root) / denominator)

        converged = all(abs(new - old) < tolerance for new, old in zip(updated, roots))
        roots = updated
        if converged:
            logger.debug("Durand-Kerner converged after %d rounds", iteration)
            break
    else:
        logger.debug(
            "Durand-Kerner stopped at %d rounds without converging", max_iterations
        )
    return roots


def find_roots(
    coefficients: Iterable[float],
    *,
    max_iterations: int = DURAND_KERNER_MAX_ITERATIONS,
    tolerance: float = DURAND_KERNER_TOLERANCE,
) -> list[complex]:
    """Find every root of a polynomial, with multiplicity.

    Args:
        coefficients: Coefficients by ascending power; the vector length
            fixes the degree
        max_iterations: Round cap for the iterative method (degree >= 3)
        tolerance: Per-candidate movement below which iteration stops

    Returns:
        ``degree`` complex roots. A nonzero constant has no roots.

    Raises:
        EmptyInputError: If no coefficients are given
        DegenerateCoefficientError: If the leading coefficient is zero
            (including the zero constant, for which every value is a root)
    """
    coeffs = _as_coefficients(coefficients)
    degree = len(coeffs) - 1

    if degree == 0:
        if coeffs[0] == 0:
            raise DegenerateCoefficientError(
                "zero polynomial: every value is a root"
            )
        return []
    if degree == 1:
        return [complex(_linear_root(coeffs), 0.0)]
    if degree == 2:
        return list(_quadratic_roots(coeffs))

    if coeffs[-1] == 0:
        raise DegenerateCoefficientError(
            f"invalid degree-{degree} polynomial (coefficient of x^{degree} cannot be zero)"
        )
    return durand_kerner(coeffs, max_iterations=max_iterations, tolerance=tolerance)


def format_factor(
    root: float, variable: str = DEFAULT_VARIABLE, decimals: int = FACTOR_DECIMALS
) -> str:
    """Render a real root as a linear factor, e.g. ``(x - 2.00)``."""
    if round(root, decimals) == 0:
        root = 0.0
    return f"({variable} - {root:.{decimals}f})"


def factorize(
    coefficients: Iterable[float], variable: str = DEFAULT_VARIABLE
) -> list[str]:
    """Factor a linear or quadratic polynomial into linear real factors.

    Quadratic factors are listed smallest root first. The leading coefficient
    is not part of the output.

    Raises:
        EmptyInputError: If no coefficients are given
        UnsupportedDegreeError: Unless the polynomial is linear or quadratic
        DegenerateCoefficientError: If the leading coefficient is zero
        ComplexRootError: If a quadratic has a negative discriminant

    Example:
        >>> factorize([6, -5, 1])
        ['(x - 2.00)', '(x - 3.00)']
    """
    coeffs = _as_coefficients(coefficients)
    if len(coeffs) > 3:
        raise UnsupportedDegreeError(
            "factorization is only supported for linear and quadratic polynomials"
        )

    if len(coeffs) == 2:
        return [format_factor(_linear_root(coeffs), variable)]
    if len(coeffs) == 3:
        if _discriminant(coeffs) < 0:
            raise ComplexRootError("cannot factorize polynomial with complex roots")
        roots = sorted(root.real for root in _quadratic_roots(coeffs))
        return [format_factor(root, variable) for root in roots]

    raise UnsupportedDegreeError("cannot factorize a constant polynomial")


def interpolate(points: Iterable[Sequence[float]]) -> list[float]:
    """Find the unique polynomial of degree n-1 through n points.

    Solves the Vandermonde system ``V c = y`` where ``V[i][j] = x_i ** j``.

    Args:
        points: Sequence of ``(x, y)`` pairs with distinct x values

    Returns:
        Coefficients by ascending power, one per point

    Raises:
        EmptyInputError: If no points are given
        SingularSystemError: If the points do not determine a unique
            polynomial (e.g. a repeated x value)
    """
    pairs = list(points)
    if not pairs:
        raise EmptyInputError("no points provided")
    try:
        xs = np.array([float(x) for x, _ in pairs])
        ys = np.array([float(y) for _, y in pairs])
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"each point must be a numeric (x, y) pair: {e}", "INVALID_POINT"
        ) from e

    vandermonde = np.vander(xs, len(pairs), increasing=True)
    try:
        solution = np.linalg.solve(vandermonde, ys)
    except np.linalg.LinAlgError as e:
        raise SingularSystemError(f"failed to solve interpolation: {e}") from e
    if not np.all(np.isfinite(solution)):
        raise SingularSystemError("failed to solve interpolation: solution is not finite")

    logger.debug("Interpolated %d points", len(pairs))
    return [float(c) for c in solution]


def format_root(
    root: complex,
    precision: int = OUTPUT_PRECISION,
    tolerance: float = NUMERIC_TOLERANCE,
) -> str:
    """Format a root for display; near-real roots print as plain numbers."""
    real = root.real if abs(root.real) >= tolerance else 0.0
    if abs(root.imag) < tolerance:
        return format_number(real, precision)
    sign = "-" if root.imag < 0 else "+"
    return (
        f"{format_number(real, precision)} {sign} "
        f"{format_number(abs(root.imag), precision)}i"
    )
