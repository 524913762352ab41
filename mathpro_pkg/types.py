"""Type definitions, error taxonomy and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class EvalResult:
    """Result of evaluating a mathematical expression."""

    ok: bool
    result: float | None = None
    error: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.result is not None:
            result_dict["result"] = self.result
        if self.error is not None:
            result_dict["error"] = self.error
            result_dict["code"] = self.code
        return result_dict


@dataclass
class RootsResult:
    """Result of finding the roots of a polynomial."""

    ok: bool
    roots: list[complex] | None = None
    error: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Complex roots are emitted as ``{"real": ..., "imag": ...}`` objects.
        """
        result_dict: dict[str, Any] = {"ok": self.ok, "type": "roots"}
        if self.roots is not None:
            result_dict["roots"] = [
                {"real": root.real, "imag": root.imag} for root in self.roots
            ]
        if self.error is not None:
            result_dict["error"] = self.error
            result_dict["code"] = self.code
        return result_dict


@dataclass
class FactorResult:
    """Result of factoring a polynomial into linear real factors."""

    ok: bool
    factors: list[str] | None = None
    error: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "type": "factors"}
        if self.factors is not None:
            result_dict["factors"] = self.factors
        if self.error is not None:
            result_dict["error"] = self.error
            result_dict["code"] = self.code
        return result_dict


@dataclass
class InterpolationResult:
    """Result of interpolating a polynomial through sample points."""

    ok: bool
    coefficients: list[float] | None = None
    error: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "type": "interpolation"}
        if self.coefficients is not None:
            result_dict["coefficients"] = self.coefficients
        if self.error is not None:
            result_dict["error"] = self.error
            result_dict["code"] = self.code
        return result_dict


class MathProError(Exception):
    """Base class for every error raised by MathPro."""

    default_code = "MATHPRO_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ValidationError(MathProError):
    """Raised when input validation fails."""

    default_code = "VALIDATION_ERROR"


class EmptyInputError(ValidationError):
    """Raised for a zero-length coefficient vector or point list."""

    default_code = "EMPTY_INPUT"


class ParseError(MathProError):
    """Raised when parsing fails."""

    default_code = "PARSE_ERROR"


class FormatError(ParseError):
    """Raised for malformed polynomial text."""

    default_code = "FORMAT_ERROR"


class SolverError(MathProError):
    """Raised when solving fails."""

    default_code = "SOLVER_ERROR"


class DegenerateCoefficientError(SolverError):
    """Raised when the leading coefficient is zero for the claimed degree."""

    default_code = "DEGENERATE_COEFFICIENT"


class ComplexRootError(SolverError):
    """Raised when real factorization is requested for non-real roots."""

    default_code = "COMPLEX_ROOTS"


class UnsupportedDegreeError(SolverError):
    """Raised when factorization is requested outside degrees 1 and 2."""

    default_code = "UNSUPPORTED_DEGREE"


class SingularSystemError(SolverError):
    """Raised when the interpolation system has no unique solution."""

    default_code = "SINGULAR_SYSTEM"


class EvaluationError(MathProError):
    """Raised when an expression cannot be evaluated to a real number."""

    default_code = "EVALUATION_ERROR"
