"""Expression evaluation with variable assignment.

Statements are separated by ``;``. A statement ``NAME = expr`` stores the
value of ``expr`` under ``NAME``; any other statement is evaluated and its
value becomes the result. Variables live in a mapping owned by the caller.
"""

from __future__ import annotations

import math
from typing import MutableMapping

import sympy as sp
from sympy.core.function import AppliedUndef

from .config import VAR_NAME_RE
from .logging_config import get_logger
from .parser import parse_preprocessed, preprocess, split_statements
from .types import EvaluationError, ValidationError

logger = get_logger("evaluator")


class Evaluator:
    """Evaluates statements against a mapping of variable name to value."""

    def __init__(self, variables: MutableMapping[str, float] | None = None):
        self.variables = variables if variables is not None else {}

    def evaluate(self, text: str) -> float | None:
        """Evaluate every statement in ``text`` and return the last value.

        Returns None when the input holds only assignments.

        Raises:
            ValidationError: For empty, oversized or forbidden input
            ParseError: For syntax errors
            EvaluationError: When a statement has no real numeric value

        Example:
            >>> Evaluator().evaluate("A = 5; B = 7; A + B")
            12.0
        """
        statements = split_statements(text or "")
        if not statements:
            raise ValidationError("Input cannot be empty", "EMPTY_INPUT")

        result = None
        for statement in statements:
            if "=" in statement:
                self.assign(statement)
                continue
            result = self.evaluate_expression(statement)
            logger.info("Expression evaluated successfully: %s = %s", statement, result)
        return result

    def assign(self, statement: str) -> float:
        """Handle ``NAME = expr`` and store the value."""
        name, _, value_str = statement.partition("=")
        name = name.strip()
        if not VAR_NAME_RE.match(name) or "=" in value_str:
            raise ValidationError(
                f"invalid variable assignment: {statement}", "INVALID_ASSIGNMENT"
            )
        value = self.evaluate_expression(value_str)
        self.variables[name] = value
        logger.debug("Assigned %s = %s", name, value)
        return value

    def evaluate_expression(self, expression: str) -> float:
        """Evaluate one expression to a real float using the current variables."""
        processed = preprocess(expression)
        try:
            expr = parse_preprocessed(processed, self.variables)
        except TypeError as e:
            raise EvaluationError(
                f"invalid function call in {expression.strip()!r}: {e}", "BAD_ARGUMENTS"
            ) from e
        except ZeroDivisionError as e:
            raise EvaluationError("division by zero", "DIVISION_BY_ZERO") from e
        except ValueError as e:
            raise EvaluationError(f"failed to evaluate expression: {e}") from e

        if not isinstance(expr, sp.Expr):
            raise EvaluationError(
                f"expression does not evaluate to a number: {expression.strip()}"
            )

        unknown = sorted(str(f.func) for f in expr.atoms(AppliedUndef))
        if unknown:
            raise EvaluationError(
                f"unknown function(s): {', '.join(unknown)}", "UNKNOWN_FUNCTION"
            )

        free = sorted(str(s) for s in expr.free_symbols)
        if free:
            raise EvaluationError(
                f"undefined variable(s): {', '.join(free)}", "UNDEFINED_VARIABLE"
            )

        value = sp.N(expr)
        if value.has(sp.zoo, sp.oo, -sp.oo, sp.nan):
            if "/" in processed:
                raise EvaluationError("division by zero", "DIVISION_BY_ZERO")
            raise EvaluationError(
                f"result is undefined: {expression.strip()}", "UNDEFINED_RESULT"
            )
        if value.is_real is not True:
            raise EvaluationError(
                f"result is not a real number: {expression.strip()}", "NON_REAL_RESULT"
            )
        result = float(value)
        if not math.isfinite(result):
            raise EvaluationError(
                f"result is too large: {expression.strip()}", "OVERFLOW"
            )
        return result


def evaluate(text: str, variables: MutableMapping[str, float] | None = None) -> float | None:
    """Evaluate ``text`` with a fresh or caller-supplied variable map."""
    return Evaluator(variables).evaluate(text)
