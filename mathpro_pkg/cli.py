"""Command-line interface for MathPro.

Subcommands:
- ``eval``: evaluate ``;``-separated statements with variable assignment
- ``polynomial roots|factorize|interpolate``: polynomial analysis

Results print as human-readable text or JSON (``--format json``); failures
print ``Error: <message>`` and exit with status 1.
"""

from __future__ import annotations

import argparse
import json
import sys

from .api import evaluate, interpolate_points, polynomial_factors, polynomial_roots
from .config import COEFFICIENT_DECIMALS, DEFAULT_VARIABLE, OUTPUT_PRECISION, VERSION
from .logging_config import get_logger, setup_logging
from .parser import format_number
from .polynomial import format_root
from .types import EvalResult, FactorResult, InterpolationResult, RootsResult

logger = get_logger("cli")

Result = EvalResult | RootsResult | FactorResult | InterpolationResult


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running MathPro health check...")
    print("-" * 50)

    try:
        import sympy

        print(f"[OK] SymPy {sympy.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    try:
        import numpy

        print(f"[OK] NumPy {numpy.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] NumPy import failed: {e}")
        checks_failed += 1

    checks = [
        ("Expression evaluation", lambda: evaluate("A = 3; A * 3").result == 9.0),
        (
            "Polynomial roots",
            lambda: sorted(
                round(r.real, 6) for r in polynomial_roots("x^2 - 5x + 6").roots or []
            )
            == [2.0, 3.0],
        ),
        (
            "Polynomial interpolation",
            lambda: [
                round(c, 6) for c in interpolate_points([(0, 1), (1, 3)]).coefficients or []
            ]
            == [1.0, 2.0],
        ),
    ]
    for name, check in checks:
        try:
            passed = check()
        except Exception as e:
            print(f"[FAIL] {name} check failed: {e}")
            checks_failed += 1
            continue
        if passed:
            print(f"[OK] {name} works")
            checks_passed += 1
        else:
            print(f"[FAIL] {name} returned an unexpected result")
            checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def _format_fixed(value: float, decimals: int) -> str:
    if round(value, decimals) == 0:
        value = 0.0
    return f"{value:.{decimals}f}"


def print_result_pretty(
    res: Result, output_format: str = "human", precision: int = OUTPUT_PRECISION
) -> None:
    """Print result in specified format.

    Args:
        res: Result object from the api module
        output_format: "json" for JSON output, "human" for human-readable
        precision: Significant digits for evaluated values and roots
    """
    if output_format == "json":
        print(json.dumps(res.to_dict(), indent=2, ensure_ascii=False))
        return
    if not res.ok:
        print("Error:", res.error)
        return
    if isinstance(res, EvalResult):
        if res.result is not None:
            print(f"Result: {format_number(res.result, precision)}")
    elif isinstance(res, RootsResult):
        print("Roots:")
        for root in res.roots or []:
            print(f"- {format_root(root, precision)}")
    elif isinstance(res, FactorResult):
        print("Factors:")
        for factor in res.factors or []:
            print(f"- {factor}")
    elif isinstance(res, InterpolationResult):
        print("Interpolated Polynomial Coefficients:")
        for power, coefficient in enumerate(res.coefficients or []):
            print(f"x^{power}: {_format_fixed(coefficient, COEFFICIENT_DECIMALS)}")


def _parse_points(tokens: list[str]) -> list[tuple[float, float]]:
    """Turn ``x1 y1 x2 y2 ...`` into pairs; raises ValueError with a user message."""
    if len(tokens) < 2 or len(tokens) % 2 != 0:
        raise ValueError("Expected pairs of x and y values.")
    points = []
    for i in range(0, len(tokens), 2):
        try:
            points.append((float(tokens[i]), float(tokens[i + 1])))
        except ValueError:
            raise ValueError(f"Invalid point: {tokens[i]}, {tokens[i + 1]}") from None
    return points


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mathpro",
        description="A CLI tool for mathematical computations: expression "
        "evaluation and polynomial analysis.",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )

    commands = parser.add_subparsers(dest="command")

    eval_parser = commands.add_parser(
        "eval",
        help="Evaluate a mathematical expression",
        description="Evaluate a mathematical expression with support for variables, "
        "exponents, factorials, and functions. Example: 'A = 5; B = 7; A + B'",
    )
    eval_parser.add_argument("tokens", metavar="expression", nargs=argparse.REMAINDER)

    poly_parser = commands.add_parser(
        "polynomial",
        help="Perform polynomial operations",
        description="Perform polynomial operations like finding roots, "
        "factorization, and interpolation.",
    )
    poly_parser.add_argument(
        "--var",
        type=str,
        default=DEFAULT_VARIABLE,
        help=f"Polynomial variable letter (default: {DEFAULT_VARIABLE})",
    )
    poly_commands = poly_parser.add_subparsers(dest="operation", required=True)
    roots_parser = poly_commands.add_parser(
        "roots",
        help="Find the roots of a polynomial",
        description="Find the roots of a polynomial. Example: mathpro polynomial roots 'x^2 - 3x + 2'",
    )
    roots_parser.add_argument("tokens", metavar="polynomial", nargs=argparse.REMAINDER)
    factor_parser = poly_commands.add_parser(
        "factorize",
        help="Factorize a polynomial",
        description="Factorize a linear or quadratic polynomial. "
        "Example: mathpro polynomial factorize 'x^2 - 3x + 2'",
    )
    factor_parser.add_argument("tokens", metavar="polynomial", nargs=argparse.REMAINDER)
    interp_parser = poly_commands.add_parser(
        "interpolate",
        help="Interpolate a polynomial",
        description="Interpolate a polynomial given a set of points. "
        "Example: mathpro polynomial interpolate 1 2 3 4",
    )
    interp_parser.add_argument("tokens", metavar="points", nargs=argparse.REMAINDER)
    return parser


def _run_command(args: argparse.Namespace) -> Result:
    if args.command == "eval":
        return evaluate(" ".join(args.tokens))
    text = "".join(args.tokens) if args.operation != "interpolate" else ""
    if args.operation == "roots":
        return polynomial_roots(text, args.var)
    if args.operation == "factorize":
        return polynomial_factors(text, args.var)
    try:
        points = _parse_points(args.tokens)
    except ValueError as e:
        return InterpolationResult(ok=False, error=str(e), code="INVALID_POINT")
    return interpolate_points(points)


def _parse_args(parser: argparse.ArgumentParser, argv: list[str] | None) -> argparse.Namespace:
    """Parse arguments, handing leading tokens such as ``-x^2`` back to the command."""
    args, extras = parser.parse_known_args(argv)
    if extras:
        if args.command is None or any(token.startswith("--") for token in extras):
            parser.error(f"unrecognized arguments: {' '.join(extras)}")
        # argparse reports option-like tokens before the first plain token as unknown
        args.tokens = extras + args.tokens
    return args


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for MathPro CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = build_parser()
    args = _parse_args(parser, argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()
    if args.command is None:
        parser.print_help()
        return 1

    precision = args.precision if args.precision and args.precision > 0 else OUTPUT_PRECISION
    result = _run_command(args)
    if not result.ok:
        logger.error(
            "Command %s failed: %s",
            args.command if args.command == "eval" else args.operation,
            result.error,
            extra={"error_code": result.code},
        )
    print_result_pretty(result, args.format, precision)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main_entry())
