"""MathPro package: expression evaluation and polynomial analysis."""

__all__ = [
    "config",
    "parser",
    "polynomial",
    "evaluator",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "polynomial_roots",
    "polynomial_factors",
    "interpolate_points",
]
