"""Main entry point for running mathpro_pkg as a module.

This allows running MathPro with:
    python -m mathpro_pkg eval "A = 5; B = 7; A + B"
    python -m mathpro_pkg polynomial roots "x^2 - 5x + 6"
    python -m mathpro_pkg --health-check
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
