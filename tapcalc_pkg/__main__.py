"""Main entry point for running tapcalc_pkg as a module.

This allows running tapcalc with:
    python -m tapcalc_pkg
    python -m tapcalc_pkg --health-check
    python -m tapcalc_pkg -e "3+4="

This is equivalent to running:
    python -m tapcalc_pkg.cli
    python tapcalc.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
