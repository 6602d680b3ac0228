#!/usr/bin/env python3
"""
tapcalc - Keypad Calculator

Main entry point for the tapcalc application.
This file serves as a thin wrapper that delegates all functionality
to the tapcalc_pkg package.

Usage:
    python tapcalc.py                    # Interactive REPL
    python tapcalc.py -e "3+4="          # Run a key sequence
    python tapcalc.py --help             # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for tapcalc.

    Delegates all functionality to the tapcalc_pkg.cli module,
    which handles argument parsing, key dispatch, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from tapcalc_pkg.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1
    except ImportError as e:
        print(f"Error: Failed to import tapcalc_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1


if __name__ == "__main__":
    sys.exit(main())
