"""Centralized configuration for tapcalc.

This module defines:
- Logging defaults
- Number formatting thresholds
- Operator, unary and memory symbol sets
- Key aliases accepted from keyboard and button input

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with TAPCALC_)
"""

import os

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("tapcalc")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Logging
LOG_LEVEL = os.getenv("TAPCALC_LOG_LEVEL", "WARNING")
LOG_FILE = os.getenv("TAPCALC_LOG_FILE") or None

# REPL
PROMPT = os.getenv("TAPCALC_PROMPT", ">>> ")

# Number formatting: plain notation while EXPONENT_LOWER < n <= EXPONENT_UPPER,
# where n is the position of the decimal point relative to the shortest digits.
EXPONENT_UPPER = int(os.getenv("TAPCALC_EXPONENT_UPPER", "21"))
EXPONENT_LOWER = int(os.getenv("TAPCALC_EXPONENT_LOWER", "-6"))

# Initial register values
DEFAULT_DISPLAY = "0"
DEFAULT_MEMORY = 0.0

# Symbol sets
DIGITS = frozenset("0123456789")
DECIMAL_POINT = "."
BINARY_OPERATORS = ("+", "-", "*", "/", "%")
UNARY_OPERATORS = ("√", "x²", "1/x")
MEMORY_OPERATIONS = ("MC", "MR", "M+", "M-")

# Alternate spellings of keys (button labels, keyboard key names, ASCII forms)
KEY_ALIASES = {
    "×": "*",
    "÷": "/",
    "Enter": "=",
    "Escape": "C",
    "Esc": "C",
    "⌫": "Backspace",
    "sqrt": "√",
    "sq": "x²",
    "x^2": "x²",
    "inv": "1/x",
}

EQUALS_KEY = "="
CLEAR_KEY = "C"
BACKSPACE_KEY = "Backspace"
