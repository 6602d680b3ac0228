"""IEEE-754 arithmetic plus the canonical number parse/format pair.

All arithmetic runs on numpy float64 scalars with floating-point errors
ignored, so division by zero, negative square roots and the like produce
``inf``/``nan`` instead of raising. Every number written back into the
calculator registers goes through :func:`format_number`.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import Callable

import numpy as np

from . import config

logger = logging.getLogger(__name__)

_BINARY_FUNCS: dict[str, Callable[[np.float64, np.float64], np.float64]] = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": np.divide,
    # fmod keeps the sign of the dividend (C / ECMAScript remainder)
    "%": np.fmod,
}

_UNARY_FUNCS: dict[str, Callable[[np.float64], np.float64]] = {
    "√": np.sqrt,
    "x²": np.square,
    "1/x": lambda x: np.divide(1.0, x),
}


def parse_operand(text: str | None) -> float | None:
    """Parse a register string into a float.

    Args:
        text: Register contents (e.g. "12.5", "0.", "-3", "Infinity", "NaN")

    Returns:
        The parsed value, or None when the text is empty or not a number
    """
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        logger.debug("Unparsable operand %r treated as absent", text)
        return None


def format_number(value: float) -> str:
    """Render a float in canonical form.

    Follows ECMAScript ``Number#toString``: shortest round-trip digits,
    no trailing ``.0`` on integers, ``Infinity``/``-Infinity``/``NaN`` for
    the special values, and exponent notation outside the plain range.

    Args:
        value: Number to render

    Returns:
        Display string (e.g. "7", "0.1", "1e+21", "Infinity")
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr() gives the shortest digits that round-trip
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = k + exponent

    if k <= n <= config.EXPONENT_UPPER:
        return sign + digits + "0" * (n - k)
    if 0 < n <= config.EXPONENT_UPPER:
        return sign + digits[:n] + "." + digits[n:]
    if config.EXPONENT_LOWER < n <= 0:
        return sign + "0." + "0" * (-n) + digits

    e = n - 1
    exp_str = f"e+{e}" if e >= 0 else f"e-{-e}"
    if k == 1:
        return sign + digits + exp_str
    return sign + digits[0] + "." + digits[1:] + exp_str


def apply_binary(op: str, left: float, right: float) -> float:
    """Apply a binary operator with IEEE-754 semantics.

    An unknown operator returns ``right`` unchanged.
    """
    func = _BINARY_FUNCS.get(op)
    if func is None:
        return right
    with np.errstate(all="ignore"):
        return float(func(np.float64(left), np.float64(right)))


def apply_unary(op: str, value: float) -> float:
    """Apply √, x² or 1/x with IEEE-754 semantics (no exceptions)."""
    func = _UNARY_FUNCS.get(op)
    if func is None:
        return value
    with np.errstate(all="ignore"):
        return float(func(np.float64(value)))
