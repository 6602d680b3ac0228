"""Calculator engine: the state machine behind the keypad.

The engine owns one :class:`~tapcalc_pkg.types.CalculatorState` and exposes
one method per input command. Evaluation is strictly left-to-right with a
single pending operation; pressing a second binary operator resolves the
first one eagerly.
"""

from __future__ import annotations

import logging
import math

from .config import (
    BINARY_OPERATORS,
    DECIMAL_POINT,
    DEFAULT_DISPLAY,
    DIGITS,
    MEMORY_OPERATIONS,
    UNARY_OPERATORS,
)
from .numeric import apply_binary, apply_unary, format_number, parse_operand
from .types import CalculatorState, Snapshot, ValidationError

logger = logging.getLogger(__name__)


class CalculatorEngine:
    def __init__(self, state: CalculatorState | None = None):
        self.state = state if state is not None else CalculatorState()

    def snapshot(self) -> Snapshot:
        return self.state.snapshot()

    # -------------------------
    # Entry
    # -------------------------
    def enter_digit(self, digit: str) -> Snapshot:
        """Type one digit; replaces the display in fresh mode or when it reads "0"."""
        if digit not in DIGITS or len(digit) != 1:
            raise ValidationError(f"Not a digit: {digit!r}", code="INVALID_DIGIT")
        s = self.state
        if s.display == DEFAULT_DISPLAY or s.overwrite:
            s.display = digit
            s.overwrite = False
        else:
            s.display += digit
        logger.debug("digit %s -> display=%r", digit, s.display)
        return self.snapshot()

    def enter_decimal_point(self) -> Snapshot:
        """Start or extend the fractional part; a second point is ignored."""
        s = self.state
        if s.overwrite:
            s.display = "0" + DECIMAL_POINT
            s.overwrite = False
        elif DECIMAL_POINT not in s.display:
            s.display += DECIMAL_POINT
        logger.debug("decimal point -> display=%r", s.display)
        return self.snapshot()

    def backspace(self) -> Snapshot:
        s = self.state
        if s.overwrite:
            return self.snapshot()
        if len(s.display) == 1 or (len(s.display) == 2 and s.display.startswith("-")):
            s.display = DEFAULT_DISPLAY
            s.overwrite = True
        else:
            s.display = s.display[:-1]
        logger.debug("backspace -> display=%r", s.display)
        return self.snapshot()

    def clear(self) -> Snapshot:
        """Reset everything except memory."""
        s = self.state
        s.display = DEFAULT_DISPLAY
        s.pending_operand = ""
        s.pending_operator = None
        s.overwrite = True
        logger.debug("clear")
        return self.snapshot()

    # -------------------------
    # Operations
    # -------------------------
    def select_operator(self, op: str) -> Snapshot:
        """Latch a binary operator, resolving any pending operation first.

        With ``display == "0"`` in entry mode and an operation already
        pending, the operator is swapped without evaluating.
        """
        if op not in BINARY_OPERATORS:
            raise ValidationError(f"Unknown operator: {op!r}", code="INVALID_OPERATOR")
        s = self.state
        if s.display == DEFAULT_DISPLAY and s.pending_operand and not s.overwrite:
            s.pending_operator = op
            logger.debug("operator swapped to %s", op)
            return self.snapshot()

        if s.pending_operand and not s.overwrite:
            result = format_number(self.evaluate())
            s.display = result
            s.pending_operand = result
            logger.debug("chained evaluation -> %s", result)
        else:
            s.pending_operand = s.display

        s.overwrite = True
        s.pending_operator = op
        logger.debug("operator %s latched on %r", op, s.pending_operand)
        return self.snapshot()

    def evaluate(self) -> float:
        """Reduce the pending operation against the display, without changing state."""
        s = self.state
        current = parse_operand(s.display)
        previous = parse_operand(s.pending_operand)
        if current is None:
            current = math.nan
        if previous is None or math.isnan(previous):
            return current
        if s.pending_operator is None:
            return current
        return apply_binary(s.pending_operator, previous, current)

    def confirm_equals(self) -> Snapshot:
        s = self.state
        if s.pending_operator is None or not s.pending_operand:
            return self.snapshot()
        s.display = format_number(self.evaluate())
        s.pending_operand = ""
        s.pending_operator = None
        s.overwrite = True
        logger.debug("equals -> %s", s.display)
        return self.snapshot()

    def apply_unary(self, op: str) -> Snapshot:
        """Apply √, x² or 1/x to the display immediately."""
        if op not in UNARY_OPERATORS:
            raise ValidationError(f"Unknown unary operation: {op!r}", code="INVALID_UNARY")
        s = self.state
        value = parse_operand(s.display)
        if value is None:
            value = math.nan
        s.display = format_number(apply_unary(op, value))
        s.overwrite = True
        logger.debug("unary %s -> %s", op, s.display)
        return self.snapshot()

    # -------------------------
    # Memory register
    # -------------------------
    def memory_op(self, op: str) -> Snapshot:
        if op not in MEMORY_OPERATIONS:
            raise ValidationError(
                f"Unknown memory operation: {op!r}", code="INVALID_MEMORY_OP"
            )
        s = self.state
        if op == "MC":
            s.memory = 0.0
        elif op == "MR":
            s.display = format_number(s.memory)
        else:
            current = parse_operand(s.display)
            if current is None:
                current = math.nan
            s.memory = apply_binary("+" if op == "M+" else "-", s.memory, current)
        s.overwrite = True
        logger.debug("memory %s -> memory=%s", op, format_number(s.memory))
        return self.snapshot()
