"""Type definitions, state record and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from .config import DEFAULT_DISPLAY, DEFAULT_MEMORY
from .numeric import format_number

BinaryOperator = Literal["+", "-", "*", "/", "%"]
UnaryOperator = Literal["√", "x²", "1/x"]
MemoryOperation = Literal["MC", "MR", "M+", "M-"]


@dataclass
class CalculatorState:
    """The single mutable record driven by the engine.

    ``display`` is the operand being edited, kept as typed text.
    ``pending_operand`` is the left-hand operand of a latched operation, or
    ``""`` when nothing is pending. ``overwrite`` marks fresh mode: the next
    digit or decimal point replaces ``display``. ``memory`` is independent of
    the other fields and survives ``clear``.
    """

    display: str = DEFAULT_DISPLAY
    pending_operand: str = ""
    pending_operator: BinaryOperator | None = None
    overwrite: bool = True
    memory: float = DEFAULT_MEMORY

    def snapshot(self) -> Snapshot:
        return Snapshot(
            display=self.display,
            pending_operand=self.pending_operand,
            pending_operator=self.pending_operator,
            overwrite=self.overwrite,
            memory=self.memory,
        )


@dataclass(frozen=True)
class Snapshot:
    """Read-only copy of the calculator state, handed to renderers."""

    display: str
    pending_operand: str
    pending_operator: BinaryOperator | None
    overwrite: bool
    memory: float

    @property
    def expression_line(self) -> str:
        """The secondary display line: pending operand followed by its operator."""
        if not self.pending_operand and self.pending_operator is None:
            return ""
        return f"{self.pending_operand} {self.pending_operator or ''}".strip()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "display": self.display,
            "pending_operand": self.pending_operand,
            "pending_operator": self.pending_operator,
            "overwrite": self.overwrite,
            "memory": format_number(self.memory),
        }


@dataclass
class KeyRunResult:
    """Result of feeding a sequence of keys into an engine."""

    ok: bool
    snapshot: Snapshot | None = None
    keys_applied: int = 0
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "keys_applied": self.keys_applied}
        if self.snapshot is not None:
            result_dict["state"] = self.snapshot.to_dict()
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return (
                f"KeyRunResult(ok=False, keys_applied={self.keys_applied}, "
                f"error={self.error!r})"
            )
        display = self.snapshot.display if self.snapshot is not None else None
        return f"KeyRunResult(ok=True, keys_applied={self.keys_applied}, display={display!r})"


class ValidationError(Exception):
    """Raised when an input token or operation argument is rejected."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
