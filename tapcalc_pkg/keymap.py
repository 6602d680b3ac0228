"""Translate raw key tokens (keyboard names or button labels) into engine commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import (
    BACKSPACE_KEY,
    BINARY_OPERATORS,
    CLEAR_KEY,
    DECIMAL_POINT,
    DIGITS,
    EQUALS_KEY,
    KEY_ALIASES,
    MEMORY_OPERATIONS,
    UNARY_OPERATORS,
)
from .engine import CalculatorEngine
from .types import Snapshot, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    """One engine call: ``kind`` names the method, ``arg`` is its argument (if any)."""

    kind: str
    arg: str | None = None


# Every token tokenize() may emit as a single unit, longest first
_MULTI_CHAR_TOKENS = sorted(
    {
        tok
        for tok in (
            *UNARY_OPERATORS,
            *MEMORY_OPERATIONS,
            *KEY_ALIASES,
            BACKSPACE_KEY,
        )
        if len(tok) > 1
    },
    key=len,
    reverse=True,
)


def canonical_key(token: str) -> str:
    return KEY_ALIASES.get(token, token)


def resolve(token: str) -> Command:
    """Map a key token to a command.

    Args:
        token: Raw key (e.g. "7", ".", "×", "Enter", "Escape", "M+", "√")

    Returns:
        The Command the token stands for

    Raises:
        ValidationError: With code UNKNOWN_KEY if the token is not a key
    """
    key = canonical_key(token)
    if key in DIGITS:
        return Command("digit", key)
    if key == DECIMAL_POINT:
        return Command("decimal")
    if key in BINARY_OPERATORS:
        return Command("operator", key)
    if key == EQUALS_KEY:
        return Command("equals")
    if key == CLEAR_KEY:
        return Command("clear")
    if key == BACKSPACE_KEY:
        return Command("backspace")
    if key in UNARY_OPERATORS:
        return Command("unary", key)
    if key in MEMORY_OPERATIONS:
        return Command("memory", key)
    raise ValidationError(f"Unknown key: {token!r}", code="UNKNOWN_KEY")


def tokenize(text: str) -> list[str]:
    """Split a compact key string into tokens.

    Whitespace separates tokens but is optional: "12+3=" and "1 2 + 3 ="
    give the same result. Multi-character keys ("M+", "1/x", "Enter", ...)
    are matched longest-first.

    Args:
        text: Key string

    Returns:
        List of tokens, unvalidated
    """
    tokens: list[str] = []
    for chunk in text.split():
        i = 0
        while i < len(chunk):
            for multi in _MULTI_CHAR_TOKENS:
                if chunk.startswith(multi, i):
                    tokens.append(multi)
                    i += len(multi)
                    break
            else:
                tokens.append(chunk[i])
                i += 1
    return tokens


def apply_command(engine: CalculatorEngine, command: Command) -> Snapshot:
    if command.kind == "digit":
        return engine.enter_digit(command.arg)
    if command.kind == "decimal":
        return engine.enter_decimal_point()
    if command.kind == "operator":
        return engine.select_operator(command.arg)
    if command.kind == "equals":
        return engine.confirm_equals()
    if command.kind == "clear":
        return engine.clear()
    if command.kind == "backspace":
        return engine.backspace()
    if command.kind == "unary":
        return engine.apply_unary(command.arg)
    if command.kind == "memory":
        return engine.memory_op(command.arg)
    raise ValidationError(f"Unknown command: {command.kind!r}", code="UNKNOWN_COMMAND")


def dispatch(engine: CalculatorEngine, token: str) -> Snapshot:
    """Resolve one token and apply it to the engine."""
    command = resolve(token)
    logger.debug("key %r -> %s", token, command)
    return apply_command(engine, command)
