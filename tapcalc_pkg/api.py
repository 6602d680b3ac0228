"""Public API for tapcalc - returns structured objects without side effects."""

from __future__ import annotations

from collections.abc import Iterable

from .engine import CalculatorEngine
from .keymap import dispatch, resolve, tokenize
from .types import KeyRunResult, ValidationError


def _as_tokens(keys: str | Iterable[str]) -> list[str]:
    if isinstance(keys, str):
        return tokenize(keys)
    return list(keys)


def run_keys(
    keys: str | Iterable[str], engine: CalculatorEngine | None = None
) -> KeyRunResult:
    """Feed a key sequence into an engine.

    Args:
        keys: Compact key string (e.g. "3+4=") or an iterable of tokens
        engine: Engine to drive; a fresh one is created when omitted

    Returns:
        KeyRunResult with the final snapshot. On an unknown key, ok is False
        and the keys before it have already been applied.

    Example:
        >>> from tapcalc_pkg.api import run_keys
        >>> run_keys("3+4+5=").snapshot.display
        '12'
        >>> run_keys("5/0=").snapshot.display
        'Infinity'
    """
    if engine is None:
        engine = CalculatorEngine()
    applied = 0
    for token in _as_tokens(keys):
        try:
            dispatch(engine, token)
        except ValidationError as e:
            return KeyRunResult(
                ok=False,
                snapshot=engine.snapshot(),
                keys_applied=applied,
                error=e.message,
                error_code=e.code,
            )
        applied += 1
    return KeyRunResult(ok=True, snapshot=engine.snapshot(), keys_applied=applied)


def validate_keys(keys: str | Iterable[str]) -> bool:
    """Return True if every token in ``keys`` is a known key."""
    try:
        for token in _as_tokens(keys):
            resolve(token)
    except ValidationError:
        return False
    return True
