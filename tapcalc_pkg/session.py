"""Scoped input subscriptions feeding key events into an engine."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator

from .engine import CalculatorEngine
from .keymap import dispatch
from .logging_config import safe_log
from .types import Snapshot, ValidationError

logger = logging.getLogger(__name__)

KeyListener = Callable[[str], None]


class KeyEventSource:
    """Fan-out point for key tokens from one input device (keyboard, keypad, stdin)."""

    def __init__(self, name: str = "keyboard"):
        self.name = name
        self._listeners: list[KeyListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: KeyListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: KeyListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def emit(self, token: str) -> None:
        # Copy so a listener may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(token)


@contextmanager
def subscribe(
    source: KeyEventSource,
    engine: CalculatorEngine,
    on_change: Callable[[Snapshot], None] | None = None,
) -> Iterator[CalculatorEngine]:
    """Route key events from ``source`` into ``engine`` for the duration of the block.

    Unknown keys are logged and dropped. The listener is removed when the
    block exits, including on exceptions.

    Args:
        source: Event source to listen on
        engine: Engine receiving the commands
        on_change: Optional callback receiving the snapshot after each key

    Yields:
        The engine, for convenience
    """

    def _on_key(token: str) -> None:
        try:
            snap = dispatch(engine, token)
        except ValidationError as e:
            logger.warning("Ignoring key from %s: %s (%s)", source.name, e.message, e.code)
            return
        if on_change is not None:
            on_change(snap)

    source.add_listener(_on_key)
    logger.debug("Subscribed to %s", source.name)
    try:
        yield engine
    finally:
        source.remove_listener(_on_key)
        safe_log(__name__, "debug", "Unsubscribed from %s", source.name)
