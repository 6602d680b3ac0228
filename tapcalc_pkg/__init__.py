"""tapcalc package: keypad calculator engine, key map, input sessions and CLI."""

__all__ = [
    "config",
    "engine",
    "numeric",
    "keymap",
    "session",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "run_keys",
    "validate_keys",
]
