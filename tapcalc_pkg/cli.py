from __future__ import annotations

import argparse
import json
import logging

from . import config
from .api import run_keys
from .config import PROMPT, VERSION
from .engine import CalculatorEngine
from .keymap import resolve, tokenize
from .numeric import format_number
from .session import KeyEventSource, subscribe
from .types import KeyRunResult, Snapshot, ValidationError

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("quit", "exit")


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running tapcalc health check...")
    print("-" * 50)

    try:
        import numpy

        print(f"[OK] NumPy {numpy.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] NumPy import failed: {e}")
        checks_failed += 1

    expectations = [
        ("3+4=", "7"),
        ("3+4+5=", "12"),
        ("5/0=", "Infinity"),
        ("2√", "1.4142135623730951"),
    ]
    for keys, expected in expectations:
        try:
            result = run_keys(keys)
            display = result.snapshot.display if result.snapshot else None
            if result.ok and display == expected:
                print(f"[OK] {keys} -> {display}")
                checks_passed += 1
            else:
                print(f"[FAIL] {keys}: expected {expected}, got {display}")
                checks_failed += 1
        except Exception as e:
            print(f"[FAIL] {keys} raised: {e}")
            checks_failed += 1

    if format_number(1e21) == "1e+21" and format_number(0.1 + 0.2) == "0.30000000000000004":
        print("[OK] Number formatting works")
        checks_passed += 1
    else:
        print("[FAIL] Number formatting check failed")
        checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def render(snapshot: Snapshot) -> str:
    """Two-line text rendering: pending expression above, display below."""
    marker = "M " if snapshot.memory != 0 else "  "
    upper = snapshot.expression_line
    return f"{marker}{upper}\n  {snapshot.display}"


def print_result_pretty(res: KeyRunResult, output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Result of a key run
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res.to_dict(), indent=2, ensure_ascii=False))
        return
    if not res.ok:
        print("Error:", res.error)
        return
    print(res.snapshot.display)


def print_help_text() -> None:
    """Print help text for REPL commands."""
    help_text = f"""tapcalc version {VERSION}

Type keys on one line, optionally separated by spaces. Each line is applied
in order; the pending operation and the display are shown afterwards.

  Digits            0-9   .
  Operators         +  -  *  /  %      (also ×  ÷)
  Equals            =     Enter
  Clear             C     Escape
  Backspace         Backspace   ⌫
  Unary             √ (sqrt)   x² (sq)   1/x (inv)
  Memory            MC  MR  M+  M-

Examples:
  12+30=            -> 42
  3+4+5=            -> 12 (left to right, no precedence)
  9√ M+ C MR        -> 3

Commands: help, quit, exit
"""
    print(help_text)


def repl_loop(engine: CalculatorEngine | None = None) -> None:
    """Interactive REPL reading key lines from stdin."""
    try:
        import readline  # noqa: F401
    except (ImportError, ModuleNotFoundError):
        # readline not available on Windows - that's fine
        pass

    engine = engine if engine is not None else CalculatorEngine()
    source = KeyEventSource("stdin")

    print("tapcalc - type 'help' for keys, 'quit' to exit.")
    with subscribe(source, engine):
        print(render(engine.snapshot()))
        while True:
            try:
                raw = input(PROMPT).strip()
            except (EOFError, KeyboardInterrupt):
                print("\nGoodbye.")
                break
            if not raw:
                continue
            lowered = raw.lower()
            if lowered in EXIT_COMMANDS:
                print("Goodbye.")
                break
            if lowered == "help":
                print_help_text()
                continue

            for token in tokenize(raw):
                try:
                    resolve(token)
                except ValidationError as e:
                    print("Error:", e.message)
                    break
                source.emit(token)
            print(render(engine.snapshot()))


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the tapcalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="tapcalc")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Run one key sequence (e.g. '3+4=') and print the display",
        dest="eval_keys",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=config.LOG_LEVEL.upper(),
        help="Set logging level",
    )
    parser.add_argument(
        "--log-file", type=str, default=config.LOG_FILE, help="Write logs to file"
    )
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    from .logging_config import setup_logging

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()
    if args.eval_keys is not None:
        keys = args.eval_keys.strip()
        if not keys:
            print("Error: Empty input. Please enter at least one key.")
            return 1
        result = run_keys(keys)
        print_result_pretty(result, args.format)
        return 0 if result.ok else 1

    repl_loop()
    return 0


if __name__ == "__main__":
    """Allow running the CLI module directly with python -m tapcalc_pkg.cli"""
    import sys

    sys.exit(main_entry())
