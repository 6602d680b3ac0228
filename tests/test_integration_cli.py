"""Integration tests for CLI functionality."""

import json
import os
import subprocess
import sys
from pathlib import Path

from tapcalc_pkg.cli import print_result_pretty, render
from tapcalc_pkg.api import run_keys

ROOT = Path(__file__).resolve().parent.parent


def _run_cli(*args, stdin=None):
    env = dict(os.environ, PYTHONIOENCODING="utf-8")
    return subprocess.run(
        [sys.executable, "-m", "tapcalc_pkg.cli", *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
        input=stdin,
        cwd=ROOT,
        env=env,
        timeout=30,
    )


def test_cli_version():
    """Test --version flag."""
    result = _run_cli("--version")
    assert result.returncode == 0
    assert result.stdout.strip() != ""


def test_cli_health_check():
    """Test --health-check command."""
    result = _run_cli("--health-check")
    assert result.returncode == 0
    assert "health check" in result.stdout.lower()


def test_cli_eval_human():
    result = _run_cli("--eval", "3+4+5=")
    assert result.returncode == 0
    assert result.stdout.strip() == "12"


def test_cli_eval_json():
    """Test CLI evaluation with JSON output."""
    result = _run_cli("--eval", "5/0=", "--format", "json")
    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["ok"] is True
    assert data["state"]["display"] == "Infinity"


def test_cli_eval_unknown_key():
    result = _run_cli("-e", "3+q")
    assert result.returncode == 1
    assert "Error" in result.stdout


def test_cli_eval_empty():
    result = _run_cli("-e", "   ")
    assert result.returncode == 1


def test_cli_module_entry():
    env = dict(os.environ, PYTHONIOENCODING="utf-8")
    result = subprocess.run(
        [sys.executable, "-m", "tapcalc_pkg", "-e", "9√"],
        capture_output=True,
        text=True,
        encoding="utf-8",
        cwd=ROOT,
        env=env,
        timeout=30,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "3"


def test_repl_session():
    result = _run_cli(stdin="3+4=\n4 M+ C\nMR\nhelp\nquit\n")
    assert result.returncode == 0
    lines = [line.strip() for line in result.stdout.splitlines()]
    assert "7" in lines
    assert "4" in lines
    assert "Goodbye." in result.stdout
    assert "Memory" in result.stdout


def test_repl_reports_unknown_key():
    result = _run_cli(stdin="12+q3\n")
    assert result.returncode == 0
    assert "Error: Unknown key: 'q'" in result.stdout
    # keys before the bad one were applied, the rest of the line was dropped
    assert "12 +" in result.stdout


def test_render_shows_memory_marker():
    text = render(run_keys("4 M+ 2+").snapshot)
    upper, lower = text.splitlines()
    assert upper.startswith("M ")
    assert upper.endswith("2 +")
    assert lower.strip() == "2"


def test_print_result_pretty(capsys):
    print_result_pretty(run_keys("2*3="))
    assert capsys.readouterr().out.strip() == "6"
    print_result_pretty(run_keys("2*y"))
    assert capsys.readouterr().out.startswith("Error:")
    print_result_pretty(run_keys("2*3="), output_format="json")
    assert json.loads(capsys.readouterr().out)["state"]["display"] == "6"
