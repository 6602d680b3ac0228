"""Tests for scoped key subscriptions."""

import pytest

from tapcalc_pkg.engine import CalculatorEngine
from tapcalc_pkg.session import KeyEventSource, subscribe


def _emit_all(source, keys):
    for key in keys:
        source.emit(key)


class TestSubscribe:
    """Test that subscriptions route keys and always release."""

    def test_keys_reach_engine(self):
        source = KeyEventSource()
        engine = CalculatorEngine()
        with subscribe(source, engine):
            _emit_all(source, ["3", "+", "4", "="])
        assert engine.state.display == "7"

    def test_listener_released_on_exit(self):
        source = KeyEventSource()
        engine = CalculatorEngine()
        with subscribe(source, engine):
            assert source.listener_count == 1
        assert source.listener_count == 0
        source.emit("9")
        assert engine.state.display == "0"

    def test_listener_released_on_error(self):
        source = KeyEventSource()
        engine = CalculatorEngine()
        with pytest.raises(RuntimeError):
            with subscribe(source, engine):
                source.emit("5")
                raise RuntimeError("view torn down")
        assert source.listener_count == 0
        assert engine.state.display == "5"

    def test_on_change_receives_snapshots(self):
        source = KeyEventSource()
        seen = []
        with subscribe(source, CalculatorEngine(), on_change=seen.append):
            _emit_all(source, ["1", "2", "Backspace"])
        assert [s.display for s in seen] == ["1", "12", "1"]

    def test_unknown_key_logged_and_ignored(self, caplog):
        source = KeyEventSource("keypad")
        engine = CalculatorEngine()
        seen = []
        with caplog.at_level("WARNING", logger="tapcalc_pkg.session"):
            with subscribe(source, engine, on_change=seen.append):
                _emit_all(source, ["4", "Tab", "2"])
        assert engine.state.display == "42"
        assert len(seen) == 2
        assert "Unknown key" in caplog.text
        assert "keypad" in caplog.text

    def test_two_engines_on_one_source(self):
        source = KeyEventSource()
        first, second = CalculatorEngine(), CalculatorEngine()
        with subscribe(source, first):
            source.emit("1")
            with subscribe(source, second):
                source.emit("2")
            source.emit("3")
        assert first.state.display == "123"
        assert second.state.display == "2"

    def test_remove_unknown_listener_is_harmless(self):
        source = KeyEventSource()
        source.remove_listener(lambda key: None)
        assert source.listener_count == 0
