"""Test error codes raised by engine and key map validation."""

import unittest

from tapcalc_pkg.engine import CalculatorEngine
from tapcalc_pkg.keymap import resolve
from tapcalc_pkg.types import ValidationError


class TestErrorCodes(unittest.TestCase):
    """Test that validation failures carry the right codes."""

    def test_unknown_key_error_code(self):
        try:
            resolve("F5")
            self.fail("Should have raised ValidationError")
        except ValidationError as e:
            self.assertEqual(e.code, "UNKNOWN_KEY", f"Expected UNKNOWN_KEY, got {e.code}")
            self.assertIn("unknown key", str(e).lower())

    def test_engine_argument_codes(self):
        engine = CalculatorEngine()
        cases = [
            (engine.enter_digit, "x", "INVALID_DIGIT"),
            (engine.select_operator, "**", "INVALID_OPERATOR"),
            (engine.apply_unary, "cos", "INVALID_UNARY"),
            (engine.memory_op, "M*", "INVALID_MEMORY_OP"),
        ]
        for method, arg, code in cases:
            with self.assertRaises(ValidationError) as ctx:
                method(arg)
            self.assertEqual(ctx.exception.code, code)

    def test_domain_errors_do_not_raise(self):
        """Divide-by-zero, negative roots and 1/0 are values, not errors."""
        engine = CalculatorEngine()
        engine.apply_unary("1/x")
        self.assertEqual(engine.state.display, "Infinity")
        engine.clear()
        engine.enter_digit("0")
        engine.select_operator("/")
        engine.enter_digit("0")
        self.assertEqual(engine.confirm_equals().display, "NaN")

    def test_default_code(self):
        err = ValidationError("bad")
        self.assertEqual(err.code, "VALIDATION_ERROR")
        self.assertEqual(str(err), "bad")


if __name__ == "__main__":
    unittest.main()
