"""Test error codes returned by various functions."""

import unittest

from sles_pkg.parser import parse, validate_input
from sles_pkg.solver import describe_terms, solve_system
from sles_pkg.types import (
    InvariantError,
    MatrixFormError,
    ParseError,
    SolverError,
    StandardFormError,
    TermError,
    ValidationError,
)


class TestErrorCodes(unittest.TestCase):
    """Test that functions return appropriate error codes."""

    def test_too_long_error_code(self):
        """Test that overly long input returns TOO_LONG error code."""
        try:
            validate_input("x" * 10001)
            self.fail("Should have raised ValidationError")
        except ValidationError as e:
            self.assertEqual(e.code, "TOO_LONG", f"Expected TOO_LONG, got {e.code}")
            self.assertIn("too long", str(e).lower())

    def test_parse_error_code(self):
        """Test that malformed input raises ParseError with PARSE_ERROR code."""
        with self.assertRaises(ParseError) as ctx:
            parse("x = = 1")
        self.assertEqual(ctx.exception.code, "PARSE_ERROR")
        self.assertTrue(ctx.exception.diagnostics)

    def test_solve_error_codes(self):
        """Test that solve_system reports each failure with its code."""
        cases = {
            "x + y = 3": "EQUATION_COUNT_MISMATCH",
            "x + y = 3, x + z = 1": "MISSING_VARIABLE",
            "x + x = 4": "DUPLICATE_VARIABLE",
            "x^2 = 4": "NOT_LINEAR",
            "x + 1 = 4": "NOT_STANDARD_FORM",
            "x = 1/0": "DIVISION_BY_ZERO",
            "x $ = 1": "PARSE_ERROR",
        }
        for equations, code in cases.items():
            with self.subTest(equations=equations):
                result = solve_system(equations)
                self.assertFalse(result.get("ok"))
                self.assertEqual(result.get("error_code"), code, result.get("error"))

    def test_terms_error_code(self):
        result = describe_terms("x - (y + z) = 1")
        self.assertFalse(result.get("ok"))
        self.assertEqual(result.get("error_code"), "SUBTRACTED_SUM")

    def test_default_codes(self):
        """Test the default code of each exception type."""
        self.assertEqual(ValidationError("m").code, "VALIDATION_ERROR")
        self.assertEqual(ParseError("m").code, "PARSE_ERROR")
        self.assertEqual(TermError("m").code, "TERM_ERROR")
        self.assertEqual(StandardFormError("m").code, "NOT_STANDARD_FORM")
        self.assertEqual(MatrixFormError("m").code, "MATRIX_ERROR")
        self.assertEqual(SolverError("m").code, "SOLVER_ERROR")

    def test_invariant_error_is_not_recoverable(self):
        """Test that invariant violations are programming errors, not results."""
        self.assertTrue(issubclass(InvariantError, RuntimeError))
        with self.assertRaises(InvariantError):
            parse("x = 1").terms()


if __name__ == "__main__":
    unittest.main()
