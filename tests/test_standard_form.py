"""Unit tests for standard_form module."""

import math
import unittest

from sles_pkg.expr import Variable
from sles_pkg.parser import parse
from sles_pkg.standard_form import StandardForm, to_standard_form
from sles_pkg.types import StandardFormError, TermError


def form(text):
    return to_standard_form(parse(text))


class TestStandardForm(unittest.TestCase):
    """Test reduction of valid equations."""

    def test_two_variables(self):
        result = form("2x + 3y = 8")
        self.assertEqual(result.coefficients, {"x": 2.0, "y": 3.0})
        self.assertEqual(result.constant, 8.0)

    def test_subtraction(self):
        result = form("x - y = 1")
        self.assertEqual(result.coefficients, {"x": 1.0, "y": -1.0})
        self.assertEqual(result.constant, 1.0)

    def test_variables_sorted(self):
        result = form("3y + 2x = 8")
        self.assertEqual(result.variables, ["x", "y"])

    def test_fractions_and_negative_constant(self):
        result = form("-x/2 + 4z = -3")
        self.assertEqual(result.coefficients, {"x": -0.5, "z": 4.0})
        self.assertEqual(result.constant, -3.0)

    def test_named_constants_are_approximated(self):
        result = form("pi*x = 2*pi")
        self.assertAlmostEqual(result.coefficients["x"], math.pi)
        self.assertAlmostEqual(result.constant, 2 * math.pi)

    def test_e_on_right_hand_side(self):
        self.assertAlmostEqual(form("x = e").constant, math.e)

    def test_zero_coefficient_keeps_variable(self):
        self.assertEqual(form("0y + x = 1").coefficients, {"x": 1.0, "y": 0.0})

    def test_str(self):
        self.assertEqual(str(StandardForm({"x": 2.0}, 4.0)), "2.0x = 4.0")


class TestStandardFormErrors(unittest.TestCase):
    """Test rejected equations and their error codes."""

    def assertCode(self, text, code):
        with self.assertRaises(StandardFormError) as ctx:
            form(text)
        self.assertEqual(ctx.exception.code, code)
        return ctx.exception

    def test_duplicate_variable(self):
        self.assertCode("x + x = 4", "DUPLICATE_VARIABLE")
        self.assertCode("2*x + 3*x = 1", "DUPLICATE_VARIABLE")

    def test_nonlinear(self):
        error = self.assertCode("x^2 = 4", "NOT_LINEAR")
        self.assertIn("power", str(error))

    def test_variable_on_right(self):
        self.assertCode("3 = y", "NOT_STANDARD_FORM")

    def test_constant_on_left(self):
        self.assertCode("x + 1 = 4", "NOT_STANDARD_FORM")

    def test_product_of_variables(self):
        self.assertCode("x y = 1", "NOT_STANDARD_FORM")

    def test_sum_on_right(self):
        self.assertCode("x = 1 + 2", "NOT_STANDARD_FORM")

    def test_not_an_equation(self):
        with self.assertRaises(StandardFormError) as ctx:
            to_standard_form(Variable("x"))
        self.assertEqual(ctx.exception.code, "NOT_EQUATION")

    def test_arithmetic_error_propagates(self):
        with self.assertRaises(TermError):
            form("x = 1/0")


if __name__ == "__main__":
    unittest.main()
