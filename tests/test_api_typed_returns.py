"""Test that API functions return typed dataclasses."""

import math

import pytest

from sles_pkg.api import (
    parse_equation,
    solve_file,
    solve_system,
    standard_form,
    terms,
    validate_equation,
)
from sles_pkg.types import ParseResult, SolveResult, StandardFormResult, TermsResult


class TestAPITypedReturns:
    """Test that all API functions return typed dataclasses."""

    def test_parse_equation_returns_parse_result(self):
        """Test that parse_equation() returns ParseResult."""
        result = parse_equation("2 + 3 * 4 = x")
        assert isinstance(result, ParseResult)
        assert result.ok is True
        assert result.expression == "(2 + (3 * 4)) = x"

    def test_parse_equation_error_has_diagnostics(self):
        """Test that parse errors carry structured diagnostics."""
        result = parse_equation("2x + = 3")
        assert isinstance(result, ParseResult)
        assert result.ok is False
        assert result.error_code == "PARSE_ERROR"
        assert result.diagnostics[0]["span"] == [5, 6]
        assert "diagnostics" in result.to_dict()

    def test_parse_equation_validation_error(self):
        """Test that empty input is reported, not raised."""
        result = parse_equation("")
        assert result.ok is False
        assert result.error_code == "EMPTY_INPUT"

    def test_validate_equation(self):
        """Test validate_equation() returns (bool, error) tuple."""
        assert validate_equation("x + y = 1") == (True, None)
        is_valid, error = validate_equation("x + y")
        assert is_valid is False
        assert error is not None

    def test_terms_returns_terms_result(self):
        """Test that terms() returns TermsResult."""
        result = terms("2*x + 3*x = 5")
        assert isinstance(result, TermsResult)
        assert result.lhs == ["2x", "3x"]
        assert result.rhs == ["5"]

    def test_terms_error(self):
        result = terms("x = 1/0")
        assert result.ok is False
        assert result.error_code == "DIVISION_BY_ZERO"

    def test_standard_form_returns_standard_form_result(self):
        """Test that standard_form() returns StandardFormResult."""
        result = standard_form("pi*x = 2*pi")
        assert isinstance(result, StandardFormResult)
        assert result.ok is True
        assert result.coefficients["x"] == pytest.approx(math.pi)
        assert result.constant == pytest.approx(2 * math.pi)

    @pytest.mark.parametrize(
        "equation, code",
        [
            ("x + x = 4", "DUPLICATE_VARIABLE"),
            ("x^2 = 4", "NOT_LINEAR"),
            ("3 = y", "NOT_STANDARD_FORM"),
            ("x +", "PARSE_ERROR"),
            ("x - (y + z) = 1", "SUBTRACTED_SUM"),
        ],
    )
    def test_standard_form_errors(self, equation, code):
        result = standard_form(equation)
        assert result.ok is False
        assert result.error_code == code

    def test_solve_system_returns_solve_result(self):
        """Test that solve_system() returns SolveResult."""
        result = solve_system("2x + 3y = 8, x - y = 1")
        assert isinstance(result, SolveResult)
        assert result.ok is True
        assert result.result_type == "system"
        assert result.method == "matrix"
        assert result.solutions["x"] == pytest.approx(2.2, abs=1e-9)
        assert result.solutions["y"] == pytest.approx(1.2, abs=1e-9)
        assert result.to_dict()["approximate"] is False

    def test_solve_system_find_var(self):
        result = solve_system(["x + y = 3", "x - y = 1"], find_var="y")
        assert result.result_type == "system_var"
        assert result.value == pytest.approx(1.0)

    def test_solve_system_error(self):
        result = solve_system("x + y = 3")
        assert isinstance(result, SolveResult)
        assert result.ok is False
        assert result.error_code == "EQUATION_COUNT_MISMATCH"
        assert "approximate" not in result.to_dict()

    def test_solve_file_returns_solve_result(self, tmp_path):
        path = tmp_path / "system.txt"
        path.write_text("x + y = 3\nx - y = 1\n", encoding="utf-8")
        result = solve_file(path, method="general")
        assert isinstance(result, SolveResult)
        assert result.solutions == {"x": 2.0, "y": 1.0}

    def test_repr(self):
        assert "ok=False" in repr(solve_system(""))
        assert "approximate=True" in repr(solve_system("x + y = 2, 2x + 2y = 4"))
