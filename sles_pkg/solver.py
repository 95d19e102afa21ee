"""System solving module.

This module provides:
- Method dispatch between the matrix (standard form + pseudo-inverse) solve
  and the general (exact SymPy) solve
- Dictionary-returning helpers for solving systems, files and term listings

Exceptions raised by the pipeline stages are reported, never swallowed: the
dict helpers return ``{"ok": False, "error": ..., "error_code": ...}``.
Internal functions return dicts; public API (api.py) converts to typed dataclasses.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Sequence

import sympy as sp

from . import config
from .expr import Equation
from .logging_config import get_logger
from .matrix import MatrixForm
from .parser import parse
from .standard_form import to_standard_form
from .termlist import equation_terms
from .types import (
    MatrixFormError,
    ParseError,
    SolverError,
    StandardFormError,
    TermError,
    ValidationError,
)

logger = get_logger("solver")

Solution = dict[str, float]

RECOVERABLE_ERRORS = (
    ValidationError,
    ParseError,
    TermError,
    StandardFormError,
    MatrixFormError,
    SolverError,
)


class Method(enum.Enum):
    MATRIX = "matrix"
    GENERAL = "general"


def resolve_method(method: Method | str | None) -> Method:
    """Accept a ``Method``, its name, or None for the configured default."""
    if method is None:
        method = config.SOLVER_METHOD
    if isinstance(method, Method):
        return method
    try:
        return Method(method.lower())
    except ValueError:
        raise SolverError(
            f"Unknown solve method {method!r} (choose from: matrix, general)",
            "UNKNOWN_METHOD",
        ) from None


def _solve_matrix(equations: Sequence[Equation]) -> tuple[Solution, bool]:
    forms = []
    for index, equation in enumerate(equations, start=1):
        try:
            forms.append(to_standard_form(equation))
        except (StandardFormError, TermError) as e:
            e.message = f"Equation {index}: {e.message}"
            raise
    matrix = MatrixForm.from_standard_forms(forms)
    approximate = matrix.is_singular()
    return matrix.solve(), approximate


def _solve_general(equations: Sequence[Equation]) -> tuple[Solution, bool]:
    if not equations:
        raise MatrixFormError("No equations to solve", "NO_EQUATIONS")
    sympy_equations = []
    for index, equation in enumerate(equations, start=1):
        converted = equation.to_sympy()
        if converted is sp.true:
            continue
        if converted is sp.false:
            raise SolverError(f"Equation {index} is never true", "NO_SOLUTION")
        sympy_equations.append(converted)
    symbols = sorted(
        set().union(*(eq.free_symbols for eq in sympy_equations)), key=lambda s: s.name
    )
    if not symbols:
        raise SolverError("The equations have no variables", "NO_VARIABLES")
    try:
        solutions = sp.linsolve(sympy_equations, symbols)
    except ValueError as e:
        # sympy raises NonlinearError (a ValueError) for non-linear systems
        raise SolverError(f"The system is not linear: {e}", "NOT_LINEAR") from e
    if solutions == sp.EmptySet:
        raise SolverError("The system has no solution", "NO_SOLUTION")
    values = next(iter(solutions))
    solution: Solution = {}
    for symbol, value in zip(symbols, values):
        if value.free_symbols:
            raise SolverError(
                f"The system has infinitely many solutions ({symbol} = {value})",
                "INFINITE_SOLUTIONS",
            )
        if not value.is_real:
            raise SolverError(f"{symbol} = {value} is not a real number", "NON_REAL")
        solution[symbol.name] = float(sp.N(value))
    return solution, False


def solve_with_method(
    equations: Sequence[Equation], method: Method | str | None = None
) -> tuple[Solution, bool]:
    """Solve parsed equations.

    Args:
        equations: Parsed equations, one per line of input
        method: ``Method.MATRIX`` (default) or ``Method.GENERAL``

    Returns:
        Tuple of (solution mapping sorted by variable, approximate flag). The
        flag is set when the matrix method had to fall back to a best fit.

    Raises:
        StandardFormError, TermError, MatrixFormError, SolverError
    """
    method = resolve_method(method)
    logger.debug("Solving %d equation(s) with the %s method", len(equations), method.value)
    if method is Method.MATRIX:
        solution, approximate = _solve_matrix(equations)
    else:
        solution, approximate = _solve_general(equations)
    return dict(sorted(solution.items())), approximate


def _error_dict(error: Exception) -> dict[str, Any]:
    result: dict[str, Any] = {
        "ok": False,
        "error": str(error),
        "error_code": getattr(error, "code", "ERROR"),
    }
    if isinstance(error, ParseError):
        result["diagnostics"] = [d.to_dict() for d in error.diagnostics]
        if error.line is not None:
            result["line"] = error.line
    return result


def parse_equations(lines: Sequence[str | Equation]) -> list[Equation]:
    """Parse every line; already-parsed equations pass through.

    Raises:
        ParseError, ValidationError: With the 1-based line number in the message
    """
    equations = []
    for index, line in enumerate(lines, start=1):
        if isinstance(line, Equation):
            equations.append(line)
            continue
        try:
            equations.append(parse(line))
        except (ParseError, ValidationError) as e:
            e.message = f"Equation {index}: {e.message}"
            if isinstance(e, ParseError):
                e.line = index
            raise
    return equations


def solve_system(
    equations: str | Sequence[str | Equation],
    method: Method | str | None = None,
    find_var: str | None = None,
) -> dict[str, Any]:
    """
    Solve a system of equations.

    Args:
        equations: Comma-separated equations (e.g., "x+y=3, x-y=1"), or a
            sequence of equation strings / parsed equations
        method: Solve method ("matrix" or "general")
        find_var: Optional variable to report alone

    Returns:
        Dictionary with keys:
            - ok: Boolean indicating success
            - type: Result type ("system", "system_var")
            - method: Method used
            - solutions: Mapping of variable to value (for system)
            - value: Value of find_var (for system_var)
            - approximate: True when a singular system was approximated
            - error / error_code / diagnostics: If ok is False
    """
    if isinstance(equations, str):
        equations = [part.strip() for part in equations.split(",") if part.strip()]
    try:
        resolved = resolve_method(method)
        parsed = parse_equations(equations)
        solution, approximate = solve_with_method(parsed, resolved)
    except RECOVERABLE_ERRORS as e:
        logger.info("Solve failed: %s", e)
        return _error_dict(e)

    if find_var:
        if find_var not in solution:
            return {
                "ok": False,
                "error": f"No solution found for variable {find_var}.",
                "error_code": "NO_SOLUTION",
            }
        return {
            "ok": True,
            "type": "system_var",
            "method": resolved.value,
            "value": solution[find_var],
            "approximate": approximate,
        }
    return {
        "ok": True,
        "type": "system",
        "method": resolved.value,
        "solutions": solution,
        "approximate": approximate,
    }


def read_equation_file(path: str | Path) -> list[str]:
    """Read an equation file: one equation per line, blank lines ignored."""
    text = Path(path).read_text(encoding="utf-8")
    return [line.strip() for line in text.splitlines() if line.strip()]


def solve_file(
    path: str | Path | None = None, method: Method | str | None = None
) -> dict[str, Any]:
    """Solve the system written in an equation file (default: config.EQUATION_FILE)."""
    if path is None:
        path = config.EQUATION_FILE
    try:
        lines = read_equation_file(path)
    except FileNotFoundError:
        return {
            "ok": False,
            "error": f"Equation file not found: {path}",
            "error_code": "FILE_NOT_FOUND",
        }
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return {
            "ok": False,
            "error": f"Could not read equation file {path}: {e}",
            "error_code": "FILE_ERROR",
        }
    return solve_system(lines, method)


def describe_terms(equation: str | Equation) -> dict[str, Any]:
    """Flatten and simplify both sides of one equation.

    Returns:
        Dictionary with ``lhs`` / ``rhs`` lists of rendered terms and the
        ``TermList`` objects under ``lhs_terms`` / ``rhs_terms``, or an error.
    """
    try:
        if isinstance(equation, str):
            equation = parse(equation)
        lhs, rhs = equation_terms(equation)
    except RECOVERABLE_ERRORS as e:
        return _error_dict(e)
    return {
        "ok": True,
        "type": "terms",
        "lhs": [str(term) for term in lhs],
        "rhs": [str(term) for term in rhs],
        "lhs_terms": lhs,
        "rhs_terms": rhs,
    }
