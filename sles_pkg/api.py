"""Public API for SLES - returns structured objects without side effects."""

from __future__ import annotations

from pathlib import Path

from .logging_config import get_logger
from .parser import parse
from .solver import Method, describe_terms
from .solver import solve_file as _solve_file
from .solver import solve_system as _solve_system
from .standard_form import to_standard_form
from .types import (
    ParseError,
    ParseResult,
    SolveResult,
    StandardFormError,
    StandardFormResult,
    TermError,
    TermsResult,
    ValidationError,
)

logger = get_logger("api")


def parse_equation(equation: str) -> ParseResult:
    """Parse an equation without solving it.

    Args:
        equation: Equation string (e.g., "2x + 3y = 7")

    Returns:
        ParseResult with the parenthesised expression, or diagnostics

    Example:
        >>> from sles_pkg.api import parse_equation
        >>> parse_equation("2 + 3 * 4 = x").expression
        '(2 + (3 * 4)) = x'
    """
    try:
        expr = parse(equation)
    except ParseError as e:
        return ParseResult(
            ok=False,
            error=str(e),
            error_code=e.code,
            diagnostics=[d.to_dict() for d in e.diagnostics],
        )
    except ValidationError as e:
        return ParseResult(ok=False, error=str(e), error_code=e.code)
    return ParseResult(ok=True, expression=str(expr))


def validate_equation(equation: str) -> tuple[bool, str | None]:
    """Check that an equation parses.

    Returns:
        Tuple of (is_valid, error_message)
    """
    result = parse_equation(equation)
    return result.ok, result.error


def terms(equation: str) -> TermsResult:
    """List the flattened, simplified terms of both sides of an equation.

    Example:
        >>> from sles_pkg.api import terms
        >>> terms("2*x + 3*x = 5").lhs
        ['2x', '3x']
    """
    data = describe_terms(equation)
    if not data.get("ok"):
        return TermsResult(ok=False, error=data.get("error"), error_code=data.get("error_code"))
    return TermsResult(ok=True, lhs=data["lhs"], rhs=data["rhs"])


def standard_form(equation: str) -> StandardFormResult:
    """Reduce one equation to linear standard form.

    Example:
        >>> from sles_pkg.api import standard_form
        >>> result = standard_form("x - y = 1")
        >>> result.coefficients, result.constant
        ({'x': 1.0, 'y': -1.0}, 1.0)
    """
    try:
        form = to_standard_form(parse(equation))
    except (ParseError, ValidationError, StandardFormError, TermError) as e:
        logger.debug("No standard form for %r: %s", equation, e)
        return StandardFormResult(ok=False, error=str(e), error_code=e.code)
    return StandardFormResult(ok=True, coefficients=form.coefficients, constant=form.constant)


def _to_solve_result(data: dict) -> SolveResult:
    if not data.get("ok"):
        return SolveResult(
            ok=False,
            result_type="system",
            error=data.get("error"),
            error_code=data.get("error_code"),
        )
    return SolveResult(
        ok=True,
        result_type=data.get("type", "system"),
        method=data.get("method"),
        solutions=data.get("solutions"),
        value=data.get("value"),
        approximate=data.get("approximate", False),
    )


def solve_system(
    equations: str | list[str],
    method: Method | str | None = None,
    find_var: str | None = None,
) -> SolveResult:
    """Solve a system of linear equations.

    Args:
        equations: Comma-separated equations (e.g., "2x+3y=8, x-y=1") or a list
        method: "matrix" (pseudo-inverse) or "general" (exact, SymPy)
        find_var: Optional variable to report alone

    Returns:
        SolveResult with the solution mapping

    Example:
        >>> from sles_pkg.api import solve_system
        >>> result = solve_system("x+y=3, x-y=1")
        >>> {var: round(value, 9) for var, value in result.solutions.items()}
        {'x': 2.0, 'y': 1.0}
    """
    return _to_solve_result(_solve_system(equations, method, find_var))


def solve_file(path: str | Path | None = None, method: Method | str | None = None) -> SolveResult:
    """Solve the system stored one equation per line in ``path``."""
    return _to_solve_result(_solve_file(path, method))
