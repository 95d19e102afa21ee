"""Reduction of a parsed equation to linear standard form ``c1*v1 + ... = k``."""

from __future__ import annotations

from dataclasses import dataclass, field

from .expr import Equation, Expr
from .logging_config import get_logger
from .termlist import TermList
from .types import StandardFormError

logger = get_logger("standard_form")


@dataclass
class StandardForm:
    """One linear equation: coefficient per variable (sorted) and the right-hand constant."""

    coefficients: dict[str, float] = field(default_factory=dict)
    constant: float = 0.0

    @property
    def variables(self) -> list[str]:
        return list(self.coefficients)

    def __str__(self) -> str:
        lhs = " + ".join(f"{value!r}{var}" for var, value in self.coefficients.items())
        return f"{lhs} = {self.constant!r}"


def to_standard_form(expr: Expr) -> StandardForm:
    """Reduce an equation to standard form.

    The right-hand side must be a single term without variables. Every term
    on the left-hand side must be a number (possibly times named constants)
    times exactly one variable, and no variable may appear twice.

    Raises:
        StandardFormError: ``NOT_EQUATION``, ``NOT_STANDARD_FORM``,
            ``NOT_LINEAR`` or ``DUPLICATE_VARIABLE``
        TermError: If a side cannot be evaluated (e.g. division by zero)
    """
    if not isinstance(expr, Equation):
        raise StandardFormError("Expected an equation", "NOT_EQUATION")

    rhs = TermList.from_expr(expr.rhs)
    if len(rhs) != 1:
        raise StandardFormError(
            f"The right-hand side must be a single constant, got {len(rhs)} terms ({rhs})",
            "NOT_STANDARD_FORM",
        )
    if rhs[0].variables:
        raise StandardFormError(
            f"The right-hand side must be a constant, got {rhs[0]}",
            "NOT_STANDARD_FORM",
        )
    constant = rhs[0].get_approximate_coefficient()

    coefficients: dict[str, float] = {}
    for term in TermList.from_expr(expr.lhs):
        if term.issue is not None:
            raise StandardFormError(f"Term {term} {term.issue}", "NOT_LINEAR")
        if not term.variables:
            raise StandardFormError(
                f"Term {term} has no variable; move constants to the right-hand side",
                "NOT_STANDARD_FORM",
            )
        if len(term.variables) > 1:
            raise StandardFormError(
                f"Term {term} has more than one variable", "NOT_STANDARD_FORM"
            )
        variable = term.variables[0]
        if variable in coefficients:
            raise StandardFormError(
                f"Variable {variable} appears more than once on the left-hand side",
                "DUPLICATE_VARIABLE",
            )
        coefficients[variable] = term.get_approximate_coefficient()

    form = StandardForm(dict(sorted(coefficients.items())), constant)
    logger.debug("Standard form of %s: %s", expr, form)
    return form
