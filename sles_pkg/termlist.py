"""Simplification of flattened terms into coefficient / symbol form.

Each term produced by ``Expr.terms()`` is evaluated into a numeric coefficient
plus the variables and named constants it multiplies. This handles terms such
as ``5x``, ``(8+3)x``, ``-x/2`` or ``2 pi r``; it does not expand products of
sums.

Named constants stay symbolic only while they multiply the term (including a
numerator). In a denominator, a power or a sum they are replaced by their
float value first, so ``get_approximate_coefficient()`` is always numerically
right. A term whose variables do not appear as a plain product (``x^2``,
``2/x``, ``(x+1)*2``) records the reason in ``Term.issue``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .expr import BinaryOp, Constant, Equation, Expr, NamedConstant, Number, Op, Variable
from .types import InvariantError, TermError


@dataclass
class Term:
    coefficient: float
    variables: list[str] = field(default_factory=list)
    constants: list[Constant] = field(default_factory=list)
    issue: str | None = None

    def get_approximate_coefficient(self) -> float:
        """Coefficient with every named constant multiplied in, in encounter order."""
        value = self.coefficient
        for constant in self.constants:
            value *= constant.approximation
        return value

    @property
    def approximate_coefficient(self) -> float:
        return self.get_approximate_coefficient()

    def __str__(self) -> str:
        coefficient = repr(self.coefficient).removesuffix(".0")
        symbols = "".join(self.variables) + "".join(c.symbol for c in self.constants)
        return f"{coefficient}{symbols}"


class TermList(list):
    """An ordered list of ``Term`` objects standing for their sum."""

    @classmethod
    def from_expr(cls, expr: Expr) -> TermList:
        """Flatten ``expr`` into terms and simplify each of them."""
        return simplify(expr.terms())

    def __str__(self) -> str:
        return " + ".join(str(term) for term in self)


class _Symbols:
    """Variables and constants collected while evaluating one subtree."""

    def __init__(self) -> None:
        self.variables: list[str] = []
        self.constants: list[Constant] = []
        self.issue: str | None = None

    def __bool__(self) -> bool:
        return bool(self.variables or self.constants)

    def merge(self, other: _Symbols) -> None:
        self.variables.extend(other.variables)
        self.constants.extend(other.constants)
        if self.issue is None:
            self.issue = other.issue

    def flag(self, issue: str) -> None:
        if self.issue is None:
            self.issue = issue

    def resolve_constants(self, value: float) -> float:
        """Fold the collected constants into ``value`` and forget them."""
        for constant in self.constants:
            value *= constant.approximation
        self.constants.clear()
        return value


def _divide(left: float, right: float) -> float:
    if right == 0.0:
        raise TermError("Division by zero", "DIVISION_BY_ZERO")
    return left / right


def _power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except ValueError:
        raise TermError(
            f"{base!r} ^ {exponent!r} has no real value", "NON_REAL"
        ) from None
    except OverflowError:
        raise TermError(f"{base!r} ^ {exponent!r} is too large", "OVERFLOW") from None


def _evaluate(node: Expr, symbols: _Symbols) -> float:
    if isinstance(node, Number):
        return node.value
    if isinstance(node, Variable):
        symbols.variables.append(node.symbol)
        return 1.0
    if isinstance(node, NamedConstant):
        symbols.constants.append(node.constant)
        return 1.0
    if isinstance(node, Equation):
        raise InvariantError("Cannot simplify an equation; simplify each side separately")
    if not isinstance(node, BinaryOp):
        raise InvariantError(f"Unknown expression node {node!r}")

    left_symbols = _Symbols()
    right_symbols = _Symbols()
    left = _evaluate(node.left, left_symbols)
    right = _evaluate(node.right, right_symbols)

    if node.op is Op.MUL:
        result = left * right
    elif node.op is Op.DIV:
        right = right_symbols.resolve_constants(right)
        if right_symbols.variables:
            symbols.flag("divides by a variable")
        result = _divide(left, right)
    elif node.op is Op.POW:
        left = left_symbols.resolve_constants(left)
        right = right_symbols.resolve_constants(right)
        if left_symbols.variables:
            symbols.flag("raises a variable to a power")
        elif right_symbols.variables:
            symbols.flag("has a variable exponent")
        result = _power(left, right)
    else:
        result = _add_or_subtract(node.op, left, left_symbols, right, right_symbols, symbols)

    symbols.merge(left_symbols)
    symbols.merge(right_symbols)
    return result


def _add_or_subtract(
    op: Op,
    left: float,
    left_symbols: _Symbols,
    right: float,
    right_symbols: _Symbols,
    symbols: _Symbols,
) -> float:
    # Adding a symbol-free zero keeps the other side a plain product: 0 - 3x is -3x.
    if not left_symbols and left == 0.0:
        return right if op is Op.ADD else -right
    if not right_symbols and right == 0.0:
        return left
    left = left_symbols.resolve_constants(left)
    right = right_symbols.resolve_constants(right)
    if left_symbols.variables or right_symbols.variables:
        symbols.flag("is a sum, not a single product")
    return left + right if op is Op.ADD else left - right


def simplify_term(expr: Expr) -> Term:
    """Reduce one flattened term to its coefficient, variables and constants."""
    symbols = _Symbols()
    coefficient = _evaluate(expr, symbols)
    if not math.isfinite(coefficient):
        raise TermError(f"The coefficient of {expr} is not finite", "OVERFLOW")
    return Term(coefficient, symbols.variables, symbols.constants, symbols.issue)


def simplify(terms: list[Expr]) -> TermList:
    """Simplify a list of expressions (an implicit sum) into a ``TermList``."""
    return TermList(simplify_term(term) for term in terms)


def equation_terms(equation: Expr) -> tuple[TermList, TermList]:
    """Flatten and simplify both sides of an equation."""
    if not isinstance(equation, Equation):
        raise TermError("Expected an equation", "NOT_EQUATION")
    return TermList.from_expr(equation.lhs), TermList.from_expr(equation.rhs)
