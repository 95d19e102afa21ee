"""Expression tree produced by the parser.

Nodes are immutable; every child is owned by exactly one parent. An
``Equation`` only ever appears at the root of a parsed line.
"""

from __future__ import annotations

import enum
import operator
from dataclasses import dataclass
from typing import Callable

import sympy as sp

from .config import CONSTANT_VALUES
from .types import InvariantError, TermError


class Constant(enum.Enum):
    PI = "pi"
    E = "e"

    @property
    def approximation(self) -> float:
        return CONSTANT_VALUES[self.value]

    @property
    def symbol(self) -> str:
        return "π" if self is Constant.PI else "e"

    def to_sympy(self) -> sp.Basic:
        return sp.pi if self is Constant.PI else sp.E


class Op(enum.Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


SYMPY_OPERATORS: dict[Op, Callable[[sp.Basic, sp.Basic], sp.Basic]] = {
    Op.ADD: operator.add,
    Op.SUB: operator.sub,
    Op.MUL: operator.mul,
    Op.DIV: operator.truediv,
    Op.POW: operator.pow,
}


def format_float(value: float) -> str:
    """Shortest exact text for ``value``, without a trailing ``.0``."""
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


class Expr:
    """Base class of all expression nodes."""

    def terms(self) -> list[Expr]:
        """Split the additive structure into a list of expressions whose sum is ``self``.

        ``a + b`` contributes the terms of ``a`` then those of ``b``. ``a - b``
        contributes the terms of ``a`` followed by ``0 - b``; ``b`` must be a
        single term. Any other node, including products, quotients and powers,
        is one term. Products of sums are not distributed.
        """
        acc: list[Expr] = []
        _collect_terms(self, acc)
        return acc

    def to_sympy(self) -> sp.Basic:
        raise NotImplementedError


@dataclass(frozen=True)
class Number(Expr):
    value: float

    def __str__(self) -> str:
        return format_float(self.value)

    def to_sympy(self) -> sp.Basic:
        return sp.Rational(repr(self.value))


@dataclass(frozen=True)
class Variable(Expr):
    symbol: str

    def __str__(self) -> str:
        return self.symbol

    def to_sympy(self) -> sp.Basic:
        return sp.Symbol(self.symbol)


@dataclass(frozen=True)
class NamedConstant(Expr):
    constant: Constant

    def __str__(self) -> str:
        return self.constant.value

    def to_sympy(self) -> sp.Basic:
        return self.constant.to_sympy()


@dataclass(frozen=True)
class BinaryOp(Expr):
    left: Expr
    op: Op
    right: Expr

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"

    def to_sympy(self) -> sp.Basic:
        return SYMPY_OPERATORS[self.op](self.left.to_sympy(), self.right.to_sympy())


@dataclass(frozen=True)
class Equation(Expr):
    lhs: Expr
    rhs: Expr

    def __str__(self) -> str:
        return f"{self.lhs} = {self.rhs}"

    def terms(self) -> list[Expr]:
        raise InvariantError("an equation has no terms; flatten each side separately")

    def to_sympy(self) -> sp.Basic:
        return sp.Eq(self.lhs.to_sympy(), self.rhs.to_sympy())


def expression_depth(expr: Expr) -> int:
    """Number of nodes on the longest root-to-leaf path."""
    deepest = 0
    stack = [(expr, 1)]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth)
        if isinstance(node, BinaryOp):
            stack.append((node.left, depth + 1))
            stack.append((node.right, depth + 1))
        elif isinstance(node, Equation):
            stack.append((node.lhs, depth + 1))
            stack.append((node.rhs, depth + 1))
    return deepest


def _collect_terms(expr: Expr, acc: list[Expr]) -> None:
    if isinstance(expr, BinaryOp) and expr.op is Op.ADD:
        _collect_terms(expr.left, acc)
        _collect_terms(expr.right, acc)
    elif isinstance(expr, BinaryOp) and expr.op is Op.SUB:
        _collect_terms(expr.left, acc)
        subtracted: list[Expr] = []
        _collect_terms(expr.right, subtracted)
        if len(subtracted) != 1:
            raise TermError(
                f"Cannot subtract the sum {expr.right}; expand the parentheses first",
                "SUBTRACTED_SUM",
            )
        acc.append(BinaryOp(Number(0.0), Op.SUB, subtracted[0]))
    elif isinstance(expr, Equation):
        raise InvariantError("an equation cannot appear inside an expression")
    else:
        acc.append(expr)
