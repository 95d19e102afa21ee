"""Pending-equation accumulator for an interactive session."""

from __future__ import annotations

from typing import Any

from .expr import Equation
from .parser import parse
from .solver import Method, describe_terms, solve_system


class Session:
    """Equations entered so far, waiting for ``:solve`` or ``:terms``.

    Both commands consume the pending equations, whether or not they succeed.
    """

    def __init__(self, method: Method | str | None = None) -> None:
        self.method = method
        self.pending: list[Equation] = []

    def __len__(self) -> int:
        return len(self.pending)

    def enter(self, line: str) -> Equation:
        """Parse ``line`` and queue it. Raises ParseError / ValidationError."""
        equation = parse(line)
        self.pending.append(equation)
        return equation

    def take(self) -> list[Equation]:
        equations, self.pending = self.pending, []
        return equations

    def solve(self) -> dict[str, Any]:
        return solve_system(self.take(), self.method)

    def terms(self) -> list[dict[str, Any]]:
        return [describe_terms(equation) for equation in self.take()]

    def clear(self) -> None:
        self.pending.clear()
