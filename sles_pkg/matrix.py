"""Matrix form of a system of standard-form equations and its numeric solve."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from . import config
from .logging_config import get_logger
from .standard_form import StandardForm
from .types import MatrixFormError

logger = get_logger("matrix")


class MatrixForm:
    """``A x = b`` with one row per equation and one column per variable."""

    def __init__(
        self, coefficients: np.ndarray, variables: list[str], constants: np.ndarray
    ):
        self.coefficients = coefficients
        self.variables = variables
        self.constants = constants

    @classmethod
    def from_standard_forms(cls, equations: Sequence[StandardForm]) -> MatrixForm:
        """Assemble the matrix, using the variables of the first equation as columns.

        Raises:
            MatrixFormError: ``NO_EQUATIONS``, ``EQUATION_COUNT_MISMATCH``,
                ``MISSING_VARIABLE`` or ``UNKNOWN_VARIABLE``
        """
        if not equations:
            raise MatrixFormError("No equations to solve", "NO_EQUATIONS")

        variables = list(equations[0].coefficients)
        if len(equations) != len(variables):
            kind = "under" if len(equations) < len(variables) else "over"
            raise MatrixFormError(
                f"The system is {kind}-determined: {len(equations)} equation(s) "
                f"for {len(variables)} variable(s) ({', '.join(variables)})",
                "EQUATION_COUNT_MISMATCH",
            )

        for index, equation in enumerate(equations[1:], start=2):
            for variable in variables:
                if variable not in equation.coefficients:
                    raise MatrixFormError(
                        f"Equation {index} has no term in {variable}, which equation 1 uses "
                        f"(write 0{variable} if it is absent)",
                        "MISSING_VARIABLE",
                    )
            for variable in equation.coefficients:
                if variable not in variables:
                    raise MatrixFormError(
                        f"Equation {index} uses {variable}, which equation 1 does not",
                        "UNKNOWN_VARIABLE",
                    )

        coefficients = np.array(
            [[equation.coefficients[v] for v in variables] for equation in equations],
            dtype=np.float64,
        )
        constants = np.array([equation.constant for equation in equations], dtype=np.float64)
        return cls(coefficients, variables, constants)

    def is_singular(self) -> bool:
        """True when ``solve()`` drops a singular value, i.e. its answer is a best fit."""
        singular_values = np.linalg.svd(self.coefficients, compute_uv=False)
        # Same cutoff pinv applies with rcond
        cutoff = config.PSEUDO_INVERSE_TOLERANCE * singular_values.max(initial=0.0)
        return int(np.count_nonzero(singular_values > cutoff)) < len(self.variables)

    def solve(self) -> dict[str, float]:
        """Solve the system; a singular system gets the pseudo-inverse best fit."""
        if self.is_singular():
            logger.warning("This system is not solvable. Approximating solution")
        inverse = np.linalg.pinv(self.coefficients, rcond=config.PSEUDO_INVERSE_TOLERANCE)
        solution = inverse @ self.constants
        return {variable: float(value) for variable, value in zip(self.variables, solution)}

    def __repr__(self) -> str:
        return (
            f"MatrixForm(variables={self.variables!r}, "
            f"coefficients={self.coefficients.tolist()!r}, "
            f"constants={self.constants.tolist()!r})"
        )
