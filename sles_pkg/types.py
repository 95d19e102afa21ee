"""Type definitions and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class ParseResult:
    """Result of parsing one equation."""

    ok: bool
    expression: str | None = None
    error: str | None = None
    error_code: str | None = None
    diagnostics: list[dict[str, Any]] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.expression is not None:
            result_dict["expression"] = self.expression
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        if self.diagnostics is not None:
            result_dict["diagnostics"] = self.diagnostics
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"ParseResult(ok=False, error={self.error!r})"
        return f"ParseResult(ok=True, expression={self.expression!r})"


@dataclass
class TermsResult:
    """Flattened and simplified terms of both sides of an equation."""

    ok: bool
    lhs: list[str] | None = None
    rhs: list[str] | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.lhs is not None:
            result_dict["lhs"] = self.lhs
        if self.rhs is not None:
            result_dict["rhs"] = self.rhs
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"TermsResult(ok=False, error={self.error!r})"
        return f"TermsResult(ok=True, lhs={self.lhs!r}, rhs={self.rhs!r})"


@dataclass
class StandardFormResult:
    """Result of reducing an equation to linear standard form."""

    ok: bool
    coefficients: dict[str, float] | None = None
    constant: float | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.coefficients is not None:
            result_dict["coefficients"] = self.coefficients
        if self.constant is not None:
            result_dict["constant"] = self.constant
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return (
                f"StandardFormResult(ok=False, error_code={self.error_code!r}, "
                f"error={self.error!r})"
            )
        return (
            f"StandardFormResult(ok=True, coefficients={self.coefficients!r}, "
            f"constant={self.constant!r})"
        )


@dataclass
class SolveResult:
    """Result of solving a system of equations."""

    ok: bool
    result_type: str  # "system", "system_var"
    method: str | None = None
    error: str | None = None
    error_code: str | None = None
    # For system type
    solutions: dict[str, float] | None = None
    # For system_var type
    value: float | None = None
    approximate: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "type": self.result_type}
        if self.method is not None:
            result_dict["method"] = self.method
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        if self.solutions is not None:
            result_dict["solutions"] = self.solutions
        if self.value is not None:
            result_dict["value"] = self.value
        if self.ok:
            result_dict["approximate"] = self.approximate
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return (
                f"SolveResult(ok=False, result_type={self.result_type!r}, "
                f"error={self.error!r})"
            )
        parts = [f"ok={self.ok}", f"result_type={self.result_type!r}"]
        if self.solutions is not None:
            parts.append(f"solutions={self.solutions!r}")
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        if self.approximate:
            parts.append("approximate=True")
        return f"SolveResult({', '.join(parts)})"


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ParseError(Exception):
    """Raised when parsing fails.

    ``diagnostics`` holds one entry per malformed location of the line.
    """

    def __init__(
        self,
        message: str,
        code: str = "PARSE_ERROR",
        diagnostics: list[Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.diagnostics = list(diagnostics or [])
        self.line: int | None = None
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class TermError(Exception):
    """Raised when a side of an equation cannot be reduced to terms."""

    def __init__(self, message: str, code: str = "TERM_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class StandardFormError(Exception):
    """Raised when an equation is not in linear standard form."""

    def __init__(self, message: str, code: str = "NOT_STANDARD_FORM"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class MatrixFormError(Exception):
    """Raised when standard-form equations cannot be assembled into a matrix."""

    def __init__(self, message: str, code: str = "MATRIX_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class SolverError(Exception):
    """Raised when solving fails."""

    def __init__(self, message: str, code: str = "SOLVER_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class InvariantError(RuntimeError):
    """Raised when a pipeline stage receives input its caller promised never to pass."""
