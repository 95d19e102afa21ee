"""Equation parsing and result formatting module.

This module handles:
- Input validation (length, emptiness)
- Recursive-descent parsing of equations into an expression tree
- Structured diagnostics for malformed input, and their rendering
- Number formatting for results

Grammar, loosest binding first::

    Equation       := Addition '=' Addition
    Addition       := Multiplication (('+' | '-') Multiplication)*
    Multiplication := '-'? Exponentiation (('*' | '/' | <adjacent>) Exponentiation)*
    Exponentiation := Atom ('^' Atom)*
    Atom           := Number | Variable | 'pi' | 'e' | '(' Addition ')'

Every binary level folds left, including ``^``: ``2^3^2`` is ``(2^3)^2``.
A leading minus on a multiplication chain is parsed as ``-1 * chain``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from . import config
from .expr import (
    BinaryOp,
    Constant,
    Equation,
    Expr,
    NamedConstant,
    Number,
    Op,
    Variable,
    expression_depth,
)
from .lexer import Span, Token, TokenKind, tokenize
from .logging_config import get_logger
from .types import ParseError, ValidationError

logger = get_logger("parser")

ATOM_START = (
    TokenKind.NUMBER,
    TokenKind.VARIABLE,
    TokenKind.PI,
    TokenKind.E,
    TokenKind.LPAREN,
)
ATOM_EXPECTED = ("number", "variable", "'pi'", "'e'", "'('")

ADDITIVE_OPS = {TokenKind.ADD: Op.ADD, TokenKind.SUB: Op.SUB}
MULTIPLICATIVE_OPS = {TokenKind.MUL: Op.MUL, TokenKind.DIV: Op.DIV}


@dataclass
class Diagnostic:
    """One parse failure: where it happened and what would have been accepted."""

    span: Span
    message: str
    expected: tuple[str, ...] = field(default_factory=tuple)
    found: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "span": list(self.span),
            "message": self.message,
            "expected": list(self.expected),
            "found": self.found,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Diagnostic:
        return cls(
            tuple(data["span"]),
            data["message"],
            tuple(data.get("expected", ())),
            data.get("found"),
        )

    def __str__(self) -> str:
        return f"{self.span[0]}..{self.span[1]}: {self.message}"


class _Abort(Exception):
    """Unwinds the parser after the first syntax error."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)


class _Parser:
    def __init__(self, tokens: list[tuple[Token, Span]], length: int):
        self.tokens = tokens
        self.pos = 0
        self.depth = 0
        self.end = (length, length)

    def peek(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos][0]
        return None

    def span(self) -> Span:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos][1]
        return self.end

    def advance(self) -> Token:
        token = self.tokens[self.pos][0]
        self.pos += 1
        return token

    def fail(self, expected: tuple[str, ...]) -> _Abort:
        token = self.peek()
        found = token.describe() if token is not None else "end of input"
        message = f"Unexpected {found}, expected {_join_expected(expected)}"
        return _Abort(Diagnostic(self.span(), message, expected, found))

    def equation(self) -> Equation:
        lhs = self.addition()
        if self.peek() is None or self.peek().kind is not TokenKind.EQ:
            raise self.fail(_continuations("'='"))
        self.advance()
        rhs = self.addition()
        if self.peek() is not None:
            if self.peek().kind is TokenKind.EQ:
                token_span = self.span()
                raise _Abort(
                    Diagnostic(
                        token_span,
                        "An equation has exactly one '='",
                        _continuations("end of input"),
                        "'='",
                    )
                )
            raise self.fail(_continuations("end of input"))
        return Equation(lhs, rhs)

    def addition(self) -> Expr:
        acc = self.multiplication()
        while self.peek() is not None and self.peek().kind in ADDITIVE_OPS:
            op = ADDITIVE_OPS[self.advance().kind]
            acc = BinaryOp(acc, op, self.multiplication())
        return acc

    def multiplication(self) -> Expr:
        negate = False
        if self.peek() is not None and self.peek().kind is TokenKind.SUB:
            self.advance()
            negate = True
        elif self.peek() is None or self.peek().kind not in ATOM_START:
            raise self.fail(ATOM_EXPECTED + ("'-'",))
        acc = self.exponentiation()
        while self.peek() is not None:
            kind = self.peek().kind
            if kind in MULTIPLICATIVE_OPS:
                self.advance()
                op = MULTIPLICATIVE_OPS[kind]
            elif kind in ATOM_START:
                op = Op.MUL
            else:
                break
            acc = BinaryOp(acc, op, self.exponentiation())
        if negate:
            return BinaryOp(Number(-1.0), Op.MUL, acc)
        return acc

    def exponentiation(self) -> Expr:
        acc = self.atom()
        while self.peek() is not None and self.peek().kind is TokenKind.POW:
            self.advance()
            acc = BinaryOp(acc, Op.POW, self.atom())
        return acc

    def atom(self) -> Expr:
        token = self.peek()
        if token is None or token.kind not in ATOM_START:
            raise self.fail(ATOM_EXPECTED)
        if token.kind is TokenKind.LPAREN:
            if self.depth >= config.MAX_NESTING_DEPTH:
                raise _Abort(
                    Diagnostic(
                        self.span(),
                        f"Expression nested too deeply (>{config.MAX_NESTING_DEPTH} parentheses)",
                        (),
                        "'('",
                    )
                )
            self.advance()
            self.depth += 1
            inner = self.addition()
            if self.peek() is None or self.peek().kind is not TokenKind.RPAREN:
                raise self.fail(_continuations("')'"))
            self.advance()
            self.depth -= 1
            return inner
        self.advance()
        if token.kind is TokenKind.NUMBER:
            return Number(token.value)
        if token.kind is TokenKind.VARIABLE:
            return Variable(token.value)
        if token.kind is TokenKind.PI:
            return NamedConstant(Constant.PI)
        return NamedConstant(Constant.E)


def _continuations(terminator: str) -> tuple[str, ...]:
    return ("operator", terminator)


def _join_expected(expected: tuple[str, ...]) -> str:
    if len(expected) == 1:
        return expected[0]
    return ", ".join(expected[:-1]) + " or " + expected[-1]


def validate_input(text: str) -> str:
    """Check raw input before lexing. Returns the stripped text."""
    if len(text) > config.MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long (>{config.MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )
    stripped = text.strip()
    if not stripped:
        raise ValidationError("Empty input", "EMPTY_INPUT")
    return stripped


def parse(text: str, lenient: bool | None = None) -> Equation:
    """Parse one line of text into an ``Equation``.

    Args:
        text: Equation text, e.g. ``"2x + 3y = 7"``
        lenient: Drop unrecognized characters instead of reporting them
            (default: ``config.LENIENT_LEXING``)

    Returns:
        The root ``Equation`` node

    Raises:
        ValidationError: If the input is empty or too long
        ParseError: With one diagnostic per unrecognized character and the
            first syntax error
    """
    text = validate_input(text)
    if lenient is None:
        lenient = config.LENIENT_LEXING
    tokens, lex_errors = tokenize(text)
    diagnostics: list[Diagnostic] = []
    if lex_errors:
        if lenient:
            logger.debug("Dropping %d unrecognized character(s)", len(lex_errors))
        else:
            diagnostics.extend(
                Diagnostic(span, f"{error.reason.capitalize()} {error.text!r}", (), error.text)
                for error, span in lex_errors
            )
    parser = _Parser(tokens, len(text))
    try:
        equation = parser.equation()
    except _Abort as abort:
        diagnostics.append(abort.diagnostic)
        equation = None
    if diagnostics:
        diagnostics.sort(key=lambda d: d.span)
        logger.debug("Parse of %r failed with %d diagnostic(s)", text, len(diagnostics))
        raise ParseError(diagnostics[0].message, "PARSE_ERROR", diagnostics)
    if expression_depth(equation) > config.MAX_EXPRESSION_DEPTH:
        raise ValidationError(
            f"Expression too complex (depth >{config.MAX_EXPRESSION_DEPTH}; "
            "every + or - term and every operator adds a level)",
            "TOO_COMPLEX",
        )
    logger.debug("Parsed %r as %s", text, equation)
    return equation


def render_diagnostics(source: str, diagnostics: list[Diagnostic]) -> str:
    """Render diagnostics as an error report with a caret line under each span."""
    lines = []
    source = source.strip()
    for diagnostic in diagnostics:
        start, end = diagnostic.span
        width = max(end - start, 1)
        lines.append(f"Error: {diagnostic.message}")
        lines.append(f"  {source}")
        lines.append("  " + " " * start + "^" * width)
    return "\n".join(lines)


def format_number(val: Any, precision: int | None = None) -> str:
    """Format a numeric value with specified precision.

    Args:
        val: Numeric value to format
        precision: Number of significant digits (default: config.OUTPUT_PRECISION)

    Returns:
        Formatted string representation of the number
    """
    if precision is None:
        precision = config.OUTPUT_PRECISION
    try:
        fmt = "{:." + str(int(precision)) + "g}"
        text = fmt.format(float(val))
    except (ValueError, TypeError, OverflowError):
        return str(val)
    # Avoid printing "-0" for values that round to zero
    return "0" if text in ("-0", "-0.0") else text


def format_solution(solutions: dict[str, float], precision: int | None = None) -> str:
    """Format a solution mapping as ``x = 1.5`` lines, sorted by variable."""
    return "\n".join(
        f"{var} = {format_number(value, precision)}"
        for var, value in sorted(solutions.items())
    )
