"""Lexer turning equation text into typed tokens.

Rules, highest priority first: whitespace is skipped, ``pi``/``PI`` is the
constant pi, ``e`` is always Euler's number (there is no variable named
``e``), numbers are ``digits`` or ``digits.digits``, any other single ASCII
letter is a variable, and ``+ - * / ^ ( ) =`` are symbols. Signs belong to the
expression grammar, not to number literals.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Iterator, Union

from .config import TOKEN_REGEX

Span = tuple[int, int]


class TokenKind(enum.Enum):
    PI = "pi"
    E = "e"
    NUMBER = "number"
    VARIABLE = "variable"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    LPAREN = "("
    RPAREN = ")"
    EQ = "="


SYMBOLS = {
    "+": TokenKind.ADD,
    "-": TokenKind.SUB,
    "*": TokenKind.MUL,
    "/": TokenKind.DIV,
    "^": TokenKind.POW,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "=": TokenKind.EQ,
}


@dataclass(frozen=True)
class Token:
    """A lexed token. ``value`` is a float for numbers and the letter for variables."""

    kind: TokenKind
    value: float | str | None = None

    def __str__(self) -> str:
        if self.kind is TokenKind.NUMBER:
            return repr(self.value).removesuffix(".0")
        if self.kind is TokenKind.VARIABLE:
            return str(self.value)
        return self.kind.value

    def describe(self) -> str:
        """Short human-readable name used in diagnostics."""
        if self.kind is TokenKind.NUMBER:
            return f"number {self}"
        if self.kind is TokenKind.VARIABLE:
            return f"variable '{self}'"
        if self.kind in (TokenKind.PI, TokenKind.E):
            return f"constant '{self}'"
        return f"'{self}'"


@dataclass(frozen=True)
class LexError:
    """A character (or number literal) that no lexing rule accepts."""

    text: str
    reason: str = "unrecognized character"

    def __str__(self) -> str:
        return f"{self.reason} {self.text!r}"


LexResult = Union[Token, LexError]


def lex(text: str) -> Iterator[tuple[LexResult, Span]]:
    """Yield ``(token_or_error, (start, end))`` for each lexeme of ``text``."""
    pos = 0
    length = len(text)
    while pos < length:
        match = TOKEN_REGEX.match(text, pos)
        if match is None:
            yield LexError(text[pos]), (pos, pos + 1)
            pos += 1
            continue
        kind = match.lastgroup
        span = match.span()
        pos = match.end()
        if kind == "space":
            continue
        if kind == "pi":
            yield Token(TokenKind.PI), span
        elif kind == "e":
            yield Token(TokenKind.E), span
        elif kind == "number":
            value = float(match.group())
            if math.isfinite(value):
                yield Token(TokenKind.NUMBER, value), span
            else:
                yield LexError(match.group(), "number out of range"), span
        elif kind == "variable":
            yield Token(TokenKind.VARIABLE, match.group()), span
        else:
            yield Token(SYMBOLS[match.group()]), span


def tokenize(text: str) -> tuple[list[tuple[Token, Span]], list[tuple[LexError, Span]]]:
    """Split lexing results into the tokens and the failures, both with spans."""
    tokens: list[tuple[Token, Span]] = []
    errors: list[tuple[LexError, Span]] = []
    for item, span in lex(text):
        if isinstance(item, LexError):
            errors.append((item, span))
        else:
            tokens.append((item, span))
    return tokens, errors
