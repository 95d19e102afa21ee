"""Centralized configuration for SLES.

This module defines:
- Input validation limits (length, tree depth, parenthesis nesting)
- Output formatting precision
- Linear solver options (method, pseudo-inverse cutoff)
- Lexer policy for unrecognized characters
- Regex patterns for lexing

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with SLES_)
"""

import importlib.metadata
import math
import os
import re

try:
    VERSION = importlib.metadata.version("sles")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout
    VERSION = "0.1.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("SLES_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("SLES_MAX_EXPRESSION_DEPTH", "200")
)  # tree depth
MAX_NESTING_DEPTH = int(
    os.getenv("SLES_MAX_NESTING_DEPTH", "100")
)  # parenthesis nesting

# Output configuration
OUTPUT_PRECISION = int(os.getenv("SLES_OUTPUT_PRECISION", "10"))

# Solver configuration
SOLVER_METHOD = os.getenv("SLES_SOLVER_METHOD", "matrix")  # "matrix", "general"
PSEUDO_INVERSE_TOLERANCE = float(
    os.getenv("SLES_PSEUDO_INVERSE_TOLERANCE", "1e-11")
)  # Singular values below this (relative) are treated as zero

# Lexer policy: drop unrecognized characters instead of reporting them
LENIENT_LEXING = os.getenv("SLES_LENIENT_LEXING", "false").lower() == "true"

# File read by the REPL ':file' command when no path is given
EQUATION_FILE = os.getenv("SLES_EQUATION_FILE", "equation.txt")

CONSTANT_VALUES = {
    "pi": math.pi,
    "e": math.e,
}

# Order matters: earlier alternatives win when two rules match at one position.
TOKEN_REGEX = re.compile(
    r"""
    (?P<space>\s+)
    |(?P<pi>pi|PI)
    |(?P<e>e)
    |(?P<number>[0-9]+(?:\.[0-9]+)?)
    |(?P<variable>[a-zA-Z])
    |(?P<symbol>[-+*/^()=])
    """,
    re.VERBOSE,
)
