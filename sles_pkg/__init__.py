"""SLES package: lexer, parser, term simplifier, standard form, matrix solve, and CLI."""

__all__ = [
    "config",
    "lexer",
    "expr",
    "parser",
    "termlist",
    "standard_form",
    "matrix",
    "solver",
    "session",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "parse_equation",
    "validate_equation",
    "terms",
    "standard_form",
    "solve_system",
    "solve_file",
]
