from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from . import config
from .config import VERSION
from .parser import Diagnostic, format_number, format_solution, render_diagnostics
from .session import Session
from .solver import Method, describe_terms, solve_file, solve_system
from .types import ParseError, ValidationError


def _printable(res: dict[str, Any]) -> dict[str, Any]:
    """Drop values that only exist for in-process callers (TermList objects)."""
    return {k: v for k, v in res.items() if k not in ("lhs_terms", "rhs_terms")}


def print_result_pretty(
    res: dict[str, Any], output_format: str = "human", source: str | None = None
) -> None:
    """Print result in specified format.

    Args:
        res: Result dictionary
        output_format: "json" for JSON output, "human" for human-readable
        source: Input line, used to point at parse errors
    """
    if output_format == "json":
        print(json.dumps(_printable(res), indent=2, ensure_ascii=False))
        return
    if not res.get("ok"):
        diagnostics = res.get("diagnostics")
        if diagnostics and source is not None:
            if res.get("line") is not None:
                print(f"Error in equation {res['line']}:")
            print(render_diagnostics(source, [Diagnostic.from_dict(d) for d in diagnostics]))
        else:
            print("Error:", res.get("error"))
        return
    typ = res.get("type", "system")
    if typ == "system":
        print(format_solution(res.get("solutions", {})))
    elif typ == "system_var":
        print(format_number(res.get("value")))
    elif typ == "terms":
        print(" + ".join(res.get("lhs", [])), "=", " + ".join(res.get("rhs", [])))
    else:
        print(res)


def print_help_text() -> None:
    """Print help text for REPL commands."""
    help_text = f"""System of Linear Equations Solver version {VERSION}

Enter any equation in standard form (ax + by = c), one per line.
When you are ready to solve, type :solve
Note, you must have the same number of equations entered as the number of
pronumerals, otherwise it is unsolvable.

Syntax:
  2x + 3y = 7        implicit multiplication
  x/2 - 4z = pi      constants: pi (or PI) and e
  -(2)x + 1.5y = 0   unary minus at the start of a product

Limits:
  Each side may nest at most {config.MAX_EXPRESSION_DEPTH} levels deep; every + or - term
  adds a level, so a side holds fewer than {config.MAX_EXPRESSION_DEPTH} terms
  (SLES_MAX_EXPRESSION_DEPTH). Parentheses nest at most {config.MAX_NESTING_DEPTH} deep.

Commands:
  :help        - Print this help
  :quit        - Quit the program
  :solve       - Solve the system of equations
  :terms       - Print the terms of the system of equations
  :file [path] - Solve the system of equations from a file
                 (default: {config.EQUATION_FILE})
"""
    print(help_text)


def _handle_line(session: Session, raw: str, output_format: str) -> bool:
    """Run one REPL line. Returns False when the session should end."""
    command, _, argument = raw.partition(" ")
    if command == ":quit":
        return False
    if command == ":help":
        print_help_text()
    elif command == ":solve":
        print_result_pretty(session.solve(), output_format)
    elif command == ":terms":
        results = session.terms()
        if not results:
            print("No equations entered.")
        for res in results:
            print_result_pretty(res, output_format)
    elif command == ":file":
        print_result_pretty(solve_file(argument.strip() or None, session.method), output_format)
    elif command.startswith(":"):
        print(f"Unknown command {command}. Type :help for the list of commands.")
    else:
        try:
            session.enter(raw)
        except ParseError as e:
            print_result_pretty(
                {
                    "ok": False,
                    "error": str(e),
                    "error_code": e.code,
                    "diagnostics": [d.to_dict() for d in e.diagnostics],
                },
                output_format,
                source=raw,
            )
        except ValidationError as e:
            print_result_pretty(
                {"ok": False, "error": str(e), "error_code": e.code}, output_format
            )
    return True


def repl_loop(output_format: str = "human", method: str | None = None) -> None:
    """Interactive REPL loop with graceful interrupt handling."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    print("System of Linear Equations Solver")
    print("Type :help to learn more.")
    session = Session(method)
    while True:
        try:
            raw = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue
        if not _handle_line(session, raw, output_format):
            break


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the SLES CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(
        prog="sles", description="Solve systems of linear equations."
    )
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help='Solve comma-separated equations and exit (e.g. "2x+3y=8, x-y=1")',
        dest="eval_expr",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=str,
        help="Solve the equations in a file (one per line) and exit",
    )
    parser.add_argument(
        "--terms",
        action="store_true",
        help="With --eval, print the terms of each equation instead of solving",
    )
    parser.add_argument(
        "--find", type=str, help="With --eval, print only this variable"
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--method",
        type=str,
        choices=[m.value for m in Method],
        help=f"Solve method (default: {config.SOLVER_METHOD})",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Silently drop unrecognized characters instead of reporting them",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    args = parser.parse_args(argv)

    from .logging_config import setup_logging

    setup_logging(level=args.log_level, log_file=args.log_file)

    # Apply CLI configuration overrides
    if args.precision and args.precision > 0:
        config.OUTPUT_PRECISION = int(args.precision)
    if args.lenient:
        config.LENIENT_LEXING = True
    if args.version:
        print(VERSION)
        return 0

    output_format = args.format
    if args.file:
        res = solve_file(args.file, args.method)
        print_result_pretty(res, output_format)
        return 0 if res.get("ok") else 1
    if args.eval_expr is not None:
        parts = [p.strip() for p in args.eval_expr.split(",") if p.strip()]
        if not parts:
            print("Error: Empty input. Please enter at least one equation.")
            return 1
        if args.terms:
            exit_code = 0
            for part in parts:
                res = describe_terms(part)
                print_result_pretty(res, output_format, source=part)
                if not res.get("ok"):
                    exit_code = 1
            return exit_code
        res = solve_system(parts, args.method, args.find)
        source = parts[res["line"] - 1] if res.get("line") else None
        print_result_pretty(res, output_format, source=source)
        return 0 if res.get("ok") else 1

    repl_loop(output_format, args.method)
    return 0


if __name__ == "__main__":
    """Allow running the CLI module directly with python -m sles_pkg.cli"""
    sys.exit(main_entry())
