#!/usr/bin/env python3
"""
SLES - System of Linear Equations Solver

Main entry point for the solver application.
This file serves as a thin wrapper that delegates all functionality
to the sles_pkg package.

Usage:
    python sles.py                                # Interactive REPL
    python sles.py -e "2x + 3y = 8, x - y = 1"    # Solve and exit
    python sles.py -f equation.txt                # Solve a file
    python sles.py --help                         # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for SLES.

    Delegates all functionality to the sles_pkg.cli module,
    which handles argument parsing, solving, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from sles_pkg.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1
    except ImportError as e:
        print(f"Error: Failed to import sles_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1


if __name__ == "__main__":
    sys.exit(main())
