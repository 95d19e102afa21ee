"""Main entry point for running sles_pkg as a module.

This allows running SLES with:
    python -m sles_pkg
    python -m sles_pkg -e "2x + 3y = 8, x - y = 1"
    python -m sles_pkg -f equation.txt

This is equivalent to running:
    python -m sles_pkg.cli
    python sles.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
