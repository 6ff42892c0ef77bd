"""
Default settings for the engine and its command line.

Puzzle files can override the search settings through their ``options``
mapping, and CLI flags override both.
"""

from __future__ import annotations

import logging

# ==== board ==================================================================

# classic 9x9 Sudoku
DEFAULT_BOX_SIZE: int = 3

# characters read as an empty cell
EMPTY_CHARS: str = "0. _"

# character used for empty cells when printing
EMPTY_OUTPUT: str = "."

# digit alphabet: 1-9 then A-Z, so boards up to 25x25 (box size 5) fit
DIGIT_CHARS: str = "123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# ignored inside rows, and rows made only of these are skipped
SEPARATOR_CHARS: str = "|+-"

# ==== deduction ==============================================================

# deepest lookahead tried by ``hint`` unless told otherwise
DEFAULT_MAX_LEVEL: int = 3

# lookahead used by the ``check`` command
DEFAULT_CONTRADICTION_LEVEL: int = 2

# ==== command line ===========================================================

# how many solutions ``solve --all`` prints before stopping
DEFAULT_SOLUTION_LIMIT: int = 100

# no timeout unless asked for
DEFAULT_TIMEOUT: float | None = None

# ==== logging ================================================================

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL: int = logging.INFO
