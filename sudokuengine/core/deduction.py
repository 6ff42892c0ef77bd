"""Bounded proof by cases, and the hint search built on it.

``contradiction(board, level)`` generalises ``is_unsolvable``: at level 1 it
is exactly that check; at level ``k`` it looks for an empty cell where every
candidate digit either fails ``is_unsolvable`` outright or leads to a
contradiction at level ``k - 1``. ``hint`` raises the level step by step
until some cell is left with a single digit that survives.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..logging_utils import get_logger
from .abort import AbortLock
from .board import Board
from .constraints import is_unsolvable
from .model import Hint, Position

logger = get_logger()


def contradiction(board: Board, level: int, lock: AbortLock) -> bool:
    """Can ``board`` be shown unsolvable with at most ``level`` nested hypotheses?

    Always False once ``lock`` is aborted, even for a proof already under way.
    """
    if lock.is_aborted():
        return False
    if level <= 0:
        return False
    if level == 1:
        return is_unsolvable(board)

    n = board.board_size
    options = sorted(
        ((board.used(pos).complement(n), pos) for pos in board.empty_positions()),
        key=lambda option: option[0].size(),
    )
    found = any(
        all(_refutes(board, pos, digit, level, lock) for digit in flags.to_list())
        for flags, pos in options
    )
    return found and not lock.is_aborted()


def _refutes(board: Board, position: Position, digit: int, level: int, lock: AbortLock) -> bool:
    updated = board.set(position, digit)
    return is_unsolvable(updated) or contradiction(updated, level - 1, lock)


def hint(board: Board, max_level: int, lock: AbortLock) -> Optional[Hint]:
    """Find a single forced move using lookahead of at most ``max_level``.

    Returns None when the board is solved, when it is unsolvable, when no
    cell narrows to one digit within ``max_level``, or when aborted.
    """
    options: List[Tuple[List[int], Position]] = sorted(
        ((board.available(pos).to_list(), pos) for pos in board.empty_positions()),
        key=lambda option: len(option[0]),
    )

    for level in range(max_level + 1):
        if lock.is_aborted():
            return None

        options = [
            ([d for d in digits if not contradiction(board.set(pos, d), level, lock)], pos)
            for digits, pos in options
        ]
        if lock.is_aborted():
            # a cut-short pass may have kept digits it should have dropped
            return None

        if not options:
            return None
        digits, pos = min(options, key=lambda option: len(option[0]))
        logger.debug("hint level %d: tightest cell %s has %s", level, pos, digits)
        if not digits:
            return None
        if len(digits) == 1:
            return Hint(digits[0], pos, level)
    return None


def solve_by_hints(board: Board, max_level: int, lock: AbortLock) -> Optional[Board]:
    """Apply hints until none is found; return the board only if that solves it."""
    steps = 0
    while True:
        found = hint(board, max_level, lock)
        if found is None:
            break
        board = board.set(found.position, found.digit)
        steps += 1
    logger.debug("solve_by_hints stopped after %d placements", steps)
    return board if board.is_solved() else None
