"""Backtracking search over board snapshots."""

from __future__ import annotations

from itertools import islice
from typing import Iterator, List, Optional, Tuple

from ..logging_utils import get_logger
from .abort import AbortLock
from .board import Board
from .constraints import is_unsolvable
from .flags import Flags
from .model import Position

logger = get_logger()

Options = Tuple[Flags, Position]


def best_options(board: Board) -> Optional[Options]:
    """Pick the empty cell to branch on and the digits worth trying there.

    Returns None when the board has no empty cell. Otherwise the cell with
    the fewest candidates wins (first one on ties). When every cell still has
    several candidates, each candidate of each cell is first checked with
    ``is_unsolvable`` and the choice is made on the surviving digits.
    """
    options = [(board.available(pos), pos) for pos in board.empty_positions()]
    if not options:
        return None

    best = min(options, key=lambda option: option[0].size())
    if best[0].size() <= 1:
        return best

    refined: List[Options] = []
    for flags, pos in options:
        real = Flags.from_list(
            digit for digit in flags.to_list()
            if not is_unsolvable(board.set(pos, digit))
        )
        refined.append((real, pos))
        if not real:
            # nothing can beat an empty set
            break
    return min(refined, key=lambda option: option[0].size())


def solution(board: Board, lock: AbortLock) -> Optional[Board]:
    """Return the first solution in search order, or None.

    None covers both "no solution" and "aborted"; poll ``lock`` to tell them
    apart.
    """
    if not board.is_consistent():
        logger.debug("givens clash: %s", board.conflicts())
        return None
    return _solution(board, lock)


def _solution(board: Board, lock: AbortLock) -> Optional[Board]:
    if lock.is_aborted():
        return None
    options = best_options(board)
    if options is None:
        return board
    flags, pos = options
    for digit in flags.to_list():
        found = _solution(board.set(pos, digit), lock)
        if found is not None:
            return found
    return None


def solutions(board: Board, lock: AbortLock) -> Iterator[Board]:
    """Lazily yield every solution, in the order ``solution`` would visit them.

    Each frame on the stack is ``(board, position, pending digits)``; pulling
    the next item resumes the depth-first walk where it stopped. Once the
    lock is aborted nothing more is yielded.
    """
    if not board.is_consistent():
        logger.debug("givens clash: %s", board.conflicts())
        return

    frames: List[Tuple[Board, Position, Iterator[int]]] = []
    node: Optional[Board] = board
    while True:
        if lock.is_aborted():
            return
        if node is not None:
            options = best_options(node)
            if options is None:
                yield node
            else:
                flags, pos = options
                frames.append((node, pos, iter(flags.to_list())))
            node = None
        if not frames:
            return
        parent, pos, pending = frames[-1]
        digit = next(pending, None)
        if digit is None:
            frames.pop()
        else:
            node = parent.set(pos, digit)


def count_solutions(board: Board, lock: AbortLock, limit: Optional[int] = None) -> int:
    """Count solutions, stopping early once ``limit`` have been seen."""
    return sum(1 for _ in islice(solutions(board, lock), limit))


def has_unique_solution(board: Board, lock: AbortLock) -> bool:
    """True if exactly one solution exists (False when aborted)."""
    unique = count_solutions(board, lock, limit=2) == 1
    return unique and not lock.is_aborted()
