"""Cheap necessary conditions a board must meet to still be solvable."""

from __future__ import annotations

from typing import Callable, Iterable, Tuple

from .board import Board
from .matching import has_perfect_matching

# returns True when the board is certainly unsolvable
Constraint = Callable[[Board], bool]


def cell_out_of_options(board: Board) -> bool:
    """Some empty cell has no digit left."""
    return any(not board.available(pos) for pos in board.empty_positions())


def row_without_solution(board: Board) -> bool:
    return any(
        not has_perfect_matching(list(board.iter_row_avail(row)))
        for row in range(board.board_size)
    )


def column_without_solution(board: Board) -> bool:
    return any(
        not has_perfect_matching(list(board.iter_column_avail(col)))
        for col in range(board.board_size)
    )


def box_without_solution(board: Board) -> bool:
    return any(
        not has_perfect_matching(list(board.iter_box_avail((box_row, box_col))))
        for box_row in range(board.box_size)
        for box_col in range(board.box_size)
    )


UNSOLVABLE_CHECKS: Tuple[Constraint, ...] = (
    cell_out_of_options,
    row_without_solution,
    column_without_solution,
    box_without_solution,
)


def is_unsolvable(board: Board, checks: Iterable[Constraint] = UNSOLVABLE_CHECKS) -> bool:
    """Return True if ``board`` provably has no completion.

    Sound but incomplete: False only means none of the checks fired.
    """
    return any(check(board) for check in checks)
