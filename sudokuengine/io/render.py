"""Plain-text rendering of boards."""

from __future__ import annotations

from typing import List

from ..config import DIGIT_CHARS, EMPTY_OUTPUT
from ..core.board import Board


def format_row(board: Board, row: int, separators: bool = True) -> str:
    n = board.board_size
    chars = []
    for col in range(n):
        if separators and col and col % board.box_size == 0:
            chars.append("|")
        value = board.get((row, col))
        chars.append(DIGIT_CHARS[value - 1] if value else EMPTY_OUTPUT)
    return "".join(chars)


def format_board(board: Board, separators: bool = True) -> str:
    """Render ``board`` one row per line, optionally with box borders.

    The output reads back with ``parse_grid``.
    """
    lines: List[str] = []
    rule = "+".join("-" * board.box_size for _ in range(board.box_size))
    for row in range(board.board_size):
        if separators and row and row % board.box_size == 0:
            lines.append(rule)
        lines.append(format_row(board, row, separators))
    return "\n".join(lines)
