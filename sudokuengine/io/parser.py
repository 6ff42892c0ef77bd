from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import yaml

from ..config import DIGIT_CHARS, EMPTY_CHARS, SEPARATOR_CHARS
from ..core.board import Board

GridSource = Union[str, Sequence[str]]


class PuzzleFormatError(ValueError):
    """Raised when a grid or puzzle file cannot be read as a board."""


@dataclass
class Puzzle:
    board: Board
    name: str = ""
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def box_size(self) -> int:
        return self.board.box_size


def _square_root(value: int) -> Optional[int]:
    root = int(round(value ** 0.5))
    return root if root * root == value else None


def _clean_rows(source: GridSource) -> List[str]:
    if isinstance(source, str):
        lines = source.splitlines() or [""]
    else:
        lines = [str(line) for line in source]
    rows = []
    for line in lines:
        if line.strip() and all(ch in SEPARATOR_CHARS or ch.isspace() for ch in line):
            continue
        rows.append("".join(ch for ch in line if ch not in SEPARATOR_CHARS))
    # a single row holds the whole grid
    if len(rows) == 1:
        return rows
    # zero-length lines around the grid are layout; rows of spaces are cells
    while rows and not rows[0]:
        rows.pop(0)
    while rows and not rows[-1]:
        rows.pop()
    return rows


def infer_box_size(cell_count: int) -> int:
    """Box size ``n`` such that ``cell_count == n ** 4``."""
    side = _square_root(cell_count)
    box = _square_root(side) if side is not None else None
    if not box:
        raise PuzzleFormatError(f"{cell_count} cells do not form an N²×N² grid")
    return box


def _digit(ch: str, board_size: int, where: str) -> int:
    if ch in EMPTY_CHARS:
        return 0
    value = DIGIT_CHARS.find(ch.upper()) + 1
    if value == 0:
        raise PuzzleFormatError(f"unexpected character {ch!r} {where}")
    if value > board_size:
        raise PuzzleFormatError(f"digit {ch!r} {where} exceeds board size {board_size}")
    return value


def parse_grid(source: GridSource, box_size: Optional[int] = None) -> Board:
    """Read a grid given as row strings, one multi-line string or one flat line.

    Empty cells are ``0``, ``.``, ``_`` or a space; digits run ``1``-``9`` then
    ``A``-``Z``. ``|`` and lines of ``-``/``+`` are treated as decoration.
    """
    if box_size is not None and box_size < 1:
        raise PuzzleFormatError(f"box size must be at least 1, got {box_size}")
    rows = _clean_rows(source)
    if len(rows) == 1:
        flat = rows[0]
        if box_size is None:
            box_size = infer_box_size(len(flat))
        n = box_size * box_size
        if len(flat) != n * n:
            raise PuzzleFormatError(f"expected {n * n} cells, got {len(flat)}")
        rows = [flat[r * n:(r + 1) * n] for r in range(n)]

    if box_size is None:
        box_size = _square_root(len(rows))
        if not box_size:
            raise PuzzleFormatError(f"{len(rows)} rows is not a square box size")
    n = box_size * box_size
    if len(rows) != n:
        raise PuzzleFormatError(f"expected {n} rows, got {len(rows)}")

    cells = []
    for r, row in enumerate(rows):
        # trailing blanks are often trimmed by editors
        row = row.ljust(n)
        if len(row) != n:
            raise PuzzleFormatError(f"row {r + 1} has {len(row)} cells, expected {n}")
        for c, ch in enumerate(row):
            cells.append(_digit(ch, n, f"at row {r + 1}, column {c + 1}"))
    return Board(box_size, tuple(cells))


def load_puzzle(path: str | Path, box_size: Optional[int] = None) -> Puzzle:
    """Load a YAML puzzle description (or a plain grid text file).

    ``box_size`` applies when the file does not state one.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() not in (".yaml", ".yml"):
        return Puzzle(board=parse_grid(text, box_size), name=path.stem)

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise PuzzleFormatError(f"{path}: invalid YAML: {exc}") from exc
    if not isinstance(data, dict) or "grid" not in data:
        raise PuzzleFormatError(f"{path}: expected a mapping with a 'grid' entry")

    box_size = data.get("box_size", box_size)
    grid = data["grid"]
    if not isinstance(grid, (str, list)):
        raise PuzzleFormatError(f"{path}: 'grid' must be a string or a list of rows")
    try:
        size = int(box_size) if box_size is not None else None
    except (TypeError, ValueError) as exc:
        raise PuzzleFormatError(f"{path}: bad box_size {box_size!r}") from exc
    if size is not None and size < 1:
        raise PuzzleFormatError(f"{path}: box_size must be at least 1")
    board = parse_grid(grid, size)
    options = data.get("options") or {}
    if not isinstance(options, dict):
        raise PuzzleFormatError(f"{path}: 'options' must be a mapping")

    return Puzzle(
        board=board,
        name=str(data.get("name", path.stem)),
        options=options,
    )
