from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property, lru_cache
from typing import Iterator, List, Optional, Sequence, Tuple

from .flags import Flags
from .model import Position, Unit


@dataclass(frozen=True)
class _Geometry:
    """Cell indices of every house for one box size."""
    rows: Tuple[Tuple[int, ...], ...]
    columns: Tuple[Tuple[int, ...], ...]
    boxes: Tuple[Tuple[int, ...], ...]
    # per cell: (row, column, box) house numbers
    houses: Tuple[Tuple[int, int, int], ...]
    peers: Tuple[Tuple[int, ...], ...]


@lru_cache(maxsize=None)
def _geometry(box_size: int) -> _Geometry:
    n = box_size * box_size
    rows = tuple(tuple(r * n + c for c in range(n)) for r in range(n))
    columns = tuple(tuple(r * n + c for r in range(n)) for c in range(n))
    boxes = tuple(
        tuple(
            (br * box_size + dr) * n + bc * box_size + dc
            for dr in range(box_size)
            for dc in range(box_size)
        )
        for br in range(box_size)
        for bc in range(box_size)
    )
    houses = tuple(
        (r, c, (r // box_size) * box_size + c // box_size)
        for r in range(n)
        for c in range(n)
    )
    peers = []
    for index, (r, c, b) in enumerate(houses):
        seen = set(rows[r]) | set(columns[c]) | set(boxes[b])
        seen.discard(index)
        peers.append(tuple(sorted(seen)))
    return _Geometry(rows, columns, boxes, houses, tuple(peers))


@dataclass(frozen=True)
class Board:
    """Immutable N²×N² grid; ``0`` marks an empty cell.

    Positions are ``(row, col)``, zero based. ``set`` returns a new snapshot,
    so a board can be shared freely between search branches.
    """
    box_size: int
    cells: Tuple[int, ...]

    def __post_init__(self) -> None:
        if self.box_size < 1:
            raise ValueError(f"box size must be at least 1, got {self.box_size}")
        n = self.box_size * self.box_size
        if len(self.cells) != n * n:
            raise ValueError(f"expected {n * n} cells for box size {self.box_size}, got {len(self.cells)}")
        for value in self.cells:
            if not 0 <= value <= n:
                raise ValueError(f"cell value {value} outside 0..{n}")

    @classmethod
    def empty(cls, box_size: int) -> "Board":
        n = box_size * box_size
        return cls(box_size, (0,) * (n * n))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], box_size: Optional[int] = None) -> "Board":
        if box_size is None:
            box_size = int(round(len(rows) ** 0.5))
        return cls(box_size, tuple(v for row in rows for v in row))

    @property
    def board_size(self) -> int:
        return self.box_size * self.box_size

    @property
    def _geo(self) -> _Geometry:
        return _geometry(self.box_size)

    def _index(self, position: Position) -> int:
        row, col = position
        n = self.board_size
        if not (0 <= row < n and 0 <= col < n):
            raise ValueError(f"position {position} is off a {n}x{n} board")
        return row * n + col

    def __iter__(self) -> Iterator[Tuple[int, Position]]:
        n = self.board_size
        for index, value in enumerate(self.cells):
            yield value, divmod(index, n)

    def get(self, position: Position) -> int:
        return self.cells[self._index(position)]

    def set(self, position: Position, digit: int) -> "Board":
        if not 0 <= digit <= self.board_size:
            raise ValueError(f"digit {digit} outside 0..{self.board_size}")
        index = self._index(position)
        cells = list(self.cells)
        cells[index] = digit
        return Board(self.box_size, tuple(cells))

    def rows(self) -> List[List[int]]:
        n = self.board_size
        return [list(self.cells[r * n:(r + 1) * n]) for r in range(n)]

    def empty_positions(self) -> List[Position]:
        return [pos for value, pos in self if value == 0]

    @cached_property
    def _house_masks(self) -> Tuple[Tuple[int, ...], Tuple[int, ...], Tuple[int, ...]]:
        geo = self._geo
        masks = []
        for houses in (geo.rows, geo.columns, geo.boxes):
            unit_masks = []
            for house in houses:
                bits = 0
                for index in house:
                    value = self.cells[index]
                    if value:
                        bits |= 1 << (value - 1)
                unit_masks.append(bits)
            masks.append(tuple(unit_masks))
        return masks[0], masks[1], masks[2]

    def _used_bits(self, index: int) -> int:
        if self.cells[index] == 0:
            r, c, b = self._geo.houses[index]
            rows, columns, boxes = self._house_masks
            return rows[r] | columns[c] | boxes[b]
        bits = 0
        for peer in self._geo.peers[index]:
            value = self.cells[peer]
            if value:
                bits |= 1 << (value - 1)
        return bits

    def used(self, position: Position) -> Flags:
        """Digits already placed among the peers of ``position``."""
        return Flags(self._used_bits(self._index(position)))

    def available(self, position: Position) -> Flags:
        """Digits that do not clash with any peer of ``position``."""
        return self.used(position).complement(self.board_size)

    def _iter_house_avail(self, house: Sequence[int]) -> Iterator[Flags]:
        full = (1 << self.board_size) - 1
        for index in house:
            if self.cells[index] == 0:
                yield Flags(~self._used_bits(index) & full)

    def iter_row_avail(self, row: int) -> Iterator[Flags]:
        return self._iter_house_avail(self._geo.rows[row])

    def iter_column_avail(self, col: int) -> Iterator[Flags]:
        return self._iter_house_avail(self._geo.columns[col])

    def iter_box_avail(self, box: Position) -> Iterator[Flags]:
        box_row, box_col = box
        return self._iter_house_avail(self._geo.boxes[box_row * self.box_size + box_col])

    def iter_units(self) -> Iterator[Tuple[Unit, int, Tuple[int, ...]]]:
        geo = self._geo
        for kind, houses in ((Unit.ROW, geo.rows), (Unit.COLUMN, geo.columns), (Unit.BOX, geo.boxes)):
            for number, house in enumerate(houses):
                yield kind, number, house

    def conflicts(self) -> List[Tuple[Unit, int, int]]:
        """Return ``(unit, number, digit)`` for every digit repeated inside a house."""
        found = []
        for kind, number, house in self.iter_units():
            seen = set()
            for index in house:
                value = self.cells[index]
                if not value:
                    continue
                if value in seen:
                    found.append((kind, number, value))
                seen.add(value)
        return found

    def is_consistent(self) -> bool:
        return not self.conflicts()

    def is_solved(self) -> bool:
        return 0 not in self.cells and self.is_consistent()
