from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple


class Unit(str, Enum):
    """The three kinds of house a cell belongs to."""
    ROW = "row"
    COLUMN = "column"
    BOX = "box"


Position = Tuple[int, int]


@dataclass(frozen=True)
class Hint:
    """A forced placement: ``digit`` at ``position``, found at deduction ``level``."""
    digit: int
    position: Position
    level: int

    def __iter__(self) -> Iterator:
        # allows ``digit, position, level = hint``
        return iter((self.digit, self.position, self.level))
