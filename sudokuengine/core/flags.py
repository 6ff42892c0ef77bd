"""Compact candidate sets backed by an integer bitmask."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List


@dataclass(frozen=True)
class Flags:
    """Set of digits ``1..board_size``; bit ``d - 1`` marks digit ``d``.

    Ordering is by cardinality, ties broken by the raw bits so that sorting
    is deterministic.
    """
    bits: int = 0

    @classmethod
    def from_list(cls, digits: Iterable[int]) -> "Flags":
        bits = 0
        for digit in digits:
            if digit < 1:
                raise ValueError(f"digit must be positive, got {digit}")
            bits |= 1 << (digit - 1)
        return cls(bits)

    @classmethod
    def single(cls, digit: int) -> "Flags":
        return cls.from_list((digit,))

    @classmethod
    def full(cls, board_size: int) -> "Flags":
        return cls((1 << board_size) - 1)

    def size(self) -> int:
        return bin(self.bits).count("1")

    def to_list(self) -> List[int]:
        digits = []
        bits = self.bits
        digit = 1
        while bits:
            if bits & 1:
                digits.append(digit)
            bits >>= 1
            digit += 1
        return digits

    def complement(self, board_size: int) -> "Flags":
        return Flags(~self.bits & ((1 << board_size) - 1))

    def __contains__(self, digit: int) -> bool:
        return digit >= 1 and bool(self.bits >> (digit - 1) & 1)

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return self.bits != 0

    def __or__(self, other: "Flags") -> "Flags":
        return Flags(self.bits | other.bits)

    def __and__(self, other: "Flags") -> "Flags":
        return Flags(self.bits & other.bits)

    def __lt__(self, other: "Flags") -> bool:
        return (self.size(), self.bits) < (other.size(), other.bits)

    def __le__(self, other: "Flags") -> bool:
        return (self.size(), self.bits) <= (other.size(), other.bits)

    def __repr__(self) -> str:
        return f"Flags({self.to_list()})"
