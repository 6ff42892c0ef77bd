"""Bipartite matching between cells and the digits they may take."""

from __future__ import annotations

from typing import Dict, List, Sequence, Set

from .flags import Flags


def has_perfect_matching(options: Sequence[Flags]) -> bool:
    """Return True if every entry can receive a distinct digit from its own set.

    This is Hall's marriage condition for the cells of one house: a cell with
    no digits, or ``k`` cells sharing fewer than ``k`` digits, makes the house
    infeasible even when each cell still has candidates of its own.
    """
    if not options:
        return True
    union = 0
    for flags in options:
        if not flags.bits:
            return False
        union |= flags.bits
    if bin(union).count("1") < len(options):
        return False

    digits: List[List[int]] = [flags.to_list() for flags in options]
    owner: Dict[int, int] = {}

    def augment(cell: int, visited: Set[int]) -> bool:
        for digit in digits[cell]:
            if digit in visited:
                continue
            visited.add(digit)
            if digit not in owner or augment(owner[digit], visited):
                owner[digit] = cell
                return True
        return False

    return all(augment(cell, set()) for cell in range(len(digits)))
