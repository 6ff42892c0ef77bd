from pathlib import Path

from sudokuengine.core.abort import AbortLock
from sudokuengine.core.board import Board
from sudokuengine.core.constraints import is_unsolvable
from sudokuengine.core.csp import solution
from sudokuengine.core.deduction import contradiction, hint, solve_by_hints
from sudokuengine.core.model import Hint
from sudokuengine.io.parser import load_puzzle

PUZZLES = Path(__file__).resolve().parents[1] / "puzzles"

TRIVIAL = Board.from_rows([
    [0, 0, 0, 3],
    [3, 0, 0, 2],
    [2, 0, 0, 1],
    [1, 0, 0, 0],
])

TRIVIAL_SOLVED = Board.from_rows([
    [4, 2, 1, 3],
    [3, 1, 4, 2],
    [2, 4, 3, 1],
    [1, 3, 2, 4],
])

EXHAUSTED = Board.from_rows([
    [0, 1, 2, 0],
    [0, 0, 0, 0],
    [3, 0, 0, 0],
    [4, 0, 0, 0],
])

ROW_STUCK = Board.from_rows([
    [0, 0, 1, 2],
    [0, 4, 0, 0],
    [0, 0, 0, 0],
    [0, 0, 0, 0],
])


def test_level_zero_never_proves_anything():
    lock = AbortLock.prepare()
    assert not contradiction(EXHAUSTED, 0, lock)
    assert not contradiction(ROW_STUCK, 0, lock)


def test_level_one_is_unsolvable_check():
    lock = AbortLock.prepare()
    for board in (TRIVIAL, EXHAUSTED, ROW_STUCK):
        assert contradiction(board, 1, lock) == is_unsolvable(board)


def test_higher_levels_keep_direct_contradictions():
    lock = AbortLock.prepare()
    for level in (2, 3):
        assert contradiction(EXHAUSTED, level, lock)
        assert contradiction(ROW_STUCK, level, lock)


def test_solvable_board_never_contradicts():
    lock = AbortLock.prepare()
    for level in range(4):
        assert not contradiction(TRIVIAL, level, lock)


def test_wrong_digit_refuted_by_lookahead():
    lock = AbortLock.prepare()
    # 1 belongs at (0, 2); with 4 there, (0, 0) has no digit left
    wrong = TRIVIAL.set((0, 2), 4)
    assert not contradiction(wrong, 0, lock)
    assert contradiction(wrong, 1, lock)
    assert contradiction(wrong, 2, lock)


def test_contradiction_false_when_aborted():
    lock = AbortLock.prepare()
    lock.abort()
    assert not contradiction(EXHAUSTED, 1, lock)
    assert not contradiction(ROW_STUCK, 3, lock)


def test_hint_returns_naked_single_at_level_zero():
    assert hint(TRIVIAL, 2, AbortLock.prepare()) == Hint(4, (0, 0), 0)


def test_hint_unpacks_like_a_triple():
    digit, position, level = hint(TRIVIAL, 2, AbortLock.prepare())
    assert (digit, position, level) == (4, (0, 0), 0)


def test_hint_forced_three():
    board = load_puzzle(PUZZLES / "forced_three.yaml").board
    lock = AbortLock.prepare()
    found = hint(board, 3, lock)
    assert found == Hint(3, (8, 7), 1)

    assert not is_unsolvable(board.set(found.position, found.digit))
    for digit in board.available(found.position).to_list():
        if digit != found.digit:
            assert contradiction(board.set(found.position, digit), found.level, lock)


def test_hint_needs_enough_levels():
    board = load_puzzle(PUZZLES / "forced_three.yaml").board
    assert hint(board, 0, AbortLock.prepare()) is None


def test_hint_on_solved_board():
    assert hint(TRIVIAL_SOLVED, 3, AbortLock.prepare()) is None


def test_hint_on_dead_board():
    assert hint(EXHAUSTED, 3, AbortLock.prepare()) is None


def test_hint_with_negative_level():
    assert hint(TRIVIAL, -1, AbortLock.prepare()) is None


def test_hint_when_aborted():
    lock = AbortLock.prepare()
    lock.abort()
    assert hint(TRIVIAL, 3, lock) is None


def test_hints_converge_to_the_solution():
    lock = AbortLock.prepare()
    board = TRIVIAL
    while True:
        found = hint(board, 2, lock)
        if found is None:
            break
        assert found.level <= 2
        assert board.get(found.position) == 0
        board = board.set(found.position, found.digit)
    assert board == TRIVIAL_SOLVED
    assert board == solution(TRIVIAL, lock)


def test_solve_by_hints():
    lock = AbortLock.prepare()
    assert solve_by_hints(TRIVIAL, 2, lock) == TRIVIAL_SOLVED
    assert solve_by_hints(EXHAUSTED, 2, lock) is None
