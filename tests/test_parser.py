from pathlib import Path

import pytest

from sudokuengine.core.board import Board
from sudokuengine.io.parser import PuzzleFormatError, infer_box_size, load_puzzle, parse_grid
from sudokuengine.io.render import format_board

PUZZLES = Path(__file__).resolve().parents[1] / "puzzles"


def test_load_trivial_puzzle():
    puzzle = load_puzzle(PUZZLES / "trivial_4x4.yaml")
    assert puzzle.box_size == 2
    assert puzzle.name == "trivial 4x4"
    assert puzzle.board.rows()[0] == [0, 0, 0, 3]
    assert puzzle.board.rows()[3] == [1, 0, 0, 0]
    assert puzzle.options["max_level"] == 2


def test_load_block_grid():
    puzzle = load_puzzle(PUZZLES / "classic.yaml")
    assert puzzle.box_size == 3
    assert puzzle.board.rows()[0] == [5, 3, 0, 0, 7, 0, 0, 0, 0]
    assert puzzle.options == {}


def test_load_grid_with_separators():
    board = load_puzzle(PUZZLES / "corrupted.yaml").board
    assert board.board_size == 9
    assert board.get((0, 0)) == 9
    assert board.get((1, 1)) == 9
    assert not board.is_consistent()


def test_flat_line_infers_box_size():
    board = parse_grid("   3" "3  2" "2  1" "1   ")
    assert board.box_size == 2
    assert board == load_puzzle(PUZZLES / "trivial_4x4.yaml").board


def test_letters_for_large_boards():
    board = parse_grid("G" + "." * 255)
    assert board.box_size == 4
    assert board.get((0, 0)) == 16
    with pytest.raises(PuzzleFormatError):
        parse_grid("H" + "." * 255)


def test_trailing_blanks_may_be_trimmed():
    board = parse_grid(["...3", "3..2", "2..1", "1"])
    assert board.rows()[3] == [1, 0, 0, 0]


def test_plain_text_file(tmp_path):
    path = tmp_path / "trivial.txt"
    path.write_text("...3\n3..2\n2..1\n1...\n", encoding="utf-8")
    puzzle = load_puzzle(path)
    assert puzzle.name == "trivial"
    assert puzzle.board.get((1, 3)) == 2


@pytest.mark.parametrize(
    "source",
    [
        ["...3", "3..2", "2..1"],
        ["...3", "3..2", "2..1", "1....."],
        ["...x", "3..2", "2..1", "1..."],
        ["...5", "3..2", "2..1", "1..."],
        "1" * 15,
        "",
    ],
)
def test_malformed_grids(source):
    with pytest.raises(PuzzleFormatError):
        parse_grid(source)


def test_explicit_box_size_must_fit():
    with pytest.raises(PuzzleFormatError):
        parse_grid("." * 16, box_size=3)
    with pytest.raises(PuzzleFormatError):
        parse_grid("." * 16, box_size=0)


def test_infer_box_size():
    assert infer_box_size(81) == 3
    assert infer_box_size(1) == 1
    with pytest.raises(PuzzleFormatError):
        infer_box_size(36)


def test_bad_yaml_documents(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(PuzzleFormatError):
        load_puzzle(path)
    path.write_text("grid: [\n", encoding="utf-8")
    with pytest.raises(PuzzleFormatError):
        load_puzzle(path)
    path.write_text("grid: '...3'\nbox_size: two\n", encoding="utf-8")
    with pytest.raises(PuzzleFormatError):
        load_puzzle(path)


def test_rendered_board_reads_back():
    board = load_puzzle(PUZZLES / "classic.yaml").board
    text = format_board(board)
    assert text.splitlines()[0] == "53.|.7.|..."
    assert text.splitlines()[3] == "---+---+---"
    assert parse_grid(text) == board
    assert parse_grid(format_board(board, separators=False)) == board
    assert format_board(Board.empty(2), separators=False) == "....\n....\n....\n...."
