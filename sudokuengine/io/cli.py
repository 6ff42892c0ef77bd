"""Command-line interface."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, Optional

from .. import config
from ..core.abort import AbortLock
from ..core.csp import solution, solutions
from ..core.deduction import contradiction, hint, solve_by_hints
from ..logging_utils import get_logger, set_verbosity
from . import parser
from .render import format_board

logger = get_logger()

EXIT_OK = 0
EXIT_NO_ANSWER = 1
EXIT_BAD_INPUT = 2


def _option(args: argparse.Namespace, options: Dict[str, Any], name: str, default: Any) -> Any:
    value = getattr(args, name, None)
    if value is not None:
        return value
    return options.get(name, default)


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("puzzle", type=Path, help="Path to a puzzle YAML or grid text file")
    common.add_argument("--box-size", type=int, default=None, help="Box size N of the N²×N² grid (default: inferred)")
    common.add_argument("--timeout", type=float, default=None, help="Give up after this many seconds")
    common.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    ap = argparse.ArgumentParser(prog="sudokuengine", description="Generalized Sudoku solver and hint engine")
    sub = ap.add_subparsers(dest="command", required=True)

    p_solve = sub.add_parser("solve", parents=[common], help="Print a solution")
    p_solve.add_argument("--all", action="store_true", help="Print every solution")
    p_solve.add_argument("--limit", type=int, default=None, help="Stop after this many solutions with --all")

    p_hint = sub.add_parser("hint", parents=[common], help="Print one forced move")
    p_hint.add_argument("--max-level", dest="max_level", type=int, default=None, help="Deepest lookahead to try")

    p_check = sub.add_parser("check", parents=[common], help="Try to prove the grid contradictory")
    p_check.add_argument("--level", type=int, default=None, help="Lookahead depth of the proof")

    p_deduce = sub.add_parser("deduce", parents=[common], help="Solve using hints only")
    p_deduce.add_argument("--max-level", dest="max_level", type=int, default=None, help="Deepest lookahead to try")
    return ap


def _load(args: argparse.Namespace) -> parser.Puzzle:
    return parser.load_puzzle(args.puzzle, box_size=args.box_size)


def _run_solve(args: argparse.Namespace, puz: parser.Puzzle, lock: AbortLock) -> int:
    if not args.all:
        found = solution(puz.board, lock)
        if found is None:
            logger.warning("no solution%s", " (aborted)" if lock.is_aborted() else "")
            return EXIT_NO_ANSWER
        print(format_board(found))
        return EXIT_OK

    limit = _option(args, puz.options, "limit", config.DEFAULT_SOLUTION_LIMIT)
    count = 0
    for board in solutions(puz.board, lock):
        if count:
            print()
        print(format_board(board))
        count += 1
        if limit and count >= limit:
            logger.info("stopped after %d solutions", count)
            break
    logger.info("%d solution(s)%s", count, " (aborted)" if lock.is_aborted() else "")
    return EXIT_OK if count else EXIT_NO_ANSWER


def _run_hint(args: argparse.Namespace, puz: parser.Puzzle, lock: AbortLock) -> int:
    max_level = int(_option(args, puz.options, "max_level", config.DEFAULT_MAX_LEVEL))
    found = hint(puz.board, max_level, lock)
    if found is None:
        logger.warning("no hint up to level %d%s", max_level, " (aborted)" if lock.is_aborted() else "")
        return EXIT_NO_ANSWER
    row, col = found.position
    print(f"{found.digit} at row {row + 1}, column {col + 1} (level {found.level})")
    return EXIT_OK


def _run_check(args: argparse.Namespace, puz: parser.Puzzle, lock: AbortLock) -> int:
    level = int(_option(args, puz.options, "level", config.DEFAULT_CONTRADICTION_LEVEL))
    if not puz.board.is_consistent():
        print(f"contradiction: givens clash {puz.board.conflicts()}")
        return EXIT_OK
    if contradiction(puz.board, level, lock):
        print(f"contradiction found at level {level}")
        return EXIT_OK
    print(f"no contradiction found at level {level}")
    return EXIT_NO_ANSWER


def _run_deduce(args: argparse.Namespace, puz: parser.Puzzle, lock: AbortLock) -> int:
    max_level = int(_option(args, puz.options, "max_level", config.DEFAULT_MAX_LEVEL))
    found = solve_by_hints(puz.board, max_level, lock)
    if found is None:
        logger.warning("hints up to level %d do not solve the grid", max_level)
        return EXIT_NO_ANSWER
    print(format_board(found))
    return EXIT_OK


COMMANDS = {
    "solve": _run_solve,
    "hint": _run_hint,
    "check": _run_check,
    "deduce": _run_deduce,
}


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    set_verbosity(args.verbose)

    try:
        puz = _load(args)
    except (OSError, parser.PuzzleFormatError) as exc:
        logger.error("cannot read puzzle: %s", exc)
        return EXIT_BAD_INPUT
    logger.debug("loaded %r: %dx%d grid", puz.name, puz.board.board_size, puz.board.board_size)

    lock = AbortLock.prepare()
    timeout: Optional[float] = _option(args, puz.options, "timeout", config.DEFAULT_TIMEOUT)
    timer = lock.abort_after(float(timeout)) if timeout else None
    try:
        return COMMANDS[args.command](args, puz, lock)
    finally:
        if timer is not None:
            timer.cancel()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
