"""Human-style hint engine: naked and hidden singles (direct placements) plus advisory hints (row/column/box deficiency, pairs, fewest candidates) and a progress-based fallback message."""

# hints.py
# All strategies run on the effective board; every non-null result is collected and
# the best one is chosen by (level, type priority). N is passed explicitly to every call.
from __future__ import annotations

from enum import IntEnum
from typing import Optional

from types_sudoku import Grid, Hint

from .grid_core import (
    candidates_at,
    check_board,
    count_empty,
    geometry_for,
    missing_in_box,
    missing_in_col,
    missing_in_row,
    to_grid,
)
from .outcomes import HintResult, Status, rejected, status_for_issues


class HintLevel(IntEnum):
    EASY = 1
    MEDIUM = 2
    HARD = 3


NAKED_SINGLE = "naked_single"
HIDDEN_SINGLE = "hidden_single"
MIN_CANDIDATES = "min_candidates"
PAIR_ANALYSIS = "pair_analysis"
ROW_ANALYSIS = "row_analysis"
COLUMN_ANALYSIS = "column_analysis"
BOX_ANALYSIS = "box_analysis"
GENERAL = "general"

TYPE_PRIORITY = {
    NAKED_SINGLE: 1,
    HIDDEN_SINGLE: 2,
    MIN_CANDIDATES: 3,
    PAIR_ANALYSIS: 4,
    ROW_ANALYSIS: 5,
    COLUMN_ANALYSIS: 6,
    BOX_ANALYSIS: 7,
}

Candidates = dict[tuple[int, int], list[int]]


def _where(r: int, c: int) -> str:
    return f"(row {r + 1}, column {c + 1})"


def candidate_map(board: Grid, n: int) -> Candidates:
    """Legal values of every empty cell, keyed by (row, col) in row-major order."""
    return {
        (r, c): candidates_at(board, r, c, n)
        for r in range(n)
        for c in range(n)
        if board[r][c] == 0
    }


def find_naked_single(board: Grid, n: int, cands: Candidates) -> Optional[Hint]:
    for (r, c), opts in cands.items():
        if len(opts) == 1:
            return {
                "type": NAKED_SINGLE,
                "level": HintLevel.EASY,
                "row": r,
                "col": c,
                "number": opts[0],
                "message": f"Only {opts[0]} can go in {_where(r, c)}!",
                "description": "No other number fits this cell.",
            }
    return None


def find_hidden_single(board: Grid, n: int, cands: Candidates) -> Optional[Hint]:
    for r in range(n):
        for num in range(1, n + 1):
            cols = [c for c in range(n) if num in cands.get((r, c), ())]
            if len(cols) == 1:
                return {
                    "type": HIDDEN_SINGLE,
                    "level": HintLevel.MEDIUM,
                    "row": r,
                    "col": cols[0],
                    "number": num,
                    "message": f"In row {r + 1}, {num} can only go in {_where(r, cols[0])}!",
                    "description": "No other empty cell in this row can take this number.",
                }
    for c in range(n):
        for num in range(1, n + 1):
            rows = [r for r in range(n) if num in cands.get((r, c), ())]
            if len(rows) == 1:
                return {
                    "type": HIDDEN_SINGLE,
                    "level": HintLevel.MEDIUM,
                    "row": rows[0],
                    "col": c,
                    "number": num,
                    "message": f"In column {c + 1}, {num} can only go in {_where(rows[0], c)}!",
                    "description": "No other empty cell in this column can take this number.",
                }
    return None


def find_row_analysis(board: Grid, n: int, threshold: int = 3) -> Optional[Hint]:
    for r in range(n):
        missing = missing_in_row(board, r, n)
        empty = [c for c in range(n) if board[r][c] == 0]
        if len(missing) <= threshold and empty:
            return {
                "type": ROW_ANALYSIS,
                "level": HintLevel.EASY,
                "row": r,
                "missing_numbers": missing,
                "empty_cells": empty,
                "message": f"Row {r + 1} is missing {', '.join(map(str, missing))}.",
                "description": "Try one of these numbers in the empty cells.",
            }
    return None


def find_column_analysis(board: Grid, n: int, threshold: int = 3) -> Optional[Hint]:
    for c in range(n):
        missing = missing_in_col(board, c, n)
        empty = [r for r in range(n) if board[r][c] == 0]
        if len(missing) <= threshold and empty:
            return {
                "type": COLUMN_ANALYSIS,
                "level": HintLevel.EASY,
                "col": c,
                "missing_numbers": missing,
                "empty_cells": empty,
                "message": f"Column {c + 1} is missing {', '.join(map(str, missing))}.",
                "description": "Try one of these numbers in the empty cells.",
            }
    return None


def find_box_analysis(board: Grid, n: int, threshold: int = 3) -> Optional[Hint]:
    # only offered on 9x9 boards
    if n != 9:
        return None
    geometry = geometry_for(n)
    for b in range(n):
        missing = missing_in_box(board, b, n)
        empty = [[r, c] for r, c in geometry.box_cells(b) if board[r][c] == 0]
        if len(missing) <= threshold and empty:
            box_row, box_col = divmod(b, geometry.stacks)
            return {
                "type": BOX_ANALYSIS,
                "level": HintLevel.EASY,
                "box_row": box_row,
                "box_col": box_col,
                "missing_numbers": missing,
                "empty_cells": empty,
                "message": f"Box ({box_row + 1}, {box_col + 1}) is missing {', '.join(map(str, missing))}.",
                "description": "Try one of these numbers in the empty cells.",
            }
    return None


def find_pair_analysis(board: Grid, n: int, cands: Candidates) -> Optional[Hint]:
    for (r, c), opts in cands.items():
        if len(opts) == 2:
            return {
                "type": PAIR_ANALYSIS,
                "level": HintLevel.MEDIUM,
                "row": r,
                "col": c,
                "candidates": list(opts),
                "message": f"{_where(r, c)} can only take {opts[0]} or {opts[1]}.",
                "description": "Pick one of these two numbers.",
            }
    return None


def find_min_candidates(board: Grid, n: int, cands: Candidates, threshold: int = 3) -> Optional[Hint]:
    best = None
    fewest = n + 1
    for cell, opts in cands.items():
        if 0 < len(opts) < fewest:
            fewest = len(opts)
            best = cell
    if best is None or fewest > threshold:
        return None
    r, c = best
    opts = cands[best]
    return {
        "type": MIN_CANDIDATES,
        "level": HintLevel.MEDIUM,
        "row": r,
        "col": c,
        "candidates": list(opts),
        "message": f"{_where(r, c)} can take one of {', '.join(map(str, opts))}.",
        "description": "Start from this cell.",
    }


def general_hint(board: Grid, n: int) -> Hint:
    empty = count_empty(board)
    if empty > 50:
        return {
            "type": GENERAL,
            "level": HintLevel.EASY,
            "message": "Plenty of cells are still empty. Start by filling a single row or column!",
            "description": f"Look for the numbers 1-{n} that are missing from a row.",
        }
    if empty > 20:
        return {
            "type": GENERAL,
            "level": HintLevel.MEDIUM,
            "message": "Good progress! Now focus on the boxes.",
            "description": f"Every box must hold each number from 1 to {n} exactly once.",
        }
    return {
        "type": GENERAL,
        "level": HintLevel.HARD,
        "message": "Almost there! Place the last numbers carefully.",
        "description": "Check that no number repeats as you go.",
    }


def select_best_hint(hints: list[Hint]) -> Hint:
    """Lowest level first, then the fixed type priority; ties keep discovery order."""
    return sorted(hints, key=lambda h: (h["level"], TYPE_PRIORITY.get(h["type"], 999)))[0]


def collect_hints(
    board: Grid,
    n: int,
    deficiency_threshold: int = 3,
    min_candidate_threshold: int = 3,
) -> list[Hint]:
    cands = candidate_map(board, n)
    found = [
        find_naked_single(board, n, cands),
        find_hidden_single(board, n, cands),
        find_row_analysis(board, n, deficiency_threshold),
        find_column_analysis(board, n, deficiency_threshold),
        find_box_analysis(board, n, deficiency_threshold),
        find_pair_analysis(board, n, cands),
        find_min_candidates(board, n, cands, min_candidate_threshold),
    ]
    return [h for h in found if h is not None]


def next_hint(
    board: Grid,
    n: int,
    deficiency_threshold: int = 3,
    min_candidate_threshold: int = 3,
) -> HintResult:
    """Best hint for the effective board `board`.

    Hints carrying `number` are direct placements; all others are advice only.
    A full board yields NO_HINT.
    """
    issues = check_board(board, n)
    if issues:
        return rejected(status_for_issues(issues), issues, HintResult)
    grid = to_grid(board)
    if count_empty(grid) == 0:
        return HintResult(status=Status.NO_HINT)
    hints = collect_hints(grid, n, deficiency_threshold, min_candidate_threshold)
    if not hints:
        return HintResult(hint=general_hint(grid, n))
    return HintResult(hint=select_best_hint(hints))
