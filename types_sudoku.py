# types_sudoku.py
from __future__ import annotations

from typing import TypedDict

Grid = list[list[int]]
"""An NxN board as rows of integers (0 = empty, 1..N = placed)."""

Mask = list[list[bool]]
"""An NxN boolean matrix, e.g. which cells were given at puzzle start."""


class SolveStep(TypedDict):
    """One entry of the backtracking trace, replayed in order for animation."""

    row: int  # 0-based
    col: int  # 0-based
    value: int  # placed value, 0 for removals
    action: str  # 'place' or 'remove'


class LogicalStep(TypedDict):
    """A single deduced placement that needed no guessing."""

    row: int
    col: int
    value: int
    technique: str  # 'naked_single' or 'hidden_single'
    reason: str  # human-friendly explanation


class Hint(TypedDict, total=False):
    """A tagged result of the hint engine used by the UI layers."""

    type: str  # e.g. 'naked_single', 'hidden_single', 'row_analysis', 'general'
    level: int  # 1 easy, 2 medium, 3 hard
    row: int
    col: int
    number: int  # present only when the hint is a direct placement
    candidates: list[int]
    missing_numbers: list[int]
    empty_cells: list  # column/row indices, or [row, col] pairs for boxes
    box_row: int
    box_col: int
    message: str
    description: str
