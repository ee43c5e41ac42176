"""Turn a complete solution into a playable starting grid by clearing a difficulty-dependent share of its cells."""

from __future__ import annotations

import math
import random
from typing import Optional

from types_sudoku import Grid

from .backtracking import count_solutions
from .grid_core import check_board, is_complete_and_valid, to_grid
from .outcomes import CarveResult, Status, rejected, status_for_issues

DIFFICULTY_FRACTIONS = {"easy": 0.40, "medium": 0.50, "hard": 0.60}


def removal_target(n: int, difficulty: str, fractions: Optional[dict[str, float]] = None) -> Optional[int]:
    """Cells to clear for `difficulty` on an NxN board, or None for an unknown difficulty."""
    fractions = fractions or DIFFICULTY_FRACTIONS
    if difficulty not in fractions:
        return None
    return math.floor(n * n * float(fractions[difficulty]))


def carve_puzzle(
    solution: Grid,
    difficulty: str,
    rng: Optional[random.Random] = None,
    fractions: Optional[dict[str, float]] = None,
    ensure_unique: bool = False,
    verbose: bool = False,
) -> CarveResult:
    """Clear cells of `solution` until the difficulty's removal count is reached.

    Cells are picked uniformly at random; picking an already cleared cell is a retry.
    With `ensure_unique`, a removal is only kept when the puzzle still has exactly one
    solution, so fewer cells than the target may end up cleared (see `removed`).
    The solution itself is never modified.
    """
    try:
        n = len(solution)
    except TypeError:
        return rejected(
            Status.MALFORMED_BOARD,
            [{"type": "shape", "expected": "NxN grid", "found": type(solution).__name__}],
            CarveResult,
        )
    issues = check_board(solution, n)
    if issues:
        return rejected(status_for_issues(issues), issues, CarveResult)
    if not is_complete_and_valid(solution, n):
        return rejected(Status.INVALID_BOARD, [{"type": "incomplete_solution", "size": n}], CarveResult)
    target = removal_target(n, difficulty, fractions)
    if target is None:
        allowed = sorted(fractions or DIFFICULTY_FRACTIONS)
        return rejected(
            Status.INVALID_DIFFICULTY,
            [{"type": "invalid_difficulty", "found": difficulty, "allowed": allowed}],
            CarveResult,
        )

    rng = rng or random.Random()
    board = to_grid(solution)
    removed = 0
    if ensure_unique:
        cells = [(r, c) for r in range(n) for c in range(n)]
        rng.shuffle(cells)
        for r, c in cells:
            if removed >= target:
                break
            backup = board[r][c]
            board[r][c] = 0
            if count_solutions(board, n, limit=2) != 1:
                board[r][c] = backup
            else:
                removed += 1
    else:
        while removed < target:
            r = rng.randrange(n)
            c = rng.randrange(n)
            if board[r][c] != 0:
                board[r][c] = 0
                removed += 1

    prefilled = [[v != 0 for v in row] for row in board]
    if verbose:
        print(f"[carve] {n}x{n} {difficulty}: removed {removed}/{target} cells", flush=True)
    return CarveResult(board=board, prefilled=prefilled, removed=removed, target=target)
