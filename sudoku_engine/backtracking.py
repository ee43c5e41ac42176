"""Exhaustive depth-first solver with a replayable step trace, solution counting for uniqueness checks, and a no-guessing single-step mode (naked/hidden singles)."""

# backtracking.py
# The search walks the empty cells of a flat row-major cell list with an explicit
# cursor instead of recursion. Every placement and every undo is appended to the
# step log, so replaying the log reproduces the exact path, dead ends included.
from __future__ import annotations

from typing import Callable, Iterator, Optional

from types_sudoku import Grid, LogicalStep, SolveStep

from .grid_core import (
    _is_valid_placement,
    candidates_at,
    check_board,
    clone_grid,
    conflicts,
    geometry_for,
    rc_to_key,
    to_grid,
)
from .outcomes import SolveResult, Status, StepResult, rejected, status_for_issues

ProgressFn = Callable[[int], None]


def iter_search(
    grid: Grid,
    n: int,
    steps: Optional[list[SolveStep]] = None,
    solutions: Optional[list[Grid]] = None,
    limit: int = 1,
) -> Iterator[int]:
    """Search `grid` in place, yielding a progress percent at each descent.

    Values are tried in ascending order 1..N, pruned by `is_valid_placement`.
    Completed grids are appended to `solutions` until `limit` of them are found;
    the generator simply returns when the space is exhausted. `grid` is left in
    the state of the last solution found (or restored to its input on exhaustion).
    """
    if solutions is None:
        solutions = []
    total = n * n
    empties = [i for i in range(total) if grid[i // n][i % n] == 0]
    tried = [0] * len(empties)
    k = 0

    def undo(pos: int) -> None:
        r, c = divmod(empties[pos], n)
        grid[r][c] = 0
        if steps is not None:
            steps.append({"row": r, "col": c, "value": 0, "action": "remove"})

    while True:
        if k == len(empties):
            yield 100
            solutions.append(clone_grid(grid))
            if len(solutions) >= limit or k == 0:
                return
            k -= 1
            undo(k)
            continue

        index = empties[k]
        r, c = divmod(index, n)
        yield index * 100 // total
        for v in range(tried[k] + 1, n + 1):
            if _is_valid_placement(grid, r, c, v, n):
                grid[r][c] = v
                tried[k] = v
                if steps is not None:
                    steps.append({"row": r, "col": c, "value": v, "action": "place"})
                k += 1
                break
        else:
            # every value failed here; step back to the previous choice point
            tried[k] = 0
            if k == 0:
                return
            k -= 1
            undo(k)


def solve(
    board: Grid,
    n: int,
    on_progress: Optional[ProgressFn] = None,
    record_steps: bool = True,
) -> SolveResult:
    """Find a complete legal assignment for `board`, or report it unsolvable.

    The input is not modified. `on_progress` receives integer percents
    (visited-cell index / total cells) whenever the value changes.
    """
    issues = check_board(board, n)
    if issues:
        return rejected(status_for_issues(issues), issues, SolveResult)
    grid = to_grid(board)
    bad = conflicts(grid, n)
    if bad:
        return SolveResult(
            status=Status.UNSOLVABLE,
            issues=[{"type": "conflict", "cell": rc_to_key(r, c), "value": grid[r][c]} for r, c in bad],
        )

    steps: list[SolveStep] = []
    solutions: list[Grid] = []
    last = -1
    for pct in iter_search(grid, n, steps if record_steps else None, solutions):
        if on_progress is not None and pct != last:
            on_progress(pct)
        last = pct
    if not solutions:
        return SolveResult(status=Status.UNSOLVABLE, steps=steps)
    return SolveResult(solution=solutions[0], steps=steps)


def count_solutions(board: Grid, n: int, limit: int = 2) -> int:
    """Number of completions of `board`, counting no further than `limit`.

    Malformed or locally inconsistent boards have zero completions.
    """
    if check_board(board, n):
        return 0
    grid = to_grid(board)
    if conflicts(grid, n):
        return 0
    solutions: list[Grid] = []
    for _ in iter_search(grid, n, None, solutions, limit=limit):
        pass
    return len(solutions)


def has_unique_solution(board: Grid, n: int) -> bool:
    return count_solutions(board, n, limit=2) == 1


def _logical_step(board: Grid, n: int) -> Optional[LogicalStep]:
    # naked single: a cell with exactly one legal value
    for r in range(n):
        for c in range(n):
            if board[r][c] == 0:
                opts = candidates_at(board, r, c, n)
                if len(opts) == 1:
                    return {
                        "row": r,
                        "col": c,
                        "value": opts[0],
                        "technique": "naked_single",
                        "reason": f"Only one candidate fits {rc_to_key(r, c)}.",
                    }

    # hidden single: a value with exactly one legal cell in a row, column or box
    geometry = geometry_for(n)
    for num in range(1, n + 1):
        for r in range(n):
            cols = [c for c in range(n) if board[r][c] == 0 and _is_valid_placement(board, r, c, num, n)]
            if len(cols) == 1:
                return {
                    "row": r,
                    "col": cols[0],
                    "value": num,
                    "technique": "hidden_single",
                    "reason": f"Digit {num} fits only one cell in row {r + 1}.",
                }
        for c in range(n):
            rows = [r for r in range(n) if board[r][c] == 0 and _is_valid_placement(board, r, c, num, n)]
            if len(rows) == 1:
                return {
                    "row": rows[0],
                    "col": c,
                    "value": num,
                    "technique": "hidden_single",
                    "reason": f"Digit {num} fits only one cell in column {c + 1}.",
                }
        for b in range(n):
            cells = [
                (r, c)
                for r, c in geometry.box_cells(b)
                if board[r][c] == 0 and _is_valid_placement(board, r, c, num, n)
            ]
            if len(cells) == 1:
                r, c = cells[0]
                return {
                    "row": r,
                    "col": c,
                    "value": num,
                    "technique": "hidden_single",
                    "reason": f"Digit {num} fits only one cell in box {b + 1}.",
                }
    return None


def solve_one_logical_step(board: Grid, n: int) -> StepResult:
    """Place a single value that follows without guessing; never searches.

    Returns the step plus a copy of the board with it applied, or a NO_HINT
    status when neither a naked nor a hidden single exists.
    """
    issues = check_board(board, n)
    if issues:
        return rejected(status_for_issues(issues), issues, StepResult)
    grid = to_grid(board)
    step = _logical_step(grid, n)
    if step is None:
        return StepResult(status=Status.NO_HINT)
    grid[step["row"]][step["col"]] = step["value"]
    return StepResult(step=step, board=grid)
