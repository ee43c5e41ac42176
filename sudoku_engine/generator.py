"""Complete-grid generation for 6x6, 9x9 and 12x12 boards: fixed template grids (default), randomized backtracking, and a cyclic-pattern fallback that is valid by construction."""

# generator.py
# Every strategy's output is re-checked with is_complete_and_valid; anything that
# fails (or a random search that runs out of budget) falls back to the pattern grid.
from __future__ import annotations

import random
import sys
from typing import Optional

from types_sudoku import Grid

from .grid_core import candidates_at, clone_grid, empty_grid, geometry_for, is_complete_and_valid
from .outcomes import GenerationResult, Status, rejected

GENERATION_MODES = ("template", "random")

TEMPLATES: dict[int, Grid] = {
    # 3 rows x 2 cols per box
    6: [
        [1, 4, 2, 5, 3, 6],
        [2, 5, 3, 6, 1, 4],
        [3, 6, 1, 4, 2, 5],
        [4, 1, 5, 2, 6, 3],
        [5, 2, 6, 3, 4, 1],
        [6, 3, 4, 1, 5, 2],
    ],
    9: [
        [1, 2, 3, 4, 5, 6, 7, 8, 9],
        [4, 5, 6, 7, 8, 9, 1, 2, 3],
        [7, 8, 9, 1, 2, 3, 4, 5, 6],
        [2, 3, 1, 5, 6, 4, 8, 9, 7],
        [5, 6, 4, 8, 9, 7, 2, 3, 1],
        [8, 9, 7, 2, 3, 1, 5, 6, 4],
        [3, 1, 2, 6, 4, 5, 9, 7, 8],
        [6, 4, 5, 9, 7, 8, 3, 1, 2],
        [9, 7, 8, 3, 1, 2, 6, 4, 5],
    ],
    # 4 rows x 3 cols per box
    12: [
        [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12],
        [4, 5, 6, 7, 8, 9, 10, 11, 12, 1, 2, 3],
        [7, 8, 9, 10, 11, 12, 1, 2, 3, 4, 5, 6],
        [10, 11, 12, 1, 2, 3, 4, 5, 6, 7, 8, 9],
        [2, 3, 1, 5, 6, 4, 8, 9, 7, 11, 12, 10],
        [5, 6, 4, 8, 9, 7, 11, 12, 10, 2, 3, 1],
        [8, 9, 7, 11, 12, 10, 2, 3, 1, 5, 6, 4],
        [11, 12, 10, 2, 3, 1, 5, 6, 4, 8, 9, 7],
        [3, 1, 2, 6, 4, 5, 9, 7, 8, 12, 10, 11],
        [6, 4, 5, 9, 7, 8, 12, 10, 11, 3, 1, 2],
        [9, 7, 8, 12, 10, 11, 3, 1, 2, 6, 4, 5],
        [12, 10, 11, 3, 1, 2, 6, 4, 5, 9, 7, 8],
    ],
}


def template_solution(n: int) -> Grid:
    return clone_grid(TEMPLATES[n])


def pattern_solution(n: int) -> Grid:
    """Row-cyclic grid: each row is the first one shifted by the box width, with an
    extra shift of one at every new band of boxes.
    """
    geometry = geometry_for(n)
    h, w = geometry.box_height, geometry.box_width
    return [[(w * (r % h) + r // h + c) % n + 1 for c in range(n)] for r in range(n)]


def _most_constrained(grid: Grid, n: int) -> Optional[tuple[int, int, list[int]]]:
    """Empty cell with the fewest legal values (row-major on ties), or None when full."""
    best = None
    for r in range(n):
        for c in range(n):
            if grid[r][c] != 0:
                continue
            opts = candidates_at(grid, r, c, n)
            if best is None or len(opts) < len(best[2]):
                best = (r, c, opts)
                if len(opts) <= 1:
                    return best
    return best


def random_solution(n: int, rng: Optional[random.Random] = None, max_nodes: int = 200000) -> Optional[Grid]:
    """Fill an empty board by always branching on the most constrained cell, trying
    its legal values in shuffled order.

    Returns None when the search is exhausted or uses more than `max_nodes` placements.
    """
    rng = rng or random.Random()
    grid = empty_grid(n)
    stack: list[tuple[int, int, list[int]]] = []
    nodes = 0
    while True:
        cell = _most_constrained(grid, n)
        if cell is None:
            return grid
        rng.shuffle(cell[2])
        stack.append(cell)
        # take the next untried value, unwinding exhausted cells
        while stack:
            r, c, opts = stack[-1]
            if opts:
                grid[r][c] = opts.pop()
                nodes += 1
                if nodes > max_nodes:
                    return None
                break
            grid[r][c] = 0
            stack.pop()
        else:
            return None


def generate_solution(
    n: int,
    mode: str = "template",
    rng: Optional[random.Random] = None,
    max_nodes: int = 200000,
    verbose: bool = False,
) -> GenerationResult:
    """Produce a complete, fully legal NxN grid to serve as a puzzle's ground truth."""
    if geometry_for(n) is None:
        return rejected(Status.INVALID_SIZE, [{"type": "invalid_size", "size": n}], GenerationResult)
    if mode not in GENERATION_MODES:
        raise ValueError(f"unknown generation mode {mode!r}; expected one of {GENERATION_MODES}")

    if mode == "random":
        grid = random_solution(n, rng, max_nodes=max_nodes)
    else:
        grid = template_solution(n)
    strategy = mode

    if grid is None or not is_complete_and_valid(grid, n):
        print(f"[generate] WARNING: {mode} strategy failed for {n}x{n}; using pattern grid", file=sys.stderr, flush=True)
        grid = pattern_solution(n)
        strategy = "pattern"
    if verbose:
        print(f"[generate] {n}x{n} solution via {strategy}", flush=True)
    return GenerationResult(solution=grid, strategy=strategy)
