"""Core grid utilities used by every higher-level component: box geometry per board size, unit iterators, candidate computation, placement/board validity and input shape checks."""

# grid_core.py
# Boards are NxN lists of lists of ints (0..N), N in {6, 9, 12}. 0 = blank.
# Coordinates are 0-based everywhere except in cell keys ('r1c1') and messages.
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from types_sudoku import Grid

# box height x width; 6 and 12 use non-square boxes
BOX_SHAPES = {6: (3, 2), 9: (3, 3), 12: (4, 3)}
SUPPORTED_SIZES = tuple(sorted(BOX_SHAPES))

Cell = tuple[int, int]


@dataclass(frozen=True)
class BoxGeometry:
    size: int
    box_height: int
    box_width: int

    @property
    def bands(self) -> int:
        """Number of boxes stacked vertically."""
        return self.size // self.box_height

    @property
    def stacks(self) -> int:
        """Number of boxes side by side."""
        return self.size // self.box_width

    def box_origin(self, row: int, col: int) -> Cell:
        return (row // self.box_height * self.box_height, col // self.box_width * self.box_width)

    def box_index(self, row: int, col: int) -> int:
        return (row // self.box_height) * self.stacks + col // self.box_width

    def box_cells(self, box: int) -> list[Cell]:
        br, bc = divmod(box, self.stacks)
        r0 = br * self.box_height
        c0 = bc * self.box_width
        return [(r0 + i, c0 + j) for i in range(self.box_height) for j in range(self.box_width)]


_GEOMETRIES = {n: BoxGeometry(n, h, w) for n, (h, w) in BOX_SHAPES.items()}


def geometry_for(n: int) -> Optional[BoxGeometry]:
    """Return the box geometry for a supported size, or None for any other N."""
    return _GEOMETRIES.get(n)


def in_bounds(r: int, c: int, n: int) -> bool:
    return 0 <= r < n and 0 <= c < n


def rc_to_key(r: int, c: int) -> str:
    return f"r{r + 1}c{c + 1}"


def clone_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def empty_grid(n: int) -> Grid:
    return [[0] * n for _ in range(n)]


def _is_int(v: Any) -> bool:
    return isinstance(v, (int, np.integer)) and not isinstance(v, (bool, np.bool_))


def check_board(board: Any, n: int) -> list[dict[str, Any]]:
    """Return the list of reasons `board` cannot be used as an NxN board (empty list if fine).

    Sizes outside {6, 9, 12} are reported as 'invalid_size'; wrong dimensions,
    non-integer values and values outside [0, N] as 'shape' / 'value' issues.
    """
    if n not in _GEOMETRIES:
        return [{"type": "invalid_size", "size": n, "allowed": list(SUPPORTED_SIZES)}]
    issues = []
    try:
        rows = list(board)
    except TypeError:
        return [{"type": "shape", "expected": [n, n], "found": type(board).__name__}]
    if len(rows) != n:
        return [{"type": "shape", "expected": [n, n], "rows": len(rows)}]
    for r, row in enumerate(rows):
        try:
            cells = list(row)
        except TypeError:
            issues.append({"type": "shape", "row": r, "found": type(row).__name__})
            continue
        if len(cells) != n:
            issues.append({"type": "shape", "row": r, "expected": n, "found": len(cells)})
            continue
        for c, v in enumerate(cells):
            if not _is_int(v):
                issues.append({"type": "value", "cell": rc_to_key(r, c), "found": repr(v)})
            elif not 0 <= v <= n:
                issues.append({"type": "value", "cell": rc_to_key(r, c), "found": int(v)})
    return issues


def to_grid(board: Any) -> Grid:
    """Copy a checked board (lists, tuples or a numpy array) into a plain list-of-lists grid."""
    return [[int(v) for v in row] for row in board]


def row_values(grid: Grid, r: int) -> set:
    return set(grid[r]) - {0}


def col_values(grid: Grid, c: int) -> set:
    return {row[c] for row in grid} - {0}


def unit_cells_row(r: int, n: int) -> list[Cell]:
    return [(r, c) for c in range(n)]


def unit_cells_col(c: int, n: int) -> list[Cell]:
    return [(r, c) for r in range(n)]


def _is_valid_placement(board: Grid, row: int, col: int, value: int, n: int) -> bool:
    # unchecked scan for callers that already hold a well-formed board
    geometry = _GEOMETRIES[n]
    line = board[row]
    for x in range(n):
        if x != col and line[x] == value:
            return False
    for x in range(n):
        if x != row and board[x][col] == value:
            return False
    r0, c0 = geometry.box_origin(row, col)
    for i in range(r0, r0 + geometry.box_height):
        for j in range(c0, c0 + geometry.box_width):
            if (i != row or j != col) and board[i][j] == value:
                return False
    return True


def is_valid_placement(board: Grid, row: int, col: int, value: int, n: int) -> bool:
    """True iff `value` does not already appear elsewhere in the row, column or box of (row, col).

    The cell under test is excluded from the scan, so an already placed value can be
    re-validated in place. Malformed boards, unknown N and out-of-range input give False.
    """
    if check_board(board, n):
        return False
    if not all(_is_int(x) for x in (row, col, value)):
        return False
    if not in_bounds(row, col, n) or not 1 <= value <= n:
        return False
    return _is_valid_placement(board, row, col, value, n)


def candidates_at(board: Grid, row: int, col: int, n: int) -> list[int]:
    """Legal values for an empty cell in ascending order (empty list for filled cells)."""
    if board[row][col] != 0:
        return []
    return [v for v in range(1, n + 1) if _is_valid_placement(board, row, col, v, n)]


def conflicts(board: Grid, n: int) -> list[Cell]:
    """Every filled cell whose value is repeated in its row, column or box."""
    if check_board(board, n):
        return []
    bad = []
    for r in range(n):
        for c in range(n):
            v = board[r][c]
            if v != 0 and not _is_valid_placement(board, r, c, v, n):
                bad.append((r, c))
    return bad


def is_board_valid(board: Grid, n: int) -> bool:
    """Local consistency: no two filled cells of a row, column or box share a value.

    Empty cells are allowed; the board is never modified.
    """
    if check_board(board, n):
        return False
    for r in range(n):
        for c in range(n):
            v = board[r][c]
            if v != 0 and not _is_valid_placement(board, r, c, v, n):
                return False
    return True


def is_complete_and_valid(board: Grid, n: int) -> bool:
    """True iff every row, column and box is a permutation of 1..N.

    This is the authoritative solved check; it never compares against a stored solution.
    """
    if check_board(board, n):
        return False
    geometry = _GEOMETRIES[n]
    arr = np.asarray(to_grid(board), dtype=np.int64)
    target = np.arange(1, n + 1)
    if not (np.sort(arr, axis=1) == target).all():
        return False
    if not (np.sort(arr, axis=0) == target[:, None]).all():
        return False
    # one box per row: (band, row-in-band, stack, col-in-stack) -> (band, stack, ...)
    boxes = arr.reshape(geometry.bands, geometry.box_height, geometry.stacks, geometry.box_width)
    boxes = boxes.transpose(0, 2, 1, 3).reshape(n, n)
    return bool((np.sort(boxes, axis=1) == target).all())


def missing_in_row(board: Grid, r: int, n: int) -> list[int]:
    present = row_values(board, r)
    return [v for v in range(1, n + 1) if v not in present]


def missing_in_col(board: Grid, c: int, n: int) -> list[int]:
    present = col_values(board, c)
    return [v for v in range(1, n + 1) if v not in present]


def missing_in_box(board: Grid, box: int, n: int) -> list[int]:
    geometry = _GEOMETRIES[n]
    present = {board[r][c] for r, c in geometry.box_cells(box)} - {0}
    return [v for v in range(1, n + 1) if v not in present]


def count_empty(board: Grid) -> int:
    return sum(1 for row in board for v in row if v == 0)


def completed_units(
    board: Grid,
    n: int,
    row: Optional[int] = None,
    col: Optional[int] = None,
) -> list[tuple[str, int]]:
    """Units that hold every digit 1..N exactly once, as ('row' | 'col' | 'box', index).

    With `row` and `col`, only the three units through that cell are checked, which is
    what a UI needs right after a placement. Malformed boards have no completed units.
    """
    if check_board(board, n):
        return []
    geometry = _GEOMETRIES[n]
    if row is not None and col is not None:
        if not in_bounds(row, col, n):
            return []
        rows, cols, boxes = [row], [col], [geometry.box_index(row, col)]
    else:
        rows = cols = boxes = range(n)
    full = list(range(1, n + 1))
    done = []
    for r in rows:
        if sorted(board[r]) == full:
            done.append(("row", r))
    for c in cols:
        if sorted(board[r][c] for r in range(n)) == full:
            done.append(("col", c))
    for b in boxes:
        if sorted(board[r][c] for r, c in geometry.box_cells(b)) == full:
            done.append(("box", b))
    return done


def sanity_check(original: Grid, current: Grid, n: int) -> dict[str, Any]:
    """Report givens that were overwritten and digits duplicated within a row, column or box."""
    shape = check_board(original, n) + check_board(current, n)
    if shape:
        return {"ok": False, "issues": shape}
    geometry = _GEOMETRIES[n]
    issues = []
    for r in range(n):
        for c in range(n):
            if original[r][c] != 0 and current[r][c] not in (0, original[r][c]):
                issues.append(
                    {
                        "type": "given_overwritten",
                        "cell": rc_to_key(r, c),
                        "given": original[r][c],
                        "found": current[r][c],
                    }
                )

    def duplicates_in_unit(vals):
        seen = set()
        dups = set()
        for v in vals:
            if v == 0:
                continue
            if v in seen:
                dups.add(v)
            seen.add(v)
        return dups

    units = [(f"r{r + 1}", unit_cells_row(r, n)) for r in range(n)]
    units += [(f"c{c + 1}", unit_cells_col(c, n)) for c in range(n)]
    units += [(f"b{b + 1}", geometry.box_cells(b)) for b in range(n)]
    for name, cells in units:
        vals = [current[r][c] for r, c in cells]
        dups = duplicates_in_unit(vals)
        if dups:
            bad = [rc_to_key(r, c) for r, c in cells if current[r][c] in dups]
            issues.append({"type": "duplicate", "unit": name, "digits": sorted(dups), "cells": bad})
    return {"ok": len(issues) == 0, "issues": issues}
