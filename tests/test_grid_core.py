# tests/test_grid_core.py
import copy

import numpy as np
import pytest

from sudoku_engine.generator import TEMPLATES
from sudoku_engine.grid_core import (
    candidates_at,
    check_board,
    completed_units,
    conflicts,
    geometry_for,
    is_board_valid,
    is_complete_and_valid,
    is_valid_placement,
    missing_in_box,
    rc_to_key,
    sanity_check,
)


def test_box_geometry_per_size():
    g6, g9, g12 = geometry_for(6), geometry_for(9), geometry_for(12)
    assert (g6.box_height, g6.box_width) == (3, 2)
    assert (g9.box_height, g9.box_width) == (3, 3)
    assert (g12.box_height, g12.box_width) == (4, 3)
    assert g6.box_origin(4, 3) == (3, 2)
    assert g12.box_origin(5, 7) == (4, 6)
    assert geometry_for(8) is None


def test_box_cells_partition_the_board():
    for n in (6, 9, 12):
        g = geometry_for(n)
        seen = set()
        for b in range(n):
            cells = g.box_cells(b)
            assert len(cells) == n
            assert all(g.box_index(r, c) == b for r, c in cells)
            seen.update(cells)
        assert len(seen) == n * n


def test_cell_keys_are_one_based():
    assert rc_to_key(0, 8) == "r1c9"


def test_placement_checks_row_col_and_box(template9):
    template9[0][0] = 0
    assert is_valid_placement(template9, 0, 0, 1, 9)
    assert not is_valid_placement(template9, 0, 0, 2, 9)  # row
    board = [[0] * 9 for _ in range(9)]
    board[5][4] = 7
    assert not is_valid_placement(board, 0, 4, 7, 9)  # column
    assert not is_valid_placement(board, 3, 3, 7, 9)  # box
    assert is_valid_placement(board, 0, 0, 7, 9)


def test_same_value_elsewhere_in_row_is_rejected():
    board = [[0] * 9 for _ in range(9)]
    assert is_valid_placement(board, 0, 0, 5, 9)
    board[0][0] = 5
    assert not is_valid_placement(board, 0, 4, 5, 9)


def test_placed_value_revalidates_in_place(template9):
    assert is_valid_placement(template9, 0, 0, template9[0][0], 9)


def test_placement_rejects_out_of_range_inputs(template9):
    assert not is_valid_placement(template9, 0, 0, 10, 9)
    assert not is_valid_placement(template9, 9, 0, 1, 9)
    assert not is_valid_placement(template9, 0, 0, 1, 7)


def test_six_by_six_boxes_are_three_rows_by_two_columns():
    board = [[0] * 6 for _ in range(6)]
    board[2][1] = 4
    assert not is_valid_placement(board, 0, 0, 4, 6)  # same 3x2 box
    assert is_valid_placement(board, 0, 2, 4, 6)  # next box to the right


def test_duplicate_in_row_makes_board_invalid():
    board = [[0] * 9 for _ in range(9)]
    board[0][0] = 5
    board[0][3] = 5
    assert not is_board_valid(board, 9)
    assert set(conflicts(board, 9)) == {(0, 0), (0, 3)}


def test_board_validity_is_idempotent_and_side_effect_free(template9):
    template9[4][4] = 0
    before = copy.deepcopy(template9)
    assert is_board_valid(template9, 9) is True
    assert is_board_valid(template9, 9) is True
    assert template9 == before


@pytest.mark.parametrize("n", [6, 9, 12])
def test_templates_are_complete_and_valid(n):
    assert is_complete_and_valid(TEMPLATES[n], n)


def test_complete_check_rejects_blanks_and_swaps(template9):
    holed = copy.deepcopy(template9)
    holed[3][3] = 0
    assert not is_complete_and_valid(holed, 9)
    assert is_board_valid(holed, 9)
    swapped = copy.deepcopy(template9)
    swapped[0][0], swapped[0][1] = swapped[0][1], swapped[0][0]
    assert not is_complete_and_valid(swapped, 9)


def test_complete_check_uses_three_by_two_boxes_for_six():
    # rows and columns are permutations, but the boxes only work as 2 rows x 3 cols
    two_by_three = [
        [1, 2, 3, 4, 5, 6],
        [4, 5, 6, 1, 2, 3],
        [2, 3, 1, 5, 6, 4],
        [5, 6, 4, 2, 3, 1],
        [3, 1, 2, 6, 4, 5],
        [6, 4, 5, 3, 1, 2],
    ]
    assert not is_complete_and_valid(two_by_three, 6)
    transposed = [list(col) for col in zip(*two_by_three)]
    assert is_complete_and_valid(transposed, 6)


def test_check_board_reports_size_shape_and_values():
    assert check_board([[0] * 8] * 8, 8)[0]["type"] == "invalid_size"
    assert check_board([[0] * 9] * 8, 9)[0]["type"] == "shape"
    ragged = [[0] * 9 for _ in range(9)]
    ragged[2] = [0] * 8
    assert check_board(ragged, 9) == [{"type": "shape", "row": 2, "expected": 9, "found": 8}]
    bad = [[0] * 9 for _ in range(9)]
    bad[0][0] = 10
    bad[1][1] = True
    bad[2][2] = 1.5
    issues = check_board(bad, 9)
    assert [i["cell"] for i in issues] == ["r1c1", "r2c2", "r3c3"]
    assert all(i["type"] == "value" for i in issues)


def test_check_board_accepts_numpy_boards():
    assert check_board(np.array(TEMPLATES[12]), 12) == []
    assert is_complete_and_valid(np.array(TEMPLATES[12]), 12)


def test_predicates_are_false_for_malformed_boards():
    assert not is_board_valid([[0] * 9] * 8, 9)
    assert not is_complete_and_valid([[1] * 5] * 5, 5)
    for board in ([[0] * 9] * 3, None, [[0] * 4] * 9, 5):
        assert is_valid_placement(board, 0, 0, 1, 9) is False
        assert is_board_valid(board, 9) is False
        assert is_complete_and_valid(board, 9) is False
        assert conflicts(board, 9) == []
    empty = [[0] * 9 for _ in range(9)]
    assert is_valid_placement(empty, "0", 0, 1, 9) is False
    assert is_valid_placement(empty, 0, 0, True, 9) is False


def test_candidates_and_missing_numbers(template9):
    template9[0][0] = 0
    template9[0][1] = 0
    assert candidates_at(template9, 0, 0, 9) == [1]
    assert candidates_at(template9, 0, 1, 9) == [2]
    assert candidates_at(template9, 1, 1, 9) == []
    assert missing_in_box(template9, 0, 9) == [1, 2]


def test_sanity_check_flags_overwrites_and_duplicates(template9):
    original = copy.deepcopy(template9)
    original[0][0] = 0
    current = copy.deepcopy(template9)
    current[0][1] = 1  # overwrites the given 2 and duplicates the 1 in row 1 / box 1
    report = sanity_check(original, current, 9)
    assert not report["ok"]
    types = {i["type"] for i in report["issues"]}
    assert types == {"given_overwritten", "duplicate"}
    units = {i["unit"] for i in report["issues"] if i["type"] == "duplicate"}
    assert {"r1", "b1"} <= units
    assert sanity_check(original, template9, 9) == {"ok": True, "issues": []}


def test_completed_units_on_full_and_partial_boards(template9):
    full = completed_units(template9, 9)
    assert len(full) == 27
    template9[4][4] = 0
    done = completed_units(template9, 9)
    assert ("row", 4) not in done
    assert ("col", 4) not in done
    assert ("box", 4) not in done
    assert ("row", 3) in done and ("box", 0) in done
    assert len(done) == 24


def test_completed_units_through_one_cell_use_box_shape():
    board = [[0] * 6 for _ in range(6)]
    # fill the 3x2 box at the top-left and nothing else
    for (r, c), v in zip([(0, 0), (0, 1), (1, 0), (1, 1), (2, 0), (2, 1)], range(1, 7)):
        board[r][c] = v
    assert completed_units(board, 6, 2, 1) == [("box", 0)]
    assert completed_units(board, 6, 0, 2) == []
    assert completed_units(board, 6) == [("box", 0)]
    assert completed_units(board, 6, 9, 9) == []


def test_completed_units_rejects_duplicates_and_malformed():
    board = [[1] * 9 for _ in range(9)]
    assert completed_units(board, 9) == []
    assert completed_units([[0] * 9] * 2, 9) == []
