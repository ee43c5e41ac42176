# tests/test_hints.py
from sudoku_engine.hints import (
    HintLevel,
    candidate_map,
    find_box_analysis,
    find_column_analysis,
    find_pair_analysis,
    next_hint,
    select_best_hint,
)
from sudoku_engine.outcomes import Status


def test_naked_single_is_preferred(template9):
    template9[0][8] = 0
    res = next_hint(template9, 9)
    assert res.ok
    hint = res.hint
    assert hint["type"] == "naked_single"
    assert hint["level"] == HintLevel.EASY
    assert (hint["row"], hint["col"], hint["number"]) == (0, 8, 9)
    assert hint["message"] == "Only 9 can go in (row 1, column 9)!"


def test_hidden_single_in_row(hidden_single9):
    hint = next_hint(hidden_single9, 9).hint
    assert hint["type"] == "hidden_single"
    assert hint["level"] == HintLevel.MEDIUM
    assert (hint["row"], hint["col"], hint["number"]) == (0, 0, 1)


def test_easy_row_analysis_beats_medium_hidden_single(hidden_single9):
    hidden_single9[8] = [2, 3, 4, 5, 6, 7, 0, 0, 0]
    hint = next_hint(hidden_single9, 9).hint
    assert hint["type"] == "row_analysis"
    assert hint["row"] == 8
    assert hint["missing_numbers"] == [1, 8, 9]
    assert hint["empty_cells"] == [6, 7, 8]
    assert "number" not in hint
    assert hint["message"] == "Row 9 is missing 1, 8, 9."


def test_column_analysis_uses_threshold():
    board = [[0] * 9 for _ in range(9)]
    for r, v in enumerate([1, 2, 3, 4, 5, 6, 0, 0, 0]):
        board[r][0] = v
    hint = find_column_analysis(board, 9)
    assert hint["col"] == 0
    assert hint["missing_numbers"] == [7, 8, 9]
    assert find_column_analysis(board, 9, threshold=2) is None


def test_box_analysis_only_for_nine():
    board9 = [[0] * 9 for _ in range(9)]
    board9[0][:3] = [1, 2, 3]
    board9[1][:3] = [4, 5, 6]
    board9[2][:2] = [7, 8]
    hint = find_box_analysis(board9, 9)
    assert (hint["box_row"], hint["box_col"]) == (0, 0)
    assert hint["missing_numbers"] == [9]
    assert hint["empty_cells"] == [[2, 2]]

    board6 = [[0] * 6 for _ in range(6)]
    board6[0][:2] = [1, 2]
    board6[1][:2] = [3, 4]
    board6[2][:1] = [5]
    assert find_box_analysis(board6, 6) is None


def test_pair_analysis_reports_two_candidates():
    board = [[0] * 9 for _ in range(9)]
    board[0] = [0, 0, 3, 4, 5, 6, 7, 8, 9]
    hint = find_pair_analysis(board, 9, candidate_map(board, 9))
    assert (hint["row"], hint["col"]) == (0, 0)
    assert hint["candidates"] == [1, 2]
    assert hint["level"] == HintLevel.MEDIUM


def test_empty_board_falls_back_to_general_hint():
    res = next_hint([[0] * 9 for _ in range(9)], 9)
    assert res.ok
    assert res.hint["type"] == "general"
    assert res.hint["level"] == HintLevel.EASY


def test_full_board_has_no_hint(template9):
    res = next_hint(template9, 9)
    assert res.status is Status.NO_HINT
    assert res.hint is None


def test_malformed_board_is_rejected():
    assert next_hint([[0] * 9] * 3, 9).status is Status.MALFORMED_BOARD
    assert next_hint([[0] * 4] * 4, 4).status is Status.INVALID_SIZE


def test_select_best_hint_orders_by_level_then_type():
    hints = [
        {"type": "pair_analysis", "level": HintLevel.MEDIUM},
        {"type": "column_analysis", "level": HintLevel.EASY},
        {"type": "row_analysis", "level": HintLevel.EASY},
        {"type": "hidden_single", "level": HintLevel.MEDIUM},
    ]
    assert select_best_hint(hints)["type"] == "row_analysis"
    assert select_best_hint(hints[:1] + hints[3:])["type"] == "hidden_single"
