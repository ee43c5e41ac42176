# tests/test_backtracking.py
import copy

import pytest

from sudoku_engine.backtracking import count_solutions, has_unique_solution, solve, solve_one_logical_step
from sudoku_engine.generator import TEMPLATES, pattern_solution
from sudoku_engine.grid_core import is_complete_and_valid
from sudoku_engine.outcomes import Status
from sudoku_engine.steplog import replay_steps


def test_single_blank_is_filled(template9):
    template9[0][0] = 0
    res = solve(template9, 9)
    assert res.ok
    assert res.solution[0][0] == 1
    assert res.solution == TEMPLATES[9]
    assert template9[0][0] == 0  # input untouched


@pytest.mark.parametrize("n", [6, 9, 12])
@pytest.mark.parametrize("source", ["template", "pattern"])
def test_any_single_cleared_cell_solves_back(n, source):
    solution = TEMPLATES[n] if source == "template" else pattern_solution(n)
    for r in range(n):
        for c in range(n):
            board = copy.deepcopy(solution)
            board[r][c] = 0
            res = solve(board, n)
            assert res.ok
            assert res.solution == solution


@pytest.mark.parametrize("n", [6, 9, 12])
def test_carved_templates_solve_to_valid_grids(n):
    board = copy.deepcopy(TEMPLATES[n])
    for r in range(n):
        for c in range(n):
            if (r + 2 * c) % 3 == 0:
                board[r][c] = 0
    res = solve(board, n)
    assert res.status is Status.OK
    assert is_complete_and_valid(res.solution, n)
    for r in range(n):
        for c in range(n):
            if board[r][c]:
                assert res.solution[r][c] == board[r][c]


def test_dead_end_records_place_then_remove(unsolvable9):
    res = solve(unsolvable9, 9)
    assert res.status is Status.UNSOLVABLE
    assert res.solution is None
    assert res.steps == [
        {"row": 0, "col": 0, "value": 1, "action": "place"},
        {"row": 0, "col": 0, "value": 0, "action": "remove"},
    ]


def test_conflicting_board_is_unsolvable_without_search():
    board = [[0] * 9 for _ in range(9)]
    board[0][0] = 5
    board[0][3] = 5
    res = solve(board, 9)
    assert res.status is Status.UNSOLVABLE
    assert res.steps == []
    assert {i["cell"] for i in res.issues} == {"r1c1", "r1c4"}


def test_malformed_input_is_rejected():
    assert solve([[0] * 9] * 8, 9).status is Status.MALFORMED_BOARD
    assert solve([[0] * 7] * 7, 7).status is Status.INVALID_SIZE


def test_replaying_steps_reproduces_solution():
    board = [[0] * 6 for _ in range(6)]
    board[0] = [1, 2, 3, 4, 5, 6]
    res = solve(board, 6)
    assert res.ok
    assert replay_steps(board, res.steps) == res.solution


def test_progress_is_monotone_per_event_and_finishes_at_100(template9):
    for c in range(9):
        template9[4][c] = 0
    seen = []
    res = solve(template9, 9, on_progress=seen.append)
    assert res.ok
    assert seen[-1] == 100
    assert all(0 <= p <= 100 for p in seen)
    assert all(a != b for a, b in zip(seen, seen[1:]))


def test_search_is_deterministic():
    board = [[0] * 6 for _ in range(6)]
    first = solve(board, 6)
    second = solve(board, 6)
    assert first.solution == second.solution
    assert first.steps == second.steps


def test_steps_can_be_skipped():
    res = solve([[0] * 6 for _ in range(6)], 6, record_steps=False)
    assert res.ok
    assert res.steps == []


def test_count_solutions(template9):
    assert count_solutions([[0] * 6 for _ in range(6)], 6, limit=2) == 2
    template9[0][0] = 0
    template9[8][8] = 0
    assert count_solutions(template9, 9) == 1
    assert has_unique_solution(template9, 9)
    assert count_solutions([[0] * 9] * 8, 9) == 0


def test_count_solutions_sees_swappable_rows(template9):
    # rows 1 and 2 share a band, so with both cleared they can be exchanged
    template9[0] = [0] * 9
    template9[1] = [0] * 9
    assert count_solutions(template9, 9) == 2
    assert not has_unique_solution(template9, 9)


def test_logical_step_naked_single(template9):
    template9[4][4] = 0
    res = solve_one_logical_step(template9, 9)
    assert res.ok
    assert res.step["technique"] == "naked_single"
    assert (res.step["row"], res.step["col"], res.step["value"]) == (4, 4, 9)
    assert res.board[4][4] == 9
    assert template9[4][4] == 0


def test_logical_step_hidden_single(hidden_single9):
    res = solve_one_logical_step(hidden_single9, 9)
    assert res.ok
    assert res.step["technique"] == "hidden_single"
    assert (res.step["row"], res.step["col"], res.step["value"]) == (0, 0, 1)


def test_logical_step_never_guesses():
    res = solve_one_logical_step([[0] * 9 for _ in range(9)], 9)
    assert res.status is Status.NO_HINT
    assert res.step is None
