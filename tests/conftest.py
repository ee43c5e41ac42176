# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "apps", "sudoku_engine" and "types_sudoku" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sudoku_engine.generator import TEMPLATES  # noqa: E402


@pytest.fixture
def template9():
    return [row[:] for row in TEMPLATES[9]]


@pytest.fixture
def unsolvable9():
    # (0,0) and (0,1) both need 1: row 0 lacks {1, 2}, and column 0 and 1 already hold a 2
    board = [[0] * 9 for _ in range(9)]
    board[0] = [0, 0, 3, 4, 5, 6, 7, 8, 9]
    board[3][0] = 2
    board[6][1] = 2
    return board


@pytest.fixture
def hidden_single9():
    # digit 1 can only go in r1c1 although that cell has every candidate
    board = [[0] * 9 for _ in range(9)]
    board[1][3] = 1
    board[2][6] = 1
    board[4][1] = 1
    board[7][2] = 1
    return board
