"""Constraint engine for 6x6, 9x9 and 12x12 Sudoku boards: generation, carving, validation, backtracking search and human-style hints."""

from .backtracking import count_solutions, has_unique_solution, iter_search, solve, solve_one_logical_step
from .carver import DIFFICULTY_FRACTIONS, carve_puzzle
from .config import load_config
from .generator import generate_solution
from .grid_core import (
    SUPPORTED_SIZES,
    BoxGeometry,
    check_board,
    completed_units,
    geometry_for,
    is_board_valid,
    is_complete_and_valid,
    is_valid_placement,
    sanity_check,
)
from .hints import HintLevel, next_hint
from .outcomes import Status
from .session import AutoSolver, PuzzleState, new_puzzle

__all__ = [
    "AutoSolver",
    "BoxGeometry",
    "DIFFICULTY_FRACTIONS",
    "HintLevel",
    "PuzzleState",
    "SUPPORTED_SIZES",
    "Status",
    "carve_puzzle",
    "check_board",
    "completed_units",
    "count_solutions",
    "generate_solution",
    "geometry_for",
    "has_unique_solution",
    "is_board_valid",
    "is_complete_and_valid",
    "is_valid_placement",
    "iter_search",
    "load_config",
    "new_puzzle",
    "next_hint",
    "sanity_check",
    "solve",
    "solve_one_logical_step",
]
