"""Puzzle session state (givens, player inputs, effective board, undo) and the cooperative auto-solver that searches first and then replays its recorded steps at a configurable pace."""

# session.py
# Two stages share one step log: the search (a generator drained cooperatively on the
# event loop) records SolveSteps, and the replay applies them to the PuzzleState one
# by one with a delay between them. Only one auto-solve may run per solver at a time.
from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass, field
from typing import Callable, Optional

from types_sudoku import Grid, Hint, Mask, SolveStep

from .backtracking import iter_search
from .carver import carve_puzzle
from .config import DotDict, load_config
from .generator import generate_solution
from .grid_core import (
    Cell,
    clone_grid,
    completed_units,
    conflicts,
    empty_grid,
    in_bounds,
    is_complete_and_valid,
    rc_to_key,
)
from .hints import HintLevel
from .outcomes import HintResult, Outcome, SolveResult, Status


@dataclass
class PuzzleState:
    size: int
    board: Grid
    solution: Grid
    prefilled: Mask
    user_inputs: Grid
    history: list[tuple[int, int, int]] = field(default_factory=list)  # (row, col, previous value)
    hints_used: int = 0
    solving: bool = False  # an auto-solve is writing into this session

    @classmethod
    def start(cls, solution: Grid, board: Grid, prefilled: Mask) -> "PuzzleState":
        n = len(solution)
        return cls(
            size=n,
            board=clone_grid(board),
            solution=clone_grid(solution),
            prefilled=[list(row) for row in prefilled],
            user_inputs=empty_grid(n),
        )

    def effective_board(self) -> Grid:
        """Givens merged with the player's entries."""
        n = self.size
        return [
            [self.board[r][c] if self.prefilled[r][c] else self.user_inputs[r][c] for c in range(n)]
            for r in range(n)
        ]

    def is_given(self, row: int, col: int) -> bool:
        return bool(self.prefilled[row][col])

    def place(self, row: int, col: int, value: int) -> bool:
        """Enter `value` (0 clears) in an open cell; givens and out-of-range input are refused."""
        if not in_bounds(row, col, self.size) or not 0 <= value <= self.size:
            return False
        if self.is_given(row, col):
            return False
        self.history.append((row, col, self.user_inputs[row][col]))
        self.user_inputs[row][col] = value
        return True

    def clear(self, row: int, col: int) -> bool:
        return self.place(row, col, 0)

    def undo(self) -> bool:
        if not self.history:
            return False
        row, col, previous = self.history.pop()
        self.user_inputs[row][col] = previous
        return True

    def conflicts(self) -> list[Cell]:
        """Player-entered cells that clash with another value in their row, column or box."""
        return [(r, c) for r, c in conflicts(self.effective_board(), self.size) if not self.prefilled[r][c]]

    def error_count(self) -> int:
        return len(self.conflicts())

    def is_solved(self) -> bool:
        return is_complete_and_valid(self.effective_board(), self.size)

    def apply_hint(self, hint: Optional[Hint]) -> bool:
        """Place a hint's value; advisory hints (no `number`) are not auto-fillable."""
        if not hint or "number" not in hint:
            return False
        return self.place(hint["row"], hint["col"], hint["number"])

    def apply_step(self, step: SolveStep) -> None:
        # replay writes straight into the inputs and is not recorded for undo
        if not self.prefilled[step["row"]][step["col"]]:
            self.user_inputs[step["row"]][step["col"]] = step["value"] if step["action"] == "place" else 0

    def fill_from(self, grid: Grid) -> None:
        for r in range(self.size):
            for c in range(self.size):
                if not self.prefilled[r][c]:
                    self.user_inputs[r][c] = grid[r][c]

    def completed_units(self, row: Optional[int] = None, col: Optional[int] = None) -> list[tuple[str, int]]:
        return completed_units(self.effective_board(), self.size, row, col)

    def reveal_cell(self, rng: Optional[random.Random] = None, max_hints: int = 3) -> HintResult:
        """Basic hint: copy the stored solution into a random open, empty cell.

        At most `max_hints` reveals per session; the reveal is not recorded for undo.
        """
        if self.hints_used >= max_hints:
            return HintResult(status=Status.NO_HINT, issues=[{"type": "hint_limit", "max_hints": max_hints}])
        open_cells = [
            (r, c)
            for r in range(self.size)
            for c in range(self.size)
            if not self.prefilled[r][c] and self.user_inputs[r][c] == 0
        ]
        if not open_cells:
            return HintResult(status=Status.NO_HINT, issues=[{"type": "no_empty_cell"}])
        r, c = (rng or random.Random()).choice(open_cells)
        value = self.solution[r][c]
        if value == 0:
            return HintResult(
                status=Status.INVALID_BOARD,
                issues=[{"type": "incomplete_solution", "cell": rc_to_key(r, c)}],
            )
        self.user_inputs[r][c] = value
        self.hints_used += 1
        return HintResult(
            hint={
                "type": "reveal",
                "level": HintLevel.EASY,
                "row": r,
                "col": c,
                "number": value,
                "message": f"{value} goes in (row {r + 1}, column {c + 1}).",
                "description": "Revealed from the solution.",
            }
        )


@dataclass
class NewPuzzleResult(Outcome):
    state: Optional[PuzzleState] = None
    strategy: str = ""


def new_puzzle(
    n: int,
    difficulty: str,
    rng: Optional[random.Random] = None,
    config: Optional[DotDict] = None,
) -> NewPuzzleResult:
    """Generate a solution, carve it for `difficulty` and wrap both in a fresh PuzzleState."""
    cfg = config or load_config()
    gen = generate_solution(
        n,
        mode=cfg.generation.mode,
        rng=rng,
        max_nodes=cfg.generation.max_nodes,
        verbose=bool(cfg.verbose),
    )
    if not gen.ok:
        return NewPuzzleResult(status=gen.status, issues=gen.issues)
    carved = carve_puzzle(
        gen.solution,
        difficulty,
        rng=rng,
        fractions=dict(cfg.difficulty),
        ensure_unique=bool(cfg.carving.ensure_unique),
        verbose=bool(cfg.verbose),
    )
    if not carved.ok:
        return NewPuzzleResult(status=carved.status, issues=carved.issues)
    state = PuzzleState.start(gen.solution, carved.board, carved.prefilled)
    return NewPuzzleResult(state=state, strategy=gen.strategy)


class AutoSolver:
    """Single-flight auto-solver with cooperative stop and paced replay."""

    def __init__(
        self,
        step_delay_ms: int = 100,
        min_delay_ms: int = 10,
        max_delay_ms: int = 1000,
        yield_every: int = 64,
        verbose: bool = False,
    ):
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms
        self.step_delay_ms = step_delay_ms
        self.set_solve_speed(step_delay_ms)
        self.yield_every = max(1, int(yield_every))
        self.verbose = verbose
        self.solving = False
        self._stop_requested = False

    @classmethod
    def from_config(cls, cfg: DotDict) -> "AutoSolver":
        anim = cfg.animation
        return cls(
            step_delay_ms=anim.step_delay_ms,
            min_delay_ms=anim.min_delay_ms,
            max_delay_ms=anim.max_delay_ms,
            yield_every=anim.yield_every,
            verbose=bool(cfg.verbose),
        )

    def set_solve_speed(self, delay_ms: int) -> int:
        self.step_delay_ms = max(self.min_delay_ms, min(self.max_delay_ms, int(delay_ms)))
        return self.step_delay_ms

    def is_solving(self) -> bool:
        return self.solving

    def stop(self) -> None:
        if self.solving:
            self._stop_requested = True
            self._log("stop requested")

    def _log(self, msg: str) -> None:
        if self.verbose:
            print(f"[autosolve] {msg}", flush=True)

    async def solve(
        self,
        state: PuzzleState,
        on_progress: Optional[Callable[[int], None]] = None,
        on_step: Optional[Callable[[SolveStep], None]] = None,
        on_complete: Optional[Callable[[Grid], None]] = None,
        animate: bool = True,
    ) -> SolveResult:
        """Solve the session's effective board and write the result into its inputs.

        Returns BUSY when this solver, or any solver, is already working on `state`;
        INVALID_BOARD when the current entries already clash; UNSOLVABLE when no
        completion exists; STOPPED when `stop()` was called. `on_complete` only runs
        for a finished solve.
        """
        if self.solving or state.solving:
            self._log("already solving; request rejected")
            return SolveResult(status=Status.BUSY)
        self.solving = True
        state.solving = True
        self._stop_requested = False
        try:
            return await self._run(state, on_progress, on_step, on_complete, animate)
        finally:
            self.solving = False
            state.solving = False
            self._stop_requested = False

    async def _run(self, state, on_progress, on_step, on_complete, animate) -> SolveResult:
        n = state.size
        board = state.effective_board()
        bad = conflicts(board, n)
        if bad:
            self._log(f"board has {len(bad)} conflicting cell(s); not solving")
            return SolveResult(
                status=Status.INVALID_BOARD,
                issues=[{"type": "conflict", "cell": rc_to_key(r, c), "value": board[r][c]} for r, c in bad],
            )

        steps: list[SolveStep] = []
        solutions: list[Grid] = []
        last = -1
        for i, pct in enumerate(iter_search(board, n, steps, solutions)):
            if on_progress is not None and pct != last:
                on_progress(pct)
            last = pct
            if (i + 1) % self.yield_every == 0:
                await asyncio.sleep(0)
                if self._stop_requested:
                    self._log(f"stopped during search after {len(steps)} step(s)")
                    return SolveResult(status=Status.STOPPED, steps=steps)
        if not solutions:
            self._log("no completion exists")
            return SolveResult(status=Status.UNSOLVABLE, steps=steps)
        solution = solutions[0]
        self._log(f"search finished with {len(steps)} step(s)")

        if not animate:
            state.fill_from(solution)
        else:
            total = len(steps)
            for i, step in enumerate(steps):
                if self._stop_requested:
                    self._log(f"stopped during replay at step {i}/{total}")
                    return SolveResult(status=Status.STOPPED, steps=steps)
                state.apply_step(step)
                if on_step is not None:
                    on_step(step)
                if on_progress is not None:
                    on_progress(round((i + 1) * 100 / total))
                if i < total - 1:
                    await asyncio.sleep(self.step_delay_ms / 1000)

        if on_complete is not None:
            on_complete(solution)
        return SolveResult(solution=solution, steps=steps)
