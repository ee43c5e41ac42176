# sudoku_tool_api.py
# FastAPI wrapper for the engine operations.
# Run from the repo root with: uvicorn apps.api.sudoku_tool_api:app --reload
# Set SUDOKU_ENGINE_CONFIG=/path/to/config.yaml to override the packaged defaults.
import os
import random
from typing import Any, Dict, List, Literal, Optional

from fastapi import FastAPI
from pydantic import BaseModel

from sudoku_engine import (
    carve_puzzle,
    generate_solution,
    is_board_valid,
    is_complete_and_valid,
    is_valid_placement,
    load_config,
    new_puzzle,
    next_hint,
    sanity_check,
    solve,
    solve_one_logical_step,
)
from sudoku_engine.grid_core import check_board, completed_units
from sudoku_engine.outcomes import status_for_issues

CONFIG = load_config(os.environ.get("SUDOKU_ENGINE_CONFIG"))

app = FastAPI(title="Sudoku Engine Tool API")


class GenerateRequest(BaseModel):
    size: int
    mode: Optional[Literal["template", "random"]] = None
    seed: Optional[int] = None


class CarveRequest(BaseModel):
    solution: List[List[int]]
    difficulty: str
    seed: Optional[int] = None
    ensure_unique: Optional[bool] = None


class NewPuzzleRequest(BaseModel):
    size: int
    difficulty: str
    seed: Optional[int] = None


class BoardRequest(BaseModel):
    board: List[List[int]]
    size: int


class SolveRequest(BoardRequest):
    include_steps: bool = False


class ValidateRequest(BoardRequest):
    row: Optional[int] = None
    col: Optional[int] = None
    value: Optional[int] = None


class SanityRequest(BaseModel):
    original: List[List[int]]
    current: List[List[int]]
    size: int


def _rng(seed: Optional[int]) -> Optional[random.Random]:
    return random.Random(seed) if seed is not None else None


def _payload(outcome, **fields) -> Dict[str, Any]:
    out = {"status": outcome.status.value, "issues": outcome.issues}
    out.update(fields)
    return out


def _log(msg: str) -> None:
    if CONFIG.verbose:
        print(f"[api] {msg}", flush=True)


@app.post("/generate")
def api_generate(req: GenerateRequest):
    mode = req.mode or CONFIG.generation.mode
    res = generate_solution(req.size, mode=mode, rng=_rng(req.seed), max_nodes=CONFIG.generation.max_nodes)
    _log(f"generate size={req.size} mode={mode} -> {res.status.value}")
    return _payload(res, solution=res.solution, strategy=res.strategy)


@app.post("/carve")
def api_carve(req: CarveRequest):
    ensure_unique = CONFIG.carving.ensure_unique if req.ensure_unique is None else req.ensure_unique
    res = carve_puzzle(
        req.solution,
        req.difficulty,
        rng=_rng(req.seed),
        fractions=dict(CONFIG.difficulty),
        ensure_unique=bool(ensure_unique),
    )
    return _payload(res, board=res.board, prefilled=res.prefilled, removed=res.removed, target=res.target)


@app.post("/new_puzzle")
def api_new_puzzle(req: NewPuzzleRequest):
    res = new_puzzle(req.size, req.difficulty, rng=_rng(req.seed), config=CONFIG)
    state = res.state
    if state is None:
        return _payload(res)
    return _payload(
        res,
        board=state.board,
        prefilled=state.prefilled,
        solution=state.solution,
        strategy=res.strategy,
    )


@app.post("/validate")
def api_validate(req: ValidateRequest):
    issues = check_board(req.board, req.size)
    if issues:
        return {"status": status_for_issues(issues).value, "issues": issues}
    out = {
        "status": "ok",
        "issues": [],
        "board_valid": is_board_valid(req.board, req.size),
        "complete": is_complete_and_valid(req.board, req.size),
        "completed_units": [{"unit": kind, "index": i} for kind, i in completed_units(req.board, req.size)],
    }
    if req.row is not None and req.col is not None and req.value is not None:
        out["placement_valid"] = is_valid_placement(req.board, req.row, req.col, req.value, req.size)
    return out


@app.post("/solve")
def api_solve(req: SolveRequest):
    res = solve(req.board, req.size, record_steps=req.include_steps)
    _log(f"solve size={req.size} -> {res.status.value} ({len(res.steps)} steps)")
    fields = {"solution": res.solution}
    if req.include_steps:
        fields["steps"] = res.steps
    return _payload(res, **fields)


@app.post("/logical_step")
def api_logical_step(req: BoardRequest):
    res = solve_one_logical_step(req.board, req.size)
    return _payload(res, step=res.step, board=res.board)


@app.post("/next_hint")
def api_next_hint(req: BoardRequest):
    res = next_hint(
        req.board,
        req.size,
        deficiency_threshold=CONFIG.hints.deficiency_threshold,
        min_candidate_threshold=CONFIG.hints.min_candidate_threshold,
    )
    return _payload(res, hint=res.hint)


@app.post("/sanity_check")
def api_sanity(req: SanityRequest):
    return sanity_check(req.original, req.current, req.size)
