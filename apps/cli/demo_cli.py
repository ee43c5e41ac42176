"""End-to-end demo: generate and carve a puzzle, walk a few hints, then auto-solve it (optionally animated) and export the step log for replay."""

# demo_cli.py
# - Builds a new puzzle of the requested size/difficulty
# - Applies up to --hints placement hints (stops at the first advisory hint)
# - Then applies up to --logical no-guess steps
# - Then reveals up to --reveal cells straight from the solution
# - Optionally auto-solves with the cooperative solver, printing each replayed step
# - Optionally exports puzzle.json + steps.jsonl for animate_gif
#
# Usage (from the repo root):
#   python -m apps.cli.demo_cli --size 9 --difficulty easy --seed 7 --hints 3 --solve
#   python -m apps.cli.demo_cli --size 6 --difficulty hard --solve --animate --speed 20 --export demo_export

import argparse
import asyncio
import json
import random
import sys
from pathlib import Path

from sudoku_engine import AutoSolver, load_config, new_puzzle, next_hint, solve_one_logical_step
from sudoku_engine.grid_core import rc_to_key
from sudoku_engine.steplog import save_steps_jsonl


def walk_hints(state, count, cfg):
    """Apply up to `count` placement hints to `state`; return the hints that were shown."""
    shown = []
    for _ in range(count):
        res = next_hint(
            state.effective_board(),
            state.size,
            deficiency_threshold=cfg.hints.deficiency_threshold,
            min_candidate_threshold=cfg.hints.min_candidate_threshold,
        )
        if not res.ok:
            break
        hint = dict(res.hint)
        hint["level"] = int(hint["level"])
        shown.append(hint)
        if not state.apply_hint(res.hint):
            break
    return shown


def walk_logical(state, count):
    """Apply up to `count` no-guess placements (naked/hidden singles)."""
    applied = []
    for _ in range(count):
        res = solve_one_logical_step(state.effective_board(), state.size)
        if not res.ok:
            break
        step = res.step
        state.place(step["row"], step["col"], step["value"])
        applied.append(step)
    return applied


def run_solver(state, cfg, animate, speed=None):
    solver = AutoSolver.from_config(cfg)
    if speed is not None:
        solver.set_solve_speed(speed)

    def on_step(step):
        key = rc_to_key(step["row"], step["col"])
        if step["action"] == "place":
            print(f"[demo] place {step['value']} at {key}", flush=True)
        else:
            print(f"[demo] clear {key}", flush=True)

    return asyncio.run(solver.solve(state, on_step=on_step if animate else None, animate=animate))


def main(args):
    cfg = load_config(args.config, **{"generation.mode": args.mode, "verbose": args.verbose or None})
    rng = random.Random(args.seed)
    res = new_puzzle(args.size, args.difficulty, rng=rng, config=cfg)
    if not res.ok:
        print(json.dumps({"status": res.status.value, "issues": res.issues}, indent=2))
        return 2
    state = res.state
    hints = walk_hints(state, args.hints, cfg)
    logical = walk_logical(state, args.logical)
    revealed = []
    for _ in range(args.reveal):
        res_hint = state.reveal_cell(rng, max_hints=cfg.hints.max_hints)
        if not res_hint.ok:
            break
        revealed.append({k: res_hint.hint[k] for k in ("row", "col", "number")})
    snapshot = state.effective_board()

    payload = {
        "size": state.size,
        "difficulty": args.difficulty,
        "strategy": res.strategy,
        "puzzle": state.board,
        "hints": hints,
        "logical_steps": logical,
        "revealed": revealed,
        "board_after_hints": snapshot,
        "completed_units": [f"{kind} {i + 1}" for kind, i in state.completed_units()],
    }
    steps = []
    if args.solve:
        result = run_solver(state, cfg, animate=args.animate, speed=args.speed)
        steps = result.steps
        payload["solve"] = {
            "status": result.status.value,
            "steps": len(steps),
            "solved": state.is_solved(),
            "issues": result.issues,
        }

    if args.export:
        export_dir = Path(args.export)
        export_dir.mkdir(parents=True, exist_ok=True)
        with open(export_dir / "puzzle.json", "w", encoding="utf-8") as f:
            json.dump({"size": state.size, "board": snapshot, "prefilled": state.prefilled}, f)
        save_steps_jsonl(steps, export_dir / "steps.jsonl")
        payload["export"] = str(export_dir)

    print(json.dumps(payload, indent=2))
    return 0


def build_parser():
    ap = argparse.ArgumentParser()
    ap.add_argument("--size", type=int, default=9, choices=[6, 9, 12])
    ap.add_argument("--difficulty", type=str, default="easy", choices=["easy", "medium", "hard"])
    ap.add_argument("--mode", type=str, default=None, choices=["template", "random"])
    ap.add_argument("--seed", type=int, default=123)
    ap.add_argument("--hints", type=int, default=3)
    ap.add_argument("--logical", type=int, default=0, help="then apply up to N naked/hidden singles")
    ap.add_argument("--reveal", type=int, default=0, help="then reveal up to N solution cells (capped by hints.max_hints)")
    ap.add_argument("--solve", action="store_true")
    ap.add_argument("--animate", action="store_true", help="replay the search step by step")
    ap.add_argument("--speed", type=int, default=None, help="replay delay per step in ms (10..1000)")
    ap.add_argument("--export", type=str, default=None, help="directory for puzzle.json + steps.jsonl")
    ap.add_argument("--config", type=str, default=None, help="YAML file merged over the defaults")
    ap.add_argument("--verbose", action="store_true")
    return ap


if __name__ == "__main__":
    sys.exit(main(build_parser().parse_args()))
