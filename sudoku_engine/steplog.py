"""Persist solver step traces as JSON Lines (one SolveStep per line) so a separate tool can replay them."""

import json
from pathlib import Path

from types_sudoku import SolveStep

STEP_FIELDS = ("row", "col", "value", "action")


def save_steps_jsonl(steps: list[SolveStep], path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for step in steps:
            f.write(json.dumps({k: step[k] for k in STEP_FIELDS}) + "\n")
    return path


def load_steps_jsonl(path):
    """Return (steps, bad_lines). Blank lines are skipped; lines that are not JSON
    objects with the four step fields are counted as bad."""
    steps = []
    bad_lines = 0
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                rec = json.loads(line)
            except json.JSONDecodeError:
                bad_lines += 1
                continue
            if not isinstance(rec, dict) or any(k not in rec for k in STEP_FIELDS):
                bad_lines += 1
                continue
            steps.append({k: rec[k] for k in STEP_FIELDS})
    return steps, bad_lines


def replay_steps(board, steps):
    """Apply `steps` in order to a copy of `board` and return the resulting grid."""
    grid = [list(row) for row in board]
    for step in steps:
        grid[step["row"]][step["col"]] = step["value"] if step["action"] == "place" else 0
    return grid
