"""Create an animated GIF that replays a recorded solver step log over the starting board."""

# animate_gif.py
# Build an animated GIF from a puzzle snapshot and its SolveStep log.
# Usage (from the repo root):
#   python -m apps.cli.animate_gif --puzzle demo_export/puzzle.json \
#     --steps demo_export/steps.jsonl --out demo_export/solve.gif \
#     --size 900 --step_ms 100 --start_ms 800 --end_ms 1500 --every 1
#
# puzzle.json is written by demo_cli --export; it holds size, board and prefilled.
# Long traces can be thinned with --every K (always keeping the final frame).

import argparse
import json
import sys
from pathlib import Path

from apps.cli.board_renderer import render_board, step_caption
from sudoku_engine.grid_core import check_board
from sudoku_engine.steplog import load_steps_jsonl


def load_puzzle(path):
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return int(data["size"]), data["board"], data["prefilled"]


def build_frames(board, prefilled, n, steps, size=900, every=1, max_frames=None):
    """Return (frames, step_indices); index -1 marks the starting board."""
    grid = [list(row) for row in board]
    frames = [render_board(grid, prefilled, n, title="start", size=size)]
    picked = [-1]
    total = len(steps)
    every = max(1, int(every))
    for i, step in enumerate(steps):
        grid[step["row"]][step["col"]] = step["value"] if step["action"] == "place" else 0
        last = i == total - 1
        if (i + 1) % every != 0 and not last:
            continue
        if max_frames is not None and len(frames) >= max_frames and not last:
            continue
        frames.append(render_board(grid, prefilled, n, step=step, title=step_caption(step, i + 1, total), size=size))
        picked.append(i)
    return frames, picked


def animate(frames, out_path, step_ms=100, start_ms=800, end_ms=1500):
    durations = [step_ms] * len(frames)
    durations[0] = start_ms
    if len(frames) > 1:
        durations[-1] = max(durations[-1], end_ms)  # ensure last frame holds

    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    frames[0].save(
        out_path,
        save_all=True,
        append_images=frames[1:],
        duration=durations,
        loop=0,
        optimize=False,
        disposal=2,
    )
    print(f"[gif] wrote {out_path} with {len(frames)} frames.", flush=True)
    return out_path


def main(argv=None):
    """CLI entrypoint. Loads the puzzle snapshot and step log, renders one frame per (kept) step and saves the GIF to --out."""
    ap = argparse.ArgumentParser()
    ap.add_argument("--puzzle", type=str, default="demo_export/puzzle.json")
    ap.add_argument("--steps", type=str, default="demo_export/steps.jsonl")
    ap.add_argument("--out", type=str, default="demo_export/solve.gif")
    ap.add_argument("--size", type=int, default=900, help="board width in px")
    ap.add_argument("--step_ms", type=int, default=100)
    ap.add_argument("--start_ms", type=int, default=800)
    ap.add_argument("--end_ms", type=int, default=1500)
    ap.add_argument("--every", type=int, default=1, help="keep every K-th step")
    ap.add_argument("--max_frames", type=int, default=None)
    args = ap.parse_args(argv)

    n, board, prefilled = load_puzzle(args.puzzle)
    issues = check_board(board, n)
    if issues:
        print(f"[gif] puzzle snapshot is not a valid {n}x{n} board: {issues[:3]}", file=sys.stderr)
        return 2
    steps, bad = load_steps_jsonl(args.steps)
    if bad:
        print(f"[gif] skipped {bad} unparseable step line(s)", file=sys.stderr)
    frames, _ = build_frames(board, prefilled, n, steps, size=args.size, every=args.every, max_frames=args.max_frames)
    animate(frames, args.out, step_ms=args.step_ms, start_ms=args.start_ms, end_ms=args.end_ms)
    return 0


if __name__ == "__main__":
    sys.exit(main())
