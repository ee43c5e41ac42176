from __future__ import annotations

from typing import Optional

from types_sudoku import Grid, Mask, SolveStep

from sudoku_engine.grid_core import geometry_for, rc_to_key

"""Render an NxN board (6, 9 or 12) to an image with box borders, givens vs. entered digits, and an optional highlighted solver step. Used to build replay frames."""


# board_renderer.py
# Draw a board state, optionally highlighting the SolveStep that produced it.
from PIL import Image, ImageDraw, ImageFont

SIZE = 900
TITLE_H = 60


def load_font(size):
    try:
        return ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default(size=size)


def cell_rect(r, c, cell, pad=2, top=TITLE_H):
    x0 = c * cell + pad
    y0 = top + r * cell + pad
    x1 = (c + 1) * cell - pad
    y1 = top + (r + 1) * cell - pad
    return (x0, y0, x1, y1)


def step_caption(step: SolveStep, index: Optional[int] = None, total: Optional[int] = None) -> str:
    prefix = f"#{index}/{total}  " if index is not None and total is not None else ""
    if step["action"] == "place":
        return f"{prefix}place {step['value']} at {rc_to_key(step['row'], step['col'])}"
    return f"{prefix}backtrack {rc_to_key(step['row'], step['col'])}"


def render_board(
    board: Grid,
    prefilled: Mask,
    n: int,
    step: Optional[SolveStep] = None,
    title: str = "",
    size: int = SIZE,
) -> Image.Image:
    """Return an RGB image of `board`; givens are black, entered digits blue, and the
    cell touched by `step` is green for a placement and red for a backtrack."""
    geometry = geometry_for(n)
    cell = size // n
    grid_px = cell * n
    im = Image.new("RGB", (grid_px, grid_px + TITLE_H), "white")
    d = ImageDraw.Draw(im)

    if step is not None:
        fill = (144, 238, 144) if step["action"] == "place" else (255, 160, 160)
        d.rectangle(cell_rect(step["row"], step["col"], cell, pad=1), fill=fill)

    # thin lines for cells, heavy lines on box borders
    for i in range(n + 1):
        vw = 4 if i % geometry.box_width == 0 else 1
        hw = 4 if i % geometry.box_height == 0 else 1
        x = min(i * cell, grid_px - 1)
        y = TITLE_H + min(i * cell, grid_px - 1)
        d.line([(x, TITLE_H), (x, TITLE_H + grid_px)], fill=(0, 0, 0), width=vw)
        d.line([(0, y), (grid_px, y)], fill=(0, 0, 0), width=hw)

    font = load_font(int(cell * 0.55))
    for r in range(n):
        for c in range(n):
            v = board[r][c]
            if v == 0:
                continue
            x0, y0, x1, y1 = cell_rect(r, c, cell)
            color = (0, 0, 0) if prefilled[r][c] else (30, 80, 200)
            d.text(((x0 + x1) // 2, (y0 + y1) // 2), str(v), fill=color, font=font, anchor="mm")

    if title:
        ftitle = load_font(28)
        d.rectangle((0, 0, grid_px, TITLE_H - 4), fill=(0, 0, 0))
        d.text((12, (TITLE_H - 4) // 2), title, fill=(255, 255, 255), font=ftitle, anchor="lm")
    return im
