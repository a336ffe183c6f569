"""Text helpers for inspecting boards while debugging."""

from __future__ import annotations

from typing import List, Optional

from .board import PIECE_VALUES, VALUE_TYPES, Board
from .config import HEIGHT, WIDTH
from .tetromino import Tetromino


def render_grid(board: Board, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return nested lists of cell codes showing ``active`` over ``board``.

    Boards are read-only, so this builds plain lists that a caller may edit
    freely.  Piece cells still above row 0 are left out.
    """

    grid = [[int(cell) for cell in row] for row in board]
    if active is not None:
        for r, c in active.cells():
            if 0 <= r < HEIGHT and 0 <= c < WIDTH:
                grid[r][c] = PIECE_VALUES[active.type]
    return grid


def format_grid(grid: List[List[int]]) -> str:
    """Return ``grid`` as text, one letter per occupied cell and ``.`` otherwise."""

    return "\n".join(
        "".join(VALUE_TYPES[cell].value if cell else "." for cell in row) for row in grid
    )
