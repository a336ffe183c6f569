"""Board representation for the Tetris playfield.

A board is a ``(HEIGHT, WIDTH)`` :mod:`numpy` array of ``uint8`` where ``0``
marks an empty cell and any other value is the :data:`PIECE_VALUES` code of
the tetromino type locked there.  Boards are treated as persistent values:
every function returning a board hands back a fresh, read-only array, or the
very same object when nothing changed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .config import HEIGHT, WIDTH
from .tetromino import Tetromino, TetrominoType


Board = NDArray[np.uint8]

# Mapping from ``TetrominoType`` to the integer stored in the grid.  The
# specific numeric values are not important as long as ``0`` represents an empty
# cell.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(TetrominoType)}
VALUE_TYPES = {value: t for t, value in PIECE_VALUES.items()}

EMPTY = 0

# Columns covered by a freshly spawned piece; blocks here in the two top rows
# end the game.
SPAWN_FOOTPRINT = slice(WIDTH // 2 - 2, WIDTH // 2 + 2)
SPAWN_ROWS = slice(0, 2)


def _freeze(grid: Board) -> Board:
    grid.flags.writeable = False
    return grid


def create_empty_board() -> Board:
    """Return a read-only board with every cell empty."""

    return _freeze(np.zeros((HEIGHT, WIDTH), dtype=np.uint8))


def board_from_rows(rows: Sequence[Sequence[object]]) -> Board:
    """Build a board from nested rows of cell descriptions.

    Cells may be ``None``, ``0``, ``""`` or ``"."`` for empty, or a
    :class:`TetrominoType` (or its letter) for an occupied cell.  Fewer than
    ``HEIGHT`` rows are padded with empty rows at the top so fixtures only
    need to spell out the bottom of the stack.

    Raises:
        ValueError: If a row has the wrong width, there are too many rows, or
            a cell cannot be interpreted.
    """

    if len(rows) > HEIGHT:
        raise ValueError(f"Expected at most {HEIGHT} rows, got {len(rows)}")
    grid = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
    offset = HEIGHT - len(rows)
    for r, row in enumerate(rows):
        if len(row) != WIDTH:
            raise ValueError(f"Row {r} has {len(row)} cells, expected {WIDTH}")
        for c, cell in enumerate(row):
            if cell is None or cell in (0, "", "."):
                continue
            try:
                grid[offset + r, c] = PIECE_VALUES[TetrominoType(cell)]
            except ValueError:
                raise ValueError(f"Unknown cell value {cell!r} at ({r}, {c})") from None
    return _freeze(grid)


def get_cell(board: Board, row: int, col: int) -> Optional[TetrominoType]:
    """Return the tetromino type at ``(row, col)`` or ``None`` when empty.

    Raises:
        IndexError: If the coordinates are outside the board.
    """

    if 0 <= row < HEIGHT and 0 <= col < WIDTH:
        return VALUE_TYPES.get(int(board[row, col]))
    raise IndexError("Cell out of bounds")


def is_valid_position(board: Board, piece: Tetromino) -> bool:
    """Return ``True`` if ``piece`` fits on ``board`` where it stands.

    Cells above the board (negative rows) form the spawn buffer and are only
    checked horizontally; cells below the floor or beside the walls are
    invalid, and cells on the board must be empty.
    """

    for row, col in piece.cells():
        if col < 0 or col >= WIDTH or row >= HEIGHT:
            return False
        if row < 0:
            continue
        if board[row, col] != EMPTY:
            return False
    return True


def place_piece(board: Board, piece: Tetromino) -> Board:
    """Return a new board with ``piece`` stamped onto it.

    Cells outside the visible board are dropped silently.  ``board`` itself is
    never modified.
    """

    new_board = board.copy()
    value = np.uint8(PIECE_VALUES[piece.type])
    for row, col in piece.cells():
        if 0 <= row < HEIGHT and 0 <= col < WIDTH:
            new_board[row, col] = value
    return _freeze(new_board)


def is_row_complete(row: Iterable[int]) -> bool:
    """Return ``True`` if every cell in ``row`` is occupied."""

    return bool(np.all(np.asarray(row) != EMPTY))


def find_complete_rows(board: Board) -> List[int]:
    """Return the indices of full rows in ascending order."""

    full_rows = np.all(board != EMPTY, axis=1)
    return [int(i) for i in np.flatnonzero(full_rows)]


@dataclass(frozen=True, eq=False)
class LineClearResult:
    """Outcome of :func:`clear_lines`."""

    new_board: Board
    lines_cleared: int
    cleared_row_indices: Tuple[int, ...]


def clear_lines(board: Board) -> LineClearResult:
    """Remove complete rows and let the rows above fall into their place.

    Empty rows are added at the top for each removed row.  When no row is
    complete the original ``board`` object is returned unchanged.
    """

    complete = find_complete_rows(board)
    if not complete:
        return LineClearResult(board, 0, ())

    keep = np.ones(board.shape[0], dtype=bool)
    keep[complete] = False
    new_rows = np.zeros((len(complete), board.shape[1]), dtype=board.dtype)
    new_board = np.vstack((new_rows, board[keep]))
    return LineClearResult(_freeze(new_board), len(complete), tuple(complete))


def is_game_over(board: Board) -> bool:
    """Return ``True`` if the spawn area in the top two rows is blocked.

    Only the columns a new piece spawns into are considered, so stacks near
    the side walls may reach the top rows without ending the game.
    """

    return bool(np.any(board[SPAWN_ROWS, SPAWN_FOOTPRINT] != EMPTY))


def get_column_heights(board: Board) -> List[int]:
    """Return the stack height of every column (``0`` for empty columns)."""

    occupied = board != EMPTY
    has_block = occupied.any(axis=0)
    top = occupied.argmax(axis=0)
    heights = np.where(has_block, board.shape[0] - top, 0)
    return [int(h) for h in heights]
