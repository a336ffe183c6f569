"""Collision detection and SRS rotation with wall kicks.

Rows above the board (negative ``y``) form the spawn buffer: cells there are
never considered colliding with the floor or with locked blocks, only with the
side walls.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional, Tuple

from .board import EMPTY, Board
from .config import HEIGHT, WIDTH
from .position import DIRECTION_OFFSETS, Position
from .tetromino import Tetromino, TetrominoType, normalize_rotation, shape_for


MOVE_DIRECTIONS = ("left", "right", "down")


def check_boundary_collision(piece: Tetromino) -> bool:
    """Return ``True`` if ``piece`` pokes through a wall or the floor."""

    for row, col in piece.cells():
        if row < 0:
            continue
        if row >= HEIGHT or col < 0 or col >= WIDTH:
            return True
    return False


def check_block_collision(board: Board, piece: Tetromino) -> bool:
    """Return ``True`` if ``piece`` overlaps a locked block on ``board``."""

    for row, col in piece.cells():
        if row < 0 or row >= HEIGHT:
            continue
        if 0 <= col < WIDTH and board[row, col] != EMPTY:
            return True
    return False


def has_collision(board: Board, piece: Tetromino) -> bool:
    return check_boundary_collision(piece) or check_block_collision(board, piece)


def _offsets(*pairs: Tuple[int, int]) -> Tuple[Position, ...]:
    return tuple(Position(x, y) for x, y in pairs)


# Super Rotation System kick offsets, keyed by (kick class, from, to).  ``y``
# grows downwards as on the board.  Offsets are tried in order and the first
# one that does not collide wins.
WALL_KICK_OFFSETS: Dict[Tuple[str, int, int], Tuple[Position, ...]] = {
    ("JLSTZ", 0, 1): _offsets((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    ("JLSTZ", 1, 0): _offsets((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    ("JLSTZ", 1, 2): _offsets((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    ("JLSTZ", 2, 1): _offsets((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    ("JLSTZ", 2, 3): _offsets((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
    ("JLSTZ", 3, 2): _offsets((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    ("JLSTZ", 3, 0): _offsets((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    ("JLSTZ", 0, 3): _offsets((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
    ("I", 0, 1): _offsets((0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)),
    ("I", 1, 0): _offsets((0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)),
    ("I", 1, 2): _offsets((0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)),
    ("I", 2, 1): _offsets((0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)),
    ("I", 2, 3): _offsets((0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)),
    ("I", 3, 2): _offsets((0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)),
    ("I", 3, 0): _offsets((0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)),
    ("I", 0, 3): _offsets((0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)),
}

NO_KICK: Tuple[Position, ...] = (Position(0, 0),)


def kick_class(piece_type: TetrominoType) -> str:
    """Return the wall-kick table name used by ``piece_type``."""

    if piece_type is TetrominoType.I:
        return "I"
    if piece_type is TetrominoType.O:
        return "O"
    return "JLSTZ"


def get_wall_kick_offsets(
    piece_type: TetrominoType, from_rotation: int, to_rotation: int
) -> Tuple[Position, ...]:
    """Return the ordered kick offsets for one rotation transition.

    ``O`` only ever gets the zero offset, as does any transition missing from
    the tables (e.g. a 180 degree turn).
    """

    return WALL_KICK_OFFSETS.get(
        (kick_class(TetrominoType(piece_type)), from_rotation, to_rotation), NO_KICK
    )


def create_rotated_piece(piece: Tetromino, new_rotation: int) -> Tetromino:
    """Return ``piece`` in ``new_rotation`` (wrapped into ``[0, 4)``) in place."""

    rotation = normalize_rotation(new_rotation)
    return replace(piece, shape=shape_for(piece.type, rotation), rotation=rotation)


def attempt_rotation(
    board: Board, piece: Tetromino, clockwise: bool = True
) -> Optional[Tetromino]:
    """Rotate ``piece`` a quarter turn, trying each wall kick in order.

    Returns the first non-colliding candidate, ``piece`` itself for ``O``, or
    ``None`` when every kick collides.
    """

    if piece.type is TetrominoType.O:
        return piece

    current = piece.rotation
    target = normalize_rotation(current + 1 if clockwise else current - 1)
    rotated = create_rotated_piece(piece, target)

    for offset in get_wall_kick_offsets(piece.type, current, target):
        candidate = replace(
            rotated,
            position=Position(piece.position.x + offset.x, piece.position.y + offset.y),
        )
        if not has_collision(board, candidate):
            return candidate
    return None


def can_move_piece(board: Board, piece: Tetromino, direction: str) -> bool:
    """Return ``True`` if ``piece`` can shift one cell towards ``direction``.

    Raises:
        ValueError: If ``direction`` is not ``left``, ``right`` or ``down``.
    """

    if direction not in MOVE_DIRECTIONS:
        raise ValueError(f"Unknown direction: {direction}")
    step = DIRECTION_OFFSETS[direction]
    return not has_collision(board, piece.moved(step.x, step.y))


def find_hard_drop_position(board: Board, piece: Tetromino) -> Tetromino:
    """Return ``piece`` moved down as far as it can go.

    A piece that is already resting comes back unchanged.
    """

    last_valid = piece
    candidate = piece
    while not has_collision(board, candidate):
        last_valid = candidate
        candidate = candidate.moved(0, 1)
    return last_valid


def can_spawn_piece(board: Board, piece: Tetromino) -> bool:
    return not has_collision(board, piece)
