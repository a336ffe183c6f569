"""Piece movement built on the collision helpers.

Nothing here raises for a blocked move: the unmodified piece is returned
instead so callers can apply the result unconditionally.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .board import Board
from .collision import (
    MOVE_DIRECTIONS,
    attempt_rotation,
    can_move_piece,
    find_hard_drop_position,
)
from .position import DIRECTION_OFFSETS, Position
from .tetromino import Tetromino


def move_piece(board: Board, piece: Tetromino, direction: str) -> Tetromino:
    """Shift ``piece`` one cell towards ``direction`` if the move is legal."""

    if not can_move_piece(board, piece, direction):
        return piece
    step = DIRECTION_OFFSETS[direction]
    return piece.moved(step.x, step.y)


def move_piece_left(board: Board, piece: Tetromino) -> Tetromino:
    return move_piece(board, piece, "left")


def move_piece_right(board: Board, piece: Tetromino) -> Tetromino:
    return move_piece(board, piece, "right")


def move_piece_down(board: Board, piece: Tetromino) -> Tetromino:
    """Soft-drop ``piece`` by one row if nothing is underneath."""

    return move_piece(board, piece, "down")


def rotate_piece(board: Board, piece: Tetromino) -> Tetromino:
    """Rotate clockwise with wall kicks, or return ``piece`` if blocked."""

    rotated = attempt_rotation(board, piece, clockwise=True)
    return rotated if rotated is not None else piece


def rotate_piece_counterclockwise(board: Board, piece: Tetromino) -> Tetromino:
    rotated = attempt_rotation(board, piece, clockwise=False)
    return rotated if rotated is not None else piece


@dataclass(frozen=True)
class HardDropResult:
    piece: Tetromino
    drop_distance: int


def hard_drop_piece(board: Board, piece: Tetromino) -> HardDropResult:
    """Move ``piece`` to its resting row and report how far it fell."""

    dropped = find_hard_drop_position(board, piece)
    return HardDropResult(dropped, dropped.position.y - piece.position.y)


def can_piece_move_anywhere(board: Board, piece: Tetromino) -> bool:
    """Return ``True`` if any shift or quarter turn is still possible.

    Used for lock-delay decisions: a piece that can do nothing is locked.
    """

    return (
        can_move_piece(board, piece, "left")
        or can_move_piece(board, piece, "right")
        or can_move_piece(board, piece, "down")
        or attempt_rotation(board, piece, clockwise=True) is not None
        or attempt_rotation(board, piece, clockwise=False) is not None
    )


def should_lock_piece(board: Board, piece: Tetromino) -> bool:
    return not can_move_piece(board, piece, "down")


def get_valid_moves(board: Board, piece: Tetromino) -> List[Position]:
    """Return the positions reachable by a single legal left/right/down shift."""

    moves = []
    for direction in MOVE_DIRECTIONS:
        if can_move_piece(board, piece, direction):
            step = DIRECTION_OFFSETS[direction]
            moves.append(Position(piece.position.x + step.x, piece.position.y + step.y))
    return moves


def get_ghost_piece(board: Board, piece: Tetromino) -> Tetromino:
    """Return where ``piece`` would land, for a landing preview."""

    return find_hard_drop_position(board, piece)
