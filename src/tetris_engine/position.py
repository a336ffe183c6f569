"""Integer 2D coordinates used for piece placement.

``x`` grows to the right (columns) and ``y`` grows downwards (rows), matching
the board's row-major layout.  Positions are immutable; every helper returns a
new value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Column/row coordinate of a piece's 4x4 bounding box."""

    x: int
    y: int


# Unit steps for the named movement directions.
DIRECTION_OFFSETS = {
    "left": Position(-1, 0),
    "right": Position(1, 0),
    "down": Position(0, 1),
    "up": Position(0, -1),
}


def create_position(x: int, y: int) -> Position:
    return Position(x, y)


def add_positions(pos1: Position, pos2: Position) -> Position:
    return Position(pos1.x + pos2.x, pos1.y + pos2.y)


def subtract_positions(pos1: Position, pos2: Position) -> Position:
    return Position(pos1.x - pos2.x, pos1.y - pos2.y)


def are_positions_equal(pos1: Position, pos2: Position) -> bool:
    return pos1.x == pos2.x and pos1.y == pos2.y


def clone_position(position: Position) -> Position:
    return Position(position.x, position.y)


def move_position(position: Position, direction: str, distance: int = 1) -> Position:
    """Return ``position`` shifted ``distance`` cells towards ``direction``.

    ``direction`` is one of ``"left"``, ``"right"``, ``"down"`` or ``"up"``.
    Unknown directions yield an unmoved copy.
    """

    step = DIRECTION_OFFSETS.get(direction)
    if step is None:
        return clone_position(position)
    return Position(position.x + step.x * distance, position.y + step.y * distance)


def manhattan_distance(pos1: Position, pos2: Position) -> int:
    return abs(pos1.x - pos2.x) + abs(pos1.y - pos2.y)


def euclidean_distance(pos1: Position, pos2: Position) -> float:
    return math.hypot(pos1.x - pos2.x, pos1.y - pos2.y)


def is_position_in_bounds(
    position: Position, min_x: int, max_x: int, min_y: int, max_y: int
) -> bool:
    """Return ``True`` if ``position`` lies within the inclusive bounds."""

    return min_x <= position.x <= max_x and min_y <= position.y <= max_y


def clamp_position(
    position: Position, min_x: int, max_x: int, min_y: int, max_y: int
) -> Position:
    """Return ``position`` clamped into the inclusive bounds."""

    return Position(
        max(min_x, min(max_x, position.x)),
        max(min_y, min(max_y, position.y)),
    )
