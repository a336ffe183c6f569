"""Tetromino definitions, rotation states and next-piece sources.

Each piece occupies a 4x4 bounding box.  The spawn orientation of every piece
is written out below and the remaining three SRS rotation states are derived
by rotating that box clockwise.  ``I`` rotates inside the full 4x4 box, the
three-wide pieces rotate inside a 3x3 box anchored one row down, and ``O``
never changes.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .config import SPAWN_COLUMN, SPAWN_ROW
from .position import Position

Shape = Tuple[Tuple[bool, ...], ...]

SHAPE_SIZE = 4
ROTATION_COUNT = 4


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


def _parse(rows: Iterable[str]) -> List[List[bool]]:
    return [[ch == "X" for ch in row] for row in rows]


def _rotate(matrix: List[List[bool]]) -> List[List[bool]]:
    """Return the square ``matrix`` rotated 90 degrees clockwise."""

    size = len(matrix)
    return [[matrix[size - 1 - c][r] for c in range(size)] for r in range(size)]


def _embed(matrix: List[List[bool]], row_offset: int) -> Shape:
    """Place ``matrix`` into an empty 4x4 box starting at ``row_offset``."""

    box = [[False] * SHAPE_SIZE for _ in range(SHAPE_SIZE)]
    for r, row in enumerate(matrix):
        for c, filled in enumerate(row):
            box[r + row_offset][c] = filled
    return tuple(tuple(row) for row in box)


def _generate_rotations(matrix: List[List[bool]], row_offset: int) -> Tuple[Shape, ...]:
    """Generate the four rotation states for a piece starting from ``matrix``."""

    rotations = []
    for _ in range(ROTATION_COUNT):
        rotations.append(_embed(matrix, row_offset))
        matrix = _rotate(matrix)
    return tuple(rotations)


# Spawn orientations.  ``I`` uses a 4x4 rotation box, the others 3x3.
_BASE_SHAPES: Dict[TetrominoType, List[str]] = {
    TetrominoType.I: ["....", "XXXX", "....", "...."],
    TetrominoType.T: [".X.", "XXX", "..."],
    TetrominoType.S: [".XX", "XX.", "..."],
    TetrominoType.Z: ["XX.", ".XX", "..."],
    TetrominoType.J: ["X..", "XXX", "..."],
    TetrominoType.L: ["..X", "XXX", "..."],
}

_O_SHAPE = _embed(_parse(["....", ".XX.", ".XX.", "...."]), 0)


TETROMINO_SHAPES: Dict[TetrominoType, Tuple[Shape, ...]] = {
    t_type: _generate_rotations(_parse(rows), 0 if t_type is TetrominoType.I else 1)
    for t_type, rows in _BASE_SHAPES.items()
}
TETROMINO_SHAPES[TetrominoType.O] = (_O_SHAPE,) * ROTATION_COUNT


def normalize_rotation(rotation: int) -> int:
    """Wrap any integer rotation into ``[0, 4)``."""

    return rotation % ROTATION_COUNT


def shape_for(piece_type: TetrominoType, rotation: int) -> Shape:
    """Return the 4x4 shape matrix for ``piece_type`` at ``rotation``.

    Values are wrapped so any integer rotation is accepted.
    """

    return TETROMINO_SHAPES[piece_type][normalize_rotation(rotation)]


def spawn_position() -> Position:
    return Position(SPAWN_COLUMN, SPAWN_ROW)


@dataclass(frozen=True)
class Tetromino:
    """A piece: its type, current shape matrix, position and rotation."""

    type: TetrominoType
    shape: Shape = ()
    position: Position = field(default_factory=spawn_position)
    rotation: int = 0

    def __post_init__(self) -> None:
        rotation = normalize_rotation(self.rotation)
        if rotation != self.rotation:
            object.__setattr__(self, "rotation", rotation)
        if not self.shape:
            object.__setattr__(self, "shape", shape_for(self.type, rotation))

    def cells(self) -> List[Tuple[int, int]]:
        """Return the ``(row, col)`` board coordinates of the occupied cells."""

        x, y = self.position.x, self.position.y
        return [
            (y + r, x + c)
            for r, row in enumerate(self.shape)
            for c, filled in enumerate(row)
            if filled
        ]

    def moved(self, dx: int, dy: int) -> "Tetromino":
        """Return a copy shifted by ``dx`` columns and ``dy`` rows."""

        return replace(self, position=Position(self.position.x + dx, self.position.y + dy))

    def at_spawn(self) -> "Tetromino":
        """Return this piece reset to the spawn position and rotation."""

        return Tetromino(self.type)


def create_tetromino(piece_type: TetrominoType) -> Tetromino:
    """Return a ``piece_type`` piece at spawn defaults."""

    return Tetromino(TetrominoType(piece_type))


# A "next piece" source is any zero-argument callable returning a piece at
# spawn defaults.  The reducer draws from it whenever a new upcoming piece is
# needed.
PieceSource = Callable[[], Tetromino]

ALL_TYPES: Tuple[TetrominoType, ...] = tuple(TetrominoType)


def create_random_tetromino(rng: Optional[random.Random] = None) -> Tetromino:
    """Return a uniformly random piece at spawn defaults."""

    chooser = rng if rng is not None else random
    return create_tetromino(chooser.choice(ALL_TYPES))


def random_piece_source(rng: Optional[random.Random] = None) -> PieceSource:
    """Return a source drawing uniformly random pieces from ``rng``."""

    rng = rng if rng is not None else random.Random()
    return lambda: create_random_tetromino(rng)


def bag_piece_source(rng: Optional[random.Random] = None) -> PieceSource:
    """Return a 7-bag source: every type once per shuffled bag."""

    rng = rng if rng is not None else random.Random()
    bag: List[TetrominoType] = []

    def next_piece() -> Tetromino:
        if not bag:
            bag.extend(ALL_TYPES)
            rng.shuffle(bag)
        return create_tetromino(bag.pop())

    return next_piece


def sequence_piece_source(
    types: Iterable[TetrominoType | str], *, cycle: bool = True
) -> PieceSource:
    """Return a source replaying ``types`` in order.

    With ``cycle`` the sequence repeats forever; otherwise drawing past the end
    raises :class:`IndexError`.
    """

    sequence = [TetrominoType(t) for t in types]
    if not sequence:
        raise ValueError("sequence_piece_source requires at least one type")
    index = 0

    def next_piece() -> Tetromino:
        nonlocal index
        if index >= len(sequence):
            if not cycle:
                raise IndexError("piece sequence exhausted")
            index = 0
        piece = create_tetromino(sequence[index])
        index += 1
        return piece

    return next_piece
