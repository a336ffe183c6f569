import random

import pytest

from tetris_engine.config import SPAWN_COLUMN, SPAWN_ROW
from tetris_engine.position import Position
from tetris_engine.tetromino import (
    TETROMINO_SHAPES,
    Tetromino,
    TetrominoType,
    bag_piece_source,
    create_random_tetromino,
    sequence_piece_source,
    shape_for,
)


def _rows(shape):
    return ["".join("X" if cell else "." for cell in row) for row in shape]


def test_every_rotation_has_four_cells():
    for t_type, rotations in TETROMINO_SHAPES.items():
        assert len(rotations) == 4
        for shape in rotations:
            assert sum(cell for row in shape for cell in row) == 4, t_type


def test_srs_rotation_states():
    assert _rows(shape_for(TetrominoType.T, 1)) == ["....", ".X..", ".XX.", ".X.."]
    assert _rows(shape_for(TetrominoType.I, 1)) == ["..X.", "..X.", "..X.", "..X."]
    assert _rows(shape_for(TetrominoType.I, 3)) == [".X..", ".X..", ".X..", ".X.."]
    assert _rows(shape_for(TetrominoType.L, 2)) == ["....", "....", "XXX.", "X..."]
    assert len(set(TETROMINO_SHAPES[TetrominoType.O])) == 1


def test_rotation_is_normalized():
    piece = Tetromino(TetrominoType.T, rotation=5)
    assert piece.rotation == 1
    assert piece.shape == shape_for(TetrominoType.T, 1)
    assert Tetromino(TetrominoType.J, rotation=-1).rotation == 3


def test_new_pieces_start_at_spawn():
    piece = create_random_tetromino(random.Random(3))
    assert piece.position == Position(SPAWN_COLUMN, SPAWN_ROW)
    assert piece.rotation == 0
    moved = Tetromino(TetrominoType.S, rotation=2, position=Position(0, 10))
    assert moved.at_spawn() == Tetromino(TetrominoType.S)


def test_cells_are_board_coordinates():
    piece = Tetromino(TetrominoType.T, position=Position(3, -1))
    assert sorted(piece.cells()) == [(0, 4), (1, 3), (1, 4), (1, 5)]


def test_sequence_source_replays_in_order():
    source = sequence_piece_source(["I", TetrominoType.O])
    assert [source().type for _ in range(4)] == [
        TetrominoType.I,
        TetrominoType.O,
        TetrominoType.I,
        TetrominoType.O,
    ]


def test_sequence_source_without_cycle_is_exhaustible():
    source = sequence_piece_source("TZ", cycle=False)
    source()
    source()
    with pytest.raises(IndexError):
        source()
    with pytest.raises(ValueError):
        sequence_piece_source([])


def test_bag_source_deals_each_type_once_per_bag():
    source = bag_piece_source(random.Random(7))
    first = {source().type for _ in range(7)}
    second = {source().type for _ in range(7)}
    assert first == set(TetrominoType)
    assert second == set(TetrominoType)
