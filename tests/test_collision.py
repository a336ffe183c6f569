from __future__ import annotations

import numpy as np
import pytest

from tetris_engine.board import HEIGHT, PIECE_VALUES, WIDTH, create_empty_board
from tetris_engine.collision import (
    WALL_KICK_OFFSETS,
    attempt_rotation,
    can_move_piece,
    can_spawn_piece,
    check_block_collision,
    check_boundary_collision,
    create_rotated_piece,
    find_hard_drop_position,
    get_wall_kick_offsets,
    has_collision,
)
from tetris_engine.position import Position
from tetris_engine.tetromino import Tetromino, TetrominoType


def _board_with(*cells: tuple[int, int]):
    grid = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
    for row, col in cells:
        grid[row, col] = PIECE_VALUES[TetrominoType.Z]
    return grid


def _only_free(cells):
    grid = np.full((HEIGHT, WIDTH), PIECE_VALUES[TetrominoType.Z], dtype=np.uint8)
    for row, col in cells:
        grid[row, col] = 0
    return grid


def test_has_collision_is_boundary_or_block() -> None:
    board = _board_with((19, 0), (12, 4), (5, 9), (0, 5))
    for t_type in TetrominoType:
        for rotation in range(4):
            for x in range(-3, WIDTH + 1):
                for y in range(-3, HEIGHT + 1):
                    piece = Tetromino(t_type, rotation=rotation, position=Position(x, y))
                    expected = check_boundary_collision(piece) or check_block_collision(board, piece)
                    assert has_collision(board, piece) == expected


def test_boundary_collision_exempts_spawn_buffer() -> None:
    vertical = Tetromino(TetrominoType.I, rotation=1, position=Position(0, -4))
    # Every cell is above the board, including horizontally legal ones.
    assert not check_boundary_collision(vertical)
    assert check_boundary_collision(Tetromino(TetrominoType.I, position=Position(7, 5)))
    assert check_boundary_collision(Tetromino(TetrominoType.O, position=Position(0, 18)))


def test_block_collision_skips_rows_outside_board() -> None:
    board = _board_with((0, 4))
    assert check_block_collision(board, Tetromino(TetrominoType.I))
    assert not check_block_collision(board, Tetromino(TetrominoType.I, position=Position(3, -2)))


def test_kick_tables_cover_every_transition() -> None:
    transitions = [(0, 1), (1, 0), (1, 2), (2, 1), (2, 3), (3, 2), (3, 0), (0, 3)]
    for table in ("JLSTZ", "I"):
        for start, end in transitions:
            offsets = WALL_KICK_OFFSETS[(table, start, end)]
            assert len(offsets) == 5
            assert offsets[0] == Position(0, 0)
    assert get_wall_kick_offsets(TetrominoType.O, 0, 1) == (Position(0, 0),)
    assert get_wall_kick_offsets(TetrominoType.T, 0, 1)[1] == Position(-1, 0)
    assert get_wall_kick_offsets(TetrominoType.I, 0, 1)[1] == Position(-2, 0)


def test_create_rotated_piece_normalizes() -> None:
    piece = Tetromino(TetrominoType.S, position=Position(2, 3))
    rotated = create_rotated_piece(piece, 7)
    assert rotated.rotation == 3
    assert rotated.position == piece.position


def test_rotation_round_trip_away_from_walls() -> None:
    board = create_empty_board()
    for t_type in TetrominoType:
        piece = Tetromino(t_type, position=Position(3, 8))
        turned = attempt_rotation(board, piece, clockwise=True)
        back = attempt_rotation(board, turned, clockwise=False)
        assert back == piece


def test_o_piece_never_rotates() -> None:
    board = create_empty_board()
    piece = Tetromino(TetrominoType.O, position=Position(4, 4))
    assert attempt_rotation(board, piece) is piece
    assert attempt_rotation(board, piece, clockwise=False) is piece


def test_i_piece_kicks_off_left_wall() -> None:
    board = create_empty_board()
    piece = Tetromino(TetrominoType.I, rotation=1, position=Position(-2, 5))
    rotated = attempt_rotation(board, piece, clockwise=True)
    assert rotated is not None
    assert rotated.rotation == 2
    # The third offset (+2, 0) is the first one that clears the wall.
    assert rotated.position == Position(0, 5)
    assert not has_collision(board, rotated)


@pytest.mark.parametrize("y", [-1, 0, 5, 16])
def test_i_piece_at_left_wall_never_collides_after_rotation(y) -> None:
    board = _board_with((19, 0), (18, 0), (17, 1), (10, 2))
    for rotation in range(4):
        piece = Tetromino(rotation=rotation, type=TetrominoType.I, position=Position(-2, y))
        if has_collision(board, piece):
            continue
        rotated = attempt_rotation(board, piece, clockwise=True)
        if rotated is None:
            continue
        assert rotated.rotation == (rotation + 1) % 4
        kicks = get_wall_kick_offsets(TetrominoType.I, rotation, rotated.rotation)
        offset = Position(rotated.position.x - piece.position.x, rotated.position.y - piece.position.y)
        assert offset in kicks
        assert not has_collision(board, rotated)


def test_rotation_fails_when_boxed_in() -> None:
    piece = Tetromino(TetrominoType.T, position=Position(3, 5))
    board = _only_free(piece.cells())
    assert not has_collision(board, piece)
    assert attempt_rotation(board, piece, clockwise=True) is None
    assert attempt_rotation(board, piece, clockwise=False) is None


def test_can_move_piece() -> None:
    board = create_empty_board()
    at_wall = Tetromino(TetrominoType.I, position=Position(0, 5))
    assert not can_move_piece(board, at_wall, "left")
    assert can_move_piece(board, at_wall, "right")
    assert can_move_piece(board, at_wall, "down")
    with pytest.raises(ValueError):
        can_move_piece(board, at_wall, "up")


def test_hard_drop_position() -> None:
    board = _board_with((15, 4))
    piece = Tetromino(TetrominoType.I)
    landed = find_hard_drop_position(board, piece)
    assert landed.position == Position(3, 13)
    assert find_hard_drop_position(board, landed) == landed


def test_can_spawn_piece() -> None:
    assert can_spawn_piece(create_empty_board(), Tetromino(TetrominoType.T))
    assert not can_spawn_piece(_board_with((1, 4)), Tetromino(TetrominoType.T))
