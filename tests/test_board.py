from __future__ import annotations

import numpy as np
import pytest

from tetris_engine.board import (
    HEIGHT,
    PIECE_VALUES,
    WIDTH,
    board_from_rows,
    clear_lines,
    create_empty_board,
    find_complete_rows,
    get_cell,
    get_column_heights,
    is_game_over,
    is_row_complete,
    is_valid_position,
    place_piece,
)
from tetris_engine.position import Position
from tetris_engine.tetromino import Tetromino, TetrominoType


def _with_cells(*cells: tuple[int, int], value: TetrominoType = TetrominoType.Z):
    grid = np.zeros((HEIGHT, WIDTH), dtype=np.uint8)
    for row, col in cells:
        grid[row, col] = PIECE_VALUES[value]
    return grid


def test_empty_board_dimensions_and_read_only() -> None:
    board = create_empty_board()
    assert board.shape == (20, 10)
    assert not board.any()
    with pytest.raises(ValueError):
        board[0, 0] = 1


def test_board_from_rows_pads_top() -> None:
    board = board_from_rows([["I"] * 9 + [None]])
    assert get_cell(board, HEIGHT - 1, 0) is TetrominoType.I
    assert get_cell(board, HEIGHT - 1, 9) is None
    assert not board[: HEIGHT - 1].any()
    with pytest.raises(ValueError):
        board_from_rows([["I"] * 3])
    with pytest.raises(ValueError):
        board_from_rows([["Q"] * WIDTH])


def test_get_cell_rejects_off_board() -> None:
    board = create_empty_board()
    with pytest.raises(IndexError):
        get_cell(board, -1, 0)
    with pytest.raises(IndexError):
        get_cell(board, 0, WIDTH)


def test_valid_position_rules() -> None:
    board = _with_cells((5, 5))
    assert is_valid_position(board, Tetromino(TetrominoType.I))
    # Off the left wall.
    assert not is_valid_position(board, Tetromino(TetrominoType.I, position=Position(-1, 0)))
    # Below the floor.
    assert not is_valid_position(board, Tetromino(TetrominoType.I, position=Position(0, 19)))
    # Overlapping a locked block.
    assert not is_valid_position(board, Tetromino(TetrominoType.I, position=Position(2, 4)))
    # Cells in the spawn buffer are exempt from the occupancy check.
    vertical = Tetromino(TetrominoType.I, rotation=1, position=Position(0, -3))
    assert is_valid_position(board, vertical)


def test_place_piece_returns_new_board_and_drops_hidden_cells() -> None:
    board = create_empty_board()
    piece = Tetromino(TetrominoType.I, rotation=1, position=Position(0, -2))
    placed = place_piece(board, piece)
    assert placed is not board
    assert not board.any()
    assert int(np.count_nonzero(placed)) == 2
    assert get_cell(placed, 0, 2) is TetrominoType.I
    assert get_cell(placed, 1, 2) is TetrominoType.I


def test_row_completion_helpers() -> None:
    board = _with_cells(*[(19, c) for c in range(WIDTH)], *[(17, c) for c in range(WIDTH)], (18, 0))
    assert is_row_complete(board[19])
    assert not is_row_complete(board[18])
    assert find_complete_rows(board) == [17, 19]


def test_clear_lines_shifts_rows_down() -> None:
    board = _with_cells(*[(19, c) for c in range(WIDTH)], (18, 2), value=TetrominoType.L)
    result = clear_lines(board)
    assert result.lines_cleared == 1
    assert result.cleared_row_indices == (19,)
    assert get_cell(result.new_board, 19, 2) is TetrominoType.L
    assert not result.new_board[:19].any()
    assert result.new_board.shape == (HEIGHT, WIDTH)

    again = clear_lines(result.new_board)
    assert again.lines_cleared == 0
    assert again.new_board is result.new_board


def test_clear_lines_with_gap_between_full_rows() -> None:
    full = [(r, c) for r in (16, 18) for c in range(WIDTH)]
    board = _with_cells(*full, (17, 1), (19, 9))
    result = clear_lines(board)
    assert result.cleared_row_indices == (16, 18)
    assert int(np.count_nonzero(result.new_board)) == 2
    assert get_cell(result.new_board, 19, 9) is not None
    assert get_cell(result.new_board, 18, 1) is not None


def test_clear_lines_without_full_rows_returns_same_board() -> None:
    board = _with_cells((19, 0))
    result = clear_lines(board)
    assert result.new_board is board
    assert result.lines_cleared == 0
    assert result.cleared_row_indices == ()


@pytest.mark.parametrize("cell", [(0, 3), (0, 6), (1, 4), (1, 5)])
def test_game_over_when_spawn_area_blocked(cell) -> None:
    assert is_game_over(_with_cells(cell))


@pytest.mark.parametrize("cell", [(2, 4), (0, 0), (1, 2), (0, 7), (1, 9)])
def test_no_game_over_outside_spawn_area(cell) -> None:
    assert not is_game_over(_with_cells(cell))


def test_column_heights() -> None:
    board = _with_cells((19, 0), (10, 5), (15, 5))
    heights = get_column_heights(board)
    assert heights[0] == 1
    assert heights[5] == 10
    assert heights[9] == 0
    assert len(heights) == WIDTH
