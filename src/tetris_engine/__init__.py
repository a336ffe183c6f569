"""Deterministic Tetris engine: board, SRS rotation, scoring and a state reducer."""

from .config import DEFAULT_SCORING, HEIGHT, WIDTH, ScoringConfig
from .position import Position
from .tetromino import (
    PieceSource,
    Tetromino,
    TetrominoType,
    bag_piece_source,
    create_random_tetromino,
    create_tetromino,
    random_piece_source,
    sequence_piece_source,
)
from .board import (
    PIECE_VALUES,
    Board,
    LineClearResult,
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
from .collision import (
    WALL_KICK_OFFSETS,
    attempt_rotation,
    can_move_piece,
    can_spawn_piece,
    check_block_collision,
    check_boundary_collision,
    find_hard_drop_position,
    get_wall_kick_offsets,
    has_collision,
)
from .movement import (
    HardDropResult,
    can_piece_move_anywhere,
    get_ghost_piece,
    get_valid_moves,
    hard_drop_piece,
    move_piece_down,
    move_piece_left,
    move_piece_right,
    rotate_piece,
    rotate_piece_counterclockwise,
    should_lock_piece,
)
from .scoring import (
    LineClearOutcome,
    calculate_drop_speed,
    calculate_hard_drop_score,
    calculate_level,
    calculate_line_score,
    calculate_soft_drop_score,
    get_line_clear_name,
    process_line_clearing,
)
from .game_state import (
    ActionType,
    AnimationState,
    AnimationType,
    GameAction,
    GameState,
    GameStatus,
    create_initial_game_state,
    game_state_reducer,
    is_valid_state_transition,
)
from .loop import GameLoop
from .utils import format_grid, render_grid

__all__ = [
    "DEFAULT_SCORING",
    "HEIGHT",
    "WIDTH",
    "ScoringConfig",
    "Position",
    "PieceSource",
    "Tetromino",
    "TetrominoType",
    "bag_piece_source",
    "create_random_tetromino",
    "create_tetromino",
    "random_piece_source",
    "sequence_piece_source",
    "PIECE_VALUES",
    "Board",
    "LineClearResult",
    "board_from_rows",
    "clear_lines",
    "create_empty_board",
    "find_complete_rows",
    "get_cell",
    "get_column_heights",
    "is_game_over",
    "is_row_complete",
    "is_valid_position",
    "place_piece",
    "WALL_KICK_OFFSETS",
    "attempt_rotation",
    "can_move_piece",
    "can_spawn_piece",
    "check_block_collision",
    "check_boundary_collision",
    "find_hard_drop_position",
    "get_wall_kick_offsets",
    "has_collision",
    "HardDropResult",
    "can_piece_move_anywhere",
    "get_ghost_piece",
    "get_valid_moves",
    "hard_drop_piece",
    "move_piece_down",
    "move_piece_left",
    "move_piece_right",
    "rotate_piece",
    "rotate_piece_counterclockwise",
    "should_lock_piece",
    "LineClearOutcome",
    "calculate_drop_speed",
    "calculate_hard_drop_score",
    "calculate_level",
    "calculate_line_score",
    "calculate_soft_drop_score",
    "get_line_clear_name",
    "process_line_clearing",
    "ActionType",
    "AnimationState",
    "AnimationType",
    "GameAction",
    "GameState",
    "GameStatus",
    "create_initial_game_state",
    "game_state_reducer",
    "is_valid_state_transition",
    "GameLoop",
    "format_grid",
    "render_grid",
]
