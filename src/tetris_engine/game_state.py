"""Immutable game state and the reducer that advances it.

A :class:`GameState` is created once by :func:`create_initial_game_state` and
then only ever replaced by :func:`game_state_reducer`, one
:class:`GameAction` at a time.  Actions that are not valid for the current
state return the very same state object, and every transition keeps the
identity of the board and pieces it does not touch so consumers can detect
changes with ``is`` comparisons.

The only impure input is the piece source: a zero-argument callable returning
the next upcoming :class:`~tetris_engine.tetromino.Tetromino`.  Pass a
deterministic source (see :func:`~tetris_engine.tetromino.sequence_piece_source`)
to replay a game exactly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from .board import Board, create_empty_board, is_game_over, place_piece
from .collision import can_spawn_piece
from .config import DEFAULT_SCORING, ScoringConfig
from .movement import (
    hard_drop_piece,
    move_piece_down,
    move_piece_left,
    move_piece_right,
    rotate_piece,
)
from .scoring import (
    LineClearOutcome,
    calculate_hard_drop_score,
    calculate_level,
    calculate_line_score,
    calculate_soft_drop_score,
    process_line_clearing,
)
from .tetromino import PieceSource, Tetromino, create_random_tetromino


LOGGER = logging.getLogger(__name__)


class GameStatus(str, Enum):
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class AnimationType(str, Enum):
    """Last player-visible action, for presentation effects."""

    MOVE = "move"
    ROTATE = "rotate"
    DROP = "drop"
    HARD_DROP = "hard_drop"
    NONE = "none"


@dataclass(frozen=True)
class AnimationState:
    last_action: AnimationType = AnimationType.NONE
    clearing_lines: Tuple[int, ...] = ()
    is_animating: bool = False


def create_initial_animation_state() -> AnimationState:
    return AnimationState()


@dataclass(frozen=True, eq=False)
class GameState:
    """Snapshot of a game session."""

    board: Board
    next_piece: Tetromino
    current_piece: Optional[Tetromino] = None
    held_piece: Optional[Tetromino] = None
    can_hold: bool = True
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    game_status: GameStatus = GameStatus.READY
    drop_timer: float = 0.0
    last_drop_time: Optional[float] = None
    animation: AnimationState = field(default_factory=create_initial_animation_state)


def create_initial_game_state(piece_source: Optional[PieceSource] = None) -> GameState:
    """Return a fresh ``ready`` state with an empty board and one upcoming piece."""

    next_piece = piece_source() if piece_source is not None else create_random_tetromino()
    return GameState(board=create_empty_board(), next_piece=next_piece)


class ActionType(str, Enum):
    MOVE_LEFT = "MOVE_LEFT"
    MOVE_RIGHT = "MOVE_RIGHT"
    MOVE_DOWN = "MOVE_DOWN"
    ROTATE = "ROTATE"
    HARD_DROP = "HARD_DROP"
    HOLD_PIECE = "HOLD_PIECE"
    PAUSE_GAME = "PAUSE_GAME"
    RESUME_GAME = "RESUME_GAME"
    RESTART_GAME = "RESTART_GAME"
    GAME_TICK = "GAME_TICK"
    LOCK_PIECE = "LOCK_PIECE"
    SPAWN_PIECE = "SPAWN_PIECE"
    CLEAR_LINES = "CLEAR_LINES"
    START_LINE_CLEAR_ANIMATION = "START_LINE_CLEAR_ANIMATION"
    END_LINE_CLEAR_ANIMATION = "END_LINE_CLEAR_ANIMATION"
    SET_LAST_ACTION = "SET_LAST_ACTION"


@dataclass(frozen=True)
class GameAction:
    """A tagged action plus the payload fields a few action types carry.

    Build payload-bearing actions with the class methods, e.g.
    ``GameAction.clear_lines(2)`` or ``GameAction.tick(now_ms)``.
    """

    type: ActionType
    lines_cleared: int = 0
    lines: Tuple[int, ...] = ()
    last_action: AnimationType = AnimationType.NONE
    now_ms: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", ActionType(self.type))

    @classmethod
    def clear_lines(cls, lines_cleared: int) -> "GameAction":
        return cls(ActionType.CLEAR_LINES, lines_cleared=lines_cleared)

    @classmethod
    def start_line_clear_animation(cls, lines) -> "GameAction":
        return cls(ActionType.START_LINE_CLEAR_ANIMATION, lines=tuple(lines))

    @classmethod
    def set_last_action(cls, last_action: AnimationType) -> "GameAction":
        return cls(ActionType.SET_LAST_ACTION, last_action=AnimationType(last_action))

    @classmethod
    def tick(cls, now_ms: float) -> "GameAction":
        return cls(ActionType.GAME_TICK, now_ms=now_ms)


_PIECE_ACTIONS = frozenset(
    {
        ActionType.MOVE_LEFT,
        ActionType.MOVE_RIGHT,
        ActionType.MOVE_DOWN,
        ActionType.ROTATE,
        ActionType.HARD_DROP,
        ActionType.LOCK_PIECE,
    }
)
_ANIMATION_ACTIONS = frozenset(
    {
        ActionType.START_LINE_CLEAR_ANIMATION,
        ActionType.END_LINE_CLEAR_ANIMATION,
        ActionType.SET_LAST_ACTION,
    }
)


def is_valid_state_transition(state: GameState, action: GameAction) -> bool:
    """Return ``True`` if ``action`` may be applied to ``state``."""

    kind = action.type
    playing = state.game_status is GameStatus.PLAYING
    if kind in _PIECE_ACTIONS:
        return playing and state.current_piece is not None
    if kind is ActionType.HOLD_PIECE:
        return playing and state.current_piece is not None and state.can_hold
    if kind in (ActionType.PAUSE_GAME, ActionType.GAME_TICK, ActionType.CLEAR_LINES):
        return playing
    if kind is ActionType.RESUME_GAME:
        return state.game_status is GameStatus.PAUSED
    if kind is ActionType.RESTART_GAME:
        return True
    if kind is ActionType.SPAWN_PIECE:
        return (
            state.game_status in (GameStatus.READY, GameStatus.PLAYING)
            and state.current_piece is None
        )
    return kind in _ANIMATION_ACTIONS


@dataclass(frozen=True)
class _Context:
    piece_source: PieceSource
    scoring: ScoringConfig

    def draw(self) -> Tetromino:
        return self.piece_source()


def _tag(state: GameState, last_action: AnimationType) -> AnimationState:
    if state.animation.last_action is last_action:
        return state.animation
    return replace(state.animation, last_action=last_action)


def _clear_animation(
    animation: AnimationState, outcome: LineClearOutcome, last_action: AnimationType
) -> AnimationState:
    return replace(
        animation,
        last_action=last_action,
        clearing_lines=outcome.cleared_row_indices,
        is_animating=outcome.lines_cleared > 0,
    )


def _log_clear(outcome: LineClearOutcome) -> None:
    if outcome.lines_cleared:
        LOGGER.debug(
            "Cleared rows %s (+%d points, total lines %d)",
            list(outcome.cleared_row_indices),
            outcome.score_gained,
            outcome.new_total_lines,
        )
    if outcome.leveled_up:
        LOGGER.info("Level up: %d", outcome.new_level)


def _shift(mover: Callable[[Board, Tetromino], Tetromino]):
    def handler(state: GameState, action: GameAction, ctx: _Context) -> GameState:
        piece = mover(state.board, state.current_piece)
        return replace(state, current_piece=piece, animation=_tag(state, AnimationType.MOVE))

    return handler


def _move_down(state: GameState, action: GameAction, ctx: _Context) -> GameState:
    piece = move_piece_down(state.board, state.current_piece)
    moved = piece.position.y > state.current_piece.position.y
    bonus = calculate_soft_drop_score(1, ctx.scoring) if moved else 0
    return replace(
        state,
        current_piece=piece,
        score=state.score + bonus,
        animation=_tag(state, AnimationType.MOVE),
    )


def _rotate(state: GameState, action: GameAction, ctx: _Context) -> GameState:
    piece = rotate_piece(state.board, state.current_piece)
    return replace(state, current_piece=piece, animation=_tag(state, AnimationType.ROTATE))


def _hard_drop(state: GameState, action: GameAction, ctx: _Context) -> GameState:
    drop = hard_drop_piece(state.board, state.current_piece)
    bonus = calculate_hard_drop_score(drop.drop_distance, ctx.scoring)
    stamped = place_piece(state.board, drop.piece)
    outcome = process_line_clearing(
        stamped, state.level, state.score + bonus, state.lines_cleared, ctx.scoring
    )
    _log_clear(outcome)
    animation = _clear_animation(state.animation, outcome, AnimationType.HARD_DROP)

    if is_game_over(outcome.new_board):
        LOGGER.info("Game over after hard drop with score %d", outcome.new_score)
        return replace(
            state,
            board=outcome.new_board,
            current_piece=None,
            game_status=GameStatus.GAME_OVER,
            score=outcome.new_score,
            level=outcome.new_level,
            lines_cleared=outcome.new_total_lines,
            animation=animation,
        )

    return replace(
        state,
        board=outcome.new_board,
        current_piece=state.next_piece,
        next_piece=ctx.draw(),
        can_hold=True,
        score=outcome.new_score,
        level=outcome.new_level,
        lines_cleared=outcome.new_total_lines,
        animation=animation,
    )


def _hold(state: GameState, action: GameAction, ctx: _Context) -> GameState:
    current = state.current_piece.at_spawn()
    if state.held_piece is not None:
        return replace(
            state,
            current_piece=state.held_piece.at_spawn(),
            held_piece=current,
            can_hold=False,
        )
    return replace(
        state,
        current_piece=state.next_piece.at_spawn(),
        next_piece=ctx.draw(),
        held_piece=current,
        can_hold=False,
    )


def _pause(state: GameState, action: GameAction, ctx: _Context) -> GameState:
    return replace(state, game_status=GameStatus.PAUSED)


def _resume(state: GameState, action: GameAction, ctx: _Context) -> GameState:
    if state.current_piece is not None:
        return replace(state, game_status=GameStatus.PLAYING)
    return replace(
        state,
        game_status=GameStatus.PLAYING,
        current_piece=state.next_piece,
        next_piece=ctx.draw(),
    )


def _restart(state: GameState, action: GameAction, ctx: _Context) -> GameState:
    LOGGER.debug("Restarting game (previous score %d)", state.score)
    return create_initial_game_state(ctx.piece_source)


def _tick(state: GameState, action: GameAction, ctx: _Context) -> GameState:
    if action.now_ms is None:
        return state
    # The first tick only records the clock; later ticks accumulate the delta.
    if state.last_drop_time is None:
        elapsed = 0.0
    else:
        elapsed = action.now_ms - state.last_drop_time
    return replace(
        state,
        drop_timer=state.drop_timer + max(0.0, elapsed),
        last_drop_time=action.now_ms,
    )


def _lock(state: GameState, action: GameAction, ctx: _Context) -> GameState:
    stamped = place_piece(state.board, state.current_piece)
    outcome = process_line_clearing(
        stamped, state.level, state.score, state.lines_cleared, ctx.scoring
    )
    _log_clear(outcome)
    status = state.game_status
    if is_game_over(outcome.new_board):
        LOGGER.info("Game over after lock with score %d", outcome.new_score)
        status = GameStatus.GAME_OVER
    return replace(
        state,
        board=outcome.new_board,
        current_piece=None,
        can_hold=True,
        game_status=status,
        score=outcome.new_score,
        level=outcome.new_level,
        lines_cleared=outcome.new_total_lines,
        animation=_clear_animation(state.animation, outcome, AnimationType.NONE),
    )


def _spawn(state: GameState, action: GameAction, ctx: _Context) -> GameState:
    if not can_spawn_piece(state.board, state.next_piece):
        LOGGER.info("Game over: %s cannot spawn", state.next_piece.type.value)
        return replace(state, game_status=GameStatus.GAME_OVER)
    return replace(
        state,
        current_piece=state.next_piece,
        next_piece=ctx.draw(),
        game_status=GameStatus.PLAYING,
    )


def _clear_lines(state: GameState, action: GameAction, ctx: _Context) -> GameState:
    if action.lines_cleared < 1:
        return state
    total = state.lines_cleared + action.lines_cleared
    return replace(
        state,
        score=state.score + calculate_line_score(action.lines_cleared, state.level, ctx.scoring),
        level=max(state.level, calculate_level(total, ctx.scoring)),
        lines_cleared=total,
    )


def _start_animation(state: GameState, action: GameAction, ctx: _Context) -> GameState:
    animation = replace(state.animation, clearing_lines=tuple(action.lines), is_animating=True)
    return replace(state, animation=animation)


def _end_animation(state: GameState, action: GameAction, ctx: _Context) -> GameState:
    animation = replace(state.animation, clearing_lines=(), is_animating=False)
    return replace(state, animation=animation)


def _set_last_action(state: GameState, action: GameAction, ctx: _Context) -> GameState:
    return replace(state, animation=replace(state.animation, last_action=action.last_action))


_Handler = Callable[[GameState, GameAction, _Context], GameState]

_HANDLERS: Dict[ActionType, _Handler] = {
    ActionType.MOVE_LEFT: _shift(move_piece_left),
    ActionType.MOVE_RIGHT: _shift(move_piece_right),
    ActionType.MOVE_DOWN: _move_down,
    ActionType.ROTATE: _rotate,
    ActionType.HARD_DROP: _hard_drop,
    ActionType.HOLD_PIECE: _hold,
    ActionType.PAUSE_GAME: _pause,
    ActionType.RESUME_GAME: _resume,
    ActionType.RESTART_GAME: _restart,
    ActionType.GAME_TICK: _tick,
    ActionType.LOCK_PIECE: _lock,
    ActionType.SPAWN_PIECE: _spawn,
    ActionType.CLEAR_LINES: _clear_lines,
    ActionType.START_LINE_CLEAR_ANIMATION: _start_animation,
    ActionType.END_LINE_CLEAR_ANIMATION: _end_animation,
    ActionType.SET_LAST_ACTION: _set_last_action,
}


def game_state_reducer(
    state: GameState,
    action: GameAction,
    piece_source: Optional[PieceSource] = None,
    scoring: Optional[ScoringConfig] = None,
) -> GameState:
    """Apply ``action`` to ``state`` and return the resulting state.

    Invalid actions return ``state`` itself.  ``piece_source`` supplies new
    upcoming pieces (uniformly random by default) and ``scoring`` overrides
    the default scoring bundle.
    """

    if not is_valid_state_transition(state, action):
        LOGGER.debug("Ignoring %s in %s state", action.type.value, state.game_status.value)
        return state

    ctx = _Context(piece_source or create_random_tetromino, scoring or DEFAULT_SCORING)
    return _HANDLERS[action.type](state, action, ctx)
