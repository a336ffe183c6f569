"""Frame-driven gravity driver around the pure reducer.

:class:`GameLoop` is the one stateful piece of the engine.  It owns the
current :class:`~tetris_engine.game_state.GameState`, feeds actions through
:func:`~tetris_engine.game_state.game_state_reducer` and, on every
:meth:`GameLoop.advance` call, applies gravity: once enough time has
accumulated for the current level the falling piece moves down, locks, or a
new piece spawns.  Callers decide the cadence (an animation frame, a timer or
a test loop with fake timestamps).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from .config import DEFAULT_SCORING, ScoringConfig
from .game_state import (
    ActionType,
    GameAction,
    GameState,
    GameStatus,
    create_initial_game_state,
    game_state_reducer,
)
from .movement import should_lock_piece
from .scoring import calculate_drop_speed
from .tetromino import PieceSource, random_piece_source


LOGGER = logging.getLogger(__name__)

# Delta assumed for the first frame after (re)starting the loop.
FIRST_FRAME_MS = 16.0


@dataclass
class GameLoop:
    """Drive a game session from wall-clock timestamps in milliseconds."""

    piece_source: PieceSource = field(default_factory=random_piece_source)
    scoring: ScoringConfig = DEFAULT_SCORING
    state: Optional[GameState] = None
    on_piece_lock: Optional[Callable[[], None]] = None
    on_piece_spawn: Optional[Callable[[], None]] = None
    running: bool = False
    last_ts: Optional[float] = None
    drop_accum: float = 0.0

    def __post_init__(self) -> None:
        if self.state is None:
            self.state = create_initial_game_state(self.piece_source)

    def dispatch(self, action: GameAction | ActionType) -> GameState:
        """Apply ``action`` to the current state and return the new state."""

        if not isinstance(action, GameAction):
            action = GameAction(action)
        self.state = game_state_reducer(self.state, action, self.piece_source, self.scoring)
        return self.state

    def start(self) -> None:
        """Start (or restart) the frame clock and spawn the first piece."""

        if self.running:
            LOGGER.debug("Start ignored: already running")
            return
        self.running = True
        self.last_ts = None
        self.drop_accum = 0.0
        if self.state.game_status is GameStatus.READY:
            self.dispatch(ActionType.SPAWN_PIECE)
        LOGGER.info("Game loop started")

    def stop(self) -> None:
        if not self.running:
            LOGGER.debug("Stop ignored: not running")
            return
        self.running = False
        LOGGER.info("Game loop stopped")

    def restart(self) -> GameState:
        """Restart the game and reset the timing accumulators."""

        self.dispatch(ActionType.RESTART_GAME)
        self.last_ts = None
        self.drop_accum = 0.0
        return self.state

    def advance(self, ts: float) -> GameState:
        """Process one frame at timestamp ``ts`` and return the new state."""

        if not self.running:
            return self.state
        dt = FIRST_FRAME_MS if self.last_ts is None else ts - self.last_ts
        self.last_ts = ts

        if self.state.game_status is not GameStatus.PLAYING:
            return self.state

        self.drop_accum += dt
        if self.drop_accum >= calculate_drop_speed(self.state.level, self.scoring):
            self.drop_accum = 0.0
            self._apply_gravity()
        self.dispatch(GameAction.tick(ts))

        if self.state.game_status is GameStatus.GAME_OVER:
            LOGGER.info(
                "Game over: score=%d level=%d lines=%d",
                self.state.score,
                self.state.level,
                self.state.lines_cleared,
            )
            self.stop()
        return self.state

    def _apply_gravity(self) -> None:
        piece = self.state.current_piece
        if piece is None:
            self.dispatch(ActionType.SPAWN_PIECE)
            if self.on_piece_spawn is not None:
                self.on_piece_spawn()
        elif should_lock_piece(self.state.board, piece):
            self.dispatch(ActionType.LOCK_PIECE)
            if self.on_piece_lock is not None:
                self.on_piece_lock()
        else:
            self.dispatch(ActionType.MOVE_DOWN)
