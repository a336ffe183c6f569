"""Random-play session printed as a text board.

Run with: `python -m tetris_engine`

Plays a seeded session by spawning pieces and hard-dropping them at spread-out
columns, then prints the final board and counters.  Useful as a smoke test of
the whole reducer pipeline.
"""

from __future__ import annotations

import argparse
import logging
import random

from . import (
    ActionType,
    GameAction,
    GameStatus,
    bag_piece_source,
    create_initial_game_state,
    format_grid,
    game_state_reducer,
    render_grid,
)


LOGGER = logging.getLogger(__name__)


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a short autoplay session.")
    parser.add_argument("--pieces", type=int, default=30, help="Number of pieces to drop.")
    parser.add_argument("--seed", type=int, default=0, help="Seed for the piece bag.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO).")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s"
    )

    rng = random.Random(args.seed)
    source = bag_piece_source(rng)

    def step(state, action):
        return game_state_reducer(state, action, source)

    state = step(create_initial_game_state(source), GameAction(ActionType.SPAWN_PIECE))
    for index in range(args.pieces):
        if state.game_status is GameStatus.GAME_OVER:
            break
        for _ in range(rng.randrange(4)):
            state = step(state, GameAction(ActionType.ROTATE))
        shift = ActionType.MOVE_LEFT if rng.random() < 0.5 else ActionType.MOVE_RIGHT
        for _ in range(rng.randrange(6)):
            state = step(state, GameAction(shift))
        state = step(state, GameAction(ActionType.HARD_DROP))
        LOGGER.debug("Piece %d dropped, score %d", index + 1, state.score)

    print(format_grid(render_grid(state.board, state.current_piece)))
    print(
        f"status={state.game_status.value} score={state.score} "
        f"level={state.level} lines={state.lines_cleared}"
    )


if __name__ == "__main__":
    main()
