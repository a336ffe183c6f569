"""Game constants and the scoring/level/speed configuration bundle."""

from __future__ import annotations

from dataclasses import dataclass


# Dimensions of the standard Tetris board.
WIDTH = 10
HEIGHT = 20

# Game timing, in milliseconds.
INITIAL_DROP_SPEED = 1000
MIN_DROP_SPEED = 50
DROP_SPEED_FACTOR = 0.8
LEVEL_UP_LINES = 10

# Points for one, two, three and four simultaneous line clears, plus the
# per-cell drop bonuses.
SCORING = {
    "single": 100,
    "double": 300,
    "triple": 500,
    "tetris": 800,
    "soft_drop": 1,
    "hard_drop": 2,
}

# Pieces enter play a row above the visible board, roughly centred.
SPAWN_COLUMN = WIDTH // 2 - 2
SPAWN_ROW = -1


@dataclass(frozen=True)
class ScoringConfig:
    """Unit scores and level/speed parameters used by :mod:`.scoring`."""

    single: int = SCORING["single"]
    double: int = SCORING["double"]
    triple: int = SCORING["triple"]
    tetris: int = SCORING["tetris"]
    soft_drop: int = SCORING["soft_drop"]
    hard_drop: int = SCORING["hard_drop"]
    lines_per_level: int = LEVEL_UP_LINES
    base_drop_speed: int = INITIAL_DROP_SPEED
    min_drop_speed: int = MIN_DROP_SPEED

    def __post_init__(self) -> None:
        if self.lines_per_level <= 0:
            raise ValueError("lines_per_level must be positive")
        if self.base_drop_speed <= 0 or self.min_drop_speed <= 0:
            raise ValueError("drop speeds must be positive")
        if self.min_drop_speed > self.base_drop_speed:
            raise ValueError("min_drop_speed cannot exceed base_drop_speed")
        if self.hard_drop != 2 * self.soft_drop:
            raise ValueError("hard_drop must be twice soft_drop")

    def line_scores(self) -> dict[int, int]:
        """Return the base score for each simultaneous line count."""

        return {1: self.single, 2: self.double, 3: self.triple, 4: self.tetris}


DEFAULT_SCORING = ScoringConfig()

