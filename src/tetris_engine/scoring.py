"""Score, level and gravity formulas.

All functions take an optional :class:`~tetris_engine.config.ScoringConfig`
and fall back to the standard values (100/300/500/800 per clear, ten lines a
level, one second base gravity) when it is omitted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .board import Board, clear_lines
from .config import DEFAULT_SCORING, DROP_SPEED_FACTOR, ScoringConfig


LINE_CLEAR_NAMES = {1: "Single", 2: "Double", 3: "Triple", 4: "Tetris"}


def calculate_line_score(
    lines_cleared: int, level: int, config: Optional[ScoringConfig] = None
) -> int:
    """Return the points for clearing ``lines_cleared`` rows at once.

    Counts outside 1-4 score nothing.
    """

    config = config or DEFAULT_SCORING
    return config.line_scores().get(lines_cleared, 0) * level


def calculate_level(total_lines_cleared: int, config: Optional[ScoringConfig] = None) -> int:
    """Return the level reached after ``total_lines_cleared`` lines (from 1)."""

    config = config or DEFAULT_SCORING
    return total_lines_cleared // config.lines_per_level + 1


def calculate_drop_speed(level: int, config: Optional[ScoringConfig] = None) -> int:
    """Return the gravity interval in milliseconds for ``level``.

    Each level is 20% faster than the previous one, down to the configured
    minimum interval.
    """

    config = config or DEFAULT_SCORING
    speed = math.floor(config.base_drop_speed * DROP_SPEED_FACTOR ** (level - 1))
    return max(config.min_drop_speed, speed)


def calculate_soft_drop_score(cells_dropped: int, config: Optional[ScoringConfig] = None) -> int:
    config = config or DEFAULT_SCORING
    return cells_dropped * config.soft_drop


def calculate_hard_drop_score(cells_dropped: int, config: Optional[ScoringConfig] = None) -> int:
    config = config or DEFAULT_SCORING
    return cells_dropped * config.hard_drop


@dataclass(frozen=True, eq=False)
class LineClearOutcome:
    """Board and counters after clearing lines and scoring them."""

    new_board: Board
    lines_cleared: int
    cleared_row_indices: Tuple[int, ...]
    score_gained: int
    new_score: int
    new_level: int
    new_total_lines: int
    leveled_up: bool


def process_line_clearing(
    board: Board,
    current_level: int,
    current_score: int,
    current_lines_cleared: int,
    config: Optional[ScoringConfig] = None,
) -> LineClearOutcome:
    """Clear full rows on ``board`` and fold the result into the counters.

    The clear is scored at ``current_level``, before any level-up it causes.
    When nothing clears, ``board`` and the counters come back unchanged.
    """

    result = clear_lines(board)
    if result.lines_cleared == 0:
        return LineClearOutcome(
            new_board=board,
            lines_cleared=0,
            cleared_row_indices=(),
            score_gained=0,
            new_score=current_score,
            new_level=current_level,
            new_total_lines=current_lines_cleared,
            leveled_up=False,
        )

    score_gained = calculate_line_score(result.lines_cleared, current_level, config)
    new_total_lines = current_lines_cleared + result.lines_cleared
    new_level = calculate_level(new_total_lines, config)
    return LineClearOutcome(
        new_board=result.new_board,
        lines_cleared=result.lines_cleared,
        cleared_row_indices=result.cleared_row_indices,
        score_gained=score_gained,
        new_score=current_score + score_gained,
        new_level=new_level,
        new_total_lines=new_total_lines,
        leveled_up=new_level > current_level,
    )


def get_line_clear_name(lines_cleared: int) -> str:
    return LINE_CLEAR_NAMES.get(lines_cleared, "")


def validate_score_calculation(
    lines_cleared: int, level: int, expected_score: int, config: Optional[ScoringConfig] = None
) -> bool:
    """Return ``True`` if ``expected_score`` matches :func:`calculate_line_score`."""

    return calculate_line_score(lines_cleared, level, config) == expected_score
