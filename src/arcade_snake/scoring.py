"""Combo, score and difficulty-curve helpers."""

from __future__ import annotations

from .config import (
    COMBO_TIME_WINDOW,
    LEVEL_UP_THRESHOLD,
    MAX_COMBO,
    SPEED_CONFIG,
    Difficulty,
)


def next_combo(combo: int, last_food_at: float | None, now: float) -> int:
    """Grow the combo for quick consecutive pickups, otherwise restart at 1."""

    if last_food_at is not None and now - last_food_at < COMBO_TIME_WINDOW:
        return min(combo + 1, MAX_COMBO)
    return 1


def food_points(value: int, combo: int, level: int) -> int:
    # floor(value * combo * (1 + level * 0.1)) without float rounding
    return (value * combo * (10 + level)) // 10


def level_for_score(score: int, threshold: int = LEVEL_UP_THRESHOLD) -> int:
    return score // threshold + 1


def interval_for_level(difficulty: Difficulty, level: int) -> float:
    """Milliseconds per move for ``level`` on the difficulty's speed curve."""

    curve = SPEED_CONFIG[difficulty]
    return float(max(curve["initial"] - (level - 1) * curve["increment"], curve["min"]))
