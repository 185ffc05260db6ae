"""Tests for scoring.py combo, points and speed-curve helpers."""

import pytest

from arcade_snake.config import Difficulty
from arcade_snake.scoring import food_points, interval_for_level, level_for_score, next_combo


class TestCombo:
    def test_first_pickup_is_one(self):
        assert next_combo(5, None, 1000) == 1

    def test_quick_pickup_increments(self):
        assert next_combo(3, 1000, 2999) == 4

    def test_window_is_exclusive(self):
        assert next_combo(3, 1000, 3000) == 1

    def test_capped(self):
        assert next_combo(20, 0, 10) == 20


@pytest.mark.parametrize(
    "value, combo, level, expected",
    [
        (10, 1, 1, 11),
        (10, 2, 1, 22),
        (50, 3, 2, 180),
        (100, 20, 5, 3000),
        (10, 1, 3, 13),
    ],
)
def test_food_points(value, combo, level, expected):
    assert food_points(value, combo, level) == expected


@pytest.mark.parametrize("score, level", [(0, 1), (99, 1), (100, 2), (106, 2), (250, 3)])
def test_level_for_score(score, level):
    assert level_for_score(score) == level


@pytest.mark.parametrize(
    "difficulty, level, expected",
    [
        (Difficulty.NORMAL, 1, 100),
        (Difficulty.NORMAL, 2, 96),
        (Difficulty.NORMAL, 20, 50),
        (Difficulty.EASY, 1, 150),
        (Difficulty.HARD, 3, 60),
        (Difficulty.INSANE, 50, 15),
    ],
)
def test_interval_for_level(difficulty, level, expected):
    assert interval_for_level(difficulty, level) == expected
