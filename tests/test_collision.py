"""Tests for collision.py classification order and lethality rules."""

import pytest

from arcade_snake.collision import (
    CollisionKind,
    FoodHit,
    NoHit,
    ObstacleHit,
    PowerUpHit,
    SelfHit,
    WallHit,
    classify,
    is_lethal,
)
from arcade_snake.entities import Food, Obstacle, Position, PowerUp, PowerUpKind
from arcade_snake.store import EntityStore


@pytest.fixture
def store():
    # 10x10 grid, snake on (5,5) (4,5) (3,5)
    return EntityStore(grid_size=10, lives=3)


def _power_up(x, y):
    return PowerUp(id="p", kind=PowerUpKind.SLOW, position=Position(x, y), created_at=0, lifetime=10000)


class TestClassify:
    """Precedence is wall > self > food > power-up > obstacle > none."""

    @pytest.mark.parametrize("cell", [(-1, 0), (10, 3), (3, -1), (0, 10)])
    def test_out_of_bounds_is_wall(self, store, cell):
        assert isinstance(classify(Position(*cell), store), WallHit)

    def test_body_cell_is_self(self, store):
        hit = classify(Position(4, 5), store)
        assert isinstance(hit, SelfHit)
        assert hit.kind is CollisionKind.SELF

    def test_self_beats_food(self, store):
        store.food = Food(position=Position(3, 5), value=10)
        assert isinstance(classify(Position(3, 5), store), SelfHit)

    def test_food_beats_power_up_and_obstacle(self, store):
        store.food = Food(position=Position(1, 1), value=10)
        store.power_ups.append(_power_up(1, 1))
        store.obstacles.append(Obstacle(id="o", position=Position(1, 1)))
        hit = classify(Position(1, 1), store)
        assert isinstance(hit, FoodHit)
        assert hit.food is store.food

    def test_power_up_beats_obstacle(self, store):
        store.power_ups.append(_power_up(2, 2))
        store.obstacles.append(Obstacle(id="o", position=Position(2, 2)))
        hit = classify(Position(2, 2), store)
        assert isinstance(hit, PowerUpHit)
        assert hit.power_up.kind is PowerUpKind.SLOW

    def test_obstacle(self, store):
        store.obstacles.append(Obstacle(id="o", position=Position(8, 8)))
        assert isinstance(classify(Position(8, 8), store), ObstacleHit)

    def test_empty_cell(self, store):
        hit = classify(Position(0, 0), store)
        assert isinstance(hit, NoHit)
        assert hit.kind is CollisionKind.NONE


class TestIsLethal:
    """Which active effect lets the snake survive which collision."""

    WALL = WallHit(Position(-1, 0))
    SELF = SelfHit(Position(1, 1))
    OBSTACLE = ObstacleHit(Position(1, 1), Obstacle(id="o", position=Position(1, 1)))

    @pytest.mark.parametrize(
        "collision, effect, lethal",
        [
            (WALL, None, True),
            (WALL, PowerUpKind.GHOST, False),
            (WALL, PowerUpKind.INVINCIBLE, True),
            (SELF, None, True),
            (SELF, PowerUpKind.INVINCIBLE, False),
            (SELF, PowerUpKind.GHOST, True),
            (OBSTACLE, None, True),
            (OBSTACLE, PowerUpKind.GHOST, False),
            (OBSTACLE, PowerUpKind.INVINCIBLE, False),
            (OBSTACLE, PowerUpKind.SPEED, True),
        ],
    )
    def test_table(self, collision, effect, lethal):
        assert is_lethal(collision, effect) is lethal

    def test_pickups_and_empty_cells_never_kill(self):
        food = FoodHit(Position(0, 0), Food(position=Position(0, 0), value=10))
        assert is_lethal(food, None) is False
        assert is_lethal(NoHit(Position(0, 0)), None) is False
