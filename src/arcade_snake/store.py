"""Canonical owner of the snake, pickups, obstacles and stats."""

from __future__ import annotations

from .config import INITIAL_SNAKE_LENGTH
from .entities import (
    Direction,
    Food,
    GameStats,
    Obstacle,
    Position,
    PowerUp,
    Snake,
)


def initial_segments(grid_size: int) -> list[Position]:
    """Horizontal strip centred on the grid with the head pointing right."""

    center = grid_size // 2
    return [Position(center - i, center) for i in range(INITIAL_SNAKE_LENGTH)]


class EntityStore:
    """Mutable game world. Only the engine writes to it."""

    def __init__(self, grid_size: int, lives: int, high_score: int = 0) -> None:
        self.grid_size = grid_size
        self.snake = Snake(initial_segments(grid_size))
        self.food: Food | None = None
        self.power_ups: list[PowerUp] = []
        self.obstacles: list[Obstacle] = []
        self.stats = GameStats(lives=lives, high_score=high_score)
        self.stats.longest_snake = self.snake.length

    def reset(self, lives: int) -> None:
        """Start a fresh game; only the high score survives."""

        self.respawn_snake()
        self.food = None
        self.power_ups = []
        self.obstacles = []
        self.stats = GameStats(
            lives=lives,
            high_score=self.stats.high_score,
            longest_snake=self.snake.length,
        )

    def respawn_snake(self) -> None:
        self.snake = Snake(
            initial_segments(self.grid_size),
            direction=Direction.RIGHT,
            next_direction=Direction.RIGHT,
        )

    def occupied_cells(self) -> set[Position]:
        cells = set(self.snake.segments)
        if self.food is not None:
            cells.add(self.food.position)
        cells.update(p.position for p in self.power_ups)
        cells.update(o.position for o in self.obstacles)
        return cells

    def free_cells(self) -> list[Position]:
        """Every unoccupied cell in row-major order (full grid scan)."""

        taken = self.occupied_cells()
        return [
            Position(x, y)
            for y in range(self.grid_size)
            for x in range(self.grid_size)
            if (x, y) not in taken
        ]

    def remove_power_up(self, ident: str) -> PowerUp | None:
        for idx, power_up in enumerate(self.power_ups):
            if power_up.id == ident:
                return self.power_ups.pop(idx)
        return None

    def record_score(self, points: int) -> None:
        self.stats.score += points
        if self.stats.score > self.stats.high_score:
            self.stats.high_score = self.stats.score

    # --- Snapshots -------------------------------------------------------

    def snake_snapshot(self) -> Snake:
        return self.snake.copy()

    def food_snapshot(self) -> Food | None:
        return self.food.copy() if self.food else None

    def power_ups_snapshot(self) -> list[PowerUp]:
        return [p.copy() for p in self.power_ups]

    def obstacles_snapshot(self) -> list[Obstacle]:
        return [o.copy() for o in self.obstacles]

    def stats_snapshot(self) -> GameStats:
        return self.stats.copy()
