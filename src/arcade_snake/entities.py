"""Plain records for everything that lives on the Arcade Snake grid."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import NamedTuple


class Position(NamedTuple):
    x: int
    y: int

    def moved(self, direction: Direction) -> Position:
        dx, dy = direction.value
        return Position(self.x + dx, self.y + dy)

    def in_bounds(self, grid_size: int) -> bool:
        return 0 <= self.x < grid_size and 0 <= self.y < grid_size

    def wrapped(self, grid_size: int) -> Position:
        return Position(self.x % grid_size, self.y % grid_size)


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))


class GameState(str, Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameover"
    LOADING = "loading"


class FoodKind(str, Enum):
    NORMAL = "normal"
    BONUS = "bonus"
    GOLDEN = "golden"


class PowerUpKind(str, Enum):
    SPEED = "speed"
    SLOW = "slow"
    GHOST = "ghost"
    INVINCIBLE = "invincible"
    DOUBLE_POINTS = "double"
    SHRINK = "shrink"
    MAGNET = "magnet"
    FREEZE = "freeze"


@dataclass(slots=True)
class Snake:
    """Head is ``segments[0]``; ``next_direction`` is applied on the next step."""

    segments: list[Position]
    direction: Direction = Direction.RIGHT
    next_direction: Direction = Direction.RIGHT

    @property
    def head(self) -> Position:
        return self.segments[0]

    @property
    def length(self) -> int:
        return len(self.segments)

    def copy(self) -> Snake:
        return replace(self, segments=list(self.segments))


@dataclass(slots=True)
class Food:
    position: Position
    value: int
    kind: FoodKind = FoodKind.NORMAL

    def copy(self) -> Food:
        return replace(self)


@dataclass(slots=True)
class PowerUp:
    id: str
    kind: PowerUpKind
    position: Position
    created_at: float
    lifetime: float

    def expired(self, now: float) -> bool:
        return now - self.created_at >= self.lifetime

    def copy(self) -> PowerUp:
        return replace(self)


@dataclass(slots=True)
class ActiveEffect:
    kind: PowerUpKind
    started_at: float
    duration: float

    def elapsed(self, now: float) -> float:
        return now - self.started_at

    def remaining(self, now: float) -> float:
        return max(0.0, self.duration - self.elapsed(now))

    def copy(self) -> ActiveEffect:
        return replace(self)


@dataclass(slots=True)
class Obstacle:
    id: str
    position: Position
    movable: bool = False
    direction: Direction | None = None

    def copy(self) -> Obstacle:
        return replace(self)


@dataclass(slots=True)
class GameStats:
    score: int = 0
    level: int = 1
    lives: int = 3
    combo: int = 1
    best_combo: int = 1
    food_eaten: int = 0
    power_ups_collected: int = 0
    time_elapsed: float = 0.0
    high_score: int = 0
    longest_snake: int = 0

    def copy(self) -> GameStats:
        return replace(self)
