"""Precedence-ordered classification of the cell the head is entering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Union

from .entities import Food, Obstacle, Position, PowerUp, PowerUpKind

if TYPE_CHECKING:
    from .store import EntityStore


class CollisionKind(str, Enum):
    WALL = "wall"
    SELF = "self"
    FOOD = "food"
    POWER_UP = "powerup"
    OBSTACLE = "obstacle"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class WallHit:
    position: Position
    kind: ClassVar[CollisionKind] = CollisionKind.WALL


@dataclass(frozen=True, slots=True)
class SelfHit:
    position: Position
    kind: ClassVar[CollisionKind] = CollisionKind.SELF


@dataclass(frozen=True, slots=True)
class FoodHit:
    position: Position
    food: Food
    kind: ClassVar[CollisionKind] = CollisionKind.FOOD


@dataclass(frozen=True, slots=True)
class PowerUpHit:
    position: Position
    power_up: PowerUp
    kind: ClassVar[CollisionKind] = CollisionKind.POWER_UP


@dataclass(frozen=True, slots=True)
class ObstacleHit:
    position: Position
    obstacle: Obstacle
    kind: ClassVar[CollisionKind] = CollisionKind.OBSTACLE


@dataclass(frozen=True, slots=True)
class NoHit:
    position: Position
    kind: ClassVar[CollisionKind] = CollisionKind.NONE


Collision = Union[WallHit, SelfHit, FoodHit, PowerUpHit, ObstacleHit, NoHit]


def classify(position: Position, store: EntityStore) -> Collision:
    """Return the first matching collision in wall > self > food > power-up >
    obstacle > none order. Later categories are never inspected once one
    matches, so a food tile that also holds an obstacle reads as food."""

    if not position.in_bounds(store.grid_size):
        return WallHit(position)
    if position in store.snake.segments:
        return SelfHit(position)
    if store.food is not None and store.food.position == position:
        return FoodHit(position, store.food)
    for power_up in store.power_ups:
        if power_up.position == position:
            return PowerUpHit(position, power_up)
    for obstacle in store.obstacles:
        if obstacle.position == position:
            return ObstacleHit(position, obstacle)
    return NoHit(position)


def is_lethal(collision: Collision, effect: PowerUpKind | None) -> bool:
    """Whether ``collision`` kills the snake under the active effect.

    Walls are lethal unless ghosting (the caller wraps instead); self hits
    are survived only while invincible; obstacles are passed through while
    invincible or ghosting.
    """

    if isinstance(collision, WallHit):
        return effect is not PowerUpKind.GHOST
    if isinstance(collision, SelfHit):
        return effect is not PowerUpKind.INVINCIBLE
    if isinstance(collision, ObstacleHit):
        return effect not in (PowerUpKind.INVINCIBLE, PowerUpKind.GHOST)
    return False
