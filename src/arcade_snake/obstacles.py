"""Obstacle field generation and bouncing motion for Arcade Snake."""

from __future__ import annotations

import logging
import random
from typing import Iterable, List

from .config import MAX_OBSTACLES
from .entities import Direction, Obstacle, Position
from .spawner import new_id, pick_free_cell
from .store import EntityStore

logger = logging.getLogger(__name__)

DIRECTION_CHOICES: tuple[Direction, ...] = tuple(Direction)


def obstacle_count(base_count: int, level: int) -> int:
    return max(0, min(int(base_count) + level - 1, MAX_OBSTACLES))


def generate_obstacles(
    store: EntityStore,
    rng: random.Random,
    *,
    base_count: int,
    moving_chance: float,
    level: int,
) -> List[Obstacle]:
    """Replace the obstacle field, scaling the count with ``level``."""

    store.obstacles = []
    for _ in range(obstacle_count(base_count, level)):
        position = pick_free_cell(store, rng)
        if position is None:
            logger.debug("Grid full after %d obstacles", len(store.obstacles))
            break
        movable = rng.random() < moving_chance
        store.obstacles.append(
            Obstacle(
                id=new_id(rng),
                position=position,
                movable=movable,
                direction=rng.choice(DIRECTION_CHOICES) if movable else None,
            )
        )
    return store.obstacles


def _blocked_cells(store: EntityStore) -> set[Position]:
    blocked = set(store.snake.segments)
    if store.food is not None:
        blocked.add(store.food.position)
    blocked.update(p.position for p in store.power_ups)
    return blocked


def advance_obstacles(store: EntityStore) -> List[Obstacle]:
    """Move every movable obstacle one cell, bouncing instead of leaving the
    grid or stepping onto the snake, food, a power-up or another obstacle.
    Returns the obstacles that bounced."""

    blocked = _blocked_cells(store)
    taken = {o.position for o in store.obstacles}
    bounced: List[Obstacle] = []
    for obstacle in _movable(store.obstacles):
        candidate = obstacle.position.moved(obstacle.direction)
        if not candidate.in_bounds(store.grid_size) or candidate in blocked or candidate in taken:
            obstacle.direction = obstacle.direction.opposite
            bounced.append(obstacle)
            continue
        taken.discard(obstacle.position)
        taken.add(candidate)
        obstacle.position = candidate
    if bounced:
        logger.debug("%d obstacle(s) bounced", len(bounced))
    return bounced


def _movable(obstacles: Iterable[Obstacle]) -> Iterable[Obstacle]:
    return (o for o in obstacles if o.movable and o.direction is not None)
