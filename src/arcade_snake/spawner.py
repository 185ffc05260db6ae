"""Random placement of food and power-ups on free cells."""

from __future__ import annotations

import logging
import random
import uuid

from .config import (
    BASE_FOOD_SCORE,
    BONUS_FOOD_CHANCE,
    BONUS_FOOD_SCORE,
    GOLDEN_FOOD_CHANCE,
    GOLDEN_FOOD_SCORE,
    POWER_UP_LIFETIME,
    POWER_UP_MAX_COUNT,
)
from .entities import Food, FoodKind, Position, PowerUp, PowerUpKind
from .store import EntityStore

logger = logging.getLogger(__name__)

POWER_UP_KINDS: tuple[PowerUpKind, ...] = tuple(PowerUpKind)


def new_id(rng: random.Random) -> str:
    return uuid.UUID(int=rng.getrandbits(128), version=4).hex[:12]


def pick_free_cell(store: EntityStore, rng: random.Random) -> Position | None:
    options = store.free_cells()
    if not options:
        return None
    return rng.choice(options)


def roll_food_kind(rng: random.Random) -> tuple[FoodKind, int]:
    roll = rng.random()
    if roll < GOLDEN_FOOD_CHANCE:
        return FoodKind.GOLDEN, GOLDEN_FOOD_SCORE
    if roll < GOLDEN_FOOD_CHANCE + BONUS_FOOD_CHANCE:
        return FoodKind.BONUS, BONUS_FOOD_SCORE
    return FoodKind.NORMAL, BASE_FOOD_SCORE


def spawn_food(store: EntityStore, rng: random.Random) -> Food | None:
    """Replace the live food; leaves no food at all when the grid is full."""

    store.food = None
    position = pick_free_cell(store, rng)
    if position is None:
        logger.debug("Grid full, food spawn skipped")
        return None
    kind, value = roll_food_kind(rng)
    store.food = Food(position=position, value=value, kind=kind)
    return store.food


def spawn_power_up(
    store: EntityStore, rng: random.Random, now: float
) -> PowerUp | None:
    if len(store.power_ups) >= POWER_UP_MAX_COUNT:
        return None
    position = pick_free_cell(store, rng)
    if position is None:
        logger.debug("Grid full, power-up spawn skipped")
        return None
    power_up = PowerUp(
        id=new_id(rng),
        kind=rng.choice(POWER_UP_KINDS),
        position=position,
        created_at=now,
        lifetime=POWER_UP_LIFETIME,
    )
    store.power_ups.append(power_up)
    return power_up
