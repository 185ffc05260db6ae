"""Arcade Snake simulation engine with a fixed-step movement accumulator."""

from __future__ import annotations

import logging
import random
from typing import Callable, Iterable, Sequence

from .collision import (
    Collision,
    FoodHit,
    NoHit,
    PowerUpHit,
    SelfHit,
    WallHit,
    classify,
    is_lethal,
)
from .config import OBSTACLE_TICK_EVERY, POWER_UP_SPAWN_CHANCE, EngineConfig
from .effects import EffectMachine, interval_on_activate, interval_on_expire, shrink
from .entities import (
    ActiveEffect,
    Direction,
    Food,
    GameState,
    GameStats,
    Obstacle,
    PowerUp,
    PowerUpKind,
    Snake,
)
from .events import (
    CollisionOccurred,
    EventBus,
    EventType,
    FoodEaten,
    GameOver,
    LevelUp,
    PowerUpCollected,
    Subscriber,
)
from .obstacles import advance_obstacles, generate_obstacles
from .scoring import food_points, interval_for_level, level_for_score, next_combo
from .spatial import SpatialIndex
from .spawner import pick_free_cell, spawn_food, spawn_power_up
from .store import EntityStore

logger = logging.getLogger(__name__)


class GameEngine:
    """Owns the game world and advances it one grid cell per move interval.

    The caller drives time through :meth:`update`; the engine never
    schedules itself. Every getter hands out a copy.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        rng: random.Random | None = None,
        high_score: int = 0,
    ) -> None:
        self.config = config or EngineConfig()
        self.rng = rng or random.Random()
        self.store = EntityStore(
            self.config.grid_size, self.config.starting_lives, high_score
        )
        self.effects = EffectMachine()
        self.index = SpatialIndex()
        self.bus = EventBus()

        self.state = GameState.MENU
        self.move_interval = interval_for_level(self.config.difficulty, 1)
        self._move_accumulator = 0.0
        self._frame_count = 0
        self._last_food_at: float | None = None
        self._food_pending = False

        self.index.rebuild(self.store)

    # --- Lifecycle -----------------------------------------------------

    def init(self) -> None:
        """Reset the world and lay out the first food and obstacle field."""
        self._reset()
        self._spawn_food()
        self._generate_obstacles()
        self.index.rebuild(self.store)

    def _reset(self) -> None:
        self.store.reset(self.config.starting_lives)
        self.effects.reset()
        self.move_interval = interval_for_level(self.config.difficulty, 1)
        self._move_accumulator = 0.0
        self._frame_count = 0
        self._last_food_at = None
        self._food_pending = False

    def get_state(self) -> GameState:
        return self.state

    def set_state(self, state: GameState | str) -> None:
        new_state = GameState(state)
        if self.state is GameState.PAUSED and new_state is GameState.PLAYING:
            self._move_accumulator = 0.0
        self.state = new_state

    def toggle_pause(self) -> None:
        """Toggle between paused and playing (ignored in other states)."""
        if self.state is GameState.PAUSED:
            self.set_state(GameState.PLAYING)
        elif self.state is GameState.PLAYING:
            self.set_state(GameState.PAUSED)

    @property
    def clock(self) -> float:
        """Milliseconds of play since the last reset."""
        return self.store.stats.time_elapsed

    # --- Input -----------------------------------------------------------

    def change_direction(self, direction: Direction | Sequence[int]) -> bool:
        """Queue a turn for the next step; reversing onto the body is ignored.

        Accepted while paused so the turn applies on resume.
        """
        if not isinstance(direction, Direction):
            direction = Direction(tuple(direction))
        snake = self.store.snake
        if direction is snake.direction.opposite:
            return False
        snake.next_direction = direction
        return True

    # --- Per-frame update ----------------------------------------------

    def update(self, delta_ms: float) -> None:
        """Advance the simulation by ``delta_ms`` of wall time."""
        if self.state is not GameState.PLAYING:
            return

        self.store.stats.time_elapsed += delta_ms
        self._move_accumulator += delta_ms
        if self._move_accumulator >= self.move_interval:
            self._move_accumulator = 0.0
            self.step()

        if self.state is GameState.PLAYING:
            self._expire_timers()
            if self._frame_count % OBSTACLE_TICK_EVERY == 0:
                advance_obstacles(self.store)
            if self._food_pending:
                self._spawn_food()
        self._frame_count += 1
        self.index.rebuild(self.store)

    def step(self) -> None:
        """Advance the snake by exactly one grid cell and resolve the result."""
        snake = self.store.snake
        snake.direction = snake.next_direction
        target = snake.head.moved(snake.direction)
        effect = self.effects.kind

        collision = classify(target, self.store)
        if isinstance(collision, WallHit):
            if is_lethal(collision, effect):
                self._handle_death(collision)
                return
            collision = classify(target.wrapped(self.config.grid_size), self.store)
            if isinstance(collision, SelfHit):
                # a ghost wrapping onto its own body keeps going
                collision = NoHit(collision.position)
        if is_lethal(collision, effect):
            self._handle_death(collision)
            return

        snake.segments.insert(0, collision.position)
        if isinstance(collision, FoodHit):
            self._eat_food(collision.food)
        else:
            snake.segments.pop()
        if isinstance(collision, PowerUpHit):
            self._collect_power_up(collision.power_up)

        stats = self.store.stats
        stats.longest_snake = max(stats.longest_snake, snake.length)

    # --- Pickups ---------------------------------------------------------

    def _eat_food(self, food: Food) -> None:
        stats = self.store.stats
        now = self.clock
        stats.combo = next_combo(stats.combo, self._last_food_at, now)
        stats.best_combo = max(stats.best_combo, stats.combo)
        self._last_food_at = now

        points = food_points(food.value, stats.combo, stats.level)
        self.store.record_score(points)
        stats.food_eaten += 1
        self.bus.publish(FoodEaten(position=food.position, points=points))

        new_level = level_for_score(stats.score)
        if new_level > stats.level:
            self._level_up(new_level)

        self._spawn_food()
        if self.config.power_ups_enabled and self.rng.random() < POWER_UP_SPAWN_CHANCE:
            spawn_power_up(self.store, self.rng, now)

    def _spawn_food(self) -> None:
        """Place new food; on a full grid, retry on every update until a cell frees up."""
        self._food_pending = spawn_food(self.store, self.rng) is None

    def _collect_power_up(self, power_up: PowerUp) -> None:
        self.store.remove_power_up(power_up.id)
        self.store.stats.power_ups_collected += 1
        self.effects.activate(power_up.kind, self.clock)

        if power_up.kind is PowerUpKind.DOUBLE_POINTS:
            self.store.record_score(self.store.stats.score)
        elif power_up.kind is PowerUpKind.SHRINK:
            self.store.snake.segments = shrink(self.store.snake.segments)
        else:
            self.move_interval = interval_on_activate(power_up.kind, self.move_interval)

        logger.debug("Collected %s power-up", power_up.kind.value)
        self.bus.publish(PowerUpCollected(power_up=power_up.copy()))

    def _expire_timers(self) -> None:
        now = self.clock
        self.store.power_ups = [p for p in self.store.power_ups if not p.expired(now)]
        expired = self.effects.expire(now)
        if expired is not None:
            base = interval_for_level(self.config.difficulty, self.store.stats.level)
            self.move_interval = interval_on_expire(expired.kind, self.move_interval, base)

    # --- Levels & obstacles -------------------------------------------

    def _level_up(self, new_level: int) -> None:
        self.store.stats.level = new_level
        self.move_interval = interval_for_level(self.config.difficulty, new_level)
        self._generate_obstacles()
        logger.info(
            "Level %d reached, move interval %.0fms", new_level, self.move_interval
        )
        self.bus.publish(LevelUp(level=new_level))

    def _generate_obstacles(self) -> None:
        settings = self.config.obstacles
        generate_obstacles(
            self.store,
            self.rng,
            base_count=int(settings["count"]),
            moving_chance=settings["moving_chance"],
            level=self.store.stats.level,
        )

    # --- Death & game over --------------------------------------------

    def _handle_death(self, collision: Collision) -> None:
        stats = self.store.stats
        stats.lives -= 1
        logger.info(
            "Snake hit %s at %s, %d lives left",
            collision.kind.value,
            tuple(collision.position),
            stats.lives,
        )
        self.bus.publish(
            CollisionOccurred(collision_kind=collision.kind, position=collision.position)
        )
        if stats.lives <= 0:
            self._game_over()
            return
        self.store.respawn_snake()
        stats.combo = 1
        self._move_accumulator = 0.0
        self._clear_respawn_area()

    def _clear_respawn_area(self) -> None:
        """Keep the respawned snake from sharing a cell with anything else."""
        body = set(self.store.snake.segments)
        self.store.power_ups = [p for p in self.store.power_ups if p.position not in body]
        for obstacle in self.store.obstacles:
            if obstacle.position in body:
                cell = pick_free_cell(self.store, self.rng)
                if cell is None:
                    continue
                obstacle.position = cell
        self.store.obstacles = [o for o in self.store.obstacles if o.position not in body]
        if self.store.food is not None and self.store.food.position in body:
            self._spawn_food()

    def _game_over(self) -> None:
        self.state = GameState.GAME_OVER
        final = self.store.stats_snapshot()
        logger.info("Game over: score %d, level %d", final.score, final.level)
        self.bus.publish(GameOver(stats=final))

    # --- Snapshots -------------------------------------------------------

    def get_snake(self) -> Snake:
        return self.store.snake_snapshot()

    def get_food(self) -> Food | None:
        return self.store.food_snapshot()

    def get_power_ups(self) -> list[PowerUp]:
        return self.store.power_ups_snapshot()

    def get_obstacles(self) -> list[Obstacle]:
        return self.store.obstacles_snapshot()

    def get_active_effect(self) -> ActiveEffect | None:
        return self.effects.snapshot()

    def get_stats(self) -> GameStats:
        return self.store.stats_snapshot()

    def get_config(self) -> EngineConfig:
        # Frozen, so sharing it is already a safe copy
        return self.config

    def occupants_at(self, position: Iterable[int]) -> set[str]:
        return self.index.query(position)

    def occupants_near(self, position: Iterable[int], radius: int) -> set[str]:
        return self.index.query_radius(position, radius)

    # --- Events ----------------------------------------------------------

    def on(
        self, event_type: EventType | str, callback: Subscriber
    ) -> Callable[[], None]:
        """Subscribe to an engine event and return the unsubscribe function."""
        return self.bus.subscribe(event_type, callback)
