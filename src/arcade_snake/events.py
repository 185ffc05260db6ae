"""Synchronous publish/subscribe bus for engine domain events."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, Union

from .collision import CollisionKind
from .entities import GameStats, Position, PowerUp


class EventType(str, Enum):
    FOOD_EATEN = "FOOD_EATEN"
    POWER_UP_COLLECTED = "POWER_UP_COLLECTED"
    COLLISION = "COLLISION"
    LEVEL_UP = "LEVEL_UP"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True, slots=True)
class FoodEaten:
    position: Position
    points: int
    type: ClassVar[EventType] = EventType.FOOD_EATEN


@dataclass(frozen=True, slots=True)
class PowerUpCollected:
    power_up: PowerUp
    type: ClassVar[EventType] = EventType.POWER_UP_COLLECTED


@dataclass(frozen=True, slots=True)
class CollisionOccurred:
    collision_kind: CollisionKind
    position: Position
    type: ClassVar[EventType] = EventType.COLLISION


@dataclass(frozen=True, slots=True)
class LevelUp:
    level: int
    type: ClassVar[EventType] = EventType.LEVEL_UP


@dataclass(frozen=True, slots=True)
class GameOver:
    stats: GameStats
    type: ClassVar[EventType] = EventType.GAME_OVER


GameEvent = Union[FoodEaten, PowerUpCollected, CollisionOccurred, LevelUp, GameOver]
Subscriber = Callable[[GameEvent], None]


class EventBus:
    """Delivers each event to its subscribers in registration order, inside
    the ``publish`` call. Subscriber errors propagate to the publisher."""

    def __init__(self) -> None:
        self._subscribers: dict[EventType, dict[int, Subscriber]] = {}
        self._handles = itertools.count()

    def subscribe(
        self, event_type: EventType | str, callback: Subscriber
    ) -> Callable[[], None]:
        kind = EventType(event_type)
        handle = next(self._handles)
        self._subscribers.setdefault(kind, {})[handle] = callback

        def unsubscribe() -> None:
            self._subscribers.get(kind, {}).pop(handle, None)

        return unsubscribe

    def publish(self, event: GameEvent) -> None:
        # Snapshot so callbacks may (un)subscribe while being notified
        for callback in list(self._subscribers.get(event.type, {}).values()):
            callback(event)

    def subscriber_count(self, event_type: EventType | str) -> int:
        return len(self._subscribers.get(EventType(event_type), {}))

    def clear(self) -> None:
        self._subscribers.clear()
