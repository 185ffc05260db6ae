"""Shared fixtures for the engine tests."""

import random

import pytest

from arcade_snake.config import EngineConfig
from arcade_snake.engine import GameEngine
from arcade_snake.entities import GameState
from arcade_snake.events import EventType


@pytest.fixture
def make_engine():
    """Build a playing engine with an empty board (no food/obstacles/power-ups)."""

    def _make(seed=7, **config_kwargs):
        engine = GameEngine(EngineConfig(**config_kwargs), rng=random.Random(seed))
        engine.init()
        engine.store.food = None
        engine.store.obstacles = []
        engine.store.power_ups = []
        engine.index.rebuild(engine.store)
        engine.set_state(GameState.PLAYING)
        return engine

    return _make


@pytest.fixture
def recorder():
    """Subscribe to every event of an engine and collect them in order."""

    def _attach(engine, *event_types):
        seen = []
        for event_type in event_types or tuple(EventType):
            engine.on(event_type, seen.append)
        return seen

    return _attach
