"""Centralized configuration and tuning tables for Arcade Snake."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Mapping


class ConfigError(ValueError):
    """Raised when an engine configuration cannot be built."""


class Difficulty(str, Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    INSANE = "insane"


class GameMode(str, Enum):
    CLASSIC = "classic"
    ARCADE = "arcade"
    SURVIVAL = "survival"
    CHALLENGE = "challenge"
    MULTIPLAYER = "multiplayer"


class Theme(str, Enum):
    NEON = "neon"
    CLASSIC = "classic"
    RAINBOW = "rainbow"
    FIRE = "fire"
    ICE = "ice"
    MATRIX = "matrix"
    CYBERPUNK = "cyberpunk"


def _default_data_dir() -> Path:
    """Return a platform-appropriate user data directory for profiles."""

    if sys.platform.startswith("win"):
        base = Path(os.getenv("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    return base / "arcade-snake"


DATA_DIR = Path(os.getenv("ARCADE_SNAKE_DATA_DIR") or _default_data_dir())
PROFILE_FILE = Path(os.getenv("ARCADE_SNAKE_PROFILE_FILE") or DATA_DIR / "profile.json")

GRID_SIZES: dict[str, int] = {
    "small": 20,
    "medium": 25,
    "large": 30,
    "xlarge": 40,
}
MIN_GRID_SIZE: int = 5
CELL_SIZE: int = 16  # pixels, renderer only
FPS: int = 60

# Milliseconds per move: initial, per-level decrement, floor
SPEED_CONFIG: dict[Difficulty, dict[str, int]] = {
    Difficulty.EASY: {"initial": 150, "increment": 3, "min": 80},
    Difficulty.NORMAL: {"initial": 100, "increment": 4, "min": 50},
    Difficulty.HARD: {"initial": 70, "increment": 5, "min": 30},
    Difficulty.INSANE: {"initial": 40, "increment": 3, "min": 15},
}
INITIAL_LIVES: dict[Difficulty, int] = {
    Difficulty.EASY: 5,
    Difficulty.NORMAL: 3,
    Difficulty.HARD: 2,
    Difficulty.INSANE: 1,
}

INITIAL_SNAKE_LENGTH: int = 3
COMBO_TIME_WINDOW: int = 2000  # ms
MAX_COMBO: int = 20

POWER_UP_DURATION: int = 5000  # ms
POWER_UP_LIFETIME: int = 10000  # ms
POWER_UP_SPAWN_CHANCE: float = 0.2
POWER_UP_MAX_COUNT: int = 3
SPEED_EFFECT_FLOOR: float = 20.0  # ms
SLOW_EFFECT_CEILING: float = 300.0  # ms

BASE_FOOD_SCORE: int = 10
BONUS_FOOD_SCORE: int = 50
GOLDEN_FOOD_SCORE: int = 100
GOLDEN_FOOD_CHANCE: float = 0.05
BONUS_FOOD_CHANCE: float = 0.15
LEVEL_UP_THRESHOLD: int = 100

MAX_OBSTACLES: int = 15
OBSTACLE_TICK_EVERY: int = 10  # update() calls between obstacle moves
OBSTACLE_CONFIG: dict[GameMode, dict[str, float]] = {
    GameMode.CLASSIC: {"count": 0, "moving_chance": 0.0},
    GameMode.ARCADE: {"count": 5, "moving_chance": 0.3},
    GameMode.SURVIVAL: {"count": 8, "moving_chance": 0.5},
    GameMode.CHALLENGE: {"count": 10, "moving_chance": 0.4},
    GameMode.MULTIPLAYER: {"count": 6, "moving_chance": 0.3},
}
POWER_UP_MODES: frozenset[GameMode] = frozenset({GameMode.ARCADE})


def _coerce(enum_cls: type[Enum], value: Any, field_name: str) -> Any:
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ConfigError(
            f"unknown {field_name} {value!r} (expected one of: {allowed})"
        ) from exc


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable options an engine is built from.

    Only ``grid_size``, ``difficulty`` and ``mode`` change the simulation.
    The rest are carried through untouched for the renderer and audio
    collaborators.
    """

    grid_size: int = GRID_SIZES["medium"]
    cell_size: int = CELL_SIZE
    initial_speed: int = 100
    speed_increment: int = 5
    max_speed: int = 20
    difficulty: Difficulty = Difficulty.NORMAL
    theme: Theme = Theme.NEON
    mode: GameMode = GameMode.CLASSIC
    sound_enabled: bool = True
    music_enabled: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "difficulty", _coerce(Difficulty, self.difficulty, "difficulty")
        )
        object.__setattr__(self, "mode", _coerce(GameMode, self.mode, "mode"))
        object.__setattr__(self, "theme", _coerce(Theme, self.theme, "theme"))
        if not isinstance(self.grid_size, int) or self.grid_size < MIN_GRID_SIZE:
            raise ConfigError(
                f"grid_size must be an integer >= {MIN_GRID_SIZE}, got {self.grid_size!r}"
            )

    @property
    def speed(self) -> dict[str, int]:
        return SPEED_CONFIG[self.difficulty]

    @property
    def starting_lives(self) -> int:
        return INITIAL_LIVES[self.difficulty]

    @property
    def obstacles(self) -> dict[str, float]:
        return OBSTACLE_CONFIG[self.mode]

    @property
    def power_ups_enabled(self) -> bool:
        return self.mode in POWER_UP_MODES

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any], **overrides: Any) -> EngineConfig:
        """Build a config from persisted user settings, ignoring unknown keys."""

        known = {f.name for f in fields(cls)}
        values = {key: val for key, val in settings.items() if key in known}
        values.update(overrides)
        return cls(**values)

    def to_settings(self) -> dict[str, Any]:
        return {
            "grid_size": self.grid_size,
            "difficulty": self.difficulty.value,
            "theme": self.theme.value,
            "mode": self.mode.value,
            "sound_enabled": self.sound_enabled,
            "music_enabled": self.music_enabled,
        }
