"""Profile persistence: settings, high score, lifetime stats, achievements."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable

from .config import PROFILE_FILE, EngineConfig
from .entities import GameStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Achievement:
    id: str
    name: str
    description: str
    check: Callable[[GameStats, "LifetimeStats"], bool]


@dataclass(slots=True)
class LifetimeStats:
    games_played: int = 0
    total_score: int = 0
    total_food_eaten: int = 0
    total_power_ups: int = 0
    total_time_played: float = 0.0


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        "first_food", "First Bite", "Eat your first food",
        lambda game, life: game.food_eaten >= 1,
    ),
    Achievement(
        "survivor", "Survivor", "Survive for 5 minutes",
        lambda game, life: game.time_elapsed >= 300_000,
    ),
    Achievement(
        "combo_master", "Combo Master", "Achieve a 10x combo",
        lambda game, life: game.best_combo >= 10,
    ),
    Achievement(
        "level_10", "Level Master", "Reach level 10",
        lambda game, life: game.level >= 10,
    ),
    Achievement(
        "score_1000", "High Scorer", "Score 1000 points",
        lambda game, life: game.score >= 1000,
    ),
    Achievement(
        "power_collector", "Power Collector", "Collect 20 power-ups",
        lambda game, life: life.total_power_ups >= 20,
    ),
    Achievement(
        "snake_long", "Python", "Grow snake to 50 segments",
        lambda game, life: game.longest_snake >= 50,
    ),
)


@dataclass(slots=True)
class Profile:
    settings: dict[str, Any] = field(default_factory=lambda: EngineConfig().to_settings())
    high_score: int = 0
    lifetime: LifetimeStats = field(default_factory=LifetimeStats)
    unlocked: list[str] = field(default_factory=list)


class ProfileStore:
    """Reads and writes a JSON profile; a broken file means a fresh profile."""

    def __init__(self, path: Path | str = PROFILE_FILE) -> None:
        self.path = Path(path)
        self.profile = self._load()

    def _load(self) -> Profile:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return Profile()
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable profile %s: %s", self.path, exc)
            return Profile()
        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed profile %s", self.path)
            return Profile()

        profile = Profile()
        try:
            profile.settings.update(raw.get("settings") or {})
            profile.high_score = int(raw.get("high_score", 0))
            lifetime = raw.get("lifetime") or {}
            profile.lifetime = LifetimeStats(
                **{k: v for k, v in lifetime.items() if k in LifetimeStats.__dataclass_fields__}
            )
            profile.unlocked = [str(i) for i in raw.get("unlocked", [])]
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning("Ignoring malformed profile %s: %s", self.path, exc)
            return Profile()
        return profile

    def save(self) -> None:
        payload = {
            "settings": self.profile.settings,
            "high_score": self.profile.high_score,
            "lifetime": asdict(self.profile.lifetime),
            "unlocked": self.profile.unlocked,
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not save profile to %s: %s", self.path, exc)

    @property
    def high_score(self) -> int:
        return self.profile.high_score

    def engine_config(self, **overrides: Any) -> EngineConfig:
        return EngineConfig.from_settings(self.profile.settings, **overrides)

    def update_settings(self, **settings: Any) -> None:
        self.profile.settings.update(settings)
        self.save()

    def record_game(self, stats: GameStats) -> list[str]:
        """Fold a finished game into the profile; return new achievement ids."""

        life = self.profile.lifetime
        life.games_played += 1
        life.total_score += stats.score
        life.total_food_eaten += stats.food_eaten
        life.total_power_ups += stats.power_ups_collected
        life.total_time_played += stats.time_elapsed
        self.profile.high_score = max(self.profile.high_score, stats.score, stats.high_score)

        unlocked = []
        for achievement in ACHIEVEMENTS:
            if achievement.id in self.profile.unlocked:
                continue
            if achievement.check(stats, life):
                self.profile.unlocked.append(achievement.id)
                unlocked.append(achievement.id)
        if unlocked:
            logger.info("Achievements unlocked: %s", ", ".join(unlocked))
        self.save()
        return unlocked
