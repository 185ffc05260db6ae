"""Single-slot power-up effect lifecycle for Arcade Snake."""

from __future__ import annotations

import logging
import math
from enum import Enum

from .config import POWER_UP_DURATION, SLOW_EFFECT_CEILING, SPEED_EFFECT_FLOOR
from .entities import ActiveEffect, Position, PowerUpKind

logger = logging.getLogger(__name__)

SHRINK_MIN_LENGTH = 3


class EffectState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"


class EffectMachine:
    """Idle -> Active(kind) -> Idle, with at most one effect at a time.

    A new pickup replaces whatever is active without reverting it; the
    overwritten effect's expiry hook never runs.
    """

    def __init__(self, duration: float = POWER_UP_DURATION) -> None:
        self.duration = duration
        self._active: ActiveEffect | None = None

    @property
    def state(self) -> EffectState:
        return EffectState.ACTIVE if self._active else EffectState.IDLE

    @property
    def active(self) -> ActiveEffect | None:
        return self._active

    @property
    def kind(self) -> PowerUpKind | None:
        return self._active.kind if self._active else None

    def is_active(self, kind: PowerUpKind) -> bool:
        return self._active is not None and self._active.kind is kind

    def activate(self, kind: PowerUpKind, now: float) -> ActiveEffect | None:
        """Enter Active(kind) and return the effect that was overwritten."""

        previous = self._active
        if previous is not None:
            logger.debug("Effect %s overwritten by %s", previous.kind.value, kind.value)
        self._active = ActiveEffect(kind=kind, started_at=now, duration=self.duration)
        return previous

    def expire(self, now: float) -> ActiveEffect | None:
        """Drop back to Idle once the active effect has run its course."""

        effect = self._active
        if effect is None or effect.elapsed(now) < effect.duration:
            return None
        self._active = None
        return effect

    def reset(self) -> None:
        self._active = None

    def snapshot(self) -> ActiveEffect | None:
        return self._active.copy() if self._active else None


def interval_on_activate(kind: PowerUpKind, interval: float) -> float:
    if kind is PowerUpKind.SPEED:
        return max(interval * 0.5, SPEED_EFFECT_FLOOR)
    if kind is PowerUpKind.SLOW:
        return min(interval * 2, SLOW_EFFECT_CEILING)
    return interval


def interval_on_expire(kind: PowerUpKind, interval: float, base: float) -> float:
    """Undo the speed/slow multiplier, never overshooting ``base``."""

    if kind is PowerUpKind.SPEED:
        return min(interval * 2, base)
    if kind is PowerUpKind.SLOW:
        return max(interval * 0.5, base)
    return interval


def shrink(segments: list[Position]) -> list[Position]:
    if len(segments) <= SHRINK_MIN_LENGTH:
        return list(segments)
    return list(segments[: math.ceil(len(segments) / 2)])
