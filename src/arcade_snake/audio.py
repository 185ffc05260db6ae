"""Procedural chiptune cues for Arcade Snake events."""

from __future__ import annotations

import logging
import math
from array import array
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, List, Tuple

import pygame

from .events import EventType

if TYPE_CHECKING:
    from .engine import GameEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tone:
    """A square-wave sweep (``start`` -> ``end`` Hz) or a short arpeggio."""

    start: float
    end: float
    duration: float  # seconds, per note for arpeggios
    notes: Tuple[float, ...] = ()
    volume: float = 0.5
    attack: float = 0.02
    release: float = 0.3


TONES: Dict[str, Tone] = {
    "eat": Tone(start=523, end=784, duration=0.1),
    "powerup": Tone(start=400, end=800, duration=0.3, volume=0.45),
    "hit": Tone(start=200, end=100, duration=0.2, volume=0.6),
    "levelup": Tone(start=523, end=523, duration=0.2, notes=(523, 659, 784)),
    "gameover": Tone(start=300, end=50, duration=0.5, volume=0.6, release=0.5),
}

EVENT_TONES: Dict[EventType, str] = {
    EventType.FOOD_EATEN: "eat",
    EventType.POWER_UP_COLLECTED: "powerup",
    EventType.COLLISION: "hit",
    EventType.LEVEL_UP: "levelup",
    EventType.GAME_OVER: "gameover",
}


class AudioEngine:
    """Encapsulates mixer init plus tone playback; silent when disabled."""

    def __init__(self, enabled: bool = True, sample_rate: int = 22050) -> None:
        self.enabled = False
        self.sample_rate = sample_rate
        self.master_volume: float = 0.45
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        if enabled:
            self._init_audio()

    def _init_audio(self) -> None:
        try:
            pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=1)
        except pygame.error as exc:
            logger.warning("Audio disabled, mixer unavailable: %s", exc)
            return
        mixer_info = pygame.mixer.get_init()
        if mixer_info:
            self.sample_rate = mixer_info[0]
        self.sounds = {name: self._render(tone) for name, tone in TONES.items()}
        self.enabled = True

    def _render(self, tone: Tone) -> pygame.mixer.Sound:
        samples = render_samples(tone, self.sample_rate, self.master_volume)
        return pygame.mixer.Sound(buffer=samples)

    def play(self, name: str) -> None:
        if not self.enabled:
            return
        sound = self.sounds.get(name)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as exc:
            logger.warning("Audio playback failed, disabling: %s", exc)
            self.enabled = False

    def bind(self, engine: GameEngine) -> List[Callable[[], None]]:
        """Play a cue for every engine event; returns the unsubscribe hooks."""
        return [
            engine.on(event_type, lambda _event, name=name: self.play(name))
            for event_type, name in EVENT_TONES.items()
        ]


def _note_samples(
    start: float, end: float, tone: Tone, sample_rate: int
) -> List[float]:
    count = max(1, int(sample_rate * tone.duration))
    attack = int(count * tone.attack)
    release = int(count * tone.release)
    samples = [0.0] * count
    phase = 0.0
    for idx in range(count):
        progress = idx / count
        freq = start + (end - start) * progress
        phase = (phase + freq / sample_rate) % 1.0
        wave = 1.0 if phase < 0.5 else -1.0
        if attack and idx < attack:
            env = idx / attack
        elif release and idx >= count - release:
            env = (count - idx) / release
        else:
            env = 1.0
        samples[idx] = wave * env
    return samples


def render_samples(tone: Tone, sample_rate: int, master_volume: float = 1.0) -> array:
    """Render ``tone`` into signed 16-bit mono samples."""

    if tone.notes:
        raw: List[float] = []
        for note in tone.notes:
            raw.extend(_note_samples(note, note, tone, sample_rate))
    else:
        raw = _note_samples(tone.start, tone.end, tone, sample_rate)
    scale = 32767 * max(0.0, min(1.0, tone.volume * master_volume))
    return array("h", (int(max(-32767, min(32767, math.floor(v * scale)))) for v in raw))
