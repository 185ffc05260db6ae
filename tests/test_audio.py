"""Tests for audio.py tone rendering and engine binding (no mixer needed)."""

from arcade_snake.audio import EVENT_TONES, TONES, AudioEngine, render_samples
from arcade_snake.engine import GameEngine
from arcade_snake.events import EventType


class TestRenderSamples:
    def test_sweep_length(self):
        samples = render_samples(TONES["eat"], sample_rate=1000)
        assert samples.typecode == "h"
        assert len(samples) == 100

    def test_arpeggio_concatenates_notes(self):
        assert len(render_samples(TONES["levelup"], sample_rate=1000)) == 600

    def test_samples_stay_in_range(self):
        samples = render_samples(TONES["gameover"], sample_rate=8000, master_volume=5.0)
        assert max(samples) <= 32767
        assert min(samples) >= -32767

    def test_zero_volume_is_silent(self):
        samples = render_samples(TONES["hit"], sample_rate=1000, master_volume=0.0)
        assert set(samples) == {0}


class TestAudioEngine:
    def test_disabled_engine_is_silent(self):
        audio = AudioEngine(enabled=False)
        assert audio.enabled is False
        audio.play("eat")

    def test_bind_subscribes_every_event(self):
        engine = GameEngine()
        hooks = AudioEngine(enabled=False).bind(engine)
        assert len(hooks) == len(EVENT_TONES)
        for event_type in EventType:
            assert engine.bus.subscriber_count(event_type) == 1
        for unsubscribe in hooks:
            unsubscribe()
        assert all(engine.bus.subscriber_count(t) == 0 for t in EventType)
