"""Tests for config.py engine options."""

import dataclasses

import pytest

from arcade_snake.config import (
    ConfigError,
    Difficulty,
    EngineConfig,
    GameMode,
    Theme,
)


class TestEngineConfig:
    def test_defaults(self):
        config = EngineConfig()
        assert config.grid_size == 25
        assert config.difficulty is Difficulty.NORMAL
        assert config.mode is GameMode.CLASSIC
        assert config.starting_lives == 3
        assert config.speed == {"initial": 100, "increment": 4, "min": 50}

    def test_strings_are_coerced(self):
        config = EngineConfig(difficulty="hard", mode="survival", theme="ice")
        assert config.difficulty is Difficulty.HARD
        assert config.mode is GameMode.SURVIVAL
        assert config.theme is Theme.ICE
        assert config.starting_lives == 2
        assert config.obstacles["count"] == 8

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"difficulty": "nightmare"},
            {"mode": "battle-royale"},
            {"theme": "sepia"},
            {"grid_size": 4},
            {"grid_size": "25"},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigError):
            EngineConfig(**kwargs)

    def test_config_error_is_a_value_error(self):
        assert issubclass(ConfigError, ValueError)

    def test_frozen(self):
        config = EngineConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.grid_size = 10

    @pytest.mark.parametrize("mode, enabled", [("arcade", True), ("classic", False), ("survival", False)])
    def test_power_ups_enabled(self, mode, enabled):
        assert EngineConfig(mode=mode).power_ups_enabled is enabled


class TestSettings:
    def test_from_settings_ignores_unknown_keys(self):
        config = EngineConfig.from_settings({"difficulty": "easy", "volume": 11})
        assert config.difficulty is Difficulty.EASY

    def test_overrides_win(self):
        config = EngineConfig.from_settings({"difficulty": "easy"}, difficulty="insane")
        assert config.difficulty is Difficulty.INSANE

    def test_round_trip(self):
        original = EngineConfig(grid_size=30, difficulty="hard", theme="fire", sound_enabled=False)
        restored = EngineConfig.from_settings(original.to_settings())
        assert restored == original

    def test_settings_are_json_friendly(self):
        settings = EngineConfig(mode="arcade").to_settings()
        assert settings["mode"] == "arcade"
        assert all(isinstance(v, (str, int, bool)) for v in settings.values())
