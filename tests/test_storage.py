"""Tests for storage.py profile persistence and achievements."""

import json
import logging

from arcade_snake.config import Difficulty
from arcade_snake.entities import GameStats
from arcade_snake.storage import ProfileStore


class TestLoad:
    def test_missing_file_gives_fresh_profile(self, tmp_path):
        store = ProfileStore(tmp_path / "profile.json")
        assert store.high_score == 0
        assert store.profile.unlocked == []
        assert store.engine_config().difficulty is Difficulty.NORMAL

    def test_corrupt_file_is_ignored(self, tmp_path, caplog):
        path = tmp_path / "profile.json"
        path.write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="arcade_snake.storage"):
            store = ProfileStore(path)
        assert store.high_score == 0
        assert "Ignoring unreadable profile" in caplog.text

    def test_malformed_values_are_ignored(self, tmp_path, caplog):
        path = tmp_path / "profile.json"
        path.write_text(json.dumps({"high_score": "lots"}), encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="arcade_snake.storage"):
            store = ProfileStore(path)
        assert store.high_score == 0
        assert "malformed" in caplog.text

    def test_non_object_is_ignored(self, tmp_path):
        path = tmp_path / "profile.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert ProfileStore(path).high_score == 0


class TestSave:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "profile.json"
        store = ProfileStore(path)
        store.update_settings(difficulty="hard", grid_size=30)
        store.record_game(GameStats(score=120, food_eaten=4, power_ups_collected=2))

        reloaded = ProfileStore(path)
        assert reloaded.high_score == 120
        assert reloaded.profile.lifetime.games_played == 1
        assert reloaded.profile.lifetime.total_power_ups == 2
        config = reloaded.engine_config()
        assert config.difficulty is Difficulty.HARD
        assert config.grid_size == 30

    def test_unwritable_path_only_warns(self, tmp_path, caplog):
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        store = ProfileStore(blocker / "profile.json")
        with caplog.at_level(logging.WARNING, logger="arcade_snake.storage"):
            store.save()
        assert "Could not save profile" in caplog.text

    def test_overrides_beat_saved_settings(self, tmp_path):
        store = ProfileStore(tmp_path / "profile.json")
        store.update_settings(difficulty="hard")
        assert store.engine_config(difficulty="easy").difficulty is Difficulty.EASY


class TestAchievements:
    def test_first_food_unlocks_once(self, tmp_path):
        store = ProfileStore(tmp_path / "profile.json")
        assert store.record_game(GameStats(food_eaten=1)) == ["first_food"]
        assert store.record_game(GameStats(food_eaten=3)) == []

    def test_game_stat_achievements(self, tmp_path):
        store = ProfileStore(tmp_path / "profile.json")
        stats = GameStats(
            score=1200,
            level=10,
            best_combo=12,
            time_elapsed=300_000,
            longest_snake=50,
        )
        unlocked = store.record_game(stats)
        assert set(unlocked) == {"survivor", "combo_master", "level_10", "score_1000", "snake_long"}

    def test_power_collector_counts_across_games(self, tmp_path):
        store = ProfileStore(tmp_path / "profile.json")
        assert store.record_game(GameStats(power_ups_collected=12)) == []
        assert store.record_game(GameStats(power_ups_collected=8)) == ["power_collector"]

    def test_high_score_keeps_the_best(self, tmp_path):
        store = ProfileStore(tmp_path / "profile.json")
        store.record_game(GameStats(score=300))
        store.record_game(GameStats(score=100))
        assert store.high_score == 300
