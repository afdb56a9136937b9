"""
Unit tests for configuration loading.
"""
import pytest
from pydantic import ValidationError

from bracket_engine.bracket import seeding
from bracket_engine.config import BracketSettings, ServiceSettings, Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("BRACKET_SHUFFLE_SEED", raising=False)
        monkeypatch.delenv("SERVICE_LOCK_TIMEOUT_S", raising=False)

        assert BracketSettings().shuffle_seed is None
        assert ServiceSettings().lock_timeout_s == 5.0

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("BRACKET_SHUFFLE_SEED", "1234")
        monkeypatch.setenv("SERVICE_LOCK_TIMEOUT_S", "0.5")

        root = Settings()
        assert root.bracket.shuffle_seed == 1234
        assert root.service.lock_timeout_s == 0.5

    @pytest.mark.parametrize("value", ["0", "-1", "1000"])
    def test_lock_timeout_bounds(self, monkeypatch, value):
        monkeypatch.setenv("SERVICE_LOCK_TIMEOUT_S", value)
        with pytest.raises(ValidationError):
            ServiceSettings()

    def test_invalid_environment_rejected(self, monkeypatch):
        from bracket_engine.config import ObservabilitySettings

        monkeypatch.setenv("ENVIRONMENT", "laptop")
        with pytest.raises(ValidationError):
            ObservabilitySettings()


class TestSeeding:

    def test_configured_seed_makes_builds_repeatable(self, monkeypatch):
        monkeypatch.setattr(seeding.settings.bracket, "shuffle_seed", 7)

        first = seeding.shuffled(range(20))
        second = seeding.shuffled(range(20))
        assert first == second
        assert sorted(first) == list(range(20))

    def test_explicit_seed_wins(self, monkeypatch):
        monkeypatch.setattr(seeding.settings.bracket, "shuffle_seed", 7)
        assert seeding.make_rng(3).random() == seeding.make_rng(3).random()
        assert seeding.make_rng(3).random() != seeding.make_rng(7).random()

    def test_input_is_not_shuffled_in_place(self):
        items = [1, 2, 3, 4, 5]
        seeding.shuffled(items)
        assert items == [1, 2, 3, 4, 5]
