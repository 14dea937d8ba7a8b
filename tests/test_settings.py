"""
Tests for application settings.
"""

import pytest
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from pydantic import ValidationError

from config.settings import ScoringSettings, Settings, get_settings


class TestSettings:

    def test_defaults(self):
        settings = Settings()

        assert settings.catalog_dir is None
        assert settings.catalog_version == "1"
        assert settings.log_level == "INFO"
        assert settings.json_logs is False
        assert settings.environment == "development"

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("STRATEGY_ENVIRONMENT", "production")
        monkeypatch.setenv("STRATEGY_CATALOG_VERSION", "2")

        settings = Settings()

        assert settings.environment == "production"
        assert settings.catalog_version == "2"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("STRATEGY_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            Settings()

    def test_cached(self):
        assert get_settings() is get_settings()
        get_settings.cache_clear()
        assert get_settings() is not None


class TestScoringSettings:

    def test_defaults(self):
        scoring = Settings().scoring

        assert (
            scoring.high_impact_bonus,
            scoring.medium_impact_bonus,
            scoring.low_impact_bonus,
            scoring.tier_step_bonus,
            scoring.age_window_bonus,
        ) == (30, 20, 10, 5, 15)

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("STRATEGY_SCORING_AGE_WINDOW_BONUS", "25")
        assert ScoringSettings().age_window_bonus == 25

    def test_scoring_weights_read_application_settings(self, monkeypatch):
        from types import SimpleNamespace

        import recommendation.priority_scorer as priority_scorer
        from recommendation.priority_scorer import ScoringWeights

        scoring = ScoringSettings(high_impact_bonus=50, age_window_bonus=7)
        monkeypatch.setattr(
            priority_scorer, "get_settings", lambda: SimpleNamespace(scoring=scoring)
        )

        weights = ScoringWeights.from_settings()

        assert weights.high_impact_bonus == 50
        assert weights.age_window_bonus == 7
        assert weights.low_impact_bonus == 10

    def test_scoring_weights_explicit_settings_win(self):
        from recommendation.priority_scorer import ScoringWeights

        weights = ScoringWeights.from_settings(ScoringSettings(tier_step_bonus=9))

        assert weights.tier_step_bonus == 9
