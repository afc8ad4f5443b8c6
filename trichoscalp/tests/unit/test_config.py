"""
Tests for configuration settings.
"""

import pytest

from trichoscalp.domain.models import Indicator
from trichoscalp.infrastructure.config.settings import Settings
from trichoscalp.infrastructure.data.config import (
    AnalysisConfig,
    ComparisonConfig,
    ComparisonConfigError,
    SynthesisConfig,
    SynthesisConfigError,
)


def test_default_analysis_config():
    config = AnalysisConfig.default()

    assert config.synthesis.expected_total_images == 14
    assert config.synthesis.standardized_capture_count == 9
    assert config.synthesis.noise_seed is None
    assert config.comparison.stability_threshold == 0.05
    assert config.comparison.weight_for(Indicator.DENSIDADE_CAPILAR) == 3.0
    assert config.comparison.weight_for(Indicator.DESCAMACAO) == 1.5


def test_analysis_config_from_env(monkeypatch):
    monkeypatch.setenv("ANALYSIS_NOISE_SEED", "42")
    monkeypatch.setenv("ANALYSIS_MODEL_VERSION", "1.1.0")
    monkeypatch.setenv("ANALYSIS_STABILITY_THRESHOLD", "0.08")
    monkeypatch.setenv("ANALYSIS_EXPECTED_TOTAL_IMAGES", "20")

    config = AnalysisConfig.from_env()

    assert config.synthesis.noise_seed == 42
    assert config.synthesis.model_version == "1.1.0"
    assert config.synthesis.expected_total_images == 20
    assert config.comparison.stability_threshold == 0.08


def test_invalid_env_falls_back_to_defaults(monkeypatch):
    monkeypatch.setenv("ANALYSIS_STABILITY_THRESHOLD", "1.5")

    config = AnalysisConfig.from_env()

    assert config.comparison.stability_threshold == 0.05


def test_non_numeric_env_falls_back_to_defaults(monkeypatch):
    monkeypatch.setenv("ANALYSIS_NOISE_SEED", "not-a-seed")

    config = AnalysisConfig.from_env()

    assert config.synthesis.noise_seed is None


def test_synthesis_config_validation():
    with pytest.raises(SynthesisConfigError):
        SynthesisConfig(expected_total_images=0)
    with pytest.raises(SynthesisConfigError):
        SynthesisConfig(standardized_capture_count=20)
    with pytest.raises(SynthesisConfigError):
        SynthesisConfig(density_noise=1.5)
    with pytest.raises(SynthesisConfigError):
        SynthesisConfig(confidence_floor=0.9, confidence_ceiling=0.8)


def test_comparison_config_validation():
    with pytest.raises(ComparisonConfigError):
        ComparisonConfig(stability_threshold=0.0)
    with pytest.raises(ComparisonConfigError):
        ComparisonConfig(weights={Indicator.DENSIDADE_CAPILAR: 3.0})
    with pytest.raises(ComparisonConfigError):
        ComparisonConfig(weights={indicator: -1.0 for indicator in Indicator})


def test_to_dict_does_not_expose_seed():
    config = AnalysisConfig(
        synthesis=SynthesisConfig(noise_seed=9), comparison=ComparisonConfig()
    )
    data = config.to_dict()

    assert data["synthesis"]["noise_seed_configured"] is True
    assert "noise_seed" not in data["synthesis"]
    assert data["comparison"]["weights"]["miniaturizacao"] == 2.5


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("DB_POOL_SIZE", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    settings = Settings()

    assert settings.database_url == "sqlite:///./trichoscalp.db"
    assert settings.is_sqlite
    assert settings.db_pool_size == 5
    assert settings.log_level == "INFO"


def test_settings_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://user:secret@db:5432/trichoscalp")
    monkeypatch.setenv("DB_POOL_SIZE", "10")
    monkeypatch.setenv("CORS_ORIGINS", "https://app.example.com,https://admin.example.com")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings()

    assert not settings.is_sqlite
    assert settings.db_pool_size == 10
    assert settings.cors_origins == ["https://app.example.com", "https://admin.example.com"]
    assert settings.log_level == "DEBUG"

    summary = settings.get_settings_summary()
    assert summary["database_url"] == "postgresql://***@db:5432/trichoscalp"
    assert "secret" not in str(summary)


def test_settings_loads_analysis_config_once(monkeypatch):
    monkeypatch.setenv("ANALYSIS_NOISE_SEED", "5")
    settings = Settings()

    first = settings.get_analysis_config()
    monkeypatch.setenv("ANALYSIS_NOISE_SEED", "6")

    assert settings.get_analysis_config() is first
    assert first.synthesis.noise_seed == 5
