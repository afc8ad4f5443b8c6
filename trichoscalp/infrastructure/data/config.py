from dataclasses import dataclass, field
from typing import Dict, Any, Optional
import logging
import os

from trichoscalp.domain.models.indicators import Indicator
from trichoscalp.infrastructure.constants.indicator_constants import (
    INDICATOR_PROFILES,
    STABILITY_THRESHOLD,
    STANDARDIZED_CAPTURE_COUNT,
    EXPECTED_TOTAL_IMAGES,
    DENSITY_NOISE,
    OILINESS_NOISE,
    FLAKING_NOISE,
    MINIATURIZATION_NOISE,
    INFLAMMATION_NOISE,
    CONFIDENCE_FLOOR,
    CONFIDENCE_SPREAD,
    CONFIDENCE_CEILING,
    MODEL_VERSION,
    ENV_NOISE_SEED,
    ENV_MODEL_VERSION,
    ENV_STABILITY_THRESHOLD,
    ENV_EXPECTED_TOTAL_IMAGES,
)

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Base class for configuration related errors"""
    pass


class SynthesisConfigError(ConfigurationError):
    """Raised when synthesizer configuration is invalid"""
    pass


class ComparisonConfigError(ConfigurationError):
    """Raised when comparator configuration is invalid"""
    pass


def _default_weights() -> Dict[Indicator, float]:
    return {indicator: profile.weight for indicator, profile in INDICATOR_PROFILES.items()}


@dataclass
class SynthesisConfig:
    expected_total_images: int = EXPECTED_TOTAL_IMAGES
    standardized_capture_count: int = STANDARDIZED_CAPTURE_COUNT
    density_noise: float = DENSITY_NOISE
    oiliness_noise: float = OILINESS_NOISE
    flaking_noise: float = FLAKING_NOISE
    miniaturization_noise: float = MINIATURIZATION_NOISE
    inflammation_noise: float = INFLAMMATION_NOISE
    confidence_floor: float = CONFIDENCE_FLOOR
    confidence_spread: float = CONFIDENCE_SPREAD
    confidence_ceiling: float = CONFIDENCE_CEILING
    model_version: str = MODEL_VERSION
    noise_seed: Optional[int] = None

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Validate synthesizer configuration"""
        if self.expected_total_images <= 0:
            raise SynthesisConfigError("expected_total_images must be positive")

        if self.standardized_capture_count <= 0:
            raise SynthesisConfigError("standardized_capture_count must be positive")

        if self.standardized_capture_count > self.expected_total_images:
            raise SynthesisConfigError(
                "standardized_capture_count cannot exceed expected_total_images"
            )

        amplitudes = {
            "density_noise": self.density_noise,
            "oiliness_noise": self.oiliness_noise,
            "flaking_noise": self.flaking_noise,
            "miniaturization_noise": self.miniaturization_noise,
            "inflammation_noise": self.inflammation_noise,
            "confidence_spread": self.confidence_spread,
        }
        for name, value in amplitudes.items():
            if not (0.0 <= value <= 1.0):
                raise SynthesisConfigError(f"{name} must be between 0.0 and 1.0")

        if not (0.0 <= self.confidence_floor <= self.confidence_ceiling <= 1.0):
            raise SynthesisConfigError(
                "confidence bounds must satisfy 0 <= floor <= ceiling <= 1"
            )


@dataclass
class ComparisonConfig:
    stability_threshold: float = STABILITY_THRESHOLD
    weights: Dict[Indicator, float] = field(default_factory=_default_weights)

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Validate comparator configuration"""
        if not (0.0 < self.stability_threshold < 1.0):
            raise ComparisonConfigError(
                "stability_threshold must be between 0.0 and 1.0 (exclusive)"
            )

        missing = [i.value for i in Indicator if i not in self.weights]
        if missing:
            raise ComparisonConfigError(f"Missing weights for: {', '.join(missing)}")

        for indicator, weight in self.weights.items():
            if weight <= 0:
                raise ComparisonConfigError(
                    f"Weight for {Indicator(indicator).value} must be positive"
                )

    def weight_for(self, indicator: Indicator) -> float:
        return self.weights[indicator]


@dataclass
class AnalysisConfig:
    synthesis: SynthesisConfig
    comparison: ComparisonConfig

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        """Create configuration from environment variables"""
        try:
            seed = os.getenv(ENV_NOISE_SEED)
            synthesis = SynthesisConfig(
                expected_total_images=int(
                    os.getenv(ENV_EXPECTED_TOTAL_IMAGES, str(EXPECTED_TOTAL_IMAGES))
                ),
                model_version=os.getenv(ENV_MODEL_VERSION, MODEL_VERSION),
                noise_seed=int(seed) if seed not in (None, "") else None,
            )
            comparison = ComparisonConfig(
                stability_threshold=float(
                    os.getenv(ENV_STABILITY_THRESHOLD, str(STABILITY_THRESHOLD))
                ),
            )
            return cls(synthesis=synthesis, comparison=comparison)
        except (ValueError, ConfigurationError) as e:
            logger.error(f"Error loading analysis configuration from environment: {str(e)}")
            logger.info("Falling back to default analysis configuration")
            return cls.default()

    @classmethod
    def default(cls) -> "AnalysisConfig":
        """Create default configuration with hardcoded defaults"""
        return cls(synthesis=SynthesisConfig(), comparison=ComparisonConfig())

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {
            "synthesis": {
                "expected_total_images": self.synthesis.expected_total_images,
                "standardized_capture_count": self.synthesis.standardized_capture_count,
                "model_version": self.synthesis.model_version,
                "noise_seed_configured": self.synthesis.noise_seed is not None,
            },
            "comparison": {
                "stability_threshold": self.comparison.stability_threshold,
                "weights": {
                    Indicator(k).value: v for k, v in self.comparison.weights.items()
                },
            },
        }
