"""
Constants for the trichoscopy indicator model.

This module is the single source of truth for per-indicator polarity,
comparison weights and display labels, and for the thresholds used by the
mock analysis narrative. Services reference these names instead of inlining
literals.
"""

from dataclasses import dataclass
from typing import Dict

from trichoscalp.domain.models.indicators import Indicator, Polarity


@dataclass(frozen=True)
class IndicatorProfile:
    polarity: Polarity
    weight: float
    label: str


INDICATOR_PROFILES: Dict[Indicator, IndicatorProfile] = {
    Indicator.DENSIDADE_CAPILAR: IndicatorProfile(
        Polarity.HIGHER_IS_BETTER, 3.0, "Densidade Capilar"
    ),
    Indicator.OLEOSIDADE: IndicatorProfile(Polarity.LOWER_IS_BETTER, 2.0, "Oleosidade"),
    Indicator.DESCAMACAO: IndicatorProfile(Polarity.LOWER_IS_BETTER, 1.5, "Descamação"),
    Indicator.MINIATURIZACAO: IndicatorProfile(
        Polarity.LOWER_IS_BETTER, 2.5, "Miniaturização"
    ),
    Indicator.INFLAMACAO: IndicatorProfile(Polarity.LOWER_IS_BETTER, 2.0, "Inflamação"),
}

# Comparator
STABILITY_THRESHOLD = 0.05
DELTA_PRECISION = 4
SCORE_PRECISION = 2
PERCENT_PRECISION = 2
SIGNIFICANT_DELTA = 0.1  # minimum magnitude listed in the executive summary

# Synthesizer inputs
STANDARDIZED_CAPTURE_COUNT = 9  # 3x3 grid of trichoscopic captures
EXPECTED_TOTAL_IMAGES = 14
INDICATOR_PRECISION = 2

# Noise amplitudes, one uniform draw in [0, k) per indicator
DENSITY_NOISE = 0.2
OILINESS_NOISE = 0.2
FLAKING_NOISE = 0.15
MINIATURIZATION_NOISE = 0.2
INFLAMMATION_NOISE = 0.1

# Confidence = min(ceiling, floor + noise(spread))
CONFIDENCE_FLOOR = 0.70
CONFIDENCE_SPREAD = 0.25
CONFIDENCE_CEILING = 0.95

# Interpretation score
BASE_GLOBAL_SCORE = 5.0
MIN_GLOBAL_SCORE = 0.0
MAX_GLOBAL_SCORE = 10.0


@dataclass(frozen=True)
class GlobalScoreRules:
    """Bands and adjustments applied to the base interpretation score."""

    density_high: float = 0.7
    density_moderate: float = 0.5
    density_low: float = 0.3
    density_high_bonus: float = 2.0
    density_moderate_bonus: float = 1.0
    density_low_penalty: float = 2.0
    density_reduced_penalty: float = 1.0  # between density_low and density_moderate

    oiliness_ideal_min: float = 0.3
    oiliness_ideal_max: float = 0.6
    oiliness_excess: float = 0.8
    oiliness_deficit: float = 0.2
    oiliness_ideal_bonus: float = 1.0
    oiliness_extreme_penalty: float = 1.0

    miniaturization_low: float = 0.3
    miniaturization_high: float = 0.6
    miniaturization_low_bonus: float = 1.0
    miniaturization_high_penalty: float = 1.5

    inflammation_low: float = 0.1
    inflammation_high: float = 0.4
    inflammation_low_bonus: float = 0.5
    inflammation_high_penalty: float = 1.0

    flaking_low: float = 0.2
    flaking_high: float = 0.5
    flaking_low_bonus: float = 0.5
    flaking_high_penalty: float = 0.5

    # Interpretation narrative bands
    excellent_score: float = 8.0
    good_score: float = 6.0
    moderate_score: float = 4.0
    strong_evolution_improved: int = 3


GLOBAL_SCORE_RULES = GlobalScoreRules()

# Narrative thresholds
OILINESS_HIGH = 0.6
OILINESS_MODERATE = 0.4
OILINESS_LOW = 0.3
DENSITY_LOW = 0.5
DENSITY_MODERATE = 0.7
DENSITY_FOLLOW_UP = 0.6
MINIATURIZATION_FINDING = 0.4
MINIATURIZATION_SUMMARY = 0.5
FLAKING_FINDING = 0.3
INFLAMMATION_FINDING = 0.2

# Metadata
GENERATOR_NAME = "Assessoria de Anamnese – IA TrichoScalp"
MODEL_VERSION = "1.0.0"
STANDARDIZED_GROUP_DESCRIPTION = "Imagens tricoscópicas de 10x a 200x"
SPECIFIC_GROUP_DESCRIPTION = "Fotos panorâmicas da cabeça (sem ampliação)"

# Environment variable names
ENV_NOISE_SEED = "ANALYSIS_NOISE_SEED"
ENV_MODEL_VERSION = "ANALYSIS_MODEL_VERSION"
ENV_STABILITY_THRESHOLD = "ANALYSIS_STABILITY_THRESHOLD"
ENV_EXPECTED_TOTAL_IMAGES = "ANALYSIS_EXPECTED_TOTAL_IMAGES"
