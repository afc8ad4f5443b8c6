"""
Mock trichoscopy analysis.

Derives the five quantitative indicators from the number and composition of
the submitted images, then the qualitative narrative and the final
interpretation. It is a placeholder for a real model: each indicator mixes a
deterministic base formula with uniform noise. The noise source is
injectable so callers can seed it or switch it off; results are only
reproducible when they do.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Callable, Optional, Sequence

from trichoscalp.domain.models.analysis import (
    AnalysisMetadata,
    AnalysisResult,
    ImageGroup,
    ImageGroups,
    PriorEvaluationRecord,
)
from trichoscalp.domain.models.comparison import NoPriorEvaluation
from trichoscalp.domain.models.indicators import QuantitativeIndicators
from trichoscalp.infrastructure.constants.indicator_constants import (
    GENERATOR_NAME,
    INDICATOR_PRECISION,
    SPECIFIC_GROUP_DESCRIPTION,
    STANDARDIZED_GROUP_DESCRIPTION,
)
from trichoscalp.infrastructure.data.config import AnalysisConfig
from trichoscalp.services.analysis.comparator import compare
from trichoscalp.services.analysis.narrative import (
    build_interpretation,
    build_qualitative_analysis,
)
from trichoscalp.services.results.formatting.numbers import clamp01, round_to
from trichoscalp.utils.timezone_utils import ensure_utc, utc_now

logger = logging.getLogger(__name__)

# Takes an amplitude k and returns a draw in [0, k)
NoiseSource = Callable[[float], float]


def random_noise(seed: Optional[int] = None) -> NoiseSource:
    """Uniform noise backed by its own ``random.Random``; seeded when a seed is given."""
    rng = random.Random(seed)

    def draw(amplitude: float) -> float:
        return rng.random() * amplitude

    return draw


def zero_noise(amplitude: float) -> float:
    return 0.0


class IndicatorSynthesizer:
    """Builds ``AnalysisResult`` objects for submitted evaluations."""

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        noise: Optional[NoiseSource] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.config = config or AnalysisConfig.default()
        self.noise = noise or random_noise(self.config.synthesis.noise_seed)
        self.clock = clock

    def derive_indicators(self, total_images: int, standardized_count: int) -> QuantitativeIndicators:
        cfg = self.config.synthesis
        quality = min(total_images / cfg.expected_total_images, 1)
        standard = min(standardized_count / cfg.standardized_capture_count, 1)

        # Oiliness and miniaturization follow the unrounded density
        density = clamp01(0.5 + 0.3 * standard + self.noise(cfg.density_noise))
        oiliness = clamp01(max(0.1, 0.7 - 0.4 * density + self.noise(cfg.oiliness_noise)))
        flaking = clamp01(max(0.05, 0.3 - 0.2 * quality + self.noise(cfg.flaking_noise)))
        miniaturization = clamp01(
            max(0.1, 0.4 - 0.3 * density + self.noise(cfg.miniaturization_noise))
        )
        inflammation = clamp01(
            max(0.02, 0.15 - 0.1 * quality + self.noise(cfg.inflammation_noise))
        )

        return QuantitativeIndicators(
            densidade_capilar=round_to(density, INDICATOR_PRECISION),
            oleosidade=round_to(oiliness, INDICATOR_PRECISION),
            descamacao=round_to(flaking, INDICATOR_PRECISION),
            miniaturizacao=round_to(miniaturization, INDICATOR_PRECISION),
            inflamacao=round_to(inflammation, INDICATOR_PRECISION),
        )

    def model_confidence(self) -> float:
        cfg = self.config.synthesis
        confidence = min(
            cfg.confidence_ceiling,
            cfg.confidence_floor + self.noise(cfg.confidence_spread),
        )
        return round_to(confidence, 2)

    def synthesize(
        self,
        image_urls: Sequence[str],
        client_id: str,
        evaluation_id: str,
        prior_evaluation: Optional[PriorEvaluationRecord] = None,
    ) -> AnalysisResult:
        now = ensure_utc(self.clock())
        urls = list(image_urls or [])
        split = self.config.synthesis.standardized_capture_count
        standardized, specific = urls[:split], urls[split:]

        if not urls:
            logger.warning(
                f"[Synthesize] Evaluation {evaluation_id} has no images; indicators fall back to base values"
            )

        quantitative = self.derive_indicators(len(urls), len(standardized))
        qualitative = build_qualitative_analysis(quantitative)

        if prior_evaluation is not None:
            comparison = compare(
                quantitative,
                prior_evaluation.indicators,
                current_date=now,
                previous_date=prior_evaluation.created_at,
                config=self.config.comparison,
            )
        else:
            comparison = NoPriorEvaluation()

        interpretation = build_interpretation(
            quantitative, self.model_confidence(), comparison
        )

        logger.info(
            f"[Synthesize] client={client_id} evaluation={evaluation_id} "
            f"images={len(urls)} standardized={len(standardized)} "
            f"comparison={comparison.kind} score={interpretation.global_score}"
        )

        return AnalysisResult(
            client_id=client_id,
            evaluation_id=evaluation_id,
            evaluation_date=now.date(),
            image_groups=ImageGroups(
                standardized=ImageGroup(
                    description=STANDARDIZED_GROUP_DESCRIPTION, sources=standardized
                ),
                specific=ImageGroup(description=SPECIFIC_GROUP_DESCRIPTION, sources=specific),
            ),
            quantitative=quantitative,
            qualitative=qualitative,
            comparison=comparison,
            interpretation=interpretation,
            metadata=AnalysisMetadata(
                generator=GENERATOR_NAME,
                model_version=self.config.synthesis.model_version,
                processed_at=now,
            ),
        )


def synthesize(
    image_urls: Sequence[str],
    client_id: str,
    evaluation_id: str,
    prior_evaluation: Optional[PriorEvaluationRecord] = None,
    *,
    noise: Optional[NoiseSource] = None,
    now: Optional[datetime] = None,
    config: Optional[AnalysisConfig] = None,
) -> AnalysisResult:
    """Run the mock analysis for one evaluation."""
    clock = (lambda: now) if now is not None else utc_now
    synthesizer = IndicatorSynthesizer(config=config, noise=noise, clock=clock)
    return synthesizer.synthesize(image_urls, client_id, evaluation_id, prior_evaluation)
