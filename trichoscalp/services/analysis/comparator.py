"""
Comparison between two evaluations' quantitative indicators.

Deltas are always ``current - previous``. Whether a delta is an improvement
depends on the indicator's polarity in ``INDICATOR_PROFILES``; the weighted
evolution score, however, is the raw weighted sum of signed deltas, so a
drop in a lower-is-better indicator lowers the score even though it counts
as an improvement.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from trichoscalp.domain.models.comparison import (
    ComparisonOutcome,
    EvolutionStatus,
    EvolutionSummary,
)
from trichoscalp.domain.models.indicators import Indicator, QuantitativeIndicators
from trichoscalp.infrastructure.constants.indicator_constants import (
    DELTA_PRECISION,
    INDICATOR_PROFILES,
    PERCENT_PRECISION,
    SCORE_PRECISION,
)
from trichoscalp.infrastructure.data.config import ComparisonConfig
from trichoscalp.services.analysis.exceptions import InvalidIndicatorSetError
from trichoscalp.services.analysis.validation import field_value, indicator_set_problems
from trichoscalp.services.results.formatting.numbers import format_delta, round_to
from trichoscalp.utils.timezone_utils import DateLike, days_between, to_utc_datetime

logger = logging.getLogger(__name__)

IndicatorInput = Union[QuantitativeIndicators, Mapping[str, Any]]

STABLE = "stable"
IMPROVED = "improved"
WORSENED = "worsened"

EVOLUTION_DESCRIPTIONS = {
    "melhora_strong": "Evolução muito positiva. Todos os indicadores principais apresentaram melhora significativa.",
    "melhora_majority": "Evolução positiva. Maioria dos indicadores apresentando melhora consistente.",
    "melhora_moderate": "Evolução moderada. Alguns indicadores melhoraram, outros mantiveram-se estáveis.",
    "piora_strong": "Evolução preocupante. Múltiplos indicadores apresentaram piora significativa.",
    "piora_majority": "Evolução negativa. Maioria dos indicadores apresentando piora.",
    "piora_moderate": "Evolução desfavorável. Alguns indicadores pioraram, requer atenção.",
    "estavel": "Evolução estável. Indicadores mantiveram-se dentro dos valores esperados.",
    "mista": "Evolução mista. Alguns indicadores melhoraram, outros pioraram. Análise individual necessária.",
}


def _coerce_indicators(indicators: Any, role: str) -> QuantitativeIndicators:
    if isinstance(indicators, QuantitativeIndicators):
        return indicators

    problems = indicator_set_problems(indicators)
    if problems:
        raise InvalidIndicatorSetError(f"{role} indicators are invalid: {'; '.join(problems)}")

    try:
        return QuantitativeIndicators(
            **{indicator.value: field_value(indicators, indicator.value) for indicator in Indicator}
        )
    except ValidationError as e:
        raise InvalidIndicatorSetError(
            f"{role} indicators are out of range: {e.error_count()} error(s)"
        ) from e


def classify_delta(indicator: Indicator, delta: float, stability_threshold: float) -> str:
    """Stable below the threshold (exclusive), otherwise improved/worsened by polarity."""
    if abs(delta) < stability_threshold:
        return STABLE
    if INDICATOR_PROFILES[Indicator(indicator)].polarity.is_improvement(delta):
        return IMPROVED
    return WORSENED


def describe_evolution(status: EvolutionStatus, improved: int, worsened: int) -> str:
    if status is EvolutionStatus.MELHORA:
        if improved >= 4:
            return EVOLUTION_DESCRIPTIONS["melhora_strong"]
        if improved >= 3:
            return EVOLUTION_DESCRIPTIONS["melhora_majority"]
        return EVOLUTION_DESCRIPTIONS["melhora_moderate"]
    if status is EvolutionStatus.PIORA:
        if worsened >= 4:
            return EVOLUTION_DESCRIPTIONS["piora_strong"]
        if worsened >= 3:
            return EVOLUTION_DESCRIPTIONS["piora_majority"]
        return EVOLUTION_DESCRIPTIONS["piora_moderate"]
    if status is EvolutionStatus.ESTAVEL:
        return EVOLUTION_DESCRIPTIONS["estavel"]
    return EVOLUTION_DESCRIPTIONS["mista"]


def _status_from_counts(improved: int, worsened: int, stable: int) -> EvolutionStatus:
    # A status wins only with a strict majority over both other counts
    if improved > worsened and improved > stable:
        return EvolutionStatus.MELHORA
    if worsened > improved and worsened > stable:
        return EvolutionStatus.PIORA
    if stable > improved and stable > worsened:
        return EvolutionStatus.ESTAVEL
    return EvolutionStatus.MISTA


def summarize_evolution(
    absolute_delta: Mapping[str, float], config: Optional[ComparisonConfig] = None
) -> EvolutionSummary:
    """Count directions per indicator and aggregate them into an evolution summary."""
    config = config or ComparisonConfig()
    counts = {IMPROVED: 0, WORSENED: 0, STABLE: 0}
    score = 0.0

    for indicator in Indicator:
        delta = absolute_delta[indicator.value]
        score += delta * config.weight_for(indicator)
        counts[classify_delta(indicator, delta, config.stability_threshold)] += 1

    status = _status_from_counts(counts[IMPROVED], counts[WORSENED], counts[STABLE])
    return EvolutionSummary(
        status=status,
        description=describe_evolution(status, counts[IMPROVED], counts[WORSENED]),
        improved_count=counts[IMPROVED],
        worsened_count=counts[WORSENED],
        stable_count=counts[STABLE],
        evolution_score=round_to(score, SCORE_PRECISION),
    )


def compare(
    current: IndicatorInput,
    previous: IndicatorInput,
    *,
    current_date: Optional[DateLike] = None,
    previous_date: Optional[DateLike] = None,
    config: Optional[ComparisonConfig] = None,
) -> ComparisonOutcome:
    """
    Compare two indicator sets of the same client.

    Args:
        current: Indicators of the most recent evaluation
        previous: Indicators of the immediately preceding evaluation
        current_date: Optional date of the current evaluation
        previous_date: Optional date of the previous evaluation
        config: Stability threshold and weights (defaults from constants)

    Returns:
        ComparisonOutcome with absolute, relative and formatted deltas

    Raises:
        InvalidIndicatorSetError: If either set is missing a field or holds
            non-numeric or out-of-range values
    """
    current_set = _coerce_indicators(current, "current")
    previous_set = _coerce_indicators(previous, "previous")

    absolute_delta: Dict[str, float] = {}
    relative_delta: Dict[str, float] = {}
    formatted_delta: Dict[str, str] = {}
    for indicator in Indicator:
        before = previous_set.value_of(indicator)
        delta = round_to(current_set.value_of(indicator) - before, DELTA_PRECISION)
        absolute_delta[indicator.value] = delta
        relative_delta[indicator.value] = (
            round_to(delta / before * 100, PERCENT_PRECISION) if before > 0 else 0.0
        )
        formatted_delta[indicator.value] = format_delta(delta)

    days = 0
    previous_evaluation_date = None
    if previous_date is not None:
        previous_evaluation_date = to_utc_datetime(previous_date).date()
        if current_date is not None:
            days = days_between(current_date, previous_date)

    evolution = summarize_evolution(absolute_delta, config)
    logger.debug(
        f"[Compare] status={evolution.status.value} score={evolution.evolution_score} "
        f"improved={evolution.improved_count} worsened={evolution.worsened_count} "
        f"stable={evolution.stable_count}"
    )

    return ComparisonOutcome(
        current=current_set,
        previous=previous_set,
        absolute_delta=absolute_delta,
        relative_delta_percent=relative_delta,
        formatted_delta=formatted_delta,
        evolution=evolution,
        days_between_evaluations=days,
        previous_evaluation_date=previous_evaluation_date,
    )
