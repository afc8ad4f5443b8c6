"""
Rule-based narrative for the mock trichoscopy analysis.

Summary, findings and recommendations are selected from fixed Portuguese
phrases by thresholds over the five indicators; the interpretation score
starts at 5 and is adjusted per indicator.
"""

from __future__ import annotations

from typing import List, Optional, Union

from trichoscalp.domain.models.analysis import InterpretationResult, QualitativeAnalysis
from trichoscalp.domain.models.comparison import ComparisonOutcome, NoPriorEvaluation
from trichoscalp.domain.models.indicators import QuantitativeIndicators
from trichoscalp.infrastructure.constants.indicator_constants import (
    BASE_GLOBAL_SCORE,
    DENSITY_FOLLOW_UP,
    DENSITY_LOW,
    DENSITY_MODERATE,
    FLAKING_FINDING,
    GLOBAL_SCORE_RULES,
    INFLAMMATION_FINDING,
    MAX_GLOBAL_SCORE,
    MINIATURIZATION_FINDING,
    MINIATURIZATION_SUMMARY,
    MIN_GLOBAL_SCORE,
    OILINESS_HIGH,
    OILINESS_LOW,
    OILINESS_MODERATE,
    GlobalScoreRules,
)
from trichoscalp.services.results.formatting.numbers import round_to

GENERAL_RECOMMENDATIONS = (
    "Manter higienização adequada com produtos apropriados.",
    "Evitar tração excessiva nos fios.",
    "Realizar massagem capilar para estimular microcirculação.",
)


def build_summary(ind: QuantitativeIndicators) -> str:
    summary = "Couro cabeludo "

    if ind.oleosidade > OILINESS_HIGH:
        summary += "com oleosidade acentuada"
    elif ind.oleosidade > OILINESS_MODERATE:
        summary += "levemente oleoso"
    else:
        summary += "com oleosidade controlada"

    if ind.densidade_capilar < DENSITY_LOW:
        summary += " e rarefação capilar evidente"
    elif ind.densidade_capilar < DENSITY_MODERATE:
        summary += " e rarefação discreta"
    else:
        summary += " e boa densidade folicular"

    if ind.miniaturizacao > MINIATURIZATION_SUMMARY:
        summary += " com sinais de miniaturização"

    return summary + "."


def build_findings(ind: QuantitativeIndicators) -> List[str]:
    findings = []

    if ind.densidade_capilar > DENSITY_MODERATE:
        findings.append("Boa densidade folicular observada em todas as áreas analisadas.")
    elif ind.densidade_capilar > DENSITY_LOW:
        findings.append("Densidade folicular adequada com algumas áreas de menor concentração.")
    else:
        findings.append("Redução significativa da densidade folicular em múltiplas regiões.")

    if ind.oleosidade > OILINESS_HIGH:
        findings.append("Excesso de oleosidade visível no couro cabeludo.")
    elif ind.oleosidade < OILINESS_LOW:
        findings.append("Couro cabeludo com baixa oleosidade, possivelmente ressecado.")
    else:
        findings.append("Níveis de oleosidade dentro da normalidade.")

    if ind.miniaturizacao > MINIATURIZATION_FINDING:
        findings.append("Presença de fios miniaturizados, indicando processo de afinamento.")
    else:
        findings.append("Fios com espessura regular, sem sinais evidentes de miniaturização.")

    if ind.descamacao > FLAKING_FINDING:
        findings.append("Descamação visível em algumas áreas do couro cabeludo.")

    if ind.inflamacao > INFLAMMATION_FINDING:
        findings.append("Sinais de inflamação leve observados.")
    else:
        findings.append("Couro cabeludo sem sinais evidentes de inflamação.")

    return findings


def build_recommendations(ind: QuantitativeIndicators) -> List[str]:
    recommendations = []

    if ind.oleosidade > OILINESS_HIGH:
        recommendations.append("Utilizar shampoo específico para controle de oleosidade.")
        recommendations.append("Evitar lavagens excessivas que podem estimular a produção de sebo.")
    elif ind.oleosidade < OILINESS_LOW:
        recommendations.append("Usar produtos hidratantes para o couro cabeludo.")
        recommendations.append("Evitar shampoos muito agressivos.")

    if ind.densidade_capilar < DENSITY_FOLLOW_UP:
        recommendations.append("Acompanhar evolução capilar a cada 30 dias.")
        recommendations.append("Considerar tratamento específico para densidade folicular.")

    if ind.miniaturizacao > MINIATURIZATION_FINDING:
        recommendations.append("Implementar protocolo anti-miniaturização.")
        recommendations.append("Acompanhar progressão do afinamento folicular.")

    if ind.descamacao > FLAKING_FINDING:
        recommendations.append("Tratar descamação com produtos específicos.")

    if ind.inflamacao > INFLAMMATION_FINDING:
        recommendations.append("Investigar causas da inflamação e tratar adequadamente.")

    recommendations.extend(GENERAL_RECOMMENDATIONS)
    return recommendations


def build_qualitative_analysis(ind: QuantitativeIndicators) -> QualitativeAnalysis:
    return QualitativeAnalysis(
        summary=build_summary(ind),
        findings=build_findings(ind),
        recommendations=build_recommendations(ind),
    )


def global_score(
    ind: QuantitativeIndicators, rules: GlobalScoreRules = GLOBAL_SCORE_RULES
) -> float:
    """Clinical score in [0, 10], one decimal."""
    score = BASE_GLOBAL_SCORE

    if ind.densidade_capilar > rules.density_high:
        score += rules.density_high_bonus
    elif ind.densidade_capilar > rules.density_moderate:
        score += rules.density_moderate_bonus
    elif ind.densidade_capilar < rules.density_low:
        score -= rules.density_low_penalty
    else:
        score -= rules.density_reduced_penalty

    if rules.oiliness_ideal_min <= ind.oleosidade <= rules.oiliness_ideal_max:
        score += rules.oiliness_ideal_bonus
    elif ind.oleosidade > rules.oiliness_excess or ind.oleosidade < rules.oiliness_deficit:
        score -= rules.oiliness_extreme_penalty

    if ind.miniaturizacao < rules.miniaturization_low:
        score += rules.miniaturization_low_bonus
    elif ind.miniaturizacao > rules.miniaturization_high:
        score -= rules.miniaturization_high_penalty

    if ind.inflamacao < rules.inflammation_low:
        score += rules.inflammation_low_bonus
    elif ind.inflamacao > rules.inflammation_high:
        score -= rules.inflammation_high_penalty

    if ind.descamacao < rules.flaking_low:
        score += rules.flaking_low_bonus
    elif ind.descamacao > rules.flaking_high:
        score -= rules.flaking_high_penalty

    score = max(MIN_GLOBAL_SCORE, min(MAX_GLOBAL_SCORE, score))
    return round_to(score, 1)


def interpretation_narrative(
    score: float,
    comparison: Optional[Union[ComparisonOutcome, NoPriorEvaluation]] = None,
    rules: GlobalScoreRules = GLOBAL_SCORE_RULES,
) -> str:
    if score >= rules.excellent_score:
        narrative = "Excelente saúde capilar. Todos os indicadores dentro da normalidade."
    elif score >= rules.good_score:
        narrative = "Boa saúde capilar com pequenos ajustes necessários."
    elif score >= rules.moderate_score:
        narrative = "Saúde capilar moderada, requer atenção e tratamento específico."
    else:
        narrative = "Saúde capilar comprometida, necessita intervenção imediata."

    if isinstance(comparison, ComparisonOutcome):
        improved = comparison.evolution.improved_count
        if improved >= rules.strong_evolution_improved:
            narrative += " Evolução muito positiva observada."
        elif improved >= 1:
            narrative += " Alguma melhora foi observada."
        else:
            narrative += " Estabilidade ou piora nos indicadores."

    return narrative


def build_interpretation(
    ind: QuantitativeIndicators,
    confidence: float,
    comparison: Optional[Union[ComparisonOutcome, NoPriorEvaluation]] = None,
) -> InterpretationResult:
    score = global_score(ind)
    return InterpretationResult(
        narrative=interpretation_narrative(score, comparison),
        confidence=confidence,
        global_score=score,
    )
