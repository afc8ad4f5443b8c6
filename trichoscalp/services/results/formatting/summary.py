from __future__ import annotations

from typing import List

from trichoscalp.domain.models.comparison import ComparisonOutcome
from trichoscalp.infrastructure.constants.indicator_constants import SIGNIFICANT_DELTA
from trichoscalp.services.results.formatting.indicators import indicator_label


def _score_clause(score: float) -> str:
    if score > 0:
        return f"Score de evolução: +{score:.1f} (positivo)"
    if score < 0:
        return f"Score de evolução: {score:.1f} (negativo)"
    return f"Score de evolução: {score:.1f} (neutro)"


def executive_summary(outcome: ComparisonOutcome) -> str:
    """Plain-text evolution summary for reports.

    Lists only deltas whose formatted magnitude is at least 0.1, largest
    first; ties keep the canonical indicator order.
    """
    evolution = outcome.evolution
    lines: List[str] = [
        f"Evolução {evolution.status.value}: {evolution.description}",
        "",
        "Principais variações observadas:",
    ]

    ranked = sorted(
        outcome.formatted_delta.items(),
        key=lambda item: abs(float(item[1])),
        reverse=True,
    )
    for key, formatted in ranked:
        if abs(float(formatted)) >= SIGNIFICANT_DELTA:
            lines.append(f"• {indicator_label(key)}: {formatted}")

    lines.append("")
    lines.append(_score_clause(evolution.evolution_score))
    return "\n".join(lines)
