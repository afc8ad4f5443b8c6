from __future__ import annotations

from typing import Iterable, List

from trichoscalp.domain.models.history import EvaluationHistoryEntry, TimelinePoint
from trichoscalp.services.results.formatting.numbers import round_to


def build_evolution_timeline(entries: Iterable[EvaluationHistoryEntry]) -> List[TimelinePoint]:
    """Chart points in chronological order, indicator values scaled to percentages."""
    ordered = sorted(entries, key=lambda entry: entry.created_at)
    return [
        TimelinePoint(
            evaluation_id=entry.evaluation_id,
            date=entry.created_at.date(),
            values={
                key: round_to(value * 100, 2)
                for key, value in entry.indicators.as_dict().items()
            },
        )
        for entry in ordered
    ]
