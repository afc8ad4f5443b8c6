"""
Comparison models between two evaluations of the same client.

The comparison section of an analysis is a discriminated union: either a
full ``ComparisonOutcome`` or ``NoPriorEvaluation`` for a client's first
evaluation. Both carry a ``kind`` tag so stored payloads round-trip into the
right variant.
"""

from datetime import date
from enum import Enum
from typing import Annotated, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field

from trichoscalp.domain.models.indicators import QuantitativeIndicators


FIRST_EVALUATION_MESSAGE = "Primeira avaliação - não há dados comparativos disponíveis."


class EvolutionStatus(str, Enum):
    MELHORA = "melhora"
    PIORA = "piora"
    ESTAVEL = "estavel"
    MISTA = "mista"


class EvolutionSummary(BaseModel):
    """Aggregated direction of change across the five indicators."""

    status: EvolutionStatus
    description: str
    improved_count: int = Field(..., ge=0)
    worsened_count: int = Field(..., ge=0)
    stable_count: int = Field(..., ge=0)
    evolution_score: float = Field(
        ...,
        ge=-100.0,
        le=100.0,
        description="Weighted sum of signed deltas (not oriented by polarity)",
    )

    model_config = {"frozen": True}


class ComparisonOutcome(BaseModel):
    """Deltas and evolution classification between two indicator sets."""

    kind: Literal["comparison"] = "comparison"
    current: QuantitativeIndicators
    previous: QuantitativeIndicators
    absolute_delta: Dict[str, float]
    relative_delta_percent: Dict[str, float]
    formatted_delta: Dict[str, str]
    evolution: EvolutionSummary
    days_between_evaluations: int = Field(0, ge=0)
    previous_evaluation_date: Optional[date] = None

    model_config = {"frozen": True}


class NoPriorEvaluation(BaseModel):
    """Marker for a client's first evaluation: nothing to compare against."""

    kind: Literal["first_evaluation"] = "first_evaluation"
    message: str = FIRST_EVALUATION_MESSAGE

    model_config = {"frozen": True}


ComparisonSection = Annotated[
    Union[ComparisonOutcome, NoPriorEvaluation], Field(discriminator="kind")
]
