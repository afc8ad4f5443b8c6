"""
Quantitative scalp indicators.

The five indicators are bounded scalars in [0, 1] produced by the mock
trichoscopy analysis and consumed by the evaluation comparator.
"""

from enum import Enum
from typing import Dict, Iterator, Tuple

from pydantic import BaseModel, Field


class Indicator(str, Enum):
    """Identifiers of the quantitative indicators, in canonical order."""

    DENSIDADE_CAPILAR = "densidade_capilar"
    OLEOSIDADE = "oleosidade"
    DESCAMACAO = "descamacao"
    MINIATURIZACAO = "miniaturizacao"
    INFLAMACAO = "inflamacao"


class Polarity(str, Enum):
    """Direction in which an indicator counts as an improvement."""

    HIGHER_IS_BETTER = "higher_is_better"
    LOWER_IS_BETTER = "lower_is_better"

    def is_improvement(self, delta: float) -> bool:
        if self is Polarity.HIGHER_IS_BETTER:
            return delta > 0
        return delta < 0


INDICATOR_KEYS: Tuple[str, ...] = tuple(indicator.value for indicator in Indicator)


class QuantitativeIndicators(BaseModel):
    """Five scalp indicators, each rounded to 2 decimals and bounded to [0, 1]."""

    densidade_capilar: float = Field(
        ..., ge=0.0, le=1.0, description="Hair density (higher is better)"
    )
    oleosidade: float = Field(
        ..., ge=0.0, le=1.0, description="Scalp oiliness (lower is better)"
    )
    descamacao: float = Field(
        ..., ge=0.0, le=1.0, description="Flaking (lower is better)"
    )
    miniaturizacao: float = Field(
        ..., ge=0.0, le=1.0, description="Follicle miniaturization (lower is better)"
    )
    inflamacao: float = Field(
        ..., ge=0.0, le=1.0, description="Inflammation (lower is better)"
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "densidade_capilar": 0.8,
                "oleosidade": 0.38,
                "descamacao": 0.1,
                "miniaturizacao": 0.16,
                "inflamacao": 0.05,
            }
        },
    }

    def value_of(self, indicator) -> float:
        return getattr(self, Indicator(indicator).value)

    def items(self) -> Iterator[Tuple[Indicator, float]]:
        for indicator in Indicator:
            yield indicator, self.value_of(indicator)

    def as_dict(self) -> Dict[str, float]:
        return {indicator.value: value for indicator, value in self.items()}
