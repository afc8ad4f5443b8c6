"""
Analysis result model for one evaluation.

An ``AnalysisResult`` is created once when an evaluation's images are
submitted and is never mutated afterwards; re-running the analysis yields a
new instance.
"""

from datetime import date, datetime
from typing import List

from pydantic import BaseModel, Field

from trichoscalp.domain.models.comparison import ComparisonSection, NoPriorEvaluation
from trichoscalp.domain.models.indicators import QuantitativeIndicators


class QualitativeAnalysis(BaseModel):
    summary: str
    findings: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class InterpretationResult(BaseModel):
    narrative: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    global_score: float = Field(..., ge=0.0, le=10.0)

    model_config = {"frozen": True}


class ImageGroup(BaseModel):
    description: str
    sources: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class ImageGroups(BaseModel):
    standardized: ImageGroup
    specific: ImageGroup

    model_config = {"frozen": True}


class AnalysisMetadata(BaseModel):
    generator: str
    model_version: str
    processed_at: datetime

    model_config = {"frozen": True}


class AnalysisResult(BaseModel):
    """Full output of the mock trichoscopy analysis for one evaluation."""

    client_id: str
    evaluation_id: str
    evaluation_date: date
    image_groups: ImageGroups
    quantitative: QuantitativeIndicators
    qualitative: QualitativeAnalysis
    comparison: ComparisonSection = Field(default_factory=NoPriorEvaluation)
    interpretation: InterpretationResult
    metadata: AnalysisMetadata

    model_config = {"frozen": True}

    @property
    def has_comparison(self) -> bool:
        return self.comparison.kind == "comparison"


class PriorEvaluationRecord(BaseModel):
    """The preceding analyzed evaluation of a client, as seen by the synthesizer."""

    evaluation_id: str
    created_at: datetime
    indicators: QuantitativeIndicators

    model_config = {"frozen": True}
