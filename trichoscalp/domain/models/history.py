"""Read models for a client's analyzed evaluations over time."""

from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from trichoscalp.domain.models.analysis import AnalysisResult
from trichoscalp.domain.models.comparison import ComparisonSection, NoPriorEvaluation
from trichoscalp.domain.models.indicators import QuantitativeIndicators


class EvaluationHistoryEntry(BaseModel):
    evaluation_id: str
    created_at: datetime
    indicators: QuantitativeIndicators
    global_score: float


class TimelinePoint(BaseModel):
    """One evaluation on the evolution chart; values are percentages (0-100)."""

    evaluation_id: str
    date: date
    values: Dict[str, float]


class ClientEvolution(BaseModel):
    client_id: str
    history: List[EvaluationHistoryEntry] = Field(
        default_factory=list, description="Analyzed evaluations, newest first"
    )
    timeline: List[TimelinePoint] = Field(
        default_factory=list, description="Chart points, oldest first"
    )
    comparison: ComparisonSection = Field(default_factory=NoPriorEvaluation)
    executive_summary: Optional[str] = None


class AnalysisStatusReport(BaseModel):
    evaluation_id: str
    status: Literal["idle", "processing", "completed"]
    analysis: Optional[AnalysisResult] = None
