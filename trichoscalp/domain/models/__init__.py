from .indicators import INDICATOR_KEYS, Indicator, Polarity, QuantitativeIndicators
from .comparison import (
    FIRST_EVALUATION_MESSAGE,
    ComparisonOutcome,
    ComparisonSection,
    EvolutionStatus,
    EvolutionSummary,
    NoPriorEvaluation,
)
from .analysis import (
    AnalysisMetadata,
    AnalysisResult,
    ImageGroup,
    ImageGroups,
    InterpretationResult,
    PriorEvaluationRecord,
    QualitativeAnalysis,
)
from .history import (
    AnalysisStatusReport,
    ClientEvolution,
    EvaluationHistoryEntry,
    TimelinePoint,
)

__all__ = [
    "INDICATOR_KEYS",
    "Indicator",
    "Polarity",
    "QuantitativeIndicators",
    "FIRST_EVALUATION_MESSAGE",
    "ComparisonOutcome",
    "ComparisonSection",
    "EvolutionStatus",
    "EvolutionSummary",
    "NoPriorEvaluation",
    "AnalysisMetadata",
    "AnalysisResult",
    "ImageGroup",
    "ImageGroups",
    "InterpretationResult",
    "PriorEvaluationRecord",
    "QualitativeAnalysis",
    "AnalysisStatusReport",
    "ClientEvolution",
    "EvaluationHistoryEntry",
    "TimelinePoint",
]
