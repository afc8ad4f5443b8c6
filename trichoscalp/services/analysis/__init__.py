"""
Trichoscopy analysis: mock indicator synthesis, evolution comparison and
payload validation. ``AnalysisService`` lives in ``.service`` and is imported
from there, since it pulls in the persistence layer.
"""

from .comparator import classify_delta, compare, summarize_evolution
from .exceptions import (
    AnalysisError,
    AnalysisPersistenceError,
    AnalysisRequestError,
    EvaluationNotFoundError,
    InvalidIndicatorSetError,
)
from .synthesizer import IndicatorSynthesizer, random_noise, synthesize, zero_noise
from .validation import validate_analysis_result, validate_comparison_inputs

__all__ = [
    "classify_delta",
    "compare",
    "summarize_evolution",
    "AnalysisError",
    "AnalysisPersistenceError",
    "AnalysisRequestError",
    "EvaluationNotFoundError",
    "InvalidIndicatorSetError",
    "IndicatorSynthesizer",
    "random_noise",
    "synthesize",
    "zero_noise",
    "validate_analysis_result",
    "validate_comparison_inputs",
]
