class AnalysisError(Exception):
    """Base exception for trichoscopy analysis."""
    pass


class InvalidIndicatorSetError(AnalysisError):
    """Raised when an indicator set is missing fields or holds non-numeric values."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class AnalysisRequestError(AnalysisError):
    """Exception for analysis requests that cannot be processed as submitted."""
    pass


class EvaluationNotFoundError(AnalysisError):
    """Exception for evaluations missing from storage."""
    pass


class AnalysisPersistenceError(AnalysisError):
    """Exception for failures while storing an analysis result."""
    pass
