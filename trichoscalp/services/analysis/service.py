"""
Analysis service.

Runs the mock analysis for an evaluation against stored history, reports
analysis status and assembles a client's evolution across evaluations.
Persistence goes through ``EvaluationRepository``; writes for one
evaluation are not serialized here, callers avoid concurrent runs.
"""

import logging
import time
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from trichoscalp.domain.models.analysis import AnalysisResult, PriorEvaluationRecord
from trichoscalp.domain.models.comparison import ComparisonOutcome, NoPriorEvaluation
from trichoscalp.domain.models.history import (
    AnalysisStatusReport,
    ClientEvolution,
    EvaluationHistoryEntry,
)
from trichoscalp.infrastructure.data.config import AnalysisConfig
from trichoscalp.infrastructure.persistence.evaluation_repository import EvaluationRepository
from trichoscalp.models import STATUS_ANALYZING, STATUS_COMPLETED, STATUS_PENDING
from trichoscalp.services.analysis.comparator import compare
from trichoscalp.services.analysis.exceptions import (
    AnalysisPersistenceError,
    AnalysisRequestError,
    EvaluationNotFoundError,
)
from trichoscalp.services.analysis.synthesizer import IndicatorSynthesizer, NoiseSource
from trichoscalp.services.analysis.validation import validate_analysis_result
from trichoscalp.services.results.formatting import (
    build_evolution_timeline,
    executive_summary,
)
from trichoscalp.utils.timezone_utils import ensure_utc

logger = logging.getLogger(__name__)

NO_IMAGES_MESSAGE = "Nenhuma imagem disponível para análise"
INVALID_PARAMETERS_MESSAGE = "Parâmetros inválidos para análise"


class AnalysisService:
    """Coordinates synthesis, comparison and storage for evaluations."""

    def __init__(
        self,
        db: Session,
        config: Optional[AnalysisConfig] = None,
        noise: Optional[NoiseSource] = None,
    ):
        self.repository = EvaluationRepository(db)
        self.config = config or AnalysisConfig.default()
        self.synthesizer = IndicatorSynthesizer(config=self.config, noise=noise)

    def run_analysis(
        self, evaluation_id: str, client_id: str, image_urls: Sequence[str]
    ) -> AnalysisResult:
        """
        Analyze an evaluation's images and store the result.

        Args:
            evaluation_id: ID of the evaluation being analyzed
            client_id: ID of the client the evaluation belongs to
            image_urls: Resolved image references, standardized captures first

        Returns:
            The stored AnalysisResult

        Raises:
            AnalysisRequestError: No images or missing identifiers
            EvaluationNotFoundError: Unknown evaluation
            AnalysisPersistenceError: Storing the result failed
        """
        start_time = time.time()
        logger.info(f"[RunAnalysis - Start] Evaluation: {evaluation_id}, Client: {client_id}")

        if not image_urls:
            raise AnalysisRequestError(NO_IMAGES_MESSAGE)
        if not evaluation_id or not client_id:
            logger.error(
                f"Invalid parameters for analysis: evaluation_id={evaluation_id!r}, client_id={client_id!r}"
            )
            raise AnalysisRequestError(INVALID_PARAMETERS_MESSAGE)

        evaluation = self.repository.get_by_id(evaluation_id)
        if evaluation is None:
            raise EvaluationNotFoundError(f"Evaluation not found: {evaluation_id}")
        if evaluation.client_id != client_id:
            raise AnalysisRequestError(INVALID_PARAMETERS_MESSAGE)

        prior = self._load_prior_evaluation(client_id, evaluation_id, evaluation.created_at)

        try:
            self.repository.set_status(evaluation_id, STATUS_ANALYZING)
            result = self.synthesizer.synthesize(image_urls, client_id, evaluation_id, prior)
            self.repository.save_analysis(evaluation_id, result)
            self.repository.set_status(evaluation_id, STATUS_COMPLETED)
        except SQLAlchemyError as e:
            logger.error(f"[RunAnalysis - Error] Evaluation {evaluation_id}: {str(e)}")
            self._reset_status(evaluation_id)
            raise AnalysisPersistenceError(
                "Erro ao salvar análise no banco de dados"
            ) from e
        finally:
            duration = time.time() - start_time
            logger.info(f"[RunAnalysis - End] Duration: {duration:.4f}s")

        return result

    def _reset_status(self, evaluation_id: str) -> None:
        # A failed run leaves the evaluation pending, never analisando
        try:
            self.repository.set_status(evaluation_id, STATUS_PENDING)
        except SQLAlchemyError as e:
            logger.error(
                f"[RunAnalysis - Error] Could not reset status of evaluation {evaluation_id}: {str(e)}"
            )

    def _load_prior_evaluation(
        self, client_id: str, evaluation_id: str, created_at: Optional[datetime] = None
    ) -> Optional[PriorEvaluationRecord]:
        # A failed lookup only costs the comparison section
        try:
            previous = self.repository.get_previous_analyzed(
                client_id, evaluation_id, before=created_at
            )
        except SQLAlchemyError as e:
            logger.warning(
                f"Failed to fetch previous evaluation (continuing without comparison): {str(e)}"
            )
            return None

        if previous is None or not validate_analysis_result(previous.analysis):
            return None

        stored = EvaluationRepository.parse_analysis(previous)
        if stored is None:
            return None
        return PriorEvaluationRecord(
            evaluation_id=previous.id,
            created_at=ensure_utc(previous.created_at),
            indicators=stored.quantitative,
        )

    def get_analysis_status(self, evaluation_id: str) -> AnalysisStatusReport:
        """Report whether an evaluation's analysis is done, running or not started."""
        evaluation = self.repository.get_by_id(evaluation_id)
        if evaluation is None:
            raise EvaluationNotFoundError(f"Evaluation not found: {evaluation_id}")

        if evaluation.analysis is not None and validate_analysis_result(evaluation.analysis):
            analysis = EvaluationRepository.parse_analysis(evaluation)
            if analysis is not None:
                return AnalysisStatusReport(
                    evaluation_id=evaluation_id, status="completed", analysis=analysis
                )
        if evaluation.status == STATUS_ANALYZING:
            return AnalysisStatusReport(evaluation_id=evaluation_id, status="processing")
        return AnalysisStatusReport(evaluation_id=evaluation_id, status="idle")

    def get_client_evolution(self, client_id: str) -> ClientEvolution:
        """
        Assemble a client's analyzed history and compare the two most recent analyses.

        Returns:
            ClientEvolution with a NoPriorEvaluation comparison when fewer than
            two valid analyses exist
        """
        history: List[EvaluationHistoryEntry] = []
        for evaluation in self.repository.list_analyzed_for_client(client_id):
            if not validate_analysis_result(evaluation.analysis):
                continue
            analysis = EvaluationRepository.parse_analysis(evaluation)
            if analysis is None:
                continue
            history.append(
                EvaluationHistoryEntry(
                    evaluation_id=evaluation.id,
                    created_at=ensure_utc(evaluation.created_at),
                    indicators=analysis.quantitative,
                    global_score=analysis.interpretation.global_score,
                )
            )

        if len(history) < 2:
            return ClientEvolution(
                client_id=client_id,
                history=history,
                timeline=build_evolution_timeline(history),
                comparison=NoPriorEvaluation(),
            )

        latest, preceding = history[0], history[1]
        comparison: ComparisonOutcome = compare(
            latest.indicators,
            preceding.indicators,
            current_date=latest.created_at,
            previous_date=preceding.created_at,
            config=self.config.comparison,
        )
        return ClientEvolution(
            client_id=client_id,
            history=history,
            timeline=build_evolution_timeline(history),
            comparison=comparison,
            executive_summary=executive_summary(comparison),
        )
