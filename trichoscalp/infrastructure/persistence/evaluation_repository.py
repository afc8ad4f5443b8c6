"""
Evaluation repository implementation.

This module provides the storage contract the analysis service depends on:
reading the previous analyzed evaluation of a client and storing or
retrieving an analysis by evaluation id, using SQLAlchemy for database access.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from trichoscalp.domain.models.analysis import AnalysisResult
from trichoscalp.models import Evaluation, STATUS_PENDING
from trichoscalp.services.analysis.exceptions import EvaluationNotFoundError
from trichoscalp.utils.timezone_utils import utc_now

logger = logging.getLogger(__name__)


class EvaluationRepository:
    """
    SQLAlchemy-backed access to evaluations and their stored analyses.
    """

    def __init__(self, session: Session):
        """
        Initialize the repository.

        Args:
            session: SQLAlchemy session
        """
        self.session = session

    def create(
        self,
        client_id: str,
        evaluation_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> Evaluation:
        """
        Create a new evaluation record in the pending state.

        Args:
            client_id: ID of the client being evaluated
            evaluation_id: Optional explicit ID (a UUID is generated otherwise)
            created_at: Optional creation time (defaults to now)

        Returns:
            The persisted Evaluation row
        """
        try:
            evaluation = Evaluation(
                id=evaluation_id or str(uuid.uuid4()),
                client_id=client_id,
                created_at=created_at or utc_now(),
                status=STATUS_PENDING,
            )
            self.session.add(evaluation)
            self.session.commit()
            self.session.refresh(evaluation)
            return evaluation
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error creating evaluation record: {str(e)}")
            raise

    def get_by_id(self, evaluation_id: str) -> Optional[Evaluation]:
        """Return the evaluation row for the given id, or None."""
        try:
            return (
                self.session.query(Evaluation)
                .filter(Evaluation.id == evaluation_id)
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error fetching evaluation {evaluation_id}: {str(e)}")
            raise

    def get_previous_analyzed(
        self,
        client_id: str,
        exclude_evaluation_id: str,
        before: Optional[datetime] = None,
    ) -> Optional[Evaluation]:
        """
        Get the analyzed evaluation of a client immediately preceding another one.

        Args:
            client_id: ID of the client
            exclude_evaluation_id: Evaluation being analyzed right now
            before: Creation time of that evaluation; only older ones qualify

        Returns:
            The newest qualifying evaluation with a stored analysis, or None
        """
        try:
            query = self.session.query(Evaluation).filter(
                Evaluation.client_id == client_id,
                Evaluation.id != exclude_evaluation_id,
                Evaluation.analysis.isnot(None),
            )
            if before is not None:
                query = query.filter(Evaluation.created_at < before)
            return query.order_by(Evaluation.created_at.desc()).first()
        except SQLAlchemyError as e:
            logger.error(
                f"Error fetching previous evaluation for client {client_id}: {str(e)}"
            )
            raise

    def set_status(self, evaluation_id: str, status: str) -> None:
        """Update the workflow status of an evaluation."""
        evaluation = self._require(evaluation_id)
        try:
            evaluation.status = status
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error updating status of evaluation {evaluation_id}: {str(e)}")
            raise

    def save_analysis(self, evaluation_id: str, result: AnalysisResult) -> None:
        """
        Store an analysis result on its evaluation, replacing any previous one.

        Args:
            evaluation_id: ID of the evaluation
            result: Analysis to store
        """
        evaluation = self._require(evaluation_id)
        try:
            evaluation.analysis = result.model_dump(mode="json")
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error saving analysis for evaluation {evaluation_id}: {str(e)}")
            raise

    def get_analysis(self, evaluation_id: str) -> Optional[AnalysisResult]:
        """
        Get the stored analysis of an evaluation.

        Returns:
            The parsed AnalysisResult, or None if absent or unreadable
        """
        evaluation = self.get_by_id(evaluation_id)
        if evaluation is None or evaluation.analysis is None:
            return None
        return self.parse_analysis(evaluation)

    def list_analyzed_for_client(self, client_id: str) -> List[Evaluation]:
        """List a client's evaluations that have a stored analysis, newest first."""
        try:
            return (
                self.session.query(Evaluation)
                .filter(
                    Evaluation.client_id == client_id,
                    Evaluation.analysis.isnot(None),
                )
                .order_by(Evaluation.created_at.desc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error listing evaluations for client {client_id}: {str(e)}")
            raise

    @staticmethod
    def parse_analysis(evaluation: Evaluation) -> Optional[AnalysisResult]:
        """Parse the stored JSON of an evaluation; None when it does not validate."""
        try:
            return AnalysisResult.model_validate(evaluation.analysis)
        except ValidationError as e:
            logger.warning(
                f"Stored analysis of evaluation {evaluation.id} is invalid: {e.error_count()} error(s)"
            )
            return None

    def _require(self, evaluation_id: str) -> Evaluation:
        evaluation = self.get_by_id(evaluation_id)
        if evaluation is None:
            raise EvaluationNotFoundError(f"Evaluation not found: {evaluation_id}")
        return evaluation
