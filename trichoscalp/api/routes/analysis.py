"""
Analysis routes for the TrichoScalp API.

This module contains the evaluation analysis endpoints:
- POST /api/evaluations - Register an evaluation
- POST /api/evaluations/{evaluation_id}/analysis - Run the analysis
- GET /api/evaluations/{evaluation_id}/analysis - Get analysis status and result
- GET /api/clients/{client_id}/evolution - Get a client's evolution
- POST /api/comparisons - Compare two indicator sets
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from trichoscalp.database import get_db
from trichoscalp.domain.models import (
    AnalysisResult,
    AnalysisStatusReport,
    ClientEvolution,
    ComparisonOutcome,
)
from trichoscalp.infrastructure.config.settings import settings
from trichoscalp.infrastructure.persistence.evaluation_repository import EvaluationRepository
from trichoscalp.schemas import (
    AnalysisRequest,
    ComparisonRequest,
    EvaluationCreateRequest,
    EvaluationResponse,
)
from trichoscalp.services.analysis import compare
from trichoscalp.services.analysis.exceptions import (
    AnalysisPersistenceError,
    AnalysisRequestError,
    EvaluationNotFoundError,
    InvalidIndicatorSetError,
)
from trichoscalp.services.analysis.service import AnalysisService
from trichoscalp.services.analysis.synthesizer import NoiseSource, random_noise
from trichoscalp.utils.structured_logger import request_end, request_error, request_start

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Analysis"])


_noise_source: Optional[NoiseSource] = None


def get_noise_source() -> NoiseSource:
    """Process-wide noise source, seeded once from ANALYSIS_NOISE_SEED when set."""
    global _noise_source
    if _noise_source is None:
        _noise_source = random_noise(settings.get_analysis_config().synthesis.noise_seed)
    return _noise_source


def get_analysis_service(
    db: Session = Depends(get_db),
    noise: NoiseSource = Depends(get_noise_source),
) -> AnalysisService:
    """Build the analysis service for the current request."""
    return AnalysisService(db, config=settings.get_analysis_config(), noise=noise)


def _to_http_exception(error: Exception) -> HTTPException:
    if isinstance(error, AnalysisRequestError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, EvaluationNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, InvalidIndicatorSetError):
        return HTTPException(status_code=422, detail=error.reason)
    if isinstance(error, AnalysisPersistenceError):
        return HTTPException(status_code=500, detail=str(error))
    return HTTPException(status_code=500, detail=f"Analysis failed: {str(error)}")


@router.post(
    "/api/evaluations",
    response_model=EvaluationResponse,
    status_code=201,
    summary="Register an evaluation",
    description="Create a pending evaluation for a client so its images can be analyzed.",
)
async def create_evaluation(
    payload: EvaluationCreateRequest,
    db: Session = Depends(get_db),
):
    endpoint = "/api/evaluations"
    start = request_start(endpoint, client_id=payload.client_id)
    try:
        evaluation = EvaluationRepository(db).create(
            payload.client_id, evaluation_id=payload.evaluation_id
        )
        request_end(
            endpoint,
            start,
            client_id=payload.client_id,
            evaluation_id=evaluation.id,
            http_status=201,
        )
        return EvaluationResponse(
            evaluation_id=evaluation.id,
            client_id=evaluation.client_id,
            status=evaluation.status,
            created_at=evaluation.created_at,
        )
    except SQLAlchemyError as e:
        request_error(
            endpoint, start, client_id=payload.client_id, http_status=500, error=str(e)
        )
        raise HTTPException(status_code=500, detail="Erro ao registrar avaliação")


@router.post(
    "/api/evaluations/{evaluation_id}/analysis",
    response_model=AnalysisResult,
    summary="Analyze an evaluation",
    description="Run the mock trichoscopy analysis over the evaluation's images and store it.",
)
async def run_analysis(
    evaluation_id: str,
    payload: AnalysisRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    endpoint = "/api/evaluations/{evaluation_id}/analysis"
    start = request_start(
        endpoint,
        client_id=payload.client_id,
        evaluation_id=evaluation_id,
        image_count=len(payload.image_urls),
    )
    try:
        result = service.run_analysis(evaluation_id, payload.client_id, payload.image_urls)
        request_end(
            endpoint,
            start,
            client_id=payload.client_id,
            evaluation_id=evaluation_id,
            comparison=result.comparison.kind,
        )
        return result
    except Exception as e:
        http_error = _to_http_exception(e)
        request_error(
            endpoint,
            start,
            client_id=payload.client_id,
            evaluation_id=evaluation_id,
            http_status=http_error.status_code,
            error=str(http_error.detail),
        )
        raise http_error from e


@router.get(
    "/api/evaluations/{evaluation_id}/analysis",
    response_model=AnalysisStatusReport,
    summary="Get analysis status",
    description="Report whether the evaluation is idle, being processed or has a completed analysis.",
)
async def get_analysis_status(
    evaluation_id: str,
    service: AnalysisService = Depends(get_analysis_service),
):
    endpoint = "/api/evaluations/{evaluation_id}/analysis"
    start = request_start(endpoint, evaluation_id=evaluation_id)
    try:
        report = service.get_analysis_status(evaluation_id)
        request_end(endpoint, start, evaluation_id=evaluation_id, status=report.status)
        return report
    except Exception as e:
        http_error = _to_http_exception(e)
        request_error(
            endpoint,
            start,
            evaluation_id=evaluation_id,
            http_status=http_error.status_code,
            error=str(http_error.detail),
        )
        raise http_error from e


@router.get(
    "/api/clients/{client_id}/evolution",
    response_model=ClientEvolution,
    summary="Get client evolution",
    description="History, timeline and latest comparison of a client's analyzed evaluations.",
)
async def get_client_evolution(
    client_id: str,
    service: AnalysisService = Depends(get_analysis_service),
):
    endpoint = "/api/clients/{client_id}/evolution"
    start = request_start(endpoint, client_id=client_id)
    try:
        evolution = service.get_client_evolution(client_id)
        request_end(endpoint, start, client_id=client_id, evaluations=len(evolution.history))
        return evolution
    except Exception as e:
        http_error = _to_http_exception(e)
        request_error(
            endpoint,
            start,
            client_id=client_id,
            http_status=http_error.status_code,
            error=str(http_error.detail),
        )
        raise http_error from e


@router.post(
    "/api/comparisons",
    response_model=ComparisonOutcome,
    summary="Compare indicator sets",
    description="Compare two quantitative indicator sets and classify the evolution.",
)
async def compare_indicators(payload: ComparisonRequest):
    endpoint = "/api/comparisons"
    start = request_start(endpoint)
    try:
        outcome = compare(
            payload.current,
            payload.previous,
            current_date=payload.current_date,
            previous_date=payload.previous_date,
            config=settings.get_analysis_config().comparison,
        )
        request_end(endpoint, start, status=outcome.evolution.status.value)
        return outcome
    except InvalidIndicatorSetError as e:
        request_error(endpoint, start, http_status=422, error=e.reason)
        raise HTTPException(status_code=422, detail=e.reason)
