"""
Pydantic models for API request/response validation and documentation.

Response bodies reuse the domain models in ``trichoscalp.domain.models``;
this module only holds the request payloads and the small system responses.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# Request Models


class EvaluationCreateRequest(BaseModel):
    """
    Request model for registering a new evaluation of a client.
    """

    client_id: str = Field(..., min_length=1, description="ID of the client being evaluated")
    evaluation_id: Optional[str] = Field(
        None, description="Explicit evaluation ID (generated when omitted)"
    )

    model_config = {
        "json_schema_extra": {
            "example": {"client_id": "cliente-123"}
        }
    }


class AnalysisRequest(BaseModel):
    """
    Request model for triggering the analysis of an evaluation.
    """

    client_id: str = Field(..., description="ID of the client the evaluation belongs to")
    image_urls: List[str] = Field(
        default_factory=list,
        description="Resolved image references; the first nine are the standardized captures",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "client_id": "cliente-123",
                "image_urls": [
                    "https://storage.example.com/avaliacoes/av-1/frontal.jpg",
                    "https://storage.example.com/avaliacoes/av-1/vertex.jpg",
                ],
            }
        }
    }


class ComparisonRequest(BaseModel):
    """
    Request model for comparing two indicator sets directly.

    The indicator sets are accepted as raw objects so that missing or
    non-numeric fields are reported by the comparator itself.
    """

    current: Dict[str, Any] = Field(..., description="Indicators of the most recent evaluation")
    previous: Dict[str, Any] = Field(..., description="Indicators of the preceding evaluation")
    current_date: Optional[date] = None
    previous_date: Optional[date] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "current": {
                    "densidade_capilar": 0.7,
                    "oleosidade": 0.5,
                    "descamacao": 0.2,
                    "miniaturizacao": 0.3,
                    "inflamacao": 0.1,
                },
                "previous": {
                    "densidade_capilar": 0.6,
                    "oleosidade": 0.6,
                    "descamacao": 0.3,
                    "miniaturizacao": 0.4,
                    "inflamacao": 0.15,
                },
            }
        }
    }


# Response Models


class EvaluationResponse(BaseModel):
    """
    Response model for a registered evaluation.
    """

    evaluation_id: str
    client_id: str
    status: str
    created_at: datetime


class HealthCheckResponse(BaseModel):
    """
    Response model for health check endpoint.
    """

    status: str
    timestamp: datetime
    database: Optional[str] = None
