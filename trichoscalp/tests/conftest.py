"""
PyTest configuration and fixtures.
"""

import os

# Keep the application engine off the working directory during tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from trichoscalp.database import Base, get_db
from trichoscalp import models  # noqa: F401
from trichoscalp.api.app import app
from trichoscalp.api.routes.analysis import get_analysis_service
from trichoscalp.domain.models import QuantitativeIndicators
from trichoscalp.services.analysis.service import AnalysisService
from trichoscalp.services.analysis.synthesizer import zero_noise

# Test database URL
SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"


@pytest.fixture
def test_db():
    """Create a fresh in-memory database for each test."""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},  # Needed for SQLite
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(test_db):
    """Get database session for each test."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_db)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    """Create test client with database and noise-free service overrides."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    def override_get_analysis_service():
        return AnalysisService(db_session, noise=zero_noise)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_analysis_service] = override_get_analysis_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def full_image_set():
    """Nine standardized captures followed by five panoramic photos."""
    standardized = [f"https://storage.example.com/av/std_{i}.jpg" for i in range(9)]
    panoramic = [f"https://storage.example.com/av/pan_{i}.jpg" for i in range(5)]
    return standardized + panoramic


@pytest.fixture
def improving_pair():
    current = QuantitativeIndicators(
        densidade_capilar=0.8,
        oleosidade=0.3,
        descamacao=0.1,
        miniaturizacao=0.15,
        inflamacao=0.05,
    )
    previous = QuantitativeIndicators(
        densidade_capilar=0.6,
        oleosidade=0.5,
        descamacao=0.2,
        miniaturizacao=0.3,
        inflamacao=0.1,
    )
    return current, previous
