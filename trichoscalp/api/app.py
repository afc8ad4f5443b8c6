"""
FastAPI application for the TrichoScalp analysis API.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trichoscalp import __version__
from trichoscalp.database import check_connection, create_tables
from trichoscalp.infrastructure.config.settings import settings
from trichoscalp.schemas import HealthCheckResponse
from trichoscalp.utils.timezone_utils import utc_now

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from trichoscalp.api.routes.analysis import router as analysis_router

app = FastAPI(
    title="TrichoScalp API",
    description="""
    API for trichoscopy evaluations.

    - Mock analysis of the evaluation images into five quantitative indicators
    - Comparison with the client's previous evaluation
    - Evolution history and executive summary per client
    """,
    version=__version__,
    openapi_url="/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=settings.cors_methods,
    allow_headers=settings.cors_headers,
)

app.include_router(analysis_router)

# Initialize database tables
try:
    create_tables()
    logger.info("Database tables initialized successfully")
except Exception as e:
    logger.warning(f"Database initialization failed: {e}")


@app.get(
    "/health",
    response_model=HealthCheckResponse,
    tags=["System"],
    summary="Health check",
    description="Simple health check endpoint to verify the API and database are reachable.",
)
async def health_check():
    """
    Simple health check endpoint.
    """
    database = "connected" if check_connection() else "unavailable"
    return HealthCheckResponse(status="healthy", timestamp=utc_now(), database=database)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "trichoscalp.api.app:app",
        host=settings.uvicorn_host,
        port=settings.uvicorn_port,
        reload=settings.uvicorn_reload,
    )
