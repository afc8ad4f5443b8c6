"""Application settings and configuration"""

import os
import logging
from typing import Dict, Any, Optional

from dotenv import load_dotenv

from trichoscalp.infrastructure.data.config import AnalysisConfig

load_dotenv()


class Settings:
    """Manages application settings and configuration"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._analysis_config: Optional[AnalysisConfig] = None

        # Database configuration
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./trichoscalp.db")
        self.db_pool_size = int(os.getenv("DB_POOL_SIZE", "5"))
        self.db_max_overflow = int(os.getenv("DB_MAX_OVERFLOW", "10"))
        self.db_pool_timeout = int(os.getenv("DB_POOL_TIMEOUT", "30"))

        # CORS settings
        default_origins = [
            "http://localhost:5173",  # Vite dev server
            "http://localhost:3000",
        ]
        self.cors_origins = os.getenv("CORS_ORIGINS", ",".join(default_origins)).split(
            ","
        )
        self.cors_methods = os.getenv("CORS_METHODS", "GET,POST,OPTIONS").split(",")
        self.cors_headers = os.getenv("CORS_HEADERS", "*").split(",")

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        # Uvicorn server settings
        self.uvicorn_host = os.getenv("UVICORN_HOST", "0.0.0.0")
        self.uvicorn_port = int(os.getenv("UVICORN_PORT", "8000"))
        self.uvicorn_reload = os.getenv("UVICORN_RELOAD", "false").lower() == "true"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite:")

    def get_analysis_config(self) -> AnalysisConfig:
        """Get current analysis configuration, loading it from the environment once"""
        if self._analysis_config is None:
            self._analysis_config = AnalysisConfig.from_env()
            self.logger.info(
                f"Loaded analysis configuration: {self._analysis_config.to_dict()}"
            )
        return self._analysis_config

    def get_settings_summary(self) -> Dict[str, Any]:
        """Get summary of current settings"""
        url = self.database_url
        if "@" in url:
            scheme, rest = url.split("://", 1)
            url = f"{scheme}://***@{rest.split('@', 1)[1]}"
        return {
            "database_url": url,
            "db_pool_size": self.db_pool_size,
            "log_level": self.log_level,
            "analysis": self.get_analysis_config().to_dict(),
        }


# Global instance
settings = Settings()
