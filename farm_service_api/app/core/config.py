"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  A ``.env`` file in the working directory is
loaded first so that local deployments (for example next to the
Telegram bot) can keep their settings in one place.  Defaults are
provided for all fields.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Farm Service API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Network settings used by ``run.py``.  The bot front end expects the
    # API on port 3000 unless told otherwise.
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Comma‑separated list of origins allowed by the CORS middleware.
    # ``*`` allows any origin.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Path to the SQLite database.  If a relative path is provided, it
    # is resolved relative to the project root by the ``db`` module.
    # ``:memory:`` keeps everything in RAM (useful for experiments).
    database_url: str = os.getenv("DATABASE_URL", "database/db.sqlite")

    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at instantiation time, environment variables should
# be set before importing this module.
settings = Settings()
