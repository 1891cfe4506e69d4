"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can be started locally without any setup.  In a production
deployment you should override these via environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Mentor App API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    api_prefix: str = os.getenv("API_PREFIX", "/v1")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Directory for dated log files (``<LOG_DIR>/YYYY-MM-DD.log``).  When
    # empty, only the console handler is installed.
    log_dir: str = os.getenv("LOG_DIR", "")

    # Path to the SQLite database.  If a relative path is provided, it
    # will be resolved relative to the project package by the ``db``
    # module.
    database_url: str = os.getenv("DATABASE_URL", "mentor_app.db")

    # Number of candidates the identifier generator may draw before
    # giving up.  A collision in a 40-bit space is very unlikely, so a
    # handful of attempts is plenty.
    identifier_max_attempts: int = int(os.getenv("IDENTIFIER_MAX_ATTEMPTS", "5"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
