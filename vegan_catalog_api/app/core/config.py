"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  In a
production deployment you should override these via environment
variables or a dedicated configuration service.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Vegan Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  Empty means console logging only.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database holding the identifier counter and the
    # product map.  If a relative path is provided, it will be resolved
    # relative to the package directory by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "vegan_catalog.db")

    # Upper bound, in bytes, for the JSON-serialized form of one product.
    # Records above the limit are rejected, never truncated.
    max_record_size: int = int(os.getenv("MAX_RECORD_SIZE", "2048"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at instantiation time, environment variables should
# be set before importing this module.
settings = Settings()
