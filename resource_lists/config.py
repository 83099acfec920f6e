"""
Resource Lists configuration — all environment variables in one place.

Read from environment at import time. Nothing is required up front: the
in-memory kernel needs no settings, only the Postgres and HTTP data sources do.
"""

from __future__ import annotations

import os


class Settings:
    """Settings from environment variables."""

    # Database
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "")
    DB_POOL_MIN_SIZE: int = int(os.environ.get("DB_POOL_MIN_SIZE", "2"))
    DB_POOL_MAX_SIZE: int = int(os.environ.get("DB_POOL_MAX_SIZE", "20"))
    RESOURCES_TABLE: str = os.environ.get("RESOURCE_LISTS_TABLE", "resources")

    # HTTP data source
    API_URL: str = os.environ.get("RESOURCE_LISTS_API_URL", "http://localhost:8000")
    HTTP_TIMEOUT: float = float(os.environ.get("RESOURCE_LISTS_HTTP_TIMEOUT", "30.0"))

    def require_database_url(self) -> str:
        if not self.DATABASE_URL:
            raise RuntimeError("DATABASE_URL environment variable is required")
        return self.DATABASE_URL


# Singleton instance
settings = Settings()
