"""
Backend Service Factory

Provides a single entry point for obtaining a backend service instance.
Automatically selects the in-memory mock or Appwrite based on ENV_MODE.

Usage:
    from food_ordering.services.backend import get_backend_service

    backend = get_backend_service()
    docs = await backend.list_documents(settings.database_id, "categories")

Environment Switching:
    - ENV_MODE=development → MockBackendService (in-memory, no API calls)
    - ENV_MODE=staging → AppwriteBackendService (staging project)
    - ENV_MODE=production → AppwriteBackendService (live project)

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from functools import lru_cache

from food_ordering.core.config import get_settings
from food_ordering.services.backend.base import (
    BackendError,
    BaseBackendService,
    InputFile,
    unique_id,
)
from food_ordering.services.backend.mock import MockBackendService
from food_ordering.services.backend.appwrite import AppwriteBackendService

logger = logging.getLogger(__name__)


@lru_cache()
def get_backend_service() -> BaseBackendService:
    """
    Get the configured backend service instance.

    The instance is cached so the seeder, the verify script and the
    health endpoint share one HTTP connection pool (and, in development,
    one in-memory store).

    Returns:
        BaseBackendService: Configured backend service instance

    Raises:
        ValueError: If production mode but Appwrite credentials not configured
    """
    settings = get_settings()

    if settings.is_development:
        logger.info("Backend Service: Using MockBackendService (development mode)")
        return MockBackendService()
    else:
        logger.info(
            f"Backend Service: Using AppwriteBackendService "
            f"({settings.env_mode.value} mode)"
        )
        return AppwriteBackendService(settings)


def reset_backend_service() -> None:
    """
    Clear the cached backend service instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_backend_service.cache_clear()
    logger.debug("Backend service cache cleared")


__all__ = [
    "get_backend_service",
    "reset_backend_service",
    "unique_id",
    "BackendError",
    "BaseBackendService",
    "InputFile",
    "MockBackendService",
    "AppwriteBackendService",
]
