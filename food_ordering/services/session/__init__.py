"""
Session Provider Factory

Provides a single entry point for obtaining a session provider.
Automatically selects Mock or Appwrite based on ENV_MODE configuration.

Usage:
    from food_ordering.services.session import get_session_provider, SessionStore

    store = SessionStore(get_session_provider())
    await store.fetch_authenticated_user()

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from functools import lru_cache

from food_ordering.core.config import get_settings
from food_ordering.services.session.base import BaseSessionProvider, SessionResult
from food_ordering.services.session.mock import DEMO_USER, MockSessionProvider
from food_ordering.services.session.appwrite import AppwriteSessionProvider
from food_ordering.services.session.store import SessionStore

logger = logging.getLogger(__name__)


@lru_cache()
def get_session_provider() -> BaseSessionProvider:
    """
    Get the configured session provider.

    Returns:
        BaseSessionProvider: MockSessionProvider signed in as the demo user
        in development, AppwriteSessionProvider otherwise
    """
    settings = get_settings()

    if settings.is_development:
        logger.info("Session Provider: Using MockSessionProvider (development mode)")
        return MockSessionProvider(user=DEMO_USER)
    else:
        logger.info(
            f"Session Provider: Using AppwriteSessionProvider "
            f"({settings.env_mode.value} mode)"
        )
        return AppwriteSessionProvider(settings)


def reset_session_provider() -> None:
    """Clear the cached session provider."""
    get_session_provider.cache_clear()
    logger.debug("Session provider cache cleared")


__all__ = [
    "get_session_provider",
    "reset_session_provider",
    "BaseSessionProvider",
    "SessionResult",
    "SessionStore",
    "MockSessionProvider",
    "AppwriteSessionProvider",
]
