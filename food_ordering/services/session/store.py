"""
Session Store

Single source of truth for "is someone signed in". Populated once at
startup by fetch_authenticated_user(), its only writer, and read by the
route decision of every tab.

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from typing import Any, Optional

from food_ordering.services.session.base import BaseSessionProvider, SessionResult

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Process-wide authentication state.

    Attributes:
        provider: Where the current user is fetched from
        is_authenticated: Whether a user was resolved
        is_loading: True while a fetch is in flight
        user: The resolved user document

    Example:
        >>> store = SessionStore(get_session_provider())
        >>> await store.fetch_authenticated_user()
        >>> store.is_authenticated
        True
    """

    def __init__(self, provider: BaseSessionProvider):
        self.provider = provider
        self.is_authenticated = False
        self.is_loading = True
        self.user: Optional[dict[str, Any]] = None

    async def fetch_authenticated_user(self) -> SessionResult:
        """
        Resolve the current user and update the store.

        Any failure, raised or reported, leaves the store signed out.
        """
        self.is_loading = True

        try:
            result = await self.provider.fetch_current_user()
        except Exception as e:
            logger.error(f"fetchAuthenticatedUser error: {e}")
            result = SessionResult(success=False, error_message=str(e))

        self.is_authenticated = result.success
        self.user = result.user if result.success else None
        self.is_loading = False

        if result.success:
            logger.info(f"Session resolved ({self.provider.provider_name})")
        else:
            logger.info(f"No session: {result.error_message}")

        return result

    refresh = fetch_authenticated_user
