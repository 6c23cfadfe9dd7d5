"""
Mock Session Provider

Returns a fixed user (or no session) without any network call.
Used in development mode and by the test suite.

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from typing import Any, Optional

from food_ordering.services.session.base import BaseSessionProvider, SessionResult

logger = logging.getLogger(__name__)

DEMO_USER = {
    "$id": "mock_user",
    "accountId": "mock_account",
    "name": "Demo User",
    "email": "demo@example.com",
}


class MockSessionProvider(BaseSessionProvider):
    """
    Mock session provider.

    Attributes:
        user: User returned by every fetch, None for "signed out"
        error: Exception raised by every fetch, to simulate failures
    """

    def __init__(
        self,
        user: Optional[dict[str, Any]] = None,
        error: Optional[Exception] = None,
    ):
        self.user = user
        self.error = error
        self.fetch_count = 0
        logger.info(
            f"MockSessionProvider initialized "
            f"({'signed in' if user else 'signed out'})"
        )

    @property
    def provider_name(self) -> str:
        return "mock"

    async def fetch_current_user(self) -> SessionResult:
        self.fetch_count += 1

        if self.error is not None:
            raise self.error

        if self.user is None:
            return SessionResult(success=False, error_message="No active session")

        return SessionResult(success=True, user=dict(self.user))
