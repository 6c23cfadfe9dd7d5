"""
Session Provider Abstract Base Class

Defines how the app learns who (if anyone) is signed in.
Both MockSessionProvider and AppwriteSessionProvider implement it.

Author: Khalil Bannouri
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class SessionResult:
    """
    Result of resolving the current session.

    Attributes:
        success: Whether a signed-in user was found
        user: The user's profile (or account) document
        error_message: Why no session was resolved
    """
    success: bool
    user: Optional[dict[str, Any]] = None
    error_message: Optional[str] = None


class BaseSessionProvider(ABC):
    """Abstract base class for session providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def fetch_current_user(self) -> SessionResult:
        """
        Resolve the currently signed-in user.

        Implementations may raise on transport errors; the session store
        treats any exception as "not authenticated".
        """
        pass

    async def health_check(self) -> bool:
        """Check provider connectivity."""
        return True

    async def aclose(self) -> None:
        """Release network resources held by the provider."""
        return None
