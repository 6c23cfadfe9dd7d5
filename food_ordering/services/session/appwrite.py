"""
Appwrite Session Provider

Resolves the signed-in user from an Appwrite account JWT.
Used when ENV_MODE=production or ENV_MODE=staging.

Flow:
    1. GET /account with X-Appwrite-JWT → the account
    2. If USER_COLLECTION_ID is set, find the profile document whose
       accountId matches; that document becomes the user

API Documentation:
    https://appwrite.io/docs/references/cloud/client-rest/account

Author: Khalil Bannouri
Version: 1.0.0
"""

import json
import logging
from typing import Any, Optional

import httpx

from food_ordering.core.config import Settings, get_settings
from food_ordering.services.backend.appwrite import raise_for_appwrite_error
from food_ordering.services.backend.base import BackendError
from food_ordering.services.session.base import BaseSessionProvider, SessionResult

logger = logging.getLogger(__name__)


class AppwriteSessionProvider(BaseSessionProvider):
    """
    Session provider backed by the Appwrite account API.

    Configuration:
        Requires APPWRITE_PROJECT_ID. Without APPWRITE_SESSION_JWT every
        fetch resolves to "no session".
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        settings = settings or get_settings()

        if not settings.appwrite_project_id:
            raise ValueError(
                "APPWRITE_PROJECT_ID is required for production mode. "
                "Set it in your .env file or environment variables."
            )

        self._settings = settings
        self._jwt = settings.appwrite_session_jwt
        self._client = client or httpx.AsyncClient(
            base_url=settings.appwrite_endpoint,
            timeout=settings.http_timeout_seconds,
        )

        logger.info("AppwriteSessionProvider initialized")

    @property
    def provider_name(self) -> str:
        return "appwrite"

    def _headers(self) -> dict[str, str]:
        return {
            "X-Appwrite-Project": self._settings.appwrite_project_id,
            "X-Appwrite-JWT": self._jwt or "",
        }

    async def _get(self, path: str, **kwargs: Any) -> dict[str, Any]:
        response = await self._client.get(path, headers=self._headers(), **kwargs)
        raise_for_appwrite_error(response)
        return response.json()

    async def _find_profile(self, account_id: str) -> Optional[dict[str, Any]]:
        settings = self._settings
        query = json.dumps({
            "method": "equal",
            "attribute": "accountId",
            "values": [account_id],
        })
        body = await self._get(
            f"/databases/{settings.database_id}/collections/"
            f"{settings.user_collection_id}/documents",
            params=[("queries[]", query)],
        )
        documents = body.get("documents", [])
        return documents[0] if documents else None

    async def fetch_current_user(self) -> SessionResult:
        if not self._jwt:
            return SessionResult(success=False, error_message="No session JWT configured")

        try:
            account = await self._get("/account")
        except BackendError as e:
            if e.status_code == 401:
                logger.info("Appwrite: Session is not valid")
                return SessionResult(success=False, error_message=e.message)
            raise

        if not self._settings.user_collection_id:
            return SessionResult(success=True, user=account)

        profile = await self._find_profile(account["$id"])
        if profile is None:
            logger.warning(f"Appwrite: No user profile for account {account['$id']}")
            return SessionResult(success=False, error_message="User profile not found")

        return SessionResult(success=True, user=profile)

    async def health_check(self) -> bool:
        try:
            response = await self._client.get("/health/version", headers=self._headers())
            return response.is_success
        except httpx.HTTPError as e:
            logger.error(f"Appwrite: Session health check failed - {e}")
            return False

    async def aclose(self) -> None:
        await self._client.aclose()
