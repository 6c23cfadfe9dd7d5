"""
Appwrite Backend Service Implementation

Production implementation using the Appwrite REST API.
Used when ENV_MODE=production or ENV_MODE=staging.

Requirements:
    - APPWRITE_PROJECT_ID and APPWRITE_API_KEY must be set in environment
    - The API key needs documents.read/write and files.read/write scopes

API Documentation:
    https://appwrite.io/docs/references/cloud/server-rest/databases
    https://appwrite.io/docs/references/cloud/server-rest/storage

Author: Khalil Bannouri
Version: 1.0.0
"""

import json
import logging
from typing import Any, Optional

import httpx

from food_ordering.core.config import Settings, get_settings
from food_ordering.services.backend.base import (
    BackendError,
    BaseBackendService,
    InputFile,
)

logger = logging.getLogger(__name__)

# Largest page Appwrite returns for a single list call
PAGE_SIZE = 100


def _query(method: str, values: list[Any]) -> str:
    """Serialize a query the way Appwrite 1.5+ expects it."""
    return json.dumps({"method": method, "values": values})


def raise_for_appwrite_error(response: httpx.Response) -> None:
    """
    Convert a non-2xx Appwrite response into a BackendError.

    Appwrite errors look like {"message": ..., "code": 404, "type": ...}.
    """
    if response.is_success:
        return

    message = response.reason_phrase or "Appwrite request failed"
    error_type = None
    try:
        body = response.json()
        message = body.get("message", message)
        error_type = body.get("type")
    except ValueError:
        pass

    raise BackendError(message, status_code=response.status_code, error_type=error_type)


class AppwriteBackendService(BaseBackendService):
    """
    Production Appwrite backend implementation.

    Configuration:
        Requires APPWRITE_PROJECT_ID and APPWRITE_API_KEY.

    Example:
        >>> backend = AppwriteBackendService()
        >>> docs = await backend.list_documents("food_ordering", "categories")
        >>> print(len(docs))
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the HTTP client with project credentials.

        Args:
            settings: Settings to read credentials from (global settings if None)
            client: Preconfigured client, mainly for tests

        Raises:
            ValueError: If project id or API key is not configured
        """
        settings = settings or get_settings()

        if not settings.appwrite_project_id or not settings.appwrite_api_key:
            raise ValueError(
                "APPWRITE_PROJECT_ID and APPWRITE_API_KEY are required for production mode. "
                "Set them in your .env file or environment variables."
            )

        self._endpoint = settings.appwrite_endpoint
        self._project_id = settings.appwrite_project_id
        self._client = client or httpx.AsyncClient(
            base_url=self._endpoint,
            timeout=settings.http_timeout_seconds,
        )
        self._headers = {
            "X-Appwrite-Project": settings.appwrite_project_id,
            "X-Appwrite-Key": settings.appwrite_api_key,
        }

        logger.info(f"AppwriteBackendService initialized ({self._endpoint})")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "appwrite"

    async def _request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> Optional[dict[str, Any]]:
        """Send a request and return the decoded JSON body (None for 204)."""
        try:
            response = await self._client.request(
                method, path, headers=self._headers, **kwargs
            )
        except httpx.HTTPError as e:
            raise BackendError(f"Unable to reach Appwrite: {e}") from e

        raise_for_appwrite_error(response)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def _list_all(self, path: str, key: str) -> list[dict[str, Any]]:
        """Page through a list endpoint until every entry is collected."""
        entries: list[dict[str, Any]] = []

        while True:
            params = [
                ("queries[]", _query("limit", [PAGE_SIZE])),
                ("queries[]", _query("offset", [len(entries)])),
            ]
            body = await self._request("GET", path, params=params) or {}
            page = body.get(key, [])
            entries.extend(page)

            if not page or len(entries) >= body.get("total", 0):
                return entries

    # =========================================================================
    # DOCUMENTS
    # =========================================================================

    @staticmethod
    def _documents_path(database_id: str, collection_id: str) -> str:
        return f"/databases/{database_id}/collections/{collection_id}/documents"

    async def list_documents(
        self,
        database_id: str,
        collection_id: str,
    ) -> list[dict[str, Any]]:
        return await self._list_all(
            self._documents_path(database_id, collection_id), "documents"
        )

    async def create_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        logger.debug(f"Appwrite: Creating document in {collection_id}")
        return await self._request(
            "POST",
            self._documents_path(database_id, collection_id),
            json={"documentId": document_id, "data": data},
        )

    async def delete_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
    ) -> None:
        await self._request(
            "DELETE",
            f"{self._documents_path(database_id, collection_id)}/{document_id}",
        )

    # =========================================================================
    # STORAGE
    # =========================================================================

    async def list_files(self, bucket_id: str) -> list[dict[str, Any]]:
        return await self._list_all(f"/storage/buckets/{bucket_id}/files", "files")

    async def create_file(
        self,
        bucket_id: str,
        file_id: str,
        file: InputFile,
    ) -> dict[str, Any]:
        # TODO: chunked upload with Content-Range for files above 5 MB
        logger.debug(f"Appwrite: Uploading {file.name} ({file.size} bytes)")
        return await self._request(
            "POST",
            f"/storage/buckets/{bucket_id}/files",
            data={"fileId": file_id},
            files={"file": (file.name, file.content, file.type)},
        )

    async def delete_file(self, bucket_id: str, file_id: str) -> None:
        await self._request("DELETE", f"/storage/buckets/{bucket_id}/files/{file_id}")

    def get_file_view_url(self, bucket_id: str, file_id: str) -> str:
        return (
            f"{self._endpoint}/storage/buckets/{bucket_id}/files/{file_id}/view"
            f"?project={self._project_id}"
        )

    async def health_check(self) -> bool:
        """
        Verify Appwrite connectivity.

        Hits the public health endpoint, which needs no extra scopes.
        """
        try:
            await self._request("GET", "/health/version")
            logger.debug("Appwrite: Health check passed")
            return True
        except BackendError as e:
            logger.error(f"Appwrite: Health check failed - {e}")
            return False

    async def aclose(self) -> None:
        await self._client.aclose()
