"""
Backend Service Abstract Base Class

Defines the interface contract for the backend-as-a-service the catalog
lives in. Both MockBackendService and AppwriteBackendService must
implement these methods.

Operations:
    - Document store: list, create and delete documents in a collection
    - Object storage: list, upload and delete files in a bucket
    - Public view URLs for uploaded files

Documents and files are plain dicts carrying the store-assigned "$id"
next to their fields, exactly as the remote API returns them.

Author: Khalil Bannouri
Version: 1.0.0
"""

import secrets
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


def unique_id() -> str:
    """
    Generate a fresh 20-character identifier for a document or file.

    Same shape as the Appwrite SDK's ID.unique(): hex seconds and
    microseconds of the current time followed by random hex padding.
    """
    now = time.time()
    seconds = int(now)
    micros = int((now - seconds) * 1_000_000)
    prefix = f"{seconds:x}{micros:05x}"
    return prefix + secrets.token_hex(10)[: 20 - len(prefix)]


class BackendError(Exception):
    """
    Raised when a backend operation fails.

    Attributes:
        message: Human readable description
        status_code: HTTP status returned by the remote API, if any
        error_type: Machine-readable error type from the remote API
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_type: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


@dataclass
class InputFile:
    """
    File descriptor for an upload.

    Attributes:
        name: File name stored in the bucket
        type: MIME type
        size: Size in bytes
        uri: Where the content was fetched from
        content: Raw bytes to upload
    """
    name: str
    type: str
    size: int
    uri: str
    content: bytes = b""


class BaseBackendService(ABC):
    """
    Abstract base class for backend services.

    Example:
        >>> backend = get_backend_service()
        >>> doc = await backend.create_document(
        ...     "food_ordering", "categories", unique_id(),
        ...     {"name": "Burgers", "description": "Juicy burgers"},
        ... )
        >>> print(doc["$id"])
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return the name of the backend provider.

        Returns:
            str: Provider name (e.g., "mock", "appwrite")
        """
        pass

    @abstractmethod
    async def list_documents(
        self,
        database_id: str,
        collection_id: str,
    ) -> list[dict[str, Any]]:
        """
        List every document in a collection.

        Raises:
            BackendError: If the collection cannot be listed
        """
        pass

    @abstractmethod
    async def create_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Create a document and return it with its "$id".

        Raises:
            BackendError: If the document cannot be created
        """
        pass

    @abstractmethod
    async def delete_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
    ) -> None:
        """
        Delete a single document.

        Raises:
            BackendError: If the document cannot be deleted
        """
        pass

    @abstractmethod
    async def list_files(self, bucket_id: str) -> list[dict[str, Any]]:
        """
        List every file in a bucket.

        Raises:
            BackendError: If the bucket cannot be listed
        """
        pass

    @abstractmethod
    async def create_file(
        self,
        bucket_id: str,
        file_id: str,
        file: InputFile,
    ) -> dict[str, Any]:
        """
        Upload a file and return its metadata with its "$id".

        Raises:
            BackendError: If the upload fails
        """
        pass

    @abstractmethod
    async def delete_file(self, bucket_id: str, file_id: str) -> None:
        """
        Delete a single file.

        Raises:
            BackendError: If the file cannot be deleted
        """
        pass

    @abstractmethod
    def get_file_view_url(self, bucket_id: str, file_id: str) -> str:
        """Public URL serving the file content."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Verify connectivity to the backend.

        Returns:
            bool: True if service is operational
        """
        pass

    async def aclose(self) -> None:
        """Release network resources held by the service."""
        return None
