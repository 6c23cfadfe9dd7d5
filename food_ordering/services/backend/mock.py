"""
Mock Backend Service Implementation

In-memory stand-in for the Appwrite project.
Used in development mode (ENV_MODE=development) and by the test suite.

Behavior:
    - Collections and buckets are created on first use
    - Optional simulated network latency
    - Optional random failure rate for testing error handling
    - Deterministic fault injection per operation

Author: Khalil Bannouri
Version: 1.0.0
"""

import asyncio
import logging
import random
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from food_ordering.services.backend.base import (
    BackendError,
    BaseBackendService,
    InputFile,
)

logger = logging.getLogger(__name__)

# Predicate receiving the operation's keyword context (collection_id,
# document_id, bucket_id, file_id, data, file) and deciding whether it fails.
FaultPredicate = Callable[[dict[str, Any]], bool]

OPERATIONS = (
    "list_documents",
    "create_document",
    "delete_document",
    "list_files",
    "create_file",
    "delete_file",
)


class MockBackendService(BaseBackendService):
    """
    Mock implementation of the backend service.

    Attributes:
        failure_rate: Probability of simulated API failure (0.0-1.0)
        min_latency: Minimum response time in seconds
        max_latency: Maximum response time in seconds
        base_url: Prefix of the generated file view URLs

    Example:
        >>> backend = MockBackendService()
        >>> backend.inject_fault(
        ...     "delete_document",
        ...     lambda ctx: ctx["document_id"] == "abc",
        ... )
    """

    def __init__(
        self,
        failure_rate: float = 0.0,
        min_latency: float = 0.0,
        max_latency: float = 0.0,
        base_url: str = "http://localhost/v1",
    ):
        self.failure_rate = failure_rate
        self.min_latency = min_latency
        self.max_latency = max_latency
        self.base_url = base_url.rstrip("/")

        # (database_id, collection_id) -> {document_id: document}
        self._collections: dict[tuple[str, str], dict[str, dict[str, Any]]] = {}
        # bucket_id -> {file_id: metadata}
        self._buckets: dict[str, dict[str, dict[str, Any]]] = {}
        self._file_contents: dict[tuple[str, str], bytes] = {}
        self._faults: dict[str, list[FaultPredicate]] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

        logger.info(f"MockBackendService initialized (failure_rate={failure_rate:.0%})")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "mock"

    # =========================================================================
    # SIMULATION
    # =========================================================================

    def inject_fault(
        self,
        operation: str,
        predicate: Optional[FaultPredicate] = None,
    ) -> None:
        """
        Make an operation fail when the predicate matches its context.

        Args:
            operation: One of OPERATIONS
            predicate: Called with the operation context; always fail if None
        """
        if operation not in OPERATIONS:
            raise ValueError(f"Unknown operation: {operation}")
        self._faults.setdefault(operation, []).append(predicate or (lambda ctx: True))

    def clear_faults(self) -> None:
        self._faults.clear()

    async def _simulate_latency(self) -> None:
        if self.max_latency > 0:
            await asyncio.sleep(random.uniform(self.min_latency, self.max_latency))

    async def _enter(self, operation: str, **context: Any) -> None:
        """Record the call, then simulate latency and failures."""
        self.calls.append((operation, context))
        await self._simulate_latency()

        for predicate in self._faults.get(operation, []):
            if predicate(context):
                logger.debug(f"Mock: Injected failure in {operation} {context}")
                raise BackendError(f"Injected failure in {operation}", status_code=500)

        if self.failure_rate and random.random() < self.failure_rate:
            logger.debug(f"Mock: Simulated failure in {operation}")
            raise BackendError("Service temporarily unavailable", status_code=503)

    @staticmethod
    def _timestamps() -> dict[str, str]:
        now = datetime.now(timezone.utc).isoformat()
        return {"$createdAt": now, "$updatedAt": now}

    # =========================================================================
    # DOCUMENTS
    # =========================================================================

    def documents(self, database_id: str, collection_id: str) -> list[dict[str, Any]]:
        """Snapshot of a collection, in creation order."""
        collection = self._collections.get((database_id, collection_id), {})
        return [deepcopy(doc) for doc in collection.values()]

    async def list_documents(
        self,
        database_id: str,
        collection_id: str,
    ) -> list[dict[str, Any]]:
        await self._enter(
            "list_documents", database_id=database_id, collection_id=collection_id
        )
        return self.documents(database_id, collection_id)

    async def create_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        await self._enter(
            "create_document",
            database_id=database_id,
            collection_id=collection_id,
            document_id=document_id,
            data=data,
        )
        collection = self._collections.setdefault((database_id, collection_id), {})
        if document_id in collection:
            raise BackendError(
                "Document with the requested ID already exists",
                status_code=409,
                error_type="document_already_exists",
            )

        document = {
            "$id": document_id,
            "$databaseId": database_id,
            "$collectionId": collection_id,
            **self._timestamps(),
            **deepcopy(data),
        }
        collection[document_id] = document
        return deepcopy(document)

    async def delete_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
    ) -> None:
        await self._enter(
            "delete_document",
            database_id=database_id,
            collection_id=collection_id,
            document_id=document_id,
        )
        collection = self._collections.get((database_id, collection_id), {})
        if collection.pop(document_id, None) is None:
            raise BackendError(
                "Document with the requested ID could not be found",
                status_code=404,
                error_type="document_not_found",
            )

    # =========================================================================
    # STORAGE
    # =========================================================================

    def files(self, bucket_id: str) -> list[dict[str, Any]]:
        """Snapshot of a bucket, in upload order."""
        return [deepcopy(f) for f in self._buckets.get(bucket_id, {}).values()]

    def file_content(self, bucket_id: str, file_id: str) -> bytes:
        return self._file_contents[(bucket_id, file_id)]

    async def list_files(self, bucket_id: str) -> list[dict[str, Any]]:
        await self._enter("list_files", bucket_id=bucket_id)
        return self.files(bucket_id)

    async def create_file(
        self,
        bucket_id: str,
        file_id: str,
        file: InputFile,
    ) -> dict[str, Any]:
        await self._enter("create_file", bucket_id=bucket_id, file_id=file_id, file=file)
        bucket = self._buckets.setdefault(bucket_id, {})
        if file_id in bucket:
            raise BackendError(
                "A storage file with the requested ID already exists",
                status_code=409,
                error_type="storage_file_already_exists",
            )

        metadata = {
            "$id": file_id,
            "bucketId": bucket_id,
            "name": file.name,
            "mimeType": file.type,
            "sizeOriginal": file.size,
            **self._timestamps(),
        }
        bucket[file_id] = metadata
        self._file_contents[(bucket_id, file_id)] = file.content
        return deepcopy(metadata)

    async def delete_file(self, bucket_id: str, file_id: str) -> None:
        await self._enter("delete_file", bucket_id=bucket_id, file_id=file_id)
        bucket = self._buckets.get(bucket_id, {})
        if bucket.pop(file_id, None) is None:
            raise BackendError(
                "The requested file could not be found",
                status_code=404,
                error_type="storage_file_not_found",
            )
        self._file_contents.pop((bucket_id, file_id), None)

    def get_file_view_url(self, bucket_id: str, file_id: str) -> str:
        return f"{self.base_url}/storage/buckets/{bucket_id}/files/{file_id}/view"

    async def health_check(self) -> bool:
        """Mock health check always returns True."""
        logger.debug("Mock: Backend health check passed")
        return True
