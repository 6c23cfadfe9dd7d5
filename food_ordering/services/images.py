"""
Menu Image Re-hosting

Downloads a menu item's source image and uploads it to the catalog bucket,
so the app serves images from the project's own storage.

Re-hosting is best effort: any failure along the way (download, upload,
view URL) is logged and the original source URL is used instead.

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from food_ordering.services.backend.base import (
    BaseBackendService,
    InputFile,
    unique_id,
)

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class ImageRehostResult:
    """
    Outcome of re-hosting one image.

    Attributes:
        url: URL to store on the menu item (hosted URL or the source URL)
        rehosted: Whether the image now lives in the bucket
        file_id: ID of the uploaded file, if any
        error_message: Why re-hosting fell back, if it did
    """
    url: str
    rehosted: bool
    file_id: Optional[str] = None
    error_message: Optional[str] = None


def file_name_from_url(image_url: str) -> str:
    """Last path segment of the URL, or a timestamped fallback name."""
    try:
        name = httpx.URL(image_url).path.rstrip("/").split("/")[-1]
    except httpx.InvalidURL:
        name = ""
    return name or f"file-{int(time.time() * 1000)}.jpg"


class ImageRehoster:
    """
    Fetches source images and uploads them to a storage bucket.

    Attributes:
        backend: Backend the images are uploaded to
        bucket_id: Target bucket

    Example:
        >>> rehoster = ImageRehoster(backend, "assets")
        >>> result = await rehoster.rehost("https://example.com/burger.png")
        >>> print(result.url)
    """

    def __init__(
        self,
        backend: BaseBackendService,
        bucket_id: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.backend = backend
        self.bucket_id = bucket_id
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
        )

    async def _fetch(self, image_url: str) -> InputFile:
        response = await self._client.get(image_url)
        if not response.is_success:
            raise ValueError(
                f"Failed to fetch image: {response.status_code} {response.reason_phrase}"
            )

        content = response.content
        content_type = response.headers.get("content-type", DEFAULT_CONTENT_TYPE)
        return InputFile(
            name=file_name_from_url(image_url),
            type=content_type.split(";")[0].strip(),
            size=len(content),
            uri=image_url,
            content=content,
        )

    async def rehost(self, image_url: str) -> ImageRehostResult:
        """
        Upload the image behind image_url to the bucket.

        Never raises: on failure the result carries the original URL.
        """
        logger.info(f"Uploading image: {image_url}")

        try:
            file = await self._fetch(image_url)
            uploaded = await self.backend.create_file(self.bucket_id, unique_id(), file)
            file_url = self.backend.get_file_view_url(self.bucket_id, uploaded["$id"])
        except Exception as e:
            logger.warning(f"Error uploading image {image_url}: {e}")
            logger.warning(f"Using original URL as fallback: {image_url}")
            return ImageRehostResult(url=image_url, rehosted=False, error_message=str(e))

        logger.info(f"Uploaded image: {file_url}")
        return ImageRehostResult(url=file_url, rehosted=True, file_id=uploaded["$id"])

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ImageRehoster":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
