"""
Catalog Verification

Compares what is stored remotely with what the dataset says should be
there after a successful seed.

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
from dataclasses import dataclass

from food_ordering.core.config import Settings
from food_ordering.schemas import CatalogDataset
from food_ordering.services.backend import BaseBackendService

logger = logging.getLogger(__name__)


@dataclass
class CountCheck:
    """Stored vs expected number of entries for one collection or bucket."""
    target: str
    actual: int
    expected: int
    allow_fewer: bool = False

    @property
    def ok(self) -> bool:
        if self.allow_fewer:
            return self.actual <= self.expected
        return self.actual == self.expected


async def verify_catalog(
    backend: BaseBackendService,
    settings: Settings,
    dataset: CatalogDataset,
) -> list[CountCheck]:
    """
    Count every catalog collection and the bucket.

    Links are expected once per resolvable (item, customization) pair and
    files at most once per menu item, since image re-hosting may fall back.
    """
    expected = {
        settings.categories_collection_id: len(dataset.categories),
        settings.customizations_collection_id: len(dataset.customizations),
        settings.menu_collection_id: len(dataset.menu),
        settings.menu_customizations_collection_id: dataset.expected_link_count(),
    }

    checks = []
    for collection_id, count in expected.items():
        documents = await backend.list_documents(settings.database_id, collection_id)
        checks.append(CountCheck(collection_id, len(documents), count))

    files = await backend.list_files(settings.bucket_id)
    checks.append(CountCheck(
        settings.bucket_id,
        len(files),
        len(dataset.menu),
        allow_fewer=True,
    ))

    for check in checks:
        if not check.ok:
            logger.warning(f"{check.target}: {check.actual} stored, {check.expected} expected")

    return checks
