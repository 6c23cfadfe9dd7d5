"""
Catalog Seeder

Wipes the catalog collections and the image bucket, then recreates
everything from the static dataset.

Pipeline (strictly in this order):
    1. Wipe: categories, customizations, menu, menu_customizations, bucket.
       Entries of one collection are deleted concurrently; the first failure
       aborts the run.
    2. Categories, one at a time → name-to-id map.
    3. Customizations, one at a time → name-to-id map.
    4. Menu items, one at a time, each followed by its customization links.

Failure policy:
    - Fatal (logged, re-raised): any wipe failure, any category,
      customization or menu item creation failure, and a menu item whose
      category is not in the dataset.
    - Degraded (logged, run continues): image re-hosting failure (the source
      URL is kept), unknown customization names, a failed link creation.

Nothing is retried and nothing is rolled back: a failed run leaves the
catalog partially seeded.

Usage:
    from food_ordering.seed import seed

    report = await seed()

Author: Khalil Bannouri
Version: 1.0.0
"""

import asyncio
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from food_ordering.core.config import Settings, get_settings
from food_ordering.schemas import CatalogDataset, Category, Customization, MenuItem, load_dataset
from food_ordering.services.backend import BaseBackendService, get_backend_service, unique_id
from food_ordering.services.images import ImageRehoster

logger = logging.getLogger(__name__)


class SeedError(Exception):
    """Base class for failures that abort a seeding run."""


class MissingCategoryError(SeedError):
    """A menu item references a category that was not created."""

    def __init__(self, item_name: str, category_name: str):
        super().__init__(f"Category not found: {category_name} (menu item {item_name})")
        self.item_name = item_name
        self.category_name = category_name


@dataclass
class SeedReport:
    """Counts collected over a successful run."""
    cleared_documents: int = 0
    cleared_files: int = 0
    categories: int = 0
    customizations: int = 0
    menu_items: int = 0
    links: int = 0
    images_rehosted: int = 0
    image_fallbacks: int = 0
    skipped_customizations: int = 0
    failed_links: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return dict(self.__dict__)


# =============================================================================
# WIPE PHASE
# =============================================================================

async def clear_collection(
    backend: BaseBackendService,
    database_id: str,
    collection_id: str,
) -> int:
    """
    Delete every document in a collection.

    Returns:
        int: Number of deleted documents

    Raises:
        BackendError: If listing or any deletion fails
    """
    try:
        logger.info(f"Clearing collection: {collection_id}")
        documents = await backend.list_documents(database_id, collection_id)

        await asyncio.gather(*(
            backend.delete_document(database_id, collection_id, doc["$id"])
            for doc in documents
        ))
        logger.info(f"✅ Cleared collection: {collection_id} ({len(documents)} documents)")
        return len(documents)
    except Exception as e:
        logger.error(f"❌ Error clearing collection {collection_id}: {e}")
        raise


async def clear_storage(backend: BaseBackendService, bucket_id: str) -> int:
    """
    Delete every file in a bucket.

    Returns:
        int: Number of deleted files

    Raises:
        BackendError: If listing or any deletion fails
    """
    try:
        logger.info(f"Clearing storage: {bucket_id}")
        files = await backend.list_files(bucket_id)

        await asyncio.gather(*(
            backend.delete_file(bucket_id, f["$id"])
            for f in files
        ))
        logger.info(f"✅ Cleared storage: {bucket_id} ({len(files)} files)")
        return len(files)
    except Exception as e:
        logger.error(f"❌ Error clearing storage {bucket_id}: {e}")
        raise


# =============================================================================
# CREATION PHASES
# =============================================================================

async def create_categories(
    backend: BaseBackendService,
    database_id: str,
    collection_id: str,
    categories: list[Category],
) -> Mapping[str, str]:
    """
    Create categories one at a time.

    Returns:
        Read-only mapping of category name to document id
    """
    logger.info("📝 Creating categories...")
    category_map: dict[str, str] = {}

    for category in categories:
        try:
            doc = await backend.create_document(
                database_id,
                collection_id,
                unique_id(),
                category.model_dump(),
            )
        except Exception as e:
            logger.error(f"❌ Error creating category {category.name}: {e}")
            raise

        category_map[category.name] = doc["$id"]
        logger.info(f"✅ Created category: {category.name}")

    return MappingProxyType(category_map)


async def create_customizations(
    backend: BaseBackendService,
    database_id: str,
    collection_id: str,
    customizations: list[Customization],
) -> Mapping[str, str]:
    """
    Create customizations one at a time.

    Returns:
        Read-only mapping of customization name to document id
    """
    logger.info("🔧 Creating customizations...")
    customization_map: dict[str, str] = {}

    for customization in customizations:
        try:
            doc = await backend.create_document(
                database_id,
                collection_id,
                unique_id(),
                {
                    "name": customization.name,
                    "price": customization.price,
                    "type": customization.type,
                },
            )
        except Exception as e:
            logger.error(f"❌ Error creating customization {customization.name}: {e}")
            raise

        customization_map[customization.name] = doc["$id"]
        logger.info(f"✅ Created customization: {customization.name}")

    return MappingProxyType(customization_map)


class CatalogSeeder:
    """
    Runs the seeding pipeline against one backend.

    Attributes:
        backend: Backend holding the catalog
        settings: Source of the database, collection and bucket ids
        rehoster: Image re-hosting helper for menu item images

    Example:
        >>> seeder = CatalogSeeder(MockBackendService())
        >>> report = await seeder.seed(load_dataset())
        >>> print(report.menu_items)
    """

    def __init__(
        self,
        backend: BaseBackendService,
        settings: Optional[Settings] = None,
        rehoster: Optional[ImageRehoster] = None,
    ):
        self.backend = backend
        self.settings = settings or get_settings()
        self.rehoster = rehoster or ImageRehoster(
            backend,
            self.settings.bucket_id,
            timeout=self.settings.http_timeout_seconds,
        )

    async def wipe(self, report: SeedReport) -> None:
        """Clear every catalog collection, then the bucket."""
        for collection_id in self.settings.catalog_collection_ids:
            report.cleared_documents += await clear_collection(
                self.backend, self.settings.database_id, collection_id
            )
        report.cleared_files = await clear_storage(self.backend, self.settings.bucket_id)

    async def _link_customizations(
        self,
        item: MenuItem,
        menu_id: str,
        customization_map: Mapping[str, str],
        report: SeedReport,
    ) -> None:
        logger.info(f"🔗 Creating customizations for: {item.name}")

        for name in item.customizations:
            customization_id = customization_map.get(name)
            if customization_id is None:
                logger.warning(f"⚠️ Customization not found: {name}, skipping...")
                report.skipped_customizations += 1
                continue

            try:
                await self.backend.create_document(
                    self.settings.database_id,
                    self.settings.menu_customizations_collection_id,
                    unique_id(),
                    {"menu": menu_id, "customizations": customization_id},
                )
            except Exception as e:
                logger.warning(f"❌ Error creating menu customization {item.name} - {name}: {e}")
                report.failed_links += 1
                continue

            report.links += 1
            logger.info(f"✅ Created menu customization: {item.name} - {name}")

    async def create_menu_items(
        self,
        menu: list[MenuItem],
        category_map: Mapping[str, str],
        customization_map: Mapping[str, str],
        report: SeedReport,
    ) -> Mapping[str, str]:
        """
        Create menu items (and their links) one at a time, in dataset order.

        Returns:
            Read-only mapping of menu item name to document id

        Raises:
            MissingCategoryError: If an item's category was not created
        """
        logger.info("🍔 Creating menu items...")
        menu_map: dict[str, str] = {}

        for item in menu:
            logger.info(f"Processing menu item: {item.name}")

            category_id = category_map.get(item.category_name)
            if category_id is None:
                error = MissingCategoryError(item.name, item.category_name)
                logger.error(f"❌ Error creating menu item {item.name}: {error}")
                raise error

            image = await self.rehoster.rehost(item.image_url)
            if image.rehosted:
                report.images_rehosted += 1
            else:
                report.image_fallbacks += 1

            try:
                doc = await self.backend.create_document(
                    self.settings.database_id,
                    self.settings.menu_collection_id,
                    unique_id(),
                    {
                        "name": item.name,
                        "description": item.description,
                        "image_url": image.url,
                        "price": item.price,
                        "rating": item.rating,
                        "calories": item.calories,
                        "protein": item.protein,
                        "categories": category_id,
                    },
                )
            except Exception as e:
                logger.error(f"❌ Error creating menu item {item.name}: {e}")
                raise

            menu_map[item.name] = doc["$id"]
            report.menu_items += 1
            logger.info(f"✅ Created menu item: {item.name}")

            await self._link_customizations(item, doc["$id"], customization_map, report)

        return MappingProxyType(menu_map)

    async def seed(self, dataset: CatalogDataset) -> SeedReport:
        """
        Wipe and repopulate the catalog from the dataset.

        Returns:
            SeedReport: Counts of what was cleared and created

        Raises:
            SeedError: If a menu item references an unknown category
            BackendError: If any fatal remote call fails
        """
        report = SeedReport()

        try:
            logger.info("🚀 Starting seeding process...")

            await self.wipe(report)

            category_map = await create_categories(
                self.backend,
                self.settings.database_id,
                self.settings.categories_collection_id,
                dataset.categories,
            )
            report.categories = len(category_map)

            customization_map = await create_customizations(
                self.backend,
                self.settings.database_id,
                self.settings.customizations_collection_id,
                dataset.customizations,
            )
            report.customizations = len(customization_map)

            await self.create_menu_items(
                dataset.menu, category_map, customization_map, report
            )
        except Exception as e:
            logger.error(f"❌ Seeding failed: {e}")
            raise

        logger.info(
            f"✅ Seeding complete: {report.categories} categories, "
            f"{report.customizations} customizations, {report.menu_items} menu items, "
            f"{report.links} links ({report.image_fallbacks} image fallbacks)"
        )
        return report


async def seed(
    dataset: Optional[CatalogDataset] = None,
    backend: Optional[BaseBackendService] = None,
    settings: Optional[Settings] = None,
) -> SeedReport:
    """
    Seed the catalog with the configured services.

    Args:
        dataset: Dataset to seed from (configured dataset file if None)
        backend: Backend to seed (configured backend if None)
        settings: Settings with the catalog ids (global settings if None)

    Returns:
        SeedReport: Counts of what was cleared and created
    """
    settings = settings or get_settings()
    if dataset is None:
        dataset = load_dataset(settings.resolved_dataset_path)
    if backend is None:
        backend = get_backend_service()

    seeder = CatalogSeeder(backend, settings)
    try:
        return await seeder.seed(dataset)
    finally:
        await seeder.rehoster.aclose()
