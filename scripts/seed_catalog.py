"""
Catalog Seeding Script

Wipes the catalog collections and image bucket, then recreates them from
the dataset. Run from project root: python scripts/seed_catalog.py

Author: Khalil_Bannouri
Version: 1.0.0
"""

import argparse
import asyncio
import os
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from food_ordering.core.config import get_settings, setup_logging
from food_ordering.schemas import load_dataset
from food_ordering.seed import seed
from food_ordering.services.backend import MockBackendService, get_backend_service


async def run(dataset_path: Path, use_mock: bool) -> bool:
    settings = get_settings()
    dataset = load_dataset(dataset_path)
    backend = MockBackendService() if use_mock else get_backend_service()

    print("=" * 70)
    print("🌱 CATALOG SEED")
    print("=" * 70)
    print(f"📄 Dataset: {dataset_path}")
    print(f"🎯 Backend: {backend.provider_name} ({settings.env_mode.value})")
    print(f"🗄️  Database: {settings.database_id}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    try:
        report = await seed(dataset=dataset, backend=backend, settings=settings)
    except Exception as e:
        print(f"\n❌ Seeding failed: {e}")
        return False
    finally:
        await backend.aclose()

    print("\n" + "=" * 70)
    print("📊 SEED RESULTS")
    print("=" * 70)
    print(f"🧹 Cleared: {report.cleared_documents} documents, {report.cleared_files} files")
    print(f"📝 Categories: {report.categories}/{len(dataset.categories)}")
    print(f"🔧 Customizations: {report.customizations}/{len(dataset.customizations)}")
    print(f"🍔 Menu items: {report.menu_items}/{len(dataset.menu)}")
    print(f"🔗 Links: {report.links}/{dataset.expected_link_count()}")
    print(f"🖼️  Images re-hosted: {report.images_rehosted} (fallbacks: {report.image_fallbacks})")

    if report.skipped_customizations or report.failed_links:
        print(f"\n⚠️  Skipped customizations: {report.skipped_customizations}")
        print(f"⚠️  Failed links: {report.failed_links}")

    print("=" * 70)
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Catalog Seeding Script")
    parser.add_argument("--dataset", type=Path, default=None, help="Dataset JSON file")
    parser.add_argument("--mock", action="store_true", help="Seed the in-memory backend")
    parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    args = parser.parse_args()

    setup_logging()
    dataset_path = args.dataset or get_settings().resolved_dataset_path

    if not args.yes and not args.mock:
        print("⚠️  This deletes every category, customization, menu item and image.")
        if input("Type 'seed' to continue: ").strip() != "seed":
            print("Aborted.")
            sys.exit(1)

    success = asyncio.run(run(dataset_path, args.mock))
    sys.exit(0 if success else 1)
