"""
Catalog Verification Script

Verifies the remote catalog matches the dataset after seeding.
Run from project root: python scripts/verify.py

Author: Khalil_Bannouri
Version: 1.0.0
"""

import asyncio
import os
import sys
from datetime import datetime

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from food_ordering.core.config import get_settings
from food_ordering.schemas import load_dataset
from food_ordering.services.backend import get_backend_service
from food_ordering.verify import verify_catalog


async def verify() -> bool:
    """Verify catalog counts against the dataset."""
    settings = get_settings()
    backend = get_backend_service()

    print("=" * 60)
    print("🔍 CATALOG VERIFICATION REPORT")
    print("=" * 60)
    print(f"⏰ Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"🎯 Backend: {backend.provider_name}")
    print(f"📄 Dataset: {settings.resolved_dataset_path}")
    print("=" * 60)

    try:
        dataset = load_dataset(settings.resolved_dataset_path)
        checks = await verify_catalog(backend, settings, dataset)
    except Exception as e:
        print(f"\n❌ Could not verify catalog: {e}")
        return False
    finally:
        await backend.aclose()

    print(f"\n📊 COUNTS:")
    for check in checks:
        mark = "✅" if check.ok else "⚠️"
        print(f"   {mark} {check.target}: {check.actual} (expected {check.expected})")

    all_ok = all(check.ok for check in checks)

    print("\n" + "=" * 60)
    print("✅ VERIFICATION COMPLETE" if all_ok else "⚠️ VERIFICATION FOUND MISMATCHES")
    print("=" * 60)

    return all_ok


if __name__ == "__main__":
    sys.exit(0 if asyncio.run(verify()) else 1)
