"""
Smoke check against a running server.
Walks the category lifecycle through the client package:
create category → add asset → see category on the asset → delete category →
asset keeps existing with its category cleared.

Usage: python scripts/smoke_check.py [base_url]
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from asset_manager.client.api_client import AssetManagerClient, ApiError
from asset_manager.client.store import AssetStore
from asset_manager.client.views import DashboardFilter
from asset_manager.utils.helpers import format_currency


async def smoke_check(base_url=None):
    print("=" * 60)
    print("ASSET MANAGER SMOKE CHECK")
    print("=" * 60)
    print()

    async with AssetManagerClient(base_url=base_url) as client:
        store = AssetStore(client)
        if not await store.load():
            print("❌ Could not reach the API. Is the server running?")
            return False

        print(f"📦 Step 1: Loaded {len(store.assets)} assets, {len(store.categories)} categories")
        summary = store.summary
        print(f"   In use: {summary.in_use} | In storage: {summary.in_storage} | For repair: {summary.for_repair}")
        print(f"   Subscriptions: {len(store.subscriptions)} "
              f"(approx {format_currency(store.monthly_subscription_cost)}/month)")
        print()

        print("🏷️  Step 2: Creating category 'Smoke Laptops'...")
        try:
            category = await client.create_category("Smoke Laptops", "Created by smoke_check.py")
        except ApiError as e:
            print(f"❌ Category creation failed: {e}")
            return False
        print(f"   ✅ Category id {category['id']}")
        print()

        print("💻 Step 3: Adding asset 'Smoke MBP'...")
        await store.load()
        store.open_add_asset(
            asset_code="SMOKE-1",
            asset_name="Smoke MBP",
            status="In Use",
            category_id=category["id"],
        )
        if not await store.submit_add_asset():
            print("❌ Asset creation failed")
            return False
        asset = next(a for a in store.assets if a["asset_code"] == "SMOKE-1")
        print(f"   ✅ Asset id {asset['id']} in category {asset['category']!r}")
        assert asset["category"] == "Smoke Laptops"

        store.click_dashboard_card(DashboardFilter.IN_USE)
        store.set_search("smoke")
        print(f"   Visible with 'In Use' + search 'smoke': {len(store.visible_assets)}")
        print()

        print("🗑️  Step 4: Deleting the category...")
        store.request_category_delete(category["id"])
        if not await store.confirm_category_delete():
            print("❌ Category delete failed")
            return False
        asset = next(a for a in store.assets if a["id"] == asset["id"])
        print(f"   ✅ Asset category_id={asset['category_id']} category={asset['category']}")
        assert asset["category_id"] is None and asset["category"] is None
        print()

        print("🧹 Step 5: Cleaning up...")
        store.request_asset_delete(asset["id"])
        await store.confirm_asset_delete()
        print("   ✅ Removed smoke asset")
        print()

    print("=" * 60)
    print("✅ SMOKE CHECK: PASSED")
    print("=" * 60)
    return True


if __name__ == "__main__":
    url = sys.argv[1] if len(sys.argv) > 1 else None
    ok = asyncio.run(smoke_check(url))
    sys.exit(0 if ok else 1)
