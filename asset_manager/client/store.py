"""
AssetStore - owns the in-memory asset/category snapshot and the UI state
derived from it.

The snapshot is only ever replaced wholesale by ``load()``; mutations go
through ``mutate()``, which issues one request and then reloads both
collections. Loads are numbered so that a slow response cannot overwrite a
newer one.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx

from asset_manager.client.api_client import ApiError, AssetManagerClient
from asset_manager.client.views import (
    ALL_CATEGORIES,
    DashboardFilter,
    DashboardSummary,
    ViewState,
    dashboard_summary,
    monthly_subscription_cost,
    subscriptions,
    toggle_dashboard_filter,
    toggle_sort,
    visible_assets,
)
from asset_manager.utils.logger import get_logger

logger = get_logger(__name__)

# httpx.InvalidURL is not an HTTPError subclass
CLIENT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, ApiError, ValueError)


def new_asset_form() -> Dict[str, Any]:
    return {
        "asset_code": "",
        "asset_name": "",
        "quantity": 1,
        "status": "In Storage",
        "model": "",
        "fa_ledger": "",
        "date_of_purchase": "",
        "cost_of_asset": 0,
        "useful_life": "",
        "number_marked": "",
        "assigned_to": "",
        "location": "",
        "closing_stock_rs": 0,
        "remarks": "",
        "category_id": None,
        "is_subscription": False,
    }


@dataclass
class ModalState:
    is_open: bool = False
    form: Dict[str, Any] = field(default_factory=dict)
    in_flight: bool = False

    def open(self, form: Optional[Dict[str, Any]] = None) -> None:
        self.is_open = True
        self.form = dict(form or {})

    def close(self) -> None:
        self.is_open = False
        self.form = {}


class PendingDelete:
    """Two-step delete: request() remembers the target, confirm() hands it over"""

    def __init__(self):
        self.target_id: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.target_id is not None

    def request(self, target_id: int) -> None:
        self.target_id = target_id

    def confirm(self) -> Optional[int]:
        target, self.target_id = self.target_id, None
        return target

    def cancel(self) -> None:
        self.target_id = None


class AssetStore:
    def __init__(self, client: AssetManagerClient):
        self.client = client
        self.assets: List[Dict[str, Any]] = []
        self.categories: List[Dict[str, Any]] = []
        self.view = ViewState()

        self.add_modal = ModalState()
        self.edit_modal = ModalState()
        self.category_modal = ModalState()
        self.asset_delete = PendingDelete()
        self.category_delete = PendingDelete()

        self._load_seq = 0

    # --- Snapshot ---

    async def load(self) -> bool:
        """Fetch assets and categories together; failures keep the old snapshot"""
        self._load_seq += 1
        seq = self._load_seq
        try:
            assets, categories = await asyncio.gather(
                self.client.list_assets(),
                self.client.list_categories(),
            )
        except CLIENT_ERRORS as e:
            logger.error(f"Failed to fetch data: {e}")
            return False

        if seq != self._load_seq:
            logger.debug(f"Discarding stale load #{seq} (latest #{self._load_seq})")
            return False

        self.assets = assets
        self.categories = categories
        return True

    async def mutate(
        self,
        op: Callable[[], Awaitable[Any]],
        modal: Optional[ModalState] = None,
        action: str = "update data",
    ) -> bool:
        """Run one request, then reload everything and close the modal"""
        if modal is not None:
            if modal.in_flight:
                logger.debug(f"Ignoring duplicate submit: {action}")
                return False
            modal.in_flight = True
        try:
            try:
                await op()
            except CLIENT_ERRORS as e:
                logger.error(f"Failed to {action}: {e}")
                return False
            await self.load()
            if modal is not None:
                modal.close()
            return True
        finally:
            if modal is not None:
                modal.in_flight = False

    # --- Derived state ---

    @property
    def visible_assets(self) -> List[Dict[str, Any]]:
        return visible_assets(self.assets, self.view)

    @property
    def summary(self) -> DashboardSummary:
        return dashboard_summary(self.assets, self.categories)

    @property
    def subscriptions(self) -> List[Dict[str, Any]]:
        return subscriptions(self.assets)

    @property
    def monthly_subscription_cost(self) -> float:
        return monthly_subscription_cost(self.assets)

    # --- View controls ---

    def select_category(self, name: str) -> None:
        self.view.selected_category = name

    def set_search(self, term: str) -> None:
        self.view.search_term = term

    def click_sort(self, key: str) -> None:
        self.view.sort = toggle_sort(self.view.sort, key)

    def click_dashboard_card(self, key: DashboardFilter) -> None:
        self.view.dashboard_filter = toggle_dashboard_filter(self.view.dashboard_filter, key)

    # --- Assets ---

    def open_add_asset(self, **overrides) -> None:
        form = new_asset_form()
        form.update(overrides)
        self.add_modal.open(form)

    async def submit_add_asset(self) -> bool:
        payload = dict(self.add_modal.form)
        if not payload.get("category_id") and self.categories:
            payload["category_id"] = self.categories[0]["id"]
        return await self.mutate(
            lambda: self.client.create_asset(payload),
            modal=self.add_modal,
            action="add asset",
        )

    def select_asset(self, asset: Dict[str, Any]) -> None:
        self.edit_modal.open(asset)

    async def submit_edit_asset(self) -> bool:
        form = self.edit_modal.form
        if "id" not in form:
            return False
        asset_id = form["id"]
        payload = {k: v for k, v in form.items() if k not in ("id", "category")}
        return await self.mutate(
            lambda: self.client.update_asset(asset_id, payload),
            modal=self.edit_modal,
            action="update asset",
        )

    def request_asset_delete(self, asset_id: int) -> None:
        self.asset_delete.request(asset_id)
        if self.edit_modal.is_open and self.edit_modal.form.get("id") == asset_id:
            self.edit_modal.close()

    async def confirm_asset_delete(self) -> bool:
        asset_id = self.asset_delete.confirm()
        if asset_id is None:
            return False
        return await self.mutate(
            lambda: self.client.delete_asset(asset_id),
            action="delete asset",
        )

    def cancel_asset_delete(self) -> None:
        self.asset_delete.cancel()

    # --- Categories ---

    async def add_category(self, name: str, description: Optional[str] = None) -> bool:
        """Blank or already-present names (case-insensitive) never reach the API"""
        name = (name or "").strip()
        if not name:
            return False
        if any(c["name"].lower() == name.lower() for c in self.categories):
            logger.debug(f"Category already exists: {name}")
            return False
        return await self.mutate(
            lambda: self.client.create_category(name, description or None),
            modal=self.category_modal,
            action="add category",
        )

    def request_category_delete(self, category_id: int) -> None:
        self.category_delete.request(category_id)

    async def confirm_category_delete(self) -> bool:
        category_id = self.category_delete.confirm()
        if category_id is None:
            return False

        async def op():
            await self.client.delete_category(category_id)
            # the deleted category may be the one selected
            self.view.selected_category = ALL_CATEGORIES

        return await self.mutate(op, action="delete category")

    def cancel_category_delete(self) -> None:
        self.category_delete.cancel()
