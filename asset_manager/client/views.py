"""
Derived views over the asset snapshot: filtering, sorting, dashboard counts
and the subscription summary. Everything here is a pure function of its
arguments.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from asset_manager.utils.helpers import as_number, lower_text

ALL_CATEGORIES = "All"
STATUSES = ["In Use", "In Storage", "For Repair"]

SEARCH_FIELDS = ("asset_name", "asset_code", "assigned_to", "location")
SORT_KEYS = (
    "asset_code",
    "asset_name",
    "status",
    "quantity",
    "location",
    "assigned_to",
    "cost_of_asset",
    "closing_stock_rs",
)
NUMERIC_SORT_KEYS = frozenset({"quantity", "cost_of_asset", "closing_stock_rs"})

ASC = "asc"
DESC = "desc"


class DashboardFilter(str, Enum):
    ALL = "all"
    IN_USE = "in_use"
    IN_STORAGE = "in_storage"
    FOR_REPAIR = "for_repair"


STATUS_TARGETS = {
    DashboardFilter.IN_USE: "in use",
    DashboardFilter.IN_STORAGE: "in storage",
    DashboardFilter.FOR_REPAIR: "for repair",
}


@dataclass(frozen=True)
class SortConfig:
    key: str
    direction: str = ASC


@dataclass
class ViewState:
    """UI filter state the visible table is derived from"""
    selected_category: str = ALL_CATEGORIES
    search_term: str = ""
    dashboard_filter: Optional[DashboardFilter] = None
    sort: Optional[SortConfig] = None


@dataclass(frozen=True)
class DashboardSummary:
    total_assets: int
    total_quantity: float
    category_count: int
    in_use: int
    in_storage: int
    for_repair: int


# --- Filtering ---

def category_matches(asset: Dict[str, Any], selected_category: str) -> bool:
    return selected_category == ALL_CATEGORIES or asset.get("category") == selected_category


def search_matches(asset: Dict[str, Any], search_term: str) -> bool:
    if search_term == "":
        return True
    needle = search_term.lower()
    for field in SEARCH_FIELDS:
        value = asset.get(field)
        if value and needle in str(value).lower():
            return True
    return False


def status_matches(asset: Dict[str, Any], dashboard_filter: Optional[DashboardFilter]) -> bool:
    target = STATUS_TARGETS.get(dashboard_filter) if dashboard_filter else None
    if target is None:
        return True
    return (asset.get("status") or "").strip().lower() == target


def filter_assets(
    assets: Iterable[Dict[str, Any]],
    selected_category: str = ALL_CATEGORIES,
    search_term: str = "",
    dashboard_filter: Optional[DashboardFilter] = None,
) -> List[Dict[str, Any]]:
    return [
        asset for asset in assets
        if category_matches(asset, selected_category)
        and search_matches(asset, search_term)
        and status_matches(asset, dashboard_filter)
    ]


# --- Sorting ---

def toggle_sort(current: Optional[SortConfig], key: str) -> SortConfig:
    """Same key flips direction, a new key starts ascending"""
    if key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {key}")
    if current is not None and current.key == key:
        return SortConfig(key, DESC if current.direction == ASC else ASC)
    return SortConfig(key, ASC)


def _sort_value(asset: Dict[str, Any], key: str):
    if key in NUMERIC_SORT_KEYS:
        return as_number(asset.get(key))
    return lower_text(asset.get(key))


def sort_assets(assets: Iterable[Dict[str, Any]], sort: Optional[SortConfig]) -> List[Dict[str, Any]]:
    if sort is None:
        return list(assets)
    return sorted(
        assets,
        key=lambda asset: _sort_value(asset, sort.key),
        reverse=sort.direction == DESC,
    )


def visible_assets(assets: Iterable[Dict[str, Any]], view: ViewState) -> List[Dict[str, Any]]:
    filtered = filter_assets(
        assets,
        selected_category=view.selected_category,
        search_term=view.search_term,
        dashboard_filter=view.dashboard_filter,
    )
    return sort_assets(filtered, view.sort)


# --- Dashboard ---

def toggle_dashboard_filter(
    current: Optional[DashboardFilter], key: DashboardFilter
) -> Optional[DashboardFilter]:
    """Clicking the active status card (or "all") clears the filter"""
    key = DashboardFilter(key)
    if key == DashboardFilter.ALL or key == current:
        return None
    return key


def dashboard_summary(
    assets: List[Dict[str, Any]], categories: List[Dict[str, Any]]
) -> DashboardSummary:
    statuses = [lower_text(asset.get("status")) for asset in assets]
    return DashboardSummary(
        total_assets=len(assets),
        total_quantity=sum(as_number(asset.get("quantity")) for asset in assets),
        category_count=len(categories),
        in_use=statuses.count("in use"),
        in_storage=statuses.count("in storage"),
        for_repair=statuses.count("for repair"),
    )


# --- Subscriptions ---

def subscriptions(assets: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [asset for asset in assets if asset.get("is_subscription")]


def monthly_subscription_cost(assets: Iterable[Dict[str, Any]]) -> float:
    """Approximate monthly spend; yearly billing cycles are spread over 12 months"""
    total = 0.0
    for sub in subscriptions(assets):
        cost = as_number(sub.get("cost_of_asset"))
        if not cost:
            continue
        if "year" in lower_text(sub.get("subscription_billing_cycle")):
            total += cost / 12
        else:
            total += cost
    return total
