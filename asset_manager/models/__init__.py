from asset_manager.models.category import Category
from asset_manager.models.asset import Asset
from asset_manager.models.todo import TodoItem

__all__ = [
    "Category",
    "Asset",
    "TodoItem",
]
