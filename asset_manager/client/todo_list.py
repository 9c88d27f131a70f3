"""
To-do list controller. Unlike assets, items are patched in place from each
response instead of refetching, and failures are surfaced as a short message.
"""
from typing import Any, Dict, List, Optional

from asset_manager.client.api_client import AssetManagerClient
from asset_manager.client.store import CLIENT_ERRORS
from asset_manager.utils.logger import get_logger

logger = get_logger(__name__)


class TodoList:
    def __init__(self, client: AssetManagerClient):
        self.client = client
        self.items: List[Dict[str, Any]] = []
        self.error: Optional[str] = None
        self.is_loading = False

        # note editor
        self.active_item: Optional[Dict[str, Any]] = None
        self.note_draft = ""
        self.is_saving_note = False

    def _find(self, todo_id: int) -> Optional[Dict[str, Any]]:
        return next((item for item in self.items if item["id"] == todo_id), None)

    def _replace(self, updated: Dict[str, Any]) -> None:
        self.items = [updated if item["id"] == updated["id"] else item for item in self.items]

    async def load(self) -> None:
        self.is_loading = True
        self.error = None
        try:
            data = await self.client.list_todos()
            self.items = data if isinstance(data, list) else []
        except CLIENT_ERRORS as e:
            logger.error(f"Failed to load todos: {e}")
            self.error = "Unable to load tasks from the server."
        finally:
            self.is_loading = False

    async def add(self, text: str) -> bool:
        trimmed = (text or "").strip()
        if not trimmed:
            return False
        try:
            created = await self.client.create_todo(trimmed)
        except CLIENT_ERRORS as e:
            logger.error(f"Failed to add todo: {e}")
            self.error = "Unable to add task right now."
            return False
        self.items = [created] + self.items
        return True

    async def toggle(self, todo_id: int) -> bool:
        item = self._find(todo_id)
        if item is None:
            return False
        try:
            updated = await self.client.update_todo(todo_id, not item["done"], item.get("note"))
        except CLIENT_ERRORS as e:
            logger.error(f"Failed to update todo: {e}")
            self.error = "Unable to update task status."
            return False
        self._replace(updated)
        return True

    async def delete(self, todo_id: int) -> bool:
        try:
            await self.client.delete_todo(todo_id)
        except CLIENT_ERRORS as e:
            logger.error(f"Failed to delete todo: {e}")
            self.error = "Unable to delete task."
            return False
        self.items = [item for item in self.items if item["id"] != todo_id]
        return True

    # --- Note editor ---

    def open_note(self, item: Dict[str, Any]) -> None:
        self.active_item = item
        self.note_draft = item.get("note") or ""
        self.error = None

    def close_note(self) -> bool:
        if self.is_saving_note:
            return False
        self.active_item = None
        self.note_draft = ""
        return True

    async def save_note(self) -> bool:
        if self.active_item is None:
            return False
        self.is_saving_note = True
        self.error = None
        note = self.note_draft.strip() or None
        try:
            updated = await self.client.update_todo(
                self.active_item["id"], self.active_item["done"], note
            )
        except CLIENT_ERRORS as e:
            logger.error(f"Failed to save note: {e}")
            self.error = "Unable to save note."
            return False
        finally:
            self.is_saving_note = False

        self._replace(updated)
        self.active_item = None
        self.note_draft = ""
        return True
