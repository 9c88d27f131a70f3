"""
Async HTTP client for the asset manager REST API.

Every backend call goes through ``AssetManagerClient._request`` so that JSON
encoding, base URL handling and error translation live in one place. Non-2xx
responses raise ``ApiError`` carrying the status code and the server's
``error`` message; transport failures surface as ``httpx.HTTPError``.
"""
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import httpx

from asset_manager.config import get_settings

JSON = Dict[str, Any]


class ApiError(Exception):
    """Non-2xx response from the API"""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        message = response.reason_phrase or "Request failed"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            message = str(body["error"])
        return cls(response.status_code, message)


def _encode(payload: JSON) -> JSON:
    """Dates go over the wire as ISO strings"""
    encoded = {}
    for key, value in payload.items():
        if isinstance(value, (date, datetime)):
            value = value.isoformat()
        encoded[key] = value
    return encoded


class AssetManagerClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "AssetManagerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: Optional[JSON] = None) -> Any:
        response = await self._client.request(
            method,
            path,
            json=_encode(json) if json is not None else None,
        )
        if response.is_error:
            raise ApiError.from_response(response)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # --- Assets ---

    async def list_assets(self) -> List[JSON]:
        return await self._request("GET", "/assets")

    async def get_asset(self, asset_id: int) -> JSON:
        return await self._request("GET", f"/assets/{asset_id}")

    async def create_asset(self, data: JSON) -> JSON:
        return await self._request("POST", "/assets", json=data)

    async def update_asset(self, asset_id: int, data: JSON) -> JSON:
        return await self._request("PUT", f"/assets/{asset_id}", json=data)

    async def delete_asset(self, asset_id: int) -> None:
        await self._request("DELETE", f"/assets/{asset_id}")

    # --- Categories ---

    async def list_categories(self) -> List[JSON]:
        return await self._request("GET", "/categories")

    async def create_category(self, name: str, description: Optional[str] = None) -> JSON:
        return await self._request(
            "POST", "/categories", json={"name": name, "description": description}
        )

    async def delete_category(self, category_id: int) -> None:
        await self._request("DELETE", f"/categories/{category_id}")

    # --- Todos ---

    async def list_todos(self) -> List[JSON]:
        return await self._request("GET", "/todos")

    async def create_todo(self, text: str, note: Optional[str] = None) -> JSON:
        return await self._request("POST", "/todos", json={"text": text, "note": note})

    async def update_todo(self, todo_id: int, done: bool, note: Optional[str]) -> JSON:
        return await self._request(
            "PATCH", f"/todos/{todo_id}", json={"done": done, "note": note}
        )

    async def delete_todo(self, todo_id: int) -> None:
        await self._request("DELETE", f"/todos/{todo_id}")
