"""
API endpoint tests for all routes.
Uses in-memory SQLite + dependency-overridden FastAPI test client.
"""
from httpx import AsyncClient, ASGITransport
from sqlalchemy import select, func

from asset_manager.database import get_db
from asset_manager.main import app
from asset_manager.models.asset import Asset
from asset_manager.models.todo import TodoItem


def asset_body(**overrides):
    body = {
        "asset_code": "A1",
        "asset_name": "MacBook Pro",
        "status": "In Use",
        "quantity": 1,
    }
    body.update(overrides)
    return body


async def count_assets(db_session):
    result = await db_session.execute(select(func.count(Asset.id)))
    return result.scalar()


# ===================== HEALTH / ROOT =====================


async def test_root(client):
    r = await client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "running"


async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


async def test_unknown_route_uses_error_body(client):
    r = await client.get("/nope")
    assert r.status_code == 404
    assert "error" in r.json()


# ===================== CATEGORIES =====================


async def test_list_categories_ordered_without_description(client, seed_data):
    r = await client.get("/categories")
    assert r.status_code == 200
    assert r.json() == [
        {"id": seed_data["furniture"].id, "name": "Furniture"},
        {"id": seed_data["it"].id, "name": "IT"},
    ]


async def test_create_category(client):
    r = await client.post("/categories", json={"name": "Laptops", "description": "Portable"})
    assert r.status_code == 201
    body = r.json()
    assert body["name"] == "Laptops"
    assert body["description"] == "Portable"
    assert isinstance(body["id"], int)


async def test_create_category_requires_name(client):
    r = await client.post("/categories", json={"description": "no name"})
    assert r.status_code == 400
    assert r.json() == {"error": "Category name is required"}

    r = await client.post("/categories", json={"name": ""})
    assert r.status_code == 400

    r = await client.post("/categories", json={"name": "   "})
    assert r.status_code == 400
    assert r.json() == {"error": "Category name is required"}


async def test_create_category_trims_name(client):
    r = await client.post("/categories", json={"name": "  Monitors  "})
    assert r.status_code == 201
    assert r.json()["name"] == "Monitors"

    names = [c["name"] for c in (await client.get("/categories")).json()]
    assert names == ["Monitors"]


async def test_delete_category(client, seed_data):
    r = await client.delete(f"/categories/{seed_data['furniture'].id}")
    assert r.status_code == 204
    assert r.content == b""

    names = [c["name"] for c in (await client.get("/categories")).json()]
    assert names == ["IT"]


async def test_delete_category_not_found(client):
    r = await client.delete("/categories/9999")
    assert r.status_code == 404
    assert r.json() == {"error": "Category not found"}


async def test_delete_category_clears_only_its_assets(client, seed_data):
    it_id = seed_data["it"].id
    furniture_id = seed_data["furniture"].id
    for code in ("L1", "L2"):
        await client.post("/assets", json=asset_body(asset_code=code, category_id=it_id))
    await client.post("/assets", json=asset_body(asset_code="C1", asset_name="Chair", category_id=furniture_id))

    r = await client.delete(f"/categories/{it_id}")
    assert r.status_code == 204

    assets = {a["asset_code"]: a for a in (await client.get("/assets")).json()}
    for code in ("L1", "L2"):
        assert assets[code]["category_id"] is None
        assert assets[code]["category"] is None
    assert assets["C1"]["category_id"] == furniture_id
    assert assets["C1"]["category"] == "Furniture"


# ===================== ASSETS =====================


async def test_list_assets_ordered_by_name_with_category(client, seed_data):
    await client.post("/assets", json=asset_body(asset_name="Zebra Printer", category_id=seed_data["it"].id))
    await client.post("/assets", json=asset_body(asset_name="Desk"))

    r = await client.get("/assets")
    assert r.status_code == 200
    body = r.json()
    assert [a["asset_name"] for a in body] == ["Desk", "Zebra Printer"]
    assert body[0]["category"] is None
    assert body[1]["category"] == "IT"
    assert "subscription_url" in body[0]


async def test_create_asset_defaults(client):
    r = await client.post("/assets", json=asset_body(model="", remarks=""))
    assert r.status_code == 201
    body = r.json()
    assert isinstance(body["id"], int)
    assert body["is_subscription"] is False
    assert body["model"] is None
    assert body["remarks"] is None
    assert body["location"] is None


async def test_create_asset_null_subscription_flag(client):
    r = await client.post("/assets", json=asset_body(is_subscription=None, subscription_renewal_date=""))
    assert r.status_code == 201
    assert r.json()["is_subscription"] is False
    assert r.json()["subscription_renewal_date"] is None


async def test_create_asset_missing_required_field(client):
    r = await client.post("/assets", json={"asset_code": "X"})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid request"


async def test_asset_round_trip(client, seed_data):
    submitted = asset_body(
        model="M3",
        fa_ledger="FA-10",
        date_of_purchase="2024-03-15",
        cost_of_asset=2499.5,
        useful_life="3 years",
        number_marked="N-7",
        quantity=4,
        assigned_to="Priya",
        location="Mumbai",
        closing_stock_rs=1800.0,
        remarks="spare charger",
        category_id=seed_data["it"].id,
        is_subscription=True,
        subscription_vendor="Apple",
        subscription_renewal_date="2025-03-15",
        subscription_billing_cycle="Yearly",
        subscription_url="https://apple.com",
    )
    created = (await client.post("/assets", json=submitted)).json()

    r = await client.get(f"/assets/{created['id']}")
    assert r.status_code == 200
    fetched = r.json()
    for key, value in submitted.items():
        assert fetched[key] == value, key
    assert fetched["category"] == "IT"


async def test_get_asset_not_found(client):
    r = await client.get("/assets/9999")
    assert r.status_code == 404
    assert r.json() == {"error": "Asset not found"}


async def test_get_asset_malformed_id(client):
    r = await client.get("/assets/abc")
    assert r.status_code == 400


async def test_update_asset_replaces_row(client, seed_data):
    created = (await client.post("/assets", json=asset_body(location="Pune", assigned_to="Ravi"))).json()

    r = await client.put(
        f"/assets/{created['id']}",
        json=asset_body(asset_name="MacBook Air", status="For Repair", category_id=seed_data["furniture"].id),
    )
    assert r.status_code == 200
    body = r.json()
    assert body["asset_name"] == "MacBook Air"
    assert body["status"] == "For Repair"
    assert body["category"] == "Furniture"
    # omitted fields are replaced, not kept
    assert body["location"] is None
    assert body["assigned_to"] is None


async def test_update_asset_not_found(client):
    r = await client.put("/assets/9999", json=asset_body())
    assert r.status_code == 404


async def test_delete_asset(client, db_session):
    created = (await client.post("/assets", json=asset_body())).json()

    r = await client.delete(f"/assets/{created['id']}")
    assert r.status_code == 204
    assert (await client.get(f"/assets/{created['id']}")).status_code == 404


async def test_delete_missing_asset_leaves_table_unchanged(client, db_session):
    await client.post("/assets", json=asset_body())
    before = await count_assets(db_session)

    r = await client.delete("/assets/9999")
    assert r.status_code == 404
    assert await count_assets(db_session) == before


# ===================== TODOS =====================


async def test_create_todo_trims_text(client):
    r = await client.post("/todos", json={"text": "  renew licenses  "})
    assert r.status_code == 201
    body = r.json()
    assert body["text"] == "renew licenses"
    assert body["done"] is False
    assert body["note"] is None


async def test_create_todo_requires_text(client):
    for payload in ({}, {"text": ""}, {"text": "   "}, {"text": 42}):
        r = await client.post("/todos", json=payload)
        assert r.status_code == 400, payload
        assert r.json() == {"error": "Todo text is required"}


async def test_list_todos_newest_first(client):
    for text in ("first", "second", "third"):
        await client.post("/todos", json={"text": text})

    r = await client.get("/todos")
    assert r.status_code == 200
    body = r.json()
    assert [t["text"] for t in body] == ["third", "second", "first"]
    assert set(body[0]) == {"id", "text", "done", "note"}


async def test_patch_todo_note_round_trip(client):
    todo = (await client.post("/todos", json={"text": "check projector"})).json()

    r = await client.patch(f"/todos/{todo['id']}", json={"done": True, "note": "x"})
    assert r.status_code == 200
    assert r.json() == {"id": todo["id"], "text": "check projector", "done": True, "note": "x"}

    listed = (await client.get("/todos")).json()
    assert listed[0]["done"] is True
    assert listed[0]["note"] == "x"


async def test_patch_todo_empty_note_stored_as_null(client, db_session):
    todo = (await client.post("/todos", json={"text": "t", "note": "old"})).json()

    r = await client.patch(f"/todos/{todo['id']}", json={"done": 1, "note": ""})
    assert r.json()["note"] is None
    assert r.json()["done"] is True

    r = await client.patch(f"/todos/{todo['id']}", json={})
    assert r.json()["note"] is None
    assert r.json()["done"] is False

    stored = (await db_session.execute(select(TodoItem.note).where(TodoItem.id == todo["id"]))).scalar()
    assert stored is None


async def test_patch_todo_without_body(client):
    todo = (await client.post("/todos", json={"text": "t", "note": "old"})).json()
    await client.patch(f"/todos/{todo['id']}", json={"done": True, "note": "old"})

    r = await client.patch(f"/todos/{todo['id']}")
    assert r.status_code == 200
    assert r.json() == {"id": todo["id"], "text": "t", "done": False, "note": None}


async def test_patch_todo_invalid_id_without_body(client):
    r = await client.patch("/todos/abc")
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid todo id"}


async def test_patch_todo_invalid_id(client):
    r = await client.patch("/todos/abc", json={"done": True})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid todo id"}

    r = await client.patch("/todos/1.5", json={"done": True})
    assert r.status_code == 400


async def test_patch_todo_accepts_integral_float_id(client):
    todo = (await client.post("/todos", json={"text": "t"})).json()

    r = await client.patch(f"/todos/{todo['id']}.0", json={"done": True})
    assert r.status_code == 200
    assert r.json()["id"] == todo["id"]


async def test_patch_todo_not_found(client):
    r = await client.patch("/todos/9999", json={"done": True})
    assert r.status_code == 404
    assert r.json() == {"error": "Todo not found"}


async def test_delete_todo(client):
    todo = (await client.post("/todos", json={"text": "gone soon"})).json()

    r = await client.delete(f"/todos/{todo['id']}")
    assert r.status_code == 204
    assert (await client.get("/todos")).json() == []

    r = await client.delete(f"/todos/{todo['id']}")
    assert r.status_code == 404


async def test_delete_todo_invalid_id(client):
    r = await client.delete("/todos/not-a-number")
    assert r.status_code == 400


# ===================== STORAGE ERRORS =====================


async def test_duplicate_category_is_storage_error(client, seed_data):
    r = await client.post("/categories", json={"name": "IT"})
    assert r.status_code == 500
    assert r.json() == {"error": "Internal Server Error"}


async def test_unreachable_database_answers_json():
    async def refused_db():
        raise ConnectionRefusedError("connection refused")

    app.dependency_overrides[get_db] = refused_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            r = await ac.get("/assets")
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 500
    assert r.headers["content-type"].startswith("application/json")
    assert r.json() == {"error": "Internal Server Error"}


# ===================== END TO END =====================


async def test_category_lifecycle_scenario(client):
    r = await client.post("/categories", json={"name": "Laptops"})
    assert r.status_code == 201
    category_id = r.json()["id"]

    r = await client.post("/assets", json={
        "asset_name": "MBP",
        "asset_code": "A1",
        "category_id": category_id,
        "status": "In Use",
        "quantity": 1,
    })
    assert r.status_code == 201

    assets = (await client.get("/assets")).json()
    assert assets[0]["category"] == "Laptops"

    assert (await client.delete(f"/categories/{category_id}")).status_code == 204

    assets = (await client.get("/assets")).json()
    assert assets[0]["category_id"] is None
    assert assets[0]["category"] is None
