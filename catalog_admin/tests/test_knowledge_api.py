"""
Knowledge API: CRUD bài manual, khóa bản ghi auto-sync từ item (409 + redirect_to),
edit-target, stats, query ILIKE.
"""
import pytest

from app.services.knowledge_service import LOCKED_MESSAGE


async def _synced_item_record(client, item_payload) -> tuple[dict, dict]:
    item = (await client.post("/items", json=item_payload("vehicle", "Toyota Avanza", {"daily": 350000}))).json()
    assert (await client.post("/sync/outbox/drain")).status_code == 200
    records = (await client.get("/knowledge", params={"source_type": "item"})).json()
    assert len(records) == 1
    return item, records[0]


@pytest.mark.asyncio
async def test_manual_record_crud(client, company) -> None:
    r = await client.post(
        "/knowledge",
        json={
            "company_id": company["id"],
            "title": "Jam operasional",
            "content": "Buka setiap hari 08.00 - 20.00 WITA",
            "tags": ["jam", "buka"],
            "priority": 3,
        },
    )
    assert r.status_code == 201, r.text
    record = r.json()
    assert record["source_type"] == "manual"
    assert record["editable"] is True

    r = await client.patch(f"/knowledge/{record['id']}", json={"content": "Buka 07.00 - 21.00"})
    assert r.status_code == 200
    assert r.json()["content"] == "Buka 07.00 - 21.00"

    r = await client.get(f"/knowledge/{record['id']}/edit-target")
    assert r.json()["redirect_to"] == f"/knowledge/{record['id']}"

    assert (await client.delete(f"/knowledge/{record['id']}")).status_code == 204
    assert (await client.get(f"/knowledge/{record['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_item_record_is_locked(client, item_payload) -> None:
    item, record = await _synced_item_record(client, item_payload)
    assert record["editable"] is False
    assert record["source_id"] == item["id"]

    r = await client.patch(f"/knowledge/{record['id']}", json={"title": "Edited"})
    assert r.status_code == 409
    detail = r.json()["detail"]
    assert detail["code"] == "knowledge_item_locked"
    assert detail["message"] == LOCKED_MESSAGE
    assert detail["redirect_to"] == f"/items/{item['id']}"

    r = await client.delete(f"/knowledge/{record['id']}")
    assert r.status_code == 409
    assert r.json()["detail"]["redirect_to"] == f"/items/{item['id']}"

    r = await client.get(f"/knowledge/{record['id']}")
    assert r.json()["title"] == "Toyota Avanza"


@pytest.mark.asyncio
async def test_edit_target_for_item_record(client, item_payload) -> None:
    item, record = await _synced_item_record(client, item_payload)
    r = await client.get(f"/knowledge/{record['id']}/edit-target")
    assert r.status_code == 200
    assert r.json() == {
        "knowledge_id": record["id"],
        "editable": False,
        "redirect_to": f"/items/{item['id']}",
        "message": LOCKED_MESSAGE,
    }


@pytest.mark.asyncio
async def test_cannot_create_item_record_by_hand(client, company, item_payload) -> None:
    body = {"company_id": company["id"], "title": "X", "content": "Y", "source_type": "item"}
    r = await client.post("/knowledge", json=body)
    assert r.status_code == 400

    item, _ = await _synced_item_record(client, item_payload)
    r = await client.post("/knowledge", json={**body, "source_id": item["id"]})
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_stats(client, company, item_payload) -> None:
    await _synced_item_record(client, item_payload)
    for title in ("A", "B"):
        await client.post("/knowledge", json={"company_id": company["id"], "title": title, "content": "..."})
    await client.post(
        "/knowledge",
        json={"company_id": company["id"], "title": "FAQ", "content": "...", "source_type": "faq"},
    )

    r = await client.get("/knowledge/stats", params={"company_id": company["id"]})
    assert r.status_code == 200
    assert r.json() == {"total": 4, "manual": 2, "item": 1, "faq": 1, "imported": 0}


@pytest.mark.asyncio
async def test_list_orders_by_priority(client, company) -> None:
    for title, priority in (("low", 1), ("high", 9), ("mid", 5)):
        await client.post(
            "/knowledge",
            json={"company_id": company["id"], "title": title, "content": "...", "priority": priority},
        )
    r = await client.get("/knowledge", params={"company_id": company["id"]})
    assert [k["title"] for k in r.json()] == ["high", "mid", "low"]


@pytest.mark.asyncio
async def test_query_matches_title_and_content(client, company, item_payload) -> None:
    await _synced_item_record(client, item_payload)
    await client.post(
        "/knowledge",
        json={"company_id": company["id"], "title": "Sewa mobil", "content": "Termasuk sopir dan bensin"},
    )
    await client.post(
        "/knowledge",
        json={"company_id": company["id"], "title": "Off", "content": "sopir cadangan", "is_active": False},
    )

    r = await client.post("/knowledge/query", json={"company_id": company["id"], "query": "sopir"})
    assert r.status_code == 200
    data = r.json()
    assert data["total"] == 1
    assert data["items"][0]["title"] == "Sewa mobil"

    r = await client.post("/knowledge/query", json={"company_id": company["id"], "query": "avanza"})
    assert [i["source_type"] for i in r.json()["items"]] == ["item"]


@pytest.mark.asyncio
async def test_not_found(client) -> None:
    r = await client.get("/knowledge/00000000-0000-0000-0000-000000000000")
    assert r.status_code == 404
