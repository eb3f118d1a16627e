"""
Knowledge sync item -> knowledge_base qua outbox:
- create/update item ghi event upsert, drain tạo/cập nhật đúng một bản ghi source_type=item.
- delete item xóa bản ghi KB ngay trong transaction + ghi event delete.
- event lỗi: retry rồi failed, không chặn event sau.
"""
import uuid
from unittest.mock import patch

import pytest
from sqlalchemy import func, select

from app.models import KnowledgeRecord, KnowledgeSyncEvent
from app.services.knowledge_sync_service import apply_sync_event, drain_outbox


async def _item_records(session_factory, item_id: str) -> list[KnowledgeRecord]:
    async with session_factory() as session:
        r = await session.execute(
            select(KnowledgeRecord).where(
                KnowledgeRecord.source_type == "item",
                KnowledgeRecord.source_id == uuid.UUID(item_id),
            )
        )
        return list(r.scalars().all())


async def _drain(session_factory, **kwargs) -> dict:
    async with session_factory() as session:
        return await drain_outbox(session, **kwargs)


@pytest.mark.asyncio
async def test_item_create_enqueues_upsert(client, item_payload) -> None:
    item = (await client.post("/items", json=item_payload("tour", "Nusa Penida", {"price": 500000, "min_pax": 4}))).json()

    r = await client.get("/sync/outbox", params={"company_id": item["company_id"]})
    assert r.status_code == 200
    data = r.json()
    assert data["pending_count"] == 1
    event = data["items"][0]
    assert event["action"] == "upsert"
    assert event["item_id"] == item["id"]
    assert event["payload"]["title"] == "Nusa Penida"
    assert event["payload"]["price_display"] == "Rp 500.000/pax (min 4)"
    assert "Harga: Rp 500.000/pax (min 4)" in event["payload"]["content"]


@pytest.mark.asyncio
async def test_drain_creates_single_record_per_item(client, item_payload, session_factory) -> None:
    item = (await client.post("/items", json=item_payload("vehicle", "Honda Vario", {"daily": 150000}))).json()
    await client.patch(f"/items/{item['id']}", json={"pricing": {"daily": 175000, "weekly": 1000000}})
    await client.patch(f"/items/{item['id']}/toggle-active", json={"is_active": False})

    result = await _drain(session_factory)
    assert result == {"processed": 3, "failed": 0, "remaining": 0}

    records = await _item_records(session_factory, item["id"])
    assert len(records) == 1
    record = records[0]
    assert record.title == "Honda Vario"
    assert "Rp 175.000/hari" in record.content
    assert "Mingguan: Rp 1.000.000" in record.content
    assert record.is_active is False
    assert record.category == "vehicle"
    assert "honda-vario" in record.tags


@pytest.mark.asyncio
async def test_drain_via_api(client, item_payload) -> None:
    await client.post("/items", json=item_payload("product", "Kopi", {"price": 25000}))
    r = await client.post("/sync/outbox/drain")
    assert r.status_code == 200
    assert r.json() == {"processed": 1, "failed": 0, "remaining": 0}

    r = await client.get("/knowledge/stats")
    assert r.json()["item"] == 1


@pytest.mark.asyncio
async def test_item_delete_removes_knowledge(client, item_payload, session_factory) -> None:
    item = (await client.post("/items", json=item_payload("room", "Deluxe", {"weekday": 450000}))).json()
    await _drain(session_factory)
    assert len(await _item_records(session_factory, item["id"])) == 1

    r = await client.delete(f"/items/{item['id']}")
    assert r.status_code == 200
    assert r.json()["knowledge_removed_count"] == 1
    assert await _item_records(session_factory, item["id"]) == []

    result = await _drain(session_factory)
    assert result["processed"] == 1
    assert await _item_records(session_factory, item["id"]) == []


@pytest.mark.asyncio
async def test_create_then_delete_before_drain_leaves_nothing(client, item_payload, session_factory) -> None:
    """Event upsert cũ không được hồi sinh bản ghi của item đã xóa (thứ tự id)."""
    item = (await client.post("/items", json=item_payload("product", "Kopi", {"price": 1}))).json()
    await client.delete(f"/items/{item['id']}")

    result = await _drain(session_factory)
    assert result == {"processed": 2, "failed": 0, "remaining": 0}
    assert await _item_records(session_factory, item["id"]) == []


@pytest.mark.asyncio
async def test_failed_event_retries_then_fails(client, item_payload, session_factory) -> None:
    first = (await client.post("/items", json=item_payload("product", "Kopi", {"price": 1}))).json()
    second = (await client.post("/items", json=item_payload("product", "Teh", {"price": 2}))).json()

    calls = {"n": 0}

    async def flaky(db, event):
        if event.item_id == uuid.UUID(first["id"]):
            calls["n"] += 1
            raise RuntimeError("sync backend down")
        return await apply_sync_event(db, event)

    with patch("app.services.knowledge_sync_service.apply_sync_event", side_effect=flaky):
        # Lần 1: lỗi còn retry được => dừng batch, giữ thứ tự.
        assert await _drain(session_factory, max_attempts=2) == {"processed": 0, "failed": 0, "remaining": 2}
        # Lần 2: hết retry => failed, event sau vẫn chạy.
        assert await _drain(session_factory, max_attempts=2) == {"processed": 1, "failed": 1, "remaining": 0}

    assert calls["n"] == 2
    assert await _item_records(session_factory, first["id"]) == []
    assert len(await _item_records(session_factory, second["id"])) == 1

    async with session_factory() as session:
        r = await session.execute(select(KnowledgeSyncEvent).where(KnowledgeSyncEvent.status == "failed"))
        failed = r.scalar_one()
        assert failed.attempts == 2
        assert "sync backend down" in failed.last_error


@pytest.mark.asyncio
async def test_failure_after_event_taken_by_other_worker(client, item_payload, session_factory) -> None:
    # Worker A lỗi đúng lúc worker B đã xử lý xong cùng event: A không được ghi đè trạng thái done.
    item = (await client.post("/items", json=item_payload("product", "Kopi", {"price": 1}))).json()
    state = {"nested": False, "other": None}

    async def flaky(db, event):
        if state["nested"]:
            return await apply_sync_event(db, event)
        state["nested"] = True
        state["other"] = await _drain(session_factory, max_attempts=1)
        raise RuntimeError("sync backend down")

    with patch("app.services.knowledge_sync_service.apply_sync_event", side_effect=flaky):
        result = await _drain(session_factory, max_attempts=1)

    assert state["other"] == {"processed": 1, "failed": 0, "remaining": 0}
    assert result == {"processed": 0, "failed": 0, "remaining": 0}

    async with session_factory() as session:
        event = (await session.execute(select(KnowledgeSyncEvent))).scalar_one()
        assert event.status == "done"
        assert event.attempts == 1
        assert event.last_error is None
    assert len(await _item_records(session_factory, item["id"])) == 1


@pytest.mark.asyncio
async def test_unknown_action_is_rejected(db, company) -> None:
    event = KnowledgeSyncEvent(
        company_id=uuid.UUID(company["id"]),
        item_id=uuid.uuid4(),
        action="rename",
        payload={},
    )
    with pytest.raises(ValueError, match="unknown_sync_action"):
        await apply_sync_event(db, event)


@pytest.mark.asyncio
async def test_company_delete_cascades(client, company, item_payload, session_factory) -> None:
    await client.post("/items", json=item_payload("product", "Kopi", {"price": 1}))
    await _drain(session_factory)

    r = await client.delete(f"/companies/{company['id']}")
    assert r.status_code == 204

    async with session_factory() as session:
        kb = await session.execute(select(func.count(KnowledgeRecord.id)))
        outbox = await session.execute(select(func.count(KnowledgeSyncEvent.id)))
        assert kb.scalar() == 0
        assert outbox.scalar() == 0


@pytest.mark.asyncio
async def test_sync_status(client) -> None:
    r = await client.get("/sync/status")
    assert r.status_code == 200
    data = r.json()
    assert data["enabled"] is False
    assert data["pending_count"] == 0
