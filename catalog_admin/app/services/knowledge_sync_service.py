"""
Knowledge sync: item -> knowledge_base (source_type=item) qua outbox.

- Producer: enqueue_item_upsert / enqueue_item_delete ghi event vào knowledge_sync_outbox
  trong cùng transaction với thao tác trên item (caller commit).
- Consumer: apply_sync_event / drain_outbox là consumer tham chiếu của feed: upsert đúng một
  bản ghi KB cho mỗi item, hoặc xóa nó. Service sync bên ngoài có thể đọc cùng bảng outbox.
- Worker in-process (tùy chọn): KB_SYNC_ENABLED=true thì lifespan chạy vòng drain định kỳ.
ENV: KB_SYNC_ENABLED, KB_SYNC_INTERVAL_SECONDS, KB_SYNC_BATCH_SIZE, KB_SYNC_MAX_ATTEMPTS, KB_ITEM_PRIORITY.
"""
import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.db import async_session_factory
from app.domain.price_format import PriceFormatter, describe_item
from app.logging_config import get_logger
from app.models import Item, KnowledgeRecord, KnowledgeSyncEvent
from app.models.knowledge_record import SOURCE_ITEM
from app.models.knowledge_sync_event import (
    ACTION_DELETE,
    ACTION_UPSERT,
    STATUS_DONE,
    STATUS_FAILED,
    STATUS_PENDING,
)

logger = get_logger(__name__)

_worker_task: Optional[asyncio.Task[None]] = None
_stop_event: Optional[asyncio.Event] = None
_last_tick_at: Optional[datetime] = None
_enabled = False


def build_item_knowledge_payload(
    item: Item,
    formatter: PriceFormatter,
    priority: int,
) -> Dict[str, Any]:
    """Payload event upsert: mọi thứ consumer cần để ghi bản ghi KB mà không phải đọc lại item."""
    tags = [item.category]
    if item.slug:
        tags.append(item.slug)
    if item.is_featured:
        tags.append("featured")
    return {
        "item_id": str(item.id),
        "company_id": str(item.company_id),
        "title": item.name,
        "content": describe_item(
            item.name,
            item.category,
            item.pricing,
            formatter=formatter,
            description=item.description,
            short_description=item.short_description,
        ),
        "price_display": formatter.format(item.pricing),
        "category": item.category,
        "tags": tags,
        "priority": priority,
        "is_active": item.is_active,
    }


async def enqueue_item_upsert(
    db: AsyncSession,
    item: Item,
    formatter: PriceFormatter,
) -> KnowledgeSyncEvent:
    """Ghi event upsert cho item vừa tạo/cập nhật. Caller commit session."""
    settings = get_settings()
    event = KnowledgeSyncEvent(
        company_id=item.company_id,
        item_id=item.id,
        action=ACTION_UPSERT,
        payload=build_item_knowledge_payload(item, formatter, settings.kb_item_priority),
        status=STATUS_PENDING,
        attempts=0,
    )
    db.add(event)
    await db.flush()
    logger.info("kb_sync.enqueued", action=ACTION_UPSERT, item_id=str(item.id), event_id=event.id)
    return event


async def enqueue_item_delete(db: AsyncSession, item: Item) -> KnowledgeSyncEvent:
    """Ghi event delete cho item sắp xóa. Caller commit session."""
    event = KnowledgeSyncEvent(
        company_id=item.company_id,
        item_id=item.id,
        action=ACTION_DELETE,
        payload={"item_id": str(item.id), "company_id": str(item.company_id)},
        status=STATUS_PENDING,
        attempts=0,
    )
    db.add(event)
    await db.flush()
    logger.info("kb_sync.enqueued", action=ACTION_DELETE, item_id=str(item.id), event_id=event.id)
    return event


async def delete_item_knowledge(db: AsyncSession, item_id: UUID) -> int:
    """Xóa mọi bản ghi KB source_type=item, source_id=item_id. Trả về số dòng đã xóa."""
    r = await db.execute(
        delete(KnowledgeRecord).where(
            KnowledgeRecord.source_type == SOURCE_ITEM,
            KnowledgeRecord.source_id == item_id,
        )
    )
    return r.rowcount or 0


async def apply_sync_event(db: AsyncSession, event: KnowledgeSyncEvent) -> Optional[KnowledgeRecord]:
    """
    Áp dụng một event lên knowledge_base.
    upsert: tạo hoặc cập nhật bản ghi duy nhất (source_type=item, source_id=item_id).
    delete: xóa bản ghi của item, trả về None.
    """
    if event.action == ACTION_DELETE:
        removed = await delete_item_knowledge(db, event.item_id)
        logger.info("kb_sync.deleted", item_id=str(event.item_id), removed=removed)
        return None
    if event.action != ACTION_UPSERT:
        raise ValueError("unknown_sync_action")

    payload = event.payload or {}
    r = await db.execute(
        select(KnowledgeRecord).where(
            KnowledgeRecord.source_type == SOURCE_ITEM,
            KnowledgeRecord.source_id == event.item_id,
        )
    )
    record = r.scalar_one_or_none()
    fields = {
        "title": payload.get("title") or "",
        "content": payload.get("content") or "",
        "category": payload.get("category") or "general",
        "tags": payload.get("tags") if isinstance(payload.get("tags"), list) else [],
        "priority": int(payload.get("priority") or 0),
        "is_active": bool(payload.get("is_active", True)),
    }
    if record is None:
        record = KnowledgeRecord(
            company_id=event.company_id,
            source_type=SOURCE_ITEM,
            source_id=event.item_id,
            **fields,
        )
        db.add(record)
    else:
        for key, value in fields.items():
            setattr(record, key, value)
    await db.flush()
    logger.info("kb_sync.upserted", item_id=str(event.item_id), knowledge_id=str(record.id))
    return record


async def count_pending(db: AsyncSession) -> int:
    r = await db.execute(
        select(func.count(KnowledgeSyncEvent.id)).where(KnowledgeSyncEvent.status == STATUS_PENDING)
    )
    return r.scalar() or 0


async def list_outbox(
    db: AsyncSession,
    status: Optional[str] = STATUS_PENDING,
    company_id: Optional[UUID] = None,
    limit: int = 100,
) -> List[KnowledgeSyncEvent]:
    """Liệt kê event theo thứ tự xử lý (id tăng dần)."""
    q = select(KnowledgeSyncEvent).order_by(KnowledgeSyncEvent.id).limit(limit)
    if status:
        q = q.where(KnowledgeSyncEvent.status == status)
    if company_id is not None:
        q = q.where(KnowledgeSyncEvent.company_id == company_id)
    r = await db.execute(q)
    return list(r.scalars().all())


async def _claim_pending(db: AsyncSession, event_id: int) -> Optional[KnowledgeSyncEvent]:
    """
    Khóa event còn pending (FOR UPDATE SKIP LOCKED trên PostgreSQL; SQLite bỏ qua mệnh đề này).
    populate_existing: luôn đọc lại status từ DB, kể cả khi object đã nằm trong identity map.
    """
    r = await db.execute(
        select(KnowledgeSyncEvent)
        .where(KnowledgeSyncEvent.id == event_id, KnowledgeSyncEvent.status == STATUS_PENDING)
        .with_for_update(skip_locked=True)
        .execution_options(populate_existing=True)
    )
    return r.scalar_one_or_none()


async def _is_pending(db: AsyncSession, event_id: int) -> bool:
    r = await db.execute(select(KnowledgeSyncEvent.status).where(KnowledgeSyncEvent.id == event_id))
    return r.scalar_one_or_none() == STATUS_PENDING


async def drain_outbox(
    db: AsyncSession,
    limit: Optional[int] = None,
    max_attempts: Optional[int] = None,
) -> Dict[str, int]:
    """
    Xử lý tối đa `limit` event pending theo thứ tự id, commit sau mỗi event.
    Lỗi còn retry được => giữ pending, dừng batch để không vượt thứ tự.
    Hết số lần retry => status=failed, chạy tiếp event sau.
    Returns {"processed", "failed", "remaining"}.
    """
    settings = get_settings()
    limit = limit or settings.kb_sync_batch_size
    max_attempts = max_attempts or settings.kb_sync_max_attempts

    r = await db.execute(
        select(KnowledgeSyncEvent.id)
        .where(KnowledgeSyncEvent.status == STATUS_PENDING)
        .order_by(KnowledgeSyncEvent.id)
        .limit(limit)
    )
    event_ids = list(r.scalars().all())
    processed = 0
    failed = 0
    for event_id in event_ids:
        event = await _claim_pending(db, event_id)
        if event is None:
            # Worker khác đang giữ event này => dừng batch để không vượt thứ tự.
            if await _is_pending(db, event_id):
                break
            continue
        try:
            await apply_sync_event(db, event)
            event.status = STATUS_DONE
            event.attempts = (event.attempts or 0) + 1
            event.processed_at = datetime.now(timezone.utc)
            event.last_error = None
            await db.commit()
            processed += 1
        except Exception as e:
            await db.rollback()
            event = await _claim_pending(db, event_id)
            if event is None:
                # Đã được worker khác xử lý (hoặc bị xóa) trong lúc lỗi: không đếm attempt.
                await db.commit()
                logger.info("kb_sync.event_taken", event_id=event_id, error=str(e))
                continue
            event.attempts = (event.attempts or 0) + 1
            event.last_error = str(e)[:2000]
            if event.attempts >= max_attempts:
                event.status = STATUS_FAILED
                event.processed_at = datetime.now(timezone.utc)
                failed += 1
                await db.commit()
                logger.warning("kb_sync.event_failed", event_id=event_id, attempts=event.attempts, error=str(e))
                continue
            await db.commit()
            logger.warning("kb_sync.event_retry", event_id=event_id, attempts=event.attempts, error=str(e))
            break

    remaining = await count_pending(db)
    if event_ids:
        logger.info("kb_sync.drained", processed=processed, failed=failed, remaining=remaining)
    return {"processed": processed, "failed": failed, "remaining": remaining}


def get_sync_status() -> dict:
    """Trả về enabled, interval_seconds, last_tick_at. pending_count cần db."""
    settings = get_settings()
    return {
        "enabled": _enabled,
        "interval_seconds": settings.kb_sync_interval_seconds,
        "last_tick_at": _last_tick_at.isoformat() if _last_tick_at else None,
        "pending_count": None,
    }


async def get_sync_status_with_pending(db: AsyncSession) -> dict:
    out = get_sync_status()
    out["pending_count"] = await count_pending(db)
    return out


async def _tick() -> None:
    """Một vòng worker: drain một batch bằng session riêng."""
    global _last_tick_at
    _last_tick_at = datetime.now(timezone.utc)
    async with async_session_factory() as db:
        try:
            await drain_outbox(db)
        except Exception as e:
            logger.warning("kb_sync.tick_error", error=str(e))
            await db.rollback()


async def _worker_loop() -> None:
    settings = get_settings()
    interval = max(1, settings.kb_sync_interval_seconds)
    while _stop_event is not None and not _stop_event.is_set():
        try:
            await _tick()
        except Exception as e:
            logger.warning("kb_sync.loop_error", error=str(e))
        try:
            await asyncio.wait_for(_stop_event.wait(), timeout=interval)
        except asyncio.TimeoutError:
            pass


async def start_knowledge_sync(app: object) -> None:
    """Khởi động worker drain outbox (gọi từ lifespan startup) nếu KB_SYNC_ENABLED."""
    global _worker_task, _stop_event, _enabled
    settings = get_settings()
    if _worker_task is not None or not settings.kb_sync_enabled:
        return
    _enabled = True
    _stop_event = asyncio.Event()
    _worker_task = asyncio.create_task(_worker_loop())
    logger.info("kb_sync.started", interval_seconds=settings.kb_sync_interval_seconds)


async def stop_knowledge_sync() -> None:
    """Dừng worker."""
    global _worker_task, _stop_event, _enabled
    _enabled = False
    if _stop_event:
        _stop_event.set()
    if _worker_task:
        _worker_task.cancel()
        try:
            await _worker_task
        except asyncio.CancelledError:
            pass
        logger.info("kb_sync.stopped")
    _worker_task = None
    _stop_event = None
