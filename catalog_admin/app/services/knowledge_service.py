"""
Knowledge base service: CRUD + ILIKE search + stats.
Bản ghi source_type=item thuộc về item: không tạo/sửa/xóa qua đây (KnowledgeLockedError).
"""
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.logging_config import get_logger
from app.models import KnowledgeRecord
from app.models.knowledge_record import SOURCE_FAQ, SOURCE_IMPORT, SOURCE_ITEM, SOURCE_MANUAL
from app.schemas.knowledge import KnowledgeCreate, KnowledgeOut, KnowledgeUpdate
from app.services.company_service import get_company

logger = get_logger(__name__)

LOCKED_MESSAGE = "Auto-synced from an item. Edit or delete the item instead."


class KnowledgeLockedError(ValueError):
    """Sửa/xóa bản ghi KB auto-sync từ item qua giao diện KB chung."""

    def __init__(self, source_id: Optional[UUID]) -> None:
        super().__init__("knowledge_item_locked")
        self.source_id = source_id

    @property
    def redirect_to(self) -> Optional[str]:
        return item_edit_path(self.source_id) if self.source_id else None


def item_edit_path(item_id: UUID) -> str:
    return f"/items/{item_id}"


def knowledge_edit_path(knowledge_id: UUID) -> str:
    return f"/knowledge/{knowledge_id}"


def knowledge_to_out(record: KnowledgeRecord) -> KnowledgeOut:
    out = KnowledgeOut.model_validate(record)
    return out.model_copy(update={"editable": not record.is_item_synced})


def _ensure_unlocked(record: KnowledgeRecord) -> None:
    if record.is_item_synced:
        raise KnowledgeLockedError(record.source_id)


async def get_knowledge(db: AsyncSession, knowledge_id: UUID) -> KnowledgeRecord:
    record = await db.get(KnowledgeRecord, knowledge_id)
    if record is None:
        raise ValueError("knowledge_not_found")
    return record


async def list_knowledge(
    db: AsyncSession,
    company_id: Optional[UUID] = None,
    source_type: Optional[str] = None,
    limit: int = 500,
) -> List[KnowledgeRecord]:
    """Liệt kê KB theo company / source_type, priority cao trước."""
    q = (
        select(KnowledgeRecord)
        .order_by(KnowledgeRecord.priority.desc(), KnowledgeRecord.created_at)
        .limit(limit)
    )
    if company_id is not None:
        q = q.where(KnowledgeRecord.company_id == company_id)
    if source_type:
        q = q.where(KnowledgeRecord.source_type == source_type)
    r = await db.execute(q)
    return list(r.scalars().all())


async def create_knowledge(db: AsyncSession, payload: KnowledgeCreate) -> KnowledgeRecord:
    """
    Tạo một bài KB. Caller commit session.
    source_type=item chỉ do knowledge sync tạo: đã có bản ghi cho source_id => duplicate_item_knowledge,
    còn lại => item_knowledge_managed.
    """
    await get_company(db, payload.company_id)
    if payload.source_type == SOURCE_ITEM:
        if payload.source_id is not None:
            r = await db.execute(
                select(KnowledgeRecord.id).where(
                    KnowledgeRecord.source_type == SOURCE_ITEM,
                    KnowledgeRecord.source_id == payload.source_id,
                )
            )
            if r.scalar_one_or_none() is not None:
                raise ValueError("duplicate_item_knowledge")
        raise ValueError("item_knowledge_managed")

    record = KnowledgeRecord(
        company_id=payload.company_id,
        title=payload.title,
        content=payload.content,
        category=payload.category,
        tags=payload.tags or [],
        priority=payload.priority,
        source_type=payload.source_type,
        source_id=payload.source_id,
        is_active=payload.is_active,
    )
    db.add(record)
    await db.flush()
    await db.refresh(record)
    logger.info("knowledge.created", knowledge_id=str(record.id), source_type=record.source_type)
    return record


async def update_knowledge(
    db: AsyncSession,
    knowledge_id: UUID,
    payload: KnowledgeUpdate,
) -> KnowledgeRecord:
    record = await get_knowledge(db, knowledge_id)
    _ensure_unlocked(record)
    changes = payload.model_dump(exclude_unset=True)
    for key, value in changes.items():
        if value is None:
            continue
        setattr(record, key, value)
    await db.flush()
    await db.refresh(record)
    logger.info("knowledge.updated", knowledge_id=str(knowledge_id), fields=sorted(changes))
    return record


async def delete_knowledge(db: AsyncSession, knowledge_id: UUID) -> None:
    record = await get_knowledge(db, knowledge_id)
    _ensure_unlocked(record)
    await db.delete(record)
    await db.flush()
    logger.info("knowledge.deleted", knowledge_id=str(knowledge_id))


async def get_edit_target(db: AsyncSession, knowledge_id: UUID) -> Dict[str, object]:
    """Bản ghi auto-sync => chuyển sang trang edit của item sở hữu; còn lại => trang KB."""
    record = await get_knowledge(db, knowledge_id)
    if record.is_item_synced and record.source_id is not None:
        return {
            "knowledge_id": record.id,
            "editable": False,
            "redirect_to": item_edit_path(record.source_id),
            "message": LOCKED_MESSAGE,
        }
    return {
        "knowledge_id": record.id,
        "editable": True,
        "redirect_to": knowledge_edit_path(record.id),
        "message": None,
    }


async def knowledge_stats(db: AsyncSession, company_id: Optional[UUID] = None) -> Dict[str, int]:
    """Đếm theo source_type (GET /knowledge/stats)."""
    q = select(KnowledgeRecord.source_type, func.count(KnowledgeRecord.id)).group_by(
        KnowledgeRecord.source_type
    )
    if company_id is not None:
        q = q.where(KnowledgeRecord.company_id == company_id)
    r = await db.execute(q)
    counts: Dict[str, int] = {row[0]: row[1] for row in r.all()}
    return {
        "total": sum(counts.values()),
        "manual": counts.get(SOURCE_MANUAL, 0),
        "item": counts.get(SOURCE_ITEM, 0),
        "faq": counts.get(SOURCE_FAQ, 0),
        "imported": counts.get(SOURCE_IMPORT, 0),
    }


async def query_knowledge_ilike(
    db: AsyncSession,
    company_id: UUID,
    query: str,
    top_k: int = 10,
) -> List[KnowledgeRecord]:
    """
    Tìm KB active theo query: ILIKE trên title và content.
    Trả về tối đa top_k bản ghi, priority cao trước.
    """
    pattern = f"%{query.strip()}%"
    q = (
        select(KnowledgeRecord)
        .where(KnowledgeRecord.company_id == company_id)
        .where(KnowledgeRecord.is_active.is_(True))
        .where(or_(KnowledgeRecord.title.ilike(pattern), KnowledgeRecord.content.ilike(pattern)))
        .order_by(KnowledgeRecord.priority.desc(), KnowledgeRecord.created_at)
        .limit(top_k)
    )
    r = await db.execute(q)
    return list(r.scalars().all())
