"""Chat pattern service: CRUD cặp hỏi / đáp mẫu, priority cao trước."""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.logging_config import get_logger
from app.models import ChatPattern
from app.schemas.chat_pattern import ChatPatternCreate, ChatPatternUpdate
from app.services.company_service import get_company

logger = get_logger(__name__)

_REQUIRED_FIELDS = ("name", "pattern_type", "example_input", "example_output", "priority", "is_active")


async def get_chat_pattern(db: AsyncSession, pattern_id: UUID) -> ChatPattern:
    pattern = await db.get(ChatPattern, pattern_id)
    if pattern is None:
        raise ValueError("chat_pattern_not_found")
    return pattern


async def list_chat_patterns(
    db: AsyncSession,
    company_id: Optional[UUID] = None,
    pattern_type: Optional[str] = None,
) -> List[ChatPattern]:
    q = select(ChatPattern).order_by(ChatPattern.priority.desc(), ChatPattern.created_at)
    if company_id is not None:
        q = q.where(ChatPattern.company_id == company_id)
    if pattern_type:
        q = q.where(ChatPattern.pattern_type == pattern_type)
    r = await db.execute(q)
    return list(r.scalars().all())


async def create_chat_pattern(db: AsyncSession, payload: ChatPatternCreate) -> ChatPattern:
    await get_company(db, payload.company_id)
    pattern = ChatPattern(**payload.model_dump())
    db.add(pattern)
    await db.flush()
    await db.refresh(pattern)
    logger.info("chat_pattern.created", pattern_id=str(pattern.id), pattern_type=pattern.pattern_type)
    return pattern


async def update_chat_pattern(db: AsyncSession, pattern_id: UUID, payload: ChatPatternUpdate) -> ChatPattern:
    pattern = await get_chat_pattern(db, pattern_id)
    changes = payload.model_dump(exclude_unset=True)
    for key, value in changes.items():
        if value is None and key in _REQUIRED_FIELDS:
            continue
        setattr(pattern, key, value)
    await db.flush()
    await db.refresh(pattern)
    logger.info("chat_pattern.updated", pattern_id=str(pattern_id), fields=sorted(changes))
    return pattern


async def set_chat_pattern_active(db: AsyncSession, pattern_id: UUID, is_active: bool) -> ChatPattern:
    pattern = await get_chat_pattern(db, pattern_id)
    pattern.is_active = is_active
    await db.flush()
    await db.refresh(pattern)
    return pattern


async def delete_chat_pattern(db: AsyncSession, pattern_id: UUID) -> None:
    pattern = await get_chat_pattern(db, pattern_id)
    await db.delete(pattern)
    await db.flush()
    logger.info("chat_pattern.deleted", pattern_id=str(pattern_id))
