"""
Guardrail service: CRUD luật hành vi.
Chỉ lưu định nghĩa; backend chat chọn guardrail theo intent / topic / emotion (hoặc trigger_always),
priority cao trước.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.logging_config import get_logger
from app.models import Guardrail
from app.schemas.guardrail import GuardrailCreate, GuardrailUpdate
from app.services.company_service import get_company

logger = get_logger(__name__)

# trigger_* nullable (null = không lọc); các cột còn lại NOT NULL.
_REQUIRED_FIELDS = ("name", "trigger_always", "rules", "forbidden", "required", "priority", "is_active")


async def get_guardrail(db: AsyncSession, guardrail_id: UUID) -> Guardrail:
    guardrail = await db.get(Guardrail, guardrail_id)
    if guardrail is None:
        raise ValueError("guardrail_not_found")
    return guardrail


async def list_guardrails(
    db: AsyncSession,
    company_id: Optional[UUID] = None,
    is_active: Optional[bool] = None,
) -> List[Guardrail]:
    q = select(Guardrail).order_by(Guardrail.priority.desc(), Guardrail.created_at)
    if company_id is not None:
        q = q.where(Guardrail.company_id == company_id)
    if is_active is not None:
        q = q.where(Guardrail.is_active == is_active)
    r = await db.execute(q)
    return list(r.scalars().all())


async def create_guardrail(db: AsyncSession, payload: GuardrailCreate) -> Guardrail:
    await get_company(db, payload.company_id)
    guardrail = Guardrail(**payload.model_dump())
    db.add(guardrail)
    await db.flush()
    await db.refresh(guardrail)
    logger.info("guardrail.created", guardrail_id=str(guardrail.id), company_id=str(guardrail.company_id))
    return guardrail


async def update_guardrail(db: AsyncSession, guardrail_id: UUID, payload: GuardrailUpdate) -> Guardrail:
    guardrail = await get_guardrail(db, guardrail_id)
    changes = payload.model_dump(exclude_unset=True)
    for key, value in changes.items():
        if value is None and key in _REQUIRED_FIELDS:
            continue
        setattr(guardrail, key, value)
    await db.flush()
    await db.refresh(guardrail)
    logger.info("guardrail.updated", guardrail_id=str(guardrail_id), fields=sorted(changes))
    return guardrail


async def set_guardrail_active(db: AsyncSession, guardrail_id: UUID, is_active: bool) -> Guardrail:
    guardrail = await get_guardrail(db, guardrail_id)
    guardrail.is_active = is_active
    await db.flush()
    await db.refresh(guardrail)
    return guardrail


async def delete_guardrail(db: AsyncSession, guardrail_id: UUID) -> None:
    guardrail = await get_guardrail(db, guardrail_id)
    await db.delete(guardrail)
    await db.flush()
    logger.info("guardrail.deleted", guardrail_id=str(guardrail_id))
