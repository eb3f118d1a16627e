"""FAQ service: CRUD."""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.logging_config import get_logger
from app.models import Faq
from app.schemas.faq import FaqCreate, FaqUpdate
from app.services.company_service import get_company

logger = get_logger(__name__)


async def get_faq(db: AsyncSession, faq_id: UUID) -> Faq:
    faq = await db.get(Faq, faq_id)
    if faq is None:
        raise ValueError("faq_not_found")
    return faq


async def list_faqs(
    db: AsyncSession,
    company_id: Optional[UUID] = None,
    category: Optional[str] = None,
) -> List[Faq]:
    """FAQ theo company / category, priority cao trước."""
    q = select(Faq).order_by(Faq.priority.desc(), Faq.created_at)
    if company_id is not None:
        q = q.where(Faq.company_id == company_id)
    if category:
        q = q.where(Faq.category == category)
    r = await db.execute(q)
    return list(r.scalars().all())


async def create_faq(db: AsyncSession, payload: FaqCreate) -> Faq:
    await get_company(db, payload.company_id)
    faq = Faq(**payload.model_dump())
    db.add(faq)
    await db.flush()
    await db.refresh(faq)
    logger.info("faq.created", faq_id=str(faq.id), company_id=str(faq.company_id))
    return faq


async def update_faq(db: AsyncSession, faq_id: UUID, payload: FaqUpdate) -> Faq:
    faq = await get_faq(db, faq_id)
    changes = payload.model_dump(exclude_unset=True)
    for key, value in changes.items():
        if value is None and key != "category":
            continue
        setattr(faq, key, value)
    await db.flush()
    await db.refresh(faq)
    logger.info("faq.updated", faq_id=str(faq_id), fields=sorted(changes))
    return faq


async def delete_faq(db: AsyncSession, faq_id: UUID) -> None:
    faq = await get_faq(db, faq_id)
    await db.delete(faq)
    await db.flush()
    logger.info("faq.deleted", faq_id=str(faq_id))
