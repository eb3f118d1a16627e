"""Dashboard stats: đếm bản ghi theo bảng (toàn hệ thống hoặc một company)."""
from typing import Dict, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import ChatPattern, Company, Faq, Guardrail, Item, KnowledgeRecord, Persona, QuickResponse


async def _count(db: AsyncSession, model, company_id: Optional[UUID], *criteria) -> int:
    q = select(func.count(model.id))
    if company_id is not None:
        column = model.id if model is Company else model.company_id
        q = q.where(column == company_id)
    for c in criteria:
        q = q.where(c)
    r = await db.execute(q)
    return r.scalar() or 0


async def dashboard_stats(db: AsyncSession, company_id: Optional[UUID] = None) -> Dict[str, int]:
    return {
        "companies": await _count(db, Company, company_id),
        "items": await _count(db, Item, company_id),
        "active_items": await _count(db, Item, company_id, Item.is_active.is_(True)),
        "knowledge_records": await _count(db, KnowledgeRecord, company_id),
        "faqs": await _count(db, Faq, company_id),
        "quick_responses": await _count(db, QuickResponse, company_id),
        "personas": await _count(db, Persona, company_id),
        "guardrails": await _count(db, Guardrail, company_id),
        "chat_patterns": await _count(db, ChatPattern, company_id),
    }
