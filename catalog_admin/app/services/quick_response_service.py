"""
Quick response service: CRUD định nghĩa rule.
Chỉ lưu rule; match với tin nhắn chat (exact / contains / regex, theo priority) do backend chat làm.
Ở đây chỉ kiểm tra regex compile được để backend không nhận rule hỏng.
"""
import re
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.logging_config import get_logger
from app.models import QuickResponse
from app.schemas.quick_response import QuickResponseCreate, QuickResponseUpdate
from app.services.company_service import get_company

logger = get_logger(__name__)


class InvalidTriggerPatternError(ValueError):
    """Trigger regex không compile được."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__("invalid_trigger_pattern")
        self.pattern = pattern
        self.reason = reason


def validate_triggers(trigger_type: str, triggers: List[str]) -> None:
    """trigger_type=regex: mọi trigger phải compile được (re, IGNORECASE)."""
    if trigger_type != "regex":
        return
    for pattern in triggers:
        try:
            re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            raise InvalidTriggerPatternError(pattern, str(e)) from e


async def get_quick_response(db: AsyncSession, rule_id: UUID) -> QuickResponse:
    rule = await db.get(QuickResponse, rule_id)
    if rule is None:
        raise ValueError("quick_response_not_found")
    return rule


async def list_quick_responses(
    db: AsyncSession,
    company_id: Optional[UUID] = None,
    category: Optional[str] = None,
) -> List[QuickResponse]:
    """Rule theo company, priority cao trước (đúng thứ tự backend sẽ thử match)."""
    q = select(QuickResponse).order_by(QuickResponse.priority.desc(), QuickResponse.created_at)
    if company_id is not None:
        q = q.where(QuickResponse.company_id == company_id)
    if category:
        q = q.where(QuickResponse.category == category)
    r = await db.execute(q)
    return list(r.scalars().all())


async def create_quick_response(db: AsyncSession, payload: QuickResponseCreate) -> QuickResponse:
    await get_company(db, payload.company_id)
    validate_triggers(payload.trigger_type, payload.triggers)
    rule = QuickResponse(**payload.model_dump())
    db.add(rule)
    await db.flush()
    await db.refresh(rule)
    logger.info("quick_response.created", rule_id=str(rule.id), trigger_type=rule.trigger_type)
    return rule


async def update_quick_response(
    db: AsyncSession,
    rule_id: UUID,
    payload: QuickResponseUpdate,
) -> QuickResponse:
    rule = await get_quick_response(db, rule_id)
    changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    validate_triggers(
        changes.get("trigger_type", rule.trigger_type),
        changes.get("triggers", rule.triggers or []),
    )
    for key, value in changes.items():
        setattr(rule, key, value)
    await db.flush()
    await db.refresh(rule)
    logger.info("quick_response.updated", rule_id=str(rule_id), fields=sorted(changes))
    return rule


async def set_quick_response_active(db: AsyncSession, rule_id: UUID, is_active: bool) -> QuickResponse:
    rule = await get_quick_response(db, rule_id)
    rule.is_active = is_active
    await db.flush()
    await db.refresh(rule)
    return rule


async def delete_quick_response(db: AsyncSession, rule_id: UUID) -> None:
    rule = await get_quick_response(db, rule_id)
    await db.delete(rule)
    await db.flush()
    logger.info("quick_response.deleted", rule_id=str(rule_id))
