"""
Persona service: CRUD persona AI của company.
Mỗi company tối đa một persona mặc định: đặt is_default=True cho một persona thì bỏ cờ ở các persona còn lại.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.logging_config import get_logger
from app.models import Persona
from app.schemas.persona import PersonaCreate, PersonaUpdate
from app.services.company_service import get_company

logger = get_logger(__name__)

# Cột NOT NULL: PATCH gửi null thì bỏ qua.
_REQUIRED_FIELDS = (
    "name",
    "persona_type",
    "system_prompt",
    "personality",
    "capabilities",
    "signature_phrases",
    "temperature",
    "max_tokens",
    "is_default",
    "is_active",
)


async def get_persona(db: AsyncSession, persona_id: UUID) -> Persona:
    persona = await db.get(Persona, persona_id)
    if persona is None:
        raise ValueError("persona_not_found")
    return persona


async def list_personas(
    db: AsyncSession,
    company_id: Optional[UUID] = None,
    is_active: Optional[bool] = None,
) -> List[Persona]:
    """Persona theo company; persona mặc định đứng đầu."""
    q = select(Persona).order_by(Persona.company_id, Persona.is_default.desc(), Persona.created_at)
    if company_id is not None:
        q = q.where(Persona.company_id == company_id)
    if is_active is not None:
        q = q.where(Persona.is_active == is_active)
    r = await db.execute(q)
    return list(r.scalars().all())


async def get_default_persona(db: AsyncSession, company_id: UUID) -> Optional[Persona]:
    """Persona mặc định đang active của company (None nếu chưa cấu hình)."""
    r = await db.execute(
        select(Persona)
        .where(Persona.company_id == company_id, Persona.is_default.is_(True), Persona.is_active.is_(True))
        .limit(1)
    )
    return r.scalar_one_or_none()


async def _clear_other_defaults(db: AsyncSession, company_id: UUID, keep_id: UUID) -> None:
    await db.execute(
        update(Persona)
        .where(Persona.company_id == company_id, Persona.id != keep_id, Persona.is_default.is_(True))
        .values(is_default=False)
        .execution_options(synchronize_session="fetch")
    )


async def create_persona(db: AsyncSession, payload: PersonaCreate) -> Persona:
    await get_company(db, payload.company_id)
    persona = Persona(**payload.model_dump())
    db.add(persona)
    await db.flush()
    if persona.is_default:
        await _clear_other_defaults(db, persona.company_id, persona.id)
    await db.refresh(persona)
    logger.info(
        "persona.created",
        persona_id=str(persona.id),
        company_id=str(persona.company_id),
        is_default=persona.is_default,
    )
    return persona


async def update_persona(db: AsyncSession, persona_id: UUID, payload: PersonaUpdate) -> Persona:
    persona = await get_persona(db, persona_id)
    changes = payload.model_dump(exclude_unset=True)
    if payload.personality is not None:
        # exclude_unset cắt cả field con: personality luôn lưu đủ 5 key.
        changes["personality"] = payload.personality.model_dump()
    for key, value in changes.items():
        if value is None and key in _REQUIRED_FIELDS:
            continue
        setattr(persona, key, value)
    await db.flush()
    if changes.get("is_default"):
        await _clear_other_defaults(db, persona.company_id, persona.id)
    await db.refresh(persona)
    logger.info("persona.updated", persona_id=str(persona_id), fields=sorted(changes))
    return persona


async def delete_persona(db: AsyncSession, persona_id: UUID) -> None:
    persona = await get_persona(db, persona_id)
    await db.delete(persona)
    await db.flush()
    logger.info("persona.deleted", persona_id=str(persona_id))
