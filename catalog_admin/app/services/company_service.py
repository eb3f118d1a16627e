"""Company (tenant) service: CRUD."""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.logging_config import get_logger
from app.models import Company
from app.schemas.company import CompanyCreate, CompanyUpdate
from app.utils.slug import slugify

logger = get_logger(__name__)

# Cột NOT NULL: PATCH gửi null thì bỏ qua.
_REQUIRED_FIELDS = ("name", "industry", "domain_type", "settings", "is_active")


async def get_company(db: AsyncSession, company_id: UUID) -> Company:
    """Lấy company theo id. Không có => ValueError("company_not_found")."""
    company = await db.get(Company, company_id)
    if company is None:
        raise ValueError("company_not_found")
    return company


async def list_companies(db: AsyncSession, is_active: Optional[bool] = None) -> List[Company]:
    """Tất cả company (theo created_at)."""
    q = select(Company).order_by(Company.created_at, Company.name)
    if is_active is not None:
        q = q.where(Company.is_active == is_active)
    r = await db.execute(q)
    return list(r.scalars().all())


async def _ensure_slug_free(db: AsyncSession, slug: str, exclude_id: Optional[UUID] = None) -> None:
    q = select(Company.id).where(Company.slug == slug)
    if exclude_id is not None:
        q = q.where(Company.id != exclude_id)
    r = await db.execute(q.limit(1))
    if r.scalar_one_or_none() is not None:
        raise ValueError("slug_taken")


async def create_company(db: AsyncSession, payload: CompanyCreate) -> Company:
    """Tạo company. slug bỏ trống => sinh từ name. Caller commit session."""
    slug = payload.slug or slugify(payload.name) or None
    if slug:
        await _ensure_slug_free(db, slug)
    company = Company(**payload.model_dump(exclude={"slug"}), slug=slug)
    db.add(company)
    await db.flush()
    await db.refresh(company)
    logger.info("company.created", company_id=str(company.id), slug=slug)
    return company


async def update_company(db: AsyncSession, company_id: UUID, payload: CompanyUpdate) -> Company:
    """Cập nhật các field có gửi. Last write wins, không check version."""
    company = await get_company(db, company_id)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("slug"):
        await _ensure_slug_free(db, changes["slug"], exclude_id=company_id)
    for key, value in changes.items():
        if value is None and key in _REQUIRED_FIELDS:
            continue
        setattr(company, key, value)
    await db.flush()
    await db.refresh(company)
    logger.info("company.updated", company_id=str(company_id), fields=sorted(changes))
    return company


async def delete_company(db: AsyncSession, company_id: UUID) -> None:
    """Xóa company; mọi bản ghi scope theo company (items, knowledge, personas, ...) đi theo FK ON DELETE CASCADE."""
    company = await get_company(db, company_id)
    await db.delete(company)
    await db.flush()
    logger.info("company.deleted", company_id=str(company_id))
