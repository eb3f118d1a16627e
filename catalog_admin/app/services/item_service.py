"""
Item service: CRUD + pricing resolve + ghi outbox knowledge sync cùng transaction.
- create/update: resolve_pricing theo category, lưu JSON lỏng, enqueue upsert.
- delete: xóa bản ghi KB của item, enqueue delete, rồi xóa item.
"""
from functools import lru_cache
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.domain.price_format import PriceFormatter
from app.domain.pricing import extract_form_fields, pricing_from_json, resolve_pricing
from app.logging_config import get_logger
from app.models import Item
from app.schemas.item import ItemCreate, ItemOut, ItemUpdate
from app.services.company_service import get_company
from app.services.knowledge_sync_service import (
    delete_item_knowledge,
    enqueue_item_delete,
    enqueue_item_upsert,
)
from app.utils.slug import slugify

logger = get_logger(__name__)

# Cột NOT NULL: PATCH gửi null thì bỏ qua. description / short_description null => xóa.
_REQUIRED_FIELDS = ("name", "is_featured", "is_active", "display_order")

ITEM_DELETE_NOTICE = "Item deleted. Its auto-synced knowledge base entry was removed as well."


@lru_cache
def get_price_formatter() -> PriceFormatter:
    """Formatter dựng một lần từ Settings (dùng làm FastAPI dependency)."""
    return PriceFormatter.from_settings(get_settings())


def item_to_out(item: Item, formatter: PriceFormatter) -> ItemOut:
    """Item ORM -> ItemOut kèm pricing_kind, price_display, pricing_form."""
    pricing = pricing_from_json(item.pricing)
    return ItemOut(
        id=item.id,
        company_id=item.company_id,
        category=item.category,
        name=item.name,
        slug=item.slug,
        description=item.description,
        short_description=item.short_description,
        pricing=item.pricing or {},
        pricing_kind=pricing.kind,
        price_display=formatter.format(item.pricing),
        pricing_form=extract_form_fields(item.pricing),
        metadata=item.metadata_,
        is_featured=item.is_featured,
        is_active=item.is_active,
        display_order=item.display_order,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


async def _ensure_slug_free(
    db: AsyncSession,
    company_id: UUID,
    slug: str,
    exclude_id: Optional[UUID] = None,
) -> None:
    q = select(Item.id).where(Item.company_id == company_id, Item.slug == slug)
    if exclude_id is not None:
        q = q.where(Item.id != exclude_id)
    r = await db.execute(q.limit(1))
    if r.scalar_one_or_none() is not None:
        raise ValueError("slug_taken")


def _resolve(category: str, fields: dict, settings: Settings) -> dict:
    return resolve_pricing(
        category,
        fields,
        default_min_pax=settings.default_min_pax,
        default_service_unit=settings.default_service_unit,
    ).to_json()


async def get_item(db: AsyncSession, item_id: UUID) -> Item:
    item = await db.get(Item, item_id)
    if item is None:
        raise ValueError("item_not_found")
    return item


async def list_items(
    db: AsyncSession,
    company_id: Optional[UUID] = None,
    category: Optional[str] = None,
    is_active: Optional[bool] = None,
    limit: int = 200,
) -> List[Item]:
    """Liệt kê item theo filter (company, category, is_active), sắp theo display_order rồi name."""
    q = select(Item).order_by(Item.display_order, Item.name).limit(limit)
    if company_id is not None:
        q = q.where(Item.company_id == company_id)
    if category:
        q = q.where(Item.category == category)
    if is_active is not None:
        q = q.where(Item.is_active == is_active)
    r = await db.execute(q)
    return list(r.scalars().all())


async def create_item(
    db: AsyncSession,
    payload: ItemCreate,
    formatter: PriceFormatter,
    settings: Optional[Settings] = None,
) -> Item:
    """Tạo item + event upsert outbox. Caller commit session."""
    settings = settings or get_settings()
    await get_company(db, payload.company_id)
    slug = payload.slug or slugify(payload.name)
    if not slug:
        raise ValueError("invalid_slug")
    await _ensure_slug_free(db, payload.company_id, slug)

    category = payload.category.value
    item = Item(
        company_id=payload.company_id,
        category=category,
        name=payload.name.strip(),
        slug=slug,
        description=payload.description,
        short_description=payload.short_description,
        pricing=_resolve(category, payload.pricing, settings),
        metadata_=payload.metadata,
        is_featured=payload.is_featured,
        is_active=payload.is_active,
        display_order=payload.display_order,
    )
    db.add(item)
    await db.flush()
    await db.refresh(item)
    await enqueue_item_upsert(db, item, formatter)
    logger.info("item.created", item_id=str(item.id), company_id=str(item.company_id), category=category)
    return item


async def update_item(
    db: AsyncSession,
    item_id: UUID,
    payload: ItemUpdate,
    formatter: PriceFormatter,
    settings: Optional[Settings] = None,
) -> Item:
    """
    Cập nhật item (last write wins) + event upsert outbox.
    pricing gửi lên được resolve lại theo category hiện tại của item.
    """
    settings = settings or get_settings()
    item = await get_item(db, item_id)
    changes = payload.model_dump(exclude_unset=True)

    if "slug" in changes:
        slug = changes.pop("slug") or slugify(changes.get("name") or item.name)
        if not slug:
            raise ValueError("invalid_slug")
        await _ensure_slug_free(db, item.company_id, slug, exclude_id=item.id)
        item.slug = slug
    if "pricing" in changes:
        pricing = changes.pop("pricing")
        # null = giữ nguyên pricing; {} = reset về giá trị mặc định của category.
        if pricing is not None:
            item.pricing = _resolve(item.category, pricing, settings)
    if "metadata" in changes:
        item.metadata_ = changes.pop("metadata")
    for key, value in changes.items():
        if value is None and key in _REQUIRED_FIELDS:
            continue
        setattr(item, key, value.strip() if key == "name" else value)

    await db.flush()
    await db.refresh(item)
    await enqueue_item_upsert(db, item, formatter)
    logger.info("item.updated", item_id=str(item.id), fields=sorted(payload.model_dump(exclude_unset=True)))
    return item


async def set_item_active(
    db: AsyncSession,
    item_id: UUID,
    is_active: bool,
    formatter: PriceFormatter,
) -> Item:
    """Bật/tắt item; KB record đi theo is_active qua event upsert."""
    item = await get_item(db, item_id)
    item.is_active = is_active
    await db.flush()
    await db.refresh(item)
    await enqueue_item_upsert(db, item, formatter)
    logger.info("item.toggled", item_id=str(item.id), is_active=is_active)
    return item


async def delete_item(db: AsyncSession, item_id: UUID) -> Tuple[UUID, int]:
    """
    Xóa item: xóa bản ghi KB source_type=item của nó và ghi event delete cùng transaction.
    Returns (item_id, số bản ghi KB đã xóa).
    """
    item = await get_item(db, item_id)
    removed = await delete_item_knowledge(db, item.id)
    await enqueue_item_delete(db, item)
    await db.delete(item)
    await db.flush()
    logger.info("item.deleted", item_id=str(item_id), knowledge_removed=removed)
    return item_id, removed
