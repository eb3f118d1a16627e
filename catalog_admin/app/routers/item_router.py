"""Items API: CRUD + pricing resolve/format + knowledge sync qua outbox."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.domain.price_format import PriceFormatter
from app.domain.pricing import ItemCategory
from app.routers.errors import http_error
from app.schemas.item import ItemActiveToggle, ItemCreate, ItemDeleteResponse, ItemOut, ItemUpdate
from app.services.item_service import (
    ITEM_DELETE_NOTICE,
    create_item,
    delete_item,
    get_item,
    get_price_formatter,
    item_to_out,
    list_items,
    set_item_active,
    update_item,
)

router = APIRouter(prefix="/items", tags=["items"])


@router.get("", response_model=list[ItemOut])
async def get_items(
    company_id: Optional[UUID] = Query(None, description="Company UUID"),
    category: Optional[ItemCategory] = Query(None, description="product | service | vehicle | room | tour"),
    is_active: Optional[bool] = Query(None),
    limit: int = Query(200, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    formatter: PriceFormatter = Depends(get_price_formatter),
) -> list[ItemOut]:
    """Liệt kê item kèm price_display."""
    items = await list_items(
        db,
        company_id=company_id,
        category=category.value if category else None,
        is_active=is_active,
        limit=limit,
    )
    return [item_to_out(i, formatter) for i in items]


@router.post("", response_model=ItemOut, status_code=status.HTTP_201_CREATED)
async def post_item(
    payload: ItemCreate,
    db: AsyncSession = Depends(get_db),
    formatter: PriceFormatter = Depends(get_price_formatter),
) -> ItemOut:
    """Tạo item; knowledge base sẽ được sync tự động (event upsert trong outbox)."""
    try:
        item = await create_item(db, payload, formatter)
    except ValueError as e:
        raise http_error(e)
    return item_to_out(item, formatter)


@router.get("/{item_id}", response_model=ItemOut)
async def get_item_detail(
    item_id: UUID,
    db: AsyncSession = Depends(get_db),
    formatter: PriceFormatter = Depends(get_price_formatter),
) -> ItemOut:
    try:
        item = await get_item(db, item_id)
    except ValueError as e:
        raise http_error(e)
    return item_to_out(item, formatter)


@router.patch("/{item_id}", response_model=ItemOut)
async def patch_item(
    item_id: UUID,
    payload: ItemUpdate,
    db: AsyncSession = Depends(get_db),
    formatter: PriceFormatter = Depends(get_price_formatter),
) -> ItemOut:
    try:
        item = await update_item(db, item_id, payload, formatter)
    except ValueError as e:
        raise http_error(e)
    return item_to_out(item, formatter)


@router.patch("/{item_id}/toggle-active", response_model=ItemOut)
async def patch_item_active(
    item_id: UUID,
    payload: ItemActiveToggle,
    db: AsyncSession = Depends(get_db),
    formatter: PriceFormatter = Depends(get_price_formatter),
) -> ItemOut:
    try:
        item = await set_item_active(db, item_id, payload.is_active, formatter)
    except ValueError as e:
        raise http_error(e)
    return item_to_out(item, formatter)


@router.delete("/{item_id}", response_model=ItemDeleteResponse)
async def delete_item_endpoint(
    item_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ItemDeleteResponse:
    """Xóa item. Bản ghi knowledge base auto-sync của item cũng bị xóa."""
    try:
        deleted_id, removed = await delete_item(db, item_id)
    except ValueError as e:
        raise http_error(e)
    return ItemDeleteResponse(
        item_id=deleted_id,
        knowledge_removed=True,
        knowledge_removed_count=removed,
        notice=ITEM_DELETE_NOTICE,
    )
