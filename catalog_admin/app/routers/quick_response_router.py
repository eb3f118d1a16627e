"""Quick responses API: CRUD định nghĩa rule + bật/tắt."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.routers.errors import http_error
from app.schemas.item import ItemActiveToggle
from app.schemas.quick_response import QuickResponseCreate, QuickResponseOut, QuickResponseUpdate
from app.services.quick_response_service import (
    create_quick_response,
    delete_quick_response,
    list_quick_responses,
    set_quick_response_active,
    update_quick_response,
)

router = APIRouter(prefix="/quick-responses", tags=["quick_responses"])


@router.get("", response_model=list[QuickResponseOut])
async def get_quick_responses(
    company_id: Optional[UUID] = Query(None),
    category: Optional[str] = Query(None, description="greeting | thanks | acknowledge | farewell | custom"),
    db: AsyncSession = Depends(get_db),
) -> list[QuickResponseOut]:
    rules = await list_quick_responses(db, company_id=company_id, category=category)
    return [QuickResponseOut.model_validate(r) for r in rules]


@router.post("", response_model=QuickResponseOut, status_code=status.HTTP_201_CREATED)
async def post_quick_response(
    payload: QuickResponseCreate,
    db: AsyncSession = Depends(get_db),
) -> QuickResponseOut:
    """Tạo rule; trigger_type=regex mà pattern không compile được => 400."""
    try:
        rule = await create_quick_response(db, payload)
    except ValueError as e:
        raise http_error(e)
    return QuickResponseOut.model_validate(rule)


@router.patch("/{rule_id}", response_model=QuickResponseOut)
async def patch_quick_response(
    rule_id: UUID,
    payload: QuickResponseUpdate,
    db: AsyncSession = Depends(get_db),
) -> QuickResponseOut:
    try:
        rule = await update_quick_response(db, rule_id, payload)
    except ValueError as e:
        raise http_error(e)
    return QuickResponseOut.model_validate(rule)


@router.patch("/{rule_id}/toggle-active", response_model=QuickResponseOut)
async def patch_quick_response_active(
    rule_id: UUID,
    payload: ItemActiveToggle,
    db: AsyncSession = Depends(get_db),
) -> QuickResponseOut:
    try:
        rule = await set_quick_response_active(db, rule_id, payload.is_active)
    except ValueError as e:
        raise http_error(e)
    return QuickResponseOut.model_validate(rule)


@router.delete("/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quick_response_endpoint(
    rule_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Response:
    try:
        await delete_quick_response(db, rule_id)
    except ValueError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
