"""Chat patterns API: CRUD cặp hỏi / đáp mẫu + bật/tắt."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.routers.errors import http_error
from app.schemas.chat_pattern import ChatPatternCreate, ChatPatternOut, ChatPatternUpdate
from app.schemas.item import ItemActiveToggle
from app.services.chat_pattern_service import (
    create_chat_pattern,
    delete_chat_pattern,
    list_chat_patterns,
    set_chat_pattern_active,
    update_chat_pattern,
)

router = APIRouter(prefix="/chat-patterns", tags=["chat_patterns"])


@router.get("", response_model=list[ChatPatternOut])
async def get_chat_patterns(
    company_id: Optional[UUID] = Query(None),
    pattern_type: Optional[str] = Query(None, description="discovery | pricing | objection | closing | ..."),
    db: AsyncSession = Depends(get_db),
) -> list[ChatPatternOut]:
    patterns = await list_chat_patterns(db, company_id=company_id, pattern_type=pattern_type)
    return [ChatPatternOut.model_validate(p) for p in patterns]


@router.post("", response_model=ChatPatternOut, status_code=status.HTTP_201_CREATED)
async def post_chat_pattern(
    payload: ChatPatternCreate,
    db: AsyncSession = Depends(get_db),
) -> ChatPatternOut:
    try:
        pattern = await create_chat_pattern(db, payload)
    except ValueError as e:
        raise http_error(e)
    return ChatPatternOut.model_validate(pattern)


@router.patch("/{pattern_id}", response_model=ChatPatternOut)
async def patch_chat_pattern(
    pattern_id: UUID,
    payload: ChatPatternUpdate,
    db: AsyncSession = Depends(get_db),
) -> ChatPatternOut:
    try:
        pattern = await update_chat_pattern(db, pattern_id, payload)
    except ValueError as e:
        raise http_error(e)
    return ChatPatternOut.model_validate(pattern)


@router.patch("/{pattern_id}/toggle-active", response_model=ChatPatternOut)
async def patch_chat_pattern_active(
    pattern_id: UUID,
    payload: ItemActiveToggle,
    db: AsyncSession = Depends(get_db),
) -> ChatPatternOut:
    try:
        pattern = await set_chat_pattern_active(db, pattern_id, payload.is_active)
    except ValueError as e:
        raise http_error(e)
    return ChatPatternOut.model_validate(pattern)


@router.delete("/{pattern_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chat_pattern_endpoint(
    pattern_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Response:
    try:
        await delete_chat_pattern(db, pattern_id)
    except ValueError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
