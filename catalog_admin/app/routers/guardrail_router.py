"""Guardrails API: CRUD luật hành vi + bật/tắt."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.routers.errors import http_error
from app.schemas.guardrail import GuardrailCreate, GuardrailOut, GuardrailUpdate
from app.schemas.item import ItemActiveToggle
from app.services.guardrail_service import (
    create_guardrail,
    delete_guardrail,
    list_guardrails,
    set_guardrail_active,
    update_guardrail,
)

router = APIRouter(prefix="/guardrails", tags=["guardrails"])


@router.get("", response_model=list[GuardrailOut])
async def get_guardrails(
    company_id: Optional[UUID] = Query(None),
    is_active: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[GuardrailOut]:
    guardrails = await list_guardrails(db, company_id=company_id, is_active=is_active)
    return [GuardrailOut.model_validate(g) for g in guardrails]


@router.post("", response_model=GuardrailOut, status_code=status.HTTP_201_CREATED)
async def post_guardrail(
    payload: GuardrailCreate,
    db: AsyncSession = Depends(get_db),
) -> GuardrailOut:
    try:
        guardrail = await create_guardrail(db, payload)
    except ValueError as e:
        raise http_error(e)
    return GuardrailOut.model_validate(guardrail)


@router.patch("/{guardrail_id}", response_model=GuardrailOut)
async def patch_guardrail(
    guardrail_id: UUID,
    payload: GuardrailUpdate,
    db: AsyncSession = Depends(get_db),
) -> GuardrailOut:
    try:
        guardrail = await update_guardrail(db, guardrail_id, payload)
    except ValueError as e:
        raise http_error(e)
    return GuardrailOut.model_validate(guardrail)


@router.patch("/{guardrail_id}/toggle-active", response_model=GuardrailOut)
async def patch_guardrail_active(
    guardrail_id: UUID,
    payload: ItemActiveToggle,
    db: AsyncSession = Depends(get_db),
) -> GuardrailOut:
    try:
        guardrail = await set_guardrail_active(db, guardrail_id, payload.is_active)
    except ValueError as e:
        raise http_error(e)
    return GuardrailOut.model_validate(guardrail)


@router.delete("/{guardrail_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_guardrail_endpoint(
    guardrail_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Response:
    try:
        await delete_guardrail(db, guardrail_id)
    except ValueError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
