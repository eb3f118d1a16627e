"""Personas API: CRUD persona AI; GET /personas/default trả persona mặc định của company."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.routers.errors import http_error
from app.schemas.persona import PersonaCreate, PersonaOut, PersonaUpdate
from app.services.persona_service import (
    create_persona,
    delete_persona,
    get_default_persona,
    list_personas,
    update_persona,
)

router = APIRouter(prefix="/personas", tags=["personas"])


@router.get("", response_model=list[PersonaOut])
async def get_personas(
    company_id: Optional[UUID] = Query(None),
    is_active: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[PersonaOut]:
    personas = await list_personas(db, company_id=company_id, is_active=is_active)
    return [PersonaOut.model_validate(p) for p in personas]


@router.get("/default", response_model=PersonaOut)
async def get_persona_default(
    company_id: UUID = Query(...),
    db: AsyncSession = Depends(get_db),
) -> PersonaOut:
    persona = await get_default_persona(db, company_id)
    if persona is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No default persona for this company")
    return PersonaOut.model_validate(persona)


@router.post("", response_model=PersonaOut, status_code=status.HTTP_201_CREATED)
async def post_persona(
    payload: PersonaCreate,
    db: AsyncSession = Depends(get_db),
) -> PersonaOut:
    try:
        persona = await create_persona(db, payload)
    except ValueError as e:
        raise http_error(e)
    return PersonaOut.model_validate(persona)


@router.patch("/{persona_id}", response_model=PersonaOut)
async def patch_persona(
    persona_id: UUID,
    payload: PersonaUpdate,
    db: AsyncSession = Depends(get_db),
) -> PersonaOut:
    try:
        persona = await update_persona(db, persona_id, payload)
    except ValueError as e:
        raise http_error(e)
    return PersonaOut.model_validate(persona)


@router.delete("/{persona_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_persona_endpoint(
    persona_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Response:
    try:
        await delete_persona(db, persona_id)
    except ValueError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
