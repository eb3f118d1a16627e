"""Companies (tenants) API: CRUD."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.routers.errors import http_error
from app.schemas.company import CompanyCreate, CompanyOut, CompanyUpdate
from app.services.company_service import (
    create_company,
    delete_company,
    get_company,
    list_companies,
    update_company,
)

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("", response_model=list[CompanyOut])
async def get_companies(
    is_active: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[CompanyOut]:
    companies = await list_companies(db, is_active=is_active)
    return [CompanyOut.model_validate(c) for c in companies]


@router.post("", response_model=CompanyOut, status_code=status.HTTP_201_CREATED)
async def post_company(
    payload: CompanyCreate,
    db: AsyncSession = Depends(get_db),
) -> CompanyOut:
    try:
        company = await create_company(db, payload)
    except ValueError as e:
        raise http_error(e)
    return CompanyOut.model_validate(company)


@router.get("/{company_id}", response_model=CompanyOut)
async def get_company_detail(
    company_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> CompanyOut:
    try:
        company = await get_company(db, company_id)
    except ValueError as e:
        raise http_error(e)
    return CompanyOut.model_validate(company)


@router.patch("/{company_id}", response_model=CompanyOut)
async def patch_company(
    company_id: UUID,
    payload: CompanyUpdate,
    db: AsyncSession = Depends(get_db),
) -> CompanyOut:
    try:
        company = await update_company(db, company_id, payload)
    except ValueError as e:
        raise http_error(e)
    return CompanyOut.model_validate(company)


@router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_company_endpoint(
    company_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Xóa company cùng toàn bộ dữ liệu của nó (cascade)."""
    try:
        await delete_company(db, company_id)
    except ValueError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
