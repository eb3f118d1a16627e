"""FAQs API: CRUD."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.routers.errors import http_error
from app.schemas.faq import FaqCreate, FaqOut, FaqUpdate
from app.services.faq_service import create_faq, delete_faq, get_faq, list_faqs, update_faq

router = APIRouter(prefix="/faqs", tags=["faqs"])


@router.get("", response_model=list[FaqOut])
async def get_faqs(
    company_id: Optional[UUID] = Query(None),
    category: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[FaqOut]:
    faqs = await list_faqs(db, company_id=company_id, category=category)
    return [FaqOut.model_validate(f) for f in faqs]


@router.post("", response_model=FaqOut, status_code=status.HTTP_201_CREATED)
async def post_faq(
    payload: FaqCreate,
    db: AsyncSession = Depends(get_db),
) -> FaqOut:
    try:
        faq = await create_faq(db, payload)
    except ValueError as e:
        raise http_error(e)
    return FaqOut.model_validate(faq)


@router.get("/{faq_id}", response_model=FaqOut)
async def get_faq_detail(
    faq_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> FaqOut:
    try:
        faq = await get_faq(db, faq_id)
    except ValueError as e:
        raise http_error(e)
    return FaqOut.model_validate(faq)


@router.patch("/{faq_id}", response_model=FaqOut)
async def patch_faq(
    faq_id: UUID,
    payload: FaqUpdate,
    db: AsyncSession = Depends(get_db),
) -> FaqOut:
    try:
        faq = await update_faq(db, faq_id, payload)
    except ValueError as e:
        raise http_error(e)
    return FaqOut.model_validate(faq)


@router.delete("/{faq_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_faq_endpoint(
    faq_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Response:
    try:
        await delete_faq(db, faq_id)
    except ValueError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
