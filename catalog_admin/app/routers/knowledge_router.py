"""Knowledge base API: CRUD (khóa bản ghi auto-sync từ item), stats, query ILIKE."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.routers.errors import http_error
from app.schemas.knowledge import (
    KnowledgeCreate,
    KnowledgeEditTarget,
    KnowledgeOut,
    KnowledgeQueryItem,
    KnowledgeQueryRequest,
    KnowledgeQueryResponse,
    KnowledgeStatsResponse,
    KnowledgeUpdate,
    SourceType,
)
from app.services.knowledge_service import (
    create_knowledge,
    delete_knowledge,
    get_edit_target,
    get_knowledge,
    knowledge_stats,
    knowledge_to_out,
    list_knowledge,
    query_knowledge_ilike,
    update_knowledge,
)

router = APIRouter(prefix="/knowledge", tags=["knowledge"])


@router.get("", response_model=list[KnowledgeOut])
async def get_knowledge_records(
    company_id: Optional[UUID] = Query(None, description="Company UUID"),
    source_type: Optional[SourceType] = Query(None, description="manual | item | faq | import"),
    db: AsyncSession = Depends(get_db),
) -> list[KnowledgeOut]:
    """Liệt kê KB (priority cao trước); editable=False với bản ghi auto-sync."""
    records = await list_knowledge(db, company_id=company_id, source_type=source_type)
    return [knowledge_to_out(r) for r in records]


@router.get("/stats", response_model=KnowledgeStatsResponse)
async def get_knowledge_stats(
    company_id: Optional[UUID] = Query(None, description="Company UUID"),
    db: AsyncSession = Depends(get_db),
) -> KnowledgeStatsResponse:
    """Số bài: tổng, manual, auto-sync từ item, faq, import."""
    return KnowledgeStatsResponse(**await knowledge_stats(db, company_id=company_id))


@router.post("/query", response_model=KnowledgeQueryResponse)
async def post_knowledge_query(
    payload: KnowledgeQueryRequest,
    db: AsyncSession = Depends(get_db),
) -> KnowledgeQueryResponse:
    """Tìm KB theo query (ILIKE trên title + content), trả về top N."""
    records = await query_knowledge_ilike(
        db,
        company_id=payload.company_id,
        query=payload.query,
        top_k=payload.top_k,
    )
    return KnowledgeQueryResponse(
        company_id=payload.company_id,
        query=payload.query,
        items=[
            KnowledgeQueryItem(id=r.id, title=r.title, content=r.content, tags=r.tags, source_type=r.source_type)
            for r in records
        ],
        total=len(records),
    )


@router.post("", response_model=KnowledgeOut, status_code=status.HTTP_201_CREATED)
async def post_knowledge(
    payload: KnowledgeCreate,
    db: AsyncSession = Depends(get_db),
) -> KnowledgeOut:
    try:
        record = await create_knowledge(db, payload)
    except ValueError as e:
        raise http_error(e)
    return knowledge_to_out(record)


@router.get("/{knowledge_id}", response_model=KnowledgeOut)
async def get_knowledge_detail(
    knowledge_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> KnowledgeOut:
    try:
        record = await get_knowledge(db, knowledge_id)
    except ValueError as e:
        raise http_error(e)
    return knowledge_to_out(record)


@router.get("/{knowledge_id}/edit-target", response_model=KnowledgeEditTarget)
async def get_knowledge_edit_target(
    knowledge_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> KnowledgeEditTarget:
    """Trang cần mở khi operator bấm edit: trang KB, hoặc trang item sở hữu nếu là bản ghi auto-sync."""
    try:
        target = await get_edit_target(db, knowledge_id)
    except ValueError as e:
        raise http_error(e)
    return KnowledgeEditTarget(**target)


@router.patch("/{knowledge_id}", response_model=KnowledgeOut)
async def patch_knowledge(
    knowledge_id: UUID,
    payload: KnowledgeUpdate,
    db: AsyncSession = Depends(get_db),
) -> KnowledgeOut:
    """Sửa bài KB. Bản ghi auto-sync => 409 kèm redirect_to trang item."""
    try:
        record = await update_knowledge(db, knowledge_id, payload)
    except ValueError as e:
        raise http_error(e)
    return knowledge_to_out(record)


@router.delete("/{knowledge_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_knowledge_endpoint(
    knowledge_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Xóa bài KB. Bản ghi auto-sync => 409: xóa từ trang Items."""
    try:
        await delete_knowledge(db, knowledge_id)
    except ValueError as e:
        raise http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
