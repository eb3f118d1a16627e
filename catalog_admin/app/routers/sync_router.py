"""Knowledge sync API: xem outbox, drain thủ công, trạng thái worker."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.schemas.sync import SyncDrainResponse, SyncEventOut, SyncOutboxResponse, SyncStatusResponse
from app.services.knowledge_sync_service import (
    count_pending,
    drain_outbox,
    get_sync_status_with_pending,
    list_outbox,
)

router = APIRouter(prefix="/sync", tags=["sync"])


@router.get("/outbox", response_model=SyncOutboxResponse)
async def get_sync_outbox(
    status: Optional[str] = Query("pending", description="pending | done | failed"),
    company_id: Optional[UUID] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
) -> SyncOutboxResponse:
    """Event trong outbox theo thứ tự xử lý (id tăng dần)."""
    events = await list_outbox(db, status=status, company_id=company_id, limit=limit)
    return SyncOutboxResponse(
        items=[SyncEventOut.model_validate(e) for e in events],
        pending_count=await count_pending(db),
    )


@router.post("/outbox/drain", response_model=SyncDrainResponse)
async def post_sync_outbox_drain(
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Mặc định KB_SYNC_BATCH_SIZE"),
    db: AsyncSession = Depends(get_db),
) -> SyncDrainResponse:
    """Áp dụng một batch event pending lên knowledge_base ngay (không chờ worker)."""
    result = await drain_outbox(db, limit=limit)
    return SyncDrainResponse(**result)


@router.get("/status", response_model=SyncStatusResponse)
async def get_sync_status(
    db: AsyncSession = Depends(get_db),
) -> SyncStatusResponse:
    """Trạng thái worker sync: enabled, interval, last_tick_at, pending_count."""
    status = await get_sync_status_with_pending(db)
    return SyncStatusResponse(
        enabled=status["enabled"],
        interval_seconds=status["interval_seconds"],
        last_tick_at=status["last_tick_at"],
        pending_count=status["pending_count"],
    )
