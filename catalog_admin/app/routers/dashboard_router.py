"""Dashboard stats API."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.schemas.dashboard import DashboardStatsResponse
from app.services.stats_service import dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    company_id: Optional[UUID] = Query(None, description="Chỉ đếm bản ghi của company này"),
    db: AsyncSession = Depends(get_db),
) -> DashboardStatsResponse:
    """Số company, item (tổng / active), bài KB, FAQ, quick response."""
    counts = await dashboard_stats(db, company_id=company_id)
    return DashboardStatsResponse(company_id=company_id, **counts)
