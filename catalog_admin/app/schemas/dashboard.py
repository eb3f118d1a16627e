"""Dashboard stats response."""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class DashboardStatsResponse(BaseModel):
    """GET /dashboard/stats: chỉ đếm số bản ghi, không aggregate gì thêm."""

    company_id: Optional[UUID] = None
    companies: int
    items: int
    active_items: int
    knowledge_records: int
    faqs: int
    quick_responses: int
    personas: int
    guardrails: int
    chat_patterns: int
