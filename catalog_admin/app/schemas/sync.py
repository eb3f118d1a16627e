"""Knowledge sync (outbox) schemas."""
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel


class SyncEventOut(BaseModel):
    """Một event trong knowledge_sync_outbox."""

    id: int
    company_id: UUID
    item_id: UUID
    action: str
    payload: Dict[str, Any]
    status: str
    attempts: int
    last_error: Optional[str] = None
    created_at: Optional[datetime] = None
    processed_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SyncOutboxResponse(BaseModel):
    """GET /sync/outbox."""

    items: List[SyncEventOut]
    pending_count: int


class SyncDrainResponse(BaseModel):
    """POST /sync/outbox/drain: kết quả một batch."""

    processed: int
    failed: int
    remaining: int


class SyncStatusResponse(BaseModel):
    """GET /sync/status: trạng thái worker in-process."""

    enabled: bool
    interval_seconds: int
    last_tick_at: Optional[str] = None
    pending_count: Optional[int] = None
