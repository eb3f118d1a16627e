"""Common schemas (errors, messages)."""
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(..., description="Error message")
    code: Optional[str] = Field(None, description="Optional error code")
    extra: Optional[Dict[str, Any]] = Field(None, description="Extra context")


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str = Field(..., description="Message text")


class LockedRecordDetail(BaseModel):
    """detail của 409 khi sửa/xóa bản ghi KB auto-sync từ item."""

    code: str = "knowledge_item_locked"
    message: str
    source_id: Optional[UUID] = None
    redirect_to: Optional[str] = None


def clean_lines(values: List[str]) -> List[str]:
    """Bỏ khoảng trắng thừa và dòng rỗng (form nhập mỗi dòng một giá trị)."""
    return [v.strip() for v in values if isinstance(v, str) and v.strip()]
