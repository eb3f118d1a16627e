"""Knowledge base request/response schemas."""
from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

SourceType = Literal["manual", "item", "faq", "import"]


class KnowledgeCreate(BaseModel):
    """Body cho POST /knowledge (tạo một bài). source_type=item không tạo tay được."""

    company_id: UUID = Field(..., description="Company UUID")
    title: str = Field(..., min_length=1, max_length=2000)
    content: str = Field(..., min_length=1)
    category: str = Field("general", min_length=1, max_length=64)
    tags: List[str] = Field(default_factory=list, max_length=50)
    priority: int = Field(0, ge=0, le=100)
    source_type: SourceType = "manual"
    source_id: Optional[UUID] = None
    is_active: bool = True

    model_config = {"extra": "forbid"}


class KnowledgeUpdate(BaseModel):
    """Body cho PATCH /knowledge/{id}."""

    title: Optional[str] = Field(None, min_length=1, max_length=2000)
    content: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1, max_length=64)
    tags: Optional[List[str]] = Field(None, max_length=50)
    priority: Optional[int] = Field(None, ge=0, le=100)
    is_active: Optional[bool] = None

    model_config = {"extra": "forbid"}


class KnowledgeOut(BaseModel):
    """Một bài KB trả về API. editable=False với bản ghi auto-sync từ item."""

    id: UUID
    company_id: UUID
    title: str
    content: str
    category: str
    tags: Optional[List[str]] = None
    priority: int
    source_type: str
    source_id: Optional[UUID] = None
    is_active: bool
    editable: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class KnowledgeStatsResponse(BaseModel):
    """GET /knowledge/stats: tổng và số bài theo source_type."""

    total: int
    manual: int
    item: int
    faq: int
    imported: int


class KnowledgeEditTarget(BaseModel):
    """GET /knowledge/{id}/edit-target: sửa ở đâu (trang KB hay trang item sở hữu)."""

    knowledge_id: UUID
    editable: bool
    redirect_to: str
    message: Optional[str] = None


class KnowledgeQueryRequest(BaseModel):
    """Body cho POST /knowledge/query (ILIKE search)."""

    company_id: UUID = Field(..., description="Company UUID")
    query: str = Field(..., min_length=1, max_length=500)
    top_k: int = Field(10, ge=1, le=50, description="Số kết quả tối đa")


class KnowledgeQueryItem(BaseModel):
    """Một mục trong kết quả query."""

    id: UUID
    title: str
    content: str
    tags: Optional[List[str]] = None
    source_type: str


class KnowledgeQueryResponse(BaseModel):
    """Response POST /knowledge/query."""

    company_id: UUID
    query: str
    items: List[KnowledgeQueryItem]
    total: int
