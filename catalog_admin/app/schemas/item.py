"""Item request/response schemas."""
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.domain.pricing import ItemCategory


class ItemCreate(BaseModel):
    """
    Body cho POST /items.
    pricing: bag số liệu lỏng của form (price, compare_price, min, max, unit, daily, weekly,
    monthly, deposit, weekday, weekend, min_pax). Resolver chọn shape theo category, không reject.
    """

    company_id: UUID = Field(..., description="Company UUID")
    category: ItemCategory
    name: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255, description="Bỏ trống => sinh từ name")
    description: Optional[str] = None
    short_description: Optional[str] = Field(None, max_length=1000)
    pricing: Dict[str, Any] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    is_featured: bool = False
    is_active: bool = True
    display_order: int = 0

    model_config = {"extra": "forbid"}


class ItemUpdate(BaseModel):
    """Body cho PATCH /items/{id}. Không có category: category cố định sau khi tạo."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    short_description: Optional[str] = Field(None, max_length=1000)
    pricing: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None
    is_featured: Optional[bool] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None

    model_config = {"extra": "forbid"}


class ItemActiveToggle(BaseModel):
    """Body cho PATCH /items/{id}/toggle-active."""

    is_active: bool


class ItemOut(BaseModel):
    """Item trả về API, kèm pricing_kind và price_display đã format."""

    id: UUID
    company_id: UUID
    category: str
    name: str
    slug: str
    description: Optional[str] = None
    short_description: Optional[str] = None
    pricing: Dict[str, Any]
    pricing_kind: str
    price_display: str
    pricing_form: Dict[str, Any] = Field(default_factory=dict, description="Bag phẳng cho form edit")
    metadata: Optional[Dict[str, Any]] = None
    is_featured: bool
    is_active: bool
    display_order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ItemDeleteResponse(BaseModel):
    """Response DELETE /items/{id}: báo cho operator biết bản ghi KB cũng bị xóa."""

    item_id: UUID
    deleted: bool = True
    knowledge_removed: bool
    knowledge_removed_count: int
    notice: str
