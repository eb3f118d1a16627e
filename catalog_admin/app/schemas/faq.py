"""FAQ request/response schemas."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class FaqCreate(BaseModel):
    """Body cho POST /faqs."""

    company_id: UUID
    question: str = Field(..., min_length=1, max_length=2000)
    answer: str = Field(..., min_length=1)
    category: Optional[str] = Field(None, max_length=64)
    tags: List[str] = Field(default_factory=list, max_length=50)
    priority: int = Field(0, ge=0, le=100)
    is_active: bool = True

    model_config = {"extra": "forbid"}


class FaqUpdate(BaseModel):
    """Body cho PATCH /faqs/{id}."""

    question: Optional[str] = Field(None, min_length=1, max_length=2000)
    answer: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, max_length=64)
    tags: Optional[List[str]] = Field(None, max_length=50)
    priority: Optional[int] = Field(None, ge=0, le=100)
    is_active: Optional[bool] = None

    model_config = {"extra": "forbid"}


class FaqOut(BaseModel):
    id: UUID
    company_id: UUID
    question: str
    answer: str
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    priority: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
