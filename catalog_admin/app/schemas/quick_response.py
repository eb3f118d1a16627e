"""Quick response rule schemas."""
from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import clean_lines

TriggerType = Literal["exact", "contains", "regex"]
QuickResponseCategory = Literal["greeting", "thanks", "acknowledge", "farewell", "custom"]


class QuickResponseCreate(BaseModel):
    """Body cho POST /quick-responses. Regex được compile thử ở service."""

    company_id: UUID
    trigger_type: TriggerType = "exact"
    triggers: List[str] = Field(..., min_length=1, max_length=100)
    responses: List[str] = Field(..., min_length=1, max_length=50)
    category: QuickResponseCategory = "custom"
    priority: int = Field(0, ge=0, le=1000)
    is_active: bool = True

    model_config = {"extra": "forbid"}

    @field_validator("triggers", "responses")
    @classmethod
    def non_empty_lines(cls, v: List[str]) -> List[str]:
        cleaned = clean_lines(v)
        if not cleaned:
            raise ValueError("must contain at least one non-empty line")
        return cleaned


class QuickResponseUpdate(BaseModel):
    """Body cho PATCH /quick-responses/{id}."""

    trigger_type: Optional[TriggerType] = None
    triggers: Optional[List[str]] = Field(None, min_length=1, max_length=100)
    responses: Optional[List[str]] = Field(None, min_length=1, max_length=50)
    category: Optional[QuickResponseCategory] = None
    priority: Optional[int] = Field(None, ge=0, le=1000)
    is_active: Optional[bool] = None

    model_config = {"extra": "forbid"}

    @field_validator("triggers", "responses")
    @classmethod
    def non_empty_lines(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        cleaned = clean_lines(v)
        if not cleaned:
            raise ValueError("must contain at least one non-empty line")
        return cleaned


class QuickResponseOut(BaseModel):
    id: UUID
    company_id: UUID
    trigger_type: str
    triggers: List[str]
    responses: List[str]
    category: str
    priority: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
