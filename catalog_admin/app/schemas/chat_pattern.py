"""Chat pattern schemas."""
from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

PatternType = Literal[
    "discovery",
    "pricing",
    "objection",
    "closing",
    "technical",
    "empathy",
    "comparison",
    "custom",
]


class ChatPatternCreate(BaseModel):
    company_id: UUID
    name: str = Field(..., min_length=1, max_length=255)
    pattern_type: PatternType = "custom"
    example_input: str = Field(..., min_length=1)
    example_output: str = Field(..., min_length=1)
    explanation: Optional[str] = None
    priority: int = Field(0, ge=0, le=1000)
    is_active: bool = True

    model_config = {"extra": "forbid"}


class ChatPatternUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    pattern_type: Optional[PatternType] = None
    example_input: Optional[str] = Field(None, min_length=1)
    example_output: Optional[str] = Field(None, min_length=1)
    explanation: Optional[str] = None
    priority: Optional[int] = Field(None, ge=0, le=1000)
    is_active: Optional[bool] = None

    model_config = {"extra": "forbid"}


class ChatPatternOut(BaseModel):
    id: UUID
    company_id: UUID
    name: str
    pattern_type: str
    example_input: str
    example_output: str
    explanation: Optional[str] = None
    priority: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
