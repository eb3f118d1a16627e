"""Guardrail schemas."""
from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import clean_lines

TriggerIntent = Literal["INFO", "NEGO", "ORDER", "KOMPLAIN", "KONSULTASI", "TECHNICAL"]
TriggerTopic = Literal["website", "seo", "ads", "maintenance", "pricing", "technical"]
TriggerEmotion = Literal["frustrated", "skeptical", "confused", "impatient", "disappointed"]


def _none_if_empty(values: Optional[List[str]]) -> Optional[List[str]]:
    """List trigger rỗng lưu thành NULL: không lọc theo chiều đó."""
    if not values:
        return None
    return list(dict.fromkeys(values))


class GuardrailCreate(BaseModel):
    """Body cho POST /guardrails."""

    company_id: UUID
    name: str = Field(..., min_length=1, max_length=255)
    trigger_intent: Optional[List[TriggerIntent]] = None
    trigger_topic: Optional[List[TriggerTopic]] = None
    trigger_emotion: Optional[List[TriggerEmotion]] = None
    trigger_always: bool = False
    rules: str = Field(..., min_length=1)
    forbidden: List[str] = Field(default_factory=list, max_length=100)
    required: List[str] = Field(default_factory=list, max_length=100)
    priority: int = Field(0, ge=0, le=1000)
    is_active: bool = True

    model_config = {"extra": "forbid"}

    @field_validator("trigger_intent", "trigger_topic", "trigger_emotion")
    @classmethod
    def empty_trigger_is_null(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _none_if_empty(v)

    @field_validator("forbidden", "required")
    @classmethod
    def clean_phrases(cls, v: List[str]) -> List[str]:
        return clean_lines(v)


class GuardrailUpdate(BaseModel):
    """Body cho PATCH /guardrails/{id}. trigger_* null hoặc [] => bỏ điều kiện đó."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    trigger_intent: Optional[List[TriggerIntent]] = None
    trigger_topic: Optional[List[TriggerTopic]] = None
    trigger_emotion: Optional[List[TriggerEmotion]] = None
    trigger_always: Optional[bool] = None
    rules: Optional[str] = Field(None, min_length=1)
    forbidden: Optional[List[str]] = Field(None, max_length=100)
    required: Optional[List[str]] = Field(None, max_length=100)
    priority: Optional[int] = Field(None, ge=0, le=1000)
    is_active: Optional[bool] = None

    model_config = {"extra": "forbid"}

    @field_validator("trigger_intent", "trigger_topic", "trigger_emotion")
    @classmethod
    def empty_trigger_is_null(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _none_if_empty(v)

    @field_validator("forbidden", "required")
    @classmethod
    def clean_phrases(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return v if v is None else clean_lines(v)


class GuardrailOut(BaseModel):
    id: UUID
    company_id: UUID
    name: str
    trigger_intent: Optional[List[str]] = None
    trigger_topic: Optional[List[str]] = None
    trigger_emotion: Optional[List[str]] = None
    trigger_always: bool
    rules: str
    forbidden: List[str]
    required: List[str]
    priority: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
