"""AI persona schemas."""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

PersonaType = Literal["cs", "sales", "support", "concierge"]
Capability = Literal[
    "product_info",
    "pricing",
    "faq",
    "consultation",
    "recommendation",
    "complaint_handling",
    "booking",
    "technical_support",
    "upselling",
]

DEFAULT_CAPABILITIES: List[str] = [
    "product_info",
    "pricing",
    "faq",
    "consultation",
    "recommendation",
    "complaint_handling",
]


class PersonaPersonality(BaseModel):
    """Giọng điệu của persona. greeting rỗng => không chào mở đầu."""

    tone: Literal["friendly", "professional", "casual", "enthusiastic"] = "friendly"
    formality: Literal["formal", "semi-formal", "casual", "friendly"] = "semi-formal"
    greeting: str = Field("", max_length=500)
    emoji_usage: Literal["none", "minimal", "moderate", "expressive"] = "moderate"
    humor: Literal["none", "subtle", "occasional", "playful"] = "subtle"

    model_config = {"extra": "forbid"}


def _unique_phrases(values: List[str]) -> List[str]:
    """Trim, bỏ dòng rỗng, bỏ trùng (giữ thứ tự nhập)."""
    out: List[str] = []
    for v in values:
        text = v.strip() if isinstance(v, str) else ""
        if text and text not in out:
            out.append(text)
    return out


class PersonaCreate(BaseModel):
    """Body cho POST /personas. is_default=True => các persona khác của company bỏ default."""

    company_id: UUID
    name: str = Field(..., min_length=1, max_length=255)
    display_name: Optional[str] = Field(None, max_length=255)
    persona_type: PersonaType = "cs"
    system_prompt: str = Field(..., min_length=1)
    personality: PersonaPersonality = Field(default_factory=PersonaPersonality)
    capabilities: List[Capability] = Field(default_factory=lambda: list(DEFAULT_CAPABILITIES))
    signature_phrases: List[str] = Field(default_factory=list, max_length=50)
    temperature: float = Field(0.7, ge=0, le=1)
    max_tokens: int = Field(1000, ge=100, le=4000)
    is_default: bool = True
    is_active: bool = True

    model_config = {"extra": "forbid"}

    @field_validator("signature_phrases")
    @classmethod
    def clean_phrases(cls, v: List[str]) -> List[str]:
        return _unique_phrases(v)

    @field_validator("capabilities")
    @classmethod
    def unique_capabilities(cls, v: List[str]) -> List[str]:
        return list(dict.fromkeys(v))


class PersonaUpdate(BaseModel):
    """Body cho PATCH /personas/{id}. display_name null => xóa."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    display_name: Optional[str] = Field(None, max_length=255)
    persona_type: Optional[PersonaType] = None
    system_prompt: Optional[str] = Field(None, min_length=1)
    personality: Optional[PersonaPersonality] = None
    capabilities: Optional[List[Capability]] = None
    signature_phrases: Optional[List[str]] = Field(None, max_length=50)
    temperature: Optional[float] = Field(None, ge=0, le=1)
    max_tokens: Optional[int] = Field(None, ge=100, le=4000)
    is_default: Optional[bool] = None
    is_active: Optional[bool] = None

    model_config = {"extra": "forbid"}

    @field_validator("signature_phrases")
    @classmethod
    def clean_phrases(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return v if v is None else _unique_phrases(v)

    @field_validator("capabilities")
    @classmethod
    def unique_capabilities(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return v if v is None else list(dict.fromkeys(v))


class PersonaOut(BaseModel):
    id: UUID
    company_id: UUID
    name: str
    display_name: Optional[str] = None
    persona_type: str
    system_prompt: str
    personality: Dict[str, Any]
    capabilities: List[str]
    signature_phrases: List[str]
    temperature: float
    max_tokens: int
    is_default: bool
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
