"""Company (tenant) request/response schemas."""
from datetime import datetime
from typing import Any, Dict, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

DomainType = Literal["subdomain", "custom", "none"]


class CompanyCreate(BaseModel):
    """Body cho POST /companies."""

    name: str = Field(..., min_length=1, max_length=255)
    display_name: Optional[str] = Field(None, max_length=255)
    industry: str = Field(..., min_length=1, max_length=64)
    slug: Optional[str] = Field(None, max_length=255)
    custom_domain: Optional[str] = Field(None, max_length=255)
    domain_type: DomainType = "none"
    wa_number: Optional[str] = Field(None, max_length=32)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = None
    settings: Dict[str, Any] = Field(default_factory=dict)
    is_active: bool = True

    model_config = {"extra": "forbid"}


class CompanyUpdate(BaseModel):
    """Body cho PATCH /companies/{id}: chỉ field có gửi mới được cập nhật."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    display_name: Optional[str] = Field(None, max_length=255)
    industry: Optional[str] = Field(None, min_length=1, max_length=64)
    slug: Optional[str] = Field(None, max_length=255)
    custom_domain: Optional[str] = Field(None, max_length=255)
    domain_type: Optional[DomainType] = None
    wa_number: Optional[str] = Field(None, max_length=32)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None
    is_active: Optional[bool] = None

    model_config = {"extra": "forbid"}


class CompanyOut(BaseModel):
    """Company in API response."""

    id: UUID
    name: str
    display_name: Optional[str] = None
    industry: str
    slug: Optional[str] = None
    custom_domain: Optional[str] = None
    domain_type: str
    wa_number: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    settings: Dict[str, Any] = Field(default_factory=dict)
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
