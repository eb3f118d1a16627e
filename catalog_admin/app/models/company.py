"""Company (tenant) model."""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db import Base, JsonType


class Company(Base):
    """
    Company (tenant): mọi item / knowledge / faq / quick response / persona / guardrail / chat pattern
    đều scope theo company_id.
    domain_type: subdomain | custom | none.
    """

    __tablename__ = "companies"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    industry: Mapped[str] = mapped_column(String(64), nullable=False)
    slug: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, unique=True)
    custom_domain: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    domain_type: Mapped[str] = mapped_column(String(16), default="none", nullable=False)
    wa_number: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    settings: Mapped[dict] = mapped_column(JsonType, default=dict, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    # passive_deletes: để FK ON DELETE CASCADE của DB xử lý, không load collection khi xóa.
    items = relationship("Item", back_populates="company", passive_deletes=True)
    knowledge_records = relationship("KnowledgeRecord", back_populates="company", passive_deletes=True)
    faqs = relationship("Faq", back_populates="company", passive_deletes=True)
    quick_responses = relationship("QuickResponse", back_populates="company", passive_deletes=True)
    personas = relationship("Persona", back_populates="company", passive_deletes=True)
    guardrails = relationship("Guardrail", back_populates="company", passive_deletes=True)
    chat_patterns = relationship("ChatPattern", back_populates="company", passive_deletes=True)
    sync_events = relationship("KnowledgeSyncEvent", back_populates="company", passive_deletes=True)
