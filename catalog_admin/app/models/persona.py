"""AI persona: cấu hình giọng điệu + system prompt cho chatbot của company."""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db import Base, JsonType


class Persona(Base):
    """
    persona_type: cs | sales | support | concierge.
    personality: {tone, formality, greeting, emoji_usage, humor} (JSON).
    capabilities / signature_phrases: list[str] (JSON).
    Mỗi company có tối đa một persona is_default=True (service đảm bảo).
    """

    __tablename__ = "personas"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    company_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    persona_type: Mapped[str] = mapped_column(String(32), default="cs", nullable=False)
    system_prompt: Mapped[str] = mapped_column(Text, nullable=False)
    personality: Mapped[dict] = mapped_column(JsonType, default=dict, nullable=False)
    capabilities: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    signature_phrases: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    temperature: Mapped[float] = mapped_column(Float, default=0.7, nullable=False)
    max_tokens: Mapped[int] = mapped_column(Integer, default=1000, nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
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

    company = relationship("Company", back_populates="personas")
