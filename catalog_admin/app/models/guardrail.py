"""Guardrail: luật hành vi cho chatbot, kích hoạt theo intent / topic / emotion hoặc luôn luôn."""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db import Base, JsonType


class Guardrail(Base):
    """
    trigger_intent / trigger_topic / trigger_emotion: list[str] hoặc NULL (không lọc theo chiều đó).
    forbidden / required: list[str] cụm từ cấm / bắt buộc. Backend chat áp dụng, ở đây chỉ lưu.
    """

    __tablename__ = "guardrails"

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
    trigger_intent: Mapped[Optional[list]] = mapped_column(JsonType, nullable=True)
    trigger_topic: Mapped[Optional[list]] = mapped_column(JsonType, nullable=True)
    trigger_emotion: Mapped[Optional[list]] = mapped_column(JsonType, nullable=True)
    trigger_always: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    rules: Mapped[str] = mapped_column(Text, nullable=False)
    forbidden: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    required: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    priority: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
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

    company = relationship("Company", back_populates="guardrails")
