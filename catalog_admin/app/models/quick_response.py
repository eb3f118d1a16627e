"""Quick response rule: chỉ lưu định nghĩa, việc match với tin nhắn chat do backend bên ngoài làm."""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db import Base, JsonType


class QuickResponse(Base):
    """
    trigger_type: exact | contains | regex. triggers / responses: list[str] (JSON).
    category: greeting | thanks | acknowledge | farewell | custom. priority cao match trước.
    """

    __tablename__ = "quick_responses"

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
    trigger_type: Mapped[str] = mapped_column(String(16), default="exact", nullable=False)
    triggers: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    responses: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    category: Mapped[str] = mapped_column(String(32), default="custom", nullable=False)
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

    company = relationship("Company", back_populates="quick_responses")
