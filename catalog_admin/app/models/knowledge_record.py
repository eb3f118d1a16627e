"""Knowledge base record - ngữ cảnh cho chat backend (RAG)."""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db import Base, JsonType

SOURCE_MANUAL = "manual"
SOURCE_ITEM = "item"
SOURCE_FAQ = "faq"
SOURCE_IMPORT = "import"
SOURCE_TYPES = (SOURCE_MANUAL, SOURCE_ITEM, SOURCE_FAQ, SOURCE_IMPORT)


class KnowledgeRecord(Base):
    """
    Một bài KB: title + content, tags (JSON list), priority.
    source_type: manual | item | faq | import; source_id trỏ về bản ghi gốc (vd. items.id).
    Bản ghi source_type=item thuộc về item: chỉ vòng đời item được sửa/xóa nó.
    """

    __tablename__ = "knowledge_base"
    __table_args__ = (UniqueConstraint("source_type", "source_id", name="uq_knowledge_base_source"),)

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
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(64), default="general", nullable=False)
    tags: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)  # ["tag1", "tag2"]
    priority: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    source_type: Mapped[str] = mapped_column(String(16), default=SOURCE_MANUAL, nullable=False)
    source_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(as_uuid=True), nullable=True, index=True)
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

    company = relationship("Company", back_populates="knowledge_records")

    @property
    def is_item_synced(self) -> bool:
        return self.source_type == SOURCE_ITEM
