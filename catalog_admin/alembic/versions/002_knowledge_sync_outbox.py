"""knowledge_sync_outbox: feed item -> knowledge_base cho service sync

Revision ID: 002
Revises: 001
Create Date: 2026-10-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "knowledge_sync_outbox",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("company_id", postgresql.UUID(as_uuid=True), nullable=False),
        # Không FK: event delete phải còn sau khi item bị xóa.
        sa.Column("item_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("action", sa.String(16), nullable=False),
        sa.Column("payload", postgresql.JSONB(), server_default=sa.text("'{}'::jsonb"), nullable=False),
        sa.Column("status", sa.String(16), server_default="pending", nullable=False),
        sa.Column("attempts", sa.Integer(), server_default="0", nullable=False),
        sa.Column("last_error", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.Column("processed_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_knowledge_sync_outbox_company_id", "knowledge_sync_outbox", ["company_id"], unique=False)
    op.create_index("ix_knowledge_sync_outbox_item_id", "knowledge_sync_outbox", ["item_id"], unique=False)
    op.create_index("ix_knowledge_sync_outbox_status", "knowledge_sync_outbox", ["status"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_knowledge_sync_outbox_status", table_name="knowledge_sync_outbox")
    op.drop_index("ix_knowledge_sync_outbox_item_id", table_name="knowledge_sync_outbox")
    op.drop_index("ix_knowledge_sync_outbox_company_id", table_name="knowledge_sync_outbox")
    op.drop_table("knowledge_sync_outbox")
