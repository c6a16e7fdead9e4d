"""create queries and resources tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "queries",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("query_text", sa.String(length=500), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint(
            "char_length(query_text) BETWEEN 1 AND 500", name="ck_queries_text_length"
        ),
    )
    op.create_index("ix_queries_user_id", "queries", ["user_id"])
    op.create_index("ix_queries_created_at", "queries", ["created_at"])

    op.create_table(
        "resources",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column(
            "is_active", sa.Boolean(), server_default=sa.true(), nullable=False
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint(
            "type IN ('article', 'video', 'link', 'course')",
            name="ck_resources_type",
        ),
    )
    op.create_index("ix_resources_is_active", "resources", ["is_active"])


def downgrade() -> None:
    op.drop_index("ix_resources_is_active", table_name="resources")
    op.drop_table("resources")
    op.drop_index("ix_queries_created_at", table_name="queries")
    op.drop_index("ix_queries_user_id", table_name="queries")
    op.drop_table("queries")
