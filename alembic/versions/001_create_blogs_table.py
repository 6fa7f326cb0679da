"""Create blogs table

Revision ID: 001
Revises: None
Create Date: 2025-01-10 00:00:00.000000+00:00

What:  Creates the `blogs` table backing SqlBlogStore.
How:   Portable column types so the same revision runs on PostgreSQL and
       SQLite: ObjectId strings as the primary key, TEXT fields, and a
       timezone-aware `date`.

Rollback: downgrade() drops the table (destructive — all posts are lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "blogs",
        sa.Column(
            "id",
            sa.String(24),
            nullable=False,
            comment="ObjectId hex string assigned at insert",
        ),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("user_img", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("cover_img", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "date",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
            comment="Creation time (UTC); may be overwritten by an update",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # List endpoint sorts newest first
    op.create_index("idx_blogs_date", "blogs", [sa.text("date DESC")])


def downgrade() -> None:
    op.drop_index("idx_blogs_date", table_name="blogs")
    op.drop_table("blogs")
