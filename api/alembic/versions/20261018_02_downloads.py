"""Downloads catalog."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "20261018_02_downloads"
down_revision = "20261018_01_initial"
branch_labels = None
depends_on = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(name, sa.TIMESTAMP(timezone=True), server_default=sa.func.now())


def upgrade() -> None:
    op.create_table(
        "downloads",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("version", sa.String(50), nullable=False),
        sa.Column("platform", sa.String(16), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=False),
        sa.Column("file_size", sa.String(32), nullable=True),
        _timestamp("release_date"),
        sa.Column("is_latest", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.CheckConstraint(
            "platform IN ('WINDOWS', 'MACOS', 'LINUX', 'ALL')",
            name="ck_downloads_platform",
        ),
        sa.UniqueConstraint("slug", name="uq_downloads_slug"),
    )
    op.create_index("idx_downloads_platform_latest", "downloads", ["platform", "is_latest"])


def downgrade() -> None:
    op.drop_index("idx_downloads_platform_latest", table_name="downloads")
    op.drop_table("downloads")
