"""Initial schema: users, documentation, forum."""

from __future__ import annotations

import uuid

from alembic import op
import sqlalchemy as sa

revision = "20261018_01_initial"
down_revision = None
branch_labels = None
depends_on = None

_DEFAULT_CATEGORIES = [
    ("Announcements", "announcements", "Official announcements about XXML"),
    ("General Discussion", "general", "General discussions about XXML programming"),
    ("Help & Support", "help", "Get help with XXML programming questions"),
    ("Show & Tell", "showcase", "Share your XXML projects and creations"),
    ("Ideas & Feedback", "ideas", "Suggest ideas and provide feedback for XXML"),
    ("Tutorials & Guides", "tutorials", "Community tutorials and guides"),
]


def _timestamp(name: str) -> sa.Column:
    return sa.Column(name, sa.TIMESTAMP(timezone=True), server_default=sa.func.now())


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("username", sa.String(32), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("display_name", sa.Text(), nullable=True),
        sa.Column("role", sa.String(16), nullable=False, server_default="USER"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.Column("last_seen_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.CheckConstraint(
            "role IN ('USER', 'DEVELOPER', 'MODERATOR', 'ADMIN')",
            name="ck_users_role",
        ),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "api_keys",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("key_hash", sa.Text(), nullable=False),
        sa.Column("key_prefix", sa.String(12), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        _timestamp("created_at"),
        sa.Column("last_used_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("revoked_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.UniqueConstraint("key_hash", name="uq_api_keys_key_hash"),
    )

    op.create_table(
        "doc_modules",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("import_path", sa.Text(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("slug", name="uq_doc_modules_slug"),
    )
    op.create_index("idx_doc_modules_sort", "doc_modules", ["sort_order"])

    op.create_table(
        "doc_classes",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "module_id",
            sa.Uuid(),
            sa.ForeignKey("doc_modules.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("constraints", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint("module_id", "slug", name="uq_doc_class_module_slug"),
    )
    op.create_index("idx_doc_classes_module_sort", "doc_classes", ["module_id", "sort_order"])

    op.create_table(
        "doc_methods",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "class_id",
            sa.Uuid(),
            sa.ForeignKey("doc_classes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("category", sa.Text(), nullable=False, server_default="Methods"),
        sa.Column("params", sa.Text(), nullable=False, server_default=""),
        sa.Column("returns", sa.Text(), nullable=False, server_default=""),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("idx_doc_methods_class_sort", "doc_methods", ["class_id", "sort_order"])

    op.create_table(
        "doc_examples",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "class_id",
            sa.Uuid(),
            sa.ForeignKey("doc_classes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("code", sa.Text(), nullable=False),
        sa.Column("filename", sa.Text(), nullable=True),
        sa.Column("show_lines", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("idx_doc_examples_class_sort", "doc_examples", ["class_id", "sort_order"])

    op.create_table(
        "categories",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("slug", name="uq_categories_slug"),
    )

    op.create_table(
        "posts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("excerpt", sa.Text(), nullable=True),
        sa.Column("type", sa.String(16), nullable=False, server_default="DISCUSSION"),
        sa.Column("category_id", sa.Uuid(), sa.ForeignKey("categories.id"), nullable=False),
        sa.Column(
            "author_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_pinned", sa.Boolean(), nullable=False, server_default=sa.false()),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.CheckConstraint("type IN ('BLOG', 'DISCUSSION', 'QUESTION')", name="ck_posts_type"),
        sa.CheckConstraint("view_count >= 0", name="ck_posts_view_count"),
        sa.UniqueConstraint("slug", name="uq_posts_slug"),
    )
    op.create_index("idx_posts_category", "posts", ["category_id"])
    op.create_index(
        "idx_posts_type_created",
        "posts",
        ["type", sa.text("created_at DESC")],
    )

    op.create_table(
        "post_comments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "post_id",
            sa.Uuid(),
            sa.ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "parent_id",
            sa.Uuid(),
            sa.ForeignKey("post_comments.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "author_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("body", sa.Text(), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.CheckConstraint("length(body) <= 65536", name="ck_post_comment_body_length"),
    )
    op.create_index("idx_post_comments_post", "post_comments", ["post_id", "created_at"])

    op.create_table(
        "post_comment_revisions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "comment_id",
            sa.Uuid(),
            sa.ForeignKey("post_comments.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column(
            "editor_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        _timestamp("created_at"),
    )
    op.create_index(
        "idx_post_comment_revisions_comment",
        "post_comment_revisions",
        ["comment_id", "created_at"],
    )

    op.bulk_insert(
        sa.table(
            "categories",
            sa.column("id", sa.Uuid()),
            sa.column("name", sa.String()),
            sa.column("slug", sa.String()),
            sa.column("description", sa.Text()),
            sa.column("sort_order", sa.Integer()),
        ),
        [
            {
                "id": uuid.uuid5(uuid.NAMESPACE_URL, f"xxml-cms:category:{slug}"),
                "name": name,
                "slug": slug,
                "description": description,
                "sort_order": index,
            }
            for index, (name, slug, description) in enumerate(_DEFAULT_CATEGORIES)
        ],
    )


def downgrade() -> None:
    op.drop_table("post_comment_revisions")
    op.drop_table("post_comments")
    op.drop_table("posts")
    op.drop_table("categories")
    op.drop_table("doc_examples")
    op.drop_table("doc_methods")
    op.drop_table("doc_classes")
    op.drop_table("doc_modules")
    op.drop_table("api_keys")
    op.drop_table("users")
