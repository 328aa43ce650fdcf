"""Forum and blog models for categories, posts, comments, and comment revisions."""

import uuid

from sqlalchemy import (
    TIMESTAMP,
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    false,
    func,
)
from sqlalchemy.orm import relationship

from xxml_cms.database import Base
from xxml_cms.models.user import utcnow

POST_TYPES = ("BLOG", "DISCUSSION", "QUESTION")


class Category(Base):
    """Forum category; every post is filed under exactly one."""

    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), unique=True, nullable=False)
    description = Column(Text)
    sort_order = Column(Integer, nullable=False, default=0, server_default="0")

    posts = relationship("Post", back_populates="category")


class Post(Base):
    """Forum discussion, question, or blog post."""

    __tablename__ = "posts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False)
    slug = Column(String(255), unique=True, nullable=False)
    body = Column(Text, nullable=False)
    excerpt = Column(Text)
    type = Column(String(16), nullable=False, default="DISCUSSION", server_default="DISCUSSION")
    category_id = Column(Uuid, ForeignKey("categories.id"), nullable=False)
    author_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"))
    view_count = Column(Integer, nullable=False, default=0, server_default="0")
    is_pinned = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("type IN ('BLOG', 'DISCUSSION', 'QUESTION')", name="ck_posts_type"),
        CheckConstraint("view_count >= 0", name="ck_posts_view_count"),
        Index("idx_posts_category", category_id),
        Index("idx_posts_type_created", type, created_at.desc()),
    )

    author = relationship("User", foreign_keys=[author_id])
    category = relationship("Category", back_populates="posts")
    comments = relationship(
        "PostComment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostComment.created_at",
    )


class PostComment(Base):
    """Comment on a post, optionally replying to another comment."""

    __tablename__ = "post_comments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    post_id = Column(Uuid, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    parent_id = Column(Uuid, ForeignKey("post_comments.id", ondelete="CASCADE"))
    author_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"))
    body = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("length(body) <= 65536", name="ck_post_comment_body_length"),
        Index("idx_post_comments_post", post_id, created_at),
    )

    post = relationship("Post", back_populates="comments")
    author = relationship("User", foreign_keys=[author_id])
    parent = relationship("PostComment", remote_side=[id], back_populates="replies")
    replies = relationship("PostComment", back_populates="parent", cascade="all, delete-orphan")
    revisions = relationship(
        "PostCommentRevision",
        back_populates="comment",
        cascade="all, delete-orphan",
        order_by="PostCommentRevision.created_at.desc()",
    )


class PostCommentRevision(Base):
    """Snapshot of a comment body taken before an edit replaced it."""

    __tablename__ = "post_comment_revisions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    comment_id = Column(Uuid, ForeignKey("post_comments.id", ondelete="CASCADE"), nullable=False)
    body = Column(Text, nullable=False)
    editor_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())

    __table_args__ = (Index("idx_post_comment_revisions_comment", comment_id, created_at),)

    comment = relationship("PostComment", back_populates="revisions")
    editor = relationship("User", foreign_keys=[editor_id])
