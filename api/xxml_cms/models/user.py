"""User and APIKey models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    TIMESTAMP,
    CheckConstraint,
    Column,
    ForeignKey,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import relationship

from xxml_cms.database import Base

USER_ROLES = ("USER", "DEVELOPER", "MODERATOR", "ADMIN")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """User account model."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(32), unique=True, nullable=False)
    email = Column(String, unique=True)
    display_name = Column(Text)
    role = Column(String(16), nullable=False, default="USER", server_default="USER")
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now()
    )
    last_seen_at = Column(TIMESTAMP(timezone=True))

    __table_args__ = (
        CheckConstraint(
            "role IN ('USER', 'DEVELOPER', 'MODERATOR', 'ADMIN')",
            name="ck_users_role",
        ),
    )

    api_keys = relationship("APIKey", back_populates="user", cascade="all, delete-orphan")


class APIKey(Base):
    """API key used to identify the calling user."""

    __tablename__ = "api_keys"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    key_hash = Column(Text, nullable=False, unique=True)
    key_prefix = Column(String(12), nullable=False)
    name = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
    last_used_at = Column(TIMESTAMP(timezone=True))
    expires_at = Column(TIMESTAMP(timezone=True))
    revoked_at = Column(TIMESTAMP(timezone=True))

    user = relationship("User", back_populates="api_keys")
