"""Downloads catalog model."""

import uuid

from sqlalchemy import (
    TIMESTAMP,
    Boolean,
    CheckConstraint,
    Column,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    false,
    func,
)

from xxml_cms.database import Base
from xxml_cms.models.user import utcnow

PLATFORMS = ("WINDOWS", "MACOS", "LINUX", "ALL")


class Download(Base):
    """A released build of the XXML toolchain for one platform."""

    __tablename__ = "downloads"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    slug = Column(String(255), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    version = Column(String(50), nullable=False)
    platform = Column(String(16), nullable=False)
    file_url = Column(Text, nullable=False)
    file_size = Column(String(32))
    release_date = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
    is_latest = Column(Boolean, nullable=False, default=False, server_default=false())
    is_featured = Column(Boolean, nullable=False, default=False, server_default=false())
    sort_order = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint(
            "platform IN ('WINDOWS', 'MACOS', 'LINUX', 'ALL')",
            name="ck_downloads_platform",
        ),
        Index("idx_downloads_platform_latest", platform, is_latest),
    )
