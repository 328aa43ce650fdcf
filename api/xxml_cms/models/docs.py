"""Documentation content models: modules, classes, methods and examples."""

import uuid

from sqlalchemy import (
    TIMESTAMP,
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    false,
    func,
)
from sqlalchemy.orm import relationship

from xxml_cms.database import Base
from xxml_cms.models.user import utcnow


class DocModule(Base):
    """Top-level documentation grouping (e.g. Language::Core)."""

    __tablename__ = "doc_modules"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    slug = Column(String(100), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    import_path = Column(Text, nullable=False)
    sort_order = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now()
    )

    __table_args__ = (Index("idx_doc_modules_sort", sort_order),)

    classes = relationship(
        "DocClass",
        back_populates="module",
        cascade="all, delete-orphan",
        order_by="DocClass.sort_order",
    )


class DocClass(Base):
    """A documented type; slugs are unique within their module only."""

    __tablename__ = "doc_classes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    module_id = Column(Uuid, ForeignKey("doc_modules.id", ondelete="CASCADE"), nullable=False)
    slug = Column(String(100), nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    constraints = Column(Text)
    sort_order = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("module_id", "slug", name="uq_doc_class_module_slug"),
        Index("idx_doc_classes_module_sort", module_id, sort_order),
    )

    module = relationship("DocModule", back_populates="classes")
    methods = relationship(
        "DocMethod",
        back_populates="doc_class",
        cascade="all, delete-orphan",
        order_by="DocMethod.sort_order",
    )
    examples = relationship(
        "DocExample",
        back_populates="doc_class",
        cascade="all, delete-orphan",
        order_by="DocExample.sort_order",
    )


class DocMethod(Base):
    """A documented operation; overloads share a name."""

    __tablename__ = "doc_methods"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    class_id = Column(Uuid, ForeignKey("doc_classes.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    category = Column(Text, nullable=False, default="Methods", server_default="Methods")
    params = Column(Text, nullable=False, default="", server_default="")
    returns = Column(Text, nullable=False, default="", server_default="")
    description = Column(Text, nullable=False, default="", server_default="")
    sort_order = Column(Integer, nullable=False, default=0, server_default="0")

    __table_args__ = (Index("idx_doc_methods_class_sort", class_id, sort_order),)

    doc_class = relationship("DocClass", back_populates="methods")


class DocExample(Base):
    """A code sample attached to a class."""

    __tablename__ = "doc_examples"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    class_id = Column(Uuid, ForeignKey("doc_classes.id", ondelete="CASCADE"), nullable=False)
    title = Column(Text)
    code = Column(Text, nullable=False)
    filename = Column(Text)
    show_lines = Column(Boolean, nullable=False, default=False, server_default=false())
    sort_order = Column(Integer, nullable=False, default=0, server_default="0")

    __table_args__ = (Index("idx_doc_examples_class_sort", class_id, sort_order),)

    doc_class = relationship("DocClass", back_populates="examples")
