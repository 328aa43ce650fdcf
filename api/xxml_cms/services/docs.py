"""Documentation content service: public reads and the staff editor."""

import logging
from uuid import UUID

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from xxml_cms.database import atomic
from xxml_cms.errors import NotFound, ValidationFailed
from xxml_cms.models.docs import DocClass, DocExample, DocMethod, DocModule
from xxml_cms.schemas.docs import (
    ClassInput,
    ClassUpdate,
    ExampleInput,
    MethodInput,
    ModuleInput,
    ModuleUpdate,
)
from xxml_cms.services.access import ensure_elevated, parse_id, require_caller, require_elevated
from xxml_cms.services.cache import PathRevalidator

logger = logging.getLogger(__name__)

DOCS_PATH = "/docs/standard-library"
EDIT_DENIED_MESSAGE = "You do not have permission to edit documentation"


def method_rows(class_id: UUID, methods: list[MethodInput]) -> list[dict]:
    return [{"class_id": class_id, **m.model_dump()} for m in methods]


def example_rows(class_id: UUID, examples: list[ExampleInput]) -> list[dict]:
    return [{"class_id": class_id, **e.model_dump()} for e in examples]


class DocumentationService:
    """Read and edit the Module -> Class -> Method/Example hierarchy."""

    def __init__(self, db: AsyncSession, revalidator: PathRevalidator):
        self.db = db
        self.revalidator = revalidator

    # --- Public reads ---

    async def list_modules(self) -> list[DocModule]:
        """All modules in display order, each with its class summaries."""
        result = await self.db.execute(
            select(DocModule)
            .options(selectinload(DocModule.classes))
            .order_by(DocModule.sort_order)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_module(self, slug: str) -> DocModule:
        result = await self.db.execute(
            select(DocModule)
            .options(
                selectinload(DocModule.classes).selectinload(DocClass.methods),
                selectinload(DocModule.classes).selectinload(DocClass.examples),
            )
            .where(DocModule.slug == slug)
            .execution_options(populate_existing=True)
        )
        module = result.scalar_one_or_none()
        if not module:
            raise NotFound(f"Module '{slug}' not found")
        return module

    async def get_class(self, module_slug: str, class_slug: str) -> DocClass:
        module_id = await self.db.scalar(select(DocModule.id).where(DocModule.slug == module_slug))
        if module_id is None:
            raise NotFound(f"Module '{module_slug}' not found")
        doc_class = await self._load_class(
            DocClass.module_id == module_id, DocClass.slug == class_slug
        )
        if not doc_class:
            raise NotFound(f"Class '{class_slug}' not found in module '{module_slug}'")
        return doc_class

    async def list_classes(self, module_slug: str) -> list[DocClass]:
        module_id = await self.db.scalar(select(DocModule.id).where(DocModule.slug == module_slug))
        if module_id is None:
            return []
        result = await self.db.execute(
            select(DocClass).where(DocClass.module_id == module_id).order_by(DocClass.sort_order)
        )
        return list(result.scalars().all())

    async def _load_class(self, *criteria) -> DocClass | None:
        result = await self.db.execute(
            select(DocClass)
            .options(
                selectinload(DocClass.module),
                selectinload(DocClass.methods),
                selectinload(DocClass.examples),
            )
            .where(*criteria)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    # --- Modules ---

    async def create_module(self, caller_id: UUID | None, data: ModuleInput) -> DocModule:
        await require_elevated(self.db, caller_id, EDIT_DENIED_MESSAGE)

        existing = await self.db.scalar(select(DocModule.id).where(DocModule.slug == data.slug))
        if existing is not None:
            raise ValidationFailed("slug", "A module with this slug already exists")

        module = DocModule(**data.model_dump())
        async with atomic(self.db):
            self.db.add(module)

        logger.info("Module %s created", module.slug)
        self.revalidator.revalidate(DOCS_PATH)
        return module

    async def _editable_module(self, caller_id: UUID | None, module_id: UUID | str) -> DocModule:
        user = await require_caller(self.db, caller_id)
        module = await self.db.get(DocModule, parse_id(module_id, "Module ID"))
        if module is None:
            raise NotFound("Module not found")
        ensure_elevated(user, EDIT_DENIED_MESSAGE)
        return module

    async def update_module(
        self, caller_id: UUID | None, module_id: UUID | str, data: ModuleUpdate
    ) -> DocModule:
        module = await self._editable_module(caller_id, module_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "slug" in changes and changes["slug"] != module.slug:
            taken = await self.db.scalar(select(DocModule.id).where(DocModule.slug == changes["slug"]))
            if taken is not None:
                raise ValidationFailed("slug", "A module with this slug already exists")

        async with atomic(self.db):
            for key, value in changes.items():
                setattr(module, key, value)

        self.revalidator.revalidate(DOCS_PATH)
        return module

    async def delete_module(self, caller_id: UUID | None, module_id: UUID | str) -> None:
        """Delete a module together with its classes, methods and examples."""
        module = await self._editable_module(caller_id, module_id)

        async with atomic(self.db):
            await self.db.delete(module)

        logger.info("Module %s deleted", module.slug)
        self.revalidator.revalidate(DOCS_PATH)

    async def reorder_modules(self, caller_id: UUID | None, ordered_ids: list[UUID]) -> None:
        """Set each listed module's sort order to its position in ``ordered_ids``."""
        user = await require_caller(self.db, caller_id)
        result = await self.db.execute(select(DocModule).where(DocModule.id.in_(ordered_ids)))
        modules = {m.id: m for m in result.scalars().all()}
        missing = [str(i) for i in ordered_ids if i not in modules]
        if missing:
            raise NotFound(f"Module not found: {missing[0]}")
        ensure_elevated(user, EDIT_DENIED_MESSAGE)

        async with atomic(self.db):
            for index, module_id in enumerate(ordered_ids):
                modules[module_id].sort_order = index

        self.revalidator.revalidate(DOCS_PATH)

    # --- Classes ---

    async def create_class(self, caller_id: UUID | None, data: ClassInput) -> DocClass:
        await require_elevated(self.db, caller_id, EDIT_DENIED_MESSAGE)
        if await self.db.get(DocModule, data.module_id) is None:
            raise ValidationFailed("module_id", "Module is required")

        existing = await self.db.scalar(
            select(DocClass.id).where(
                DocClass.module_id == data.module_id, DocClass.slug == data.slug
            )
        )
        if existing is not None:
            raise ValidationFailed("slug", "A class with this slug already exists in this module")

        doc_class = DocClass(
            **data.model_dump(exclude={"methods", "examples"}),
            methods=[DocMethod(**m.model_dump()) for m in data.methods],
            examples=[DocExample(**e.model_dump()) for e in data.examples],
        )
        async with atomic(self.db):
            self.db.add(doc_class)

        logger.info("Class %s created", doc_class.slug)
        self.revalidator.revalidate(DOCS_PATH)
        return await self._load_class(DocClass.id == doc_class.id)

    async def _editable_class(self, caller_id: UUID | None, class_id: UUID | str) -> DocClass:
        user = await require_caller(self.db, caller_id)
        doc_class = await self.db.get(DocClass, parse_id(class_id, "Class ID"))
        if doc_class is None:
            raise NotFound("Class not found")
        ensure_elevated(user, EDIT_DENIED_MESSAGE)
        return doc_class

    async def update_class(
        self, caller_id: UUID | None, class_id: UUID | str, data: ClassUpdate
    ) -> DocClass:
        """
        Update class fields; supplied method/example lists replace the stored
        ones inside the same transaction.
        """
        doc_class = await self._editable_class(caller_id, class_id)
        cid = doc_class.id

        changes = data.model_dump(
            exclude={"methods", "examples"}, exclude_unset=True, exclude_none=True
        )
        if "constraints" in data.model_fields_set:
            changes["constraints"] = data.constraints
        if "slug" in changes and changes["slug"] != doc_class.slug:
            taken = await self.db.scalar(
                select(DocClass.id).where(
                    DocClass.module_id == doc_class.module_id, DocClass.slug == changes["slug"]
                )
            )
            if taken is not None:
                raise ValidationFailed("slug", "A class with this slug already exists in this module")

        async with atomic(self.db):
            for key, value in changes.items():
                setattr(doc_class, key, value)
            if data.methods is not None:
                await self.db.execute(delete(DocMethod).where(DocMethod.class_id == cid))
                if data.methods:
                    await self.db.execute(insert(DocMethod), method_rows(cid, data.methods))
            if data.examples is not None:
                await self.db.execute(delete(DocExample).where(DocExample.class_id == cid))
                if data.examples:
                    await self.db.execute(insert(DocExample), example_rows(cid, data.examples))

        self.revalidator.revalidate(DOCS_PATH)
        return await self._load_class(DocClass.id == cid)

    async def delete_class(self, caller_id: UUID | None, class_id: UUID | str) -> None:
        doc_class = await self._editable_class(caller_id, class_id)

        async with atomic(self.db):
            await self.db.delete(doc_class)

        logger.info("Class %s deleted", doc_class.slug)
        self.revalidator.revalidate(DOCS_PATH)

    async def reorder_classes(
        self, caller_id: UUID | None, module_id: UUID | str, ordered_ids: list[UUID]
    ) -> None:
        module = await self._editable_module(caller_id, module_id)
        result = await self.db.execute(
            select(DocClass).where(DocClass.module_id == module.id, DocClass.id.in_(ordered_ids))
        )
        classes = {c.id: c for c in result.scalars().all()}
        missing = [str(i) for i in ordered_ids if i not in classes]
        if missing:
            raise NotFound(f"Class not found in module: {missing[0]}")

        async with atomic(self.db):
            for index, class_id in enumerate(ordered_ids):
                classes[class_id].sort_order = index

        self.revalidator.revalidate(DOCS_PATH)
