"""
Tests for DocumentationService: public reads and the staff editor.
"""

import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from xxml_cms.data.stdlib import STDLIB_MODULES
from xxml_cms.errors import Forbidden, NotFound, Unauthenticated, ValidationFailed
from xxml_cms.models.docs import DocClass, DocMethod
from xxml_cms.schemas.docs import (
    ClassInput,
    ClassUpdate,
    ExampleInput,
    MethodInput,
    ModuleInput,
    ModuleUpdate,
)
from xxml_cms.services.cache import PathRevalidator
from xxml_cms.services.docs import DOCS_PATH, DocumentationService
from xxml_cms.services.seeding import seed_documentation


@pytest.fixture
def service(db_session: AsyncSession, revalidator: PathRevalidator) -> DocumentationService:
    return DocumentationService(db_session, revalidator)


@pytest.fixture
async def seeded(db_session: AsyncSession):
    await seed_documentation(db_session, STDLIB_MODULES)


def _module_input(slug: str = "threading") -> ModuleInput:
    return ModuleInput(
        name="Threading",
        slug=slug,
        description="Threads and synchronization.",
        import_path="#import Language::Threading;",
    )


class TestReads:
    async def test_list_modules_in_order_with_classes(self, service, seeded):
        modules = await service.list_modules()

        assert [m.slug for m in modules] == ["core", "collections", "system"]
        assert [c.slug for c in modules[0].classes] == ["integer", "double", "bool", "string", "none"]

    async def test_get_module_loads_methods(self, service, seeded):
        module = await service.get_module("collections")

        list_class = module.classes[0]
        assert list_class.slug == "list-t"
        assert list_class.constraints == "T: Any"
        assert list_class.methods[0].name == "Constructor"

    async def test_get_unknown_module(self, service, seeded):
        with pytest.raises(NotFound):
            await service.get_module("networking")

    async def test_get_class(self, service, seeded):
        doc_class = await service.get_class("core", "integer")

        assert doc_class.module.slug == "core"
        assert len(doc_class.methods) == 17
        assert len(doc_class.examples) == 1

    async def test_get_class_in_wrong_module(self, service, seeded):
        with pytest.raises(NotFound):
            await service.get_class("system", "integer")

    async def test_list_classes_of_unknown_module_is_empty(self, service, seeded):
        assert await service.list_classes("networking") == []


class TestModuleEditor:
    async def test_developer_creates_module(self, service, revalidator, test_developer):
        module = await service.create_module(test_developer["user_id"], _module_input())

        assert module.slug == "threading"
        assert DOCS_PATH in revalidator.stale_paths

    async def test_user_cannot_create_module(self, service, test_user):
        with pytest.raises(Forbidden):
            await service.create_module(test_user["user_id"], _module_input())

    async def test_anonymous_cannot_create_module(self, service):
        with pytest.raises(Unauthenticated):
            await service.create_module(None, _module_input())

    async def test_duplicate_module_slug(self, service, seeded, test_developer):
        with pytest.raises(ValidationFailed) as exc_info:
            await service.create_module(test_developer["user_id"], _module_input("core"))
        assert exc_info.value.field == "slug"

    async def test_update_module_partial(self, service, seeded, test_moderator):
        core = await service.get_module("core")
        module = await service.update_module(
            test_moderator["user_id"], core.id, ModuleUpdate(description="Basics.")
        )

        assert module.description == "Basics."
        assert module.name == "Core"

    async def test_update_unknown_module_is_not_found_before_forbidden(self, service, test_user):
        with pytest.raises(NotFound):
            await service.update_module(test_user["user_id"], uuid.uuid4(), ModuleUpdate(name="X"))

    async def test_update_module_malformed_id(self, service, test_admin):
        with pytest.raises(ValidationFailed):
            await service.update_module(test_admin["user_id"], "nope", ModuleUpdate(name="X"))

    async def test_delete_module_cascades(
        self, service, seeded, db_session: AsyncSession, test_admin
    ):
        core = await service.get_module("core")
        await service.delete_module(test_admin["user_id"], core.id)

        assert [m.slug for m in await service.list_modules()] == ["collections", "system"]
        remaining = await db_session.scalar(
            select(func.count()).select_from(DocClass).where(DocClass.module_id == core.id)
        )
        assert remaining == 0

    async def test_reorder_modules(self, service, seeded, test_developer):
        modules = await service.list_modules()
        reversed_ids = [m.id for m in reversed(modules)]

        await service.reorder_modules(test_developer["user_id"], reversed_ids)

        assert [m.slug for m in await service.list_modules()] == ["system", "collections", "core"]

    async def test_reorder_with_unknown_id(self, service, seeded, test_developer):
        with pytest.raises(NotFound):
            await service.reorder_modules(test_developer["user_id"], [uuid.uuid4()])


class TestClassEditor:
    async def test_create_class_with_children(self, service, seeded, test_developer):
        core = await service.get_module("core")
        doc_class = await service.create_class(
            test_developer["user_id"],
            ClassInput(
                module_id=core.id,
                name="Char",
                slug="char",
                description="A single character.",
                methods=[MethodInput(name="toString", returns="String^")],
                examples=[ExampleInput(code="Instantiate Char^ As <c>;")],
            ),
        )

        assert doc_class.module.slug == "core"
        assert [m.name for m in doc_class.methods] == ["toString"]
        assert doc_class.examples[0].show_lines is False

    async def test_duplicate_class_slug_in_module(self, service, seeded, test_developer):
        core = await service.get_module("core")
        with pytest.raises(ValidationFailed) as exc_info:
            await service.create_class(
                test_developer["user_id"],
                ClassInput(module_id=core.id, name="Integer", slug="integer", description="dup"),
            )
        assert exc_info.value.field == "slug"

    async def test_create_class_in_unknown_module(self, service, test_developer):
        with pytest.raises(ValidationFailed) as exc_info:
            await service.create_class(
                test_developer["user_id"],
                ClassInput(module_id=uuid.uuid4(), name="X", slug="x", description="x"),
            )
        assert exc_info.value.field == "module_id"

    async def test_update_class_replaces_methods(
        self, service, seeded, db_session: AsyncSession, test_developer
    ):
        integer = await service.get_class("core", "integer")
        doc_class = await service.update_class(
            test_developer["user_id"],
            integer.id,
            ClassUpdate(
                description="Signed 64-bit integer.",
                methods=[MethodInput(name="add"), MethodInput(name="abs", sort_order=1)],
            ),
        )

        assert doc_class.description == "Signed 64-bit integer."
        assert [m.name for m in doc_class.methods] == ["add", "abs"]
        assert len(doc_class.examples) == 1
        stored = await db_session.scalar(
            select(func.count()).select_from(DocMethod).where(DocMethod.class_id == integer.id)
        )
        assert stored == 2

    async def test_update_class_without_lists_keeps_children(
        self, service, seeded, test_developer
    ):
        integer = await service.get_class("core", "integer")
        doc_class = await service.update_class(
            test_developer["user_id"], integer.id, ClassUpdate(name="Int")
        )

        assert doc_class.name == "Int"
        assert len(doc_class.methods) == 17

    async def test_user_cannot_update_class(self, service, seeded, test_user):
        integer = await service.get_class("core", "integer")
        with pytest.raises(Forbidden):
            await service.update_class(test_user["user_id"], integer.id, ClassUpdate(name="Int"))

    async def test_delete_class(self, service, seeded, test_admin):
        integer = await service.get_class("core", "integer")
        await service.delete_class(test_admin["user_id"], integer.id)

        with pytest.raises(NotFound):
            await service.get_class("core", "integer")

    async def test_reorder_classes(self, service, seeded, test_developer):
        system = await service.get_module("system")
        ids = [c.id for c in system.classes]

        await service.reorder_classes(test_developer["user_id"], system.id, [ids[2], ids[0], ids[1]])

        classes = await service.list_classes("system")
        assert [c.slug for c in classes] == ["environment", "console", "file"]

    async def test_reorder_classes_rejects_foreign_class(self, service, seeded, test_developer):
        system = await service.get_module("system")
        integer = await service.get_class("core", "integer")
        with pytest.raises(NotFound):
            await service.reorder_classes(test_developer["user_id"], system.id, [integer.id])
