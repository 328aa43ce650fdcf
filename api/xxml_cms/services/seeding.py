"""
Idempotent loader for the built-in documentation dataset.

Modules are matched by slug and classes by (module, slug). A class that
already exists has its methods and examples replaced wholesale, so the
store mirrors the dataset after every run.
"""

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from xxml_cms.database import atomic
from xxml_cms.models.docs import DocClass, DocExample, DocMethod, DocModule
from xxml_cms.schemas.docs import ClassData, ModuleData, SeedSummary

logger = logging.getLogger(__name__)


class DocumentationSeeder:
    """
    Apply a list of ``ModuleData`` to the store.

    By default every module upsert and every class step commits on its own,
    so progress made before a failure is kept. ``single_transaction=True``
    applies the whole dataset or nothing. ``prune=True`` removes classes of a
    seeded module that no longer appear in its dataset entry.
    """

    def __init__(
        self,
        db: AsyncSession,
        *,
        single_transaction: bool = False,
        prune: bool = False,
    ):
        self.db = db
        self.single_transaction = single_transaction
        self.prune = prune

    async def run(self, modules: Sequence[ModuleData]) -> SeedSummary:
        if self.single_transaction:
            async with atomic(self.db):
                await self._apply(modules)
        else:
            await self._apply(modules)

        summary = await self.summary()
        logger.info(
            "Seeded %d modules, %d classes, %d methods, %d examples",
            summary.modules,
            summary.classes,
            summary.methods,
            summary.examples,
        )
        return summary

    async def summary(self) -> SeedSummary:
        """Current row totals of the documentation tables."""
        counts = {}
        for key, model in (
            ("modules", DocModule),
            ("classes", DocClass),
            ("methods", DocMethod),
            ("examples", DocExample),
        ):
            counts[key] = await self.db.scalar(select(func.count()).select_from(model))
        return SeedSummary(**counts)

    @asynccontextmanager
    async def _step(self) -> AsyncIterator[None]:
        if self.single_transaction:
            yield
            await self.db.flush()
        else:
            async with atomic(self.db):
                yield

    async def _apply(self, modules: Sequence[ModuleData]) -> None:
        for index, module_data in enumerate(modules):
            logger.info("Creating module: %s", module_data.name)
            module = await self._upsert_module(module_data, index)

            for position, class_data in enumerate(module_data.classes):
                logger.info("  Creating class: %s", class_data.name)
                await self._upsert_class(module, class_data, position)

            if self.prune:
                await self._prune_classes(module, {c.slug for c in module_data.classes})

    async def _upsert_module(self, data: ModuleData, index: int) -> DocModule:
        async with self._step():
            result = await self.db.execute(select(DocModule).where(DocModule.slug == data.slug))
            module = result.scalar_one_or_none()
            if module is None:
                module = DocModule(slug=data.slug)
                self.db.add(module)
            module.name = data.name
            module.description = data.description
            module.import_path = data.import_path
            module.sort_order = index
        return module

    async def _upsert_class(self, module: DocModule, data: ClassData, position: int) -> None:
        async with self._step():
            result = await self.db.execute(
                select(DocClass).where(
                    DocClass.module_id == module.id, DocClass.slug == data.slug
                )
            )
            doc_class = result.scalar_one_or_none()

            if doc_class is None:
                self.db.add(
                    DocClass(
                        module_id=module.id,
                        slug=data.slug,
                        name=data.name,
                        description=data.description,
                        constraints=data.constraints,
                        sort_order=position,
                        methods=[
                            DocMethod(**m.model_dump(), sort_order=k)
                            for k, m in enumerate(data.methods)
                        ],
                        examples=[
                            DocExample(**e.model_dump(), sort_order=k)
                            for k, e in enumerate(data.examples)
                        ],
                    )
                )
                return

            await self.db.execute(delete(DocMethod).where(DocMethod.class_id == doc_class.id))
            await self.db.execute(delete(DocExample).where(DocExample.class_id == doc_class.id))

            doc_class.name = data.name
            doc_class.description = data.description
            doc_class.constraints = data.constraints
            doc_class.sort_order = position

            if data.methods:
                await self.db.execute(
                    insert(DocMethod),
                    [
                        {"class_id": doc_class.id, "sort_order": k, **m.model_dump()}
                        for k, m in enumerate(data.methods)
                    ],
                )
            if data.examples:
                await self.db.execute(
                    insert(DocExample),
                    [
                        {"class_id": doc_class.id, "sort_order": k, **e.model_dump()}
                        for k, e in enumerate(data.examples)
                    ],
                )

    async def _prune_classes(self, module: DocModule, keep: set[str]) -> None:
        result = await self.db.execute(
            select(DocClass).where(DocClass.module_id == module.id, DocClass.slug.not_in(keep))
        )
        stale = list(result.scalars().all())
        if not stale:
            return
        async with self._step():
            for doc_class in stale:
                logger.info("  Removing class: %s", doc_class.name)
                await self.db.delete(doc_class)


async def seed_documentation(
    db: AsyncSession,
    modules: Sequence[ModuleData],
    *,
    single_transaction: bool = False,
    prune: bool = False,
) -> SeedSummary:
    """Seed ``modules`` into the store and return the resulting totals."""
    seeder = DocumentationSeeder(db, single_transaction=single_transaction, prune=prune)
    return await seeder.run(modules)
