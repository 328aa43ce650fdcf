"""Fail if Alembic migrations are out of sync with SQLAlchemy models."""

from __future__ import annotations

import asyncio

from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from xxml_cms import models  # noqa: F401  # Ensure models are registered
from xxml_cms.config import settings
from xxml_cms.database import Base


def _compare(connection) -> list[object]:
    context = MigrationContext.configure(connection, opts={"compare_type": True})
    return compare_metadata(context, Base.metadata)


async def main() -> int:
    engine = create_async_engine(settings.database_url)
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            diffs = await conn.run_sync(_compare)
    finally:
        await engine.dispose()

    if diffs:
        print("Models and migrations disagree:")
        for diff in diffs:
            print(f"  {diff}")
        return 1

    print("Migrations match the models.")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
