"""Print the documentation modules and their classes as stored."""

from __future__ import annotations

import asyncio
import json

from xxml_cms.database import AsyncSessionLocal, engine
from xxml_cms.schemas.docs import ModuleSummary
from xxml_cms.services.cache import PathRevalidator
from xxml_cms.services.docs import DocumentationService


async def main() -> int:
    try:
        async with AsyncSessionLocal() as session:
            modules = await DocumentationService(session, PathRevalidator()).list_modules()
            payload = [ModuleSummary.model_validate(m).model_dump(mode="json") for m in modules]
    finally:
        await engine.dispose()

    print("Modules in database:")
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
