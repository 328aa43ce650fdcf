"""Load the built-in standard library reference into the database.

Usage:
    python scripts/seed_docs.py [--all-or-nothing] [--prune]
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from xxml_cms.config import settings
from xxml_cms.data.stdlib import STDLIB_MODULES
from xxml_cms.database import AsyncSessionLocal, engine
from xxml_cms.errors import StoreFailure
from xxml_cms.logging_config import configure_logging
from xxml_cms.services.seeding import seed_documentation

logger = logging.getLogger("xxml_cms.scripts.seed_docs")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--all-or-nothing",
        action="store_true",
        help="Apply the whole dataset in one transaction",
    )
    parser.add_argument(
        "--prune",
        action="store_true",
        help="Delete classes of seeded modules that are no longer in the dataset",
    )
    return parser.parse_args()


async def main() -> int:
    args = _parse_args()
    configure_logging(settings.log_level, fmt="%(message)s")

    logger.info("Starting documentation migration...")
    try:
        async with AsyncSessionLocal() as session:
            summary = await seed_documentation(
                session,
                STDLIB_MODULES,
                single_transaction=args.all_or_nothing,
                prune=args.prune,
            )
    except StoreFailure as exc:
        logger.error("Migration failed: %s", exc.message)
        return 1
    finally:
        await engine.dispose()

    logger.info("Migration complete!")
    logger.info("Summary:")
    logger.info("  Modules: %d", summary.modules)
    logger.info("  Classes: %d", summary.classes)
    logger.info("  Methods: %d", summary.methods)
    logger.info("  Examples: %d", summary.examples)
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
