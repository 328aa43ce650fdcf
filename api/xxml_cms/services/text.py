"""Slug and excerpt helpers for posts and downloads."""

import re
import time

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

EXCERPT_LENGTH = 200


def slugify(title: str) -> str:
    """Lowercase the title and join its alphanumeric runs with hyphens."""
    base = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return base[:200] or "post"


def timestamped_slug(slug: str, counter: int = 0) -> str:
    """Suffix a colliding slug with the current epoch milliseconds (and a counter)."""
    stamped = f"{slug}-{int(time.time() * 1000)}"
    return f"{stamped}-{counter}" if counter else stamped


async def unique_slug(db: AsyncSession, column, slug: str) -> str:
    """
    Return ``slug``, or a timestamped variant of it, that ``column`` does not
    hold yet. Repeat hits within the same millisecond get a counter.
    """
    candidate = slug
    attempt = 0
    while await db.scalar(select(column).where(column == candidate)) is not None:
        candidate = timestamped_slug(slug, attempt)
        attempt += 1
    return candidate


def derive_excerpt(body: str, excerpt: str | None = None) -> str:
    """Use an explicit excerpt verbatim, else the first 200 characters of the body."""
    if excerpt:
        return excerpt
    if len(body) > EXCERPT_LENGTH:
        return body[:EXCERPT_LENGTH] + "..."
    return body
