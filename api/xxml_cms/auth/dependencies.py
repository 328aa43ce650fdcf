"""Caller identification dependencies for FastAPI endpoints."""

import hmac
import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from xxml_cms.auth.api_key import API_KEY_PREFIX, hash_api_key
from xxml_cms.database import get_db
from xxml_cms.errors import Unauthenticated
from xxml_cms.models.user import APIKey, User

logger = logging.getLogger(__name__)

# Minimum interval between last_used_at updates to reduce write amplification
LAST_USED_UPDATE_INTERVAL_SECONDS = 300


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


async def get_caller(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """
    Resolve the calling user from the X-API-Key header.

    No header means an anonymous caller. A malformed, unknown, revoked or
    expired key raises Unauthenticated.
    """
    if not x_api_key:
        return None

    if not x_api_key.startswith(API_KEY_PREFIX):
        raise Unauthenticated("Invalid API key format")

    key_hash = hash_api_key(x_api_key)
    result = await db.execute(
        select(APIKey)
        .options(selectinload(APIKey.user))
        .where(APIKey.key_hash == key_hash)
        .where(APIKey.revoked_at.is_(None))
    )
    api_key = result.scalar_one_or_none()

    if not api_key:
        # Keep response time independent of whether the key exists
        hmac.compare_digest(key_hash, "0" * 64)
        raise Unauthenticated("Invalid or revoked API key")

    now = datetime.now(timezone.utc)
    if api_key.expires_at is not None and _as_utc(api_key.expires_at) < now:
        raise Unauthenticated("API key has expired")

    if (
        api_key.last_used_at is None
        or (now - _as_utc(api_key.last_used_at)).total_seconds() > LAST_USED_UPDATE_INTERVAL_SECONDS
    ):
        api_key.last_used_at = now
        api_key.user.last_seen_at = now
        await db.commit()

    return api_key.user


async def get_caller_id(caller: User | None = Depends(get_caller)) -> UUID | None:
    """Id of the calling user, or None for anonymous requests."""
    return caller.id if caller else None
