"""
Role-based access gate.

Roles are always read fresh from the store; a credential only tells us who
the caller is, never what they may do.
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from xxml_cms.errors import Forbidden, Unauthenticated, ValidationFailed
from xxml_cms.models.user import User

logger = logging.getLogger(__name__)

ELEVATED_ROLES = frozenset({"DEVELOPER", "MODERATOR", "ADMIN"})


def parse_id(value: UUID | str | None, label: str = "ID") -> UUID:
    """Normalize an identifier argument, rejecting blank or malformed values."""
    if isinstance(value, UUID):
        return value
    if value is None or not str(value).strip():
        raise ValidationFailed(label.lower().replace(" ", "_"), f"Invalid {label}")
    try:
        return UUID(str(value).strip())
    except ValueError as exc:
        raise ValidationFailed(label.lower().replace(" ", "_"), f"Invalid {label}") from exc


async def get_user(db: AsyncSession, user_id: UUID | str | None) -> User | None:
    if user_id is None:
        return None
    try:
        user_uuid = parse_id(user_id, "User ID")
    except ValidationFailed:
        return None
    result = await db.execute(select(User).where(User.id == user_uuid))
    return result.scalar_one_or_none()


async def has_elevated_role(db: AsyncSession, user_id: UUID | str | None) -> bool:
    """True iff the user exists and is a DEVELOPER, MODERATOR or ADMIN."""
    user = await get_user(db, user_id)
    return user is not None and user.role in ELEVATED_ROLES


async def require_caller(db: AsyncSession, caller_id: UUID | str | None) -> User:
    """Return the calling user, or raise Unauthenticated."""
    if caller_id is None:
        raise Unauthenticated()
    user = await get_user(db, caller_id)
    if user is None:
        raise Unauthenticated()
    return user


def ensure_elevated(user: User, message: str = "Insufficient permissions") -> User:
    if user.role not in ELEVATED_ROLES:
        logger.warning("Denied %s (role %s): %s", user.username, user.role, message)
        raise Forbidden(message)
    return user


def ensure_owner_or_elevated(user: User, owner_id: UUID | None) -> User:
    """Allow the resource's author or any elevated role."""
    if owner_id is not None and user.id == owner_id:
        return user
    if user.role in ELEVATED_ROLES:
        return user
    logger.warning("Denied %s: not the author of the resource", user.username)
    raise Forbidden()


async def require_elevated(
    db: AsyncSession,
    caller_id: UUID | str | None,
    message: str = "Insufficient permissions",
) -> User:
    """Return the caller if they hold an elevated role, else raise Forbidden."""
    return ensure_elevated(await require_caller(db, caller_id), message)


async def require_owner_or_elevated(
    db: AsyncSession,
    caller_id: UUID | str | None,
    owner_id: UUID | None,
) -> User:
    """Return the caller if they own the resource or hold an elevated role."""
    return ensure_owner_or_elevated(await require_caller(db, caller_id), owner_id)


async def require_admin(db: AsyncSession, caller_id: UUID | str | None) -> User:
    """Return the caller if they are an ADMIN."""
    user = await require_caller(db, caller_id)
    if user.role != "ADMIN":
        raise Forbidden("Admin access required")
    return user
