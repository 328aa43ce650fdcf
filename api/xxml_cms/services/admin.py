"""User management for administrators."""

import logging
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from xxml_cms.database import atomic
from xxml_cms.errors import NotFound, ValidationFailed
from xxml_cms.models.forum import Post, PostComment, PostCommentRevision
from xxml_cms.models.user import APIKey, User, utcnow
from xxml_cms.schemas.admin import AdminStats, UpdateUserRequest
from xxml_cms.services.access import parse_id, require_admin

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_users(self, caller_id: UUID | None) -> list[User]:
        """All users, newest first."""
        await require_admin(self.db, caller_id)
        result = await self.db.execute(select(User).order_by(User.created_at.desc()))
        return list(result.scalars().all())

    async def update_user(
        self, caller_id: UUID | None, user_id: UUID | str, data: UpdateUserRequest
    ) -> User:
        """
        Change a user's display name, username or role.

        An admin can not take away their own ADMIN role.
        """
        admin = await require_admin(self.db, caller_id)
        target_id = parse_id(user_id, "User ID")

        user = await self.db.get(User, target_id)
        if user is None:
            raise NotFound("User not found")

        if user.id == admin.id and data.role is not None and data.role != "ADMIN":
            raise ValidationFailed("role", "Cannot change your own admin role")

        if data.username is not None and data.username != user.username:
            taken = await self.db.scalar(
                select(User.id).where(User.username == data.username, User.id != user.id)
            )
            if taken is not None:
                raise ValidationFailed("username", "Username is already taken")

        changes = []
        async with atomic(self.db):
            if data.display_name is not None:
                user.display_name = data.display_name
            if data.username is not None and data.username != user.username:
                user.username = data.username
                changes.append("username")
            if data.role is not None and data.role != user.role:
                user.role = data.role
                changes.append(f"role to {data.role}")

        if changes:
            logger.info("Admin %s updated %s: %s", admin.username, user.username, ", ".join(changes))
        return user

    async def revoke_api_keys(self, caller_id: UUID | None, username: str) -> int:
        """Mark every active key of ``username`` revoked; returns how many were."""
        admin = await require_admin(self.db, caller_id)

        user_id = await self.db.scalar(select(User.id).where(User.username == username))
        if user_id is None:
            raise NotFound(f"User '{username}' not found")

        async with atomic(self.db):
            result = await self.db.execute(
                update(APIKey)
                .where(APIKey.user_id == user_id, APIKey.revoked_at.is_(None))
                .values(revoked_at=utcnow())
            )

        logger.info("Admin %s revoked %d keys of %s", admin.username, result.rowcount, username)
        return result.rowcount

    async def get_user(
        self, caller_id: UUID | None, user_id: UUID | str
    ) -> tuple[User, dict[str, int]]:
        """A user together with their post, comment and active key counts."""
        await require_admin(self.db, caller_id)
        user = await self.db.get(User, parse_id(user_id, "User ID"))
        if user is None:
            raise NotFound("User not found")

        counts = {
            "post_count": await self.db.scalar(
                select(func.count()).select_from(Post).where(Post.author_id == user.id)
            ),
            "comment_count": await self.db.scalar(
                select(func.count()).select_from(PostComment).where(PostComment.author_id == user.id)
            ),
            "active_key_count": await self.db.scalar(
                select(func.count())
                .select_from(APIKey)
                .where(APIKey.user_id == user.id, APIKey.revoked_at.is_(None))
            ),
        }
        return user, counts

    async def delete_user(self, caller_id: UUID | None, user_id: UUID | str) -> None:
        """
        Delete a user and their API keys.

        Posts and comments stay, with their author cleared. Admins can not
        delete their own account.
        """
        admin = await require_admin(self.db, caller_id)
        target_id = parse_id(user_id, "User ID")
        if target_id == admin.id:
            raise ValidationFailed("user_id", "Cannot delete your own account")

        user = await self.db.get(User, target_id)
        if user is None:
            raise NotFound("User not found")

        async with atomic(self.db):
            await self.db.execute(
                update(Post).where(Post.author_id == user.id).values(author_id=None)
            )
            await self.db.execute(
                update(PostComment).where(PostComment.author_id == user.id).values(author_id=None)
            )
            await self.db.execute(
                update(PostCommentRevision)
                .where(PostCommentRevision.editor_id == user.id)
                .values(editor_id=None)
            )
            await self.db.delete(user)

        logger.info("Admin %s deleted user %s", admin.username, user.username)

    async def stats(self, caller_id: UUID | None) -> AdminStats:
        await require_admin(self.db, caller_id)
        roles = await self.db.execute(select(User.role, func.count()).group_by(User.role))
        return AdminStats(
            user_count=await self.db.scalar(select(func.count()).select_from(User)),
            post_count=await self.db.scalar(select(func.count()).select_from(Post)),
            comment_count=await self.db.scalar(select(func.count()).select_from(PostComment)),
            role_distribution={role: count for role, count in roles.all()},
        )
