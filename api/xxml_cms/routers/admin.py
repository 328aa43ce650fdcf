"""Admin router for user management."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from xxml_cms.auth.dependencies import get_caller_id
from xxml_cms.dependencies import get_admin_service
from xxml_cms.models.user import User
from xxml_cms.schemas.admin import (
    AdminStats,
    AdminUserDetail,
    AdminUserInfo,
    ListUsersResponse,
    RevokeKeysResponse,
    UpdateUserRequest,
)
from xxml_cms.schemas.common import ActionResult
from xxml_cms.services.admin import AdminService

router = APIRouter(prefix="/api/v1/admin", tags=["Admin"])


def admin_user_info(user: User) -> AdminUserInfo:
    return AdminUserInfo(
        user_id=str(user.id),
        username=user.username,
        email=user.email,
        display_name=user.display_name,
        role=user.role,
        created_at=user.created_at.isoformat(),
        last_seen_at=user.last_seen_at.isoformat() if user.last_seen_at else None,
    )


@router.get(
    "/users",
    response_model=ActionResult[ListUsersResponse],
    status_code=status.HTTP_200_OK,
)
async def list_users(
    service: AdminService = Depends(get_admin_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[ListUsersResponse]:
    """
    List all users in the system.

    Requires admin role.
    """
    users = await service.list_users(caller_id)
    return ActionResult.success(ListUsersResponse(items=[admin_user_info(u) for u in users]))


@router.patch(
    "/users/{user_id}",
    response_model=ActionResult[AdminUserInfo],
    status_code=status.HTTP_200_OK,
)
async def update_user(
    user_id: str,
    data: UpdateUserRequest,
    service: AdminService = Depends(get_admin_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[AdminUserInfo]:
    """
    Update a user's display name, username or role.

    Requires admin role. Admins cannot remove their own admin role.
    """
    user = await service.update_user(caller_id, user_id, data)
    return ActionResult.success(admin_user_info(user))


@router.post(
    "/users/{username}/revoke-keys",
    response_model=ActionResult[RevokeKeysResponse],
    status_code=status.HTTP_200_OK,
)
async def revoke_user_keys(
    username: str,
    service: AdminService = Depends(get_admin_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[RevokeKeysResponse]:
    """
    Revoke all API keys for a user.

    Requires admin role. This is a soft delete - keys are marked as revoked.
    """
    revoked_count = await service.revoke_api_keys(caller_id, username)
    return ActionResult.success(
        RevokeKeysResponse(username=username, revoked_count=revoked_count)
    )


@router.get(
    "/users/{user_id}",
    response_model=ActionResult[AdminUserDetail],
    status_code=status.HTTP_200_OK,
)
async def get_user(
    user_id: str,
    service: AdminService = Depends(get_admin_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[AdminUserDetail]:
    """Get one user with their post, comment and active key counts."""
    user, counts = await service.get_user(caller_id, user_id)
    return ActionResult.success(
        AdminUserDetail(**admin_user_info(user).model_dump(), **counts)
    )


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_user(
    user_id: str,
    service: AdminService = Depends(get_admin_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> None:
    """
    Delete a user and their API keys.

    Requires admin role. Admins cannot delete their own account.
    """
    await service.delete_user(caller_id, user_id)


@router.get(
    "/stats",
    response_model=ActionResult[AdminStats],
    status_code=status.HTTP_200_OK,
)
async def get_stats(
    service: AdminService = Depends(get_admin_service),
    caller_id: UUID | None = Depends(get_caller_id),
) -> ActionResult[AdminStats]:
    """User, post and comment totals with a per-role user count."""
    return ActionResult.success(await service.stats(caller_id))
