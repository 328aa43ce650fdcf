"""Admin-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, field_validator

Role = Literal["USER", "DEVELOPER", "MODERATOR", "ADMIN"]


class AdminUserInfo(BaseModel):
    """User information for admin endpoints."""

    user_id: str
    username: str
    email: str | None
    display_name: str | None
    role: str
    created_at: str
    last_seen_at: str | None


class ListUsersResponse(BaseModel):
    """Response for GET /admin/users endpoint."""

    items: list[AdminUserInfo]


class UpdateUserRequest(BaseModel):
    """Request to update a user's profile fields or role."""

    display_name: str | None = None
    username: str | None = None
    role: Role | None = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str | None) -> str | None:
        if v is not None and not (3 <= len(v) <= 32):
            raise ValueError("Username must be 3-32 characters")
        return v


class RevokeKeysResponse(BaseModel):
    """Response after revoking a user's API keys."""

    username: str
    revoked_count: int


class AdminUserDetail(AdminUserInfo):
    """Single user with activity counts."""

    post_count: int
    comment_count: int
    active_key_count: int


class AdminStats(BaseModel):
    """Site-wide totals for the admin dashboard."""

    user_count: int
    post_count: int
    comment_count: int
    role_distribution: dict[str, int]
