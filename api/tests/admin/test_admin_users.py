"""
Tests for admin user management endpoints:
- GET /api/v1/admin/users (list all users)
- PATCH /api/v1/admin/users/{user_id} (update name, username or role)
- POST /api/v1/admin/users/{username}/revoke-keys (revoke all user's API keys)
- GET /api/v1/admin/users/{user_id} (one user with activity counts)
- DELETE /api/v1/admin/users/{user_id} (delete a user)
"""

import uuid

from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from xxml_cms.models.forum import Post
from xxml_cms.models.user import APIKey, User


class TestListUsers:
    """GET /api/v1/admin/users tests."""

    async def test_admin_can_list_users(
        self, async_client: AsyncClient, test_admin: dict, test_user: dict, auth_headers
    ):
        response = await async_client.get(
            "/api/v1/admin/users",
            headers=auth_headers(test_admin["api_key"]),
        )

        assert response.status_code == 200
        items = response.json()["data"]["items"]
        assert {u["username"] for u in items} == {"adminuser", "testuser"}
        assert {"user_id", "username", "email", "role", "created_at"} <= set(items[0])

    async def test_moderator_is_forbidden(
        self, async_client: AsyncClient, test_moderator: dict, auth_headers
    ):
        """Staff roles other than ADMIN get no access."""
        response = await async_client.get(
            "/api/v1/admin/users",
            headers=auth_headers(test_moderator["api_key"]),
        )

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Admin access required"

    async def test_anonymous_is_unauthenticated(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/admin/users")
        assert response.status_code == 401


class TestUpdateUser:
    """PATCH /api/v1/admin/users/{user_id} tests."""

    async def test_promote_user(
        self, async_client: AsyncClient, test_admin: dict, test_user: dict, auth_headers
    ):
        response = await async_client.patch(
            f"/api/v1/admin/users/{test_user['user_id']}",
            json={"role": "DEVELOPER"},
            headers=auth_headers(test_admin["api_key"]),
        )

        assert response.status_code == 200
        assert response.json()["data"]["role"] == "DEVELOPER"

    async def test_promotion_takes_effect_immediately(
        self, async_client: AsyncClient, test_admin: dict, test_user: dict, auth_headers
    ):
        """Roles are read per request, so the same key gains access at once."""
        await async_client.patch(
            f"/api/v1/admin/users/{test_user['user_id']}",
            json={"role": "ADMIN"},
            headers=auth_headers(test_admin["api_key"]),
        )

        response = await async_client.get(
            "/api/v1/admin/users",
            headers=auth_headers(test_user["api_key"]),
        )
        assert response.status_code == 200

    async def test_rename(
        self, async_client: AsyncClient, test_admin: dict, test_user: dict, auth_headers
    ):
        response = await async_client.patch(
            f"/api/v1/admin/users/{test_user['user_id']}",
            json={"username": "renamed", "display_name": "Renamed User"},
            headers=auth_headers(test_admin["api_key"]),
        )

        data = response.json()["data"]
        assert data["username"] == "renamed"
        assert data["display_name"] == "Renamed User"

    async def test_username_taken(
        self,
        async_client: AsyncClient,
        test_admin: dict,
        test_user: dict,
        second_user: dict,
        auth_headers,
    ):
        response = await async_client.patch(
            f"/api/v1/admin/users/{test_user['user_id']}",
            json={"username": "seconduser"},
            headers=auth_headers(test_admin["api_key"]),
        )

        assert response.status_code == 422
        assert response.json()["error"]["field"] == "username"

    async def test_admin_cannot_demote_self(
        self, async_client: AsyncClient, test_admin: dict, auth_headers
    ):
        response = await async_client.patch(
            f"/api/v1/admin/users/{test_admin['user_id']}",
            json={"role": "USER"},
            headers=auth_headers(test_admin["api_key"]),
        )

        assert response.status_code == 422
        assert response.json()["error"]["message"] == "Cannot change your own admin role"

    async def test_unknown_role_rejected(
        self, async_client: AsyncClient, test_admin: dict, test_user: dict, auth_headers
    ):
        response = await async_client.patch(
            f"/api/v1/admin/users/{test_user['user_id']}",
            json={"role": "OWNER"},
            headers=auth_headers(test_admin["api_key"]),
        )

        assert response.status_code == 422
        assert response.json()["error"]["field"] == "role"

    async def test_unknown_user(self, async_client: AsyncClient, test_admin: dict, auth_headers):
        response = await async_client.patch(
            f"/api/v1/admin/users/{uuid.uuid4()}",
            json={"role": "USER"},
            headers=auth_headers(test_admin["api_key"]),
        )

        assert response.status_code == 404

    async def test_non_admin_forbidden_even_for_unknown_user(
        self, async_client: AsyncClient, test_developer: dict, auth_headers
    ):
        response = await async_client.patch(
            f"/api/v1/admin/users/{uuid.uuid4()}",
            json={"role": "USER"},
            headers=auth_headers(test_developer["api_key"]),
        )

        assert response.status_code == 403


class TestRevokeKeys:
    """POST /api/v1/admin/users/{username}/revoke-keys tests."""

    async def test_revoke_keys(
        self, async_client: AsyncClient, test_admin: dict, test_user: dict, auth_headers
    ):
        response = await async_client.post(
            f"/api/v1/admin/users/{test_user['username']}/revoke-keys",
            headers=auth_headers(test_admin["api_key"]),
        )

        assert response.status_code == 200
        assert response.json()["data"] == {"username": "testuser", "revoked_count": 1}

        # Revoked key no longer authenticates
        rejected = await async_client.get(
            "/api/v1/admin/users",
            headers=auth_headers(test_user["api_key"]),
        )
        assert rejected.status_code == 401

    async def test_revoke_twice_counts_zero(
        self, async_client: AsyncClient, test_admin: dict, test_user: dict, auth_headers
    ):
        url = f"/api/v1/admin/users/{test_user['username']}/revoke-keys"
        await async_client.post(url, headers=auth_headers(test_admin["api_key"]))
        response = await async_client.post(url, headers=auth_headers(test_admin["api_key"]))

        assert response.json()["data"]["revoked_count"] == 0

    async def test_revoke_unknown_user(
        self, async_client: AsyncClient, test_admin: dict, auth_headers
    ):
        response = await async_client.post(
            "/api/v1/admin/users/nobody/revoke-keys",
            headers=auth_headers(test_admin["api_key"]),
        )

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "User 'nobody' not found"


class TestGetUser:
    """GET /api/v1/admin/users/{user_id} tests."""

    async def test_get_user_with_counts(
        self,
        async_client: AsyncClient,
        test_admin: dict,
        test_user: dict,
        auth_headers,
        category,
        long_body,
    ):
        created = await async_client.post(
            "/api/v1/forum/posts",
            json={"title": "My first thread", "body": long_body, "category_id": str(category.id)},
            headers=auth_headers(test_user["api_key"]),
        )
        await async_client.post(
            f"/api/v1/forum/posts/{created.json()['data']['id']}/comments",
            json={"body": "Bumping my own thread"},
            headers=auth_headers(test_user["api_key"]),
        )

        response = await async_client.get(
            f"/api/v1/admin/users/{test_user['user_id']}",
            headers=auth_headers(test_admin["api_key"]),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["username"] == "testuser"
        assert data["post_count"] == 1
        assert data["comment_count"] == 1
        assert data["active_key_count"] == 1

    async def test_get_unknown_user(
        self, async_client: AsyncClient, test_admin: dict, auth_headers
    ):
        response = await async_client.get(
            f"/api/v1/admin/users/{uuid.uuid4()}",
            headers=auth_headers(test_admin["api_key"]),
        )

        assert response.status_code == 404

    async def test_get_user_requires_admin(
        self, async_client: AsyncClient, test_moderator: dict, test_user: dict, auth_headers
    ):
        response = await async_client.get(
            f"/api/v1/admin/users/{test_user['user_id']}",
            headers=auth_headers(test_moderator["api_key"]),
        )

        assert response.status_code == 403


class TestDeleteUser:
    """DELETE /api/v1/admin/users/{user_id} tests."""

    async def test_delete_user_keeps_their_posts(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        test_admin: dict,
        test_user: dict,
        auth_headers,
        category,
        long_body,
    ):
        created = await async_client.post(
            "/api/v1/forum/posts",
            json={"title": "Orphaned thread", "body": long_body, "category_id": str(category.id)},
            headers=auth_headers(test_user["api_key"]),
        )
        post_id = uuid.UUID(created.json()["data"]["id"])

        response = await async_client.delete(
            f"/api/v1/admin/users/{test_user['user_id']}",
            headers=auth_headers(test_admin["api_key"]),
        )

        assert response.status_code == 204
        assert await db_session.get(User, test_user["user_id"]) is None
        author_id = await db_session.scalar(select(Post.author_id).where(Post.id == post_id))
        assert author_id is None
        keys = await db_session.scalar(
            select(func.count()).select_from(APIKey).where(APIKey.user_id == test_user["user_id"])
        )
        assert keys == 0

    async def test_deleted_user_key_stops_working(
        self, async_client: AsyncClient, test_admin: dict, test_user: dict, auth_headers
    ):
        await async_client.delete(
            f"/api/v1/admin/users/{test_user['user_id']}",
            headers=auth_headers(test_admin["api_key"]),
        )

        response = await async_client.get(
            "/api/v1/admin/users",
            headers=auth_headers(test_user["api_key"]),
        )
        assert response.status_code == 401

    async def test_admin_cannot_delete_self(
        self, async_client: AsyncClient, test_admin: dict, auth_headers
    ):
        response = await async_client.delete(
            f"/api/v1/admin/users/{test_admin['user_id']}",
            headers=auth_headers(test_admin["api_key"]),
        )

        assert response.status_code == 422
        assert response.json()["error"]["message"] == "Cannot delete your own account"

    async def test_delete_unknown_user(
        self, async_client: AsyncClient, test_admin: dict, auth_headers
    ):
        response = await async_client.delete(
            f"/api/v1/admin/users/{uuid.uuid4()}",
            headers=auth_headers(test_admin["api_key"]),
        )

        assert response.status_code == 404

    async def test_developer_cannot_delete(
        self, async_client: AsyncClient, test_developer: dict, test_user: dict, auth_headers
    ):
        response = await async_client.delete(
            f"/api/v1/admin/users/{test_user['user_id']}",
            headers=auth_headers(test_developer["api_key"]),
        )

        assert response.status_code == 403
