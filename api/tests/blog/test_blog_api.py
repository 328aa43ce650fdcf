"""
Tests for the blog endpoints.
"""

import uuid

from httpx import AsyncClient

BLOG_PAYLOAD = {
    "title": "XXML 1.0 released",
    "body": "The first stable release of the XXML compiler is out.",
    "excerpt": "Stable at last",
}


class TestCreateBlogPost:
    async def test_developer_creates_post(
        self, async_client: AsyncClient, test_developer, auth_headers, revalidator
    ):
        response = await async_client.post(
            "/api/v1/blog/posts",
            json=BLOG_PAYLOAD,
            headers=auth_headers(test_developer["api_key"]),
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["type"] == "BLOG"
        assert data["slug"] == "xxml-1-0-released"
        assert data["excerpt"] == "Stable at last"
        assert "/blog" in revalidator.stale_paths

    async def test_user_forbidden(self, async_client: AsyncClient, test_user, auth_headers):
        response = await async_client.post(
            "/api/v1/blog/posts",
            json=BLOG_PAYLOAD,
            headers=auth_headers(test_user["api_key"]),
        )

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Only developers and admins can create blog posts"

    async def test_without_excerpt_uses_body(
        self, async_client: AsyncClient, test_admin, auth_headers
    ):
        payload = {k: v for k, v in BLOG_PAYLOAD.items() if k != "excerpt"}
        response = await async_client.post(
            "/api/v1/blog/posts", json=payload, headers=auth_headers(test_admin["api_key"])
        )

        assert response.json()["data"]["excerpt"] == BLOG_PAYLOAD["body"]


class TestBlogReads:
    async def test_list_and_get(self, async_client: AsyncClient, test_developer, auth_headers):
        await async_client.post(
            "/api/v1/blog/posts",
            json=BLOG_PAYLOAD,
            headers=auth_headers(test_developer["api_key"]),
        )

        listing = await async_client.get("/api/v1/blog/posts")
        page = await async_client.get("/api/v1/blog/posts/xxml-1-0-released")

        assert [p["slug"] for p in listing.json()["data"]["items"]] == ["xxml-1-0-released"]
        assert page.status_code == 200
        assert page.json()["data"]["title"] == "XXML 1.0 released"

    async def test_forum_post_is_not_a_blog_post(
        self, async_client: AsyncClient, test_user, auth_headers, category, long_body
    ):
        await async_client.post(
            "/api/v1/forum/posts",
            json={"title": "Just a thread", "body": long_body, "category_id": str(category.id)},
            headers=auth_headers(test_user["api_key"]),
        )

        response = await async_client.get("/api/v1/blog/posts/just-a-thread")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "WRONG_POST_TYPE"


class TestBlogEdits:
    async def test_patch_forum_post_via_blog(
        self, async_client: AsyncClient, test_user, test_admin, auth_headers, category, long_body
    ):
        created = await async_client.post(
            "/api/v1/forum/posts",
            json={"title": "Just a thread", "body": long_body, "category_id": str(category.id)},
            headers=auth_headers(test_user["api_key"]),
        )
        post_id = created.json()["data"]["id"]

        response = await async_client.patch(
            f"/api/v1/blog/posts/{post_id}",
            json={"title": "Now a blog", "body": long_body},
            headers=auth_headers(test_admin["api_key"]),
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "WRONG_POST_TYPE"

    async def test_update_and_delete(
        self, async_client: AsyncClient, test_developer, test_moderator, auth_headers
    ):
        created = await async_client.post(
            "/api/v1/blog/posts",
            json=BLOG_PAYLOAD,
            headers=auth_headers(test_developer["api_key"]),
        )
        post_id = created.json()["data"]["id"]

        updated = await async_client.patch(
            f"/api/v1/blog/posts/{post_id}",
            json={"title": "XXML 1.0.1 released", "body": BLOG_PAYLOAD["body"]},
            headers=auth_headers(test_moderator["api_key"]),
        )
        deleted = await async_client.delete(
            f"/api/v1/blog/posts/{post_id}",
            headers=auth_headers(test_moderator["api_key"]),
        )

        assert updated.status_code == 200
        assert updated.json()["data"]["title"] == "XXML 1.0.1 released"
        assert deleted.status_code == 204

    async def test_delete_unknown(self, async_client: AsyncClient, test_admin, auth_headers):
        response = await async_client.delete(
            f"/api/v1/blog/posts/{uuid.uuid4()}", headers=auth_headers(test_admin["api_key"])
        )

        assert response.status_code == 404
