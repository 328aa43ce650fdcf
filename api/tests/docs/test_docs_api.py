"""
Tests for the documentation endpoints.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from xxml_cms.data.stdlib import STDLIB_MODULES
from xxml_cms.services.seeding import seed_documentation


@pytest.fixture
async def seeded(db_session: AsyncSession):
    await seed_documentation(db_session, STDLIB_MODULES)


MODULE_PAYLOAD = {
    "name": "Threading",
    "slug": "threading",
    "description": "Threads and synchronization.",
    "import_path": "#import Language::Threading;",
}


class TestPublicReads:
    async def test_list_modules(self, async_client: AsyncClient, seeded):
        response = await async_client.get("/api/v1/docs/modules")

        assert response.status_code == 200
        body = response.json()
        assert body["error"] is None
        assert [m["slug"] for m in body["data"]] == ["core", "collections", "system"]
        assert body["data"][2]["classes"][0]["slug"] == "console"

    async def test_get_class_page(self, async_client: AsyncClient, seeded):
        response = await async_client.get("/api/v1/docs/modules/core/classes/integer")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["module"]["import_path"] == "#import Language::Core;"
        assert data["methods"][0]["name"] == "Constructor"
        assert data["examples"][0]["show_lines"] is False

    async def test_unknown_module_is_404(self, async_client: AsyncClient, seeded):
        response = await async_client.get("/api/v1/docs/modules/networking")

        assert response.status_code == 404
        body = response.json()
        assert body["data"] is None
        assert body["error"]["code"] == "NOT_FOUND"

    async def test_reads_do_not_need_a_key(self, async_client: AsyncClient, seeded):
        response = await async_client.get("/api/v1/docs/modules/system/classes")

        assert response.status_code == 200
        assert [c["slug"] for c in response.json()["data"]] == ["console", "file", "environment"]


class TestEditorEndpoints:
    async def test_create_module_requires_key(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/docs/modules", json=MODULE_PAYLOAD)

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHENTICATED"

    async def test_create_module_forbidden_for_user(
        self, async_client: AsyncClient, test_user, auth_headers
    ):
        response = await async_client.post(
            "/api/v1/docs/modules",
            json=MODULE_PAYLOAD,
            headers=auth_headers(test_user["api_key"]),
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    async def test_create_module(
        self, async_client: AsyncClient, test_developer, auth_headers, revalidator
    ):
        response = await async_client.post(
            "/api/v1/docs/modules",
            json=MODULE_PAYLOAD,
            headers=auth_headers(test_developer["api_key"]),
        )

        assert response.status_code == 201
        assert response.json()["data"]["slug"] == "threading"
        assert "/docs/standard-library" in revalidator.stale_paths

    async def test_create_module_missing_field(
        self, async_client: AsyncClient, test_developer, auth_headers
    ):
        payload = {k: v for k, v in MODULE_PAYLOAD.items() if k != "import_path"}
        response = await async_client.post(
            "/api/v1/docs/modules",
            json=payload,
            headers=auth_headers(test_developer["api_key"]),
        )

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["field"] == "import_path"

    async def test_patch_module_malformed_id(
        self, async_client: AsyncClient, test_developer, auth_headers
    ):
        response = await async_client.patch(
            "/api/v1/docs/modules/not-a-uuid",
            json={"name": "X"},
            headers=auth_headers(test_developer["api_key"]),
        )

        assert response.status_code == 422
        assert response.json()["error"]["field"] == "module_id"

    async def test_update_class_methods(
        self, async_client: AsyncClient, seeded, test_moderator, auth_headers
    ):
        page = await async_client.get("/api/v1/docs/modules/core/classes/none")
        class_id = page.json()["data"]["id"]

        response = await async_client.patch(
            f"/api/v1/docs/classes/{class_id}",
            json={"methods": [{"name": "toString", "returns": "String^"}]},
            headers=auth_headers(test_moderator["api_key"]),
        )

        assert response.status_code == 200
        methods = response.json()["data"]["methods"]
        assert [m["name"] for m in methods] == ["toString"]

    async def test_delete_class(
        self, async_client: AsyncClient, seeded, test_admin, auth_headers
    ):
        page = await async_client.get("/api/v1/docs/modules/core/classes/none")
        class_id = page.json()["data"]["id"]

        response = await async_client.delete(
            f"/api/v1/docs/classes/{class_id}",
            headers=auth_headers(test_admin["api_key"]),
        )
        assert response.status_code == 204

        gone = await async_client.get("/api/v1/docs/modules/core/classes/none")
        assert gone.status_code == 404

    async def test_reorder_modules(
        self, async_client: AsyncClient, seeded, test_developer, auth_headers
    ):
        listing = await async_client.get("/api/v1/docs/modules")
        ids = [m["id"] for m in listing.json()["data"]]

        response = await async_client.post(
            "/api/v1/docs/modules/reorder",
            json={"ordered_ids": [ids[1], ids[0], ids[2]]},
            headers=auth_headers(test_developer["api_key"]),
        )

        assert response.status_code == 200
        assert [m["slug"] for m in response.json()["data"]] == ["collections", "core", "system"]
