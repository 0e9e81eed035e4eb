"""
Unit tests for the permission API endpoints.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


def permission_payload(**overrides) -> dict:
    payload = {"name": "Create book", "apiPath": "/api/v1/admin/books", "method": "post", "module": "BOOK"}
    payload.update(overrides)
    return payload


class TestPermissions:
    """Test permission CRUD."""

    async def test_create_permission(self, client: AsyncClient, admin_headers):
        """Test that the method is stored in upper case."""
        response = await client.post("/api/v1/permissions", headers=admin_headers, json=permission_payload())
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Create a permission"
        assert body["data"]["method"] == "POST"
        assert body["data"]["apiPath"] == "/api/v1/admin/books"

    async def test_create_duplicate_permission(self, client: AsyncClient, admin_headers):
        """Test that module, path and method are unique together."""
        await client.post("/api/v1/permissions", headers=admin_headers, json=permission_payload())
        response = await client.post(
            "/api/v1/permissions", headers=admin_headers, json=permission_payload(name="Other", method="POST")
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Permission already exists"

    async def test_create_permission_missing_fields(self, client: AsyncClient, admin_headers):
        """Test the required field messages."""
        response = await client.post("/api/v1/permissions", headers=admin_headers, json={"name": "Only a name"})
        assert response.status_code == 400
        messages = response.json()["message"]
        assert "Api path is required" in messages
        assert "Method is required" in messages
        assert "Module is required" in messages

    async def test_get_and_list_permissions(self, client: AsyncClient, admin_headers):
        """Test reading permissions back."""
        created = await client.post("/api/v1/permissions", headers=admin_headers, json=permission_payload())
        permission_id = created.json()["data"]["id"]

        response = await client.get(f"/api/v1/permissions/{permission_id}", headers=admin_headers)
        assert response.json()["message"] == "Get permission by id"
        assert response.json()["data"]["name"] == "Create book"

        response = await client.get("/api/v1/permissions", headers=admin_headers, params={"filter": "method : 'POST'"})
        assert response.json()["message"] == "Get permissions"
        assert response.json()["data"]["meta"]["total"] == 1

    async def test_update_permission(self, client: AsyncClient, admin_headers):
        """Test updating a permission in place."""
        created = await client.post("/api/v1/permissions", headers=admin_headers, json=permission_payload())
        permission_id = created.json()["data"]["id"]

        response = await client.put(
            "/api/v1/permissions",
            headers=admin_headers,
            json=permission_payload(id=permission_id, method="put", name="Update book"),
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Update a permission"
        assert response.json()["data"]["method"] == "PUT"
        assert response.json()["data"]["updatedBy"] == "admin@readcycle.dev"

    async def test_update_into_duplicate(self, client: AsyncClient, admin_headers):
        """Test that an update cannot collide with another permission."""
        await client.post("/api/v1/permissions", headers=admin_headers, json=permission_payload())
        other = await client.post("/api/v1/permissions", headers=admin_headers, json=permission_payload(method="GET"))

        response = await client.put(
            "/api/v1/permissions",
            headers=admin_headers,
            json=permission_payload(id=other.json()["data"]["id"], method="POST"),
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Permission already exists"

    async def test_delete_permission(self, client: AsyncClient, admin_headers):
        """Test deleting a permission."""
        created = await client.post("/api/v1/permissions", headers=admin_headers, json=permission_payload())
        permission_id = created.json()["data"]["id"]

        response = await client.delete(f"/api/v1/permissions/{permission_id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "delete a permission"

        response = await client.get(f"/api/v1/permissions/{permission_id}", headers=admin_headers)
        assert response.status_code == 400

    async def test_unknown_permission(self, client: AsyncClient, admin_headers):
        """Test the not-found message."""
        response = await client.get("/api/v1/permissions/99", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Permission with id: 99 does not exist."

        response = await client.delete("/api/v1/permissions/99", headers=admin_headers)
        assert response.json()["message"] == "Permission with id: 99 does not exist."
