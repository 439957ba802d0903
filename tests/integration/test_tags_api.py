"""Integration tests for the tag endpoints."""

import pytest
from fastapi import status

from hospeda.domain.entities.role import Role


async def create_tag(client, headers, name="Pet Friendly", **extra):
    response = await client.post("/api/v1/tags", json={"name": name, **extra}, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["data"]


@pytest.mark.asyncio
async def test_editor_creates_tag(client, auth_headers):
    tag = await create_tag(client, auth_headers(Role.EDITOR, "editor-1"), color="green")

    assert tag["name"] == "Pet Friendly"
    assert tag["slug"] == "pet-friendly"
    assert tag["color"] == "green"
    assert tag["created_by_id"] == "editor-1"
    assert tag["visibility"] == "PUBLIC"


@pytest.mark.asyncio
async def test_guest_cannot_create_tag(client):
    response = await client.post("/api/v1/tags", json={"name": "Pool"})

    assert response.status_code == status.HTTP_403_FORBIDDEN
    error = response.json()["error"]
    assert error["code"] == "FORBIDDEN"
    assert error["details"]["reason"] == "MISSING_PERMISSION"


@pytest.mark.asyncio
async def test_invalid_token_is_served_as_guest(client):
    response = await client.post(
        "/api/v1/tags",
        json={"name": "Pool"},
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_duplicate_tag_is_a_conflict(client, auth_headers):
    headers = auth_headers(Role.EDITOR, "editor-1")
    await create_tag(client, headers)

    response = await client.post("/api/v1/tags", json={"name": "Pet Friendly"}, headers=headers)

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"]["code"] == "ALREADY_EXISTS"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"name": "a"},
        {"name": "Pool", "unexpected": True},
        {"color": "blue"},
    ],
)
async def test_malformed_body_is_a_bad_request(client, auth_headers, body):
    response = await client.post(
        "/api/v1/tags", json=body, headers=auth_headers(Role.EDITOR, "editor-1")
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_get_tag_by_id_and_slug(client, auth_headers):
    tag = await create_tag(client, auth_headers(Role.EDITOR, "editor-1"))

    by_id = await client.get(f"/api/v1/tags/{tag['id']}")
    by_slug = await client.get("/api/v1/tags/slug/pet-friendly")

    assert by_id.status_code == status.HTTP_200_OK
    assert by_id.json()["data"]["id"] == tag["id"]
    assert by_slug.json()["data"]["id"] == tag["id"]


@pytest.mark.asyncio
async def test_get_unknown_tag(client):
    response = await client.get("/api/v1/tags/missing")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"] == {"code": "NOT_FOUND", "message": "Tag not found"}


@pytest.mark.asyncio
async def test_list_and_search_tags(client, auth_headers):
    headers = auth_headers(Role.EDITOR, "editor-1")
    for name in ["Pool", "Pet Friendly", "Parking"]:
        await create_tag(client, headers, name=name)

    listed = await client.get("/api/v1/tags?page=1&page_size=2")
    searched = await client.post("/api/v1/tags/search", json={"name": "Pa"})

    assert listed.status_code == status.HTTP_200_OK
    page = listed.json()["data"]
    assert page["total"] == 3
    assert len(page["items"]) == 2
    assert page["has_next_page"] is True
    assert [t["name"] for t in searched.json()["data"]["items"]] == ["Parking"]


@pytest.mark.asyncio
async def test_search_rejects_unknown_params(client):
    response = await client.post("/api/v1/tags/search", json={"flavour": "sweet"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_count_tags(client, auth_headers):
    await create_tag(client, auth_headers(Role.EDITOR, "editor-1"))

    response = await client.get("/api/v1/tags/count")

    assert response.json() == {"data": {"count": 1}}


@pytest.mark.asyncio
async def test_update_tag(client, auth_headers):
    headers = auth_headers(Role.EDITOR, "editor-1")
    tag = await create_tag(client, headers)

    response = await client.patch(
        f"/api/v1/tags/{tag['id']}", json={"name": "Pets Welcome"}, headers=headers
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["slug"] == "pets-welcome"
    assert data["updated_by_id"] == "editor-1"


@pytest.mark.asyncio
async def test_soft_delete_and_restore(client, auth_headers):
    headers = auth_headers(Role.EDITOR, "editor-1")
    tag = await create_tag(client, headers)

    deleted = await client.delete(f"/api/v1/tags/{tag['id']}", headers=headers)
    hidden = await client.get(f"/api/v1/tags/{tag['id']}")
    restored = await client.post(f"/api/v1/tags/{tag['id']}/restore", headers=headers)
    visible = await client.get(f"/api/v1/tags/{tag['id']}")

    assert deleted.json() == {"data": {"count": 1}}
    assert hidden.status_code == status.HTTP_404_NOT_FOUND
    assert restored.json() == {"data": {"count": 1}}
    assert visible.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
async def test_hard_delete_requires_super_admin(client, auth_headers):
    tag = await create_tag(client, auth_headers(Role.EDITOR, "editor-1"))
    url = f"/api/v1/tags/{tag['id']}?force=true"

    denied = await client.delete(url, headers=auth_headers(Role.ADMIN, "admin-1"))
    allowed = await client.delete(url, headers=auth_headers(Role.SUPER_ADMIN, "root"))

    assert denied.status_code == status.HTTP_403_FORBIDDEN
    assert denied.json()["error"]["details"]["reason"] == "NOT_SUPER_ADMIN"
    assert allowed.json() == {"data": {"count": 1}}
    assert (await client.get(f"/api/v1/tags/{tag['id']}")).status_code == 404
