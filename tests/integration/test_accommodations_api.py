"""Integration tests for accommodation, destination and review endpoints."""

import pytest
from fastapi import status

from hospeda.domain.entities.role import Role

RATING = {
    "cleanliness": 4,
    "hospitality": 4,
    "services": 4,
    "accuracy": 4,
    "communication": 4,
    "location": 4,
}


@pytest.fixture
def host_headers(auth_headers):
    return auth_headers(Role.HOST, "host-1")


@pytest.fixture
def admin_headers(auth_headers):
    return auth_headers(Role.ADMIN, "admin-1")


async def create_destination(client, headers):
    response = await client.post(
        "/api/v1/destinations",
        json={"name": "Colon", "country": "ar"},
        headers=headers,
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["data"]


async def create_accommodation(client, headers, **extra):
    body = {"name": "Costa Azul", "type": "HOTEL", "price": 120.5, **extra}
    response = await client.post("/api/v1/accommodations", json=body, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["data"]


async def publish(client, headers, accommodation_id):
    response = await client.patch(
        f"/api/v1/accommodations/{accommodation_id}/visibility",
        json={"visibility": "PUBLIC"},
        headers=headers,
    )
    assert response.status_code == status.HTTP_200_OK, response.text
    return response.json()["data"]


@pytest.mark.asyncio
async def test_host_creates_private_listing(client, host_headers):
    created = await create_accommodation(client, host_headers, owner_id="someone-else")

    assert created["owner_id"] == "host-1"
    assert created["slug"] == "hotel-costa-azul"
    assert created["visibility"] == "PRIVATE"
    assert created["reviews_count"] == 0


@pytest.mark.asyncio
async def test_private_listing_is_hidden_from_guests(client, host_headers):
    created = await create_accommodation(client, host_headers)

    as_guest = await client.get(f"/api/v1/accommodations/{created['id']}")
    as_owner = await client.get(f"/api/v1/accommodations/{created['id']}", headers=host_headers)

    assert as_guest.status_code == status.HTTP_403_FORBIDDEN
    assert as_guest.json()["error"]["details"]["reason"] == "PRIVATE"
    assert as_owner.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
async def test_published_listing_is_public(client, host_headers):
    created = await create_accommodation(client, host_headers)

    published = await publish(client, host_headers, created["id"])
    by_slug = await client.get("/api/v1/accommodations/slug/hotel-costa-azul")

    assert published["visibility"] == "PUBLIC"
    assert by_slug.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
async def test_user_cannot_publish(client, host_headers, auth_headers):
    created = await create_accommodation(client, host_headers)

    response = await client.patch(
        f"/api/v1/accommodations/{created['id']}/visibility",
        json={"visibility": "PUBLIC"},
        headers=auth_headers(Role.USER, "user-1"),
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_other_host_cannot_update(client, host_headers, auth_headers):
    created = await create_accommodation(client, host_headers)

    response = await client.patch(
        f"/api/v1/accommodations/{created['id']}",
        json={"price": 1.0},
        headers=auth_headers(Role.HOST, "host-2"),
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["error"]["details"]["reason"] == "DENIED"


@pytest.mark.asyncio
async def test_owner_updates_listing(client, host_headers):
    created = await create_accommodation(client, host_headers)

    response = await client.patch(
        f"/api/v1/accommodations/{created['id']}",
        json={"name": "Costa Azul Suites", "price": 150},
        headers=host_headers,
    )

    data = response.json()["data"]
    assert data["slug"] == "hotel-costa-azul-suites"
    assert data["price"] == 150


@pytest.mark.asyncio
async def test_destination_tracks_accommodations(client, host_headers, admin_headers):
    destination = await create_destination(client, admin_headers)
    created = await create_accommodation(client, host_headers, destination_id=destination["id"])
    await publish(client, host_headers, created["id"])

    refreshed = await client.get(f"/api/v1/destinations/{destination['id']}")
    listings = await client.get(f"/api/v1/destinations/{destination['id']}/accommodations")
    by_destination = await client.get(f"/api/v1/accommodations/destination/{destination['id']}")

    assert destination["country"] == "AR"
    assert refreshed.json()["data"]["accommodations_count"] == 1
    assert [a["id"] for a in listings.json()["data"]] == [created["id"]]
    assert by_destination.json()["data"]["total"] == 1


@pytest.mark.asyncio
async def test_unknown_destination_listings(client):
    response = await client.get("/api/v1/destinations/missing/accommodations")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"]["message"] == "Destination not found"


@pytest.mark.asyncio
async def test_review_updates_rating(client, host_headers, auth_headers):
    created = await create_accommodation(client, host_headers)
    await publish(client, host_headers, created["id"])

    review = await client.post(
        "/api/v1/accommodation-reviews",
        json={"accommodation_id": created["id"], "title": "Lovely", "rating": RATING},
        headers=auth_headers(Role.USER, "user-1"),
    )
    summary = await client.get(f"/api/v1/accommodations/{created['id']}/summary")
    reviews = await client.get(f"/api/v1/accommodation-reviews/parent/{created['id']}")
    top_rated = await client.get("/api/v1/accommodations/top-rated?limit=5")

    assert review.status_code == status.HTTP_201_CREATED, review.text
    assert summary.json()["data"]["reviews_count"] == 1
    assert summary.json()["data"]["average_rating"] == 4.0
    assert reviews.json()["data"]["total"] == 1
    assert top_rated.json()["data"][0]["id"] == created["id"]


@pytest.mark.asyncio
async def test_guest_cannot_review(client, host_headers):
    created = await create_accommodation(client, host_headers)

    response = await client.post(
        "/api/v1/accommodation-reviews",
        json={"accommodation_id": created["id"], "rating": RATING},
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_out_of_range_score_is_rejected(client, host_headers, auth_headers):
    created = await create_accommodation(client, host_headers)

    response = await client.post(
        "/api/v1/accommodation-reviews",
        json={"accommodation_id": created["id"], "rating": {**RATING, "location": 6}},
        headers=auth_headers(Role.USER, "user-1"),
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
