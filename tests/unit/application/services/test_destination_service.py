"""Tests for DestinationService against an in-memory database."""

import pytest

from hospeda.application.services.destination_service import DestinationService
from hospeda.domain.entities.service_result import ServiceErrorCode


@pytest.fixture
def service(ctx, destination_repository, accommodation_repository):
    return DestinationService(ctx, destination_repository, accommodation_repository)


@pytest.mark.asyncio
async def test_create_uppercases_country_and_slugs_name(service, admin):
    destination = (
        await service.create(admin, {"name": "Concepción del Uruguay", "country": "ar"})
    ).unwrap()

    assert destination.country == "AR"
    assert destination.slug == "concepcion-del-uruguay"
    assert destination.visibility == "PUBLIC"


@pytest.mark.asyncio
async def test_editor_cannot_create(service, editor):
    result = await service.create(editor, {"name": "Colón"})

    assert result.error.code == ServiceErrorCode.FORBIDDEN
    assert result.error.message == "Permission denied to create destination"


@pytest.mark.asyncio
async def test_update_keeps_slug_unique(service, admin):
    await service.create(admin, {"name": "Federación"})
    other = (await service.create(admin, {"name": "Chajarí"})).unwrap()

    updated = (await service.update(admin, other.id, {"name": "Federación", "country": "uy"})).unwrap()

    assert updated.slug == "federacion-2"
    assert updated.country == "UY"


@pytest.mark.asyncio
async def test_search_by_country_is_case_insensitive(service, admin, guest):
    await service.create(admin, {"name": "Colón", "country": "AR"})
    await service.create(admin, {"name": "Punta del Este", "country": "UY"})

    page = (await service.search(guest, {"country": "uy"})).unwrap()

    assert [d.name for d in page.items] == ["Punta del Este"]


@pytest.mark.asyncio
async def test_get_by_slug(service, admin, guest):
    await service.create(admin, {"name": "Gualeguaychú"})

    destination = (await service.get_by_slug(guest, "gualeguaychu")).unwrap()

    assert destination.name == "Gualeguaychú"


@pytest.mark.asyncio
async def test_get_accommodations_filters_by_visibility(
    service, admin, user, accommodation_repository
):
    destination = (await service.create(admin, {"name": "Colón"})).unwrap()
    for name, visibility in (("Open House", "PUBLIC"), ("Hidden House", "PRIVATE")):
        await accommodation_repository.create(
            {
                "name": name,
                "slug": name.lower().replace(" ", "-"),
                "type": "HOUSE",
                "destination_id": destination.id,
                "visibility": visibility,
            }
        )

    visible = (await service.get_accommodations(user, destination.id)).unwrap()
    everything = (await service.get_accommodations(admin, destination.id)).unwrap()

    assert [a.name for a in visible] == ["Open House"]
    assert len(everything) == 2


@pytest.mark.asyncio
async def test_get_accommodations_of_missing_destination(service, user):
    result = await service.get_accommodations(user, "missing")

    assert result.error.code == ServiceErrorCode.NOT_FOUND
    assert result.error.message == "Destination not found"


@pytest.mark.asyncio
async def test_soft_delete_and_restore(service, admin, guest):
    destination = (await service.create(admin, {"name": "Colón"})).unwrap()

    assert (await service.soft_delete(admin, destination.id)).unwrap().count == 1
    assert (await service.get_by_id(guest, destination.id)).error.code == ServiceErrorCode.NOT_FOUND
    assert (await service.soft_delete(admin, destination.id)).unwrap().count == 0

    assert (await service.restore(admin, destination.id)).unwrap().count == 1
    assert (await service.get_by_id(guest, destination.id)).is_ok


@pytest.mark.asyncio
async def test_count(service, admin, guest):
    await service.create(admin, {"name": "Colón", "is_featured": True})
    await service.create(admin, {"name": "Federación"})

    assert (await service.count(guest)).unwrap().count == 2
    assert (await service.count(guest, {"is_featured": True})).unwrap().count == 1
