"""Tests for the generic SQLAlchemy repository."""

from datetime import datetime, timedelta, timezone

import pytest

from hospeda.domain.entities.pagination import PaginationParams


async def add_tags(tag_repository, *names, **extra):
    created = []
    for name in names:
        created.append(
            await tag_repository.create({"name": name, "slug": name.lower(), **extra})
        )
    return created


@pytest.mark.asyncio
async def test_create_applies_defaults(tag_repository):
    tag = await tag_repository.create({"name": "Pool", "slug": "pool"})

    assert len(tag.id) == 36
    assert tag.visibility == "PUBLIC"
    assert tag.lifecycle_state == "ACTIVE"
    assert tag.created_at is not None
    assert tag.deleted_at is None


@pytest.mark.asyncio
async def test_find_by_id_and_find_one(tag_repository):
    pool, _ = await add_tags(tag_repository, "Pool", "Spa")

    assert (await tag_repository.find_by_id(pool.id)).name == "Pool"
    assert await tag_repository.find_by_id("missing") is None
    assert (await tag_repository.find_one({"slug": "spa"})).name == "Spa"
    assert await tag_repository.find_one({"slug": "sauna"}) is None


@pytest.mark.asyncio
async def test_filter_operators(accommodation_repository):
    for name, price in (("Budget Inn", 40.0), ("Mid Hotel", 100.0), ("Grand Palace", 400.0)):
        await accommodation_repository.create(
            {"name": name, "slug": name.lower().replace(" ", "-"), "type": "HOTEL", "price": price}
        )

    async def names(filters):
        items, _ = await accommodation_repository.find_all(filters, order_by="price", descending=False)
        return [a.name for a in items]

    assert await names({"name__contains": "HOTEL"}) == ["Mid Hotel"]
    assert await names({"price__gte": 100}) == ["Mid Hotel", "Grand Palace"]
    assert await names({"price__lte": 100}) == ["Budget Inn", "Mid Hotel"]
    assert await names({"price__gt": 100}) == ["Grand Palace"]
    assert await names({"price__lt": 100}) == ["Budget Inn"]
    assert await names({"slug__ne": "mid-hotel"}) == ["Budget Inn", "Grand Palace"]
    assert await names({"slug": ["budget-inn", "grand-palace"]}) == ["Budget Inn", "Grand Palace"]
    assert await names({"price": None, "type": "HOTEL"}) == ["Budget Inn", "Mid Hotel", "Grand Palace"]


@pytest.mark.asyncio
async def test_unknown_filter_field_or_operator(tag_repository):
    with pytest.raises(ValueError, match="Unknown filter field"):
        await tag_repository.find_all({"flavour": "x"})

    with pytest.raises(ValueError, match="Unknown filter operator"):
        await tag_repository.find_all({"name__startswith": "x"})


@pytest.mark.asyncio
async def test_datetime_filters(event_repository):
    now = datetime.now(timezone.utc)
    for name, days in (("Past", -2), ("Soon", 2), ("Later", 20)):
        await event_repository.create(
            {
                "name": name,
                "slug": name.lower(),
                "category": "MUSIC",
                "starts_at": now + timedelta(days=days),
            }
        )

    items, total = await event_repository.find_all(
        {"starts_at__gte": now, "starts_at__lte": now + timedelta(days=7)}
    )

    assert [e.name for e in items] == ["Soon"]
    assert total == 1


@pytest.mark.asyncio
async def test_pagination_reports_total(tag_repository):
    await add_tags(tag_repository, "A1", "B2", "C3", "D4", "E5")

    items, total = await tag_repository.find_all(
        pagination=PaginationParams(page=2, page_size=2), order_by="name", descending=False
    )

    assert [t.name for t in items] == ["C3", "D4"]
    assert total == 5


@pytest.mark.asyncio
async def test_update(tag_repository):
    (pool,) = await add_tags(tag_repository, "Pool")

    updated = await tag_repository.update(pool.id, {"color": "blue", "updated_by_id": "editor-1"})

    assert updated.color == "blue"
    assert updated.updated_by_id == "editor-1"
    assert await tag_repository.update("missing", {"color": "red"}) is None


@pytest.mark.asyncio
async def test_update_rejects_unknown_column(tag_repository):
    (pool,) = await add_tags(tag_repository, "Pool")

    with pytest.raises(ValueError):
        await tag_repository.update(pool.id, {"flavour": "x"})


@pytest.mark.asyncio
async def test_soft_delete_and_restore(tag_repository):
    pool, spa = await add_tags(tag_repository, "Pool", "Spa")

    assert await tag_repository.soft_delete(pool.id, "editor-1") == 1
    assert await tag_repository.soft_delete(pool.id, "editor-1") == 0

    deleted = await tag_repository.find_by_id(pool.id)
    assert deleted.deleted_at is not None
    assert deleted.deleted_by_id == "editor-1"
    assert await tag_repository.find_by_id(pool.id, include_deleted=False) is None
    assert await tag_repository.count() == 1
    assert await tag_repository.count(include_deleted=True) == 2
    assert await tag_repository.exists({"slug": "pool"}) is True
    assert await tag_repository.exists({"slug": "pool"}, include_deleted=False) is False

    assert await tag_repository.restore(pool.id, "admin-1") == 1
    assert await tag_repository.restore(pool.id, "admin-1") == 0
    restored = await tag_repository.find_by_id(pool.id)
    assert restored.deleted_at is None
    assert restored.deleted_by_id is None
    assert restored.updated_by_id == "admin-1"
    assert await tag_repository.count() == 2


@pytest.mark.asyncio
async def test_hard_delete(tag_repository):
    (pool,) = await add_tags(tag_repository, "Pool")

    assert await tag_repository.hard_delete(pool.id) == 1
    assert await tag_repository.hard_delete(pool.id) == 0
    assert await tag_repository.find_by_id(pool.id) is None
