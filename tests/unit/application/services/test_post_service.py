"""Tests for PostService against an in-memory database."""

from datetime import datetime, timedelta, timezone

import pytest

from hospeda.application.services.post_service import PostService, check_news_expiry
from hospeda.domain.entities.enums import PostCategory
from hospeda.domain.entities.service_result import ServiceError, ServiceErrorCode


@pytest.fixture
def service(ctx, post_repository):
    return PostService(ctx, post_repository)


def post(**overrides):
    data = {
        "title": "Best Beaches",
        "category": "BEACH",
        "content": "A long enough body about the river beaches.",
    }
    data.update(overrides)
    return data


class TestNewsExpiry:
    """Tests for the news expiry rule."""

    def test_regular_posts_need_no_expiry(self):
        check_news_expiry(False, None)

    def test_news_without_expiry(self):
        with pytest.raises(ServiceError) as exc_info:
            check_news_expiry(True, None)
        assert exc_info.value.code == ServiceErrorCode.VALIDATION_ERROR

    def test_news_with_past_expiry(self):
        now = datetime(2026, 1, 10, tzinfo=timezone.utc)

        with pytest.raises(ServiceError):
            check_news_expiry(True, datetime(2026, 1, 9), now=now)

    def test_news_with_future_expiry(self):
        now = datetime(2026, 1, 10, tzinfo=timezone.utc)

        check_news_expiry(True, datetime(2026, 2, 1, tzinfo=timezone.utc), now=now)


@pytest.mark.asyncio
async def test_create_sets_author_and_slug(service, editor):
    created = (await service.create(editor, post())).unwrap()

    assert created.author_id == "editor-1"
    assert created.slug == "beach-best-beaches"
    assert created.is_news is False


@pytest.mark.asyncio
async def test_news_post_requires_future_expiry(service, editor):
    result = await service.create(editor, post(is_news=True))

    assert result.error.code == ServiceErrorCode.VALIDATION_ERROR
    assert result.error.message == "News posts require expires_at"

    expires_at = datetime.now(timezone.utc) + timedelta(days=7)
    assert (await service.create(editor, post(is_news=True, expires_at=expires_at))).is_ok


@pytest.mark.asyncio
async def test_title_is_unique_within_category(service, editor):
    await service.create(editor, post())

    duplicate = await service.create(editor, post())
    other_category = await service.create(editor, post(category="TIPS"))

    assert duplicate.error.code == ServiceErrorCode.ALREADY_EXISTS
    assert other_category.is_ok


@pytest.mark.asyncio
async def test_deleted_post_frees_its_title(service, editor):
    created = (await service.create(editor, post())).unwrap()
    await service.soft_delete(editor, created.id)

    again = (await service.create(editor, post())).unwrap()

    assert again.slug == "beach-best-beaches-2"


@pytest.mark.asyncio
async def test_update_to_news_requires_expiry(service, editor):
    created = (await service.create(editor, post())).unwrap()

    result = await service.update(editor, created.id, {"is_news": True})

    assert result.error.code == ServiceErrorCode.VALIDATION_ERROR


@pytest.mark.asyncio
async def test_update_title_clash(service, editor):
    await service.create(editor, post())
    other = (await service.create(editor, post(title="River Walks"))).unwrap()

    result = await service.update(editor, other.id, {"title": "Best Beaches"})

    assert result.error.code == ServiceErrorCode.ALREADY_EXISTS


@pytest.mark.asyncio
async def test_listing_requires_authentication(service, editor, guest, user):
    await service.create(editor, post())

    assert (await service.list(guest)).error.code == ServiceErrorCode.FORBIDDEN
    assert (await service.search(guest, {})).error.code == ServiceErrorCode.FORBIDDEN
    assert (await service.count(guest)).error.code == ServiceErrorCode.FORBIDDEN
    assert (await service.list(user)).unwrap().total == 1


@pytest.mark.asyncio
async def test_guest_can_read_a_public_post(service, editor, guest):
    created = (await service.create(editor, post())).unwrap()

    assert (await service.get_by_slug(guest, created.slug)).is_ok


@pytest.mark.asyncio
async def test_get_featured_and_by_category(service, editor, user):
    await service.create(editor, post(is_featured=True))
    await service.create(editor, post(title="Mate Guide", category="TRADITIONS"))

    featured = (await service.get_featured(user)).unwrap()
    traditions = (await service.get_by_category(user, PostCategory.TRADITIONS)).unwrap()

    assert [p.title for p in featured.items] == ["Best Beaches"]
    assert [p.title for p in traditions.items] == ["Mate Guide"]
