"""Pydantic schemas for post endpoints."""

from datetime import datetime

from pydantic import Field

from hospeda.domain.entities.enums import PostCategory
from hospeda.domain.entities.visibility import LifecycleState, Visibility
from hospeda.infrastructure.api.schemas.common_schemas import (
    AuditResponse,
    InputSchema,
    SearchSchema,
)


class PostCreate(InputSchema):
    """Request body for creating a post.

    News posts (``is_news``) must carry an ``expires_at`` in the future.
    """

    title: str = Field(..., min_length=3, max_length=200)
    category: PostCategory
    summary: str | None = Field(default=None, max_length=500)
    content: str = Field(..., min_length=10)
    is_news: bool = False
    expires_at: datetime | None = None
    is_featured: bool = False
    visibility: Visibility | None = None
    lifecycle_state: LifecycleState | None = None


class PostUpdate(InputSchema):
    """Request body for updating a post. All fields are optional."""

    title: str | None = Field(default=None, min_length=3, max_length=200)
    category: PostCategory | None = None
    summary: str | None = Field(default=None, max_length=500)
    content: str | None = Field(default=None, min_length=10)
    is_news: bool | None = None
    expires_at: datetime | None = None
    is_featured: bool | None = None
    lifecycle_state: LifecycleState | None = None


class PostSearch(SearchSchema):
    """Search params for posts."""

    title: str | None = None
    category: PostCategory | None = None
    author_id: str | None = None
    is_featured: bool | None = None
    is_news: bool | None = None


class PostResponse(AuditResponse):
    """Post as returned by the API."""

    author_id: str | None = None
    title: str
    slug: str
    category: str
    summary: str | None = None
    content: str
    is_news: bool
    expires_at: datetime | None = None
    is_featured: bool
    likes: int
