"""Slug generator service.

Generates URL-friendly slugs for accommodations, destinations, events,
posts and tags. Handles accents, ampersands and repeated separators.
"""

import re
import unicodedata
from collections.abc import Awaitable, Callable


class SlugGenerator:
    """Generate URL-friendly slugs.

    Slugs are lowercase ASCII, alphanumerics separated by single hyphens,
    with no leading or trailing hyphen.
    """

    MAX_LENGTH = 120

    @classmethod
    def slugify(cls, text: str) -> str:
        """Convert text to a slug.

        Args:
            text: The text to convert.

        Returns:
            URL-friendly slug (may be empty if the text has no usable characters).

        Examples:
            >>> SlugGenerator.slugify("Café & Bar")
            'cafe-and-bar'
            >>> SlugGenerator.slugify("  Hotel   Paraná  ")
            'hotel-parana'
        """
        text = text.replace("&", " and ")
        # Strip accents
        normalized = unicodedata.normalize("NFKD", text)
        ascii_text = normalized.encode("ascii", "ignore").decode("ascii")

        slug = ascii_text.lower()
        slug = re.sub(r"[^a-z0-9]+", "-", slug)
        slug = re.sub(r"-+", "-", slug).strip("-")

        if len(slug) > cls.MAX_LENGTH:
            slug = slug[: cls.MAX_LENGTH].rstrip("-")
        return slug

    @classmethod
    def generate(cls, entity_type: str, name: str) -> str:
        """Generate a slug of the form ``{type}-{name}``.

        Empty parts are skipped, so a missing type yields a slug of the name alone.

        Args:
            entity_type: Type or category prefix (e.g. ``hotel``).
            name: Display name.

        Returns:
            The slug.

        Raises:
            ValueError: If both parts are empty, or nothing usable remains.
        """
        parts = [part.strip() for part in (entity_type or "", name or "") if part and part.strip()]
        if not parts:
            raise ValueError("Cannot generate a slug: type and name are both empty")
        slug = cls.slugify("-".join(parts))
        if not slug:
            raise ValueError(f"Cannot generate a slug from {'-'.join(parts)!r}")
        return slug

    @classmethod
    async def generate_unique(
        cls,
        base: str,
        exists: Callable[[str], Awaitable[bool]],
    ) -> str:
        """Return ``base`` or the first free ``base-N`` variant.

        Args:
            base: Slug to start from.
            exists: Async predicate telling whether a slug is taken.

        Returns:
            A slug for which ``exists`` returned False.
        """
        candidate = base
        suffix = 2
        while await exists(candidate):
            candidate = f"{base}-{suffix}"
            suffix += 1
        return candidate


def generate_slug(entity_type: str, name: str) -> str:
    """Shortcut for ``SlugGenerator.generate``."""
    return SlugGenerator.generate(entity_type, name)
