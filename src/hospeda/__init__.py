"""Hospeda - permission-aware CRUD API for tourism listings.

Accommodations, destinations, events, posts, tags, reviews, promotions,
payments and users, each managed through a service that checks the
caller's role, permissions and ownership before touching the database.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
