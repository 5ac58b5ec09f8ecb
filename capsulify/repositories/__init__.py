"""
Data access layer (Repository pattern).

Repositories handle all database queries,
isolating business logic from SQL. Functions take an open Session and never
commit; the calling service owns the transaction.
"""

from capsulify.repositories import preferences, reference, users, wardrobe

__all__ = [
    "preferences",
    "reference",
    "users",
    "wardrobe",
]
