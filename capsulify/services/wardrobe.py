"""
Wardrobe service.

Reads a user's wardrobe grouped by clothing category, searches the catalog
for a variant, and swaps one wardrobe entry for another variant.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from sqlalchemy.orm import sessionmaker

from capsulify.core.exceptions import UserNotFoundError
from capsulify.database.session import persistence_scope
from capsulify.repositories import users as user_repo
from capsulify.repositories import wardrobe as wardrobe_repo
from capsulify.schemas import ClothingVariantFilter

logger = logging.getLogger(__name__)


def group_by_category(rows: Iterable[Dict[str, Any]]) -> Dict[int, List[Dict[str, Any]]]:
    """
    Bucket wardrobe rows by ``category_id``.

    Categories appear in the order they are first seen; rows keep their
    input order inside a category.
    """
    grouped: Dict[int, List[Dict[str, Any]]] = {}
    for row in rows:
        grouped.setdefault(row["category_id"], []).append(row)
    return grouped


class WardrobeService:
    """
    Service for user wardrobes.

    Example:
        service = get_wardrobe_service()
        wardrobe = service.get_user_wardrobe("user_2abc")
        for category_id, entries in wardrobe.items():
            print(category_id, [entry["name"] for entry in entries])
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory

    def create_user_wardrobe(self, user_id: int, body_shape_id: int) -> int:
        """
        Reset a user's wardrobe to the defaults for a body shape.

        Returns:
            Number of wardrobe entries created
        """
        with persistence_scope("create user wardrobe", self.session_factory) as db:
            created = wardrobe_repo.replace_wardrobe(db, user_id, body_shape_id)
        logger.info("Wardrobe created for user %s with %d item(s)", user_id, created)
        return created

    def get_user_wardrobe(self, clerk_id: str) -> Dict[int, List[Dict[str, Any]]]:
        """
        Get a user's wardrobe grouped by category.

        Args:
            clerk_id: Identity provider's user id

        Returns:
            category_id -> wardrobe entries ordered by entry id. Each entry
            has ``id`` (entry id), ``clothing_variant_id``, ``name``,
            ``image_file_name``, the item's category/subcategory/colour type
            ids and the variant's cut/sleeve/neckline ids. An empty dict when
            the wardrobe is empty.

        Raises:
            UserNotFoundError: No user has this clerk id
            OperationFailedError: Storage failure ("Failed to get user wardrobe")
        """
        with persistence_scope("get user wardrobe", self.session_factory) as db:
            user_id = user_repo.get_user_id_by_clerk_id(db, clerk_id)
            if user_id is None:
                raise UserNotFoundError(clerk_id)
            rows = wardrobe_repo.get_wardrobe_rows(db, user_id)

        wardrobe = group_by_category(rows)
        logger.debug("Wardrobe for user %s: %d item(s) in %d categories", clerk_id, len(rows), len(wardrobe))
        return wardrobe

    def find_clothing_variant(
        self,
        options: Union[ClothingVariantFilter, Dict[str, Any], None] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Find the first catalog variant matching the given attributes.

        Args:
            options: Filter fields; any field left out or None matches
                everything

        Returns:
            {"id", "image_file_name", "name"} of the lowest-id match, or None

        Raises:
            OperationFailedError: Malformed filter or storage failure
                ("Failed to get clothing variant ID")

        Example:
            variant = service.find_clothing_variant({"neckline_id": 2, "colour_type_id": 1})
        """
        with persistence_scope("get clothing variant ID", self.session_factory) as db:
            if not isinstance(options, ClothingVariantFilter):
                options = ClothingVariantFilter.model_validate(options or {})
            variant = wardrobe_repo.find_variant(db, options.active_filters())
        logger.debug("Clothing variant lookup %s -> %s", options.active_filters(), variant)
        return variant

    def swap_wardrobe_variant(
        self,
        user_id: int,
        new_variant_id: int,
        previous_variant_id: int,
    ) -> Optional[Dict[str, Any]]:
        """
        Replace one variant in a user's wardrobe with another.

        Returns:
            The updated entry as a dict, or None when the user does not have
            ``previous_variant_id`` (nothing to swap, not an error)
        """
        with persistence_scope("save clothing variant ID", self.session_factory) as db:
            entry = wardrobe_repo.swap_variant(db, user_id, new_variant_id, previous_variant_id)
            result = entry.to_dict() if entry is not None else None

        if result is None:
            logger.info(
                "User %s has no variant %s in wardrobe; nothing swapped",
                user_id, previous_variant_id,
            )
        else:
            logger.info(
                "Wardrobe entry %s of user %s swapped %s -> %s",
                result["id"], user_id, previous_variant_id, new_variant_id,
            )
        return result


def get_wardrobe_service(session_factory: Optional[sessionmaker] = None) -> WardrobeService:
    """Factory function for creating WardrobeService."""
    return WardrobeService(session_factory)
