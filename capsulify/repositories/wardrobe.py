"""
Wardrobe and catalog queries.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import Integer, delete, insert, literal, select
from sqlalchemy.orm import Session

from capsulify.models import (
    ClothingItem,
    ClothingVariant,
    DefaultClothingVariant,
    UserClothingVariant,
)


# ========================================
# Wardrobe Initialisation
# ========================================

def clear_wardrobe(db: Session, user_id: int) -> int:
    result = db.execute(
        delete(UserClothingVariant).where(UserClothingVariant.user_id == user_id),
        execution_options={"synchronize_session": False},
    )
    return result.rowcount


def insert_default_wardrobe(db: Session, user_id: int, body_shape_id: int) -> int:
    """
    Copy the body shape's default variants into the user's wardrobe.

    Runs as a single INSERT ... SELECT so the set never leaves the database.

    Returns:
        Number of wardrobe entries created
    """
    defaults = (
        select(literal(user_id, Integer), DefaultClothingVariant.clothing_variant_id)
        .where(DefaultClothingVariant.body_shape_id == body_shape_id)
        .order_by(DefaultClothingVariant.id)
    )
    result = db.execute(
        insert(UserClothingVariant.__table__).from_select(
            ["user_id", "clothing_variant_id"], defaults
        )
    )
    return result.rowcount


def replace_wardrobe(db: Session, user_id: int, body_shape_id: int) -> int:
    """Reset a wardrobe to the body shape defaults. Returns the new entry count."""
    clear_wardrobe(db, user_id)
    return insert_default_wardrobe(db, user_id, body_shape_id)


# ========================================
# Wardrobe Reads / Swap
# ========================================

def get_wardrobe_rows(db: Session, user_id: int) -> List[Dict[str, Any]]:
    """
    Wardrobe entries joined to their variant and item, oldest entry first.

    Each row carries the entry id as ``id`` and the variant id as
    ``clothing_variant_id``.
    """
    stmt = (
        select(
            UserClothingVariant.id.label("id"),
            ClothingItem.category_id,
            ClothingItem.subcategory_id,
            ClothingItem.colour_type_id,
            ClothingVariant.name,
            ClothingVariant.top_sleeve_type_id,
            ClothingVariant.blouse_sleeve_type_id,
            ClothingVariant.neckline_id,
            ClothingVariant.dress_cut_id,
            ClothingVariant.bottom_cut_id,
            ClothingVariant.short_cut_id,
            ClothingVariant.skirt_cut_id,
            ClothingVariant.image_file_name,
            ClothingVariant.id.label("clothing_variant_id"),
        )
        .join(ClothingVariant, UserClothingVariant.clothing_variant_id == ClothingVariant.id)
        .join(ClothingItem, ClothingVariant.clothing_item_id == ClothingItem.id)
        .where(UserClothingVariant.user_id == user_id)
        .order_by(UserClothingVariant.id)
    )
    return [dict(row) for row in db.execute(stmt).mappings()]


def get_wardrobe_variant_ids(db: Session, user_id: int) -> List[int]:
    return list(db.scalars(
        select(UserClothingVariant.clothing_variant_id)
        .where(UserClothingVariant.user_id == user_id)
        .order_by(UserClothingVariant.id)
    ))


def swap_variant(
    db: Session,
    user_id: int,
    new_variant_id: int,
    previous_variant_id: int,
) -> Optional[UserClothingVariant]:
    """
    Point one wardrobe entry at a different variant.

    Only the oldest entry matching (user, previous variant) is changed.

    Returns:
        The updated entry, or None if the user has no such entry
    """
    entry = db.scalars(
        select(UserClothingVariant)
        .where(
            UserClothingVariant.user_id == user_id,
            UserClothingVariant.clothing_variant_id == previous_variant_id,
        )
        .order_by(UserClothingVariant.id)
        .limit(1)
    ).first()
    if entry is None:
        return None

    entry.clothing_variant_id = new_variant_id
    db.flush()
    return entry


# ========================================
# Catalog Search
# ========================================

# colour_type_id lives on the item, every other filter on the variant
_FILTER_COLUMNS = {
    "top_sleeve_type_id": ClothingVariant.top_sleeve_type_id,
    "blouse_sleeve_type_id": ClothingVariant.blouse_sleeve_type_id,
    "neckline_id": ClothingVariant.neckline_id,
    "dress_cut_id": ClothingVariant.dress_cut_id,
    "bottom_cut_id": ClothingVariant.bottom_cut_id,
    "short_cut_id": ClothingVariant.short_cut_id,
    "skirt_cut_id": ClothingVariant.skirt_cut_id,
    "colour_type_id": ClothingItem.colour_type_id,
}


def find_variant(db: Session, filters: Dict[str, int]) -> Optional[Dict[str, Any]]:
    """
    First catalog variant (lowest id) matching every given filter.

    Args:
        filters: Column name -> required value. Missing names are unconstrained.

    Returns:
        {"id", "image_file_name", "name"} or None
    """
    stmt = (
        select(ClothingVariant.id, ClothingVariant.image_file_name, ClothingVariant.name)
        .join(ClothingItem, ClothingVariant.clothing_item_id == ClothingItem.id)
        .order_by(ClothingVariant.id)
        .limit(1)
    )
    for name, value in filters.items():
        stmt = stmt.where(_FILTER_COLUMNS[name] == value)
    row = db.execute(stmt).mappings().first()
    return dict(row) if row is not None else None
