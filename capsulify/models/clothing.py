"""
Clothing catalog and wardrobe models.

Catalog (read-only for this service):
- ClothingItem: a garment type in a category/subcategory/colour type
- ClothingVariant: a concrete cut of an item, with its image
- DefaultClothingVariant: the starter wardrobe for each body shape

Wardrobe:
- UserClothingVariant: "this variant is in this user's wardrobe"
"""

from typing import Optional
from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from capsulify.models.base import Base, SerializationMixin


class ClothingItem(SerializationMixin, Base):
    __tablename__ = "clothing_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    subcategory_id: Mapped[Optional[int]] = mapped_column(Integer)
    colour_type_id: Mapped[Optional[int]] = mapped_column(Integer)

    def __repr__(self) -> str:
        return f"<ClothingItem(id={self.id}, name='{self.name}', category_id={self.category_id})>"


class ClothingVariant(SerializationMixin, Base):
    """
    A specific cut of a clothing item.

    Only the attribute columns relevant to the item's category are set;
    the rest stay NULL (a skirt has a skirt_cut_id but no neckline_id).
    """

    __tablename__ = "clothing_variants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    clothing_item_id: Mapped[int] = mapped_column(ForeignKey("clothing_items.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    image_file_name: Mapped[Optional[str]] = mapped_column(String(255))

    top_sleeve_type_id: Mapped[Optional[int]] = mapped_column(Integer)
    blouse_sleeve_type_id: Mapped[Optional[int]] = mapped_column(Integer)
    neckline_id: Mapped[Optional[int]] = mapped_column(Integer)
    dress_cut_id: Mapped[Optional[int]] = mapped_column(Integer)
    bottom_cut_id: Mapped[Optional[int]] = mapped_column(Integer)
    short_cut_id: Mapped[Optional[int]] = mapped_column(Integer)
    skirt_cut_id: Mapped[Optional[int]] = mapped_column(Integer)

    def __repr__(self) -> str:
        return f"<ClothingVariant(id={self.id}, name='{self.name}')>"


class DefaultClothingVariant(SerializationMixin, Base):
    """Starter wardrobe membership: variant X is a default for body shape Y."""

    __tablename__ = "default_clothing_variants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    body_shape_id: Mapped[int] = mapped_column(ForeignKey("body_shapes.id"), nullable=False, index=True)
    clothing_variant_id: Mapped[int] = mapped_column(ForeignKey("clothing_variants.id"), nullable=False)

    __table_args__ = (
        UniqueConstraint("body_shape_id", "clothing_variant_id", name="uq_default_variant_per_shape"),
    )


class UserClothingVariant(SerializationMixin, Base):
    """A wardrobe entry. ``id`` preserves insertion order within a wardrobe."""

    __tablename__ = "user_clothing_variants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    clothing_variant_id: Mapped[int] = mapped_column(ForeignKey("clothing_variants.id"), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<UserClothingVariant(id={self.id}, user_id={self.user_id}, "
            f"clothing_variant_id={self.clothing_variant_id})>"
        )
