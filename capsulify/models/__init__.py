"""
Database models package.

Contains all SQLAlchemy ORM models.
"""

from capsulify.models.base import Base
from capsulify.models.reference import (
    AgeGroup,
    BodyPart,
    BodyShape,
    Height,
    MonthlyOccasion,
    PersonalStyle,
)
from capsulify.models.user import User, UserFavPart, UserLeastFavPart, UserMonthlyOccasion
from capsulify.models.clothing import (
    ClothingItem,
    ClothingVariant,
    DefaultClothingVariant,
    UserClothingVariant,
)

__all__ = [
    "Base",
    "AgeGroup",
    "BodyPart",
    "BodyShape",
    "Height",
    "MonthlyOccasion",
    "PersonalStyle",
    "User",
    "UserFavPart",
    "UserLeastFavPart",
    "UserMonthlyOccasion",
    "ClothingItem",
    "ClothingVariant",
    "DefaultClothingVariant",
    "UserClothingVariant",
]
