"""
Application-wide constants.

Static reference tables mirrored from the database. The body shape map and
the monthly occasion list are used for in-process resolution (name -> id,
key -> id) and are checked against storage by
``capsulify.services.reference_data.ReferenceDataService.verify``.

The remaining tables are only used to seed a fresh database.
"""

from enum import Enum
from typing import Dict, List, NamedTuple, Optional


# ========================================
# Body Shapes
# ========================================

class BodyShape(str, Enum):
    """
    Body shape names as stored in ``body_shapes.name``.

    Usage:
        shape = BodyShape.PEAR
        print(shape == "Pear")  # True
    """

    HOURGLASS = "Hourglass"
    PEAR = "Pear"
    APPLE = "Apple"
    RECTANGLE = "Rectangle"
    INVERTED_TRIANGLE = "Inverted Triangle"


BODY_SHAPES: Dict[int, str] = {
    1: BodyShape.HOURGLASS.value,
    2: BodyShape.PEAR.value,
    3: BodyShape.APPLE.value,
    4: BodyShape.RECTANGLE.value,
    5: BodyShape.INVERTED_TRIANGLE.value,
}


def get_body_shape_id(name: str) -> Optional[int]:
    """Return the id for a body shape name, or None if unknown."""
    for shape_id, shape_name in BODY_SHAPES.items():
        if shape_name == name:
            return shape_id
    return None


# ========================================
# Monthly Occasions
# ========================================

class OccasionDescriptor(NamedTuple):
    """A row of ``monthly_occasions``: the payload key and its table id."""

    key: str
    id: int
    name: str


MONTHLY_OCCASIONS: List[OccasionDescriptor] = [
    OccasionDescriptor(key="work", id=1, name="Work"),
    OccasionDescriptor(key="casual", id=2, name="Casual Day"),
    OccasionDescriptor(key="date_night", id=3, name="Date Night"),
    OccasionDescriptor(key="formal_event", id=4, name="Formal Event"),
    OccasionDescriptor(key="party", id=5, name="Party"),
    OccasionDescriptor(key="vacation", id=6, name="Vacation"),
    OccasionDescriptor(key="active", id=7, name="Active / Sport"),
]


def get_occasion_id(key: str) -> Optional[int]:
    """Return the id for an occasion key, or None if unknown."""
    for occasion in MONTHLY_OCCASIONS:
        if occasion.key == key:
            return occasion.id
    return None


# ========================================
# Seed-only Reference Tables
# ========================================

AGE_GROUPS: Dict[int, str] = {
    1: "18-24",
    2: "25-34",
    3: "35-44",
    4: "45-54",
    5: "55+",
}

HEIGHTS: Dict[int, str] = {
    1: "Petite",
    2: "Average",
    3: "Tall",
}

PERSONAL_STYLES: Dict[int, str] = {
    1: "Classic",
    2: "Romantic",
    3: "Natural",
    4: "Dramatic",
    5: "Creative",
}

BODY_PARTS: Dict[int, str] = {
    1: "Shoulders",
    2: "Arms",
    3: "Bust",
    4: "Waist",
    5: "Hips",
    6: "Legs",
    7: "Stomach",
}
