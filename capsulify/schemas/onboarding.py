"""Input payloads for onboarding and catalog search."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OnboardingData(BaseModel):
    """
    Answers collected by the onboarding flow.

    Example:
        OnboardingData(
            age_group_id=2,
            body_shape_id=2,
            height_id=1,
            personal_style_id=3,
            location="Lisbon",
            goal="Fewer, better clothes",
            frustration="Nothing fits",
            favorite_parts=[4, 6],
            least_favorite_parts=[2],
            monthly_occasions={"work": 20, "date_night": 2},
        )
    """

    model_config = ConfigDict(extra="ignore")

    age_group_id: int
    body_shape_id: int
    height_id: int
    personal_style_id: int
    location: Optional[str] = None
    goal: Optional[str] = None
    frustration: Optional[str] = None
    favorite_parts: List[int] = Field(default_factory=list)
    least_favorite_parts: List[int] = Field(default_factory=list)
    monthly_occasions: Dict[str, int] = Field(default_factory=dict)

    def positive_occasions(self) -> Dict[str, int]:
        """Occasions the user actually selected (count > 0)."""
        return {key: count for key, count in self.monthly_occasions.items() if count > 0}


class ClothingVariantFilter(BaseModel):
    """
    Catalog search criteria. A field left as None does not constrain the
    search; set fields must match exactly.
    """

    model_config = ConfigDict(extra="ignore")

    top_sleeve_type_id: Optional[int] = None
    blouse_sleeve_type_id: Optional[int] = None
    neckline_id: Optional[int] = None
    dress_cut_id: Optional[int] = None
    bottom_cut_id: Optional[int] = None
    short_cut_id: Optional[int] = None
    skirt_cut_id: Optional[int] = None
    colour_type_id: Optional[int] = None

    def active_filters(self) -> Dict[str, int]:
        return {name: value for name, value in self.model_dump().items() if value is not None}
