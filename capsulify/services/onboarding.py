"""
Onboarding service.

Persists the answers from the onboarding flow in a single transaction:

1. Update the user's reference ids and free-text answers, set onboarded
   (the UPDATE's WHERE clause is the user lookup)
2. Replace favourite and least favourite body parts
3. Replace monthly occasions (positive counts only)
4. Replace the wardrobe with the body shape's defaults

Either every step lands or none does.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from sqlalchemy.orm import sessionmaker

from capsulify.core.constants import get_occasion_id
from capsulify.core.exceptions import UnknownOccasionError, UserNotFoundError
from capsulify.database.session import persistence_scope
from capsulify.repositories import preferences as preference_repo
from capsulify.repositories import users as user_repo
from capsulify.repositories import wardrobe as wardrobe_repo
from capsulify.schemas import OnboardingData

logger = logging.getLogger(__name__)


def resolve_occasions(occasions: Mapping[str, int]) -> List[Tuple[int, int]]:
    """
    Map occasion keys to table ids.

    Args:
        occasions: occasion key -> monthly count

    Returns:
        (occasion_id, count) pairs in input order

    Raises:
        UnknownOccasionError: A key has no id
    """
    resolved = []
    for key, count in occasions.items():
        occasion_id = get_occasion_id(key)
        if occasion_id is None:
            raise UnknownOccasionError(key)
        resolved.append((occasion_id, count))
    return resolved


class OnboardingService:
    """Service for saving onboarding answers."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory

    def save_onboarding_data(
        self,
        data: Union[OnboardingData, Dict[str, Any]],
        clerk_id: str,
    ) -> int:
        """
        Save a complete onboarding payload for a user.

        Args:
            data: Onboarding answers (model or plain dict)
            clerk_id: Identity provider's user id

        Returns:
            The user's internal id

        Raises:
            UserNotFoundError: No user has this clerk id (nothing is written)
            OperationFailedError: Any other failure, including a malformed
                payload or an unknown occasion key ("Failed to save
                onboarding data"). The transaction is rolled back.

        Example:
            user_id = service.save_onboarding_data(
                {"age_group_id": 2, "body_shape_id": 2, "height_id": 1,
                 "personal_style_id": 3, "favorite_parts": [4],
                 "least_favorite_parts": [2], "monthly_occasions": {"work": 20}},
                clerk_id="user_2abc",
            )
        """
        with persistence_scope("save onboarding data", self.session_factory) as db:
            if not isinstance(data, OnboardingData):
                data = OnboardingData.model_validate(data)

            user_id = user_repo.update_onboarding_fields(
                db,
                clerk_id,
                {
                    "age_group_id": data.age_group_id,
                    "body_shape_id": data.body_shape_id,
                    "height_id": data.height_id,
                    "personal_style_id": data.personal_style_id,
                    "location": data.location,
                    "goal": data.goal,
                    "frustration": data.frustration,
                },
            )
            if user_id is None:
                raise UserNotFoundError(clerk_id)

            preference_repo.replace_fav_parts(db, user_id, data.favorite_parts)
            preference_repo.replace_least_fav_parts(db, user_id, data.least_favorite_parts)

            occasions = resolve_occasions(data.positive_occasions())
            preference_repo.replace_monthly_occasions(db, user_id, occasions)

            created = wardrobe_repo.replace_wardrobe(db, user_id, data.body_shape_id)

        logger.info(
            "Onboarding saved for user %s (id=%s): %d occasion(s), %d wardrobe item(s)",
            clerk_id, user_id, len(occasions), created,
        )
        return user_id


def get_onboarding_service(session_factory: Optional[sessionmaker] = None) -> OnboardingService:
    """Factory function for creating OnboardingService."""
    return OnboardingService(session_factory)
