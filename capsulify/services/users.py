"""
User service.

Sign-up, profile edits, deletion, and the legacy body-type onboarding step.

Each public method is one unit of work: it opens its own session through
``persistence_scope`` and returns plain data (ints, dicts, None), never
ORM instances bound to a closed session.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import sessionmaker

from capsulify.core.constants import get_body_shape_id
from capsulify.core.exceptions import BodyShapeNotFoundError, UserNotFoundError
from capsulify.database.session import persistence_scope
from capsulify.repositories import users as user_repo
from capsulify.repositories import wardrobe as wardrobe_repo

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for user records.

    Handles:
    - Creating a user at sign-up
    - Looking users up by the identity provider's id
    - Overwriting profile fields
    - Deleting users
    - Setting the body type and starter wardrobe (legacy onboarding)
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        """
        Initialize user service.

        Args:
            session_factory: sessionmaker used for every operation. Defaults
                to the application's ``SessionLocal``.
        """
        self.session_factory = session_factory

    def create_user(self, name: str, username: str, email: str, clerk_id: str) -> int:
        """
        Insert a new user.

        Args:
            name: Display name
            username: Unique username
            email: Unique email
            clerk_id: Identity provider's user id

        Returns:
            The new user's internal id

        Raises:
            OperationFailedError: Duplicate username/email/clerk id or a
                storage failure ("Failed to create user")

        Example:
            user_id = service.create_user("Ana", "ana", "ana@example.com", "user_2abc")
        """
        with persistence_scope("create user", self.session_factory) as db:
            user_id = user_repo.insert_user(db, name, username, email, clerk_id)
        logger.info("User %s created (id=%s)", clerk_id, user_id)
        return user_id

    def get_user_by_clerk_id(self, clerk_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a user row.

        Returns:
            The user's columns as a dict, or None for an unregistered caller
        """
        with persistence_scope("get user", self.session_factory) as db:
            user = user_repo.get_user_by_clerk_id(db, clerk_id)
            result = user.to_dict() if user is not None else None
        logger.debug("User lookup for %s: %s", clerk_id, "found" if result else "not found")
        return result

    def get_user_id_by_clerk_id(self, clerk_id: str) -> int:
        """
        Resolve the internal id.

        Raises:
            UserNotFoundError: No user has this clerk id
        """
        with persistence_scope("get user ID by clerk ID", self.session_factory) as db:
            user_id = user_repo.get_user_id_by_clerk_id(db, clerk_id)
            if user_id is None:
                raise UserNotFoundError(clerk_id)
        return user_id

    def update_user(self, name: str, username: str, email: str, clerk_id: str) -> None:
        """
        Overwrite name, username and email.

        A clerk id that matches no user is not an error.
        """
        with persistence_scope("update user", self.session_factory) as db:
            matched = user_repo.update_profile(db, clerk_id, name, username, email)
        logger.info("User %s updated (%d row(s))", clerk_id, matched)

    def delete_user(self, clerk_id: str) -> None:
        """Delete a user together with their preferences and wardrobe."""
        with persistence_scope("delete user", self.session_factory) as db:
            deleted = user_repo.delete_user(db, clerk_id)
        logger.info("User %s deleted (%d row(s))", clerk_id, deleted)

    def update_user_body_type(self, body_type: str, clerk_id: str) -> int:
        """
        Set the user's body shape by name, mark them onboarded and give them
        the starter wardrobe for that shape, all in one transaction.

        Args:
            body_type: Body shape name, e.g. "Pear"
            clerk_id: Identity provider's user id

        Returns:
            The user's internal id

        Raises:
            UserNotFoundError: No user has this clerk id
            OperationFailedError: Unknown body type or storage failure
                ("Failed to update user body type")
        """
        with persistence_scope("update user body type", self.session_factory) as db:
            body_shape_id = get_body_shape_id(body_type)
            if body_shape_id is None:
                raise BodyShapeNotFoundError(body_type)

            user_id = user_repo.update_onboarding_fields(
                db, clerk_id, {"body_shape_id": body_shape_id}
            )
            if user_id is None:
                raise UserNotFoundError(clerk_id)

            created = wardrobe_repo.replace_wardrobe(db, user_id, body_shape_id)

        logger.info(
            "User %s body type set to %s; wardrobe reset with %d item(s)",
            clerk_id, body_type, created,
        )
        return user_id


# ========================================
# Convenience Functions
# ========================================

def get_user_service(session_factory: Optional[sessionmaker] = None) -> UserService:
    """
    Factory function for creating UserService.

    Usage:
        from capsulify.services.users import get_user_service

        user = get_user_service().get_user_by_clerk_id("user_2abc")
    """
    return UserService(session_factory)
