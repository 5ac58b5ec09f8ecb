"""
User queries.

All functions take an open session and leave commit/rollback to the caller.
"""

from typing import Any, Dict, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from capsulify.models import User


_NO_SYNC = {"synchronize_session": False}


def get_user_by_clerk_id(db: Session, clerk_id: str) -> Optional[User]:
    """
    Get a user by the identity provider's id.

    Returns:
        User instance or None if not found
    """
    return db.scalars(select(User).where(User.clerk_id == clerk_id)).first()


def get_user_id_by_clerk_id(db: Session, clerk_id: str) -> Optional[int]:
    return db.scalar(select(User.id).where(User.clerk_id == clerk_id))


def insert_user(db: Session, name: str, username: str, email: str, clerk_id: str) -> int:
    """
    Insert a freshly signed-up user.

    Returns:
        The generated internal id
    """
    user = User(name=name, username=username, email=email, clerk_id=clerk_id, onboarded=False)
    db.add(user)
    db.flush()
    return user.id


def update_profile(db: Session, clerk_id: str, name: str, username: str, email: str) -> int:
    """Overwrite name, username and email. Returns the number of rows matched."""
    result = db.execute(
        update(User)
        .where(User.clerk_id == clerk_id)
        .values(name=name, username=username, email=email),
        execution_options=_NO_SYNC,
    )
    return result.rowcount


def update_onboarding_fields(db: Session, clerk_id: str, fields: Dict[str, Any]) -> Optional[int]:
    """
    Write onboarding columns and mark the user onboarded.

    The WHERE clause is the only user lookup: no matching row means no user.

    Returns:
        The user's internal id, or None if no user has this clerk id
    """
    return db.execute(
        update(User)
        .where(User.clerk_id == clerk_id)
        .values(onboarded=True, **fields)
        .returning(User.id),
        execution_options=_NO_SYNC,
    ).scalar_one_or_none()


def delete_user(db: Session, clerk_id: str) -> int:
    """Delete a user. Preference and wardrobe rows go with it (ON DELETE CASCADE)."""
    result = db.execute(
        delete(User).where(User.clerk_id == clerk_id),
        execution_options=_NO_SYNC,
    )
    return result.rowcount
