"""
User model and onboarding preference rows.

A User is created at sign-up with only name, username, email and the
identity provider's id (``clerk_id``). Onboarding fills in the reference
ids and free-text answers and flips ``onboarded``.

Preference rows (favourite parts, least favourite parts, monthly occasions)
hang off the user and are replaced wholesale on every onboarding save.
"""

from typing import Optional
from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from capsulify.models.base import Base, SerializationMixin, TimestampMixin


class User(TimestampMixin, SerializationMixin, Base):
    """
    Application user.

    Attributes:
        id: Internal numeric id
        clerk_id: Opaque id issued by the identity provider
        name, username, email: Profile fields set at sign-up
        location, goal, frustration: Free-text onboarding answers
        age_group_id, body_shape_id, height_id, personal_style_id: Reference ids
        onboarded: False until onboarding completes
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    clerk_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)

    name: Mapped[Optional[str]] = mapped_column(String(255))
    username: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    location: Mapped[Optional[str]] = mapped_column(String(255))
    goal: Mapped[Optional[str]] = mapped_column(Text)
    frustration: Mapped[Optional[str]] = mapped_column(Text)

    age_group_id: Mapped[Optional[int]] = mapped_column(ForeignKey("age_groups.id"))
    body_shape_id: Mapped[Optional[int]] = mapped_column(ForeignKey("body_shapes.id"))
    height_id: Mapped[Optional[int]] = mapped_column(ForeignKey("heights.id"))
    personal_style_id: Mapped[Optional[int]] = mapped_column(ForeignKey("personal_styles.id"))

    onboarded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return (
            f"<User(id={self.id}, clerk_id='{self.clerk_id}', "
            f"username='{self.username}', onboarded={self.onboarded})>"
        )


class UserFavPart(SerializationMixin, Base):
    """A body part the user likes to show off."""

    __tablename__ = "user_fav_parts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    body_part_id: Mapped[int] = mapped_column(ForeignKey("body_parts.id"), nullable=False)


class UserLeastFavPart(SerializationMixin, Base):
    """A body part the user prefers to downplay."""

    __tablename__ = "user_least_fav_parts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    body_part_id: Mapped[int] = mapped_column(ForeignKey("body_parts.id"), nullable=False)


class UserMonthlyOccasion(SerializationMixin, Base):
    """How many times a month the user dresses for an occasion."""

    __tablename__ = "user_monthly_occasions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    occasion_id: Mapped[int] = mapped_column(ForeignKey("monthly_occasions.id"), nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False)
