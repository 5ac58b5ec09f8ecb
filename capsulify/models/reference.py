"""
Reference (lookup) tables.

Small static tables mapping an integer id to a name. The service never
writes to them outside of ``capsulify.database.init_db`` seeding.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from capsulify.models.base import Base, SerializationMixin


class _NamedLookup(SerializationMixin):
    """Columns shared by every id -> name lookup table."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, name='{self.name}')>"


class BodyShape(_NamedLookup, Base):
    """Body shape, e.g. "Pear". Drives the default wardrobe."""

    __tablename__ = "body_shapes"


class AgeGroup(_NamedLookup, Base):
    __tablename__ = "age_groups"


class Height(_NamedLookup, Base):
    __tablename__ = "heights"


class PersonalStyle(_NamedLookup, Base):
    __tablename__ = "personal_styles"


class BodyPart(_NamedLookup, Base):
    """Body part a user may list as favourite or least favourite."""

    __tablename__ = "body_parts"


class MonthlyOccasion(_NamedLookup, Base):
    """
    Occasion a user dresses for during a month.

    Attributes:
        id: Table id, referenced by user_monthly_occasions
        key: Key used in onboarding payloads (e.g. "date_night")
        name: Display name
    """

    __tablename__ = "monthly_occasions"

    key: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<MonthlyOccasion(id={self.id}, key='{self.key}')>"
