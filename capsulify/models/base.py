"""
Base Model
==========

Declarative base and mixins shared by the Capsulify tables.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Set

from sqlalchemy import DateTime, MetaData, inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


# Constraint names follow one pattern on every backend
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class TimestampMixin:
    """Adds server-managed created_at / updated_at columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )


class SerializationMixin:
    """
    Row -> dict conversion for values handed back to callers.

    Services return dicts rather than ORM instances, since the session is
    closed by the time the caller sees the result.
    """

    def to_dict(self, exclude: Optional[Set[str]] = None) -> Dict[str, Any]:
        exclude = exclude or set()
        result = {}
        for attr in inspect(self).mapper.column_attrs:
            if attr.key in exclude:
                continue
            value = getattr(self, attr.key)
            result[attr.key] = value.isoformat() if isinstance(value, datetime) else value
        return result
