"""Reads of the static reference tables."""

from typing import Dict

from sqlalchemy import select
from sqlalchemy.orm import Session

from capsulify.models import BodyShape, MonthlyOccasion


def load_body_shapes(db: Session) -> Dict[int, str]:
    """body_shapes as id -> name."""
    return {shape_id: name for shape_id, name in db.execute(select(BodyShape.id, BodyShape.name))}


def load_monthly_occasions(db: Session) -> Dict[int, str]:
    """monthly_occasions as id -> key."""
    return {
        occasion_id: key
        for occasion_id, key in db.execute(select(MonthlyOccasion.id, MonthlyOccasion.key))
    }
