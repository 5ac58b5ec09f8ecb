"""
Onboarding preference rows.

Each ``replace_*`` function deletes every row the user has in the table and
inserts the new set in one batch. Run them inside the onboarding
transaction so readers never see the empty intermediate state.
"""

from typing import Dict, Iterable, List, Sequence, Tuple

from sqlalchemy import delete, insert, select
from sqlalchemy.orm import Session

from capsulify.models import UserFavPart, UserLeastFavPart, UserMonthlyOccasion


def _replace_rows(db: Session, model, user_id: int, rows: List[Dict[str, int]]) -> None:
    db.execute(delete(model).where(model.user_id == user_id), execution_options={"synchronize_session": False})
    # existing rows are cleared even when there is nothing to insert
    if not rows:
        return
    db.execute(insert(model), [{"user_id": user_id, **row} for row in rows])


def replace_fav_parts(db: Session, user_id: int, body_part_ids: Iterable[int]) -> None:
    _replace_rows(db, UserFavPart, user_id, [{"body_part_id": part_id} for part_id in body_part_ids])


def replace_least_fav_parts(db: Session, user_id: int, body_part_ids: Iterable[int]) -> None:
    _replace_rows(db, UserLeastFavPart, user_id, [{"body_part_id": part_id} for part_id in body_part_ids])


def replace_monthly_occasions(db: Session, user_id: int, occasions: Sequence[Tuple[int, int]]) -> None:
    """
    Args:
        occasions: (occasion_id, count) pairs
    """
    _replace_rows(
        db,
        UserMonthlyOccasion,
        user_id,
        [{"occasion_id": occasion_id, "count": count} for occasion_id, count in occasions],
    )


def get_fav_part_ids(db: Session, user_id: int) -> List[int]:
    return list(db.scalars(
        select(UserFavPart.body_part_id).where(UserFavPart.user_id == user_id).order_by(UserFavPart.id)
    ))


def get_least_fav_part_ids(db: Session, user_id: int) -> List[int]:
    return list(db.scalars(
        select(UserLeastFavPart.body_part_id)
        .where(UserLeastFavPart.user_id == user_id)
        .order_by(UserLeastFavPart.id)
    ))


def get_monthly_occasion_counts(db: Session, user_id: int) -> Dict[int, int]:
    """Occasion id -> monthly count for a user."""
    rows = db.execute(
        select(UserMonthlyOccasion.occasion_id, UserMonthlyOccasion.count)
        .where(UserMonthlyOccasion.user_id == user_id)
    )
    return {occasion_id: count for occasion_id, count in rows}
