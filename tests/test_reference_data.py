import pytest

from capsulify.core.constants import (
    BODY_SHAPES,
    MONTHLY_OCCASIONS,
    BodyShape,
    get_body_shape_id,
    get_occasion_id,
)
from capsulify.core.exceptions import ReferenceDataMismatchError
from capsulify.models import BodyShape as BodyShapeRow
from capsulify.models import MonthlyOccasion
from capsulify.repositories import reference as reference_repo
from capsulify.services.reference_data import diff_reference_table


def test_constants_have_unique_ids_and_keys():
    assert len({occasion.id for occasion in MONTHLY_OCCASIONS}) == len(MONTHLY_OCCASIONS)
    assert len({occasion.key for occasion in MONTHLY_OCCASIONS}) == len(MONTHLY_OCCASIONS)
    assert len(set(BODY_SHAPES.values())) == len(BODY_SHAPES)


def test_body_shape_lookup():
    assert get_body_shape_id(BodyShape.INVERTED_TRIANGLE.value) == 5
    assert get_body_shape_id("Pear") == 2
    assert get_body_shape_id("pear") is None


def test_occasion_lookup():
    assert get_occasion_id("date_night") == 3
    assert get_occasion_id("brunch") is None


def test_seeded_tables_match_constants(db):
    assert reference_repo.load_body_shapes(db) == BODY_SHAPES
    assert reference_repo.load_monthly_occasions(db) == {o.id: o.key for o in MONTHLY_OCCASIONS}


def test_verify_passes_on_seeded_database(reference_service):
    reference_service.verify()


def test_verify_fails_on_renamed_body_shape(reference_service, db):
    db.get(BodyShapeRow, 4).name = "Straight"
    db.commit()

    with pytest.raises(ReferenceDataMismatchError) as exc_info:
        reference_service.verify()

    assert exc_info.value.problems == [
        "body_shapes: id 4 is 'Straight' in database, expected 'Rectangle'"
    ]


def test_verify_fails_on_extra_occasion(reference_service, db):
    db.add(MonthlyOccasion(id=99, key="brunch", name="Brunch"))
    db.commit()

    with pytest.raises(ReferenceDataMismatchError, match="id 99 \\('brunch'\\) unknown"):
        reference_service.verify()


def test_diff_reference_table():
    problems = diff_reference_table("t", {1: "a", 2: "b"}, {2: "c", 3: "d"})
    assert problems == [
        "t: id 1 ('a') missing from database",
        "t: id 2 is 'c' in database, expected 'b'",
        "t: id 3 ('d') unknown to the application",
    ]
    assert diff_reference_table("t", {1: "a"}, {1: "a"}) == []
