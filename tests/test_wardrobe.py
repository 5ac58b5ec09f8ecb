import pytest

from capsulify.core.exceptions import OperationFailedError, UserNotFoundError
from capsulify.repositories import wardrobe as wardrobe_repo
from capsulify.schemas import ClothingVariantFilter
from capsulify.services.wardrobe import group_by_category


@pytest.fixture
def onboarded_user(onboarding_service, user_factory, onboarding_payload):
    """User with the Pear (id 2) starter wardrobe: variants 2, 5, 8, 7, 10."""
    user_id = user_factory("user_ana")
    onboarding_service.save_onboarding_data(onboarding_payload, "user_ana")
    return user_id


def test_wardrobe_grouped_by_category_in_insertion_order(wardrobe_service, onboarded_user):
    wardrobe = wardrobe_service.get_user_wardrobe("user_ana")

    assert list(wardrobe) == [1, 2, 3]
    assert [entry["clothing_variant_id"] for entry in wardrobe[1]] == [2, 5]
    assert [entry["clothing_variant_id"] for entry in wardrobe[2]] == [8, 7]
    assert [entry["clothing_variant_id"] for entry in wardrobe[3]] == [10]
    for entries in wardrobe.values():
        ids = [entry["id"] for entry in entries]
        assert ids == sorted(ids)


def test_wardrobe_entry_fields(wardrobe_service, onboarded_user):
    entry = wardrobe_service.get_user_wardrobe("user_ana")[3][0]

    assert entry["name"] == "Wrap Dress"
    assert entry["image_file_name"] == "dress_wrap.png"
    assert entry["category_id"] == 3
    assert entry["subcategory_id"] == 5
    assert entry["colour_type_id"] == 1
    assert entry["dress_cut_id"] == 1
    assert entry["neckline_id"] == 2
    assert entry["skirt_cut_id"] is None


def test_empty_wardrobe_is_empty_mapping(wardrobe_service, user_factory):
    user_factory("user_ana")
    assert wardrobe_service.get_user_wardrobe("user_ana") == {}


def test_wardrobe_for_unknown_user_raises(wardrobe_service):
    with pytest.raises(UserNotFoundError):
        wardrobe_service.get_user_wardrobe("nobody")


def test_create_user_wardrobe(wardrobe_service, user_factory, db):
    user_id = user_factory("user_ana")

    assert wardrobe_service.create_user_wardrobe(user_id, 5) == 5
    assert wardrobe_repo.get_wardrobe_variant_ids(db, user_id) == [1, 3, 7, 8, 11]

    assert wardrobe_service.create_user_wardrobe(user_id, 3) == 4
    assert wardrobe_repo.get_wardrobe_variant_ids(db, user_id) == [2, 4, 6, 11]


@pytest.mark.parametrize("options, expected_id", [
    (None, 1),
    ({}, 1),
    ({"neckline_id": 2}, 2),
    ({"neckline_id": 2, "colour_type_id": 2}, 4),
    ({"neckline_id": None, "bottom_cut_id": 2}, 7),
    ({"dress_cut_id": 2}, 11),
])
def test_find_clothing_variant(wardrobe_service, options, expected_id):
    assert wardrobe_service.find_clothing_variant(options)["id"] == expected_id


def test_find_clothing_variant_result_shape(wardrobe_service):
    variant = wardrobe_service.find_clothing_variant(ClothingVariantFilter(skirt_cut_id=2))
    assert variant == {"id": 9, "image_file_name": "skirt_pencil.png", "name": "Pencil Skirt"}


def test_find_clothing_variant_no_match(wardrobe_service):
    assert wardrobe_service.find_clothing_variant({"skirt_cut_id": 2, "neckline_id": 1}) is None


def test_swap_wardrobe_variant(wardrobe_service, onboarded_user, db):
    updated = wardrobe_service.swap_wardrobe_variant(onboarded_user, 9, 8)

    assert updated["user_id"] == onboarded_user
    assert updated["clothing_variant_id"] == 9
    assert wardrobe_repo.get_wardrobe_variant_ids(db, onboarded_user) == [2, 5, 9, 7, 10]


def test_swap_missing_variant_is_a_noop(wardrobe_service, onboarded_user, db):
    assert wardrobe_service.swap_wardrobe_variant(onboarded_user, 9, 1) is None
    assert wardrobe_repo.get_wardrobe_variant_ids(db, onboarded_user) == [2, 5, 8, 7, 10]


def test_group_by_category_keeps_first_seen_order():
    rows = [
        {"id": 1, "category_id": 2},
        {"id": 2, "category_id": 1},
        {"id": 3, "category_id": 2},
    ]
    assert group_by_category(rows) == {2: [rows[0], rows[2]], 1: [rows[1]]}
    assert list(group_by_category(rows)) == [2, 1]


def test_find_clothing_variant_rejects_malformed_filter(wardrobe_service):
    with pytest.raises(OperationFailedError, match="^Failed to get clothing variant ID$"):
        wardrobe_service.find_clothing_variant({"neckline_id": "round"})


def test_swap_with_duplicate_entries_changes_only_the_oldest(wardrobe_service, onboarded_user, db):
    entry_ids = [
        entry["id"]
        for entries in wardrobe_service.get_user_wardrobe("user_ana").values()
        for entry in entries
    ]
    wardrobe_service.swap_wardrobe_variant(onboarded_user, 2, 8)
    assert wardrobe_repo.get_wardrobe_variant_ids(db, onboarded_user) == [2, 5, 2, 7, 10]

    updated = wardrobe_service.swap_wardrobe_variant(onboarded_user, 9, 2)

    assert updated["id"] == min(entry_ids)
    assert updated["clothing_variant_id"] == 9
    assert wardrobe_repo.get_wardrobe_variant_ids(db, onboarded_user) == [9, 5, 2, 7, 10]
