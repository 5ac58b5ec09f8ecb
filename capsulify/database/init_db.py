"""
Database initialization and seeding.

This script:
- Creates all database tables
- Seeds the reference tables from capsulify.core.constants
- Optionally adds a sample clothing catalog with per-body-shape defaults
- Verifies the reference constants against the database
- Can reset the database (drop and recreate)

Usage:
    # Initialize with reference data
    python -m capsulify.database.init_db

    # Reset database (drops all tables and recreates)
    python -m capsulify.database.init_db --reset

    # Add the sample catalog for local development
    python -m capsulify.database.init_db --sample-data
"""

import argparse
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from capsulify.core.constants import (
    AGE_GROUPS,
    BODY_PARTS,
    BODY_SHAPES,
    HEIGHTS,
    MONTHLY_OCCASIONS,
    PERSONAL_STYLES,
)
from capsulify.core.logging import configure_logging
from capsulify.database.session import engine, get_db_context, create_all_tables, drop_all_tables
from capsulify.models import (
    AgeGroup,
    BodyPart,
    BodyShape,
    ClothingItem,
    ClothingVariant,
    DefaultClothingVariant,
    Height,
    MonthlyOccasion,
    PersonalStyle,
    User,
    UserClothingVariant,
)
from capsulify.services.reference_data import verify_reference_data


# ========================================
# Sample Catalog
# ========================================

# (id, name, category_id, subcategory_id, colour_type_id)
SAMPLE_ITEMS = [
    (1, "T-Shirt", 1, 1, 1),
    (2, "Blouse", 1, 2, 2),
    (3, "Jeans", 2, 3, 1),
    (4, "Skirt", 2, 4, 2),
    (5, "Dress", 3, 5, 1),
]

# (id, clothing_item_id, name, image_file_name, attribute columns)
SAMPLE_VARIANTS = [
    (1, 1, "Crew Neck Tee", "tee_crew.png", {"top_sleeve_type_id": 1, "neckline_id": 1}),
    (2, 1, "V-Neck Tee", "tee_vneck.png", {"top_sleeve_type_id": 1, "neckline_id": 2}),
    (3, 1, "Long Sleeve Tee", "tee_long.png", {"top_sleeve_type_id": 2, "neckline_id": 1}),
    (4, 2, "Puff Sleeve Blouse", "blouse_puff.png", {"blouse_sleeve_type_id": 1, "neckline_id": 2}),
    (5, 2, "Bell Sleeve Blouse", "blouse_bell.png", {"blouse_sleeve_type_id": 2, "neckline_id": 3}),
    (6, 3, "Straight Jeans", "jeans_straight.png", {"bottom_cut_id": 1}),
    (7, 3, "Wide Leg Jeans", "jeans_wide.png", {"bottom_cut_id": 2}),
    (8, 4, "A-Line Skirt", "skirt_aline.png", {"skirt_cut_id": 1}),
    (9, 4, "Pencil Skirt", "skirt_pencil.png", {"skirt_cut_id": 2}),
    (10, 5, "Wrap Dress", "dress_wrap.png", {"dress_cut_id": 1, "neckline_id": 2}),
    (11, 5, "Shift Dress", "dress_shift.png", {"dress_cut_id": 2, "neckline_id": 1}),
]

# body_shape_id -> default clothing_variant ids
SAMPLE_DEFAULT_WARDROBES: Dict[int, List[int]] = {
    1: [2, 4, 9, 10],
    2: [2, 5, 8, 7, 10],
    3: [2, 4, 6, 11],
    4: [3, 5, 7, 10],
    5: [1, 3, 7, 8, 11],
}


def create_tables(reset: bool = False) -> None:
    """
    Create all database tables.

    Args:
        reset: If True, drop existing tables first
    """
    if reset:
        print("🗑️  Dropping existing tables...")
        drop_all_tables(engine)
        print("✅ Tables dropped")

    print("📊 Creating database tables...")
    create_all_tables(engine)
    print("✅ Tables created")


def _seed_named_lookup(db, model, rows: Dict[int, str]) -> int:
    created = 0
    for ref_id, name in rows.items():
        if db.get(model, ref_id) is None:
            db.add(model(id=ref_id, name=name))
            created += 1
    return created


def seed_reference_data(session_factory: Optional[sessionmaker] = None) -> None:
    """
    Seed every reference table from the constants.

    Existing ids are left untouched, so running this twice is safe. A row
    whose name drifted is reported by ``verify_reference_data`` rather than
    silently rewritten.
    """
    print("\n🌱 Seeding reference data...")

    with get_db_context(session_factory) as db:
        for model, rows in (
            (BodyShape, BODY_SHAPES),
            (AgeGroup, AGE_GROUPS),
            (Height, HEIGHTS),
            (PersonalStyle, PERSONAL_STYLES),
            (BodyPart, BODY_PARTS),
        ):
            created = _seed_named_lookup(db, model, rows)
            print(f"  ✅ {model.__tablename__}: {created} created, {len(rows) - created} existing")

        created = 0
        for occasion in MONTHLY_OCCASIONS:
            if db.get(MonthlyOccasion, occasion.id) is None:
                db.add(MonthlyOccasion(id=occasion.id, key=occasion.key, name=occasion.name))
                created += 1
        print(f"  ✅ monthly_occasions: {created} created, {len(MONTHLY_OCCASIONS) - created} existing")

        # Commit is done automatically by get_db_context()

    print("✅ Reference data seeded")


def seed_sample_data(session_factory: Optional[sessionmaker] = None) -> None:
    """
    Seed a small clothing catalog and a default wardrobe per body shape.

    Useful for local development and tests without a production catalog dump.
    Skipped when the catalog already has items.
    """
    print("\n🌱 Seeding sample catalog...")

    with get_db_context(session_factory) as db:
        if db.scalar(select(func.count()).select_from(ClothingItem)):
            print("  ⏭️  Catalog already populated (skipping)")
            return

        for item_id, name, category_id, subcategory_id, colour_type_id in SAMPLE_ITEMS:
            db.add(ClothingItem(
                id=item_id,
                name=name,
                category_id=category_id,
                subcategory_id=subcategory_id,
                colour_type_id=colour_type_id,
            ))
        db.flush()

        for variant_id, item_id, name, image_file_name, attributes in SAMPLE_VARIANTS:
            db.add(ClothingVariant(
                id=variant_id,
                clothing_item_id=item_id,
                name=name,
                image_file_name=image_file_name,
                **attributes,
            ))
        db.flush()

        for body_shape_id, variant_ids in SAMPLE_DEFAULT_WARDROBES.items():
            for variant_id in variant_ids:
                db.add(DefaultClothingVariant(body_shape_id=body_shape_id, clothing_variant_id=variant_id))

        print(f"  ✅ {len(SAMPLE_ITEMS)} items, {len(SAMPLE_VARIANTS)} variants")
        print(f"  ✅ Default wardrobes for {len(SAMPLE_DEFAULT_WARDROBES)} body shapes")

    print("✅ Sample catalog seeded")


def print_database_status() -> None:
    """Print current database status and counts."""
    print("\n" + "=" * 60)
    print("📊 Database Status")
    print("=" * 60)

    with get_db_context() as db:
        for label, model in (
            ("Users", User),
            ("Body shapes", BodyShape),
            ("Occasions", MonthlyOccasion),
            ("Items", ClothingItem),
            ("Variants", ClothingVariant),
            ("Defaults", DefaultClothingVariant),
            ("Wardrobe", UserClothingVariant),
        ):
            count = db.scalar(select(func.count()).select_from(model))
            print(f"  {label + ':':<13}{count}")

    print("=" * 60)


def initialize_database(reset: bool = False, sample_data: bool = False, verify: bool = True) -> None:
    """
    Initialize the database.

    Args:
        reset: Drop existing tables before creating
        sample_data: Add the sample catalog
        verify: Check reference constants against the seeded tables
    """
    print("=" * 60)
    print("🗄️  Database Initialization")
    print("=" * 60)

    # Step 1: Create tables
    create_tables(reset=reset)

    # Step 2: Seed reference tables (always)
    seed_reference_data()

    # Step 3: Seed sample catalog (optional)
    if sample_data:
        seed_sample_data()

    # Step 4: Verify constants
    if verify:
        print("\n🔎 Verifying reference data...")
        verify_reference_data()
        print("✅ Reference data matches")

    # Step 5: Show status
    print_database_status()

    print("\n✅ Database initialization complete!")


def main():
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="Initialize and seed the Capsulify database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Initialize with reference data only
  python -m capsulify.database.init_db

  # Reset database (drop all tables and recreate)
  python -m capsulify.database.init_db --reset

  # Full reset with the sample catalog
  python -m capsulify.database.init_db --reset --sample-data
        """
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing tables before creating (WARNING: deletes all data!)"
    )

    parser.add_argument(
        "--sample-data",
        action="store_true",
        help="Add a sample clothing catalog with default wardrobes"
    )

    parser.add_argument(
        "--skip-verify",
        action="store_true",
        help="Do not check reference constants against the database"
    )

    args = parser.parse_args()

    configure_logging()

    # Confirm reset if requested
    if args.reset:
        print("⚠️  WARNING: This will DELETE ALL DATA in the database!")
        response = input("Are you sure? Type 'yes' to continue: ")
        if response.lower() != 'yes':
            print("❌ Aborted")
            return

    initialize_database(reset=args.reset, sample_data=args.sample_data, verify=not args.skip_verify)


if __name__ == "__main__":
    main()
