import os

# Keep the module-level engine off the filesystem; tests bind their own engine below.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy.orm import sessionmaker

from capsulify.database.init_db import seed_reference_data, seed_sample_data
from capsulify.database.session import create_all_tables, create_db_engine
from capsulify.services import (
    OnboardingService,
    ReferenceDataService,
    UserService,
    WardrobeService,
)


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite:///:memory:")
    create_all_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    seed_reference_data(factory)
    seed_sample_data(factory)
    return factory


@pytest.fixture
def db(session_factory):
    """A plain session for assertions against table contents."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_service(session_factory):
    return UserService(session_factory)


@pytest.fixture
def onboarding_service(session_factory):
    return OnboardingService(session_factory)


@pytest.fixture
def wardrobe_service(session_factory):
    return WardrobeService(session_factory)


@pytest.fixture
def reference_service(session_factory):
    return ReferenceDataService(session_factory)


@pytest.fixture
def user_factory(user_service):
    def _create(clerk_id: str = "user_ana", username: str = None, email: str = None, name: str = "Ana"):
        username = username or clerk_id
        email = email or f"{clerk_id}@example.com"
        return user_service.create_user(name, username, email, clerk_id)
    return _create


@pytest.fixture
def onboarding_payload():
    return {
        "age_group_id": 2,
        "body_shape_id": 2,
        "height_id": 1,
        "personal_style_id": 3,
        "location": "Lisbon",
        "goal": "Fewer, better clothes",
        "frustration": "Nothing matches",
        "favorite_parts": [4, 6],
        "least_favorite_parts": [2],
        "monthly_occasions": {"work": 20, "date_night": 2, "party": 0},
    }
