"""Tests for the preferences service"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from secondlife.models import User, UserPreferences
from secondlife.models.base import Base
from secondlife.models.enums import ItemCategory, ItemCondition
from secondlife.services.preferences import PreferencesService


@pytest.fixture
def db_session():
    """Create a test database session"""

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine)()

    session.add(User(id=1, username="alice", email="alice@example.com"))
    session.commit()

    yield session

    session.close()


@pytest.fixture
def service(db_session):
    return PreferencesService(db_session)


def test_get_without_record_returns_defaults(service, db_session):
    preferences = service.get(1)

    assert preferences.user_id == 1
    assert preferences.preferred_categories == []
    assert preferences.disliked_categories == []
    assert preferences.preferred_conditions == []
    assert preferences.country is None
    assert db_session.query(UserPreferences).count() == 0


def test_find_without_record_returns_none(service):
    assert service.find(1) is None


def test_first_save_creates_record(service, db_session):
    preferences, created = service.save(1, {
        "preferred_categories": [ItemCategory.BOOKS, ItemCategory.ART],
        "preferred_conditions": [ItemCondition.NEW],
        "country": "France",
    })

    assert created is True
    assert preferences.preferred_categories == ["BOOKS", "ART"]
    assert preferences.preferred_conditions == ["NEW"]
    assert preferences.disliked_categories == []
    assert preferences.country == "France"
    assert db_session.query(UserPreferences).count() == 1


def test_second_save_updates_same_record(service, db_session):
    service.save(1, {"preferred_categories": [ItemCategory.BOOKS]})
    preferences, created = service.save(1, {"preferred_categories": [ItemCategory.TOYS]})

    assert created is False
    assert preferences.preferred_categories == ["TOYS"]
    assert db_session.query(UserPreferences).count() == 1


def test_partial_save_keeps_other_fields(service):
    service.save(1, {
        "preferred_categories": [ItemCategory.BOOKS],
        "country": "France",
        "radius_km": 25,
    })
    preferences, _ = service.save(1, {"preferred_conditions": [ItemCondition.GOOD]})

    assert preferences.preferred_categories == ["BOOKS"]
    assert preferences.preferred_conditions == ["GOOD"]
    assert preferences.country == "France"
    assert preferences.radius_km == 25


def test_explicit_none_clears_scalar(service):
    service.save(1, {"country": "France"})
    preferences, _ = service.save(1, {"country": None})

    assert preferences.country is None


def test_lists_are_deduplicated(service):
    preferences, _ = service.save(1, {
        "preferred_categories": [ItemCategory.BOOKS, ItemCategory.BOOKS, ItemCategory.ART],
    })

    assert preferences.preferred_categories == ["BOOKS", "ART"]


def test_disliking_removes_stored_preferred_category(service):
    service.save(1, {"preferred_categories": [ItemCategory.BOOKS, ItemCategory.ART]})
    preferences, _ = service.save(1, {"disliked_categories": [ItemCategory.BOOKS]})

    assert preferences.disliked_categories == ["BOOKS"]
    assert preferences.preferred_categories == ["ART"]


def test_preferring_removes_stored_disliked_category(service):
    service.save(1, {"disliked_categories": [ItemCategory.TOYS, ItemCategory.TOOLS]})
    preferences, _ = service.save(1, {"preferred_categories": [ItemCategory.TOOLS]})

    assert preferences.preferred_categories == ["TOOLS"]
    assert preferences.disliked_categories == ["TOYS"]


def test_get_after_save_returns_stored(service):
    service.save(1, {"preferred_categories": [ItemCategory.HOME]})

    preferences = service.get(1)

    assert preferences.preferred_categories == ["HOME"]
