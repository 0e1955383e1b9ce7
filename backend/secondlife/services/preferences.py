"""Preferences service: per-user matching preferences with upsert semantics"""

from typing import Any, Dict, List, Tuple
from sqlalchemy.orm import Session

from ..models import UserPreferences
from ..utils.logging import get_logger
from ..utils.metrics import record_preferences_saved

logger = get_logger(__name__)

LIST_FIELDS = ("preferred_categories", "disliked_categories", "preferred_conditions")
SCALAR_FIELDS = ("locale", "country", "radius_km")


def _unique(values: List[Any]) -> List[str]:
    result = []
    for value in values:
        value = getattr(value, "value", value)
        if value not in result:
            result.append(value)
    return result


def default_preferences(user_id: int) -> UserPreferences:
    """Unsaved empty preferences for a user without a record"""
    return UserPreferences(
        user_id=user_id,
        preferred_categories=[],
        disliked_categories=[],
        preferred_conditions=[],
        locale=None,
        country=None,
        radius_km=None,
    )


class PreferencesService:
    """
    Reads and upserts user preferences

    A missing record is not an error: `get` answers with the default
    empty structure, and the first `save` creates the record.
    """

    def __init__(self, db: Session):
        self.db = db

    def find(self, user_id: int):
        """Stored preferences or None"""
        return self.db.query(UserPreferences).filter(UserPreferences.user_id == user_id).first()

    def get(self, user_id: int) -> UserPreferences:
        """Stored preferences, or defaults when none were saved"""
        preferences = self.find(user_id)
        if preferences is None:
            logger.debug("No stored preferences, using defaults", user_id=user_id)
            return default_preferences(user_id)
        return preferences

    def save(self, user_id: int, data: Dict[str, Any]) -> Tuple[UserPreferences, bool]:
        """
        Create or merge preferences

        Only keys present in `data` are written. A category set as preferred
        in this call is dropped from the stored disliked list and vice versa.

        Args:
            user_id: Owner of the preferences
            data: Provided fields (typically `model_dump(exclude_unset=True)`)

        Returns:
            (preferences, created)
        """
        preferences = self.find(user_id)
        created = preferences is None
        if created:
            preferences = default_preferences(user_id)
            self.db.add(preferences)

        for name in LIST_FIELDS:
            if name in data and data[name] is not None:
                # Assign a new list so the JSON column is flagged dirty
                setattr(preferences, name, _unique(data[name]))

        for name in SCALAR_FIELDS:
            if name in data:
                setattr(preferences, name, data[name])

        if "preferred_categories" in data and "disliked_categories" not in data:
            preferred = set(preferences.preferred_categories)
            preferences.disliked_categories = [
                c for c in preferences.disliked_categories if c not in preferred
            ]
        elif "disliked_categories" in data and "preferred_categories" not in data:
            disliked = set(preferences.disliked_categories)
            preferences.preferred_categories = [
                c for c in preferences.preferred_categories if c not in disliked
            ]

        self.db.commit()
        self.db.refresh(preferences)

        record_preferences_saved(created)
        logger.info(
            "Preferences saved",
            user_id=user_id,
            created=created,
            fields=sorted(data.keys())
        )

        return preferences, created
