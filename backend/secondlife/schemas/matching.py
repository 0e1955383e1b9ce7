"""Matching schemas: preferences and recommendations"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, List

from ..models.enums import ItemCategory, ItemCondition, ReasonType
from .item import ItemResponse


class PreferencesBase(BaseModel):
    """Preference fields shared by requests and responses"""

    preferred_categories: List[ItemCategory] = Field(default_factory=list)
    disliked_categories: List[ItemCategory] = Field(default_factory=list)
    preferred_conditions: List[ItemCondition] = Field(default_factory=list)
    locale: Optional[str] = Field(None, max_length=10)
    country: Optional[str] = Field(None, max_length=100)
    radius_km: Optional[int] = Field(None, ge=1, le=1000)


class SavePreferencesRequest(PreferencesBase):
    """
    Body of POST /matching/preferences

    Fields left out of the payload keep their stored value.
    """

    @model_validator(mode="after")
    def check_category_overlap(self):
        overlap = set(self.preferred_categories) & set(self.disliked_categories)
        if overlap:
            names = ", ".join(sorted(c.value for c in overlap))
            raise ValueError(f"Categories cannot be both preferred and disliked: {names}")
        return self


class PreferencesOut(PreferencesBase):
    """Stored (or default) preferences"""

    user_id: Optional[int] = None

    class Config:
        from_attributes = True


class PreferencesResponse(BaseModel):
    """Envelope for preference endpoints"""

    preferences: PreferencesOut


class RecommendationReason(BaseModel):
    """One contribution to a match score"""

    type: ReasonType
    score: float
    description: str


class RecommendationOut(BaseModel):
    """A scored item suggestion"""

    item: ItemResponse
    score: float = Field(..., ge=0, le=100)
    reasons: List[RecommendationReason]


class UserPreferencesSummary(BaseModel):
    """Preferences echoed back with recommendations"""

    preferred_categories: List[ItemCategory]
    preferred_conditions: List[ItemCondition]
    country: Optional[str] = None


class RecommendationsResponse(BaseModel):
    """Body of GET /matching/recommendations"""

    recommendations: List[RecommendationOut]
    total: int
    user_preferences: Optional[UserPreferencesSummary] = None
