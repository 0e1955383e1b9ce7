"""Pydantic schemas for request/response validation"""

from .user import UserCreate, UserUpdate, UserResponse, OwnerSummary
from .item import ItemCreate, ItemUpdate, ItemStatusUpdate, ItemResponse, PaginatedItems
from .exchange import ExchangeCreate, ExchangeStatusUpdate, ExchangeResponse, PaginatedExchanges
from .matching import (
    SavePreferencesRequest,
    PreferencesOut,
    PreferencesResponse,
    RecommendationReason,
    RecommendationOut,
    RecommendationsResponse,
)

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "OwnerSummary",
    "ItemCreate",
    "ItemUpdate",
    "ItemStatusUpdate",
    "ItemResponse",
    "PaginatedItems",
    "ExchangeCreate",
    "ExchangeStatusUpdate",
    "ExchangeResponse",
    "PaginatedExchanges",
    "SavePreferencesRequest",
    "PreferencesOut",
    "PreferencesResponse",
    "RecommendationReason",
    "RecommendationOut",
    "RecommendationsResponse",
]
