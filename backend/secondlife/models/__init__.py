"""Database models"""

from .user import User
from .item import Item
from .preference import UserPreferences
from .exchange import Exchange
from .enums import ItemCategory, ItemCondition, ItemStatus, ExchangeStatus, ReasonType

__all__ = [
    "User",
    "Item",
    "UserPreferences",
    "Exchange",
    "ItemCategory",
    "ItemCondition",
    "ItemStatus",
    "ExchangeStatus",
    "ReasonType",
]
