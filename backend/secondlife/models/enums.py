"""Closed enumerations shared by models and schemas"""

from enum import Enum


class ItemCategory(str, Enum):
    """Item categories"""

    CLOTHING = "CLOTHING"
    ELECTRONICS = "ELECTRONICS"
    BOOKS = "BOOKS"
    HOME = "HOME"
    TOOLS = "TOOLS"
    TOYS = "TOYS"
    SPORTS = "SPORTS"
    ART = "ART"
    VINTAGE = "VINTAGE"
    HANDCRAFT = "HANDCRAFT"
    OTHER = "OTHER"


class ItemCondition(str, Enum):
    """Physical condition of an item"""

    NEW = "NEW"
    GOOD = "GOOD"
    FAIR = "FAIR"
    TO_REPAIR = "TO_REPAIR"


class ItemStatus(str, Enum):
    """Listing status"""

    AVAILABLE = "AVAILABLE"
    PENDING = "PENDING"  # An accepted exchange holds the item
    TRADED = "TRADED"
    ARCHIVED = "ARCHIVED"


class ExchangeStatus(str, Enum):
    """Exchange lifecycle states"""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class ReasonType(str, Enum):
    """Kinds of contributions to a match score"""

    CATEGORY = "category"
    CONDITION = "condition"
    TAGS = "tags"
    POPULARITY = "popularity"
    RECENCY = "recency"
    RARITY = "rarity"
    LOCATION = "location"
    HISTORY = "history"
