"""Marketplace services"""

from .items import ItemService
from .exchanges import ExchangeService
from .preferences import PreferencesService
from .matching import MatchingService
from .scoring import MatchScorer, MatchWeights, PreferenceProfile

__all__ = [
    "ItemService",
    "ExchangeService",
    "PreferencesService",
    "MatchingService",
    "MatchScorer",
    "MatchWeights",
    "PreferenceProfile",
]
