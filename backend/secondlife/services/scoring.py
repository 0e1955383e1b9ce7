"""Match scoring of candidate items against a user's preferences"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from ..config import settings
from ..models import Item, UserPreferences
from ..models.enums import ItemCategory, ItemCondition, ReasonType

MIN_SCORE = 0.0
MAX_SCORE = 100.0
MIN_KEYWORD_LENGTH = 3


@dataclass(frozen=True)
class MatchWeights:
    """Weight constants of the scorer"""

    category: float = 30.0
    condition: float = 20.0
    tag: float = 5.0
    tag_max: float = 10.0
    popularity_max: float = 20.0
    popularity_ceiling: float = 100.0
    recency_max: float = 10.0
    recency_days: int = 30
    rarity_max: float = 10.0
    location: float = 10.0
    history_keyword: float = 5.0
    history_max: float = 20.0

    @classmethod
    def from_settings(cls) -> "MatchWeights":
        return cls(
            category=settings.MATCH_CATEGORY_WEIGHT,
            condition=settings.MATCH_CONDITION_WEIGHT,
            tag=settings.MATCH_TAG_WEIGHT,
            tag_max=settings.MATCH_TAG_MAX,
            popularity_max=settings.MATCH_POPULARITY_MAX,
            popularity_ceiling=settings.MATCH_POPULARITY_CEILING,
            recency_max=settings.MATCH_RECENCY_MAX,
            recency_days=settings.MATCH_RECENCY_DAYS,
            rarity_max=settings.MATCH_RARITY_MAX,
            location=settings.MATCH_LOCATION_WEIGHT,
            history_keyword=settings.MATCH_HISTORY_KEYWORD_WEIGHT,
            history_max=settings.MATCH_HISTORY_MAX,
        )


@dataclass(frozen=True)
class PreferenceProfile:
    """Immutable view of a user's preferences used while scoring"""

    preferred_categories: FrozenSet[ItemCategory] = frozenset()
    disliked_categories: FrozenSet[ItemCategory] = frozenset()
    preferred_conditions: FrozenSet[ItemCondition] = frozenset()
    country: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """True when nothing has been configured"""
        return not (
            self.preferred_categories
            or self.disliked_categories
            or self.preferred_conditions
            or self.country
        )

    @classmethod
    def from_model(cls, preferences: Optional[UserPreferences]) -> "PreferenceProfile":
        if preferences is None:
            return cls()

        return cls(
            preferred_categories=frozenset(
                ItemCategory(c) for c in preferences.preferred_categories or []
            ),
            disliked_categories=frozenset(
                ItemCategory(c) for c in preferences.disliked_categories or []
            ),
            preferred_conditions=frozenset(
                ItemCondition(c) for c in preferences.preferred_conditions or []
            ),
            country=preferences.country or None,
        )


@dataclass
class Reason:
    """One scored contribution"""

    type: ReasonType
    score: float
    description: str

    def to_dict(self) -> Dict:
        return {"type": self.type.value, "score": self.score, "description": self.description}


@dataclass
class ScoredItem:
    """Candidate item with its match score and reasons"""

    item: Item
    score: float
    reasons: List[Reason] = field(default_factory=list)


def clamp_score(value: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def _keywords(*texts: str) -> set:
    words = set()
    for text in texts:
        for word in (text or "").lower().split():
            if len(word) >= MIN_KEYWORD_LENGTH:
                words.add(word)
    return words


class MatchScorer:
    """
    Scores candidate items for one user

    The scorer is a pure function of its inputs: the user's preference
    profile, the weights, the reference clock, the share of each category
    among available items and the titles of the user's past exchanges.

    When the profile is empty only the popularity and recency contributions
    apply, so every candidate is still ranked.
    """

    def __init__(
        self,
        profile: PreferenceProfile,
        weights: Optional[MatchWeights] = None,
        now: Optional[datetime] = None,
        category_frequencies: Optional[Dict[ItemCategory, float]] = None,
        exchange_history: Optional[Iterable[Iterable[str]]] = None,
    ):
        self.profile = profile
        self.weights = weights or MatchWeights.from_settings()
        self.now = now or datetime.utcnow()
        self.category_frequencies = category_frequencies or {}
        self.exchange_history = [
            _keywords(*titles) for titles in (exchange_history or [])
        ]

    def is_excluded(self, item: Item) -> bool:
        """Disliked categories are removed from recommendations"""
        return ItemCategory(item.category) in self.profile.disliked_categories

    def score(self, item: Item) -> Tuple[float, List[Reason]]:
        """
        Compute the match score of one item

        Returns:
            (score, reasons) where score is the clamped sum of reason scores
        """
        reasons: List[Reason] = []
        bonuses: List[Reason] = []

        if not self.profile.is_empty:
            self._add(reasons, self._category_reason(item))
            self._add(bonuses, self._condition_reason(item))
            self._add(bonuses, self._tags_reason(item))

        self._add(bonuses, self._popularity_reason(item))
        self._add(bonuses, self._recency_reason(item))

        if not self.profile.is_empty:
            self._add(bonuses, self._rarity_reason(item))
            self._add(bonuses, self._location_reason(item))
            self._add(bonuses, self._history_reason(item))

        reasons.extend(self._fit_headroom(bonuses))

        total = round(sum(r.score for r in reasons), 1)
        return clamp_score(total), reasons

    def score_item(self, item: Item) -> ScoredItem:
        score, reasons = self.score(item)
        return ScoredItem(item=item, score=score, reasons=reasons)

    def score_all(self, items: Iterable[Item]) -> List[ScoredItem]:
        """Score every item that is not excluded"""
        return [self.score_item(item) for item in items if not self.is_excluded(item)]

    @staticmethod
    def _add(reasons: List[Reason], reason: Optional[Reason]) -> None:
        if reason is not None and reason.score > 0:
            reasons.append(reason)

    def _fit_headroom(self, bonuses: List[Reason]) -> List[Reason]:
        """
        Trim the non-category reasons to what the category weight leaves

        The headroom is the same for every item, whether or not its category
        is preferred, so a category match always lifts the final score.
        """
        headroom = round(max(MAX_SCORE - self.weights.category, 0.0), 1)
        kept = []
        for reason in bonuses:
            if headroom <= 0:
                break
            if reason.score > headroom:
                reason = Reason(reason.type, headroom, reason.description)
            kept.append(reason)
            headroom = round(headroom - reason.score, 1)
        return kept

    def _category_reason(self, item: Item) -> Optional[Reason]:
        category = ItemCategory(item.category)
        if category not in self.profile.preferred_categories:
            return None
        return Reason(
            ReasonType.CATEGORY,
            round(min(self.weights.category, MAX_SCORE), 1),
            f"Catégorie préférée: {category.value}"
        )

    def _condition_reason(self, item: Item) -> Optional[Reason]:
        condition = ItemCondition(item.condition)
        if condition not in self.profile.preferred_conditions:
            return None
        return Reason(
            ReasonType.CONDITION,
            round(self.weights.condition, 1),
            f"État préféré: {condition.value}"
        )

    def _tags_reason(self, item: Item) -> Optional[Reason]:
        if not self.profile.preferred_categories or not item.tags:
            return None

        category_names = [c.value.lower() for c in self.profile.preferred_categories]
        common = [
            tag for tag in item.tags
            if any(tag.lower() in name or name in tag.lower() for name in category_names)
        ]
        if not common:
            return None

        tag_score = min(len(common) * self.weights.tag, self.weights.tag_max)
        return Reason(ReasonType.TAGS, round(tag_score, 1), f"Tags communs: {', '.join(common)}")

    def _popularity_reason(self, item: Item) -> Optional[Reason]:
        popularity = max(item.popularity_score or 0.0, 0.0)
        ratio = min(popularity / self.weights.popularity_ceiling, 1.0)
        return Reason(
            ReasonType.POPULARITY,
            round(ratio * self.weights.popularity_max, 1),
            f"Objet populaire ({popularity:g} points)"
        )

    def _recency_reason(self, item: Item) -> Optional[Reason]:
        if item.created_at is None:
            return None

        age_days = max((self.now - item.created_at).total_seconds() / 86400, 0.0)
        if age_days >= self.weights.recency_days:
            return None

        bonus = self.weights.recency_max * (1 - age_days / self.weights.recency_days)
        days = int(age_days)
        description = "Publié aujourd'hui" if days == 0 else f"Publié il y a {days} jour(s)"
        return Reason(ReasonType.RECENCY, round(bonus, 1), description)

    def _rarity_reason(self, item: Item) -> Optional[Reason]:
        category = ItemCategory(item.category)
        share = self.category_frequencies.get(category)
        if share is None:
            return None

        rarity = max(0.0, (1 - share) * self.weights.rarity_max)
        return Reason(
            ReasonType.RARITY,
            round(rarity, 1),
            f"Rareté de la catégorie: {category.value}"
        )

    def _location_reason(self, item: Item) -> Optional[Reason]:
        country = self.profile.country
        owner = item.owner
        if not country or owner is None or not owner.country:
            return None
        if owner.country.strip().lower() != country.strip().lower():
            return None
        return Reason(ReasonType.LOCATION, round(self.weights.location, 1), f"Même pays: {country}")

    def _history_reason(self, item: Item) -> Optional[Reason]:
        if not self.exchange_history:
            return None

        candidate = _keywords(item.title)
        history_score = 0.0
        for exchanged in self.exchange_history:
            common = candidate & exchanged
            if common:
                history_score += min(len(common) * self.weights.history_keyword, self.weights.history_max)

        history_score = min(history_score, self.weights.history_max)
        return Reason(
            ReasonType.HISTORY,
            round(history_score, 1),
            "Affinité avec vos échanges passés"
        )
