"""Matching service: personalised item recommendations"""

import time
from datetime import datetime
from typing import Dict, List, Optional, Set

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from ..config import settings
from ..models import Item, Exchange, UserPreferences
from ..models.enums import ItemCategory, ItemStatus
from ..utils.logging import get_logger
from ..utils.metrics import record_recommendations, track_db_query
from .preferences import PreferencesService
from .ranking import rank
from .scoring import MatchScorer, MatchWeights, PreferenceProfile

logger = get_logger(__name__)


class MatchingService:
    """
    Builds recommendations for one user

    Steps:
    1. Load the user's preferences (defaults when none are stored)
    2. Fetch available candidates not owned by the user, dropping disliked
       categories and items the user already exchanged for
    3. Score every candidate
    4. Rank, diversify and paginate
    """

    def __init__(self, db: Session, weights: Optional[MatchWeights] = None):
        self.db = db
        self.weights = weights or MatchWeights.from_settings()
        self.preferences_service = PreferencesService(db)

    def get_recommendations(
        self,
        user_id: int,
        limit: int = 20,
        offset: int = 0,
        diversify: bool = True,
        now: Optional[datetime] = None,
    ) -> Dict:
        """
        Get ranked recommendations for a user

        Args:
            user_id: Requesting user
            limit: Page size
            offset: Number of ranked entries to skip
            diversify: Cap items per owner / category
            now: Reference time for the recency bonus

        Returns:
            Dictionary with recommendations (ScoredItem list), total and
            the stored preferences (None when the user has none)
        """
        start_time = time.time()

        stored = self.preferences_service.find(user_id)
        profile = PreferenceProfile.from_model(stored)

        candidates = self.fetch_candidates(user_id, profile)
        scorer = MatchScorer(
            profile,
            weights=self.weights,
            now=now,
            category_frequencies=self.category_frequencies(),
            exchange_history=self.exchange_history(user_id),
        )
        scored = scorer.score_all(candidates)

        page, total = rank(
            scored,
            limit=limit,
            offset=offset,
            apply_diversity=diversify,
            max_per_owner=settings.MATCH_MAX_PER_OWNER,
            max_per_category=settings.MATCH_MAX_PER_CATEGORY,
        )

        mode = "neutral" if profile.is_empty else "personalized"
        duration = time.time() - start_time
        record_recommendations(mode, len(page), duration)
        logger.info(
            "Recommendations generated",
            user_id=user_id,
            mode=mode,
            candidates=len(candidates),
            returned=len(page),
            total=total,
            duration_ms=round(duration * 1000, 2)
        )

        return {
            "recommendations": page,
            "total": total,
            "preferences": stored,
        }

    @track_db_query("fetch_candidates")
    def fetch_candidates(self, user_id: int, profile: PreferenceProfile) -> List[Item]:
        """Every available item the user could ask for"""

        query = (
            self.db.query(Item)
            .options(joinedload(Item.owner))
            .filter(Item.status == ItemStatus.AVAILABLE, Item.owner_id != user_id)
        )

        if profile.disliked_categories:
            query = query.filter(Item.category.notin_(list(profile.disliked_categories)))

        exchanged = self.exchanged_item_ids(user_id)
        if exchanged:
            query = query.filter(Item.id.notin_(exchanged))

        # Scored in full, ordering by score happens in the ranker
        return query.order_by(Item.id).all()

    def _user_exchanges(self, user_id: int):
        return self.db.query(Exchange).filter(
            or_(Exchange.requester_id == user_id, Exchange.responder_id == user_id)
        )

    def exchanged_item_ids(self, user_id: int) -> Set[int]:
        """Items involved in any of the user's exchanges"""
        ids = set()
        for exchange in self._user_exchanges(user_id).all():
            ids.add(exchange.requested_item_id)
            if exchange.offered_item_id is not None:
                ids.add(exchange.offered_item_id)
        return ids

    def exchange_history(self, user_id: int) -> List[List[str]]:
        """Titles of the items in each of the user's past exchanges"""
        history = []
        for exchange in self._user_exchanges(user_id).all():
            titles = []
            if exchange.requested_item is not None:
                titles.append(exchange.requested_item.title)
            if exchange.offered_item is not None:
                titles.append(exchange.offered_item.title)
            if titles:
                history.append(titles)
        return history

    @track_db_query("category_frequencies")
    def category_frequencies(self) -> Dict[ItemCategory, float]:
        """Share of each category among available items"""

        rows = (
            self.db.query(Item.category, func.count(Item.id))
            .filter(Item.status == ItemStatus.AVAILABLE)
            .group_by(Item.category)
            .all()
        )
        total = sum(count for _, count in rows)
        if total == 0:
            return {}

        return {ItemCategory(category): count / total for category, count in rows}


def preferences_summary(preferences: Optional[UserPreferences]) -> Optional[Dict]:
    """Subset of preferences echoed back with recommendations"""
    if preferences is None:
        return None
    return {
        "preferred_categories": preferences.preferred_categories,
        "preferred_conditions": preferences.preferred_conditions,
        "country": preferences.country,
    }

