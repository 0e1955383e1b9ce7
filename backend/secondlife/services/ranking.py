"""Ranking and pagination of scored recommendations"""

from collections import defaultdict
from datetime import datetime
from typing import List, Tuple

from .scoring import ScoredItem


def sort_recommendations(recommendations: List[ScoredItem]) -> List[ScoredItem]:
    """
    Order by score descending, then newest first, then id

    Sorting in successive stable passes keeps the ordering fully
    deterministic for equal scores and timestamps.
    """
    ordered = sorted(recommendations, key=lambda r: r.item.id or 0)
    ordered.sort(key=lambda r: r.item.created_at or datetime.min, reverse=True)
    ordered.sort(key=lambda r: r.score, reverse=True)
    return ordered


def diversify(
    recommendations: List[ScoredItem],
    max_per_owner: int,
    max_per_category: int,
) -> List[ScoredItem]:
    """Greedy pass capping items per owner and per category"""

    owner_counts = defaultdict(int)
    category_counts = defaultdict(int)
    kept = []

    for rec in recommendations:
        owner_id = rec.item.owner_id
        category = rec.item.category

        if owner_counts[owner_id] >= max_per_owner:
            continue
        if category_counts[category] >= max_per_category:
            continue

        kept.append(rec)
        owner_counts[owner_id] += 1
        category_counts[category] += 1

    return kept


def rank(
    recommendations: List[ScoredItem],
    limit: int,
    offset: int = 0,
    apply_diversity: bool = True,
    max_per_owner: int = 2,
    max_per_category: int = 3,
) -> Tuple[List[ScoredItem], int]:
    """
    Rank recommendations and cut one page

    Args:
        recommendations: Scored candidates in any order
        limit: Page size
        offset: Number of ranked entries to skip
        apply_diversity: Cap items per owner and category before paging
        max_per_owner: Owner cap used by the diversity pass
        max_per_category: Category cap used by the diversity pass

    Returns:
        (page, total) where total counts ranked entries before paging
    """
    ranked = sort_recommendations(recommendations)

    if apply_diversity:
        ranked = diversify(ranked, max_per_owner, max_per_category)

    return ranked[offset:offset + limit], len(ranked)
