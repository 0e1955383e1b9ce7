"""Matching API endpoints: recommendations and preferences"""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import Optional

from ..config import settings
from ..schemas.item import ItemResponse
from ..schemas.matching import (
    SavePreferencesRequest,
    PreferencesOut,
    PreferencesResponse,
    RecommendationOut,
    RecommendationReason,
    RecommendationsResponse,
)
from ..models import User
from ..services.matching import MatchingService, preferences_summary
from ..services.preferences import PreferencesService
from ..utils.database import get_db
from ..utils.dependencies import get_current_user, get_optional_user
from ..utils.logging import get_logger
from ..utils.metrics import record_anonymous_recommendation
from ..utils.rate_limit import limiter

logger = get_logger(__name__)

router = APIRouter()


@router.get("/recommendations", response_model=RecommendationsResponse)
@limiter.limit(settings.RECOMMENDATIONS_RATE_LIMIT)
def get_recommendations(
    request: Request,
    limit: int = Query(20, ge=1, le=50, description="Maximum number of recommendations"),
    offset: int = Query(0, ge=0, description="Number of ranked recommendations to skip"),
    diversify: bool = Query(True, description="Cap recommendations per owner and category"),
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """
    Get personalised item recommendations

    Anonymous callers get an empty list instead of a 401 so that
    public pages keep working.
    """

    if current_user is None:
        record_anonymous_recommendation()
        logger.info("Anonymous recommendation request", client=request.client.host if request.client else None)
        return RecommendationsResponse(recommendations=[], total=0)

    result = MatchingService(db).get_recommendations(
        current_user.id,
        limit=limit,
        offset=offset,
        diversify=diversify
    )

    recommendations = [
        RecommendationOut(
            item=ItemResponse.model_validate(rec.item),
            score=rec.score,
            reasons=[RecommendationReason(**reason.to_dict()) for reason in rec.reasons]
        )
        for rec in result["recommendations"]
    ]

    return RecommendationsResponse(
        recommendations=recommendations,
        total=result["total"],
        user_preferences=preferences_summary(result["preferences"])
    )


@router.get("/preferences", response_model=PreferencesResponse)
def get_preferences(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the caller's preferences (defaults when none were saved)"""

    preferences = PreferencesService(db).get(current_user.id)
    return PreferencesResponse(preferences=PreferencesOut.model_validate(preferences))


@router.post("/preferences", response_model=PreferencesResponse)
def save_preferences(
    payload: SavePreferencesRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create or update the caller's preferences"""

    preferences, _ = PreferencesService(db).save(
        current_user.id,
        payload.model_dump(exclude_unset=True)
    )
    return PreferencesResponse(preferences=PreferencesOut.model_validate(preferences))
