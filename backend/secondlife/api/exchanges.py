"""Exchange API endpoints"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..schemas.exchange import (
    ExchangeCreate,
    ExchangeStatusUpdate,
    ExchangeResponse,
    PaginatedExchanges,
)
from ..models import User
from ..services.exchanges import ExchangeService
from ..utils.database import get_db
from ..utils.dependencies import get_current_user

router = APIRouter()


@router.post("/", response_model=ExchangeResponse, status_code=status.HTTP_201_CREATED)
def propose_exchange(
    exchange: ExchangeCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Propose an exchange for another user's item"""

    return ExchangeService(db).propose(
        current_user,
        requested_item_id=exchange.requested_item_id,
        offered_item_id=exchange.offered_item_id,
        message=exchange.message
    )


@router.get("/", response_model=PaginatedExchanges)
def list_my_exchanges(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=50),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List exchanges the caller takes part in"""

    return ExchangeService(db).list_for_user(current_user, page=page, limit=limit)


@router.get("/{exchange_id}", response_model=ExchangeResponse)
def get_exchange(
    exchange_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get one exchange (participants only)"""

    return ExchangeService(db).get_for_user(exchange_id, current_user)


@router.patch("/{exchange_id}/status", response_model=ExchangeResponse)
def update_exchange_status(
    exchange_id: int,
    status_update: ExchangeStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Move an exchange to a new status

    - responder: PENDING -> ACCEPTED | DECLINED
    - requester: PENDING -> CANCELLED
    - either participant: ACCEPTED -> COMPLETED | CANCELLED
    """

    return ExchangeService(db).update_status(exchange_id, current_user, status_update.status)
