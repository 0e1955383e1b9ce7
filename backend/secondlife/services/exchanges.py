"""Exchange service: proposals and status transitions"""

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..exceptions import InvalidOperationError, NotFoundError, PermissionDeniedError
from ..models import Exchange, Item, User
from ..models.enums import ExchangeStatus, ItemStatus
from ..utils.logging import get_logger
from ..utils.metrics import record_exchange_transition

logger = get_logger(__name__)

OPEN_STATUSES = (ExchangeStatus.PENDING, ExchangeStatus.ACCEPTED)

REQUESTER = "requester"
RESPONDER = "responder"
EITHER = "either"

# (current status, target status) -> who may perform the transition
TRANSITIONS = {
    (ExchangeStatus.PENDING, ExchangeStatus.ACCEPTED): RESPONDER,
    (ExchangeStatus.PENDING, ExchangeStatus.DECLINED): RESPONDER,
    (ExchangeStatus.PENDING, ExchangeStatus.CANCELLED): REQUESTER,
    (ExchangeStatus.ACCEPTED, ExchangeStatus.COMPLETED): EITHER,
    (ExchangeStatus.ACCEPTED, ExchangeStatus.CANCELLED): EITHER,
}


class ExchangeService:
    """
    Manages barter proposals between users

    Accepting reserves the requested item (status PENDING), completing
    marks the items TRADED, cancelling an accepted exchange releases them.
    """

    def __init__(self, db: Session):
        self.db = db

    def propose(
        self,
        requester: User,
        requested_item_id: int,
        offered_item_id: Optional[int] = None,
        message: Optional[str] = None,
    ) -> Exchange:
        item = self.db.query(Item).filter(Item.id == requested_item_id).first()
        if item is None:
            raise NotFoundError("Item not found")
        if item.status != ItemStatus.AVAILABLE:
            raise InvalidOperationError("This item is no longer available")
        if item.owner_id == requester.id:
            raise InvalidOperationError("You cannot propose an exchange for your own item")

        open_exchange = (
            self.db.query(Exchange)
            .filter(
                Exchange.requested_item_id == requested_item_id,
                Exchange.status.in_(OPEN_STATUSES)
            )
            .first()
        )
        if open_exchange is not None:
            raise InvalidOperationError("An exchange is already in progress for this item")

        if offered_item_id is not None:
            offered = self.db.query(Item).filter(Item.id == offered_item_id).first()
            if offered is None:
                raise NotFoundError("Offered item not found")
            if offered.owner_id != requester.id:
                raise PermissionDeniedError("You can only offer your own items")
            if offered.status != ItemStatus.AVAILABLE:
                raise InvalidOperationError("The offered item is not available")

        exchange = Exchange(
            requester_id=requester.id,
            responder_id=item.owner_id,
            requested_item_id=requested_item_id,
            offered_item_id=offered_item_id,
            message=message,
            status=ExchangeStatus.PENDING,
        )
        self.db.add(exchange)
        self.db.commit()
        self.db.refresh(exchange)

        record_exchange_transition(ExchangeStatus.PENDING.value)
        logger.info(
            "Exchange proposed",
            exchange_id=exchange.id,
            requester_id=requester.id,
            responder_id=item.owner_id,
            item_id=requested_item_id
        )
        return exchange

    def list_for_user(self, user: User, page: int = 1, limit: int = 20) -> Dict:
        query = self.db.query(Exchange).filter(
            or_(Exchange.requester_id == user.id, Exchange.responder_id == user.id)
        )
        total = query.count()
        exchanges = (
            query.order_by(Exchange.created_at.desc(), Exchange.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return {"exchanges": exchanges, "total": total, "page": page, "limit": limit}

    def get_for_user(self, exchange_id: int, user: User) -> Exchange:
        exchange = self.db.query(Exchange).filter(Exchange.id == exchange_id).first()
        if exchange is None:
            raise NotFoundError("Exchange not found")
        if user.id not in (exchange.requester_id, exchange.responder_id):
            raise PermissionDeniedError("Access to this exchange is denied")
        return exchange

    def update_status(self, exchange_id: int, user: User, status: ExchangeStatus) -> Exchange:
        exchange = self.get_for_user(exchange_id, user)
        current = ExchangeStatus(exchange.status)

        actor = TRANSITIONS.get((current, status))
        if actor is None:
            raise InvalidOperationError(
                f"Cannot move an exchange from {current.value} to {status.value}"
            )

        role = REQUESTER if user.id == exchange.requester_id else RESPONDER
        if actor != EITHER and actor != role:
            raise PermissionDeniedError(f"Only the {actor} can set this exchange to {status.value}")

        self._check_items(exchange, status)

        exchange.status = status
        self._apply_item_effects(exchange, current, status)

        released = []
        if status == ExchangeStatus.ACCEPTED:
            released = self._cancel_competing(exchange)

        self.db.commit()
        self.db.refresh(exchange)

        for other in released:
            record_exchange_transition(ExchangeStatus.CANCELLED.value)
            logger.info(
                "Competing exchange cancelled",
                exchange_id=other.id,
                accepted_exchange_id=exchange.id
            )

        record_exchange_transition(status.value)
        logger.info(
            "Exchange status changed",
            exchange_id=exchange.id,
            from_status=current.value,
            to_status=status.value,
            user_id=user.id
        )
        return exchange

    def _items(self, exchange: Exchange) -> List[Item]:
        items = [exchange.requested_item]
        if exchange.offered_item is not None:
            items.append(exchange.offered_item)
        return items

    def _check_items(self, exchange: Exchange, status: ExchangeStatus) -> None:
        """Items must be free to accept and reserved to complete"""
        if status == ExchangeStatus.ACCEPTED:
            required = ItemStatus.AVAILABLE
        elif status == ExchangeStatus.COMPLETED:
            required = ItemStatus.PENDING
        else:
            return

        for item in self._items(exchange):
            if item.status != required:
                raise InvalidOperationError(
                    f"Item {item.id} is no longer available for this exchange"
                )

    def _cancel_competing(self, exchange: Exchange) -> List[Exchange]:
        """Cancel other pending proposals involving the reserved items"""
        item_ids = [item.id for item in self._items(exchange)]
        competing = (
            self.db.query(Exchange)
            .filter(
                Exchange.id != exchange.id,
                Exchange.status == ExchangeStatus.PENDING,
                or_(
                    Exchange.requested_item_id.in_(item_ids),
                    Exchange.offered_item_id.in_(item_ids)
                )
            )
            .all()
        )
        for other in competing:
            other.status = ExchangeStatus.CANCELLED
        return competing

    def _apply_item_effects(
        self, exchange: Exchange, current: ExchangeStatus, status: ExchangeStatus
    ) -> None:
        items = self._items(exchange)

        if status == ExchangeStatus.ACCEPTED:
            for item in items:
                item.status = ItemStatus.PENDING

        elif status == ExchangeStatus.COMPLETED:
            exchange.completed_at = datetime.utcnow()
            for item in items:
                item.status = ItemStatus.TRADED

        elif status == ExchangeStatus.CANCELLED and current == ExchangeStatus.ACCEPTED:
            for item in items:
                if item.status == ItemStatus.PENDING:
                    item.status = ItemStatus.AVAILABLE
