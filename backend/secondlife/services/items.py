"""Item listing service"""

import math
from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ..exceptions import NotFoundError, PermissionDeniedError
from ..models import Item, User
from ..models.enums import ItemCategory, ItemCondition, ItemStatus
from ..utils.logging import get_logger

logger = get_logger(__name__)

VIEW_POPULARITY_INCREMENT = 1.0


class ItemService:
    """CRUD and search over listed items"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, item_id: int) -> Item:
        item = (
            self.db.query(Item)
            .options(joinedload(Item.owner))
            .filter(Item.id == item_id)
            .first()
        )
        if item is None:
            raise NotFoundError("Item not found")
        return item

    def get_owned(self, item_id: int, user: User) -> Item:
        """Item that the user is allowed to modify"""
        item = self.get(item_id)
        if item.owner_id != user.id:
            raise PermissionDeniedError("You can only modify your own items")
        return item

    def create(self, owner: User, data: Dict[str, Any]) -> Item:
        item = Item(**data, owner_id=owner.id, status=ItemStatus.AVAILABLE, popularity_score=0.0)
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)

        logger.info("Item created", item_id=item.id, owner_id=owner.id, category=item.category.value)
        return item

    def search(
        self,
        page: int = 1,
        limit: int = 20,
        q: Optional[str] = None,
        category: Optional[ItemCategory] = None,
        condition: Optional[ItemCondition] = None,
        status: Optional[ItemStatus] = ItemStatus.AVAILABLE,
        owner_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Filtered, newest-first page of items"""

        query = self.db.query(Item).options(joinedload(Item.owner))

        if status:
            query = query.filter(Item.status == status)
        if category:
            query = query.filter(Item.category == category)
        if condition:
            query = query.filter(Item.condition == condition)
        if owner_id is not None:
            query = query.filter(Item.owner_id == owner_id)
        if q:
            pattern = f"%{q.strip()}%"
            query = query.filter(or_(Item.title.ilike(pattern), Item.description.ilike(pattern)))

        total = query.count()
        items = (
            query.order_by(Item.created_at.desc(), Item.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )

        return {
            "items": items,
            "total": total,
            "page": page,
            "limit": limit,
            "pages": math.ceil(total / limit) if total else 0,
        }

    def record_view(self, item: Item) -> Item:
        """Views feed the popularity contribution of the match score"""
        item.popularity_score = (item.popularity_score or 0.0) + VIEW_POPULARITY_INCREMENT
        self.db.commit()
        self.db.refresh(item)
        return item

    def update(self, item_id: int, user: User, data: Dict[str, Any]) -> Item:
        item = self.get_owned(item_id, user)

        for field, value in data.items():
            setattr(item, field, value)

        self.db.commit()
        self.db.refresh(item)
        return item

    def update_status(self, item_id: int, user: User, status: ItemStatus) -> Item:
        item = self.get_owned(item_id, user)
        item.status = status
        self.db.commit()
        self.db.refresh(item)

        logger.info("Item status changed", item_id=item_id, status=status.value)
        return item

    def delete(self, item_id: int, user: User) -> None:
        item = self.get_owned(item_id, user)
        self.db.delete(item)
        self.db.commit()

        logger.info("Item deleted", item_id=item_id, owner_id=user.id)

    def popular(self, limit: int = 10) -> List[Item]:
        return (
            self.db.query(Item)
            .options(joinedload(Item.owner))
            .filter(Item.status == ItemStatus.AVAILABLE)
            .order_by(Item.popularity_score.desc(), Item.created_at.desc())
            .limit(limit)
            .all()
        )
