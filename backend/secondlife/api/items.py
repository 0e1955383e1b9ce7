"""Item API endpoints"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from ..schemas.item import ItemCreate, ItemUpdate, ItemStatusUpdate, ItemResponse, PaginatedItems
from ..models import User
from ..models.enums import ItemCategory, ItemCondition, ItemStatus
from ..services.items import ItemService
from ..utils.database import get_db
from ..utils.dependencies import get_current_user

router = APIRouter()


@router.post("/", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    item: ItemCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List a new item owned by the caller"""

    return ItemService(db).create(current_user, item.model_dump())


@router.get("/", response_model=PaginatedItems)
def list_items(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=50),
    q: Optional[str] = Query(None, max_length=100, description="Search in title and description"),
    category: Optional[ItemCategory] = None,
    condition: Optional[ItemCondition] = None,
    status: Optional[ItemStatus] = ItemStatus.AVAILABLE,
    owner_id: Optional[int] = None,
    db: Session = Depends(get_db)
):
    """List items with filters (available items by default)"""

    return ItemService(db).search(
        page=page,
        limit=limit,
        q=q,
        category=category,
        condition=condition,
        status=status,
        owner_id=owner_id
    )


@router.get("/popular/top", response_model=List[ItemResponse])
def get_popular_items(limit: int = Query(10, ge=1, le=50), db: Session = Depends(get_db)):
    """Get most popular available items"""

    return ItemService(db).popular(limit)


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(item_id: int, db: Session = Depends(get_db)):
    """Get a specific item and count the view"""

    service = ItemService(db)
    return service.record_view(service.get(item_id))


@router.patch("/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: int,
    item_update: ItemUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update an item (owner only)"""

    update_data = item_update.model_dump(exclude_unset=True)
    return ItemService(db).update(item_id, current_user, update_data)


@router.patch("/{item_id}/status", response_model=ItemResponse)
def update_item_status(
    item_id: int,
    status_update: ItemStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Change an item's status (owner only)"""

    return ItemService(db).update_status(item_id, current_user, status_update.status)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an item (owner only)"""

    ItemService(db).delete(item_id, current_user)
    return None
