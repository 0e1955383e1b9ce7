"""Exchange schemas"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from ..models.enums import ExchangeStatus


class ExchangeCreate(BaseModel):
    """Schema for proposing an exchange"""

    requested_item_id: int
    offered_item_id: Optional[int] = None
    message: Optional[str] = Field(None, max_length=500)


class ExchangeStatusUpdate(BaseModel):
    """Schema for moving an exchange to a new status"""

    status: ExchangeStatus


class ExchangeResponse(BaseModel):
    """Schema for exchange response"""

    id: int
    requester_id: int
    responder_id: int
    requested_item_id: int
    offered_item_id: Optional[int] = None
    message: Optional[str] = None
    status: ExchangeStatus
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PaginatedExchanges(BaseModel):
    """Page of exchanges"""

    exchanges: List[ExchangeResponse]
    total: int
    page: int
    limit: int
