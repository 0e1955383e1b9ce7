"""Exchange model"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin
from .enums import ExchangeStatus


class Exchange(Base, TimestampMixin):
    """Barter proposal between two users"""

    __tablename__ = "exchanges"

    id = Column(Integer, primary_key=True, index=True)
    requester_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    responder_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    requested_item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=False)
    offered_item_id = Column(Integer, ForeignKey("items.id", ondelete="SET NULL"))
    message = Column(String(500))
    status = Column(
        Enum(ExchangeStatus, native_enum=False, length=20),
        nullable=False,
        default=ExchangeStatus.PENDING
    )
    completed_at = Column(DateTime)

    # Relationships
    requester = relationship("User", foreign_keys=[requester_id])
    responder = relationship("User", foreign_keys=[responder_id])
    requested_item = relationship("Item", foreign_keys=[requested_item_id])
    offered_item = relationship("Item", foreign_keys=[offered_item_id])

    __table_args__ = (
        Index('ix_exchanges_requester', 'requester_id'),
        Index('ix_exchanges_responder', 'responder_id'),
        Index('ix_exchanges_item_status', 'requested_item_id', 'status'),
    )

    def __repr__(self):
        return f"<Exchange(id={self.id}, item_id={self.requested_item_id}, status='{self.status}')>"
