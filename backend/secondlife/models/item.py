"""Item model"""

from sqlalchemy import Column, Integer, String, Text, JSON, Float, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin
from .enums import ItemCategory, ItemCondition, ItemStatus


class Item(Base, TimestampMixin):
    """Item listed for exchange"""

    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False, index=True)
    description = Column(Text)
    category = Column(Enum(ItemCategory, native_enum=False, length=20), nullable=False, index=True)
    condition = Column(Enum(ItemCondition, native_enum=False, length=20), nullable=False)
    status = Column(
        Enum(ItemStatus, native_enum=False, length=20),
        nullable=False,
        default=ItemStatus.AVAILABLE,
        index=True
    )
    tags = Column(JSON, default=list)
    popularity_score = Column(Float, default=0.0, nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # Relationships
    owner = relationship("User", back_populates="items")

    __table_args__ = (
        Index('ix_items_status_owner', 'status', 'owner_id'),
        Index('ix_items_popularity', 'popularity_score'),
    )

    def __repr__(self):
        return f"<Item(id={self.id}, title='{self.title}', status='{self.status}')>"
