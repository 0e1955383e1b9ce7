"""User preferences model"""

from sqlalchemy import Column, Integer, String, JSON, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base


class UserPreferences(Base):
    """Matching preferences, one row per user"""

    __tablename__ = "preferences"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    preferred_categories = Column(JSON, default=list, nullable=False)
    disliked_categories = Column(JSON, default=list, nullable=False)
    preferred_conditions = Column(JSON, default=list, nullable=False)
    locale = Column(String(10))
    country = Column(String(100))
    radius_km = Column(Integer)

    # Relationships
    user = relationship("User", back_populates="preferences")

    def __repr__(self):
        return f"<UserPreferences(user_id={self.user_id})>"
