"""Review model."""
import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from portfolio_builder.db.base import Base


class Review(Base):
    """Testimonial left by a user for the landing page."""
    
    __tablename__ = "reviews"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    quote = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    
    # Relationships
    user = relationship("User", back_populates="reviews")
