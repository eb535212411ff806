"""Portfolio model."""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Boolean, Integer, JSON, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from portfolio_builder.db.base import Base


class Portfolio(Base):
    """The single portfolio document of a user.

    Structured sections (hero, about, contact, ...) are stored as JSON
    columns; their shape is owned by ``portfolio_builder.schemas.portfolio``.
    """
    
    __tablename__ = "portfolios"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # unique: at most one portfolio per user
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    template = Column(String(30), nullable=False, default="modern")
    theme = Column(String(20), nullable=False, default="light")
    hero = Column(JSON, default=dict)
    about = Column(JSON, default=dict)
    experience = Column(JSON, default=list)
    certifications = Column(JSON, default=list)
    contact = Column(JSON, default=dict)
    testimonials = Column(JSON, default=list)
    customization = Column(JSON, default=dict)
    custom_domain = Column(Text)
    is_public = Column(Boolean, nullable=False, default=True)
    views = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    user = relationship("User", back_populates="portfolio")
