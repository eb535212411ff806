"""User model."""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, JSON, Uuid
from sqlalchemy.orm import relationship
from portfolio_builder.db.base import Base

DEFAULT_AVATAR = "https://www.gravatar.com/avatar/?d=mp"


class User(Base):
    """Account and public profile of a portfolio owner."""
    
    __tablename__ = "users"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String(100), default="Freelancer")
    bio = Column(String(500))
    avatar = Column(Text, default=DEFAULT_AVATAR)
    social_links = Column(JSON, default=dict)  # linkedin / github / twitter / website
    skills = Column(JSON, default=list)  # [{"name": ..., "proficiency": 1-5}]
    resume_url = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    portfolio = relationship("Portfolio", back_populates="user", uselist=False, cascade="all, delete-orphan")
    projects = relationship("Project", back_populates="user", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="user", cascade="all, delete-orphan")
