"""Project models."""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Date, DateTime, Text, Boolean, JSON, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from portfolio_builder.db.base import Base


class Project(Base):
    """Project shown on a user's portfolio."""
    
    __tablename__ = "projects"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    technologies = Column(JSON, default=list)
    github_url = Column(Text)
    live_url = Column(Text)
    featured = Column(Boolean, nullable=False, default=False)
    start_date = Column(Date)
    end_date = Column(Date)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    user = relationship("User", back_populates="projects")
    images = relationship(
        "ProjectImage",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectImage.created_at",
    )


class ProjectImage(Base):
    """Image attached to a project."""
    
    __tablename__ = "project_images"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(Text, nullable=False)
    caption = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    # Relationships
    project = relationship("Project", back_populates="images")
