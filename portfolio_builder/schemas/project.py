"""Project request/response schemas."""
import uuid
from datetime import date, datetime
from typing import List, Optional

from pydantic import AliasChoices, Field

from portfolio_builder.schemas.base import CamelModel


class ProjectImageIn(CamelModel):
    url: str
    caption: Optional[str] = None


class ProjectImageResponse(CamelModel):
    id: uuid.UUID
    url: str
    caption: Optional[str] = None


class ProjectCreate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    featured: bool = False
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class ProjectUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    technologies: Optional[List[str]] = None
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    featured: Optional[bool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class ProjectImagesRequest(CamelModel):
    images: Optional[List[ProjectImageIn]] = None


class ProjectResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID = Field(
        validation_alias=AliasChoices("user_id", "user"),
        serialization_alias="user",
    )
    title: str
    description: str
    technologies: List[str] = Field(default_factory=list)
    images: List[ProjectImageResponse] = Field(default_factory=list)
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    featured: bool = False
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
