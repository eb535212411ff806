"""Project routes. Every single-project operation is owner-checked."""
import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from portfolio_builder.db.sessions import get_db
from portfolio_builder.models.user import User
from portfolio_builder.core.errors import ValidationError
from portfolio_builder.core.security import get_current_user
from portfolio_builder.schemas.base import CamelModel
from portfolio_builder.schemas.project import (
    ProjectCreate,
    ProjectImagesRequest,
    ProjectResponse,
    ProjectUpdate,
)
from portfolio_builder.services.project_service import ProjectService


router = APIRouter(prefix="/projects", tags=["Projects"])


class DeletedResponse(CamelModel):
    id: uuid.UUID


@router.get("", response_model=List[ProjectResponse])
def get_projects(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ProjectService(db).list_for(current_user.id)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a project for the caller.

    Raises:
        400: title or description missing
    """
    return ProjectService(db).create(current_user.id, payload.model_dump())


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ProjectService(db).get_owned(project_id, current_user.id)


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: str,
    payload: ProjectUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Partial update: only the supplied fields change."""
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    return ProjectService(db).update(project_id, current_user.id, changes)


@router.delete("/{project_id}", response_model=DeletedResponse)
def delete_project(
    project_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    deleted_id = ProjectService(db).delete(project_id, current_user.id)
    return DeletedResponse(id=deleted_id)


@router.post("/{project_id}/images", response_model=ProjectResponse)
def upload_project_images(
    project_id: str,
    payload: ProjectImagesRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Append images (``{"images": [{"url": ..., "caption": ...}]}``)."""
    service = ProjectService(db)
    # ownership is checked before the payload so strangers learn nothing
    service.get_owned(project_id, current_user.id)
    if payload.images is None:
        raise ValidationError("Please provide images array")
    images = [image.model_dump() for image in payload.images]
    return service.add_images(project_id, current_user.id, images)


@router.delete("/{project_id}/images/{image_id}", response_model=ProjectResponse)
def delete_project_image(
    project_id: str,
    image_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ProjectService(db).remove_image(project_id, current_user.id, image_id)
