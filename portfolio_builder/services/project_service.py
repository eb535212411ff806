"""Project CRUD scoped to the owning user."""
from typing import Any, Dict, List
import logging
import uuid

from sqlalchemy.orm import Session

from portfolio_builder.core.errors import ValidationError
from portfolio_builder.models import Project, ProjectImage
from portfolio_builder.services.ownership import get_owned

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, db: Session):
        self.db = db

    def list_for(self, user_id: uuid.UUID) -> List[Project]:
        return self.db.query(Project).filter(Project.user_id == user_id).all()

    def get_owned(self, project_id, user_id: uuid.UUID) -> Project:
        return get_owned(self.db, Project, project_id, user_id, "Project")

    def create(self, user_id: uuid.UUID, data: Dict[str, Any]) -> Project:
        if not data.get("title") or not data.get("description"):
            raise ValidationError("Please add title and description")

        project = Project(user_id=user_id, **data)
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        return project

    def update(self, project_id, user_id: uuid.UUID, changes: Dict[str, Any]) -> Project:
        project = self.get_owned(project_id, user_id)
        for name, value in changes.items():
            setattr(project, name, value)
        self.db.commit()
        self.db.refresh(project)
        return project

    def delete(self, project_id, user_id: uuid.UUID) -> uuid.UUID:
        project = self.get_owned(project_id, user_id)
        deleted_id = project.id
        self.db.delete(project)
        self.db.commit()
        logger.info("Deleted project %s for user %s", deleted_id, user_id)
        return deleted_id

    def add_images(self, project_id, user_id: uuid.UUID, images: List[Dict[str, Any]]) -> Project:
        project = self.get_owned(project_id, user_id)
        for image in images:
            project.images.append(ProjectImage(url=image["url"], caption=image.get("caption")))
        self.db.commit()
        self.db.refresh(project)
        return project

    def remove_image(self, project_id, user_id: uuid.UUID, image_id: str) -> Project:
        """Drop the image with ``image_id``; unknown ids leave the project as is."""
        project = self.get_owned(project_id, user_id)
        project.images = [image for image in project.images if str(image.id) != str(image_id)]
        self.db.commit()
        self.db.refresh(project)
        return project
