"""Database models."""
from portfolio_builder.models.user import User
from portfolio_builder.models.portfolio import Portfolio
from portfolio_builder.models.project import Project, ProjectImage
from portfolio_builder.models.review import Review

__all__ = [
    "User",
    "Portfolio",
    "Project",
    "ProjectImage",
    "Review",
]
