"""Portfolio routes."""
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import AliasChoices, Field
from sqlalchemy.orm import Session

from portfolio_builder.db.sessions import get_db
from portfolio_builder.models.user import User
from portfolio_builder.core.security import get_current_user
from portfolio_builder.schemas.base import CamelModel
from portfolio_builder.schemas.portfolio import (
    About,
    Certification,
    Contact,
    Customization,
    CustomizationPatch,
    Experience,
    Hero,
    PortfolioFields,
    Testimonial,
    TestimonialInput,
    Theme,
)
from portfolio_builder.schemas.project import ProjectResponse
from portfolio_builder.services.portfolio_service import PortfolioService
from portfolio_builder.services.templates import TEMPLATES, TemplateKind, build_presentation


router = APIRouter(prefix="/portfolios", tags=["Portfolios"])


# Request/Response schemas
class ThemeRequest(CamelModel):
    theme: Optional[Theme] = None


class TemplateRequest(CamelModel):
    template: TemplateKind


class PortfolioResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID = Field(
        validation_alias=AliasChoices("user_id", "user"),
        serialization_alias="user",
    )
    template: str
    theme: str
    hero: Hero = Field(default_factory=Hero)
    about: About = Field(default_factory=About)
    experience: List[Experience] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    contact: Optional[Contact] = None
    testimonials: List[Testimonial] = Field(default_factory=list)
    customization: Customization = Field(default_factory=Customization)
    custom_domain: Optional[str] = None
    is_public: bool
    views: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OwnerSummary(CamelModel):
    id: uuid.UUID
    name: str
    username: str


class PublicPortfolio(PortfolioResponse):
    user_id: OwnerSummary = Field(validation_alias="user", serialization_alias="user")


class PublicPortfolioResponse(CamelModel):
    portfolio: Optional[PublicPortfolio] = None
    projects: List[ProjectResponse] = Field(default_factory=list)
    presentation: Optional[Dict[str, Any]] = None


class TemplateInfo(CamelModel):
    id: TemplateKind
    name: str
    description: str
    default_values: Dict[str, Any]


@router.get("", response_model=PortfolioResponse)
def get_portfolio(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get the caller's own portfolio.

    Protected endpoint - requires JWT authentication.

    Raises:
        404: the caller has not created a portfolio yet
    """
    return PortfolioService(db).get_own(current_user.id)


@router.post("", response_model=PortfolioResponse, status_code=status.HTTP_201_CREATED)
def create_portfolio(
    payload: PortfolioFields,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create the caller's portfolio.

    Raises:
        409: the caller already has one
    """
    return PortfolioService(db).create(current_user.id, payload)


@router.get("/templates", response_model=List[TemplateInfo])
def list_templates():
    """Available templates with the defaults applied when one is selected."""
    return [
        TemplateInfo(
            id=preset.kind,
            name=preset.name,
            description=preset.description,
            default_values={"hero": preset.hero, "customization": preset.customization},
        )
        for preset in TEMPLATES.values()
    ]


@router.put("/theme", response_model=PortfolioResponse)
def update_theme(
    payload: ThemeRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return PortfolioService(db).update_theme(current_user.id, payload.theme)


@router.put("/customization", response_model=PortfolioResponse)
def update_customization(
    payload: CustomizationPatch,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Shallow-merge the supplied customization keys over the stored ones."""
    return PortfolioService(db).update_customization(current_user.id, payload)


@router.put("/template", response_model=PortfolioResponse)
def select_template(
    payload: TemplateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return PortfolioService(db).select_template(current_user.id, payload.template)


@router.post("/testimonials", response_model=PortfolioResponse, status_code=status.HTTP_201_CREATED)
def add_testimonial(
    payload: TestimonialInput,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return PortfolioService(db).add_testimonial(current_user.id, payload)


@router.put("/testimonials/{testimonial_id}", response_model=PortfolioResponse)
def update_testimonial(
    testimonial_id: str,
    payload: TestimonialInput,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return PortfolioService(db).update_testimonial(current_user.id, testimonial_id, payload)


@router.delete("/testimonials/{testimonial_id}", response_model=PortfolioResponse)
def delete_testimonial(
    testimonial_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return PortfolioService(db).delete_testimonial(current_user.id, testimonial_id)


@router.get("/public/{username}", response_model=PublicPortfolioResponse)
def get_public_portfolio(username: str, db: Session = Depends(get_db)):
    """
    Public portfolio page data for a username.

    Public endpoint. Always returns both ``portfolio`` and ``projects``;
    ``portfolio`` is null when the user or their portfolio does not exist.

    Raises:
        403: the portfolio is private
    """
    view = PortfolioService(db).get_public(username)

    presentation = None
    if view.portfolio is not None:
        presentation = build_presentation(
            view.portfolio.template, view.portfolio.hero, view.portfolio.customization
        )

    return {
        "portfolio": view.portfolio,
        "projects": view.projects,
        "presentation": presentation,
    }


@router.put("/{portfolio_id}", response_model=PortfolioResponse)
def update_portfolio(
    portfolio_id: str,
    payload: PortfolioFields,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update a portfolio by id, or the caller's own when the id is unknown.

    Raises:
        403: the portfolio with that id belongs to someone else
        404: unknown id and the caller has no portfolio
    """
    return PortfolioService(db).update_by_id_or_owner(current_user.id, portfolio_id, payload)
