"""Portfolio ownership and public visibility.

Decides which portfolio a request refers to and whether the caller may read
or change it:

- the owner reads and edits their own portfolio (one per user);
- anyone may read a portfolio through the owner's username, but only while
  it is public; each such read counts as a view.
"""
from dataclasses import dataclass, field
from typing import List, Optional
import logging
import uuid

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portfolio_builder.core.errors import (
    ConflictError,
    NotFoundError,
    AuthorizationError,
    PrivateResourceError,
    ValidationError,
)
from portfolio_builder.models import Portfolio, Project, User
from portfolio_builder.schemas.portfolio import (
    About,
    CustomizationPatch,
    Customization,
    Hero,
    PortfolioFields,
    Testimonial,
    TestimonialInput,
)
from portfolio_builder.services.ownership import find_by_id
from portfolio_builder.services.templates import TemplateKind, apply_preset, deep_merge

logger = logging.getLogger(__name__)

PORTFOLIO_NOT_FOUND = "Portfolio not found"


@dataclass
class PublicView:
    """Result of a public lookup. ``portfolio`` is None when there is none."""

    portfolio: Optional[Portfolio] = None
    owner: Optional[User] = None
    projects: List[Project] = field(default_factory=list)


class PortfolioService:
    """Portfolio reads and writes on behalf of one request.

    Usage:
        service = PortfolioService(db)
        portfolio = service.get_own(current_user.id)
    """

    def __init__(self, db: Session):
        self.db = db

    def _find_by_owner(self, owner_id: uuid.UUID) -> Optional[Portfolio]:
        return self.db.query(Portfolio).filter(Portfolio.user_id == owner_id).first()

    def _require_own(self, owner_id: uuid.UUID) -> Portfolio:
        portfolio = self._find_by_owner(owner_id)
        if portfolio is None:
            raise NotFoundError(PORTFOLIO_NOT_FOUND)
        return portfolio

    def _save(self, portfolio: Portfolio) -> Portfolio:
        self.db.commit()
        self.db.refresh(portfolio)
        return portfolio

    def _apply(self, portfolio: Portfolio, fields: PortfolioFields) -> Portfolio:
        for name, value in fields.to_document().items():
            setattr(portfolio, name, value)
        return self._save(portfolio)

    def get_own(self, owner_id: uuid.UUID) -> Portfolio:
        return self._require_own(owner_id)

    def get_public(self, username: str) -> PublicView:
        """Public page data for ``username``.

        A missing user or a missing portfolio is an empty result, not an
        error. A private portfolio raises ``PrivateResourceError``.
        """
        owner = self.db.query(User).filter(User.username == username).first()
        if owner is None:
            return PublicView()

        projects = self.db.query(Project).filter(Project.user_id == owner.id).all()
        portfolio = self._find_by_owner(owner.id)
        if portfolio is None:
            return PublicView(owner=owner, projects=projects)

        if not portfolio.is_public:
            raise PrivateResourceError("This portfolio is private")

        # increment in the database; view counts do not touch updated_at
        self.db.execute(
            update(Portfolio)
            .where(Portfolio.id == portfolio.id)
            .values(views=Portfolio.views + 1, updated_at=Portfolio.updated_at)
        )
        self._save(portfolio)

        return PublicView(portfolio=portfolio, owner=owner, projects=projects)

    def create(self, owner_id: uuid.UUID, fields: PortfolioFields) -> Portfolio:
        if self._find_by_owner(owner_id) is not None:
            raise ConflictError("Portfolio already exists")

        hero = Hero().model_dump(mode="json", by_alias=True)
        customization = Customization().model_dump(mode="json", by_alias=True)
        if fields.template is not None:
            hero, customization = apply_preset(fields.template, hero, customization)

        # supplied sections overlay the seeded defaults key by key
        if fields.hero is not None:
            hero = deep_merge(hero, fields.hero.model_dump(mode="json", by_alias=True, exclude_unset=True))
        if fields.customization is not None:
            customization = deep_merge(
                customization,
                fields.customization.model_dump(mode="json", by_alias=True, exclude_unset=True),
            )

        portfolio = Portfolio(
            user_id=owner_id,
            about=About().model_dump(mode="json", by_alias=True),
            experience=[],
            certifications=[],
            testimonials=[],
        )
        for name, value in fields.to_document().items():
            setattr(portfolio, name, value)
        portfolio.hero = hero
        portfolio.customization = customization

        self.db.add(portfolio)
        try:
            self.db.commit()
        except IntegrityError:
            # a concurrent create won the unique owner constraint
            self.db.rollback()
            raise ConflictError("Portfolio already exists")
        self.db.refresh(portfolio)

        logger.info("Created portfolio %s for user %s", portfolio.id, owner_id)
        return portfolio

    def update_by_id_or_owner(self, requester_id: uuid.UUID, maybe_id, fields: PortfolioFields) -> Portfolio:
        """Update a portfolio addressed by id, falling back to the caller's own.

        1. A portfolio with id ``maybe_id`` exists: it must belong to the
           requester, otherwise ``AuthorizationError``.
        2. No such portfolio: update the requester's own portfolio instead,
           or raise ``NotFoundError`` if they have none.
        """
        portfolio = find_by_id(self.db, Portfolio, maybe_id)

        if portfolio is not None:
            if portfolio.user_id != requester_id:
                logger.warning(
                    "User %s denied update of portfolio %s owned by %s",
                    requester_id, portfolio.id, portfolio.user_id,
                )
                raise AuthorizationError("Not authorized to update this portfolio")
            return self._apply(portfolio, fields)

        own = self._find_by_owner(requester_id)
        if own is None:
            raise NotFoundError(PORTFOLIO_NOT_FOUND)
        return self._apply(own, fields)

    def update_theme(self, owner_id: uuid.UUID, theme: Optional[str]) -> Portfolio:
        if not theme:
            raise ValidationError("Please provide a theme")

        portfolio = self._require_own(owner_id)
        portfolio.theme = theme
        return self._save(portfolio)

    def update_customization(self, owner_id: uuid.UUID, patch: CustomizationPatch) -> Portfolio:
        portfolio = self._require_own(owner_id)
        changes = patch.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude_none=True)
        portfolio.customization = {**(portfolio.customization or {}), **changes}
        return self._save(portfolio)

    def select_template(self, owner_id: uuid.UUID, kind: TemplateKind) -> Portfolio:
        """Switch template and write its preset defaults over hero/customization."""
        portfolio = self._require_own(owner_id)
        hero, customization = apply_preset(kind, portfolio.hero, portfolio.customization)
        portfolio.template = kind.value
        portfolio.hero = hero
        portfolio.customization = customization
        return self._save(portfolio)

    # Testimonials live inside the owner's portfolio document

    def add_testimonial(self, owner_id: uuid.UUID, data: TestimonialInput) -> Portfolio:
        portfolio = self._require_own(owner_id)
        testimonial = Testimonial(**data.model_dump())
        portfolio.testimonials = [
            *(portfolio.testimonials or []),
            testimonial.model_dump(mode="json", by_alias=True),
        ]
        return self._save(portfolio)

    def _testimonial_index(self, portfolio: Portfolio, testimonial_id: str) -> int:
        for index, item in enumerate(portfolio.testimonials or []):
            if item.get("id") == testimonial_id:
                return index
        raise NotFoundError("Testimonial not found")

    def update_testimonial(self, owner_id: uuid.UUID, testimonial_id: str, data: TestimonialInput) -> Portfolio:
        portfolio = self._require_own(owner_id)
        index = self._testimonial_index(portfolio, testimonial_id)

        testimonials = list(portfolio.testimonials)
        testimonials[index] = {
            **testimonials[index],
            **data.model_dump(mode="json", by_alias=True, exclude_unset=True),
        }
        portfolio.testimonials = testimonials
        return self._save(portfolio)

    def delete_testimonial(self, owner_id: uuid.UUID, testimonial_id: str) -> Portfolio:
        portfolio = self._require_own(owner_id)
        index = self._testimonial_index(portfolio, testimonial_id)

        testimonials = list(portfolio.testimonials)
        del testimonials[index]
        portfolio.testimonials = testimonials
        return self._save(portfolio)
