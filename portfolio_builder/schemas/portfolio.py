"""
Portfolio section schemas.

Each section is stored as a JSON column on ``portfolios`` using the wire
(camelCase) keys, so a stored section can be validated straight back into
these models.
"""
import re
import uuid
from datetime import date
from typing import List, Literal, Optional
from urllib.parse import urlparse

from pydantic import Field, field_validator, model_validator

from portfolio_builder.schemas.base import CamelModel
from portfolio_builder.services.templates import TemplateKind

Theme = Literal["light", "dark"]
Spacing = Literal["comfortable", "compact", "spacious"]
Layout = Literal["classic", "modern", "minimal", "professional", "dark", "elegant", "futuristic"]
BackgroundType = Literal["color", "gradient", "image"]

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
PHONE_PATTERN = re.compile(r"^\d{10}$")


def _check_url(value: Optional[str]) -> Optional[str]:
    if not value:
        return value
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("Invalid URL.")
    return value


class Gradient(CamelModel):
    from_: str = Field(default="#4F3B78", alias="from")
    to: str = "#6B4F9E"
    direction: str = "to bottom"


class HeroBackground(CamelModel):
    type: BackgroundType = "color"
    color: str = "#808080"
    gradient: Gradient = Field(default_factory=Gradient)
    image: Optional[str] = None
    overlay: bool = True
    overlay_opacity: float = Field(default=0.5, ge=0, le=1)


class Hero(CamelModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    background: HeroBackground = Field(default_factory=HeroBackground)
    cta_text: str = "View My Work"
    cta_link: str = "#projects"


class About(CamelModel):
    title: str = "About Me"
    bio: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    image: Optional[str] = None


class Experience(CamelModel):
    title: str = Field(..., min_length=2)
    company: str = Field(..., min_length=2)
    location: Optional[str] = Field(None, max_length=100)
    start_date: date
    end_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = Field(None, max_length=500)
    responsibilities: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must be after start date.")
        return self


class Certification(CamelModel):
    name: str = Field(..., min_length=2)
    issuer: str = Field(..., min_length=2)
    issue_date: date
    expiry_date: Optional[date] = None
    credential_id: Optional[str] = Field(None, alias="credentialID")
    credential_url: Optional[str] = Field(None, alias="credentialURL")
    description: Optional[str] = Field(None, max_length=500)

    @field_validator("credential_url")
    @classmethod
    def valid_url(cls, value):
        return _check_url(value)

    @model_validator(mode="after")
    def expiry_after_issue(self):
        if self.expiry_date and self.expiry_date < self.issue_date:
            raise ValueError("Expiry date must be after issue date.")
        return self


class Contact(CamelModel):
    email: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = Field(None, max_length=100)

    @field_validator("linkedin", "github")
    @classmethod
    def valid_urls(cls, value):
        return _check_url(value)

    @field_validator("email")
    @classmethod
    def valid_email(cls, value):
        if value and not EMAIL_PATTERN.fullmatch(value):
            raise ValueError("Valid email required")
        return value

    @field_validator("phone")
    @classmethod
    def ten_digits(cls, value):
        if value and not PHONE_PATTERN.match(value):
            raise ValueError("Phone must be exactly 10 digits.")
        return value


class Testimonial(CamelModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    position: Optional[str] = None
    company: Optional[str] = None
    content: str
    rating: Optional[int] = Field(None, ge=1, le=5)


class TestimonialInput(CamelModel):
    name: str
    position: Optional[str] = None
    company: Optional[str] = None
    content: str
    rating: Optional[int] = Field(None, ge=1, le=5)


class Customization(CamelModel):
    primary_color: str = "#4F3B78"
    secondary_color: str = "#6B4F9E"
    font_family: str = "Inter"
    layout: Layout = "modern"
    spacing: Spacing = "comfortable"


class CustomizationPatch(CamelModel):
    """Shallow patch over the stored customization; unset keys are kept."""

    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    font_family: Optional[str] = None
    layout: Optional[Layout] = None
    spacing: Optional[Spacing] = None


class PortfolioFields(CamelModel):
    """Writable portfolio fields. ``user`` and ``views`` are never accepted."""

    template: Optional[TemplateKind] = None
    theme: Optional[Theme] = None
    hero: Optional[Hero] = None
    about: Optional[About] = None
    experience: Optional[List[Experience]] = None
    certifications: Optional[List[Certification]] = None
    contact: Optional[Contact] = None
    testimonials: Optional[List[Testimonial]] = None
    customization: Optional[Customization] = None
    custom_domain: Optional[str] = None
    is_public: Optional[bool] = None

    def to_document(self) -> dict:
        """Dump the supplied fields to column-name keys with JSON-ready values."""
        data = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, CamelModel):
                value = value.model_dump(mode="json", by_alias=True)
            elif isinstance(value, list):
                value = [item.model_dump(mode="json", by_alias=True) for item in value]
            elif isinstance(value, TemplateKind):
                value = value.value
            data[name] = value
        return data
