"""User account and profile routes."""
import logging
from typing import Dict, List, Optional
import uuid

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from pydantic import EmailStr, Field
from datetime import datetime

from portfolio_builder.db.sessions import get_db
from portfolio_builder.models.user import User
from portfolio_builder.core.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from portfolio_builder.core.security import (
    get_password_hash,
    verify_password,
    issue_token_for,
    get_current_user
)
from portfolio_builder.schemas.base import CamelModel


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])

USERNAME_PATTERN = r"^[a-zA-Z0-9_-]+$"


# Request/Response schemas
class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1)
    username: str = Field(..., min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class AuthResponse(CamelModel):
    id: uuid.UUID
    name: str
    username: str
    email: str
    token: str


class SocialLinks(CamelModel):
    linkedin: Optional[str] = None
    github: Optional[str] = None
    twitter: Optional[str] = None
    website: Optional[str] = None


class Skill(CamelModel):
    name: str
    proficiency: Optional[int] = Field(None, ge=1, le=5)


class UserResponse(CamelModel):
    id: uuid.UUID
    name: str
    username: str
    email: str
    role: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    skills: List[Skill] = Field(default_factory=list)
    resume_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileUpdate(CamelModel):
    name: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=500)
    role: Optional[str] = None


class AvatarUpdate(CamelModel):
    avatar_url: str


class SocialLinksUpdate(CamelModel):
    social_links: SocialLinks


class SkillsUpdate(CamelModel):
    skills: List[Skill]


class ResumeUpdate(CamelModel):
    resume_url: str


class ResetPasswordRequest(CamelModel):
    email: Optional[str] = None
    new_password: Optional[str] = None


class ResetPasswordResponse(CamelModel):
    message: str
    user_id: uuid.UUID


def _auth_response(user: User, request: Request) -> AuthResponse:
    return AuthResponse(
        id=user.id,
        name=user.name,
        username=user.username,
        email=user.email,
        token=issue_token_for(user, request.app.state.settings),
    )


def _save(db: Session, user: User) -> User:
    db.commit()
    db.refresh(user)
    return user


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, request: Request, db: Session = Depends(get_db)):
    """
    Register a new user.
    
    - Rejects a taken email or username
    - Creates user account with hashed password
    - Returns the user with a JWT access token
    """
    existing_user = db.query(User).filter(
        or_(User.email == payload.email, User.username == payload.username)
    ).first()
    if existing_user:
        raise ConflictError(
            "Email already exists" if existing_user.email == payload.email else "Username already taken"
        )
    
    user = User(
        name=payload.name,
        username=payload.username,
        email=payload.email,
        password_hash=get_password_hash(payload.password)
    )
    
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email or username already taken")
    db.refresh(user)
    
    logger.info("Registered user %s (%s)", user.username, user.id)
    return _auth_response(user, request)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """
    Login with email and password.
    
    - Validates credentials
    - Returns the user with a JWT access token
    """
    user = db.query(User).filter(User.email == payload.email).first()
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Failed login for %s", payload.email)
        raise AuthenticationError("Invalid credentials")
    
    return _auth_response(user, request)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """
    Get current authenticated user information.
    
    Protected endpoint - requires valid JWT token.
    """
    return current_user


@router.put("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update name, bio and role. Empty values keep the current ones."""
    current_user.name = payload.name or current_user.name
    current_user.bio = payload.bio or current_user.bio
    current_user.role = payload.role or current_user.role
    return _save(db, current_user)


@router.put("/avatar", response_model=UserResponse)
def update_avatar(
    payload: AvatarUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    current_user.avatar = payload.avatar_url
    return _save(db, current_user)


@router.put("/social-links", response_model=UserResponse)
def update_social_links(
    payload: SocialLinksUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Merge the supplied links over the stored ones."""
    changes: Dict[str, str] = payload.social_links.model_dump(exclude_unset=True, exclude_none=True)
    current_user.social_links = {**(current_user.social_links or {}), **changes}
    return _save(db, current_user)


@router.put("/skills", response_model=UserResponse)
def update_skills(
    payload: SkillsUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    current_user.skills = [skill.model_dump() for skill in payload.skills]
    return _save(db, current_user)


@router.post("/resume", response_model=UserResponse)
def upload_resume(
    payload: ResumeUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    current_user.resume_url = payload.resume_url
    return _save(db, current_user)


@router.post("/reset-password", response_model=ResetPasswordResponse)
def reset_password(payload: ResetPasswordRequest, request: Request, db: Session = Depends(get_db)):
    """
    Reset a password by email.
    
    Public endpoint. The email must belong to the configured domain and the
    new password must meet the minimum length.
    """
    settings = request.app.state.settings

    if not payload.email or not payload.new_password:
        raise ValidationError("Please provide both email and new password")

    email = payload.email.strip().lower()
    if not email.endswith("@" + settings.ALLOWED_RESET_EMAIL_DOMAIN.lower()):
        raise ValidationError("Please use valid email address")

    if len(payload.new_password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long"
        )

    user = db.query(User).filter(func.lower(User.email) == email).first()
    if not user:
        raise NotFoundError("User not found with this email")

    user.password_hash = get_password_hash(payload.new_password)
    _save(db, user)

    logger.info("Password reset for user %s", user.id)
    return ResetPasswordResponse(message="Password reset successful", user_id=user.id)
