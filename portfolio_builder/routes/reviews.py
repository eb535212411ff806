"""Review routes for the landing page feed."""
import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from portfolio_builder.db.sessions import get_db
from portfolio_builder.models.user import User
from portfolio_builder.core.security import get_current_user
from portfolio_builder.schemas.base import CamelModel
from portfolio_builder.services.review_service import ReviewService


router = APIRouter(prefix="/reviews", tags=["Reviews"])


class CreateReviewRequest(CamelModel):
    quote: Optional[str] = None


class ReviewAuthor(CamelModel):
    id: uuid.UUID
    name: str


class ReviewResponse(CamelModel):
    id: uuid.UUID
    user: ReviewAuthor
    quote: str
    created_at: Optional[datetime] = None


class DeleteReviewResponse(CamelModel):
    message: str
    id: uuid.UUID


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(
    payload: CreateReviewRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Post a review as the caller.

    Raises:
        400: empty quote, or more than 50 words
    """
    return ReviewService(db).create(current_user.id, payload.quote)


@router.get("", response_model=List[ReviewResponse])
def get_reviews(db: Session = Depends(get_db)):
    """All reviews, newest first. Public endpoint."""
    return ReviewService(db).list_all()


@router.delete("/{review_id}", response_model=DeleteReviewResponse)
def delete_review(
    review_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete one of the caller's own reviews."""
    deleted_id = ReviewService(db).delete(review_id, current_user.id)
    return DeleteReviewResponse(message="Review deleted", id=deleted_id)
