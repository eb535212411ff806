"""Landing page reviews."""
from typing import List
import logging
import uuid

from sqlalchemy.orm import Session, joinedload

from portfolio_builder.core.errors import ValidationError
from portfolio_builder.models import Review
from portfolio_builder.services.ownership import get_owned

logger = logging.getLogger(__name__)

MAX_QUOTE_WORDS = 50


def count_words(text: str) -> int:
    return len((text or "").split())


class ReviewService:
    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[Review]:
        """Every review, newest first."""
        return (
            self.db.query(Review)
            .options(joinedload(Review.user))
            .order_by(Review.created_at.desc(), Review.id.desc())
            .all()
        )

    def create(self, user_id: uuid.UUID, quote: str) -> Review:
        if not quote or not quote.strip():
            raise ValidationError("Please add a quote")
        if count_words(quote) > MAX_QUOTE_WORDS:
            raise ValidationError(f"Quote must be {MAX_QUOTE_WORDS} words or less")

        review = Review(user_id=user_id, quote=quote)
        self.db.add(review)
        self.db.commit()
        self.db.refresh(review)
        return review

    def delete(self, review_id, user_id: uuid.UUID) -> uuid.UUID:
        review = get_owned(self.db, Review, review_id, user_id, "Review")
        deleted_id = review.id
        self.db.delete(review)
        self.db.commit()
        logger.info("Deleted review %s for user %s", deleted_id, user_id)
        return deleted_id
