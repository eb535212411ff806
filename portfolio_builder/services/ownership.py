"""Owner checks shared by every per-record operation."""
import logging
import uuid
from typing import Optional, Type, TypeVar

from sqlalchemy.orm import Session

from portfolio_builder.core.errors import AuthorizationError, NotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_id(record_id) -> Optional[uuid.UUID]:
    """Return the UUID for a path id, or None when it is not one."""
    if isinstance(record_id, uuid.UUID):
        return record_id
    try:
        return uuid.UUID(str(record_id))
    except (TypeError, ValueError):
        return None


def find_by_id(db: Session, model: Type[T], record_id) -> Optional[T]:
    key = parse_id(record_id)
    if key is None:
        return None
    return db.get(model, key)


def get_owned(db: Session, model: Type[T], record_id, requester_id: uuid.UUID, label: str) -> T:
    """Load a record by id and check that ``requester_id`` owns it.

    Raises:
        NotFoundError: no record with that id
        AuthorizationError: the record belongs to another user
    """
    record = find_by_id(db, model, record_id)
    if record is None:
        raise NotFoundError(f"{label} not found")

    if record.user_id != requester_id:
        logger.warning("User %s denied access to %s %s", requester_id, label.lower(), record.id)
        raise AuthorizationError("Not authorized")

    return record
