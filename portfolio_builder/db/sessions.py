import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    """Create the engine for one application instance."""
    logger.info("Initializing DB engine (checking configuration)")
    logger.info("DATABASE_URL configured: %s", bool(database_url))

    if not database_url:
        logger.error("DATABASE_URL is not configured. Set the DATABASE_URL env var.")
        raise RuntimeError("DATABASE_URL is not configured. Set the DATABASE_URL env var.")

    if database_url.startswith("sqlite"):
        # in-memory databases must share a single connection across threads
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    # enable pool_pre_ping to avoid stale/closed connections
    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
