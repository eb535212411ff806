import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio_builder.routes import users, portfolios, projects, reviews
from portfolio_builder.db.base import Base
from portfolio_builder.db.sessions import build_engine, build_session_factory
from portfolio_builder.core.config import Settings, settings as default_settings
from portfolio_builder.core.errors import PortfolioBuilderError

# Import all models to ensure they're registered with Base
import portfolio_builder.models

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level.upper(),
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
    logging.getLogger("portfolio_builder").setLevel(level.upper())


def _validation_message(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(messages) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"message": ...}``."""

    @app.exception_handler(PortfolioBuilderError)
    async def domain_error_handler(request: Request, exc: PortfolioBuilderError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": _validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application with its own settings and database engine.

    Run with ``uvicorn portfolio_builder.main:create_app --factory``.
    """
    app_settings = app_settings or default_settings
    configure_logging(app_settings.LOG_LEVEL)

    engine = build_engine(app_settings.DATABASE_URL)

    # Create tables
    Base.metadata.create_all(bind=engine)

    app = FastAPI(
        title=app_settings.APP_NAME,
        version=app_settings.APP_VERSION,
        description="Portfolio builder: profiles, portfolios, projects and reviews",
    )
    app.state.settings = app_settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register routers
    app.include_router(users.router)
    app.include_router(portfolios.router)
    app.include_router(projects.router)
    app.include_router(reviews.router)

    @app.on_event("startup")
    async def startup_event():
        logger.info("%s v%s starting", app_settings.APP_NAME, app_settings.APP_VERSION)

    @app.on_event("shutdown")
    async def shutdown_event():
        engine.dispose()
        logger.info("Database engine disposed")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
