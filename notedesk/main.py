"""
FastAPI Application Entry Point.

Serves the note API to the presentation client. The note store is
opened once in the lifespan and shared by every request.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from notedesk.api import health
from notedesk.api.v1 import router as api_v1_router
from notedesk.core.config import get_app_config, get_database_url
from notedesk.core.database import open_database
from notedesk.core.exception_handlers import register_exception_handlers
from notedesk.core.logging import get_logger, setup_logging
from notedesk.core.middleware import RequestContextMiddleware

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    app_config = get_app_config()
    setup_logging()

    async with open_database(
        get_database_url(),
        echo=app_config.database.echo,
    ) as database:
        app.state.database = database
        logger.info(
            "Application starting",
            extra={
                "app_name": app_config.application.name,
                "env": app_config.application.environment,
            },
        )
        yield
        logger.info("Application shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = get_app_config().application
    docs = app_settings.docs_enabled

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=app_settings.api_prefix)

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    Use this instead of importing `app` directly to avoid
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn notedesk.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
