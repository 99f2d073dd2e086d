"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..app import Application
from .routes import create_observability_router, create_updates_router


# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    The bot starts and stops with the HTTP server.
    """
    application = application or get_app()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        await application.start()
        yield
        await application.stop()

    fastapi_app = FastAPI(
        title="Chatflow API",
        description="Health, state inspection and update injection for the chatflow bot",
        version="0.1.0",
        lifespan=lifespan,
    )

    fastapi_app.include_router(create_updates_router(application))
    fastapi_app.include_router(create_observability_router(application))

    return fastapi_app
