"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from todoapi import __version__
from todoapi.api import router
from todoapi.config import Settings, get_settings
from todoapi.database import close_db, init_db
from todoapi.errors import register_error_handlers
from todoapi.middleware import CancelOnDisconnectMiddleware

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    logger.info("Starting %s (database %s)", settings.app_name, settings.masked_url)
    if settings.create_tables:
        await init_db()

    yield

    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Todos and the categories that group them",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(CancelOnDisconnectMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=settings.cors_expose_headers,
        allow_credentials=settings.cors_allow_credentials,
        max_age=settings.cors_max_age,
    )

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def welcome():
        return "welcome"

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


def run_server(host: str | None = None, port: int | None = None, reload: bool | None = None):
    """Run the API server."""
    settings = get_settings()
    uvicorn.run(
        "todoapi.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=settings.debug if reload is None else reload,
    )


if __name__ == "__main__":
    run_server()
