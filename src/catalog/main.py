from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.catalog.api.middlewares import setup_middlewares
from src.catalog.api.v1.router import api_router
from src.catalog.core.cache import close_redis
from src.catalog.core.config import get_settings
from src.catalog.core.db import dispose_engine, run_migrations_async
from src.catalog.core.exceptions import setup_exception_handlers
from src.catalog.core.health import setup_health_endpoint
from src.catalog.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug, settings.log_level)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    if settings.run_migrations_on_startup:
        await run_migrations_async()
        logger.info("Database migrations applied")

    yield

    logger.info("Closing connections...")
    await close_redis()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Projects and their SQL server/database/table trees"},
    {"name": "users", "description": "User profiles that own projects"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Project catalog of SQL servers, databases and tables",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)
    app.include_router(api_router)
    setup_health_endpoint(app)

    return app


app = create_app()
