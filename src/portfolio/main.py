from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.portfolio.api.middlewares import setup_middlewares
from src.portfolio.api.router import build_api_router
from src.portfolio.core.config import Settings, get_settings
from src.portfolio.core.exceptions import setup_exception_handlers
from src.portfolio.core.health import setup_health_endpoint, setup_metrics
from src.portfolio.core.logging import get_logger, setup_logging
from src.portfolio.core.rate_limit import exempt_monitoring_routes, setup_rate_limiting
from src.portfolio.repositories import ProjectStore

logger = get_logger(__name__)

OPENAPI_TAGS = [
    {"name": "projects", "description": "Portfolio project management"},
    {"name": "health", "description": "Service liveness"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}", environment=settings.app_env)

    store: ProjectStore = app.state.project_store
    if settings.seed_on_startup and store.seed():
        logger.info("Loaded sample projects", count=store.count())

    yield

    logger.info("Shutdown complete", projects=store.count())


def create_app(settings: Settings | None = None, store: ProjectStore | None = None) -> FastAPI:
    """Build the application around one project store.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.
        store: Project store to serve. A new empty store is created if omitted.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Portfolio projects API backed by an in-memory store",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )
    app.state.settings = settings
    app.state.project_store = store if store is not None else ProjectStore()

    setup_exception_handlers(app, settings)

    # Innermost middleware, so throttled requests still get a request_id
    limiter = setup_rate_limiting(app, settings)
    setup_middlewares(app, settings)

    app.include_router(build_api_router(settings.api_prefix))
    setup_health_endpoint(app)
    setup_metrics(app, settings)
    exempt_monitoring_routes(app, limiter)

    return app


app = create_app()
