"""Rate limiting configuration with optional Redis backend.

Every route gets the configured default limit per client IP through slowapi's
middleware. Uses Redis for distributed limits when REDIS_URL is configured and
falls back to in-memory storage (per-process) otherwise.
"""

from fastapi import FastAPI
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.portfolio.core.config import Settings
from src.portfolio.core.logging import get_logger

logger = get_logger(__name__)

# Monitoring endpoints are never limited
EXEMPT_PATHS = frozenset({"/health", "/metrics"})


def get_rate_limit_key(request: Request) -> str:
    """Generate rate limit key from client IP only.

    Do not include user-controlled headers in the key: rotating header values
    would create unlimited new buckets and bypass the limit.
    """
    return get_remote_address(request) or "unknown"


def create_limiter(settings: Settings) -> Limiter:
    """Create rate limiter with appropriate storage backend.

    Uses Redis if configured, otherwise falls back to in-memory storage.
    Disabled in testing environment.
    """
    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    if settings.redis_url:
        logger.info("Rate limiter using Redis backend", limit=settings.rate_limit)
        return Limiter(
            key_func=get_rate_limit_key,
            default_limits=[settings.rate_limit],
            storage_uri=settings.redis_url,
        )

    logger.info("Rate limiter using in-memory backend (not distributed)", limit=settings.rate_limit)
    return Limiter(key_func=get_rate_limit_key, default_limits=[settings.rate_limit])


def setup_rate_limiting(app: FastAPI, settings: Settings) -> Limiter:
    """Attach a limiter, its 429 handler and the default-limit middleware to the app."""
    limiter = create_limiter(settings)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]
    app.add_middleware(SlowAPIMiddleware)
    return limiter


def exempt_monitoring_routes(app: FastAPI, limiter: Limiter) -> None:
    """Exempt health and metrics endpoints from the default limit.

    Must run after those routes are registered.
    """
    for route in app.routes:
        if getattr(route, "path", None) in EXEMPT_PATHS:
            endpoint = getattr(route, "endpoint", None)
            if endpoint is not None:
                limiter.exempt(endpoint)
