"""FastAPI application entry point for the community site admin API."""

import logging
import sys

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from errors import register_error_handlers
from services.cache import StaleAwareCache

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def create_app(cache: StaleAwareCache | None = None) -> FastAPI:
    app = FastAPI(title="Community Site Admin API", version="1.0.0")

    # One cache per app instance; routes reach it through app.state
    app.state.cache = cache if cache is not None else StaleAwareCache(settings.cache_default_stale_ms)

    # CORS: cookies only for explicitly listed origins, never with "*"
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.dashboard import router as dashboard_router
    from routes.cleanup import router as cleanup_router

    app.include_router(health_router)
    app.include_router(dashboard_router)
    app.include_router(cleanup_router)

    @app.on_event("startup")
    async def _validate_config() -> None:
        missing = settings.validate()
        if missing:
            logger.warning("Missing env vars (database/CDN features may fail): %s", ", ".join(missing))

    return app


app = create_app()
