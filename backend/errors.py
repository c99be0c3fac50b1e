"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SiteError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class UpstreamError(SiteError):
    """The hosted database or the CDN answered with an error."""

    def __init__(self, service: str, detail: str):
        super().__init__(f"{service} error: {detail}", status_code=502)
        self.service = service


class NotAuthenticatedError(SiteError):
    def __init__(self, message: str = "Admin session required"):
        super().__init__(message, status_code=401)


class ForbiddenError(SiteError):
    def __init__(self, required_role: str):
        super().__init__(f"Requires role: {required_role}", status_code=403)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(SiteError)
    async def handle_site_error(_request: Request, exc: SiteError):
        if exc.status_code >= 500:
            logger.error("%s", exc)
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
