"""Health and readiness check routes."""

import logging

from fastapi import APIRouter

from config import settings
from services.supabase_client import get_supabase

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "community-site-api"


@router.get("/ready")
async def ready() -> dict:
    """Lightweight readiness check: no external calls."""
    return {"status": "ok", "service": SERVICE_NAME, "commit": settings.git_sha}


@router.get("/health")
async def health() -> dict:
    """Deep health check that verifies database connectivity."""
    result = {"status": "ok", "service": SERVICE_NAME, "commit": settings.git_sha, "database": "not_tested"}

    try:
        await get_supabase().ping()
        result["database"] = "connected"
    except Exception as e:
        logger.exception("Database health check failed")
        result["database"] = "error"
        result["database_error"] = str(e)

    return result
