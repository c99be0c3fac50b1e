"""Rejected-gallery cleanup routes."""

import logging

from fastapi import APIRouter, Depends

from routes.dashboard import get_cache
from services.admin_auth import AdminUser, require_admin, require_super_admin
from services.cache import StaleAwareCache
from services.cleanup import cleanup_stats, run_cleanup
from services.supabase_client import SupabaseClient, get_supabase

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/cleanup")


@router.get("", dependencies=[Depends(require_admin)])
async def stats(db: SupabaseClient = Depends(get_supabase)) -> dict:
    """How many rejected items are old enough to be cleaned up."""
    return await cleanup_stats(db)


@router.post("")
async def cleanup(
    user: AdminUser = Depends(require_super_admin),
    cache: StaleAwareCache = Depends(get_cache),
    db: SupabaseClient = Depends(get_supabase),
) -> dict:
    logger.info("Cleanup started by %s", user.email)
    return await run_cleanup(db, cache)
