"""Admin dashboard routes.

The section endpoints always hit the database. `/api/admin/dashboard` goes
through the process cache so repeated polling stays cheap.
"""

import logging
from functools import partial

from fastapi import APIRouter, Depends, Query, Request

from services import dashboard_data
from services.admin_auth import AdminUser, require_admin
from services.cache import CACHE_KEYS, STALE_TIMES, StaleAwareCache, clear_all_cache, clear_dashboard_cache
from services.dashboard_loader import DashboardLoader, freshness_report
from services.supabase_client import SupabaseClient, get_supabase

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/dashboard", dependencies=[Depends(require_admin)])


def get_cache(request: Request) -> StaleAwareCache:
    """The cache instance owned by this app (see app.create_app)."""
    return request.app.state.cache


def build_loader(cache: StaleAwareCache, db: SupabaseClient) -> DashboardLoader:
    return DashboardLoader(
        cache,
        {
            CACHE_KEYS["DASHBOARD_STATS"]: partial(dashboard_data.get_stats, db),
            CACHE_KEYS["RECENT_UPLOADS"]: partial(dashboard_data.get_recent_uploads, db),
            CACHE_KEYS["RECENT_DONATIONS"]: partial(dashboard_data.get_recent_donations, db),
            CACHE_KEYS["RECENT_CONTACTS"]: partial(dashboard_data.get_recent_contacts, db),
        },
    )


@router.get("")
async def dashboard(
    refresh: bool = Query(False),
    cache: StaleAwareCache = Depends(get_cache),
    db: SupabaseClient = Depends(get_supabase),
) -> dict:
    """All four sections, served from cache while fresh."""
    result = await build_loader(cache, db).load(force_refresh=refresh)
    sections = result["sections"]
    return {
        "stats": sections[CACHE_KEYS["DASHBOARD_STATS"]],
        "recentUploads": sections[CACHE_KEYS["RECENT_UPLOADS"]],
        "recentDonations": sections[CACHE_KEYS["RECENT_DONATIONS"]],
        "recentContacts": sections[CACHE_KEYS["RECENT_CONTACTS"]],
        "fetched": result["fetched"],
        "errors": result["errors"],
    }


@router.get("/stats")
async def stats(db: SupabaseClient = Depends(get_supabase)) -> dict:
    return await dashboard_data.get_stats(db)


@router.get("/recent-uploads")
async def recent_uploads(db: SupabaseClient = Depends(get_supabase)) -> list[dict]:
    return await dashboard_data.get_recent_uploads(db)


@router.get("/recent-donations")
async def recent_donations(db: SupabaseClient = Depends(get_supabase)) -> list[dict]:
    return await dashboard_data.get_recent_donations(db)


@router.get("/recent-contacts")
async def recent_contacts(db: SupabaseClient = Depends(get_supabase)) -> list[dict]:
    return await dashboard_data.get_recent_contacts(db)


@router.get("/cache")
async def cache_status(cache: StaleAwareCache = Depends(get_cache)) -> dict:
    """How old each cached section is. Does not evict anything."""
    return {"sections": freshness_report(cache, STALE_TIMES)}


@router.delete("/cache")
async def invalidate_cache(
    scope: str = Query("dashboard", pattern="^(dashboard|all)$"),
    cache: StaleAwareCache = Depends(get_cache),
    user: AdminUser = Depends(require_admin),
) -> dict:
    if scope == "all":
        clear_all_cache(cache)
    else:
        clear_dashboard_cache(cache)
    logger.info("Cache cleared (scope=%s) by %s", scope, user.email)
    return {"cleared": scope}
