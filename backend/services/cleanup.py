"""Cleanup of rejected gallery uploads older than 30 days.

Media is removed from ImageKit first (best effort), then the database row.
Each item is isolated: any failure is recorded in its result and the batch
continues, so the dashboard cache is still cleared when something was removed.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable

from errors import UpstreamError
from services import imagekit
from services.cache import StaleAwareCache, clear_dashboard_cache
from services.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

CLEANUP_THRESHOLD_DAYS = 30


def cutoff_iso(now: datetime | None = None, days: int = CLEANUP_THRESHOLD_DAYS) -> str:
    """ISO-8601 UTC timestamp `days` before `now`, millisecond precision."""
    now = now or datetime.now(timezone.utc)
    cutoff = now.astimezone(timezone.utc) - timedelta(days=days)
    return cutoff.isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def cleanup_stats(db: SupabaseClient, now: datetime | None = None) -> dict:
    eligible = await db.count("gallery", eq={"status": "rejected"}, lt={"created_at": cutoff_iso(now)})
    total_rejected = await db.count("gallery", eq={"status": "rejected"})
    return {
        "cleanupStats": {
            "itemsEligibleForCleanup": eligible,
            "totalRejectedItems": total_rejected,
            "cleanupThreshold": f"{CLEANUP_THRESHOLD_DAYS} days",
        }
    }


async def run_cleanup(
    db: SupabaseClient,
    cache: StaleAwareCache | None = None,
    now: datetime | None = None,
    delete_media: Callable[[str], Awaitable[bool]] | None = None,
) -> dict:
    """Delete every eligible item; clears the dashboard cache if anything changed."""
    delete_media = delete_media or imagekit.delete_file
    items = await db.select(
        "gallery",
        columns="id,imagekit_file_id,file_url,title",
        eq={"status": "rejected"},
        lt={"created_at": cutoff_iso(now)},
    )
    if not items:
        return {"message": f"No rejected items older than {CLEANUP_THRESHOLD_DAYS} days found", "cleanedCount": 0}

    cleaned_count = 0
    imagekit_cleanup_count = 0
    results = []

    for item in items:
        file_id = item.get("imagekit_file_id")
        try:
            if file_id:
                if await delete_media(file_id):
                    imagekit_cleanup_count += 1
                else:
                    logger.warning("Failed to delete ImageKit file: %s", file_id)

            await db.delete("gallery", eq={"id": item["id"]})
        except UpstreamError as e:
            logger.error("Error deleting gallery item %s: %s", item["id"], e)
            results.append({"id": item["id"], "title": item.get("title"), "success": False, "error": str(e)})
            continue
        except Exception:
            logger.exception("Error processing gallery item %s", item["id"])
            results.append({"id": item["id"], "title": item.get("title"), "success": False, "error": "Processing error"})
            continue

        cleaned_count += 1
        results.append({
            "id": item["id"],
            "title": item.get("title"),
            "success": True,
            "imagekitCleaned": bool(file_id),
        })

    if cleaned_count and cache is not None:
        clear_dashboard_cache(cache)

    logger.info("Cleanup removed %d of %d rejected items", cleaned_count, len(items))
    return {
        "message": "Cleanup completed successfully",
        "cleanedCount": cleaned_count,
        "imagekitCleanupCount": imagekit_cleanup_count,
        "totalProcessed": len(items),
        "results": results,
    }
