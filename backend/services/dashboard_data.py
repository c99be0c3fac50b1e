"""Admin dashboard queries against the site database.

Each function is one dashboard section; the loader caches them by section key.
"""

import asyncio
import logging

from services.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


async def get_stats(db: SupabaseClient) -> dict:
    """Headline counts for the dashboard cards."""
    total_events, total_gallery, pending_uploads, unread_contacts = await asyncio.gather(
        db.count("events"),
        db.count("gallery"),
        db.count("gallery", eq={"status": "pending"}),
        db.count("contact_submissions", eq={"status": "unread"}),
    )
    return {
        "totalEvents": total_events or 0,
        "totalGalleryItems": total_gallery or 0,
        "pendingUploads": pending_uploads or 0,
        "unreadContacts": unread_contacts or 0,
    }


async def get_recent_uploads(db: SupabaseClient) -> list[dict]:
    return await db.select(
        "gallery",
        columns="id,title,uploader_name,created_at,file_type,status",
        order="created_at",
        descending=True,
        limit=RECENT_LIMIT,
    )


async def get_recent_donations(db: SupabaseClient) -> list[dict]:
    return await db.select(
        "donations",
        columns="id,donor_name,amount,created_at,status",
        order="created_at",
        descending=True,
        limit=RECENT_LIMIT,
    )


async def get_recent_contacts(db: SupabaseClient) -> list[dict]:
    return await db.select(
        "contact_submissions",
        columns="id,name,email,subject,created_at,status",
        order="created_at",
        descending=True,
        limit=RECENT_LIMIT,
    )
