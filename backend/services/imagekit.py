"""ImageKit file API: delete uploaded media by file id.

Auth is HTTP Basic with the private key as username and an empty password.
Failures are logged and reported as False; callers decide whether that is fatal.
"""

import logging

import httpx

from config import settings

logger = logging.getLogger(__name__)


async def delete_file(
    file_id: str,
    private_key: str | None = None,
    api_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """Delete a file from ImageKit storage. Returns True on success."""
    private_key = private_key or settings.imagekit_private_key
    api_url = api_url or settings.imagekit_api_url
    if not file_id or not private_key:
        logger.error("Missing ImageKit configuration or file ID")
        return False

    try:
        async with httpx.AsyncClient(timeout=10, transport=transport) as client:
            resp = await client.delete(f"{api_url.rstrip('/')}/{file_id}", auth=(private_key, ""))
    except httpx.HTTPError as e:
        logger.error("Error deleting file from ImageKit: %s", e)
        return False

    if resp.is_success:
        return True
    logger.error("Failed to delete file from ImageKit: %s (%s %s)", file_id, resp.status_code, resp.text)
    return False
