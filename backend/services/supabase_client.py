"""Supabase PostgREST client: service-role access to the site's tables.

Talks to `{SUPABASE_URL}/rest/v1/<table>` directly with httpx. The service
role key bypasses row-level security, so this client is only used behind the
admin role check.
"""

import logging

import httpx

from config import settings
from errors import UpstreamError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10


def _filters(eq: dict | None, lt: dict | None) -> dict[str, str]:
    params: dict[str, str] = {}
    for column, value in (eq or {}).items():
        params[column] = f"eq.{value}"
    for column, value in (lt or {}).items():
        params[column] = f"lt.{value}"
    return params


def _parse_content_range(header: str | None) -> int:
    """'0-24/3573' or '*/0' -> total row count."""
    if not header or "/" not in header:
        return 0
    total = header.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else 0


class SupabaseClient:
    def __init__(
        self,
        url: str | None = None,
        service_role_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        url = url or settings.supabase_url
        key = service_role_key or settings.supabase_service_role_key
        if not url:
            raise ValueError("SUPABASE_URL environment variable is required")
        if not key:
            raise ValueError("SUPABASE_SERVICE_ROLE_KEY environment variable is required for admin operations")
        self.rest_url = f"{url.rstrip('/')}/rest/v1"
        self._headers = {"apikey": key, "Authorization": f"Bearer {key}"}
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.rest_url,
            headers=self._headers,
            timeout=REQUEST_TIMEOUT,
            transport=self._transport,
        )

    async def _request(self, method: str, table: str, **kwargs) -> httpx.Response:
        async with self._client() as client:
            try:
                resp = await client.request(method, f"/{table}", **kwargs)
                resp.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error("Supabase %s %s failed: %s %s", method, table, e.response.status_code, e.response.text)
                raise UpstreamError("Supabase", f"{method} {table} returned {e.response.status_code}") from e
            except httpx.HTTPError as e:
                logger.error("Supabase %s %s failed: %s", method, table, e)
                raise UpstreamError("Supabase", str(e)) from e
        return resp

    async def select(
        self,
        table: str,
        columns: str = "*",
        eq: dict | None = None,
        lt: dict | None = None,
        order: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict]:
        """Rows from `table` matching the equality / less-than filters."""
        params = {"select": columns, **_filters(eq, lt)}
        if order:
            params["order"] = f"{order}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = str(limit)
        resp = await self._request("GET", table, params=params)
        return resp.json() or []

    async def count(self, table: str, eq: dict | None = None, lt: dict | None = None) -> int:
        """Exact row count without transferring rows (HEAD + Prefer: count=exact)."""
        params = {"select": "*", **_filters(eq, lt)}
        resp = await self._request("HEAD", table, params=params, headers={"Prefer": "count=exact"})
        return _parse_content_range(resp.headers.get("content-range"))

    async def delete(self, table: str, eq: dict) -> None:
        if not eq:
            raise ValueError("Refusing to delete without a filter")
        await self._request("DELETE", table, params=_filters(eq, None), headers={"Prefer": "return=minimal"})

    async def ping(self) -> bool:
        await self.select("events", columns="id", limit=1)
        return True


_client: SupabaseClient | None = None


def get_supabase() -> SupabaseClient:
    """FastAPI dependency; the client is created on first use."""
    global _client
    if _client is None:
        _client = SupabaseClient()
    return _client
