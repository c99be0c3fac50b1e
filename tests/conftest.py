"""
Pytest configuration and fixtures for the admin API tests.
"""

from __future__ import annotations

import json
from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from app import create_app
from errors import UpstreamError
from services.cache import StaleAwareCache
from services.supabase_client import get_supabase


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class FakeSupabase:
    """In-memory stand-in for SupabaseClient with the same async surface."""

    def __init__(self, tables: dict[str, list[dict]] | None = None):
        self.tables = {name: list(rows) for name, rows in (tables or {}).items()}
        self.calls: list[tuple] = []
        self.fail_tables: set[str] = set()
        self.fail_delete_ids: set = set()

    def _rows(self, table: str, eq: dict | None, lt: dict | None) -> list[dict]:
        if table in self.fail_tables:
            raise UpstreamError("Supabase", f"GET {table} returned 500")
        rows = self.tables.get(table, [])
        for column, value in (eq or {}).items():
            rows = [r for r in rows if str(r.get(column)) == str(value)]
        for column, value in (lt or {}).items():
            rows = [r for r in rows if r.get(column) is not None and r[column] < value]
        return rows

    async def select(self, table, columns="*", eq=None, lt=None, order=None, descending=False, limit=None):
        self.calls.append(("select", table, eq, lt))
        rows = self._rows(table, eq, lt)
        if order:
            rows = sorted(rows, key=lambda r: r.get(order), reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        if columns != "*":
            wanted = columns.split(",")
            rows = [{c: r.get(c) for c in wanted} for r in rows]
        return rows

    async def count(self, table, eq=None, lt=None):
        self.calls.append(("count", table, eq, lt))
        return len(self._rows(table, eq, lt))

    async def delete(self, table, eq):
        self.calls.append(("delete", table, eq, None))
        if eq.get("id") in self.fail_delete_ids:
            raise UpstreamError("Supabase", f"DELETE {table} returned 500")
        self.tables[table] = [
            r for r in self.tables.get(table, []) if not all(str(r.get(c)) == str(v) for c, v in eq.items())
        ]

    async def ping(self):
        return True


SAMPLE_TABLES = {
    "events": [{"id": 1}, {"id": 2}, {"id": 3}],
    "gallery": [
        {"id": 10, "title": "Picnic", "uploader_name": "Sam", "created_at": "2026-10-01T10:00:00.000Z",
         "file_type": "image", "status": "pending", "imagekit_file_id": None},
        {"id": 11, "title": "Parade", "uploader_name": "Ana", "created_at": "2026-10-05T10:00:00.000Z",
         "file_type": "video", "status": "approved", "imagekit_file_id": "vid_11"},
        {"id": 12, "title": "Blurry", "uploader_name": "Lee", "created_at": "2026-08-01T10:00:00.000Z",
         "file_type": "image", "status": "rejected", "imagekit_file_id": "img_12"},
    ],
    "donations": [
        {"id": 1, "donor_name": "Kim", "amount": 50, "created_at": "2026-10-02T00:00:00.000Z", "status": "completed"},
        {"id": 2, "donor_name": "Jo", "amount": 20, "created_at": "2026-10-03T00:00:00.000Z", "status": "pending"},
    ],
    "contact_submissions": [
        {"id": 1, "name": "Pat", "email": "pat@example.com", "subject": "Hi",
         "created_at": "2026-10-04T00:00:00.000Z", "status": "unread"},
        {"id": 2, "name": "Max", "email": "max@example.com", "subject": "Volunteer",
         "created_at": "2026-10-06T00:00:00.000Z", "status": "read"},
    ],
}


def session_cookie(role: str) -> dict[str, str]:
    user = {"id": "u-1", "email": f"{role}@example.com", "name": "Test Admin", "role": role}
    return {"admin_session": quote(json.dumps(user))}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> StaleAwareCache:
    return StaleAwareCache(clock=clock)


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase(SAMPLE_TABLES)


@pytest.fixture
def app(cache: StaleAwareCache, fake_db: FakeSupabase):
    application = create_app(cache=cache)
    application.dependency_overrides[get_supabase] = lambda: fake_db
    return application


@pytest.fixture
def anon_client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_client(app) -> TestClient:
    return TestClient(app, cookies=session_cookie("admin"))


@pytest.fixture
def super_client(app) -> TestClient:
    return TestClient(app, cookies=session_cookie("super_admin"))
