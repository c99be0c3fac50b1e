"""Tests for the ImageKit delete helper."""

import base64

import httpx
import pytest

from services.imagekit import delete_file


@pytest.mark.asyncio
async def test_delete_uses_basic_auth_with_private_key():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["authorization"]
        return httpx.Response(204)

    ok = await delete_file(
        "img_12",
        private_key="private_abc",
        api_url="https://api.imagekit.io/v1/files/",
        transport=httpx.MockTransport(handler),
    )

    assert ok is True
    assert seen["method"] == "DELETE"
    assert seen["url"] == "https://api.imagekit.io/v1/files/img_12"
    assert seen["auth"] == "Basic " + base64.b64encode(b"private_abc:").decode()


@pytest.mark.asyncio
async def test_delete_failure_returns_false():
    transport = httpx.MockTransport(lambda request: httpx.Response(404, json={"message": "not found"}))
    assert await delete_file("img_12", private_key="k", api_url="https://x", transport=transport) is False


@pytest.mark.asyncio
async def test_delete_transport_error_returns_false():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    assert await delete_file("img_12", private_key="k", api_url="https://x", transport=httpx.MockTransport(handler)) is False


@pytest.mark.asyncio
async def test_delete_without_key_or_id_does_not_call_out(monkeypatch):
    from config import settings

    monkeypatch.setattr(settings, "imagekit_private_key", None)

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("should not be called")

    transport = httpx.MockTransport(handler)
    assert await delete_file("img_12", transport=transport) is False
    assert await delete_file("", private_key="k", transport=transport) is False
