"""Tests for CORS header injection and the uniform response envelope."""

from __future__ import annotations

import httpx
import pytest

from core.middleware import CORS_HEADERS
from main import app
from services.favorite.service import favorite_service


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/favorites/toggle", "/markets", "/coins", "/anything"])
async def test_options_preflight_answers_204_without_body(client, path: str) -> None:
    response = await client.options(path)

    assert response.status_code == 204
    assert response.content == b""
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value


@pytest.mark.asyncio
async def test_cors_headers_are_added_to_regular_responses(client) -> None:
    response = await client.get("/favorites", params={"userId": "alice_01"})

    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "GET, POST, OPTIONS"
    assert response.headers["access-control-allow-headers"] == "Content-Type"


@pytest.mark.asyncio
async def test_cors_headers_are_added_to_error_responses(client) -> None:
    response = await client.get("/favorites")

    assert response.status_code == 400
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_unknown_route_uses_the_envelope(client) -> None:
    response = await client.get("/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"status": 404, "message": "Not Found", "data": None}


@pytest.mark.asyncio
async def test_root_banner(client) -> None:
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Coin Favorites API"


@pytest.mark.asyncio
async def test_unhandled_errors_keep_the_envelope_and_cors_headers(
    client, monkeypatch: pytest.MonkeyPatch
) -> None:
    async def _explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(favorite_service, "toggle_favorite", _explode)

    # the server error middleware re-raises after responding unless told otherwise
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as raw_client:
        response = await raw_client.post(
            "/favorites/toggle", json={"userId": "alice_01", "coinId": "bitcoin"}
        )

    assert response.status_code == 500
    assert response.json() == {"status": 500, "message": "Internal Server Error", "data": None}
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value


@pytest.mark.asyncio
async def test_method_not_allowed_keeps_the_allow_header(client) -> None:
    response = await client.get("/favorites/toggle")

    assert response.status_code == 405
    assert "POST" in response.headers["allow"]
    assert response.headers["access-control-allow-origin"] == "*"
