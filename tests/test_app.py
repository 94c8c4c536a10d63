"""
tests.test_app

Smoke tests for the reference service.

Responsibilities:
- Ensure the app factory mounts the class routers and serves them.
- Exercise token minting and the default optional auth end to end.
"""

from __future__ import annotations

import httpx
import pytest

from feyna.api.app import create_app
from feyna.settings import Settings

SECRET = "smoke-secret"


def _client(settings: Settings) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=create_app(settings=settings))
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.mark.asyncio
async def test_health_and_token_round_trip() -> None:
    async with _client(Settings(env="test", jwt_secret=SECRET)) as client:
        r = await client.get("/healthz", headers={"Authorization": "Bearer garbage"})
        assert r.status_code == 200
        assert r.json() == {"ok": True}

        r = await client.get("/whoami")
        assert r.json() == {"role": None}

        r = await client.post("/v1/dev/token", json={"data": {"role": "Admin"}, "ttl_minutes": 5})
        assert r.status_code == 201
        body = r.json()
        assert body["token_type"] == "bearer"

        r = await client.get("/whoami", headers={"Authorization": f"Bearer {body['access_token']}"})
        assert r.json() == {"role": "Admin"}


@pytest.mark.asyncio
async def test_token_request_validation() -> None:
    async with _client(Settings(env="test", jwt_secret=SECRET)) as client:
        r = await client.post("/v1/dev/token", json={"ttl_minutes": 0})
        assert r.status_code == 400
        assert r.json()["message"] == "Invalid token request."
        assert r.json()["data"]["errors"][0]["loc"] == ["ttl_minutes"]

        r = await client.post("/v1/dev/token", content=b"not json")
        assert r.status_code == 400


@pytest.mark.asyncio
async def test_token_minting_hidden_in_prod() -> None:
    async with _client(Settings(env="prod", jwt_secret=SECRET)) as client:
        r = await client.post("/v1/dev/token", json={})
        assert r.status_code == 404
        assert r.json() == {"message": "Not found", "data": {}}


# --- Module Notes -----------------------------------------------------------
# No lifespan handling is needed: the app factory does all its work eagerly.
