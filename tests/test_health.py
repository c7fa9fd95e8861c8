"""
Health endpoint tests.
"""

from redis.exceptions import ConnectionError as RedisConnectionError

from taskforge.core.dependencies import get_redis
from taskforge.main import app


class UnreachableRedis:
    async def ping(self) -> bool:
        raise RedisConnectionError("connection refused")


async def test_liveness(client):
    resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["environment"] == "test"


async def test_readiness_when_dependencies_answer(client):
    resp = await client.get("/health/ready")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "checks": {"database": "ok", "redis": "ok"}}


async def test_readiness_reports_unavailable_redis(client):
    async def unreachable() -> UnreachableRedis:
        return UnreachableRedis()

    app.dependency_overrides[get_redis] = unreachable

    resp = await client.get("/health/ready")

    assert resp.status_code == 503
    assert resp.json()["checks"] == {"database": "ok", "redis": "unavailable"}


async def test_root(client):
    resp = await client.get("/")

    assert resp.status_code == 200
    assert resp.json()["message"] == "TaskForge API"
    assert resp.json()["docs"] == "/api/docs"


async def test_api_docs_are_served(client):
    resp = await client.get("/api/openapi.json")
    assert resp.status_code == 200
    assert "/api/v1/companies" in resp.json()["paths"]

    resp = await client.get("/api/docs")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
