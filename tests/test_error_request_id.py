"""Tests for request_id in error responses and the health endpoint."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.catalog.core import db

pytestmark = pytest.mark.api


async def test_http_exception_includes_request_id(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nonexistent-endpoint")

    assert response.status_code == 404
    data = response.json()
    assert "detail" in data
    assert isinstance(data["request_id"], str)


async def test_unauthorized_includes_request_id(client: AsyncClient) -> None:
    response = await client.get("/api/v1/projects")

    assert response.status_code == 401
    assert response.json()["request_id"]


async def test_request_id_is_echoed_in_header(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nonexistent-endpoint")

    assert response.headers["X-Request-ID"] == response.json()["request_id"]


async def test_incoming_request_id_is_reused(client: AsyncClient) -> None:
    request_id = uuid4().hex

    response = await client.get(
        "/api/v1/nonexistent-endpoint", headers={"X-Request-ID": request_id}
    )

    assert response.json()["request_id"] == request_id


async def test_different_requests_have_different_ids(client: AsyncClient) -> None:
    response1 = await client.get("/api/v1/endpoint1")
    response2 = await client.get("/api/v1/endpoint2")

    assert response1.json()["request_id"] != response2.json()["request_id"]


async def test_health_check(client: AsyncClient) -> None:
    response = await client.get("/health")
    await db.dispose_engine()

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "healthy"
    assert data["redis"] == "not_configured"
