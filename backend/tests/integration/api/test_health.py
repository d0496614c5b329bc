"""
Health Check Tests - 健康检查测试
"""

from httpx import AsyncClient
import pytest


@pytest.mark.integration
async def test_health_check(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.integration
async def test_root_endpoint(client: AsyncClient) -> None:
    """测试根端点"""
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Stores API"


@pytest.mark.integration
async def test_trace_id_header_is_returned(client: AsyncClient) -> None:
    """测试: 响应头回写请求携带的 trace id"""
    response = await client.get("/health", headers={"X-Trace-ID": "trace-123"})

    assert response.headers["X-Trace-ID"] == "trace-123"


@pytest.mark.integration
async def test_malformed_authorization_is_unauthorized(client: AsyncClient) -> None:
    response = await client.get("/api/v1/stores", headers={"Authorization": "Bearer abc"})

    assert response.status_code == 401
    assert response.json()["code"] == "AUTHENTICATION_ERROR"
