import logging

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_request_is_traced(client: AsyncClient, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="uvicorn.error")

    response = await client.get("/health")
    assert response.status_code == 200

    traces = [r.getMessage() for r in caplog.records if "duration_ms=" in r.getMessage()]
    assert len(traces) == 1
    assert traces[0].startswith("GET /health status=200")


@pytest.mark.asyncio
async def test_failed_request_is_traced_with_status(
    client: AsyncClient, redis_server, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.DEBUG, logger="uvicorn.error")

    await client.get("/cache/missing")

    traces = [r.getMessage() for r in caplog.records if "duration_ms=" in r.getMessage()]
    assert len(traces) == 1
    assert traces[0].startswith("GET /cache/missing status=404")
