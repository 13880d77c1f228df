#!/usr/bin/env python3
"""Smoke check for a running cache gateway.

Exercises health, set (with and without ttl), get and not-found against a
deployed instance and exits non-zero on the first mismatch.

Run (local / compose):
  cd services/cache
  python -m scripts.smoke

Optional env vars:
  GATEWAY_URL="http://localhost:8081"
  SMOKE_TTL_WAIT=1   # set to 0 to skip waiting for the ttl entry to expire
"""

import asyncio
import os
import sys
from uuid import uuid4

import httpx


class SmokeFailure(RuntimeError):
    pass


def _expect(response: httpx.Response, status: int, what: str) -> None:
    if response.status_code != status:
        raise SmokeFailure(f"{what}: expected {status}, got {response.status_code} {response.text[:200]}")
    print(f"ok   {what} -> {status}")


async def run(base_url: str, ttl_wait: int) -> None:
    prefix = f"smoke:{uuid4().hex[:8]}"

    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        _expect(await client.get("/health"), 200, "GET /health")

        key = f"{prefix}:plain"
        _expect(
            await client.post("/cache", json={"key": key, "value": "1", "ttl": None}),
            200,
            "POST /cache (no ttl)",
        )
        response = await client.get(f"/cache/{key}")
        _expect(response, 200, "GET /cache/{key}")
        if response.json() != "1":
            raise SmokeFailure(f"GET /cache/{key}: unexpected body {response.text!r}")

        _expect(await client.get(f"/cache/{prefix}:missing"), 404, "GET /cache/{missing}")

        if ttl_wait > 0:
            key = f"{prefix}:ttl"
            _expect(
                await client.post("/cache", json={"key": key, "value": "x", "ttl": ttl_wait}),
                200,
                "POST /cache (ttl)",
            )
            _expect(await client.get(f"/cache/{key}"), 200, "GET /cache/{ttl key} before expiry")
            await asyncio.sleep(ttl_wait + 1)
            _expect(await client.get(f"/cache/{key}"), 404, "GET /cache/{ttl key} after expiry")


def main() -> int:
    base_url = os.getenv("GATEWAY_URL", "http://localhost:8081")
    ttl_wait = int(os.getenv("SMOKE_TTL_WAIT", "1"))
    try:
        asyncio.run(run(base_url, ttl_wait))
    except (SmokeFailure, httpx.HTTPError) as e:
        print(f"FAIL {e}", file=sys.stderr)
        return 1
    print("smoke check passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
