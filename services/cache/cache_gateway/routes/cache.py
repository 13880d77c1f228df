"""Cache endpoints.

POST /cache        - store a value (optionally with a ttl)
GET  /cache/{key}  - read a value back

Routers are thin: the gateway service talks to Redis and logs; this module
only maps its outcome to a status code. Failures carry no body.
"""

from fastapi import APIRouter, Path, Response

from cache_gateway.schemas import CacheEntry
from cache_gateway.services.gateway import (
    KeyNotFoundError,
    StoreError,
    get_entry,
    set_entry,
)

router = APIRouter()


@router.post(
    "",
    response_class=Response,
    responses={200: {"description": "Value stored"}, 500: {"description": "Store failure"}},
)
async def set_cache(entry: CacheEntry) -> Response:
    """Store `entry.value` under `entry.key`, expiring after `entry.ttl` seconds if given."""
    try:
        await set_entry(entry)
    except StoreError:
        return Response(status_code=500)
    return Response(status_code=200)


@router.get(
    "/{key}",
    response_model=str,
    responses={404: {"description": "Key not found"}, 500: {"description": "Store failure"}},
)
async def get_cache(
    key: str = Path(description="Cache key", min_length=1),
) -> str | Response:
    """Return the stored value as a JSON string."""
    try:
        return await get_entry(key)
    except KeyNotFoundError:
        return Response(status_code=404)
    except StoreError:
        return Response(status_code=500)
