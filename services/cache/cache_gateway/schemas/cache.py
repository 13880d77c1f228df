"""Schemas for the cache endpoints (/cache)."""

from pydantic import BaseModel, Field


class CacheEntry(BaseModel):
    """Request body for POST /cache.

    Lives for a single request: the gateway hands it to the store command and
    never keeps it afterwards.
    """

    key: str = Field(description="Cache key", examples=["a"])
    value: str = Field(description="Opaque text payload", examples=["1"])
    ttl: int | None = Field(
        default=None,
        ge=1,
        description="Seconds until the store expires the entry; null means no expiration",
        examples=[60, None],
    )
