"""Pydantic schemas for API request/response validation."""

from cache_gateway.schemas.cache import CacheEntry

__all__ = [
    "CacheEntry",
]
