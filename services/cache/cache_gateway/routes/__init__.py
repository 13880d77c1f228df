"""API routes."""

from fastapi import APIRouter

from cache_gateway.routes import cache

api_router = APIRouter()

# Cache endpoints (set / get)
api_router.include_router(cache.router, prefix="/cache", tags=["cache"])
