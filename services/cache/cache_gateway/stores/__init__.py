"""Data stores.

Stores handle:
- Redis: the shared client, connection pool and per-request connections

No request/response logic in stores - that belongs in services and routes.
"""
