# src/postboard/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    feed_router,
    images_router,
    query_router,
    realtime_router,
)

__all__ = [
    "auth_router",
    "feed_router",
    "images_router",
    "query_router",
    "realtime_router",
]
