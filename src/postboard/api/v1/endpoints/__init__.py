# src/postboard/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .feed import router as feed_router
from .images import router as images_router
from .query import router as query_router
from .realtime import router as realtime_router

__all__ = [
    "auth_router",
    "feed_router",
    "images_router",
    "query_router",
    "realtime_router",
]
