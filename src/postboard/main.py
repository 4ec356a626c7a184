# src/postboard/main.py
"""Main entry point for the Postboard application."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from postboard.api.errors import register_exception_handlers
from postboard.api.middleware import IdentityMiddleware
from postboard.api.v1 import (
    auth_router,
    feed_router,
    images_router,
    query_router,
    realtime_router,
)
from postboard.core.settings import settings
from postboard.db.session import create_tables
from postboard.services.broadcast import get_broadcaster

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Postboard API",
    description="Social feed with image posts and live updates",
    version=settings.app_version,
)

# Identity runs innermost so that CORS preflights are answered before it.
app.add_middleware(IdentityMiddleware)
app.add_middleware(GZipMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

register_exception_handlers(app)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(feed_router, prefix="/api/v1")
app.include_router(query_router, prefix="/api/v1")
app.include_router(images_router)
app.include_router(realtime_router)

# Serve uploaded images back under their public prefix.
Path(settings.images_dir).mkdir(parents=True, exist_ok=True)
app.mount(
    settings.images_url_prefix,
    StaticFiles(directory=settings.images_dir),
    name="images",
)


@app.on_event("startup")
async def on_startup() -> None:
    create_tables()
    await get_broadcaster().start()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await get_broadcaster().close()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Postboard API",
        "version": settings.app_version,
        "description": "Social feed with image posts and live updates",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("postboard.main:app", host="0.0.0.0", port=8080, reload=settings.debug)
