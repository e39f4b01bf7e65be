# src/community_leaderboard/main.py
"""Main entry point for the Community Leaderboard application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from community_leaderboard.api import communities_router, leaderboard_router, users_router
from community_leaderboard.api.errors import install_error_handlers
from community_leaderboard.core.logging_config import configure_logging
from community_leaderboard.core.settings import settings
from community_leaderboard.db.session import create_tables

logger = logging.getLogger(__name__)

configure_logging()

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Community membership and experience leaderboard API",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

install_error_handlers(app)

# Routes are unversioned and mounted at the root.
app.include_router(leaderboard_router)
app.include_router(communities_router)
app.include_router(users_router)


@app.on_event("startup")
async def on_startup() -> None:
    if settings.debug:
        create_tables()
        logger.info("Created missing tables for %s", settings.effective_database_url)
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("community_leaderboard.main:app", host="0.0.0.0", port=8080, reload=settings.debug)
