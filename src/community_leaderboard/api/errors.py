"""Translate persistence failures into uniform 500 responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from community_leaderboard.services.membership import StoreFailureError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAIL = "Internal Server Error"


async def store_failure_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the cause and answer with a context-free 500."""
    logger.error(
        "Store failure on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_ERROR_DETAIL},
    )


def install_error_handlers(app: FastAPI) -> None:
    """Register the store-failure handlers on ``app``."""
    app.add_exception_handler(StoreFailureError, store_failure_handler)
    app.add_exception_handler(SQLAlchemyError, store_failure_handler)
