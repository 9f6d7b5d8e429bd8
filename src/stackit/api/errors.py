"""Translate service failures into JSON error responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from stackit.services.errors import ServiceError

__all__ = ["STATUS_BY_KIND", "error_response", "register_exception_handlers"]

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[str, int] = {
    "invalid_input": status.HTTP_400_BAD_REQUEST,
    "unauthenticated": status.HTTP_401_UNAUTHORIZED,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "not_found": status.HTTP_404_NOT_FOUND,
}


def error_response(kind: str | None, message: str) -> JSONResponse:
    """Build the ``{"success": false, "message": ...}`` body for a failure kind."""
    status_code = STATUS_BY_KIND.get(kind or "", status.HTTP_400_BAD_REQUEST)
    headers = {"WWW-Authenticate": "Bearer"} if kind == "unauthenticated" else None
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers for expected service errors and storage failures."""

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
        return error_response(exc.kind, exc.message)

    @app.exception_handler(SQLAlchemyError)
    async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error(
            "Storage failure on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Internal server error"},
        )
