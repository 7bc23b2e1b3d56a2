"""
Global exception handlers for the Artworks API.

ArtworksError subclasses map to their own status with a JSON error envelope,
request validation failures (undecodable body, non-integer path id) map to
400, and anything else maps to 500 without leaking internal details.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from artworks_api.errors import ArtworksError
from artworks_api.utils.logging import get_logger

log = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(ArtworksError, artworks_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)


async def artworks_error_handler(request: Request, exc: ArtworksError) -> JSONResponse:
    extra = {"error_code": exc.code, "path": request.url.path}
    if exc.http_status >= 500:
        log.error("%s", exc, extra=extra, exc_info=exc if exc.__cause__ is not None else None)
    else:
        log.warning("%s", exc, extra=extra)
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.warning(
        "Validation error",
        extra={"path": request.url.path, "errors": len(exc.errors())},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_build_validation_error_response(exc),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("Unhandled exception on %s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
            }
        },
    )


def _build_validation_error_response(exc: RequestValidationError) -> Dict[str, Any]:
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        }
    }


__all__ = ["register_error_handlers"]
