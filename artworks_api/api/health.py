"""
Liveness and readiness probes.

GET /health always answers 200 while the process is up; GET /health/ready
answers 503 when the repository cannot reach its store.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from artworks_api.api.dependencies import get_repository
from artworks_api.repositories.abstract import ArtworkRepository

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
def health_check() -> Dict[str, Any]:
    return {"status": "healthy", "service": "artworks-api"}


@router.get("/ready")
def readiness_check(repository: ArtworkRepository = Depends(get_repository)):
    if not repository.ping():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}


__all__ = ["router"]
