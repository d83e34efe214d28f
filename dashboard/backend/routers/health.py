"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from dashboard.backend.schemas import HealthResponse
from dashboard.backend.services.access_service import AccessService

router = APIRouter(tags=["health"])

_access: AccessService | None = None
_version: str = "0.0.0"


def init_router(access: AccessService, version: str) -> None:
    global _access, _version  # noqa: PLW0603
    _access = access
    _version = version


@router.get("/api/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    return HealthResponse(
        version=_version,
        catalog_areas=len(_access.catalog) if _access else 0,
        store=type(_access.resolver.store).__name__ if _access else "",
    )
