"""Catalog, classification, access and stateless activation endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from dashboard.backend.dependencies import current_account_id
from dashboard.backend.schemas import (
    AccessResponse,
    ActivateRequest,
    ActivateResponse,
    CatalogResponse,
    ClassifyResponse,
)
from dashboard.backend.services.access_service import AccessService

router = APIRouter(prefix="/api", tags=["access"])

_service: AccessService | None = None


def init_router(service: AccessService) -> None:
    global _service  # noqa: PLW0603
    _service = service


def _svc() -> AccessService:
    assert _service is not None, "AccessService not initialized"
    return _service


@router.get("/catalog", response_model=CatalogResponse)
def get_catalog() -> CatalogResponse:
    return _svc().catalog_entries()


@router.get("/access/classify", response_model=ClassifyResponse)
def classify_path(path: Annotated[str, Query(min_length=1)]) -> ClassifyResponse:
    return _svc().classify(path)


@router.get("/access", response_model=AccessResponse)
async def get_access(
    account_id: Annotated[str | None, Depends(current_account_id)],
) -> AccessResponse:
    return await _svc().access_summary(account_id)


@router.post("/navigation/activate", response_model=ActivateResponse)
async def activate(
    body: ActivateRequest,
    account_id: Annotated[str | None, Depends(current_account_id)],
) -> ActivateResponse:
    return await _svc().activate(account_id, body.path, body.source)
