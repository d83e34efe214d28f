"""Upgrade prompt and upgrade request endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from bizdash.upgrade.plans import UpgradePrompt
from dashboard.backend.dependencies import current_account_id
from dashboard.backend.schemas import UpgradeRequestBody, UpgradeRequestResponse
from dashboard.backend.services.upgrade_service import UpgradeService

router = APIRouter(prefix="/api/upgrade", tags=["upgrade"])

_service: UpgradeService | None = None


def init_router(service: UpgradeService) -> None:
    global _service  # noqa: PLW0603
    _service = service


def _svc() -> UpgradeService:
    assert _service is not None, "UpgradeService not initialized"
    return _service


@router.get("/plans", response_model=UpgradePrompt)
async def get_plans(
    account_id: Annotated[str | None, Depends(current_account_id)],
    path: Annotated[str | None, Query()] = None,
) -> UpgradePrompt:
    return await _svc().prompt(account_id, path)


@router.post("/request", response_model=UpgradeRequestResponse, status_code=202)
async def request_upgrade(
    body: UpgradeRequestBody,
    account_id: Annotated[str | None, Depends(current_account_id)],
) -> UpgradeRequestResponse:
    return await _svc().request(account_id, body.path)
