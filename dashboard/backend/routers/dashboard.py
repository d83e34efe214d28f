"""Dashboard endpoint: metrics header plus the gated tile grid."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from bizdash.views.dashboard import DashboardView
from dashboard.backend.dependencies import current_account_id
from dashboard.backend.services.access_service import AccessService

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

_service: AccessService | None = None


def init_router(service: AccessService) -> None:
    global _service  # noqa: PLW0603
    _service = service


def _svc() -> AccessService:
    assert _service is not None, "AccessService not initialized"
    return _service


@router.get("", response_model=DashboardView)
async def get_dashboard(
    account_id: Annotated[str | None, Depends(current_account_id)],
) -> DashboardView:
    return await _svc().dashboard(account_id)
