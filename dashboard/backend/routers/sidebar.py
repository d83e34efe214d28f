"""Sidebar instance endpoints: mount, render, click, toggle, unmount."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from bizdash.catalog.loader import CatalogError
from dashboard.backend.dependencies import current_account_id
from dashboard.backend.schemas import (
    ActivateRequest,
    SidebarActivateResponse,
    SidebarInstanceResponse,
    SidebarMountRequest,
)
from dashboard.backend.services.sidebar_service import SidebarInstance, SidebarService

router = APIRouter(prefix="/api/sidebar", tags=["sidebar"])

_service: SidebarService | None = None


def init_router(service: SidebarService) -> None:
    global _service  # noqa: PLW0603
    _service = service


def _svc() -> SidebarService:
    assert _service is not None, "SidebarService not initialized"
    return _service


async def _instance(instance_id: str, account_id: str | None) -> SidebarInstance:
    instance = _svc().get(instance_id)
    if instance is None:
        raise HTTPException(status_code=404, detail=f"Sidebar not found: {instance_id}")
    await _svc().follow(instance, account_id)
    return instance


@router.post("", response_model=SidebarInstanceResponse, status_code=201)
async def mount_sidebar(
    account_id: Annotated[str | None, Depends(current_account_id)],
    body: SidebarMountRequest | None = None,
) -> SidebarInstanceResponse:
    current_path = body.current_path if body is not None else None
    instance = await _svc().mount(account_id, current_path)
    return _svc().describe(instance)


@router.get("/{instance_id}", response_model=SidebarInstanceResponse)
async def get_sidebar(
    instance_id: str,
    account_id: Annotated[str | None, Depends(current_account_id)],
) -> SidebarInstanceResponse:
    return _svc().describe(await _instance(instance_id, account_id))


@router.post("/{instance_id}/activate", response_model=SidebarActivateResponse)
async def activate_sidebar_item(
    instance_id: str,
    body: ActivateRequest,
    account_id: Annotated[str | None, Depends(current_account_id)],
) -> SidebarActivateResponse:
    instance = await _instance(instance_id, account_id)
    try:
        return _svc().activate(instance, body.path, body.source)
    except CatalogError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.post("/{instance_id}/toggle", response_model=SidebarInstanceResponse)
async def toggle_sidebar(
    instance_id: str,
    account_id: Annotated[str | None, Depends(current_account_id)],
) -> SidebarInstanceResponse:
    return _svc().toggle(await _instance(instance_id, account_id))


@router.delete("/{instance_id}", status_code=204)
def unmount_sidebar(instance_id: str) -> None:
    if not _svc().unmount(instance_id):
        raise HTTPException(status_code=404, detail=f"Sidebar not found: {instance_id}")
