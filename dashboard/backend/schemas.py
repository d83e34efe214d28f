"""Pydantic request/response schemas for the dashboard API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from bizdash.models import AccessProfile, LockDecision, NavOutcome, NavSection
from bizdash.nav.icons import RenderedIcon
from bizdash.upgrade.handler import UpgradeRequest
from bizdash.upgrade.plans import UpgradePrompt
from bizdash.views.sidebar import SidebarView

# --- Health ---


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    catalog_areas: int = 0
    store: str = ""


# --- Catalog / classification ---


class CatalogEntry(BaseModel):
    """One catalog node, flattened with its depth and gate."""

    name: str
    path: str
    depth: int
    description: str = ""
    section: NavSection = NavSection.MAIN
    is_branch: bool
    parent: str | None = None
    icon: RenderedIcon
    gate: str


class CatalogResponse(BaseModel):
    entries: list[CatalogEntry]
    total: int


class ClassifyResponse(BaseModel):
    path: str
    classification: str
    rule: str | None = None


# --- Access ---


class AccessResponse(BaseModel):
    """Resolved profile summary plus per-area lock decisions."""

    account_id: str | None = None
    profile: AccessProfile | None = None
    live: bool = False
    unlocked_features: list[str] = Field(default_factory=list)
    decisions: list[LockDecision] = Field(default_factory=list)


# --- Activation ---


class ActivateRequest(BaseModel):
    path: str
    source: str = "pointer"


class ActivateResponse(BaseModel):
    """What a click resolved to, and how the gate handled the event."""

    outcome: NavOutcome
    default_prevented: bool = False
    propagation_stopped: bool = False
    trace: list[str] = Field(default_factory=list)
    upgrade: UpgradePrompt | None = None


# --- Sidebar instances ---


class SidebarMountRequest(BaseModel):
    current_path: str | None = None


class SidebarInstanceResponse(BaseModel):
    id: str
    account_id: str | None = None
    pending: bool = False
    view: SidebarView


class SidebarActivateResponse(ActivateResponse):
    id: str
    view: SidebarView


# --- Upgrade ---


class UpgradeRequestBody(BaseModel):
    path: str | None = None


class UpgradeRequestResponse(BaseModel):
    accepted: bool = True
    request: UpgradeRequest
    prompt: UpgradePrompt
