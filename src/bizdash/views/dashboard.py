"""Dashboard presenter: metrics header plus the tile grid.

Each top-level catalog node is a tile. Tiles with children open a popover
instead of navigating; everything else navigates directly. Every tile and
every popover option goes through the same LockGate as the sidebar.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from bizdash.catalog.loader import NavCatalog
from bizdash.gate.lock import ActivationEvent, GateState, LockGate, UpgradeCallback
from bizdash.models import (
    AccessProfile,
    DashboardMetrics,
    LockDecision,
    NavigateIntent,
    NavNode,
    NavOutcome,
    NoChange,
)
from bizdash.nav.icons import RenderedIcon, render_icon
from bizdash.nav.popover import TilePopover
from bizdash.store.base import ProfileStore
from bizdash.views.common import DecisionSource, gate_node, new_event

logger = logging.getLogger(__name__)

TILE_ICON_SIZE = 24
OPTION_ICON_SIZE = 18
LOCKED_HOVER_TEXT = "Upgrade to access this feature"


class PopoverOptionView(BaseModel):
    name: str
    path: str
    icon: RenderedIcon
    is_branch: bool
    expanded: bool
    decision: LockDecision
    gate: GateState
    children: list[PopoverOptionView] = Field(default_factory=list)


class PopoverView(BaseModel):
    open: bool
    nested: str | None = None
    options: list[PopoverOptionView] = Field(default_factory=list)


class TileView(BaseModel):
    name: str
    path: str
    description: str
    hover_text: str
    icon: RenderedIcon
    is_branch: bool
    decision: LockDecision
    gate: GateState
    popover: PopoverView | None = None


class DashboardView(BaseModel):
    metrics: DashboardMetrics
    tiles: list[TileView]


async def load_dashboard_metrics(
    store: ProfileStore, profile: AccessProfile | None,
) -> DashboardMetrics:
    """Fetch display metrics for the profile's organization; zeros on any failure."""
    if profile is None:
        return DashboardMetrics()
    try:
        metrics = await store.fetch_dashboard_metrics(profile.organization_id)
    except Exception:
        logger.exception(
            "Failed to load dashboard metrics for organization %s",
            profile.organization_id,
        )
        return DashboardMetrics()
    return metrics or DashboardMetrics()


class DashboardPresenter:
    """One mounted dashboard tile grid."""

    def __init__(
        self,
        catalog: NavCatalog,
        access: DecisionSource,
        gate: LockGate | None = None,
        on_request_upgrade: UpgradeCallback | None = None,
        metrics: DashboardMetrics | None = None,
    ) -> None:
        self._catalog = catalog
        self._access = access
        self._gate = gate or LockGate()
        self._on_request_upgrade = on_request_upgrade
        self._metrics = metrics or DashboardMetrics()
        self._popovers = {
            tile.path: TilePopover(tile) for tile in catalog.nodes if tile.is_branch
        }

    @property
    def metrics(self) -> DashboardMetrics:
        return self._metrics

    @metrics.setter
    def metrics(self, value: DashboardMetrics) -> None:
        self._metrics = value

    def popover(self, tile_path: str) -> TilePopover | None:
        return self._popovers.get(tile_path)

    def activate_tile(self, path: str, event: ActivationEvent | None = None) -> NavOutcome:
        """Handle a click on the tile at *path*."""
        tile = self._tile(path)
        event = new_event(tile.path, event)
        view = gate_node(self._gate, self._access, tile, self._on_request_upgrade)
        return self._gate.activate(view, event, lambda e: self._tile_clicked(tile, e))

    def activate_option(
        self,
        tile_path: str,
        option_path: str,
        event: ActivationEvent | None = None,
    ) -> NavOutcome:
        """Handle a click on an option inside a tile's popover."""
        tile = self._tile(tile_path)
        popover = self._popovers.get(tile.path)
        if popover is None:
            return NoChange(path=option_path, reason=f"{tile.path} has no popover")

        tile_view = gate_node(self._gate, self._access, tile, self._on_request_upgrade)
        if tile_view.locked:
            popover.close()
            return NoChange(path=option_path, reason="tile is locked")

        option = self._catalog.get_or_raise(option_path)
        owner = self._catalog.top_level_of(option.path)
        if option.path == tile.path or owner.path != tile.path:
            return NoChange(path=option.path, reason=f"not an option of {tile.path}")
        event = new_event(option.path, event)
        view = gate_node(self._gate, self._access, option, self._on_request_upgrade)
        return self._gate.activate(view, event, lambda _e: popover.click_option(option.path))

    def close_all(self) -> None:
        for popover in self._popovers.values():
            popover.close()

    def render(self) -> DashboardView:
        return DashboardView(
            metrics=self._metrics,
            tiles=[self._tile_view(tile) for tile in self._catalog.nodes],
        )

    def _tile(self, path: str) -> NavNode:
        node = self._catalog.get_or_raise(path)
        if self._catalog.depth_of(node.path) != 1:
            raise ValueError(f"{path} is not a dashboard tile")
        return node

    def _tile_clicked(self, tile: NavNode, event: ActivationEvent) -> NavOutcome:
        popover = self._popovers.get(tile.path)
        if popover is None:
            return NavigateIntent(path=tile.path)
        # Branch tiles open their popover instead of following the link.
        event.prevent_default()
        return popover.toggle()

    def _tile_view(self, tile: NavNode) -> TileView:
        view = gate_node(self._gate, self._access, tile, self._on_request_upgrade)
        assert view.decision is not None
        popover_view = None
        popover = self._popovers.get(tile.path)
        if popover is not None and not view.locked:
            popover_view = PopoverView(
                open=popover.is_open,
                nested=popover.nested,
                options=[self._option_view(o, popover) for o in tile.children]
                if popover.is_open
                else [],
            )
        return TileView(
            name=tile.name,
            path=tile.path,
            description=tile.description,
            hover_text=LOCKED_HOVER_TEXT if view.locked else tile.description,
            icon=render_icon(tile.icon, tile.name, TILE_ICON_SIZE),
            is_branch=tile.is_branch,
            decision=view.decision,
            gate=view.state(),
            popover=popover_view,
        )

    def _option_view(self, option: NavNode, popover: TilePopover) -> PopoverOptionView:
        view = gate_node(self._gate, self._access, option, self._on_request_upgrade)
        assert view.decision is not None
        expanded = popover.nested == option.path
        return PopoverOptionView(
            name=option.name,
            path=option.path,
            icon=render_icon(option.icon, option.name, OPTION_ICON_SIZE),
            is_branch=option.is_branch,
            expanded=expanded,
            decision=view.decision,
            gate=view.state(),
            children=[self._option_view(c, popover) for c in option.children]
            if expanded
            else [],
        )
