"""Sidebar presenter: the collapsible navigation tree.

Combines one NavTree (expansion state) with the shared LockGate. Lock
decisions come from the DecisionSource on every render and every click;
the presenter holds no policy of its own.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from bizdash.catalog.loader import NavCatalog
from bizdash.gate.lock import ActivationEvent, GateState, LockGate, UpgradeCallback
from bizdash.models import LockDecision, NavigateIntent, NavNode, NavOutcome, NavSection
from bizdash.nav.icons import RenderedIcon, render_icon
from bizdash.nav.tree import NavState, NavTree
from bizdash.views.common import DecisionSource, gate_node, new_event

TOP_ICON_SIZE = 20
SUBMENU_ICON_SIZE = 18


class SidebarItemView(BaseModel):
    name: str
    path: str
    depth: int
    icon: RenderedIcon
    is_branch: bool
    expanded: bool
    active: bool
    show_label: bool
    decision: LockDecision
    gate: GateState
    children: list[SidebarItemView] = Field(default_factory=list)


class SidebarView(BaseModel):
    collapsed: bool
    state: NavState
    items: list[SidebarItemView]
    footer: list[SidebarItemView]


class SidebarPresenter:
    """One mounted sidebar."""

    def __init__(
        self,
        catalog: NavCatalog,
        access: DecisionSource,
        gate: LockGate | None = None,
        on_request_upgrade: UpgradeCallback | None = None,
        current_path: str | None = None,
    ) -> None:
        self._catalog = catalog
        self._access = access
        self._gate = gate or LockGate()
        self._on_request_upgrade = on_request_upgrade
        self._tree = NavTree(catalog)
        self._current_path = current_path

    @property
    def tree(self) -> NavTree:
        return self._tree

    @property
    def current_path(self) -> str | None:
        return self._current_path

    def activate(self, path: str, event: ActivationEvent | None = None) -> NavOutcome:
        """Handle a click on the sidebar entry at *path*."""
        node = self._catalog.get_or_raise(path)
        self._close_locked_branches()
        event = new_event(node.path, event)
        view = gate_node(self._gate, self._access, node, self._on_request_upgrade)
        outcome = self._gate.activate(view, event, lambda _e: self._tree.click(node.path))
        if isinstance(outcome, NavigateIntent):
            self._current_path = outcome.path
        return outcome

    def toggle_sidebar(self) -> bool:
        return self._tree.toggle_sidebar()

    def render(self) -> SidebarView:
        self._close_locked_branches()
        return SidebarView(
            collapsed=self._tree.sidebar_collapsed,
            state=self._tree.state,
            items=[self._item(n, 1) for n in self._catalog.section(NavSection.MAIN)],
            footer=[self._item(n, 1) for n in self._catalog.section(NavSection.FOOTER)],
        )

    def _close_locked_branches(self) -> None:
        # A branch that became locked after it was opened does not stay open.
        state = self._tree.state
        for path in (state.expanded_at_depth1, state.expanded_at_depth2):
            if path is not None and self._access.decide(path).is_locked:
                self._tree.collapse(path)

    def _item(self, node: NavNode, depth: int) -> SidebarItemView:
        view = gate_node(self._gate, self._access, node, self._on_request_upgrade)
        expanded = self._tree.is_expanded(node.path)
        # Locked branches never show their children.
        children: list[SidebarItemView] = []
        if expanded and not view.locked and not self._tree.sidebar_collapsed:
            children = [self._item(child, depth + 1) for child in node.children]
        assert view.decision is not None
        return SidebarItemView(
            name=node.name,
            path=node.path,
            depth=depth,
            icon=render_icon(
                node.icon,
                node.name,
                TOP_ICON_SIZE if depth == 1 else SUBMENU_ICON_SIZE,
            ),
            is_branch=node.is_branch,
            expanded=expanded,
            active=node.path == self._current_path,
            show_label=not self._tree.sidebar_collapsed,
            decision=view.decision,
            gate=view.state(),
            children=children,
        )
