"""Sidebar navigation tree state machine.

Tracks which branch is expanded at each depth and whether the sidebar
itself is collapsed. A click on a leaf yields a navigation intent and leaves
the expansion state alone; a click on a branch toggles it. At most one
branch is open per depth: opening a sibling closes the previous one, and
opening a top-level branch clears the nested one. Collapsing the sidebar
drops all expansion state, and re-expanding it does not bring it back.

One NavTree belongs to one sidebar instance. Create it on mount and drop it
on unmount.
"""

from __future__ import annotations

from pydantic import BaseModel

from bizdash.catalog.loader import NavCatalog
from bizdash.models import ExpansionChanged, NavigateIntent, NavOutcome, NoChange


class NavState(BaseModel):
    """Serializable copy of a tree's UI state."""

    expanded_at_depth1: str | None = None
    expanded_at_depth2: str | None = None
    sidebar_collapsed: bool = False


class NavTree:
    def __init__(self, catalog: NavCatalog) -> None:
        self._catalog = catalog
        self._depth1: str | None = None
        self._depth2: str | None = None
        self._collapsed = False

    @property
    def state(self) -> NavState:
        return NavState(
            expanded_at_depth1=self._depth1,
            expanded_at_depth2=self._depth2,
            sidebar_collapsed=self._collapsed,
        )

    @property
    def sidebar_collapsed(self) -> bool:
        return self._collapsed

    def is_expanded(self, path: str) -> bool:
        return path in (self._depth1, self._depth2)

    def click(self, path: str) -> NavOutcome:
        """Apply a click on the node at *path*.

        Raises CatalogError for paths that are not in the catalog.
        """
        node = self._catalog.get_or_raise(path)
        if not node.is_branch:
            return NavigateIntent(path=node.path)

        if self._collapsed:
            return NoChange(path=node.path, reason="sidebar is collapsed")

        if self._catalog.depth_of(node.path) == 1:
            if self._depth1 == node.path:
                self._depth1 = None
                self._depth2 = None
                return ExpansionChanged(path=node.path, expanded=False)
            self._depth1 = node.path
            self._depth2 = None
            return ExpansionChanged(path=node.path, expanded=True)

        if self._depth2 == node.path:
            self._depth2 = None
            return ExpansionChanged(path=node.path, expanded=False)

        parent = self._catalog.parent_of(node.path)
        assert parent is not None  # depth > 1 always has a parent
        self._depth1 = parent.path
        self._depth2 = node.path
        return ExpansionChanged(path=node.path, expanded=True)

    def toggle_sidebar(self) -> bool:
        """Flip the sidebar between collapsed and expanded. Returns the new flag."""
        if self._collapsed:
            self.expand_sidebar()
        else:
            self.collapse_sidebar()
        return self._collapsed

    def collapse_sidebar(self) -> None:
        self._collapsed = True
        self._depth1 = None
        self._depth2 = None

    def expand_sidebar(self) -> None:
        # Expansion state was dropped on collapse and is not restored.
        self._collapsed = False

    def collapse(self, path: str) -> bool:
        """Close the branch at *path* and anything nested under it.

        Returns True when expansion state changed.
        """
        if path == self._depth1:
            self._depth1 = None
            self._depth2 = None
            return True
        if path == self._depth2:
            self._depth2 = None
            return True
        return False
