"""Dashboard tile popover state machine.

A tile with children opens an inline popover listing them instead of
navigating. Options with their own children open a nested submenu; only one
nested submenu is open at a time within a popover. Picking any leaf closes
the whole chain and navigates.
"""

from __future__ import annotations

from pydantic import BaseModel

from bizdash.models import NavigateIntent, NavNode, NavOutcome, NoChange, PopoverChanged


class PopoverState(BaseModel):
    open: bool = False
    nested: str | None = None


class TilePopover:
    """Popover state owned by a single dashboard tile."""

    def __init__(self, tile: NavNode) -> None:
        self._tile = tile
        self._open = False
        self._nested: str | None = None
        self._options: dict[str, NavNode] = {}
        self._nested_parent: dict[str, str] = {}
        for option in tile.children:
            self._options[option.path] = option
            for sub in option.children:
                self._options[sub.path] = sub
                self._nested_parent[sub.path] = option.path

    @property
    def tile(self) -> NavNode:
        return self._tile

    @property
    def state(self) -> PopoverState:
        return PopoverState(open=self._open, nested=self._nested)

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def nested(self) -> str | None:
        return self._nested

    def toggle(self) -> PopoverChanged:
        if self._open:
            self.close()
        else:
            self._open = True
        return self._changed()

    def close(self) -> None:
        self._open = False
        self._nested = None

    def click_option(self, path: str) -> NavOutcome:
        """Apply a click on an option (or nested option) inside the popover."""
        option = self._options.get(path)
        if option is None:
            return NoChange(path=path, reason=f"not an option of {self._tile.path}")
        if not self._open:
            return NoChange(path=path, reason="popover is closed")

        parent = self._nested_parent.get(path)
        if parent is not None and self._nested != parent:
            return NoChange(path=path, reason="nested submenu is closed")

        if option.is_branch:
            self._nested = None if self._nested == option.path else option.path
            return self._changed()

        self.close()
        return NavigateIntent(path=option.path)

    def _changed(self) -> PopoverChanged:
        return PopoverChanged(tile=self._tile.path, open=self._open, nested=self._nested)
