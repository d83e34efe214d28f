from bizdash.nav.icons import RenderedIcon, render_icon
from bizdash.nav.popover import PopoverState, TilePopover
from bizdash.nav.tree import NavState, NavTree

__all__ = [
    "NavState",
    "NavTree",
    "PopoverState",
    "RenderedIcon",
    "TilePopover",
    "render_icon",
]
