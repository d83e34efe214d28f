from bizdash.views.common import DecisionSource
from bizdash.views.dashboard import (
    DashboardPresenter,
    DashboardView,
    PopoverOptionView,
    PopoverView,
    TileView,
    load_dashboard_metrics,
)
from bizdash.views.sidebar import SidebarItemView, SidebarPresenter, SidebarView

__all__ = [
    "DashboardPresenter",
    "DashboardView",
    "DecisionSource",
    "PopoverOptionView",
    "PopoverView",
    "SidebarItemView",
    "SidebarPresenter",
    "SidebarView",
    "TileView",
    "load_dashboard_metrics",
]
