"""bizdash: feature-gated navigation for a plan-based business dashboard."""

__version__ = "0.4.0"

from bizdash.catalog import CatalogError, NavCatalog, default_catalog, load_catalog
from bizdash.config import BizdashConfig, find_config, load_config
from bizdash.gate import ActivationEvent, GatedView, LockGate, LockOverlay
from bizdash.models import (
    AccessProfile,
    AccessSentinel,
    DashboardMetrics,
    ExpansionChanged,
    FeatureKey,
    Glyph,
    ImageRef,
    LockDecision,
    NavigateIntent,
    NavNode,
    NoChange,
    PopoverChanged,
    UpgradeRequired,
)
from bizdash.nav import NavTree, TilePopover, render_icon
from bizdash.policy import (
    AccessPolicyResolver,
    AccessSession,
    AccessSnapshot,
    classify,
    is_locked,
)
from bizdash.store import InMemoryProfileStore, ProfileLoadError, ProfileStore, RestProfileStore
from bizdash.upgrade import DEFAULT_PLANS, PlanTier, UpgradeRequest, UpgradeWarning
from bizdash.views import DashboardPresenter, SidebarPresenter

__all__ = [
    "AccessPolicyResolver",
    "AccessProfile",
    "AccessSentinel",
    "AccessSession",
    "AccessSnapshot",
    "ActivationEvent",
    "BizdashConfig",
    "CatalogError",
    "DEFAULT_PLANS",
    "DashboardMetrics",
    "DashboardPresenter",
    "ExpansionChanged",
    "FeatureKey",
    "GatedView",
    "Glyph",
    "ImageRef",
    "InMemoryProfileStore",
    "LockDecision",
    "LockGate",
    "LockOverlay",
    "NavCatalog",
    "NavNode",
    "NavTree",
    "NavigateIntent",
    "NoChange",
    "PlanTier",
    "PopoverChanged",
    "ProfileLoadError",
    "ProfileStore",
    "RestProfileStore",
    "SidebarPresenter",
    "TilePopover",
    "UpgradeRequest",
    "UpgradeRequired",
    "UpgradeWarning",
    "classify",
    "default_catalog",
    "find_config",
    "is_locked",
    "load_catalog",
    "load_config",
    "render_icon",
    "__version__",
]
