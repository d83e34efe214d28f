"""Core data models for bizdash.

Defines the schemas for:
- Feature keys and the always-unlocked / always-locked sentinels
- Icons (built-in glyph or external image)
- Navigation catalog nodes
- Access profiles (what an account's plan grants)
- Lock decisions (derived per render pass)
- Navigation outcomes (what a click resolves to)
- Dashboard metrics (display only)
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Enums ---


class FeatureKey(enum.StrEnum):
    SOCIAL_MEDIA = "social-media"
    MARKETING = "marketing"
    INVESTORS = "investors"
    PR = "pr"
    MANAGEMENT = "management"
    FINANCE = "finance"
    COMMUNITY = "community"
    ANALYTICS = "analytics"
    HR = "hr"
    CRM = "crm"
    TOOLS = "tools"
    CALENDAR = "calendar"
    INBOX = "inbox"
    SETTINGS = "settings"
    DATA = "data"


class AccessSentinel(enum.StrEnum):
    ALWAYS_UNLOCKED = "always-unlocked"
    ALWAYS_LOCKED = "always-locked"


# What a path classifies to: a gated feature or one of the sentinels.
Classification = FeatureKey | AccessSentinel


class IconKind(enum.StrEnum):
    GLYPH = "glyph"
    IMAGE = "image"


class NavSection(enum.StrEnum):
    MAIN = "main"
    FOOTER = "footer"


# Subscription states in which a profile's grants apply. None (no status
# recorded) also counts as live.
LIVE_SUBSCRIPTION_STATUSES = frozenset({"active", "trialing"})


# --- Icons ---


class Glyph(BaseModel):
    """A built-in icon referenced by name (e.g. ``share``, ``wrench``)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["glyph"] = "glyph"
    name: str


class ImageRef(BaseModel):
    """An icon served from an external image URL."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["image"] = "image"
    url: str


Icon = Annotated[Glyph | ImageRef, Field(discriminator="kind")]


# --- Catalog ---


class NavNode(BaseModel):
    """A navigable area in the catalog.

    A node is a branch iff ``children`` is non-empty. Nodes are frozen once
    the catalog is loaded.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    icon: Icon
    path: str = Field(pattern=r"^/[a-z0-9/_-]*$")
    description: str = ""
    section: NavSection = NavSection.MAIN
    children: tuple[NavNode, ...] = ()

    @property
    def is_branch(self) -> bool:
        return len(self.children) > 0


# --- Access ---


class ProfileTypeRecord(BaseModel):
    """Raw profile-type row as returned by a profile store."""

    id: str
    name: str
    features: list[str] = Field(default_factory=list)
    subscription_status: str | None = None
    subscription_expires_at: datetime | None = None


class AccessProfile(BaseModel):
    """The resolved plan of one account.

    ``granted_features`` only holds known feature keys; unknown strings
    from the store are dropped during resolution.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    account_id: str
    organization_id: str
    granted_features: frozenset[FeatureKey] = frozenset()
    subscription_status: str | None = None
    subscription_expires_at: datetime | None = None

    def is_live(self, now: datetime | None = None) -> bool:
        """True when the subscription still backs the grant set."""
        if (
            self.subscription_status is not None
            and self.subscription_status not in LIVE_SUBSCRIPTION_STATUSES
        ):
            return False
        if self.subscription_expires_at is not None:
            now = now or datetime.now(tz=UTC)
            expires = self.subscription_expires_at
            if expires.tzinfo is None:
                expires = expires.replace(tzinfo=UTC)
            if expires <= now:
                return False
        return True

    def effective_features(self, now: datetime | None = None) -> frozenset[FeatureKey]:
        if not self.is_live(now):
            return frozenset()
        return self.granted_features


class LockDecision(BaseModel):
    """Derived lock state for one path. Never cached across render passes."""

    model_config = ConfigDict(frozen=True)

    path: str
    feature: Classification
    is_locked: bool


# --- Navigation outcomes ---


class NavigateIntent(BaseModel):
    """The click should route to ``path``."""

    kind: Literal["navigate"] = "navigate"
    path: str


class ExpansionChanged(BaseModel):
    """A sidebar branch was expanded or collapsed."""

    kind: Literal["expansion"] = "expansion"
    path: str
    expanded: bool


class PopoverChanged(BaseModel):
    """A tile popover (or a nested submenu inside one) opened or closed."""

    kind: Literal["popover"] = "popover"
    tile: str
    open: bool
    nested: str | None = None


class UpgradeRequired(BaseModel):
    """The click hit a locked area; the upgrade prompt is shown instead."""

    kind: Literal["upgrade"] = "upgrade"
    path: str
    feature: Classification
    feature_name: str
    required_plan: str


class NoChange(BaseModel):
    """The click had no effect (e.g. a branch click on a collapsed sidebar)."""

    kind: Literal["none"] = "none"
    path: str
    reason: str = ""


NavOutcome = Annotated[
    NavigateIntent | ExpansionChanged | PopoverChanged | UpgradeRequired | NoChange,
    Field(discriminator="kind"),
]


# --- Metrics ---


class DashboardMetrics(BaseModel):
    """Display-only statistics for the dashboard header cards."""

    revenue: float = 0.0
    users: int = 0
    conversion_rate: float = 0.0
    growth: float = 0.0
