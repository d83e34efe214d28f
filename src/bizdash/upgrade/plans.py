"""Plan tiers shown by the upgrade prompt.

Purely informational: the purchase itself happens in an external commerce
flow reached through an UpgradeHandler.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from bizdash.models import AccessProfile, Classification, FeatureKey

DEFAULT_REQUIRED_PLAN = "Professional"


class PlanTier(BaseModel):
    """A purchasable plan and the feature areas it unlocks."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: Decimal
    currency_symbol: str = "£"
    period: str = "/month"
    description: str = ""
    highlights: tuple[str, ...] = ()
    feature_keys: frozenset[FeatureKey] = frozenset()
    popular: bool = False

    @property
    def display_price(self) -> str:
        return f"{self.currency_symbol}{self.price}{self.period}"


_PROFESSIONAL_KEYS = frozenset({
    FeatureKey.SOCIAL_MEDIA,
    FeatureKey.MARKETING,
    FeatureKey.PR,
    FeatureKey.MANAGEMENT,
    FeatureKey.FINANCE,
    FeatureKey.ANALYTICS,
    FeatureKey.CRM,
    FeatureKey.INBOX,
    FeatureKey.SETTINGS,
    FeatureKey.DATA,
})

DEFAULT_PLANS: tuple[PlanTier, ...] = (
    PlanTier(
        id="professional",
        name="Professional",
        price=Decimal("99.99"),
        description="Full business management suite",
        highlights=(
            "AI Advisory & GPT Chat",
            "Complete CRM System",
            "Social Media Management",
            "Public Relations Tools",
            "Financial Management",
            "Data Analytics",
            "Document Management",
            "Settings & Configuration",
        ),
        feature_keys=_PROFESSIONAL_KEYS,
        popular=True,
    ),
    PlanTier(
        id="enterprise",
        name="Enterprise",
        price=Decimal("299.99"),
        description="Complete platform access with advanced features",
        highlights=(
            "Everything in Professional",
            "HR Management & CV Library",
            "Investor Relations",
            "Advanced Tools Suite",
            "Calendar Integration",
            "Community Management",
            "Priority Support",
            "Custom Integrations",
        ),
        feature_keys=frozenset(FeatureKey),
    ),
)


class UpgradePrompt(BaseModel):
    """Everything the upgrade screen shows."""

    current_plan: str | None = None
    feature_name: str | None = None
    required_plan: str = DEFAULT_REQUIRED_PLAN
    plans: list[PlanTier] = Field(default_factory=list)


def required_plan_for(
    feature: Classification,
    plans: Sequence[PlanTier] = DEFAULT_PLANS,
) -> str:
    """Name of the cheapest plan that unlocks *feature*."""
    candidates = [p for p in plans if feature in p.feature_keys]
    if not candidates:
        return DEFAULT_REQUIRED_PLAN
    return min(candidates, key=lambda p: p.price).name


def build_upgrade_prompt(
    profile: AccessProfile | None,
    feature: Classification | None = None,
    feature_name: str | None = None,
    plans: Sequence[PlanTier] = DEFAULT_PLANS,
) -> UpgradePrompt:
    return UpgradePrompt(
        current_plan=profile.name if profile is not None else None,
        feature_name=feature_name,
        required_plan=(
            required_plan_for(feature, plans) if feature is not None else DEFAULT_REQUIRED_PLAN
        ),
        plans=list(plans),
    )
