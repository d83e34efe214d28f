from bizdash.upgrade.handler import (
    DEFAULT_HISTORY_SIZE,
    LoggingUpgradeHandler,
    UpgradeHandler,
    UpgradeRequest,
    UpgradeWarning,
    WebhookUpgradeHandler,
    build_upgrade_handlers,
    dispatch_upgrade,
)
from bizdash.upgrade.plans import (
    DEFAULT_PLANS,
    DEFAULT_REQUIRED_PLAN,
    PlanTier,
    UpgradePrompt,
    build_upgrade_prompt,
    required_plan_for,
)

__all__ = [
    "DEFAULT_HISTORY_SIZE",
    "DEFAULT_PLANS",
    "DEFAULT_REQUIRED_PLAN",
    "LoggingUpgradeHandler",
    "PlanTier",
    "UpgradeHandler",
    "UpgradePrompt",
    "UpgradeRequest",
    "UpgradeWarning",
    "WebhookUpgradeHandler",
    "build_upgrade_handlers",
    "build_upgrade_prompt",
    "dispatch_upgrade",
    "required_plan_for",
]
