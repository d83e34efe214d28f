from bizdash.policy.classifier import RULES, PathRule, classify, matching_rule, normalize_path
from bizdash.policy.resolver import (
    AccessPolicyResolver,
    AccessSession,
    AccessSnapshot,
    is_locked,
)

__all__ = [
    "RULES",
    "AccessPolicyResolver",
    "AccessSession",
    "AccessSnapshot",
    "PathRule",
    "classify",
    "is_locked",
    "matching_rule",
    "normalize_path",
]
