"""Path classification: maps a route path to the feature that gates it.

Rules are evaluated top-to-bottom and the first match wins:

1. Voice module (any segment starting with ``vox``)   -> always unlocked
2. Advisor / assistant chat (``/advisor``, ``/chats``) -> always unlocked
3. Data module (``/data``)                              -> always unlocked
4. One rule per FeatureKey, matched as a path prefix on segment boundaries
5. Nothing matched                                      -> always locked

The ordering matters: ``/vox/analytics`` must hit rule 1 before the
``analytics`` prefix rule sees it. Both the sidebar and the tile grid call
``classify`` so they can never disagree about a path.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from bizdash.models import AccessSentinel, Classification, FeatureKey

VOICE_MARKER = "vox"


@dataclass(frozen=True)
class PathRule:
    """One entry of the ordered classification table."""

    name: str
    predicate: Callable[[str], bool]
    result: Classification


def normalize_path(path: str) -> str:
    """Drop query/fragment and trailing slashes; ensure a leading slash."""
    path = path.split("#", 1)[0].split("?", 1)[0].strip()
    if not path.startswith("/"):
        path = "/" + path
    return path.rstrip("/") or "/"


def _segments(path: str) -> list[str]:
    return [s for s in path.split("/") if s]


def _under(*prefixes: str) -> Callable[[str], bool]:
    def _match(path: str) -> bool:
        return any(path == p or path.startswith(p + "/") for p in prefixes)

    return _match


def _has_voice_marker(path: str) -> bool:
    return any(seg.startswith(VOICE_MARKER) for seg in _segments(path))


def _build_rules() -> tuple[PathRule, ...]:
    rules = [
        PathRule("voice", _has_voice_marker, AccessSentinel.ALWAYS_UNLOCKED),
        PathRule("advisor", _under("/advisor", "/chats"), AccessSentinel.ALWAYS_UNLOCKED),
        PathRule("data", _under("/data"), AccessSentinel.ALWAYS_UNLOCKED),
    ]
    rules.extend(
        PathRule(f"feature:{key.value}", _under(f"/{key.value}"), key)
        for key in FeatureKey
    )
    return tuple(rules)


RULES: tuple[PathRule, ...] = _build_rules()


def classify(path: str, rules: tuple[PathRule, ...] = RULES) -> Classification:
    """Classify *path* against the ordered rule table."""
    normalized = normalize_path(path)
    for rule in rules:
        if rule.predicate(normalized):
            return rule.result
    return AccessSentinel.ALWAYS_LOCKED


def matching_rule(path: str, rules: tuple[PathRule, ...] = RULES) -> PathRule | None:
    """Return the rule that decides *path*, or None for the locked fallback."""
    normalized = normalize_path(path)
    for rule in rules:
        if rule.predicate(normalized):
            return rule
    return None
