"""Tests for bizdash core data models."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import TypeAdapter, ValidationError

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
    NavOutcome,
    NavSection,
    NoChange,
    UpgradeRequired,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _profile(**overrides) -> AccessProfile:
    data = {
        "id": "pt-1",
        "name": "Starter",
        "account_id": "acct-1",
        "organization_id": "org-1",
        "granted_features": frozenset({FeatureKey.TOOLS}),
    }
    data.update(overrides)
    return AccessProfile(**data)


# --- Enums ---


class TestFeatureKey:
    def test_values_are_path_segments(self):
        assert FeatureKey.SOCIAL_MEDIA == "social-media"
        assert FeatureKey("hr") is FeatureKey.HR

    def test_unknown_value_rejected(self):
        with pytest.raises(ValueError):
            FeatureKey("advisor")

    def test_sentinels_are_not_feature_keys(self):
        values = {k.value for k in FeatureKey}
        assert AccessSentinel.ALWAYS_UNLOCKED.value not in values
        assert AccessSentinel.ALWAYS_LOCKED.value not in values


# --- Icons and nodes ---


class TestNavNode:
    def test_glyph_icon_from_mapping(self):
        node = NavNode(name="Tools", icon={"kind": "glyph", "name": "wrench"}, path="/tools")
        assert isinstance(node.icon, Glyph)
        assert node.icon.name == "wrench"

    def test_image_icon_from_mapping(self):
        node = NavNode(
            name="Vox",
            icon={"kind": "image", "url": "https://cdn.example.com/vox.svg"},
            path="/vox",
        )
        assert isinstance(node.icon, ImageRef)
        assert node.icon.url.endswith("vox.svg")

    def test_unknown_icon_kind_rejected(self):
        with pytest.raises(ValidationError):
            NavNode(name="X", icon={"kind": "emoji", "name": "x"}, path="/x")

    def test_leaf_and_branch(self):
        leaf = NavNode(name="PDF", icon=Glyph(name="file"), path="/tools/pdf")
        branch = NavNode(name="Tools", icon=Glyph(name="wrench"), path="/tools", children=(leaf,))
        assert not leaf.is_branch
        assert branch.is_branch

    def test_defaults(self):
        node = NavNode(name="Inbox", icon=Glyph(name="inbox"), path="/inbox")
        assert node.section == NavSection.MAIN
        assert node.description == ""
        assert node.children == ()

    @pytest.mark.parametrize("path", ["tools", "/Tools", "/tools page", ""])
    def test_invalid_path_rejected(self, path):
        with pytest.raises(ValidationError):
            NavNode(name="Tools", icon=Glyph(name="wrench"), path=path)

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            NavNode(name="", icon=Glyph(name="wrench"), path="/tools")

    def test_frozen(self):
        node = NavNode(name="Tools", icon=Glyph(name="wrench"), path="/tools")
        with pytest.raises(ValidationError):
            node.name = "Other"


# --- Access profile ---


class TestAccessProfile:
    def test_live_without_subscription_info(self):
        profile = _profile()
        assert profile.is_live(NOW)
        assert profile.effective_features(NOW) == {FeatureKey.TOOLS}

    @pytest.mark.parametrize("status", ["active", "trialing"])
    def test_live_statuses(self, status):
        assert _profile(subscription_status=status).is_live(NOW)

    @pytest.mark.parametrize("status", ["canceled", "past_due", "inactive"])
    def test_other_statuses_grant_nothing(self, status):
        profile = _profile(subscription_status=status)
        assert not profile.is_live(NOW)
        assert profile.effective_features(NOW) == frozenset()

    def test_expired_subscription_grants_nothing(self):
        profile = _profile(subscription_expires_at=NOW - timedelta(days=1))
        assert not profile.is_live(NOW)
        assert profile.effective_features(NOW) == frozenset()

    def test_future_expiry_is_live(self):
        profile = _profile(subscription_expires_at=NOW + timedelta(days=30))
        assert profile.is_live(NOW)

    def test_naive_expiry_treated_as_utc(self):
        naive = (NOW - timedelta(hours=1)).replace(tzinfo=None)
        assert not _profile(subscription_expires_at=naive).is_live(NOW)

    def test_granted_features_coerced_from_strings(self):
        profile = _profile(granted_features=["crm", "tools"])
        assert profile.granted_features == {FeatureKey.CRM, FeatureKey.TOOLS}

    def test_frozen(self):
        with pytest.raises(ValidationError):
            _profile().name = "Enterprise"


# --- Outcomes ---


class TestNavOutcome:
    adapter = TypeAdapter(NavOutcome)

    def test_discriminates_navigate(self):
        outcome = self.adapter.validate_python({"kind": "navigate", "path": "/tools/pdf"})
        assert isinstance(outcome, NavigateIntent)

    def test_discriminates_expansion(self):
        outcome = self.adapter.validate_python(
            {"kind": "expansion", "path": "/tools", "expanded": True},
        )
        assert isinstance(outcome, ExpansionChanged)
        assert outcome.expanded

    def test_discriminates_upgrade(self):
        outcome = self.adapter.validate_python({
            "kind": "upgrade",
            "path": "/crm",
            "feature": "crm",
            "feature_name": "CRM",
            "required_plan": "Professional",
        })
        assert isinstance(outcome, UpgradeRequired)
        assert outcome.feature == FeatureKey.CRM

    def test_upgrade_accepts_sentinel_feature(self):
        outcome = UpgradeRequired(
            path="/nowhere",
            feature=AccessSentinel.ALWAYS_LOCKED,
            feature_name="Nowhere",
            required_plan="Professional",
        )
        assert outcome.feature == AccessSentinel.ALWAYS_LOCKED

    def test_no_change_dumps_kind(self):
        data = NoChange(path="/tools", reason="sidebar is collapsed").model_dump()
        assert data["kind"] == "none"


class TestSmallModels:
    def test_lock_decision(self):
        decision = LockDecision(path="/tools", feature=FeatureKey.TOOLS, is_locked=True)
        assert decision.model_dump(mode="json") == {
            "path": "/tools",
            "feature": "tools",
            "is_locked": True,
        }

    def test_metrics_default_to_zero(self):
        metrics = DashboardMetrics()
        assert metrics.revenue == 0.0
        assert metrics.users == 0
        assert metrics.conversion_rate == 0.0
        assert metrics.growth == 0.0
