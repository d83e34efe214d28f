"""Tests for the sidebar navigation tree state machine."""

import pytest

from bizdash.catalog import CatalogError, default_catalog, parse_catalog
from bizdash.models import ExpansionChanged, NavigateIntent, NoChange
from bizdash.nav.tree import NavState, NavTree


def _tree() -> NavTree:
    return NavTree(default_catalog())


def _two_submenus() -> NavTree:
    return NavTree(parse_catalog({"nodes": [{
        "name": "Tools", "icon": "wrench", "path": "/tools",
        "children": [
            {"name": "A", "icon": "a", "path": "/tools/a", "children": [
                {"name": "A1", "icon": "a", "path": "/tools/a/one"},
            ]},
            {"name": "B", "icon": "b", "path": "/tools/b", "children": [
                {"name": "B1", "icon": "b", "path": "/tools/b/one"},
            ]},
        ],
    }]}))


class TestLeafClicks:
    def test_leaf_emits_navigation(self):
        tree = _tree()
        outcome = tree.click("/advisor")
        assert outcome == NavigateIntent(path="/advisor")
        assert tree.state == NavState()

    def test_leaf_leaves_expansion_alone(self):
        tree = _tree()
        tree.click("/tools")
        outcome = tree.click("/tools/pdf")
        assert outcome == NavigateIntent(path="/tools/pdf")
        assert tree.state.expanded_at_depth1 == "/tools"

    def test_depth3_leaf(self):
        tree = _tree()
        tree.click("/pr/rns")
        assert tree.click("/pr/rns/write") == NavigateIntent(path="/pr/rns/write")
        assert tree.state.expanded_at_depth2 == "/pr/rns"

    def test_leaf_navigates_while_collapsed(self):
        tree = _tree()
        tree.collapse_sidebar()
        assert tree.click("/calendar") == NavigateIntent(path="/calendar")

    def test_unknown_path(self):
        with pytest.raises(CatalogError):
            _tree().click("/nowhere")


class TestBranchClicks:
    def test_expand_and_collapse(self):
        tree = _tree()
        assert tree.click("/tools") == ExpansionChanged(path="/tools", expanded=True)
        assert tree.is_expanded("/tools")
        assert tree.click("/tools") == ExpansionChanged(path="/tools", expanded=False)
        assert not tree.is_expanded("/tools")

    def test_one_branch_per_depth(self):
        tree = _tree()
        tree.click("/social-media")
        tree.click("/investors")
        assert tree.state.expanded_at_depth1 == "/investors"
        assert not tree.is_expanded("/social-media")

    def test_one_branch_at_depth2(self):
        tree = _two_submenus()
        tree.click("/tools/a")
        assert tree.click("/tools/b") == ExpansionChanged(path="/tools/b", expanded=True)
        assert tree.state == NavState(
            expanded_at_depth1="/tools", expanded_at_depth2="/tools/b",
        )
        assert not tree.is_expanded("/tools/a")

    def test_depth2_expands_parent(self):
        tree = _tree()
        outcome = tree.click("/pr/rns")
        assert outcome == ExpansionChanged(path="/pr/rns", expanded=True)
        assert tree.state.expanded_at_depth1 == "/pr"
        assert tree.state.expanded_at_depth2 == "/pr/rns"

    def test_depth2_toggle_keeps_parent(self):
        tree = _tree()
        tree.click("/pr")
        tree.click("/pr/rns")
        assert tree.click("/pr/rns") == ExpansionChanged(path="/pr/rns", expanded=False)
        assert tree.state.expanded_at_depth1 == "/pr"
        assert tree.state.expanded_at_depth2 is None

    def test_expanding_depth1_clears_depth2(self):
        tree = _tree()
        tree.click("/pr/rns")
        tree.click("/tools")
        assert tree.state.expanded_at_depth1 == "/tools"
        assert tree.state.expanded_at_depth2 is None

    def test_collapsing_depth1_clears_depth2(self):
        tree = _tree()
        tree.click("/pr/rns")
        tree.click("/pr")
        assert tree.state == NavState()

    def test_branch_click_while_collapsed_is_noop(self):
        tree = _tree()
        tree.collapse_sidebar()
        outcome = tree.click("/tools")
        assert isinstance(outcome, NoChange)
        assert outcome.reason == "sidebar is collapsed"
        tree.expand_sidebar()
        assert not tree.is_expanded("/tools")


class TestSidebarCollapse:
    def test_collapse_clears_expansion(self):
        tree = _tree()
        tree.click("/pr/rns")
        tree.collapse_sidebar()
        assert tree.state == NavState(sidebar_collapsed=True)

    def test_expand_does_not_restore(self):
        tree = _tree()
        tree.click("/social-media")
        tree.collapse_sidebar()
        tree.expand_sidebar()
        assert tree.state == NavState()
        assert not tree.is_expanded("/social-media")

    def test_toggle_returns_new_flag(self):
        tree = _tree()
        assert tree.toggle_sidebar() is True
        assert tree.sidebar_collapsed
        assert tree.toggle_sidebar() is False
        assert not tree.sidebar_collapsed

    def test_instances_are_independent(self):
        a, b = _tree(), _tree()
        a.click("/tools")
        assert not b.is_expanded("/tools")


class TestCollapseBranch:
    def test_depth1_clears_nested(self):
        tree = _tree()
        tree.click("/pr/rns")
        assert tree.collapse("/pr")
        assert tree.state == NavState()

    def test_depth2_keeps_parent(self):
        tree = _tree()
        tree.click("/pr/rns")
        assert tree.collapse("/pr/rns")
        assert tree.state == NavState(expanded_at_depth1="/pr")

    def test_closed_branch_is_noop(self):
        tree = _tree()
        tree.click("/tools")
        assert not tree.collapse("/investors")
        assert tree.is_expanded("/tools")
