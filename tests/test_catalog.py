"""Tests for the navigation catalog loader."""

from pathlib import Path

import pytest

from bizdash.catalog import (
    DEFAULT_CATALOG_FILE,
    CatalogError,
    NavCatalog,
    default_catalog,
    load_catalog,
    parse_catalog,
)
from bizdash.models import Glyph, ImageRef, NavNode, NavSection


def _leaf(path: str, name: str = "Leaf") -> dict:
    return {"name": name, "icon": "dot", "path": path}


# --- Bundled catalog ---


class TestDefaultCatalog:
    def test_loads(self):
        cat = default_catalog()
        assert isinstance(cat, NavCatalog)
        assert len(cat) > 40

    def test_cached(self):
        assert default_catalog() is default_catalog()

    def test_file_ships_with_package(self):
        assert DEFAULT_CATALOG_FILE.is_file()

    def test_top_level_order(self):
        names = [n.name for n in default_catalog().nodes]
        assert names[0] == "Social Media"
        assert names[-1] == "Settings"
        assert "Tools" in names
        assert "Vox" in names

    def test_tools_has_pdf_leaf(self):
        cat = default_catalog()
        tools = cat.get_or_raise("/tools")
        assert tools.is_branch
        assert "/tools/pdf" in [c.path for c in tools.children]
        assert not cat.get_or_raise("/tools/pdf").is_branch

    def test_three_levels_under_pr(self):
        cat = default_catalog()
        assert cat.depth_of("/pr") == 1
        assert cat.depth_of("/pr/rns") == 2
        assert cat.depth_of("/pr/rns/write") == 3

    def test_parent_and_top_level(self):
        cat = default_catalog()
        assert cat.parent_of("/pr") is None
        assert cat.parent_of("/pr/rns").path == "/pr"
        assert cat.parent_of("/pr/rns/write").path == "/pr/rns"
        assert cat.top_level_of("/pr/rns/write").path == "/pr"

    def test_footer_section(self):
        footer = default_catalog().section(NavSection.FOOTER)
        assert [n.path for n in footer] == ["/settings"]

    def test_vox_uses_image_icon(self):
        vox = default_catalog().get_or_raise("/vox")
        assert isinstance(vox.icon, ImageRef)
        assert isinstance(default_catalog().get_or_raise("/tools").icon, Glyph)

    def test_walk_is_depth_first(self):
        walked = list(default_catalog().walk())
        assert walked[0][0].path == "/social-media"
        assert walked[0][1] == 1
        assert walked[1][0].path == "/social-media/create"
        assert walked[1][1] == 2

    def test_paths_unique(self):
        paths = default_catalog().paths()
        assert len(paths) == len(set(paths))

    def test_lookup(self):
        cat = default_catalog()
        assert "/tools" in cat
        assert "/nowhere" not in cat
        assert cat.get("/nowhere") is None
        with pytest.raises(CatalogError, match="Unknown catalog path"):
            cat.get_or_raise("/nowhere")


# --- parse_catalog ---


class TestParseCatalog:
    def test_icon_shorthand(self):
        cat = parse_catalog({"nodes": [
            {"name": "A", "icon": "star", "path": "/a"},
            {"name": "B", "icon": "https://cdn.example.com/b.png", "path": "/b"},
        ]})
        assert cat.get_or_raise("/a").icon == Glyph(name="star")
        assert cat.get_or_raise("/b").icon == ImageRef(url="https://cdn.example.com/b.png")

    def test_explicit_icon_mapping(self):
        cat = parse_catalog({"nodes": [
            {"name": "A", "icon": {"kind": "image", "url": "https://x/a.svg"}, "path": "/a"},
        ]})
        assert isinstance(cat.get_or_raise("/a").icon, ImageRef)

    def test_nested_children(self):
        cat = parse_catalog({"nodes": [
            {"name": "A", "icon": "a", "path": "/a", "children": [
                {"name": "B", "icon": "b", "path": "/a/b", "children": [_leaf("/a/b/c")]},
            ]},
        ]})
        assert len(cat) == 3
        assert cat.depth_of("/a/b/c") == 3

    def test_too_deep(self):
        data = {"nodes": [
            {"name": "A", "icon": "a", "path": "/a", "children": [
                {"name": "B", "icon": "b", "path": "/a/b", "children": [
                    {"name": "C", "icon": "c", "path": "/a/b/c", "children": [_leaf("/a/b/c/d")]},
                ]},
            ]},
        ]}
        with pytest.raises(CatalogError, match="maximum is 3"):
            parse_catalog(data)

    def test_duplicate_path(self):
        with pytest.raises(CatalogError, match="Duplicate catalog path: /a"):
            parse_catalog({"nodes": [_leaf("/a"), _leaf("/a")]})

    def test_duplicate_nested_path(self):
        with pytest.raises(CatalogError, match="Duplicate"):
            parse_catalog({"nodes": [
                {"name": "A", "icon": "a", "path": "/a", "children": [_leaf("/b")]},
                _leaf("/b"),
            ]})

    def test_missing_nodes_key(self):
        with pytest.raises(CatalogError, match="'nodes'"):
            parse_catalog({"areas": []})

    def test_nodes_not_a_list(self):
        with pytest.raises(CatalogError, match="must be a list"):
            parse_catalog({"nodes": {"a": 1}})

    def test_entry_not_a_mapping(self):
        with pytest.raises(CatalogError, match="must be a mapping"):
            parse_catalog({"nodes": ["just-a-string"]})

    def test_invalid_node_shape(self):
        with pytest.raises(CatalogError, match=r"Invalid node at nodes\[0\]"):
            parse_catalog({"nodes": [{"name": "A", "icon": "a", "path": "no-slash"}]})

    def test_children_not_a_list(self):
        with pytest.raises(CatalogError, match="'children' must be a list"):
            parse_catalog({"nodes": [{"name": "A", "icon": "a", "path": "/a", "children": "x"}]})

    def test_catalog_from_nodes(self):
        cat = NavCatalog([NavNode(name="A", icon=Glyph(name="a"), path="/a")])
        assert cat.paths() == ["/a"]


# --- load_catalog ---


class TestLoadCatalog:
    def test_load_from_file(self, tmp_path: Path):
        f = tmp_path / "catalog.yaml"
        f.write_text(
            "nodes:\n"
            "  - name: CRM\n"
            "    icon: user-plus\n"
            "    path: /crm\n"
            "    section: footer\n",
            encoding="utf-8",
        )
        cat = load_catalog(f)
        assert cat.get_or_raise("/crm").section == NavSection.FOOTER

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(CatalogError, match="not found"):
            load_catalog(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path):
        f = tmp_path / "catalog.yaml"
        f.write_text("nodes: [unclosed\n", encoding="utf-8")
        with pytest.raises(CatalogError, match="Invalid YAML"):
            load_catalog(f)

    def test_empty_file(self, tmp_path: Path):
        f = tmp_path / "catalog.yaml"
        f.write_text("", encoding="utf-8")
        with pytest.raises(CatalogError, match="'nodes'"):
            load_catalog(f)
