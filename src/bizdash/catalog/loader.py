"""Navigation catalog: loads, validates, and serves the navigable areas.

The catalog is the single declaration of every area the sidebar and the
dashboard tile grid can show. It is loaded from YAML once, validated against
the NavNode schema, and never mutated afterwards. Paths are unique, and the
tree is at most three levels deep (top level plus two nested levels).
"""

from __future__ import annotations

import functools
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from bizdash.models import NavNode, NavSection

DEFAULT_CATALOG_FILE = Path(__file__).resolve().parent / "default_catalog.yaml"

# Top level is depth 1.
MAX_DEPTH = 3


class CatalogError(Exception):
    """Raised when the catalog cannot be loaded or is inconsistent."""


class NavCatalog:
    """In-memory, read-only tree of navigation nodes keyed by path."""

    def __init__(self, nodes: Sequence[NavNode]) -> None:
        self._nodes: tuple[NavNode, ...] = tuple(nodes)
        self._by_path: dict[str, NavNode] = {}
        self._depth: dict[str, int] = {}
        self._parent: dict[str, str | None] = {}
        for node in self._nodes:
            self._index(node, depth=1, parent=None)

    def _index(self, node: NavNode, depth: int, parent: str | None) -> None:
        if depth > MAX_DEPTH:
            raise CatalogError(
                f"Node '{node.path}' is nested {depth} levels deep "
                f"(maximum is {MAX_DEPTH})"
            )
        if node.path in self._by_path:
            raise CatalogError(f"Duplicate catalog path: {node.path}")
        self._by_path[node.path] = node
        self._depth[node.path] = depth
        self._parent[node.path] = parent
        for child in node.children:
            self._index(child, depth + 1, node.path)

    @property
    def nodes(self) -> tuple[NavNode, ...]:
        """Top-level nodes in declared order."""
        return self._nodes

    def section(self, section: NavSection) -> list[NavNode]:
        """Top-level nodes placed in the given sidebar section."""
        return [n for n in self._nodes if n.section == section]

    def __len__(self) -> int:
        return len(self._by_path)

    def __contains__(self, path: object) -> bool:
        return path in self._by_path

    def get(self, path: str) -> NavNode | None:
        """Look up a node by path. Returns None if not found."""
        return self._by_path.get(path)

    def get_or_raise(self, path: str) -> NavNode:
        """Look up a node by path. Raises CatalogError if not found."""
        node = self._by_path.get(path)
        if node is None:
            raise CatalogError(f"Unknown catalog path: {path}")
        return node

    def depth_of(self, path: str) -> int:
        self.get_or_raise(path)
        return self._depth[path]

    def parent_of(self, path: str) -> NavNode | None:
        self.get_or_raise(path)
        parent = self._parent[path]
        return self._by_path[parent] if parent is not None else None

    def top_level_of(self, path: str) -> NavNode:
        """Walk up to the top-level node that contains *path*."""
        node = self.get_or_raise(path)
        while (parent := self.parent_of(node.path)) is not None:
            node = parent
        return node

    def walk(self) -> Iterator[tuple[NavNode, int]]:
        """Yield ``(node, depth)`` for every node, depth-first in declared order."""

        def _walk(nodes: Sequence[NavNode], depth: int) -> Iterator[tuple[NavNode, int]]:
            for node in nodes:
                yield node, depth
                yield from _walk(node.children, depth + 1)

        yield from _walk(self._nodes, 1)

    def paths(self) -> list[str]:
        return [node.path for node, _ in self.walk()]


def _coerce_icon(raw: Any) -> Any:
    """Expand the shorthand ``icon: <name-or-url>`` into a tagged icon mapping."""
    if isinstance(raw, str):
        if raw.startswith(("http://", "https://")):
            return {"kind": "image", "url": raw}
        return {"kind": "glyph", "name": raw}
    return raw


def _coerce_node(raw: Any, where: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise CatalogError(f"Catalog entry at {where} must be a mapping")
    data = dict(raw)
    if "icon" in data:
        data["icon"] = _coerce_icon(data["icon"])
    children = data.get("children") or []
    if not isinstance(children, list):
        raise CatalogError(f"'children' must be a list at {where}")
    data["children"] = [
        _coerce_node(child, f"{where}.children[{i}]") for i, child in enumerate(children)
    ]
    return data


def parse_catalog(data: Any, source: str = "<catalog>") -> NavCatalog:
    """Build a catalog from already-parsed YAML data."""
    if not isinstance(data, dict) or "nodes" not in data:
        raise CatalogError(f"Catalog must have a 'nodes' key: {source}")
    raw_nodes = data["nodes"]
    if not isinstance(raw_nodes, list):
        raise CatalogError(f"'nodes' must be a list: {source}")

    nodes: list[NavNode] = []
    for i, entry in enumerate(raw_nodes):
        where = f"nodes[{i}]"
        try:
            nodes.append(NavNode(**_coerce_node(entry, where)))
        except (ValidationError, TypeError) as e:
            raise CatalogError(f"Invalid node at {where} in {source}: {e}") from e
    return NavCatalog(nodes)


def load_catalog(path: str | Path) -> NavCatalog:
    """Load a catalog YAML file."""
    path = Path(path)
    if not path.is_file():
        raise CatalogError(f"Catalog file not found: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in {path}: {e}") from e
    return parse_catalog(raw, str(path))


@functools.lru_cache(maxsize=1)
def default_catalog() -> NavCatalog:
    """The bundled catalog, loaded once per process."""
    return load_catalog(DEFAULT_CATALOG_FILE)
