"""Dependency graph produced from a lockfile, and its legacy tree rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ROOT_NODE_ID = "root-node"


@dataclass(frozen=True)
class PkgInfo:
    name: str
    version: str | None = None


@dataclass
class DepGraph:
    """Directed package graph with a single root node.

    Nodes are keyed by id (``name@version``); every node carries a package
    and an optional label mapping.
    """

    pkg_manager: str
    root_pkg: PkgInfo
    pkgs: dict[str, PkgInfo] = field(default_factory=dict)
    edges: dict[str, list[str]] = field(default_factory=dict)
    labels: dict[str, dict[str, str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.pkgs.setdefault(ROOT_NODE_ID, self.root_pkg)
        self.edges.setdefault(ROOT_NODE_ID, [])

    def add_node(self, node_id: str, pkg: PkgInfo, labels: dict[str, str] | None = None) -> None:
        self.pkgs[node_id] = pkg
        self.edges.setdefault(node_id, [])
        if labels:
            self.labels[node_id] = dict(labels)

    def connect(self, parent_id: str, child_id: str) -> None:
        children = self.edges.setdefault(parent_id, [])
        if child_id not in children:
            children.append(child_id)

    def dependencies_of(self, node_id: str) -> list[str]:
        return list(self.edges.get(node_id, []))


def graph_to_dep_tree(graph: DepGraph, pkg_manager: str) -> dict[str, Any]:
    """Render *graph* as the legacy nested dependency tree.

    Each dependency appears under its parent keyed by package name. A node
    that is already on the current path is emitted without children so
    cyclic graphs terminate.
    """

    def build(node_id: str, ancestors: frozenset[str]) -> dict[str, Any]:
        pkg = graph.pkgs[node_id]
        node: dict[str, Any] = {"name": pkg.name, "version": pkg.version}
        labels = graph.labels.get(node_id)
        if labels:
            node["labels"] = dict(labels)
        deps: dict[str, Any] = {}
        if node_id not in ancestors:
            path = ancestors | {node_id}
            for child_id in graph.dependencies_of(node_id):
                child = graph.pkgs[child_id]
                deps[child.name] = build(child_id, path)
        node["dependencies"] = deps
        return node

    tree = build(ROOT_NODE_ID, frozenset())
    tree["type"] = pkg_manager
    return tree
