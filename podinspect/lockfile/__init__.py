"""Podfile.lock parsing and dependency-graph rendering."""

from podinspect.lockfile.graph import DepGraph, PkgInfo, graph_to_dep_tree
from podinspect.lockfile.parser import LockfileFormatError, LockfileParser

__all__ = [
    "DepGraph",
    "LockfileFormatError",
    "LockfileParser",
    "PkgInfo",
    "graph_to_dep_tree",
]
