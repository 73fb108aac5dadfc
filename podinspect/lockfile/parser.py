"""Read ``Podfile.lock`` documents."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import structlog
import yaml

from podinspect.lockfile.graph import ROOT_NODE_ID, DepGraph, PkgInfo

log = structlog.get_logger("podinspect.lockfile")

# Matches: "Name", "Name (1.2.3)", "Name (~> 1.2)", "Name (from `../path`)"
_SPEC_RE = re.compile(r"^\s*(?P<name>[^\s(]+)(?:\s+\((?P<requirement>[^)]*)\))?\s*$")

_EXTERNAL_SOURCE_PREFIX = "externalSource"
_CHECKOUT_OPTIONS_PREFIX = "checkoutOptions"

_SECTION_TYPES: dict[str, type] = {
    "PODS": list,
    "DEPENDENCIES": list,
    "SPEC REPOS": dict,
    "EXTERNAL SOURCES": dict,
    "CHECKOUT OPTIONS": dict,
    "SPEC CHECKSUMS": dict,
}


class LockfileFormatError(ValueError):
    """The lockfile is not valid YAML or not shaped like a Podfile.lock."""


def parse_spec(spec: str) -> tuple[str, str | None]:
    """Split ``"Name (requirement)"`` into its name and requirement."""
    m = _SPEC_RE.match(spec)
    if not m:
        raise LockfileFormatError(f"unrecognized pod specification: {spec!r}")
    return m.group("name"), m.group("requirement")


def _root_spec_name(name: str) -> str:
    return name.split("/", 1)[0]


def _option_labels(prefix: str, options: Any) -> dict[str, str]:
    if not isinstance(options, dict):
        return {}
    labels = {}
    for key, value in options.items():
        label = str(key).lstrip(":")
        labels[prefix + label[:1].upper() + label[1:]] = str(value)
    return labels


class LockfileParser:
    """Structured view over a parsed ``Podfile.lock``."""

    def __init__(self, document: dict[str, Any]):
        self._doc = document

    @classmethod
    def read_file(cls, path: str | Path) -> LockfileParser:
        """Load *path*.

        Raises ``FileNotFoundError`` if it is missing and
        ``LockfileFormatError`` if it cannot be parsed.
        """
        try:
            content = Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise LockfileFormatError(f"not valid UTF-8: {exc}") from exc
        return cls.from_string(content)

    @classmethod
    def from_string(cls, content: str) -> LockfileParser:
        try:
            # Every scalar stays a string: checksums and versions must not become numbers.
            document = yaml.load(content, Loader=yaml.BaseLoader)
        except yaml.YAMLError as exc:
            raise LockfileFormatError(f"invalid YAML: {exc}") from exc
        if not isinstance(document, dict):
            raise LockfileFormatError("lockfile must be a YAML mapping")
        for section, kind in _SECTION_TYPES.items():
            if not isinstance(document.get(section) or kind(), kind):
                raise LockfileFormatError(f"{section} must be a {kind.__name__}")
        for repo, names in (document.get("SPEC REPOS") or {}).items():
            if not isinstance(names or [], list):
                raise LockfileFormatError(f"SPEC REPOS entry {repo!r} must be a list")
        return cls(document)

    @property
    def podfile_checksum(self) -> str | None:
        value = self._doc.get("PODFILE CHECKSUM")
        return str(value) if value else None

    @property
    def cocoapods_version(self) -> str | None:
        value = self._doc.get("COCOAPODS")
        return str(value) if value else None

    def _pods(self) -> list[tuple[str, str | None, list[str]]]:
        """Return ``(name, version, dependency specs)`` for every entry in PODS."""
        pods = []
        for entry in self._doc.get("PODS") or []:
            if isinstance(entry, dict):
                for spec, deps in entry.items():
                    if not isinstance(deps or [], list):
                        raise LockfileFormatError(f"dependencies of {spec!r} must be a list")
                    name, version = parse_spec(str(spec))
                    pods.append((name, version, [str(d) for d in deps or []]))
            else:
                name, version = parse_spec(str(entry))
                pods.append((name, version, []))
        return pods

    def _repositories(self) -> dict[str, str]:
        repos: dict[str, str] = {}
        for repo, names in (self._doc.get("SPEC REPOS") or {}).items():
            for name in names or []:
                repos[str(name)] = str(repo)
        return repos

    def _labels_for(self, name: str, repos: dict[str, str]) -> dict[str, str]:
        root_name = _root_spec_name(name)
        labels: dict[str, str] = {}
        checksum = (self._doc.get("SPEC CHECKSUMS") or {}).get(root_name)
        if checksum is not None:
            labels["checksum"] = str(checksum)
        if root_name in repos:
            labels["repository"] = repos[root_name]
        labels.update(
            _option_labels(
                _EXTERNAL_SOURCE_PREFIX,
                (self._doc.get("EXTERNAL SOURCES") or {}).get(root_name),
            )
        )
        labels.update(
            _option_labels(
                _CHECKOUT_OPTIONS_PREFIX,
                (self._doc.get("CHECKOUT OPTIONS") or {}).get(root_name),
            )
        )
        return labels

    def to_dep_graph(
        self, root_name: str = "Podfile", root_version: str = "0.0.0"
    ) -> DepGraph:
        """Build the dependency graph of the locked pods.

        The root node depends on every entry of ``DEPENDENCIES``; each pod
        depends on the pods its PODS entry lists.
        """
        graph = DepGraph(
            pkg_manager="cocoapods",
            root_pkg=PkgInfo(name=root_name, version=root_version),
        )
        pods = self._pods()
        repos = self._repositories()

        node_ids: dict[str, str] = {}
        for name, version, _ in pods:
            node_id = f"{name}@{version}" if version else name
            node_ids[name] = node_id
            graph.add_node(node_id, PkgInfo(name, version), self._labels_for(name, repos))

        def link(parent_id: str, spec: str) -> None:
            dep_name, _ = parse_spec(spec)
            child_id = node_ids.get(dep_name)
            if child_id is None:
                log.debug("lockfile.unresolved_dependency", parent=parent_id, dependency=spec)
                return
            graph.connect(parent_id, child_id)

        for name, _, deps in pods:
            for spec in deps:
                link(node_ids[name], spec)
        for spec in self._doc.get("DEPENDENCIES") or []:
            link(ROOT_NODE_ID, str(spec))

        return graph
