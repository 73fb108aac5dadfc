"""Tests for Podfile.lock parsing and dependency tree rendering."""

from __future__ import annotations

import pytest

from podinspect.lockfile import (
    DepGraph,
    LockfileFormatError,
    LockfileParser,
    PkgInfo,
    graph_to_dep_tree,
)
from podinspect.lockfile.graph import ROOT_NODE_ID
from podinspect.lockfile.parser import parse_spec

from .conftest import lockfile_text


class TestParseSpec:
    def test_name_only(self):
        assert parse_spec("AFNetworking") == ("AFNetworking", None)

    def test_with_version(self):
        assert parse_spec("AFNetworking (3.2.1)") == ("AFNetworking", "3.2.1")

    def test_subspec_with_constraint(self):
        assert parse_spec("Firebase/Core (~> 5.0)") == ("Firebase/Core", "~> 5.0")

    def test_external_source(self):
        assert parse_spec("Local (from `../Local`)") == ("Local", "from `../Local`")

    def test_garbage(self):
        with pytest.raises(LockfileFormatError):
            parse_spec("")


class TestLockfileParser:
    def test_metadata(self):
        parser = LockfileParser.from_string(lockfile_text("abc123"))
        assert parser.podfile_checksum == "abc123"
        assert parser.cocoapods_version == "1.7.5"

    def test_no_checksum(self):
        parser = LockfileParser.from_string(lockfile_text(None))
        assert parser.podfile_checksum is None

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LockfileParser.read_file(tmp_path / "Podfile.lock")

    @pytest.mark.parametrize(
        "content",
        [
            "PODS: [",
            "- just\n- a list\n",
            "PODS: 3\n",
            "SPEC CHECKSUMS:\n  - x\n",
            "DEPENDENCIES:\n  A: 1\n",
            "SPEC REPOS:\n  trunk: A\n",
        ],
    )
    def test_malformed(self, content):
        with pytest.raises(LockfileFormatError):
            LockfileParser.from_string(content)

    def test_dep_graph(self):
        graph = LockfileParser.from_string(lockfile_text("abc")).to_dep_graph()
        assert graph.pkg_manager == "cocoapods"
        assert graph.dependencies_of(ROOT_NODE_ID) == ["AFNetworking@3.2.1", "Local@0.1.0"]
        assert graph.dependencies_of("AFNetworking@3.2.1") == [
            "AFNetworking/NSURLSession@3.2.1",
            "AFNetworking/Reachability@3.2.1",
        ]
        assert graph.pkgs["Local@0.1.0"] == PkgInfo("Local", "0.1.0")

    def test_labels(self):
        graph = LockfileParser.from_string(lockfile_text("abc")).to_dep_graph()
        assert graph.labels["AFNetworking/Reachability@3.2.1"] == {
            "checksum": "b6f891fdfaed196b46c7a83cf209e09697b94057",
            "repository": "trunk",
        }
        assert graph.labels["Local@0.1.0"] == {
            "checksum": "0123456789abcdef0123456789abcdef01234567",
            "externalSourcePath": "../Local",
        }

    def test_unknown_dependency_is_skipped(self):
        parser = LockfileParser.from_string(
            "PODS:\n  - A (1.0):\n    - Missing\nDEPENDENCIES:\n  - A\n"
        )
        graph = parser.to_dep_graph()
        assert graph.dependencies_of("A@1.0") == []

    def test_empty_lockfile_sections(self):
        graph = LockfileParser.from_string("PODS:\nDEPENDENCIES:\n").to_dep_graph()
        assert graph.dependencies_of(ROOT_NODE_ID) == []


class TestGraphToDepTree:
    def test_tree_shape(self):
        graph = LockfileParser.from_string(lockfile_text("abc")).to_dep_graph()
        tree = graph_to_dep_tree(graph, "cocoapods")

        assert tree["name"] == "Podfile"
        assert tree["type"] == "cocoapods"
        assert set(tree["dependencies"]) == {"AFNetworking", "Local"}
        afn = tree["dependencies"]["AFNetworking"]
        assert afn["version"] == "3.2.1"
        session = afn["dependencies"]["AFNetworking/NSURLSession"]
        assert set(session["dependencies"]) == {"AFNetworking/Reachability"}
        assert session["dependencies"]["AFNetworking/Reachability"]["dependencies"] == {}

    def test_cycle_terminates(self):
        graph = DepGraph(pkg_manager="cocoapods", root_pkg=PkgInfo("root", "0.0.0"))
        graph.add_node("a", PkgInfo("A", "1"))
        graph.add_node("b", PkgInfo("B", "1"))
        graph.connect(ROOT_NODE_ID, "a")
        graph.connect("a", "b")
        graph.connect("b", "a")

        tree = graph_to_dep_tree(graph, "cocoapods")
        inner_a = tree["dependencies"]["A"]["dependencies"]["B"]["dependencies"]["A"]
        assert inner_a["dependencies"] == {}


def test_invalid_utf8_is_a_format_error(tmp_path):
    path = tmp_path / "Podfile.lock"
    path.write_bytes(b"PODS:\n  - A (1.0)\n\xff\xfe\n")
    with pytest.raises(LockfileFormatError, match="UTF-8"):
        LockfileParser.read_file(path)
