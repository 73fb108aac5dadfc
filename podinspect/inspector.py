"""Inspect a CocoaPods project: resolve files, verify sync, collect dependencies."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from podinspect.checksum import verify_checksum
from podinspect.exceptions import (
    NoChecksumRecordedError,
    NoManifestForStrictCheckError,
    OutOfSyncError,
    ParseError,
    UsageError,
)
from podinspect.lockfile import LockfileFormatError, LockfileParser, graph_to_dep_tree
from podinspect.models import (
    ChecksumOutcome,
    InspectionResult,
    InspectOptions,
    PluginMetadata,
    ResolvedFiles,
)
from podinspect.resolver import LOCKFILE_NAME, resolve
from podinspect.version_probe import probe_version

log = structlog.get_logger("podinspect.inspector")

PLUGIN_NAME = "snyk-cocoapods-plugin"
PKG_MANAGER = "cocoapods"

_SUB_PROJECT_UNSUPPORTED = "The CocoaPods plugin doesn't support specifying a subProject!"


def plugin_name() -> str:
    return PLUGIN_NAME


def _coerce_options(options: InspectOptions | Mapping[str, Any] | None) -> InspectOptions:
    if options is None:
        return InspectOptions()
    if isinstance(options, InspectOptions):
        return options
    if options.get("subProject") or options.get("sub_project"):
        raise UsageError(_SUB_PROJECT_UNSUPPORTED)
    try:
        return InspectOptions.model_validate(dict(options))
    except ValidationError as exc:
        raise UsageError(f"Invalid inspect options: {exc}") from exc


def _check_in_sync(root: Path, files: ResolvedFiles) -> None:
    if files.manifest is None:
        raise NoManifestForStrictCheckError()
    try:
        outcome = verify_checksum(root / files.manifest, root / files.lockfile)
    except LockfileFormatError as exc:
        raise ParseError(LOCKFILE_NAME, exc) from exc
    if outcome is ChecksumOutcome.NO_CHECKSUM_RECORDED:
        raise NoChecksumRecordedError()
    if outcome is ChecksumOutcome.INVALID:
        raise OutOfSyncError(files.manifest, files.lockfile)


def load_dep_tree(lockfile_path: Path) -> dict[str, Any]:
    """Parse the lockfile and render its dependency tree."""
    try:
        graph = LockfileParser.read_file(lockfile_path).to_dep_graph()
    except (OSError, LockfileFormatError) as exc:
        raise ParseError(LOCKFILE_NAME, exc) from exc
    return graph_to_dep_tree(graph, PKG_MANAGER)


async def inspect(
    root: str | Path,
    target_file: str | None = None,
    options: InspectOptions | Mapping[str, Any] | None = None,
) -> InspectionResult:
    """Inspect the CocoaPods project in *root*.

    *target_file* optionally points at the lockfile or a manifest,
    relative to *root*. Raises an ``InspectError`` subclass on failure;
    no partial result is ever returned.
    """
    opts = _coerce_options(options)
    if opts.sub_project:
        raise UsageError(_SUB_PROJECT_UNSUPPORTED)

    root = Path(root)
    files = resolve(root, target_file)

    if opts.strict_out_of_sync:
        _check_in_sync(root, files)

    runtime = await probe_version(
        root, fallback=opts.runtime_fallback, timeout=opts.probe_timeout
    )
    package = load_dep_tree(root / files.lockfile)

    log.info(
        "inspect.completed",
        root=str(root),
        target_file=files.target_file,
        runtime=runtime,
        dependencies=len(package["dependencies"]),
    )
    return InspectionResult(
        package=package,
        plugin=PluginMetadata(runtime=runtime, target_file=files.target_file),
    )


def inspect_sync(
    root: str | Path,
    target_file: str | None = None,
    options: InspectOptions | Mapping[str, Any] | None = None,
) -> InspectionResult:
    """Blocking wrapper around :func:`inspect` for hosts without an event loop."""
    return asyncio.run(inspect(root, target_file, options))
