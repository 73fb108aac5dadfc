"""Locate the manifest file and lockfile of a CocoaPods project.

Resolution only looks at which files exist; nothing is read. Paths are
returned relative to the project root, always with the manifest and the
lockfile in the same directory.
"""

from __future__ import annotations

from pathlib import Path, PurePath

import structlog

from podinspect.exceptions import (
    HintNotFoundError,
    LockfileNotFoundError,
    UnrecognizedHintError,
)
from podinspect.models import ResolvedFiles

log = structlog.get_logger("podinspect.resolver")

# Checked in this order; the first one present wins.
MANIFEST_FILE_NAMES: tuple[str, ...] = (
    "CocoaPods.podfile.yaml",
    "CocoaPods.podfile",
    "Podfile",
    "Podfile.rb",
)

LOCKFILE_NAME = "Podfile.lock"


def find_manifest_file(root: Path, directory: PurePath = PurePath(".")) -> str | None:
    """Return the highest-priority manifest in *directory*, or None."""
    for name in MANIFEST_FILE_NAMES:
        if (root / directory / name).is_file():
            return str(directory / name)
    return None


def find_lockfile(root: Path, directory: PurePath = PurePath(".")) -> str | None:
    if (root / directory / LOCKFILE_NAME).is_file():
        return str(directory / LOCKFILE_NAME)
    return None


def _expect_lockfile(root: Path, directory: PurePath) -> str:
    lockfile = find_lockfile(root, directory)
    if lockfile is None:
        raise LockfileNotFoundError()
    return lockfile


def resolve(root: str | Path, target_file: str | None = None) -> ResolvedFiles:
    """Decide which manifest (optional) and lockfile (required) govern *root*.

    *target_file* may name either the lockfile or one of the recognised
    manifest files; the other file is looked up next to it.

    Raises:
        LockfileNotFoundError: no ``Podfile.lock`` where one is required.
        HintNotFoundError: *target_file* names a manifest that doesn't exist.
        UnrecognizedHintError: *target_file* is neither role.
    """
    root = Path(root)

    if not target_file:
        resolved = ResolvedFiles(
            manifest=find_manifest_file(root),
            lockfile=_expect_lockfile(root, PurePath(".")),
        )
    else:
        hint = PurePath(target_file)
        directory = hint.parent
        if hint.name == LOCKFILE_NAME:
            resolved = ResolvedFiles(
                manifest=find_manifest_file(root, directory),
                lockfile=str(hint),
            )
        elif hint.name in MANIFEST_FILE_NAMES:
            if not (root / hint).is_file():
                raise HintNotFoundError(target_file)
            resolved = ResolvedFiles(
                manifest=str(hint),
                lockfile=_expect_lockfile(root, directory),
            )
        else:
            raise UnrecognizedHintError(target_file)

    log.debug(
        "resolver.resolved",
        root=str(root),
        hint=target_file,
        manifest=resolved.manifest,
        lockfile=resolved.lockfile,
    )
    return resolved
