"""Compare a manifest's content digest with the checksum its lockfile recorded."""

from __future__ import annotations

import hashlib
from pathlib import Path

import structlog

from podinspect.lockfile import LockfileParser
from podinspect.models import ChecksumOutcome

log = structlog.get_logger("podinspect.checksum")


def manifest_checksum(manifest_path: str | Path) -> str:
    """SHA-1 of the raw manifest bytes, lowercase hex (what ``pod install`` records)."""
    return hashlib.sha1(Path(manifest_path).read_bytes()).hexdigest()


def verify_checksum(manifest_path: str | Path, lockfile_path: str | Path) -> ChecksumOutcome:
    """Check whether the manifest is still the one the lockfile was generated from.

    I/O errors and lockfile parse errors propagate.
    """
    digest = manifest_checksum(manifest_path)
    recorded = LockfileParser.read_file(lockfile_path).podfile_checksum
    if recorded is None:
        outcome = ChecksumOutcome.NO_CHECKSUM_RECORDED
    elif recorded == digest:
        outcome = ChecksumOutcome.VALID
    else:
        outcome = ChecksumOutcome.INVALID
    log.debug(
        "checksum.verified",
        manifest=str(manifest_path),
        computed=digest,
        recorded=recorded,
        outcome=outcome.value,
    )
    return outcome
