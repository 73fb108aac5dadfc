"""Shared pytest fixtures: on-disk CocoaPods projects built in tmp_path."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

PODFILE = """\
platform :ios, '11.0'

target 'App' do
  pod 'AFNetworking', '~> 3.2'
  pod 'Local', :path => '../Local'
end
"""

LOCKFILE_TEMPLATE = """\
PODS:
  - AFNetworking (3.2.1):
    - AFNetworking/NSURLSession (= 3.2.1)
    - AFNetworking/Reachability (= 3.2.1)
  - AFNetworking/NSURLSession (3.2.1):
    - AFNetworking/Reachability
  - AFNetworking/Reachability (3.2.1)
  - Local (0.1.0)

DEPENDENCIES:
  - AFNetworking (~> 3.2)
  - Local (from `../Local`)

SPEC REPOS:
  trunk:
    - AFNetworking

EXTERNAL SOURCES:
  Local:
    :path: "../Local"

SPEC CHECKSUMS:
  AFNetworking: b6f891fdfaed196b46c7a83cf209e09697b94057
  Local: 0123456789abcdef0123456789abcdef01234567
{checksum_line}
COCOAPODS: 1.7.5
"""

# Marker for "compute the checksum from the manifest that was written".
AUTO = object()


def sha1_hex(content: str) -> str:
    return hashlib.sha1(content.encode()).hexdigest()


def lockfile_text(checksum: str | None) -> str:
    checksum_line = f"\nPODFILE CHECKSUM: {checksum}\n" if checksum else ""
    return LOCKFILE_TEMPLATE.format(checksum_line=checksum_line)


@pytest.fixture
def make_project(tmp_path: Path):
    """Factory writing a manifest and/or lockfile into ``tmp_path / subdir``.

    Returns the project root (``tmp_path``).
    """

    def _make(
        manifests: tuple[str, ...] = ("Podfile",),
        lockfile: bool = True,
        checksum=AUTO,
        subdir: str = ".",
        podfile: str = PODFILE,
    ) -> Path:
        directory = tmp_path / subdir
        directory.mkdir(parents=True, exist_ok=True)
        for name in manifests:
            (directory / name).write_text(podfile)
        if lockfile:
            recorded = sha1_hex(podfile) if checksum is AUTO else checksum
            (directory / "Podfile.lock").write_text(lockfile_text(recorded))
        return tmp_path

    return _make
