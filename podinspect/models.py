"""Data models for a single CocoaPods inspection."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Alternative value for ``InspectOptions.runtime_fallback``.
RUNTIME_PLACEHOLDER = "[COULD NOT RUN pod --version]"


class ChecksumOutcome(enum.Enum):
    """Result of comparing the manifest digest with the lockfile's record."""

    VALID = "valid"
    INVALID = "invalid"
    NO_CHECKSUM_RECORDED = "no-checksum-recorded"


@dataclass(frozen=True)
class ResolvedFiles:
    """Manifest and lockfile chosen for one invocation, relative to the root."""

    lockfile: str
    manifest: str | None = None

    @property
    def target_file(self) -> str:
        return self.manifest or self.lockfile


class InspectOptions(BaseModel):
    """Per-invocation options.

    Hosts pass camelCase keys (``subProject``, ``strictOutOfSync``); the
    snake_case field names are accepted too. Options this plugin does not
    know about (``dev`` and friends) are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sub_project: Any = Field(default=None, alias="subProject")
    strict_out_of_sync: bool = Field(default=False, alias="strictOutOfSync")
    runtime_fallback: str = Field(default="", alias="runtimeFallback")
    probe_timeout: float | None = Field(default=None, alias="probeTimeout", gt=0)


class PluginMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = "cocoapods"
    runtime: str
    target_file: str = Field(alias="targetFile")
    meta: dict[str, Any] = Field(default_factory=dict)


class InspectionResult(BaseModel):
    """What the host receives: the dependency tree plus plugin metadata."""

    package: dict[str, Any]
    plugin: PluginMetadata

    def to_host(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
