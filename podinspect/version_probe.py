"""Discover which CocoaPods version the project would run with."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import structlog

from podinspect import sub_process
from podinspect.exceptions import ExecutionError

log = structlog.get_logger("podinspect.version_probe")


@dataclass(frozen=True)
class ProbeStrategy:
    command: str
    args: tuple[str, ...] = ("--version",)

    def describe(self) -> str:
        return " ".join((self.command, *self.args))


@dataclass(frozen=True)
class ProbeAttempt:
    """Outcome of one strategy: either ``output`` or ``error`` is set."""

    strategy: ProbeStrategy
    output: str | None = None
    error: ExecutionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


# Bundler first: it pins the CocoaPods version the project declares.
PROBE_STRATEGIES: tuple[ProbeStrategy, ...] = (
    ProbeStrategy("bundle exec pod"),
    ProbeStrategy("pod"),
)


async def _attempt(
    strategy: ProbeStrategy, root: str, timeout: float | None
) -> ProbeAttempt:
    try:
        output = await sub_process.execute(
            strategy.command, list(strategy.args), cwd=root, timeout=timeout
        )
    except ExecutionError as exc:
        return ProbeAttempt(strategy, error=exc)
    return ProbeAttempt(strategy, output=output)


async def probe_version(
    root: str | Path,
    fallback: str = "",
    timeout: float | None = None,
    strategies: tuple[ProbeStrategy, ...] = PROBE_STRATEGIES,
) -> str:
    """Return the trimmed output of the first strategy that succeeds.

    Strategies run one after another in *root*; none is started once an
    earlier one succeeded. When all of them fail, *fallback* is returned.
    Never raises.
    """
    for strategy in strategies:
        attempt = await _attempt(strategy, str(root), timeout)
        if attempt.ok:
            version = (attempt.output or "").strip()
            log.debug("probe.succeeded", command=strategy.describe(), version=version)
            return version
        log.info(
            "probe.failed",
            command=strategy.describe(),
            returncode=attempt.error.returncode,
            detail=str(attempt.error).strip(),
        )
    log.warning("probe.exhausted", root=str(root), fallback=fallback)
    return fallback
