"""CLI entry point for standalone usage: podinspect.

Usage:
    podinspect inspect /path/to/app                       # auto-detect Podfile + Podfile.lock
    podinspect inspect /path/to/app --file ios/Podfile.lock
    podinspect inspect . --strict-out-of-sync --json
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any

import click

from podinspect.core.logging import setup_logging
from podinspect.exceptions import InspectError
from podinspect.inspector import inspect as inspect_project
from podinspect.models import InspectOptions


def _print_tree(node: dict[str, Any], depth: int = 0) -> None:
    for name, dep in sorted(node.get("dependencies", {}).items()):
        click.echo(f"{'  ' * (depth + 1)}{name} {dep.get('version') or ''}".rstrip())
        _print_tree(dep, depth + 1)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """podinspect: resolve and report on CocoaPods projects."""
    setup_logging("DEBUG" if verbose else None)


@main.command("inspect")
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.option("--file", "target_file", default=None, help="Podfile or Podfile.lock, relative to ROOT")
@click.option(
    "--strict-out-of-sync",
    is_flag=True,
    envvar="PODINSPECT_STRICT_OUT_OF_SYNC",
    help="Fail if the Podfile changed since Podfile.lock was generated",
)
@click.option(
    "--runtime-fallback",
    default="",
    envvar="PODINSPECT_RUNTIME_FALLBACK",
    help="Runtime reported when `pod --version` cannot be run",
)
@click.option(
    "--probe-timeout",
    type=float,
    default=None,
    envvar="PODINSPECT_PROBE_TIMEOUT",
    help="Seconds to wait for each `pod --version` attempt",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def inspect_cmd(
    root: str,
    target_file: str | None,
    strict_out_of_sync: bool,
    runtime_fallback: str,
    probe_timeout: float | None,
    as_json: bool,
) -> None:
    """Inspect the CocoaPods project in ROOT."""
    options = InspectOptions(
        strict_out_of_sync=strict_out_of_sync,
        runtime_fallback=runtime_fallback,
        probe_timeout=probe_timeout,
    )
    try:
        result = asyncio.run(inspect_project(root, target_file, options))
    except InspectError as e:
        click.echo(f"Error ({e.status_code}): {e}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_host(), indent=2))
        return

    plugin = result.plugin
    click.echo(f"Target file: {plugin.target_file}")
    click.echo(f"CocoaPods:   {plugin.runtime or 'unknown'}")
    deps = result.package["dependencies"]
    click.echo(f"\n{len(deps)} direct dependencies")
    _print_tree(result.package)
