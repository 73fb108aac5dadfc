"""Run external commands without a shell (except where the platform needs one)."""

from __future__ import annotations

import asyncio
import contextlib
import shlex
import subprocess
import sys
from pathlib import Path

from podinspect.exceptions import ExecutionError


def _is_windows() -> bool:
    return sys.platform.startswith("win")


def _escape_args(args: list[str]) -> list[str]:
    # exec() rejects embedded NUL bytes; nothing else needs escaping without a shell.
    return [arg.replace("\x00", "") for arg in args]


async def _spawn(command: str, args: list[str], cwd: str | None) -> asyncio.subprocess.Process:
    if _is_windows():
        # .bat/.cmd shims (pod.bat, bundle.bat) only run through cmd.exe.
        cmdline = " ".join([command, subprocess.list2cmdline(_escape_args(args))]).strip()
        return await asyncio.create_subprocess_shell(
            cmdline,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
        )
    return await asyncio.create_subprocess_exec(
        *shlex.split(command),
        *_escape_args(args),
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=cwd,
    )


async def execute(
    command: str,
    args: list[str] | None = None,
    cwd: str | Path | None = None,
    timeout: float | None = None,
) -> str:
    """Run *command* with *args* in *cwd* and return its output.

    *command* may hold several words (``"bundle exec pod"``); it is split
    like a POSIX shell would, but never handed to one on POSIX systems.
    Returns stdout, or stderr when stdout is empty.

    Raises ``ExecutionError`` if the command cannot be spawned, exits
    non-zero, or runs longer than *timeout* seconds.
    """
    args = list(args or [])
    workdir = str(cwd) if cwd is not None else None
    try:
        proc = await _spawn(command, args, workdir)
    except (OSError, ValueError) as exc:
        raise ExecutionError(str(exc), stderr=str(exc)) from exc

    try:
        raw_stdout, raw_stderr = await asyncio.wait_for(proc.communicate(), timeout)
    except asyncio.TimeoutError as exc:
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
        await proc.wait()
        raise ExecutionError(
            f"{command} timed out after {timeout}s", returncode=proc.returncode
        ) from exc

    stdout = raw_stdout.decode(errors="replace")
    stderr = raw_stderr.decode(errors="replace")
    if proc.returncode != 0:
        raise ExecutionError(
            stdout or stderr, stdout=stdout, stderr=stderr, returncode=proc.returncode
        )
    return stdout or stderr
