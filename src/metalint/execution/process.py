# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import glob
import os
import shutil
import signal

# Bandit: subprocess usage is intentional; commands come from the tool catalog
# and are passed as argument lists without ``shell=True``.
import subprocess  # nosec B404
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

from ..errors import CommandNotFound, DeadlineExceeded

GLOB_WILDCARD: Final[str] = "*"
REAP_TIMEOUT_SECONDS: Final[float] = 5.0


@dataclass(slots=True)
class CommandOptions:
    """Command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = True
    capture_output: bool = False
    text: bool = True
    timeout: float | None = None


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        """Initialise the error with captured subprocess metadata.

        Args:
            command: Normalised command sequence that was executed.
            returncode: Exit status reported by the subprocess.
            stdout: Captured standard output stream.
            stderr: Captured standard error stream.
        """
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def resolve_executable(args: Sequence[str], *, tool: str, env: Mapping[str, str] | None = None) -> list[str]:
    """Return ``args`` with the executable resolved to an absolute path.

    Args:
        args: Command and arguments.
        tool: Tool name used in error reporting.
        env: Environment whose ``PATH`` is searched; defaults to ``os.environ``.

    Returns:
        list[str]: Argument list whose first element is an absolute path.

    Raises:
        CommandNotFound: If ``args`` is empty or the executable is not on ``PATH``.
    """

    if not args:
        raise CommandNotFound(tool, f"{tool}: empty command")
    head, *rest = args
    if os.path.isabs(head):
        return [head, *rest]
    search_path = None if env is None else env.get("PATH")
    resolved = shutil.which(head, path=search_path)
    if resolved is None:
        raise CommandNotFound(tool, f"{tool}: executable {head!r} was not found on PATH")
    return [resolved, *rest]


def expand_globs(args: Sequence[str], directory: str) -> list[str]:
    """Expand tokens containing ``*`` relative to ``directory``.

    Matches under ``directory`` are relativized to it; tokens without a match
    are kept as written.

    Args:
        args: Command arguments, possibly containing wildcards.
        directory: Effective working directory of the invocation.

    Returns:
        list[str]: Arguments with wildcard tokens replaced by their matches.
    """

    expanded: list[str] = []
    for token in args:
        if GLOB_WILDCARD not in token:
            expanded.append(token)
            continue
        pattern = token if os.path.isabs(token) else os.path.join(directory, token)
        matches = sorted(glob.glob(pattern))
        if not matches:
            expanded.append(token)
            continue
        for match in matches:
            relative = os.path.relpath(match, directory)
            expanded.append(match if relative.startswith("..") else relative)
    return expanded


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring execution semantics.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        CommandNotFound: If the executable cannot be resolved on ``PATH``.
        SubprocessExecutionError: When ``check`` is true and the process exits
            with a non-zero status.
    """

    resolved_options = options or CommandOptions()
    normalized = resolve_executable(args, tool=str(args[0]) if args else "", env=resolved_options.env)
    # Bandit: commands originate from vetted tool configurations.
    completed: CompletedProcess[str] = subprocess.run(  # nosec B603
        normalized,
        cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
        env=dict(resolved_options.env) if resolved_options.env is not None else None,
        check=False,
        capture_output=resolved_options.capture_output,
        text=resolved_options.text,
        timeout=resolved_options.timeout,
    )
    if resolved_options.check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stdout if isinstance(completed.stdout, str) else None,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )
    return completed


@dataclass(frozen=True, slots=True)
class ProcessOutput:
    """Combined output of a finished invocation."""

    args: tuple[str, ...]
    returncode: int
    output: bytes
    elapsed: float


def _kill_process_group(process: subprocess.Popen[bytes]) -> None:
    """Kill ``process`` and every child sharing its session."""

    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    except PermissionError:
        process.kill()


def _reap(process: subprocess.Popen[bytes]) -> None:
    """Wait for a killed process without blocking on an inherited pipe."""

    try:
        process.communicate(timeout=REAP_TIMEOUT_SECONDS)
    except subprocess.TimeoutExpired:
        # A descendant left the group and still holds the pipe.
        if process.stdout is not None:
            process.stdout.close()
        process.wait()


def run_with_deadline(
    args: Sequence[str],
    *,
    tool: str,
    scope: str,
    deadline: float,
    cwd: str | None = None,
    env: Mapping[str, str] | None = None,
) -> ProcessOutput:
    """Run ``args`` capturing stdout and stderr into one buffer.

    The deadline starts when the process is launched. The process leads its
    own session; when the deadline expires the whole group, including any
    children a wrapper tool forked, is killed and reaped and the output is
    discarded.

    Args:
        args: Command line with the executable already resolved.
        tool: Tool name for error reporting.
        scope: Scope description for error reporting.
        deadline: Seconds the process may run.
        cwd: Working directory for the child process.
        env: Environment for the child process.

    Returns:
        ProcessOutput: Exit status and combined output; a non-zero exit status
        is not an error.

    Raises:
        CommandNotFound: If the executable cannot be started.
        DeadlineExceeded: If the process outlives ``deadline``.
    """

    started = time.monotonic()
    try:
        # Bandit: argument lists come from the tool catalog; no shell involved.
        process = subprocess.Popen(  # nosec B603
            list(args),
            cwd=cwd,
            env=dict(env) if env is not None else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            start_new_session=True,
        )
    except OSError as exc:
        raise CommandNotFound(tool, f"{tool}: failed to start {args[0]!r}: {exc}") from exc

    remaining = max(0.0, deadline - (time.monotonic() - started))
    try:
        output, _ = process.communicate(timeout=remaining)
    except subprocess.TimeoutExpired:
        exited = process.poll() is not None
        _kill_process_group(process)
        if not exited:
            _reap(process)
            raise DeadlineExceeded(tool, scope) from None
        # Exited as the deadline fired; keep what it wrote.
        try:
            output, _ = process.communicate(timeout=REAP_TIMEOUT_SECONDS)
        except subprocess.TimeoutExpired:
            _reap(process)
            raise DeadlineExceeded(tool, scope) from None
    return ProcessOutput(
        args=tuple(args),
        returncode=process.returncode,
        output=output or b"",
        elapsed=time.monotonic() - started,
    )


__all__ = [
    "CommandOptions",
    "ProcessOutput",
    "REAP_TIMEOUT_SECONDS",
    "SubprocessExecutionError",
    "expand_globs",
    "resolve_executable",
    "run_command",
    "run_with_deadline",
]
