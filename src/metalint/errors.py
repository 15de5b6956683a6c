# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across the metalint package.

Fatal errors derive from :class:`MetalintError` and abort the whole run.
Per-invocation failures derive from :class:`InvocationError`; the scheduler
collects them instead of raising so sibling invocations keep running.
"""

from __future__ import annotations


class MetalintError(Exception):
    """Base class for errors that stop a lint run."""


class ConfigError(MetalintError):
    """Raised when configuration input is invalid."""


class PathResolutionError(MetalintError):
    """Raised when user supplied targets cannot be expanded into scopes."""


class PatternError(MetalintError):
    """Raised when a tool output pattern fails to compile."""

    def __init__(self, tool: str, pattern: str, reason: str) -> None:
        """Initialise the error with the offending tool and pattern.

        Args:
            tool: Name of the tool owning the pattern.
            pattern: Expanded regular expression that failed to compile.
            reason: Compiler message describing the failure.
        """

        super().__init__(f"invalid output pattern for {tool} {pattern!r}: {reason}")
        self.tool = tool
        self.pattern = pattern


class OutputParseError(MetalintError):
    """Raised when a ``line`` or ``col`` capture is not a base-10 integer."""

    def __init__(self, tool: str, group: str, value: str) -> None:
        """Initialise the error with the capture that failed to parse.

        Args:
            tool: Name of the tool whose output was being parsed.
            group: Reserved capture group name (``line`` or ``col``).
            value: Captured text that is not an integer.
        """

        super().__init__(f"{tool}: {group} matched invalid integer {value!r}")
        self.tool = tool
        self.group = group
        self.value = value


class PackagePathError(MetalintError):
    """Raised when an absolute scope lies outside every known package root."""

    def __init__(self, path: str) -> None:
        super().__init__(f"{path} is not under any package root")
        self.path = path


class InvocationError(Exception):
    """Failure of a single tool invocation; never aborts sibling invocations."""

    def __init__(self, tool: str, message: str) -> None:
        """Initialise the error for ``tool``.

        Args:
            tool: Name of the tool whose invocation failed.
            message: Human readable failure description.
        """

        super().__init__(message)
        self.tool = tool


class CommandNotFound(InvocationError):
    """Raised when a tool executable cannot be resolved on ``PATH``."""


class DeadlineExceeded(InvocationError):
    """Raised when an invocation outlives its deadline and is killed."""

    def __init__(self, tool: str, scope: str) -> None:
        super().__init__(
            tool,
            f"deadline exceeded by linter {tool} on {scope} (try increasing --deadline)",
        )
        self.scope = scope


__all__ = [
    "CommandNotFound",
    "ConfigError",
    "DeadlineExceeded",
    "InvocationError",
    "MetalintError",
    "OutputParseError",
    "PackagePathError",
    "PathResolutionError",
    "PatternError",
]
