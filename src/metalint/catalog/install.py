# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Install catalog tools with the Go toolchain."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Final

from ..core.logging import Logger
from ..errors import CommandNotFound
from ..execution.process import CommandOptions, SubprocessExecutionError, run_command
from .models import ToolDefinition

GO_EXECUTABLE: Final[str] = "go"
LATEST_VERSION: Final[str] = "latest"
_VERSION_SEPARATOR: Final[str] = "@"


@dataclass(frozen=True, slots=True)
class InstallOptions:
    """Flags controlling how tools are fetched."""

    update: bool = False
    force: bool = False
    download_only: bool = False
    verbose: bool = False


@dataclass(slots=True)
class InstallReport:
    """Names of the tools that were installed and that failed."""

    installed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def install_target(source: str, *, update: bool) -> str:
    """Return ``source`` with a version suffix suitable for ``go install``.

    Pinned versions are kept unless ``update`` asks for the latest release.
    """

    module, sep, _version = source.partition(_VERSION_SEPARATOR)
    if sep and not update:
        return source
    return f"{module}{_VERSION_SEPARATOR}{LATEST_VERSION}"


def make_install_command(targets: Sequence[str], options: InstallOptions) -> list[str]:
    """Return the ``go`` command line installing ``targets``.

    Args:
        targets: Install sources, already carrying version suffixes.
        options: Install flags.

    Returns:
        list[str]: Command line to execute.
    """

    if options.download_only:
        command = [GO_EXECUTABLE, "get", "-d"]
    else:
        command = [GO_EXECUTABLE, "install"]
        if options.force:
            command.append("-a")
    if options.verbose:
        command.append("-v")
    return [*command, *targets]


def install_tools(
    definitions: Sequence[ToolDefinition],
    options: InstallOptions | None = None,
    *,
    env: Mapping[str, str] | None = None,
    logger: Logger | None = None,
) -> InstallReport:
    """Install every definition that names an install source.

    A single command installs all tools first; if it fails each tool is
    retried with its own command so one broken source does not block the
    rest.

    Args:
        definitions: Tools to install; those without ``install_from`` are skipped.
        options: Install flags.
        env: Environment for the ``go`` command.
        logger: Logger for progress output.

    Returns:
        InstallReport: Installed and failed tool names.
    """

    resolved_options = options or InstallOptions()
    log = logger or Logger()
    installable = sorted(
        (definition for definition in definitions if definition.install_from),
        key=lambda definition: definition.name,
    )
    report = InstallReport()
    if not installable:
        return report
    verb = "Downloading" if resolved_options.download_only else "Installing"
    log.info(f"{verb}:\n  " + "\n  ".join(definition.name for definition in installable))
    targets = {
        definition.name: install_target(definition.install_from, update=resolved_options.update)
        for definition in installable
    }
    command_options = CommandOptions(env=env, check=True)
    try:
        command = make_install_command(list(dict.fromkeys(targets.values())), resolved_options)
        log.debug(" ".join(command))
        run_command(command, options=command_options)
    except (SubprocessExecutionError, CommandNotFound) as exc:
        log.warn(f"failed to install one or more linters: {exc} (installing individually)")
    else:
        report.installed.extend(targets)
        return report

    for name, target in targets.items():
        command = make_install_command([target], resolved_options)
        log.debug(" ".join(command))
        try:
            run_command(command, options=command_options)
        except (SubprocessExecutionError, CommandNotFound) as exc:
            log.warn(f"failed to install {name}: {exc}")
            report.failed.append(name)
        else:
            report.installed.append(name)
    return report


__all__ = ["InstallOptions", "InstallReport", "install_target", "install_tools", "make_install_command"]
