# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool definition models describing how external tools are executed."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict

from ..core.models import Issue
from ..core.severity import Severity
from ..core.templating import references

PATH_VARIABLE: Final[str] = "path"


class PartitionStrategy(str, Enum):
    """Enumerate how a tool's scopes are split into command lines."""

    DIRECTORIES = "directories"
    FILES = "files"
    PACKAGES = "packages"
    FILES_BY_PACKAGE = "files-by-package"
    SINGLE_DIRECTORY = "single-directory"


class ToolKind(str, Enum):
    """Capability variants dispatched by the engine."""

    DIRECTORY = "directory"
    PACKAGE = "package"
    FILE = "file"
    AST = "ast"


_KIND_BY_STRATEGY: Final[dict[PartitionStrategy, ToolKind]] = {
    PartitionStrategy.DIRECTORIES: ToolKind.DIRECTORY,
    PartitionStrategy.SINGLE_DIRECTORY: ToolKind.DIRECTORY,
    PartitionStrategy.PACKAGES: ToolKind.PACKAGE,
    PartitionStrategy.FILES: ToolKind.FILE,
    PartitionStrategy.FILES_BY_PACKAGE: ToolKind.FILE,
}


class ToolDefinition(BaseModel):
    """Describe an external tool as loaded from the catalog or configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    command: str
    pattern: str
    partition: PartitionStrategy = PartitionStrategy.DIRECTORIES
    install_from: str = ""
    is_fast: bool = False
    default_enabled: bool = False
    accepts_recursive: bool = False
    severity: Severity | None = None
    message_override: str | None = None

    @property
    def kind(self) -> ToolKind:
        """Return the capability variant implied by the partition strategy."""

        return _KIND_BY_STRATEGY[self.partition]


AstCheck = Callable[[Sequence[str]], Iterable[Issue]]


@dataclass(frozen=True, slots=True)
class Tool:
    """Fully resolved tool ready for scheduling.

    External tools carry a compiled ``regex``; ``AST`` tools carry an
    in-process ``check`` callable instead and never spawn a process.
    """

    name: str
    kind: ToolKind
    command: str = ""
    regex: re.Pattern[str] | None = None
    partition: PartitionStrategy = PartitionStrategy.DIRECTORIES
    severity: Severity = Severity.WARNING
    message_override: str | None = None
    accepts_recursive: bool = False
    check: AstCheck | None = None

    @property
    def uses_path_placeholder(self) -> bool:
        """Return ``True`` when the command interpolates ``{path}`` itself."""

        return references(self.command, PATH_VARIABLE)


__all__ = [
    "AstCheck",
    "PATH_VARIABLE",
    "PartitionStrategy",
    "Tool",
    "ToolDefinition",
    "ToolKind",
]
