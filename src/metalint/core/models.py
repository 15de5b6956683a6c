# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the metalint package."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .severity import DEFAULT_SEVERITY, Severity

DEFAULT_ISSUE_FORMAT: Final[str] = "{path}:{line}:{col}:{severity}: {message} ({linter})"
LINTER_SEPARATOR: Final[str] = ", "


class IssueKey(NamedTuple):
    """Identity used to decide whether two issues describe the same problem."""

    path: str
    line: int
    col: int
    message: str


class Issue(BaseModel):
    """Normalised issue reported by one or more tools.

    ``col`` of ``0`` means the tool reported no column; it renders as an
    empty field rather than ``0``.
    """

    model_config = ConfigDict(validate_assignment=True)

    tool_names: tuple[str, ...] = Field(min_length=1)
    severity: Severity = DEFAULT_SEVERITY
    path: str = ""
    line: int = Field(default=1, ge=1)
    col: int = Field(default=0, ge=0)
    message: str = ""

    @field_validator("tool_names", mode="before")
    @classmethod
    def _unique_tool_names(cls, value: Iterable[str] | str) -> tuple[str, ...]:
        """Collapse duplicate tool names while keeping first-seen order.

        Args:
            value: Tool name or iterable of tool names.

        Returns:
            tuple[str, ...]: De-duplicated tool names.
        """

        if isinstance(value, str):
            return (value,)
        return tuple(dict.fromkeys(value))

    @field_validator("message", mode="before")
    @classmethod
    def _strip_message(cls, value: str) -> str:
        return value.strip() if isinstance(value, str) else value

    @property
    def linter(self) -> str:
        """Return the contributing tool names sorted and comma joined."""

        return LINTER_SEPARATOR.join(sorted(self.tool_names))

    @property
    def key(self) -> IssueKey:
        """Return the aggregation identity ``(path, line, col, message)``."""

        return IssueKey(self.path, self.line, self.col, self.message)

    @property
    def location(self) -> str:
        """Return ``path:line`` or ``path:line:col`` when a column is known."""

        if self.col:
            return f"{self.path}:{self.line}:{self.col}"
        return f"{self.path}:{self.line}"

    def add_tools(self, names: Iterable[str]) -> None:
        """Record additional contributing tools on this issue in place."""

        self.tool_names = (*self.tool_names, *names)

    def template_fields(self) -> dict[str, str | int]:
        """Return the values available to line templates.

        Returns:
            dict[str, str | int]: Template fields with ``col`` rendered as an
            empty string when unspecified.
        """

        return {
            "path": self.path.strip(),
            "line": self.line,
            "col": str(self.col) if self.col else "",
            "severity": self.severity.value,
            "message": self.message,
            "linter": self.linter,
        }

    def format(self, template: str = DEFAULT_ISSUE_FORMAT) -> str:
        """Render the issue through a ``str.format`` style ``template``."""

        return template.format_map(self.template_fields())

    def to_dict(self) -> dict[str, str | int]:
        """Return the JSON representation used by the structured renderer."""

        return {
            "linter": self.linter,
            "severity": self.severity.value,
            "path": self.path,
            "line": self.line,
            "col": self.col,
            "message": self.message,
        }

    def __str__(self) -> str:
        return self.format()


__all__ = ["DEFAULT_ISSUE_FORMAT", "Issue", "IssueKey", "LINTER_SEPARATOR"]
