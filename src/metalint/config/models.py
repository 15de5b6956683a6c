# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and helpers for the metalint orchestration package."""

from __future__ import annotations

import os
import re
from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..catalog.models import ToolDefinition
from ..core.models import DEFAULT_ISSUE_FORMAT, Issue
from ..core.severity import Severity, parse_severity
from ..core.templating import Vars
from ..errors import ConfigError

SORT_NONE: Final[str] = "none"
SORT_KEYS: Final[tuple[str, ...]] = (SORT_NONE, "path", "line", "column", "severity", "message", "linter")
DEFAULT_DEADLINE_SECONDS: Final[float] = 30.0
VENDOR_DIR: Final[str] = "vendor"

_DURATION_PART: Final[re.Pattern[str]] = re.compile(r"(?P<value>\d+(?:\.\d+)?)(?P<unit>ns|us|µs|ms|s|m|h)")
_DURATION_UNITS: Final[dict[str, float]] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


class OutputFormat(str, Enum):
    """Enumerate the report renderers."""

    TEXT = "text"
    JSON = "json"
    CHECKSTYLE = "checkstyle"


def parse_duration(value: str | int | float) -> float:
    """Return ``value`` converted to seconds.

    Args:
        value: Number of seconds, or a duration string made of one or more
            ``<number><unit>`` parts such as ``30s``, ``1m30s`` or ``250ms``.

    Returns:
        float: Duration in seconds.

    Raises:
        ConfigError: If the string is not a valid duration.
    """

    if isinstance(value, (int, float)):
        return float(value)
    text = value.strip()
    try:
        return float(text)
    except ValueError:
        pass
    total = 0.0
    position = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            break
        total += float(match.group("value")) * _DURATION_UNITS[match.group("unit")]
        position = match.end()
    if not text or position != len(text):
        raise ConfigError(f"invalid duration {value!r}")
    return total


def default_concurrency() -> int:
    """Return the default number of concurrently running tool processes."""

    return os.cpu_count() or 1


class Config(BaseModel):
    """Final configuration consumed by the engine.

    Built once from defaults, an optional configuration file and command
    line flags, then passed explicitly to every component.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    concurrency: int = Field(default_factory=default_concurrency)
    deadline: float = DEFAULT_DEADLINE_SECONDS
    enable: list[str] = Field(default_factory=list)
    disable: list[str] = Field(default_factory=list)
    enable_all: bool = False
    disable_all: bool = False
    fast: bool = False
    sort: list[str] = Field(default_factory=lambda: [SORT_NONE])
    exclude: list[str] = Field(default_factory=list)
    include: list[str] = Field(default_factory=list)
    aggregate: bool = False
    severity: dict[str, Severity] = Field(default_factory=dict)
    message_override: dict[str, str] = Field(default_factory=dict)
    skip: list[str] = Field(default_factory=list)
    output: OutputFormat = OutputFormat.TEXT
    format: str = DEFAULT_ISSUE_FORMAT
    errors_only: bool = False
    vendor: bool = False
    tests: bool = False
    warn_unmatched_directive: bool = False
    debug: bool = False
    linters: dict[str, str] = Field(default_factory=dict)
    define: dict[str, ToolDefinition] = Field(default_factory=dict)

    cyclo_over: int = 10
    line_length: int = 80
    min_confidence: float = 0.8
    min_occurrences: int = 3
    min_const_length: int = 3
    dupl_threshold: int = 50

    @field_validator("deadline", mode="before")
    @classmethod
    def _coerce_deadline(cls, value: str | int | float) -> float:
        seconds = parse_duration(value)
        if seconds <= 0:
            raise ConfigError("deadline must be positive")
        return seconds

    @field_validator("concurrency")
    @classmethod
    def _positive_concurrency(cls, value: int) -> int:
        if value < 1:
            raise ConfigError("concurrency must be at least 1")
        return value

    @field_validator("severity", mode="before")
    @classmethod
    def _coerce_severity(cls, value: dict[str, str | Severity]) -> dict[str, Severity]:
        return {str(tool): parse_severity(level) for tool, level in dict(value).items()}

    @field_validator("sort")
    @classmethod
    def _known_sort_keys(cls, value: list[str]) -> list[str]:
        """Reject unknown sort keys and a ``none`` mixed with real keys.

        Args:
            value: Sort keys requested by the user.

        Returns:
            list[str]: Validated sort order.

        Raises:
            ConfigError: If a key is unknown or ``none`` is combined with others.
        """

        unknown = [key for key in value if key not in SORT_KEYS]
        if unknown:
            raise ConfigError(f"unknown sort key(s): {', '.join(unknown)}")
        if SORT_NONE in value and len(value) > 1:
            raise ConfigError("sort key 'none' cannot be combined with other keys")
        return value or [SORT_NONE]

    @field_validator("define", mode="before")
    @classmethod
    def _name_definitions(cls, value: dict[str, object]) -> dict[str, object]:
        """Default each ``[define.<name>]`` table's ``name`` to its key."""

        named: dict[str, object] = {}
        for key, entry in dict(value).items():
            if isinstance(entry, dict):
                entry = {"name": key, **entry}
            named[key] = entry
        return named

    @field_validator("exclude", "include")
    @classmethod
    def _valid_regexes(cls, value: list[str]) -> list[str]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ConfigError(f"invalid regular expression {pattern!r}: {exc}") from exc
        return value

    @field_validator("format")
    @classmethod
    def _valid_format(cls, value: str) -> str:
        sample = Issue(tool_names=("sample",), path="sample.go", line=1, col=1, message="sample")
        try:
            sample.format(value)
        except (KeyError, IndexError, ValueError) as exc:
            raise ConfigError(f"invalid format {value!r}: {exc}") from exc
        return value

    @model_validator(mode="after")
    def _apply_output_rules(self) -> Config:
        """Force path ordering for checkstyle output and skip vendored code."""

        if self.output is OutputFormat.CHECKSTYLE and self.sort != ["path"]:
            object.__setattr__(self, "sort", ["path"])
        if self.vendor and VENDOR_DIR not in self.skip:
            object.__setattr__(self, "skip", [*self.skip, VENDOR_DIR])
        return self

    @property
    def sorting_enabled(self) -> bool:
        """Return ``False`` when the sort order is the literal ``["none"]``."""

        return self.sort != [SORT_NONE]

    def tool_vars(self) -> Vars:
        """Return the configuration variables interpolated into tool commands."""

        return Vars(
            {
                "duplthreshold": str(self.dupl_threshold),
                "mincyclo": str(self.cyclo_over),
                "maxlinelength": str(self.line_length),
                "min_confidence": f"{self.min_confidence:f}",
                "min_occurrences": str(self.min_occurrences),
                "min_const_length": str(self.min_const_length),
                "tests": "-t" if self.tests else "",
                "not_tests": "" if self.tests else "true",
            },
        )


__all__ = [
    "Config",
    "DEFAULT_DEADLINE_SECONDS",
    "OutputFormat",
    "SORT_KEYS",
    "SORT_NONE",
    "default_concurrency",
    "parse_duration",
]
