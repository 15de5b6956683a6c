# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Translate command-line flags into configuration overrides."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Final

from ..catalog.registry import split_named_spec
from ..config.models import Config, OutputFormat
from ..core.severity import parse_severity_specs
from ..errors import ConfigError

_SPEC_SEPARATOR: Final[str] = ":"


def parse_message_overrides(specs: Sequence[str]) -> dict[str, str]:
    """Parse ``LINTER:MESSAGE`` entries into a mapping.

    Raises:
        ConfigError: If an entry lacks the separator.
    """

    overrides: dict[str, str] = {}
    for spec in specs:
        tool, sep, message = spec.partition(_SPEC_SEPARATOR)
        if not sep or not tool.strip():
            raise ConfigError(f"invalid message override {spec!r}: expected LINTER:MESSAGE")
        overrides[tool.strip()] = message
    return overrides


@dataclass(slots=True)
class LintFlags:
    """Raw ``lint`` command flags; ``None`` and ``False`` mean "not given"."""

    enable: list[str] = field(default_factory=list)
    disable: list[str] = field(default_factory=list)
    linters: list[str] = field(default_factory=list)
    message_overrides: list[str] = field(default_factory=list)
    severity: list[str] = field(default_factory=list)
    sort: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    include: list[str] = field(default_factory=list)
    skip: list[str] = field(default_factory=list)
    enable_all: bool = False
    disable_all: bool = False
    fast: bool = False
    aggregate: bool = False
    errors_only: bool = False
    vendor: bool = False
    tests: bool = False
    warn_unmatched_directive: bool = False
    debug: bool = False
    json_output: bool = False
    checkstyle: bool = False
    concurrency: int | None = None
    deadline: str | None = None
    format: str | None = None
    cyclo_over: int | None = None
    line_length: int | None = None
    min_confidence: float | None = None
    min_occurrences: int | None = None
    min_const_length: int | None = None
    dupl_threshold: int | None = None


_SWITCHES: Final[tuple[str, ...]] = (
    "enable_all",
    "disable_all",
    "fast",
    "aggregate",
    "errors_only",
    "vendor",
    "tests",
    "warn_unmatched_directive",
    "debug",
)
_VALUES: Final[tuple[str, ...]] = (
    "concurrency",
    "deadline",
    "format",
    "cyclo_over",
    "line_length",
    "min_confidence",
    "min_occurrences",
    "min_const_length",
    "dupl_threshold",
)


def build_overrides(flags: LintFlags, base: Config) -> dict[str, Any]:
    """Return configuration overrides for the flags that were supplied.

    ``--enable`` and ``--disable`` extend the configured lists; an enabled
    tool that is later disabled is removed. Other list flags replace the
    configured value. Mapping flags merge into the configured mapping.

    Args:
        flags: Parsed command-line flags.
        base: Configuration loaded from file, used for list extension.

    Returns:
        dict[str, Any]: Overrides for :func:`merge_overrides`.

    Raises:
        ConfigError: If a ``LINTER:VALUE`` style flag is malformed.
    """

    overrides: dict[str, Any] = {}
    if flags.enable:
        overrides["enable"] = [*base.enable, *flags.enable]
    if flags.disable:
        enabled = overrides.get("enable", base.enable)
        overrides["enable"] = [name for name in enabled if name not in flags.disable]
        overrides["disable"] = [*base.disable, *flags.disable]
    if flags.linters:
        overrides["linters"] = dict(split_named_spec(spec) for spec in flags.linters)
    if flags.message_overrides:
        overrides["message_override"] = parse_message_overrides(flags.message_overrides)
    if flags.severity:
        overrides["severity"] = parse_severity_specs(flags.severity)
    for name in ("sort", "exclude", "include", "skip"):
        values = getattr(flags, name)
        if values:
            overrides[name] = list(values)
    for name in _SWITCHES:
        if getattr(flags, name):
            overrides[name] = True
    for name in _VALUES:
        value = getattr(flags, name)
        if value is not None:
            overrides[name] = value
    if flags.json_output and flags.checkstyle:
        raise ConfigError("--json and --checkstyle are mutually exclusive")
    if flags.json_output:
        overrides["output"] = OutputFormat.JSON
    elif flags.checkstyle:
        overrides["output"] = OutputFormat.CHECKSTYLE
    return overrides


__all__ = ["LintFlags", "build_overrides", "parse_message_overrides"]
