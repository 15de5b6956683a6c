# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum, IntFlag
from typing import Final

from ..errors import ConfigError


class Severity(str, Enum):
    """Severity levels attached to every issue.

    Members compare by their string value when sorting, so ``error`` orders
    before ``warning``.
    """

    ERROR = "error"
    WARNING = "warning"


class ExitStatus(IntFlag):
    """Bits folded into the process exit code."""

    CLEAN = 0
    WARNINGS = 1
    ERRORS = 2
    FAILURE = 4


DEFAULT_SEVERITY: Final[Severity] = Severity.WARNING
_SPEC_SEPARATOR: Final[str] = ":"


def parse_severity(value: str | Severity) -> Severity:
    """Return the :class:`Severity` named by ``value``.

    Args:
        value: Severity label such as ``"error"`` (case-insensitive).

    Returns:
        Severity: Matching severity member.

    Raises:
        ConfigError: If ``value`` names no known severity.
    """

    if isinstance(value, Severity):
        return value
    try:
        return Severity(value.strip().lower())
    except ValueError as exc:
        raise ConfigError(f"invalid severity {value!r}") from exc


def parse_severity_specs(specs: Iterable[str]) -> dict[str, Severity]:
    """Parse ``LINTER:SEVERITY`` command-line entries into a mapping.

    Args:
        specs: Raw entries supplied on the command line.

    Returns:
        dict[str, Severity]: Severity override keyed by tool name.

    Raises:
        ConfigError: If an entry lacks the separator or names an unknown severity.
    """

    overrides: dict[str, Severity] = {}
    for spec in specs:
        if _SPEC_SEPARATOR not in spec:
            raise ConfigError(f"invalid severity override {spec!r}: expected LINTER:SEVERITY")
        tool, level = spec.split(_SPEC_SEPARATOR, 1)
        overrides[tool.strip()] = parse_severity(level)
    return overrides


def status_for(severity: Severity) -> ExitStatus:
    """Return the exit status bit contributed by an issue of ``severity``."""

    if severity is Severity.ERROR:
        return ExitStatus.ERRORS
    return ExitStatus.WARNINGS


__all__ = [
    "DEFAULT_SEVERITY",
    "ExitStatus",
    "Severity",
    "parse_severity",
    "parse_severity_specs",
    "status_for",
]
