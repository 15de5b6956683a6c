# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Line-template text output."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from rich.console import Console
from rich.text import Text

from ..core.models import DEFAULT_ISSUE_FORMAT, Issue
from ..core.severity import Severity


def severity_color(severity: Severity) -> str:
    """Return the rich colour name associated with a severity level."""

    return {Severity.ERROR: "red", Severity.WARNING: "yellow"}.get(severity, "yellow")


def render_text(
    issues: Iterable[Issue],
    stream: TextIO,
    *,
    template: str = DEFAULT_ISSUE_FORMAT,
    color: bool = False,
) -> int:
    """Write one formatted line per issue to ``stream``.

    Args:
        issues: Final issue stream.
        stream: Destination, normally standard output.
        template: ``str.format`` template with ``path``, ``line``, ``col``,
            ``severity``, ``message`` and ``linter`` fields.
        color: Colour each line by severity.

    Returns:
        int: Number of issues written.
    """

    console = Console(
        file=stream,
        color_system="auto" if color else None,
        no_color=not color,
        force_terminal=color,
        highlight=False,
        markup=False,
        emoji=False,
        soft_wrap=True,
    )
    count = 0
    for issue in issues:
        line = Text(issue.format(template))
        if color:
            line.stylize(severity_color(issue.severity))
        console.print(line)
        count += 1
    return count


__all__ = ["render_text", "severity_color"]
