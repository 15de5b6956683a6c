# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Report renderers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

from ..config.models import Config, OutputFormat
from ..core.models import Issue
from .structured import build_checkstyle, render_checkstyle, render_json
from .text import render_text


def render(issues: Iterable[Issue], config: Config, stream: TextIO, *, color: bool = False) -> int:
    """Render ``issues`` in the format selected by ``config.output``.

    Returns:
        int: Number of issues written.
    """

    match config.output:
        case OutputFormat.JSON:
            return render_json(issues, stream)
        case OutputFormat.CHECKSTYLE:
            return render_checkstyle(issues, stream)
        case _:
            return render_text(issues, stream, template=config.format, color=color)


__all__ = ["build_checkstyle", "render", "render_checkstyle", "render_json", "render_text"]
