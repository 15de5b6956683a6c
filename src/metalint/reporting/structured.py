# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Machine-readable output: JSON arrays and checkstyle XML."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Final, TextIO
from xml.etree import ElementTree

from ..core.models import Issue

CHECKSTYLE_VERSION: Final[str] = "5.0"
XML_HEADER: Final[str] = '<?xml version="1.0" encoding="UTF-8"?>\n'


def render_json(issues: Iterable[Issue], stream: TextIO) -> int:
    """Stream a JSON array with one object per issue.

    Each issue is written as soon as it arrives, so output starts before the
    stream is exhausted.

    Returns:
        int: Number of issues written.
    """

    stream.write("[\n")
    count = 0
    for issue in issues:
        if count:
            stream.write(",\n")
        stream.write("  " + json.dumps(issue.to_dict()))
        count += 1
    stream.write("\n]\n")
    return count


def build_checkstyle(issues: Iterable[Issue]) -> ElementTree.Element:
    """Return a ``<checkstyle>`` element grouping consecutive issues by path.

    Issues are expected in path order; a path that reappears later starts a
    new ``<file>`` element.
    """

    root = ElementTree.Element("checkstyle", version=CHECKSTYLE_VERSION)
    current: ElementTree.Element | None = None
    current_path: str | None = None
    for issue in issues:
        if current is None or current_path != issue.path:
            current = ElementTree.SubElement(root, "file", name=issue.path)
            current_path = issue.path
        ElementTree.SubElement(
            current,
            "error",
            column=str(issue.col),
            line=str(issue.line),
            message=issue.message,
            severity=issue.severity.value,
            source=issue.linter,
        )
    return root


def render_checkstyle(issues: Iterable[Issue], stream: TextIO) -> int:
    """Write checkstyle XML for ``issues`` to ``stream``.

    Returns:
        int: Number of issues written.
    """

    root = build_checkstyle(issues)
    stream.write(XML_HEADER)
    stream.write(ElementTree.tostring(root, encoding="unicode"))
    stream.write("\n")
    return sum(len(file_element) for file_element in root)


__all__ = ["build_checkstyle", "render_checkstyle", "render_json"]
