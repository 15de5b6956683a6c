# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Merge issues reported by several tools at the same location."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..core.models import Issue, IssueKey


def aggregate(issues: Iterable[Issue]) -> Iterator[Issue]:
    """Collapse issues sharing ``(path, line, col, message)`` into one.

    The first issue seen for a key is kept and the tool names of later
    duplicates are merged into it; severity conflicts are not reconciled.
    The whole input is buffered before anything is yielded.

    Args:
        issues: Issue stream to aggregate.

    Yields:
        Issue: One issue per key, in first-seen order.
    """

    grouped: dict[IssueKey, Issue] = {}
    for issue in issues:
        existing = grouped.get(issue.key)
        if existing is None:
            grouped[issue.key] = issue
        else:
            existing.add_tools(issue.tool_names)
    yield from grouped.values()


__all__ = ["aggregate"]
