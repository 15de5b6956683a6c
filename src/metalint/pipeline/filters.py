# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Issue filters applied to the merged stream."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence

from ..core.models import DEFAULT_ISSUE_FORMAT, Issue
from ..core.severity import Severity


def _combine(patterns: Sequence[str]) -> re.Pattern[str] | None:
    if not patterns:
        return None
    return re.compile("|".join(f"(?:{pattern})" for pattern in patterns))


class MessageFilter:
    """Keep or drop issues by matching their default text rendering.

    An issue is dropped when any ``exclude`` pattern matches, or when
    ``include`` patterns are configured and none of them match.
    """

    def __init__(self, *, include: Sequence[str] = (), exclude: Sequence[str] = ()) -> None:
        self._include = _combine(include)
        self._exclude = _combine(exclude)

    @property
    def active(self) -> bool:
        return self._include is not None or self._exclude is not None

    def __call__(self, issue: Issue) -> bool:
        text = issue.format(DEFAULT_ISSUE_FORMAT)
        if self._exclude is not None and self._exclude.search(text):
            return False
        return self._include is None or bool(self._include.search(text))


def filter_messages(issues: Iterable[Issue], message_filter: MessageFilter) -> Iterator[Issue]:
    if not message_filter.active:
        yield from issues
        return
    yield from (issue for issue in issues if message_filter(issue))


def errors_only(issues: Iterable[Issue]) -> Iterator[Issue]:
    """Yield only issues with error severity."""

    return (issue for issue in issues if issue.severity is Severity.ERROR)


__all__ = ["MessageFilter", "errors_only", "filter_messages"]
