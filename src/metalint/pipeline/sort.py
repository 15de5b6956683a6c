# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Multi-key ordering of the issue stream."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Final

from ..config.models import SORT_NONE
from ..core.models import Issue

SortValue = str | int
_KEY_FUNCTIONS: Final[dict[str, Callable[[Issue], SortValue]]] = {
    "path": lambda issue: issue.path,
    "line": lambda issue: issue.line,
    "column": lambda issue: issue.col,
    # Lexical on purpose: "error" orders before "warning".
    "severity": lambda issue: issue.severity.value,
    "message": lambda issue: issue.message,
    "linter": lambda issue: issue.linter,
}


def sort_key(order: Sequence[str]) -> Callable[[Issue], tuple[SortValue, ...]]:
    """Return a key function comparing issues by ``order``.

    Raises:
        KeyError: If ``order`` names an unknown key.
    """

    functions = [_KEY_FUNCTIONS[name] for name in order]
    return lambda issue: tuple(function(issue) for function in functions)


def sort_issues(issues: Iterable[Issue], order: Sequence[str]) -> Iterator[Issue]:
    """Yield ``issues`` sorted by ``order``; ``["none"]`` passes them through.

    The sort is stable, so issues tied on every key keep their input order.

    Args:
        issues: Issue stream.
        order: Sort keys, most significant first.

    Yields:
        Issue: Issues in sorted order.
    """

    if list(order) == [SORT_NONE] or not order:
        yield from issues
        return
    yield from sorted(issues, key=sort_key(order))


__all__ = ["sort_issues", "sort_key"]
