# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fold the issue stream into an exit status."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..core.models import Issue
from ..core.severity import ExitStatus, status_for


class StatusReducer:
    """Pass issues through unchanged while accumulating the exit status."""

    def __init__(self) -> None:
        self.status = ExitStatus.CLEAN

    def __call__(self, issues: Iterable[Issue]) -> Iterator[Issue]:
        for issue in issues:
            self.status |= status_for(issue.severity)
            yield issue

    def record_failure(self) -> None:
        """Set the failure bit for an invocation or rendering error."""

        self.status |= ExitStatus.FAILURE


__all__ = ["StatusReducer"]
