# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compose the issue stages into one streaming pipeline."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ..config.models import Config
from ..core.models import Issue
from .aggregate import aggregate
from .directives import DirectiveRegistry, filter_directives
from .filters import MessageFilter, errors_only, filter_messages
from .sort import sort_issues
from .status import StatusReducer


@dataclass(slots=True)
class IssuePipeline:
    """Chain the stages applied to the merged issue stream.

    Order: message include/exclude, directive suppression, optional
    aggregation, optional sorting, the errors-only filter and finally the
    status reducer. Directives run before aggregation because suppression is
    decided per contributing tool.
    """

    config: Config
    directives: DirectiveRegistry = field(default_factory=DirectiveRegistry)
    reducer: StatusReducer = field(default_factory=StatusReducer)

    def process(self, issues: Iterable[Issue]) -> Iterator[Issue]:
        """Return the processed stream; nothing runs until it is iterated.

        Args:
            issues: Raw issues from the scheduler.

        Returns:
            Iterator[Issue]: Issues ready for rendering.
        """

        config = self.config
        stream: Iterable[Issue] = filter_messages(
            issues,
            MessageFilter(include=config.include, exclude=config.exclude),
        )
        stream = filter_directives(stream, self.directives)
        if config.aggregate:
            stream = aggregate(stream)
        if config.sorting_enabled:
            stream = sort_issues(stream, config.sort)
        if config.errors_only:
            stream = errors_only(stream)
        return self.reducer(stream)


__all__ = ["IssuePipeline"]
