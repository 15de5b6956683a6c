# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Streaming stages applied to the merged issue stream."""

from __future__ import annotations

from .aggregate import aggregate
from .chain import IssuePipeline
from .directives import Directive, DirectiveRegistry, filter_directives, parse_directives
from .filters import MessageFilter, errors_only, filter_messages
from .sort import sort_issues
from .status import StatusReducer

__all__ = [
    "Directive",
    "DirectiveRegistry",
    "IssuePipeline",
    "MessageFilter",
    "StatusReducer",
    "aggregate",
    "errors_only",
    "filter_directives",
    "filter_messages",
    "parse_directives",
    "sort_issues",
]
