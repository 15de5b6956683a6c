# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool catalog: definitions, built-in tools and the registry."""

from __future__ import annotations

from .builtin import BUILTIN_TOOLS, DEFAULT_MESSAGE_OVERRIDES, DEFAULT_SEVERITIES
from .models import PartitionStrategy, Tool, ToolDefinition, ToolKind
from .patterns import PREDEFINED_PATTERNS, compile_pattern
from .registry import ToolRegistry, parse_linter_spec, split_named_spec

__all__ = [
    "BUILTIN_TOOLS",
    "DEFAULT_MESSAGE_OVERRIDES",
    "DEFAULT_SEVERITIES",
    "PREDEFINED_PATTERNS",
    "PartitionStrategy",
    "Tool",
    "ToolDefinition",
    "ToolKind",
    "ToolRegistry",
    "compile_pattern",
    "parse_linter_spec",
    "split_named_spec",
]
