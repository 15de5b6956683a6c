# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Predefined output pattern macros and pattern compilation."""

from __future__ import annotations

import re
from typing import Final

from ..errors import PatternError

PREDEFINED_PATTERNS: Final[dict[str, str]] = {
    "PATH:LINE:COL:MESSAGE": r"^(?P<path>.*?\.go):(?P<line>\d+):(?P<col>\d+):\s*(?P<message>.*)$",
    "PATH:LINE:MESSAGE": r"^(?P<path>.*?\.go):(?P<line>\d+):\s*(?P<message>.*)$",
}


def expand_pattern(pattern: str) -> str:
    """Return the regular expression a predefined macro stands for.

    Args:
        pattern: Either a macro name such as ``PATH:LINE:COL:MESSAGE`` or a
            literal regular expression.

    Returns:
        str: Expanded regular expression; literal patterns pass through.
    """

    return PREDEFINED_PATTERNS.get(pattern, pattern)


def compile_pattern(tool: str, pattern: str) -> re.Pattern[str]:
    """Compile ``pattern`` for line-oriented matching over tool output.

    Args:
        tool: Tool name used in error reporting.
        pattern: Macro name or regular expression with named groups.

    Returns:
        re.Pattern[str]: Pattern compiled in multi-line mode.

    Raises:
        PatternError: If the expanded pattern is not a valid regular expression.
    """

    expanded = expand_pattern(pattern)
    try:
        return re.compile(expanded, re.MULTILINE)
    except re.error as exc:
        raise PatternError(tool, expanded, str(exc)) from exc


__all__ = ["PREDEFINED_PATTERNS", "compile_pattern", "expand_pattern"]
