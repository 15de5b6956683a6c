# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Inline ``nolint`` suppression directives."""

from __future__ import annotations

import os
import re
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from ..core.models import Issue

DIRECTIVE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?P<leader>//|#)\s*nolint\b(?:\s*:\s*(?P<tools>[\w.\-]+(?:\s*,\s*[\w.\-]+)*))?",
)
_TOOL_SEPARATOR: Final[str] = ","


@dataclass(slots=True)
class Directive:
    """A ``nolint`` comment and the source line it suppresses.

    A directive trailing code covers its own line; a directive alone on a
    line covers the next line. An empty ``tools`` set covers every tool.
    """

    path: str
    line: int
    target_line: int
    tools: frozenset[str] = field(default_factory=frozenset)
    matched: bool = False

    def covers(self, tool: str) -> bool:
        return not self.tools or tool in self.tools

    def describe(self) -> str:
        names = ",".join(sorted(self.tools)) if self.tools else "all linters"
        return f"{self.path}:{self.line}: nolint directive for {names} did not match any issue"


def parse_directives(text: str, path: str) -> list[Directive]:
    """Return the directives found in ``text``.

    Args:
        text: Source file contents.
        path: Path recorded on each directive.

    Returns:
        list[Directive]: Directives in file order.
    """

    directives: list[Directive] = []
    for number, line in enumerate(text.splitlines(), start=1):
        match = DIRECTIVE_PATTERN.search(line)
        if match is None:
            continue
        standalone = not line[: match.start()].strip()
        raw_tools = match.group("tools") or ""
        tools = frozenset(name.strip() for name in raw_tools.split(_TOOL_SEPARATOR) if name.strip())
        directives.append(
            Directive(path=path, line=number, target_line=number + 1 if standalone else number, tools=tools),
        )
    return directives


def _normalise(path: str) -> str:
    return os.path.normpath(path)


class DirectiveRegistry:
    """Load directives lazily per file and track which ones matched.

    Files are read the first time an issue refers to them, or up front via
    :meth:`preload` so unmatched directives in files without issues are seen.
    """

    def __init__(self) -> None:
        self._files: dict[str, list[Directive]] = {}
        self._lock = threading.Lock()

    def load(self, path: str) -> list[Directive]:
        key = _normalise(path)
        with self._lock:
            cached = self._files.get(key)
            if cached is not None:
                return cached
        try:
            text = Path(key).read_text(encoding="utf-8", errors="replace")
        except OSError:
            directives: list[Directive] = []
        else:
            directives = parse_directives(text, key)
        with self._lock:
            return self._files.setdefault(key, directives)

    def preload(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.load(path)

    def suppresses(self, issue: Issue) -> bool:
        """Return ``True`` when every tool on ``issue`` is covered by a directive.

        Matching directives are marked as used.
        """

        if not issue.path:
            return False
        candidates = [directive for directive in self.load(issue.path) if directive.target_line == issue.line]
        if not candidates:
            return False
        covered = True
        for tool in issue.tool_names:
            hits = [directive for directive in candidates if directive.covers(tool)]
            for directive in hits:
                directive.matched = True
            covered = covered and bool(hits)
        return covered

    def unmatched(self) -> list[Directive]:
        """Return directives that suppressed nothing, ordered by path and line."""

        with self._lock:
            everything = [directive for directives in self._files.values() for directive in directives]
        return sorted(
            (directive for directive in everything if not directive.matched),
            key=lambda directive: (directive.path, directive.line),
        )


def filter_directives(issues: Iterable[Issue], registry: DirectiveRegistry) -> Iterator[Issue]:
    """Drop issues suppressed by a directive."""

    for issue in issues:
        if not registry.suppresses(issue):
            yield issue


__all__ = ["DIRECTIVE_PATTERN", "Directive", "DirectiveRegistry", "filter_directives", "parse_directives"]
