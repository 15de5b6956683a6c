# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from metalint.core.models import Issue
from metalint.core.severity import Severity

IssueFactory = Callable[..., Issue]


def _write(path: Path, text: str = "package main\n") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def go_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a small Go source tree and make it the working directory.

    Layout::

        a/a.go  a/a_test.go  a/b/b.go  docs/README.md
        .hidden/h.go  _build/x.go  vendor/dep/dep.go
    """

    root = tmp_path / "project"
    _write(root / "a" / "a.go")
    _write(root / "a" / "a_test.go")
    _write(root / "a" / "b" / "b.go")
    _write(root / "docs" / "README.md", "# docs\n")
    _write(root / ".hidden" / "h.go")
    _write(root / "_build" / "x.go")
    _write(root / "vendor" / "dep" / "dep.go")
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def make_issue() -> IssueFactory:
    """Return a factory building issues with compact defaults."""

    def _factory(
        path: str = "a.go",
        line: int = 1,
        col: int = 0,
        message: str = "problem",
        tool: str | tuple[str, ...] = "vet",
        severity: Severity = Severity.WARNING,
    ) -> Issue:
        names = (tool,) if isinstance(tool, str) else tool
        return Issue(tool_names=names, severity=severity, path=path, line=line, col=col, message=message)

    return _factory
