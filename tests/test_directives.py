# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for inline nolint directives."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from metalint.pipeline.directives import DirectiveRegistry, filter_directives, parse_directives

SOURCE = dedent(
    """\
    package a

    // nolint: golint
    func Exported() {}

    var unused = 1 // nolint:vet, errcheck

    var other = 2 //nolint
    """,
)


def test_parse_standalone_and_trailing_directives() -> None:
    directives = parse_directives(SOURCE, "a.go")

    assert [(d.line, d.target_line, sorted(d.tools)) for d in directives] == [
        (3, 4, ["golint"]),
        (6, 6, ["errcheck", "vet"]),
        (8, 8, []),
    ]


def test_directive_without_tools_covers_everything() -> None:
    directive = parse_directives("x := 1 // nolint\n", "a.go")[0]

    assert directive.covers("anything")


def test_words_containing_nolint_are_ignored() -> None:
    assert parse_directives("// nolintx is not a directive\n", "a.go") == []


@pytest.fixture
def source_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.go").write_text(SOURCE, encoding="utf-8")
    return "a.go"


def test_suppresses_matching_tool_on_target_line(source_file: str, make_issue) -> None:
    registry = DirectiveRegistry()
    suppressed = make_issue(path=source_file, line=4, tool="golint")
    kept = make_issue(path=source_file, line=4, tool="vet")

    assert list(filter_directives([suppressed, kept], registry)) == [kept]


def test_aggregated_issue_needs_every_tool_covered(source_file: str, make_issue) -> None:
    registry = DirectiveRegistry()
    partly = make_issue(path=source_file, line=4, tool=("golint", "vet"))
    fully = make_issue(path=source_file, line=6, tool=("vet", "errcheck"))

    assert list(filter_directives([partly, fully], registry)) == [partly]


def test_unmatched_directives_are_reported_in_order(source_file: str, make_issue) -> None:
    registry = DirectiveRegistry()
    registry.preload([source_file])

    list(filter_directives([make_issue(path=source_file, line=8, tool="vet")], registry))

    assert [directive.line for directive in registry.unmatched()] == [3, 6]
    assert "a.go:3" in registry.unmatched()[0].describe()


def test_missing_file_has_no_directives(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, make_issue) -> None:
    monkeypatch.chdir(tmp_path)
    registry = DirectiveRegistry()

    assert not registry.suppresses(make_issue(path="missing.go", line=1))
    assert registry.unmatched() == []
