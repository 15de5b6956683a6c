# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for turning tool output into issues."""

from __future__ import annotations

from pathlib import Path

import pytest

from metalint.catalog.models import Tool, ToolKind
from metalint.catalog.patterns import compile_pattern
from metalint.core.severity import Severity
from metalint.core.templating import Vars
from metalint.errors import OutputParseError
from metalint.execution.parser import OutputParser, fix_path


def _tool(
    pattern: str = "PATH:LINE:COL:MESSAGE",
    *,
    severity: Severity = Severity.WARNING,
    message_override: str | None = None,
) -> Tool:
    return Tool(
        name="vet",
        kind=ToolKind.DIRECTORY,
        command="go vet",
        regex=compile_pattern("vet", pattern),
        severity=severity,
        message_override=message_override,
    )


def test_parse_location_and_message(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    issues = list(OutputParser(_tool()).parse(b"test.go:4:2: unused variable x\n"))

    assert len(issues) == 1
    issue = issues[0]
    assert issue.path == "test.go"
    assert (issue.line, issue.col) == (4, 2)
    assert issue.message == "unused variable x"
    assert issue.severity is Severity.WARNING
    assert issue.tool_names == ("vet",)


def test_parse_keeps_output_order_and_skips_noise(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    output = "b.go:9:1: second\n# some header\na.go:1:1: first\n"

    issues = list(OutputParser(_tool()).parse(output))

    assert [issue.path for issue in issues] == ["b.go", "a.go"]


def test_missing_groups_use_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    issues = list(OutputParser(_tool(r"^(?P<path>.*?\.go)$")).parse("main.go\n"))

    assert issues[0].line == 1
    assert issues[0].col == 0
    assert issues[0].message == ""


def test_negative_line_is_clamped(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    pattern = r"^(?P<path>\S+):(?P<line>-?\d+):(?P<message>.*)$"

    issues = list(OutputParser(_tool(pattern)).parse("x.go:-3:odd\n"))

    assert issues[0].line == 1


def test_non_integer_line_is_fatal() -> None:
    pattern = r"^(?P<path>\S+):(?P<line>\w+):(?P<message>.*)$"

    with pytest.raises(OutputParseError) as excinfo:
        list(OutputParser(_tool(pattern)).parse("x.go:abc:broken\n"))

    assert excinfo.value.group == "line"
    assert excinfo.value.value == "abc"


def test_message_override_uses_captures_and_config_vars(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    tool = _tool(
        r"^(?P<cyclo>\d+) (?P<function>\S+) (?P<path>\S+):(?P<line>\d+)$",
        message_override="cyclomatic complexity {cyclo} of func {function} is high (> {mincyclo})",
    )
    parser = OutputParser(tool, Vars({"mincyclo": "10"}))

    issues = list(parser.parse("12 main x.go:5\n"))

    assert issues[0].message == "cyclomatic complexity 12 of func main is high (> 10)"


def test_severity_comes_from_tool(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    issues = list(OutputParser(_tool(severity=Severity.ERROR)).parse("a.go:1:1: boom\n"))

    assert issues[0].severity is Severity.ERROR


def test_relative_path_is_joined_with_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "pkg").mkdir()
    monkeypatch.chdir(tmp_path)

    issues = list(OutputParser(_tool()).parse("a.go:1:1: boom\n", directory="pkg"))

    assert issues[0].path == "pkg/a.go"


def test_fix_path_relativises_absolute_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert fix_path(str(tmp_path / "sub" / "a.go")) == "sub/a.go"
    assert fix_path("") == ""
