# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for text, JSON and checkstyle report rendering."""

from __future__ import annotations

import json
from io import StringIO
from xml.etree import ElementTree

from metalint.config import Config, OutputFormat
from metalint.core.severity import Severity
from metalint.reporting import build_checkstyle, render, render_checkstyle, render_json, render_text


def test_text_uses_default_template(make_issue) -> None:
    stream = StringIO()

    count = render_text([make_issue(path="a.go", line=3, col=7, message="oops", tool="vet")], stream)

    assert count == 1
    assert stream.getvalue() == "a.go:3:7:warning: oops (vet)\n"


def test_text_renders_missing_column_as_empty(make_issue) -> None:
    stream = StringIO()

    render_text([make_issue(line=2, message="m")], stream)

    assert stream.getvalue() == "a.go:2::warning: m (vet)\n"


def test_text_custom_template(make_issue) -> None:
    stream = StringIO()

    render_text([make_issue(tool=("vet", "golint"))], stream, template="{linter} | {message}")

    assert stream.getvalue() == "golint, vet | problem\n"


def test_json_streams_an_array(make_issue) -> None:
    stream = StringIO()
    issues = [make_issue(line=1, col=2), make_issue(path="b.go", severity=Severity.ERROR)]

    count = render_json(issues, stream)

    assert count == 2
    assert stream.getvalue().startswith("[\n  {")
    payload = json.loads(stream.getvalue())
    assert payload[0] == {
        "linter": "vet",
        "severity": "warning",
        "path": "a.go",
        "line": 1,
        "col": 2,
        "message": "problem",
    }
    assert payload[1]["severity"] == "error"


def test_json_without_issues_is_an_empty_array() -> None:
    stream = StringIO()

    render_json([], stream)

    assert json.loads(stream.getvalue()) == []


def test_checkstyle_groups_consecutive_paths(make_issue) -> None:
    issues = [
        make_issue(path="a.go", line=1),
        make_issue(path="a.go", line=5, severity=Severity.ERROR, message="<bad> & \"quoted\""),
        make_issue(path="b.go", line=2, tool=("vet", "golint")),
    ]

    root = build_checkstyle(issues)

    assert root.tag == "checkstyle"
    assert root.get("version") == "5.0"
    files = root.findall("file")
    assert [element.get("name") for element in files] == ["a.go", "b.go"]
    errors = files[0].findall("error")
    assert [error.get("line") for error in errors] == ["1", "5"]
    assert errors[1].get("severity") == "error"
    assert errors[1].get("message") == "<bad> & \"quoted\""
    assert files[1].find("error").get("source") == "golint, vet"


def test_checkstyle_document_is_well_formed(make_issue) -> None:
    stream = StringIO()

    count = render_checkstyle([make_issue(message="a < b")], stream)

    assert count == 1
    text = stream.getvalue()
    assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    parsed = ElementTree.fromstring(text.split("\n", 1)[1])
    assert parsed.find("file/error").get("message") == "a < b"


def test_render_dispatches_on_output(make_issue) -> None:
    stream = StringIO()

    render([make_issue()], Config(output=OutputFormat.JSON), stream)

    assert json.loads(stream.getvalue())[0]["linter"] == "vet"
