# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for issues and severities."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from metalint.core.models import Issue
from metalint.core.severity import ExitStatus, Severity, parse_severity, parse_severity_specs, status_for
from metalint.errors import ConfigError


def test_issue_linter_is_sorted_and_deduplicated() -> None:
    issue = Issue(tool_names=("vet", "golint", "vet"), path="a.go")

    assert issue.tool_names == ("vet", "golint")
    assert issue.linter == "golint, vet"


def test_issue_requires_a_tool() -> None:
    with pytest.raises(ValidationError):
        Issue(tool_names=(), path="a.go")


def test_issue_rejects_zero_line() -> None:
    with pytest.raises(ValidationError):
        Issue(tool_names=("vet",), line=0)


def test_issue_message_is_trimmed() -> None:
    assert Issue(tool_names=("vet",), message="  spaced \n").message == "spaced"


def test_add_tools_merges_in_place() -> None:
    issue = Issue(tool_names=("vet",))

    issue.add_tools(["errcheck", "vet"])

    assert issue.tool_names == ("vet", "errcheck")


def test_str_uses_default_format() -> None:
    issue = Issue(tool_names=("vet",), path="a.go", line=2, col=5, message="m", severity=Severity.ERROR)

    assert str(issue) == "a.go:2:5:error: m (vet)"


@pytest.mark.parametrize(("text", "expected"), [("error", Severity.ERROR), (" Warning ", Severity.WARNING)])
def test_parse_severity(text: str, expected: Severity) -> None:
    assert parse_severity(text) is expected


def test_parse_severity_rejects_unknown() -> None:
    with pytest.raises(ConfigError):
        parse_severity("fatal")


def test_parse_severity_specs() -> None:
    assert parse_severity_specs(["vet:error", "golint:warning"]) == {
        "vet": Severity.ERROR,
        "golint": Severity.WARNING,
    }
    with pytest.raises(ConfigError):
        parse_severity_specs(["vet"])


def test_status_bits() -> None:
    assert status_for(Severity.ERROR) is ExitStatus.ERRORS
    assert status_for(Severity.WARNING) is ExitStatus.WARNINGS
    assert int(ExitStatus.WARNINGS | ExitStatus.FAILURE) == 5


def test_location_omits_missing_column() -> None:
    assert Issue(tool_names=("vet",), path="a.go", line=3).location == "a.go:3"
    assert Issue(tool_names=("vet",), path="a.go", line=3, col=4).location == "a.go:3:4"
