# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for concurrent invocation scheduling."""

from __future__ import annotations

import sys
import time
from pathlib import Path

import pytest

from metalint.catalog.models import Tool, ToolKind
from metalint.catalog.patterns import compile_pattern
from metalint.core.models import Issue
from metalint.errors import CommandNotFound, DeadlineExceeded, OutputParseError
from metalint.execution.scheduler import Invocation, Scheduler


def _tool(name: str = "fake", pattern: str = "PATH:LINE:COL:MESSAGE") -> Tool:
    return Tool(name=name, kind=ToolKind.DIRECTORY, command=name, regex=compile_pattern(name, pattern))


def _python(tool: Tool, code: str, scope: str = ".") -> Invocation:
    return Invocation(tool=tool, scope=scope, args=(sys.executable, "-c", code))


def _printer(lines: list[str]) -> str:
    return "import sys\n" + "".join(f"print({line!r})\n" for line in lines)


@pytest.fixture(autouse=True)
def _in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def test_deadline_kills_invocation_and_records_one_error() -> None:
    scheduler = Scheduler(concurrency=2, deadline=0.01)
    started = time.monotonic()

    issues = list(scheduler.run([_python(_tool(), "import time; time.sleep(1)")]))

    assert issues == []
    assert len(scheduler.errors) == 1
    assert isinstance(scheduler.errors[0], DeadlineExceeded)
    assert "fake" in str(scheduler.errors[0])
    assert time.monotonic() - started < 1.0


def test_issues_from_one_invocation_keep_output_order() -> None:
    scheduler = Scheduler(concurrency=4, deadline=10)
    lines = [f"f{index}.go:{index + 1}:1: message {index}" for index in range(20)]

    issues = list(scheduler.run([_python(_tool(), _printer(lines))]))

    assert [issue.line for issue in issues] == list(range(1, 21))
    assert scheduler.errors == []


def test_issues_from_every_invocation_arrive() -> None:
    scheduler = Scheduler(concurrency=2, deadline=10)
    invocations = [
        _python(_tool("one"), _printer(["a.go:1:1: first"])),
        _python(_tool("two"), _printer(["b.go:2:1: second"])),
        _python(_tool("three"), _printer(["c.go:3:1: third"])),
    ]

    issues = list(scheduler.run(invocations))

    assert sorted(issue.linter for issue in issues) == ["one", "three", "two"]


def test_bounded_queue_delivers_everything() -> None:
    scheduler = Scheduler(concurrency=1, deadline=10, capacity=1)
    lines = [f"a.go:{index}:1: m" for index in range(1, 51)]

    issues = list(scheduler.run([_python(_tool(), _printer(lines))]))

    assert len(issues) == 50


def test_non_zero_exit_still_parses_output() -> None:
    scheduler = Scheduler(concurrency=1, deadline=10)
    code = _printer(["a.go:1:1: reported"]) + "sys.exit(3)\n"

    issues = list(scheduler.run([_python(_tool(), code)]))

    assert [issue.message for issue in issues] == ["reported"]
    assert scheduler.errors == []


def test_missing_executable_is_a_per_invocation_error() -> None:
    scheduler = Scheduler(concurrency=2, deadline=10)
    invocations = [
        Invocation(tool=_tool("ghost"), scope=".", args=("metalint-no-such-linter-binary",)),
        _python(_tool(), _printer(["a.go:1:1: still here"])),
    ]

    issues = list(scheduler.run(invocations))

    assert [issue.message for issue in issues] == ["still here"]
    assert len(scheduler.errors) == 1
    assert isinstance(scheduler.errors[0], CommandNotFound)


def test_unparseable_integer_aborts_the_run() -> None:
    scheduler = Scheduler(concurrency=1, deadline=10)
    tool = _tool(pattern=r"^(?P<path>\S+):(?P<line>\w+):(?P<message>.*)$")

    with pytest.raises(OutputParseError):
        list(scheduler.run([_python(tool, _printer(["a.go:nope:bad"]))]))


def test_ast_checks_run_in_process() -> None:
    seen: list[tuple[str, ...]] = []

    def check(scopes):
        seen.append(tuple(scopes))
        return [Issue(tool_names=("inproc",), path="a.go", line=2, message="found")]

    tool = Tool(name="inproc", kind=ToolKind.AST, check=check)
    scheduler = Scheduler(concurrency=1, deadline=10)

    issues = list(scheduler.run([Invocation(tool=tool, scope="./a ./b", scopes=("./a", "./b"))]))

    assert seen == [("./a", "./b")]
    assert [issue.message for issue in issues] == ["found"]


def test_empty_plan_finishes_immediately() -> None:
    scheduler = Scheduler(concurrency=1, deadline=10)

    assert list(scheduler.run([])) == []
    assert scheduler.errors == []
