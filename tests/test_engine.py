# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for planning and running a whole lint."""

from __future__ import annotations

import os
import shlex
import sys
from pathlib import Path

import pytest

from metalint.catalog import ToolRegistry
from metalint.catalog.models import PartitionStrategy, ToolDefinition
from metalint.config import Config, ConfigError
from metalint.core.models import Issue
from metalint.core.severity import ExitStatus
from metalint.discovery.paths import resolve_targets
from metalint.engine import LintEngine, split_command
from metalint.errors import PathResolutionError


def _definition(name: str, command: str, **extra: object) -> ToolDefinition:
    return ToolDefinition(
        name=name,
        command=command,
        pattern="PATH:LINE:COL:MESSAGE",
        default_enabled=True,
        **extra,
    )


def _emitter(tmp_path: Path, *lines: str) -> str:
    script = tmp_path / "emit.py"
    script.write_text("".join(f"print({line!r})\n" for line in lines), encoding="utf-8")
    return shlex.join([sys.executable, str(script)])


def _engine(config: Config, *definitions: ToolDefinition) -> LintEngine:
    return LintEngine(config, ToolRegistry(definitions), env=dict(os.environ), roots=[])


def test_path_placeholder_runs_inside_each_scope(go_tree: Path) -> None:
    engine = _engine(Config(), _definition("pathy", "pathy {path}"))

    plan = engine.plan(engine.tools(), resolve_targets(["./..."]))

    assert [(item.args, item.directory) for item in plan] == [
        (("pathy", "."), "./a"),
        (("pathy", "."), "./a/b"),
        (("pathy", "."), "./vendor/dep"),
    ]


def test_recursive_capable_tool_receives_recursive_target(go_tree: Path) -> None:
    engine = _engine(Config(), _definition("rec", "rec {path}", accepts_recursive=True))

    plan = engine.plan(engine.tools(), resolve_targets(["./..."]))

    assert [(item.args, item.directory) for item in plan] == [(("rec", "./..."), None)]


def test_vendor_mode_expands_recursive_targets(go_tree: Path) -> None:
    engine = _engine(Config(vendor=True), _definition("rec", "rec {path}", accepts_recursive=True))

    plan = engine.plan(engine.tools(), resolve_targets(["./..."], Config(vendor=True).skip))

    assert [(item.args, item.directory) for item in plan] == [
        (("rec", "."), "./a"),
        (("rec", "."), "./a/b"),
    ]


def test_tools_without_placeholder_are_partitioned(go_tree: Path) -> None:
    definitions = (
        _definition("dirs", "dirs -x"),
        _definition("files", "files", partition=PartitionStrategy.FILES_BY_PACKAGE),
    )
    engine = _engine(Config(), *definitions)

    plan = engine.plan(engine.tools(), resolve_targets(["./a/..."]))

    assert [item.args for item in plan] == [
        ("dirs", "-x", "./a", "./a/b"),
        ("files", "./a/a.go", "./a/a_test.go"),
        ("files", "./a/b/b.go"),
    ]
    assert all(item.directory is None for item in plan)


def test_config_variables_are_interpolated(go_tree: Path) -> None:
    engine = _engine(Config(cyclo_over=7), _definition("cyclo", "cyclo -over {mincyclo}"))

    plan = engine.plan(engine.tools(), resolve_targets(["a"]))

    assert plan[0].args == ("cyclo", "-over", "7", "./a")


def test_ast_check_gets_one_invocation(go_tree: Path) -> None:
    registry = ToolRegistry()
    registry.register_check("inproc", lambda scopes: [], default_enabled=True)
    engine = LintEngine(Config(), registry, env={}, roots=[])

    plan = engine.plan(engine.tools(), resolve_targets(["./..."]))

    assert len(plan) == 1
    assert plan[0].scopes == ("./a", "./a/b", "./vendor/dep")


def test_split_command_rejects_unbalanced_quotes() -> None:
    tool = _engine(Config(), _definition("q", "q")).tools()[0]

    with pytest.raises(ConfigError):
        split_command(tool, 'q "unterminated')


def test_run_streams_issues_and_reports_status(go_tree: Path, tmp_path: Path) -> None:
    command = _emitter(tmp_path, "a/a.go:1:1: first", "a/b/b.go:2:3: second")
    definition = _definition("emit", command, partition=PartitionStrategy.SINGLE_DIRECTORY)
    engine = _engine(Config(sort=["path"]), definition)

    run = engine.run(["a"])
    issues = list(run)

    assert [(issue.path, issue.line) for issue in issues] == [("a/a.go", 1), ("a/b/b.go", 2)]
    assert run.status == ExitStatus.WARNINGS
    assert run.errors == []


def test_run_with_aggregation_merges_tools(go_tree: Path, tmp_path: Path) -> None:
    command = _emitter(tmp_path, "a/a.go:4:1: shared")
    engine = _engine(Config(aggregate=True), _definition("one", command), _definition("two", command))

    issues = list(engine.run(["a"]))

    assert len(issues) == 1
    assert issues[0].linter == "one, two"


def test_invocation_failures_set_failure_bit(go_tree: Path) -> None:
    engine = _engine(Config(), _definition("ghost", "metalint-no-such-linter-binary"))

    run = engine.run(["a"])

    assert list(run) == []
    assert len(run.errors) == 1
    assert run.status == ExitStatus.FAILURE


def test_unresolvable_targets_fail_before_running(go_tree: Path) -> None:
    with pytest.raises(PathResolutionError):
        _engine(Config(), _definition("x", "x")).run(["nope*"])


def test_unmatched_directives_are_reported(go_tree: Path, tmp_path: Path) -> None:
    (go_tree / "a" / "a.go").write_text("package a\n\n// nolint: vet\nvar x = 1\n", encoding="utf-8")
    engine = _engine(Config(warn_unmatched_directive=True), _definition("quiet", _emitter(tmp_path)))

    run = engine.run(["a"])
    list(run)

    assert [(directive.path, directive.line) for directive in run.unmatched_directives()] == [("a/a.go", 3)]


def test_unmatched_directives_are_quiet_unless_requested(go_tree: Path, tmp_path: Path) -> None:
    (go_tree / "a" / "a.go").write_text("// nolint\n", encoding="utf-8")
    run = _engine(Config(), _definition("quiet", _emitter(tmp_path))).run(["a"])
    list(run)

    assert run.unmatched_directives() == []


def test_ast_check_issues_flow_through_pipeline(go_tree: Path) -> None:
    registry = ToolRegistry()
    registry.register_check(
        "inproc",
        lambda scopes: [Issue(tool_names=("inproc",), path=f"{scope}/x.go", message="m") for scope in scopes],
        default_enabled=True,
    )
    run = LintEngine(Config(sort=["path"]), registry, env={}, roots=[]).run(["./a/..."])

    assert [issue.path for issue in run] == ["./a/b/x.go", "./a/x.go"]
