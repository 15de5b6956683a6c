# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for process helpers."""

from __future__ import annotations

import sys
import time
from pathlib import Path

import pytest

from metalint.errors import CommandNotFound, DeadlineExceeded
from metalint.execution.process import expand_globs, resolve_executable, run_with_deadline


def test_run_with_deadline_combines_stdout_and_stderr() -> None:
    code = "import sys; print('out'); sys.stdout.flush(); print('err', file=sys.stderr); sys.exit(2)"

    result = run_with_deadline([sys.executable, "-c", code], tool="t", scope=".", deadline=10)

    assert result.returncode == 2
    assert result.output.split() == [b"out", b"err"]


def test_run_with_deadline_kills_slow_processes() -> None:
    with pytest.raises(DeadlineExceeded) as excinfo:
        run_with_deadline(
            [sys.executable, "-c", "import time; time.sleep(5)"],
            tool="slow",
            scope="./pkg",
            deadline=0.05,
        )

    assert "slow" in str(excinfo.value)
    assert excinfo.value.scope == "./pkg"


def _is_running(pid: int) -> bool:
    """Return ``True`` while ``pid`` exists and is not a zombie."""

    try:
        stat = Path(f"/proc/{pid}/stat").read_text(encoding="utf-8")
    except OSError:
        return False
    return stat.rsplit(")", 1)[1].split()[0] != "Z"


@pytest.mark.skipif(not Path("/proc/self/stat").exists(), reason="requires /proc")
def test_run_with_deadline_kills_forked_children(tmp_path: Path) -> None:
    pid_file = tmp_path / "child.pid"
    code = (
        "import subprocess, sys, time\n"
        "child = subprocess.Popen([sys.executable, '-c', 'import time; time.sleep(30)'])\n"
        "open(sys.argv[1], 'w').write(str(child.pid))\n"
        "time.sleep(30)\n"
    )

    started = time.monotonic()
    with pytest.raises(DeadlineExceeded):
        run_with_deadline([sys.executable, "-c", code, str(pid_file)], tool="vet", scope=".", deadline=1.0)
    elapsed = time.monotonic() - started

    assert elapsed < 4.0
    child_pid = int(pid_file.read_text(encoding="utf-8"))
    for _ in range(50):
        if not _is_running(child_pid):
            break
        time.sleep(0.05)
    assert not _is_running(child_pid)


def test_run_with_deadline_honours_cwd(tmp_path: Path) -> None:
    result = run_with_deadline(
        [sys.executable, "-c", "import os; print(os.getcwd())"],
        tool="t",
        scope=".",
        deadline=10,
        cwd=str(tmp_path),
    )

    assert Path(result.output.decode().strip()).resolve() == tmp_path.resolve()


def test_resolve_executable_missing() -> None:
    with pytest.raises(CommandNotFound):
        resolve_executable(["metalint-no-such-linter-binary"], tool="x", env={"PATH": ""})


def test_resolve_executable_keeps_absolute_paths() -> None:
    assert resolve_executable([sys.executable, "-V"], tool="py") == [sys.executable, "-V"]


def test_expand_globs_relative_to_directory(tmp_path: Path) -> None:
    (tmp_path / "b.go").write_text("", encoding="utf-8")
    (tmp_path / "a.go").write_text("", encoding="utf-8")

    assert expand_globs(["-x", "*.go", "*.none"], str(tmp_path)) == ["-x", "a.go", "b.go", "*.none"]
