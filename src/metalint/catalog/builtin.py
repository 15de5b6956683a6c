# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in catalog of Go analysis tools."""

from __future__ import annotations

from typing import Final

from ..core.severity import Severity
from .models import PartitionStrategy, ToolDefinition

_VET_PATTERN: Final[str] = (
    r"^(?:vet:.*?\.go:\s+)?(?P<path>.*?\.go):(?P<line>\d+):(?:(?P<col>\d+):)?\s*(?P<message>.*)$"
)
_PREFIXED_LOCATION: Final[str] = r"^(?:[^:]+: )?(?P<path>.*?\.go):(?P<line>\d+):(?P<col>\d+):\s*(?P<message>.+)$"

BUILTIN_TOOLS: Final[tuple[ToolDefinition, ...]] = (
    ToolDefinition(
        name="deadcode",
        command="deadcode",
        pattern=r"^deadcode: (?P<path>.*?\.go):(?P<line>\d+):(?P<col>\d+):\s*(?P<message>.*)$",
        install_from="github.com/tsenart/deadcode",
        partition=PartitionStrategy.DIRECTORIES,
        default_enabled=True,
    ),
    ToolDefinition(
        name="dupl",
        command="dupl -plumbing -threshold {duplthreshold}",
        pattern=r"^(?P<path>.*?\.go):(?P<line>\d+)-\d+:\s*(?P<message>.*)$",
        install_from="github.com/mibk/dupl",
        partition=PartitionStrategy.FILES,
        is_fast=True,
    ),
    ToolDefinition(
        name="errcheck",
        command="errcheck -abspath {not_tests=-ignoretests}",
        pattern="PATH:LINE:COL:MESSAGE",
        install_from="github.com/kisielk/errcheck",
        partition=PartitionStrategy.PACKAGES,
        accepts_recursive=True,
        default_enabled=True,
    ),
    ToolDefinition(
        name="goconst",
        command="goconst -min-occurrences {min_occurrences} -min-length {min_const_length}",
        pattern="PATH:LINE:COL:MESSAGE",
        install_from="github.com/jgautheron/goconst/cmd/goconst",
        partition=PartitionStrategy.DIRECTORIES,
        is_fast=True,
        default_enabled=True,
    ),
    ToolDefinition(
        name="gocyclo",
        command="gocyclo -over {mincyclo}",
        pattern=r"^(?P<cyclo>\d+)\s+\S+\s(?P<function>\S+)\s+(?P<path>.*?\.go):(?P<line>\d+):(\d+)$",
        install_from="github.com/alecthomas/gocyclo",
        partition=PartitionStrategy.DIRECTORIES,
        is_fast=True,
        default_enabled=True,
    ),
    ToolDefinition(
        name="gofmt",
        command="gofmt -l -s",
        pattern=r"^(?P<path>.*?\.go)$",
        partition=PartitionStrategy.FILES,
        is_fast=True,
    ),
    ToolDefinition(
        name="goimports",
        command="goimports -l",
        pattern=r"^(?P<path>.*?\.go)$",
        install_from="golang.org/x/tools/cmd/goimports",
        partition=PartitionStrategy.FILES,
        is_fast=True,
    ),
    ToolDefinition(
        name="golint",
        command="golint -min_confidence {min_confidence}",
        pattern="PATH:LINE:COL:MESSAGE",
        install_from="golang.org/x/lint/golint",
        partition=PartitionStrategy.DIRECTORIES,
        is_fast=True,
        accepts_recursive=True,
        default_enabled=True,
    ),
    ToolDefinition(
        name="gosec",
        command="gosec -fmt=csv",
        pattern=r"^(?P<path>.*?\.go),(?P<line>\d+),(?P<message>[^,]+,[^,]+,[^,]+)",
        install_from="github.com/securego/gosec/cmd/gosec",
        partition=PartitionStrategy.SINGLE_DIRECTORY,
        default_enabled=True,
    ),
    ToolDefinition(
        name="gotype",
        command="gotype -e {tests=-t}",
        pattern="PATH:LINE:COL:MESSAGE",
        install_from="golang.org/x/tools/cmd/gotype",
        partition=PartitionStrategy.SINGLE_DIRECTORY,
        is_fast=True,
        default_enabled=True,
    ),
    ToolDefinition(
        name="ineffassign",
        command="ineffassign -n",
        pattern="PATH:LINE:COL:MESSAGE",
        install_from="github.com/gordonklaus/ineffassign",
        partition=PartitionStrategy.DIRECTORIES,
        is_fast=True,
        default_enabled=True,
    ),
    ToolDefinition(
        name="lll",
        command="lll -g -l {maxlinelength}",
        pattern="PATH:LINE:MESSAGE",
        install_from="github.com/walle/lll/cmd/lll",
        partition=PartitionStrategy.FILES,
        is_fast=True,
    ),
    ToolDefinition(
        name="misspell",
        command="misspell -j 1 --locale US",
        pattern="PATH:LINE:COL:MESSAGE",
        install_from="github.com/client9/misspell/cmd/misspell",
        partition=PartitionStrategy.FILES,
        is_fast=True,
    ),
    ToolDefinition(
        name="staticcheck",
        command="staticcheck",
        pattern="PATH:LINE:COL:MESSAGE",
        install_from="honnef.co/go/tools/cmd/staticcheck",
        partition=PartitionStrategy.PACKAGES,
        accepts_recursive=True,
    ),
    ToolDefinition(
        name="structcheck",
        command="structcheck {tests=-t}",
        pattern=_PREFIXED_LOCATION,
        install_from="github.com/opennota/check/cmd/structcheck",
        partition=PartitionStrategy.PACKAGES,
        default_enabled=True,
    ),
    ToolDefinition(
        name="test",
        command="go test",
        pattern=r"^--- FAIL: .*$\s+(?P<path>.*?\.go):(?P<line>\d+): (?P<message>.*)$",
        partition=PartitionStrategy.PACKAGES,
    ),
    ToolDefinition(
        name="unconvert",
        command="unconvert",
        pattern="PATH:LINE:COL:MESSAGE",
        install_from="github.com/mdempsky/unconvert",
        partition=PartitionStrategy.PACKAGES,
        default_enabled=True,
    ),
    ToolDefinition(
        name="unparam",
        command="unparam {not_tests=-tests=false}",
        pattern="PATH:LINE:COL:MESSAGE",
        install_from="mvdan.cc/unparam",
        partition=PartitionStrategy.PACKAGES,
    ),
    ToolDefinition(
        name="varcheck",
        command="varcheck",
        pattern=_PREFIXED_LOCATION,
        install_from="github.com/opennota/check/cmd/varcheck",
        partition=PartitionStrategy.PACKAGES,
        default_enabled=True,
    ),
    ToolDefinition(
        name="vet",
        command="go vet",
        pattern=_VET_PATTERN,
        partition=PartitionStrategy.FILES_BY_PACKAGE,
        is_fast=True,
        default_enabled=True,
    ),
    ToolDefinition(
        name="vetshadow",
        command="go vet --shadow",
        pattern=_VET_PATTERN,
        partition=PartitionStrategy.FILES_BY_PACKAGE,
        is_fast=True,
        default_enabled=True,
    ),
)

DEFAULT_SEVERITIES: Final[dict[str, Severity]] = {
    "gotype": Severity.ERROR,
    "test": Severity.ERROR,
    "vet": Severity.ERROR,
}

DEFAULT_MESSAGE_OVERRIDES: Final[dict[str, str]] = {
    "errcheck": "error return value not checked ({message})",
    "gocyclo": "cyclomatic complexity {cyclo} of function {function}() is high (> {mincyclo})",
    "gofmt": "file is not gofmted with -s",
    "goimports": "file is not goimported",
    "structcheck": "unused struct field {message}",
    "unparam": "parameter {message}",
    "varcheck": "unused variable or constant {message}",
}

__all__ = ["BUILTIN_TOOLS", "DEFAULT_MESSAGE_OVERRIDES", "DEFAULT_SEVERITIES"]
