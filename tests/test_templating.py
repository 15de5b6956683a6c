# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for placeholder interpolation."""

from __future__ import annotations

from metalint.core.templating import Vars, references


def test_replace_known_placeholders() -> None:
    assert Vars({"mincyclo": "10"}).replace("gocyclo -over {mincyclo}") == "gocyclo -over 10"


def test_unknown_placeholders_are_left_alone() -> None:
    assert Vars().replace("echo {unknown}") == "echo {unknown}"


def test_conditional_placeholder() -> None:
    template = "gotype -e {tests=-t}"

    assert Vars({"tests": "true"}).replace(template) == "gotype -e -t"
    assert Vars({"tests": ""}).replace(template) == "gotype -e "


def test_replacement_is_single_pass() -> None:
    assert Vars({"a": "{b}", "b": "x"}).replace("{a}") == "{b}"


def test_with_values_leaves_original_untouched() -> None:
    base = Vars({"path": "."})

    layered = base.with_values({"path": "./a", "line": "3"})

    assert base == {"path": "."}
    assert layered == {"path": "./a", "line": "3"}
    assert isinstance(layered, Vars)


def test_references() -> None:
    assert references("lint {path}", "path")
    assert references("lint {path=.}", "path")
    assert not references("lint {paths}", "path")
