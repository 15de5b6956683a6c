# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for reasoning about filesystem paths."""

from __future__ import annotations

import os
from os import PathLike
from pathlib import Path

_Pathish = str | PathLike[str] | Path


def _best_effort_resolve(path: Path) -> Path:
    """Return ``path`` with symlinks resolved where possible without raising.

    Args:
        path: Candidate path to resolve.

    Returns:
        Path: Absolute variant when resolution succeeds; otherwise the closest
        achievable approximation.
    """

    try:
        return path.resolve(strict=False)
    except (OSError, RuntimeError):
        return path.absolute() if not path.is_absolute() else path


def normalize_path(path: _Pathish, *, base_dir: _Pathish | None = None) -> Path:
    """Return ``path`` normalised relative to ``base_dir``.

    Args:
        path: Filesystem path supplied by the caller.
        base_dir: Base directory used to relativise the path. Defaults to
            ``Path.cwd()`` when omitted.

    Returns:
        Path: Relative path when both inputs share a lineage, a ``..``-prefixed
        relative path when they do not, otherwise the resolved absolute candidate.
    """

    raw_path = Path(path).expanduser()
    base = _best_effort_resolve(Path.cwd() if base_dir is None else Path(base_dir).expanduser())

    candidate = raw_path if raw_path.is_absolute() else base / raw_path
    candidate = _best_effort_resolve(candidate)

    try:
        return candidate.relative_to(base)
    except ValueError:
        try:
            return Path(os.path.relpath(candidate, base))
        except ValueError:
            return candidate


def display_path(path: str, *, base_dir: _Pathish | None = None) -> str:
    """Return the display form of an issue path, falling back to ``path``.

    Args:
        path: Raw path captured from tool output.
        base_dir: Directory the result is relative to; defaults to the cwd.

    Returns:
        str: Symlink-resolved path relative to ``base_dir`` or the raw string
        when it cannot be normalised.
    """

    if not path.strip():
        return path
    try:
        return normalize_path(path, base_dir=base_dir).as_posix()
    except (OSError, RuntimeError, ValueError):
        return path


def relative_scope(path: str) -> str:
    """Return ``path`` in ``./``-relative form when it is not already relative.

    Absolute paths under the working directory become ``./``-prefixed
    relative paths; absolute paths elsewhere are returned unchanged, as are
    paths that already start with ``.``.
    """

    if os.path.isabs(path):
        try:
            rel = Path(path).relative_to(Path.cwd())
        except ValueError:
            return path
        rel_text = rel.as_posix()
        return "." if rel_text == "." else f"./{rel_text}"
    if path.startswith("."):
        return path
    return f"./{path}"


__all__ = ["display_path", "normalize_path", "relative_scope"]
