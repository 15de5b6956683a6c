# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Expand user supplied targets into lint scopes."""

from __future__ import annotations

import glob
import os
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Final

from ..core.logging import Logger
from ..core.paths import relative_scope
from ..errors import PathResolutionError

RECURSIVE_SUFFIX: Final[str] = "/..."
SOURCE_SUFFIX: Final[str] = ".go"
DEFAULT_TARGET: Final[str] = "."
_HIDDEN_PREFIXES: Final[tuple[str, ...]] = (".", "_")
_RELATIVE_NAMES: Final[frozenset[str]] = frozenset({".", ".."})
_GLOB_CHARS: Final[frozenset[str]] = frozenset("*?[")


class PathFilter:
    """Decide whether a path is excluded from linting.

    A path is skipped when its base name or full value is listed in ``skip``,
    or when its base name starts with ``.`` or ``_`` (``.`` and ``..``
    themselves are kept).
    """

    def __init__(self, skip: Iterable[str] = ()) -> None:
        self._skip = frozenset(skip)

    def __call__(self, path: str) -> bool:
        base = os.path.basename(os.path.normpath(path))
        if base in self._skip or path in self._skip or os.path.normpath(path) in self._skip:
            return True
        return base not in _RELATIVE_NAMES and base.startswith(_HIDDEN_PREFIXES)


@dataclass(frozen=True, slots=True)
class ResolvedTargets:
    """Scopes produced from user targets.

    ``scopes`` holds the concrete directories. ``recursive`` holds the
    ``dir/...`` targets as written (in ``./`` form) for tools able to recurse
    on their own.
    """

    scopes: tuple[str, ...]
    recursive: tuple[str, ...] = ()


def is_recursive(target: str) -> bool:
    """Return ``True`` when ``target`` uses the ``dir/...`` convention."""

    return target == "..." or target.endswith(RECURSIVE_SUFFIX)


def _recursive_root(target: str) -> str:
    if target == "...":
        return DEFAULT_TARGET
    return target[: -len(RECURSIVE_SUFFIX)] or os.sep


def _walk_warning(logger: Logger) -> Callable[[OSError], None]:
    def report(error: OSError) -> None:
        logger.warn(f"invalid path {error.filename!r}: {error.strerror or error}")

    return report


def walk_source_dirs(root: str, path_filter: PathFilter, logger: Logger | None = None) -> list[str]:
    """Return every directory under ``root`` that directly holds source files.

    Args:
        root: Directory to walk.
        path_filter: Filter applied to every directory and file visited.
        logger: Receives a warning for every directory that cannot be read;
            that subtree is skipped.

    Returns:
        list[str]: Matching directories, unsorted.
    """

    found: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_walk_warning(logger or Logger())):
        dirnames[:] = sorted(name for name in dirnames if not path_filter(os.path.join(dirpath, name)))
        if any(
            name.endswith(SOURCE_SUFFIX) and not path_filter(os.path.join(dirpath, name)) for name in filenames
        ):
            found.append(os.path.normpath(dirpath))
    return found


def _expand_glob(target: str) -> list[str]:
    matches = sorted(glob.glob(target))
    if not matches:
        raise PathResolutionError(f"path pattern {target!r} matched nothing")
    return matches


def resolve_targets(
    targets: Sequence[str],
    skip: Iterable[str] = (),
    logger: Logger | None = None,
) -> ResolvedTargets:
    """Expand ``targets`` into sorted, de-duplicated scopes.

    Args:
        targets: Paths from the command line; ``dir/...`` recurses and glob
            patterns are expanded. No targets means the current directory.
        skip: Directory names or paths to leave out.
        logger: Receives warnings for unreadable recursive targets.

    Returns:
        ResolvedTargets: Scopes in ``./``-relative form.

    Raises:
        PathResolutionError: If a glob matches nothing.
    """

    path_filter = PathFilter(skip)
    dirs: set[str] = set()
    recursive: list[str] = []
    for target in targets or [DEFAULT_TARGET]:
        if is_recursive(target):
            recursive.append(target if target == "..." else relative_scope(target))
            dirs.update(walk_source_dirs(_recursive_root(target), path_filter, logger))
            continue
        expanded = _expand_glob(target) if _GLOB_CHARS.intersection(target) else [target]
        dirs.update(os.path.normpath(path) for path in expanded if not path_filter(path))
    scopes = sorted({relative_scope(path) for path in dirs})
    return ResolvedTargets(scopes=tuple(scopes), recursive=tuple(dict.fromkeys(recursive)))


def resolve_scopes(targets: Sequence[str], skip: Iterable[str] = ()) -> list[str]:
    """Return only the concrete scopes for ``targets``."""

    return list(resolve_targets(targets, skip).scopes)


def source_files(directory: str) -> list[str]:
    """Return the source files directly inside ``directory`` in sorted order."""

    return sorted(glob.glob(os.path.join(glob.escape(directory), f"*{SOURCE_SUFFIX}")))


def collect_source_files(scopes: Iterable[str]) -> list[str]:
    """Return the source files held directly by each scope directory."""

    return [path for scope in scopes for path in source_files(scope)]


__all__ = [
    "PathFilter",
    "ResolvedTargets",
    "collect_source_files",
    "is_recursive",
    "resolve_scopes",
    "resolve_targets",
    "source_files",
    "walk_source_dirs",
]
