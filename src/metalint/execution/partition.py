# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Split a tool's scopes into argument batches bounded by command length."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Final

from ..catalog.models import PartitionStrategy
from ..discovery.paths import source_files
from ..errors import PackagePathError

MAX_COMMAND_BYTES: Final[int] = 32_000

Batch = list[str]


class SizePartitioner:
    """Greedy bin-packer producing batches that each start with ``base``.

    A token costs ``len(token) + 1`` bytes. When adding a token would push
    the current batch past ``max_bytes`` the batch is closed and a new one is
    seeded with the base command. A token that alone exceeds the limit still
    gets its own batch.
    """

    def __init__(self, base: Sequence[str], max_bytes: int = MAX_COMMAND_BYTES) -> None:
        self._base = list(base)
        self._max = max_bytes
        self._batches: list[Batch] = []
        self._current: Batch = []
        self._size = 0
        self._start()

    def _start(self) -> None:
        self._close()
        self._current = list(self._base)
        self._size = sum(len(token) + 1 for token in self._base)

    def _close(self) -> None:
        if self._current:
            self._batches.append(self._current)

    def add(self, token: str) -> None:
        """Append ``token`` to the current batch, opening a new one if needed."""

        cost = len(token) + 1
        if self._size + cost > self._max and len(self._current) > len(self._base):
            self._start()
        self._current.append(token)
        self._size += cost

    def finish(self) -> list[Batch]:
        """Close the current batch and return every batch produced."""

        self._close()
        self._current = []
        return self._batches


def partition_to_max_size(base: Sequence[str], scopes: Sequence[str], max_bytes: int = MAX_COMMAND_BYTES) -> list[Batch]:
    """Pack ``scopes`` after ``base`` into batches of at most ``max_bytes``.

    Args:
        base: Command tokens repeated at the start of every batch.
        scopes: Scope tokens to distribute, in order.
        max_bytes: Upper bound on ``sum(len(token) + 1)`` for each batch.

    Returns:
        list[Batch]: Batches preserving the order of ``scopes``.
    """

    partitioner = SizePartitioner(base, max_bytes)
    for scope in scopes:
        partitioner.add(scope)
    return partitioner.finish()


def _expand_files(scopes: Sequence[str]) -> list[str]:
    return [path for scope in scopes for path in source_files(scope)]


def package_path(scope: str, roots: Sequence[Path]) -> str:
    """Map ``scope`` to an import-style package path.

    Relative scopes pass through unchanged. Absolute scopes are made relative
    to the first package root containing them.

    Raises:
        PackagePathError: If an absolute scope is outside every root.
    """

    if not os.path.isabs(scope):
        return scope
    for root in roots:
        try:
            return Path(scope).relative_to(root).as_posix()
        except ValueError:
            continue
    raise PackagePathError(scope)


def partition_directories(base: Sequence[str], scopes: Sequence[str], roots: Sequence[Path] = ()) -> list[Batch]:
    return partition_to_max_size(base, scopes)


def partition_files(base: Sequence[str], scopes: Sequence[str], roots: Sequence[Path] = ()) -> list[Batch]:
    """Expand every scope to its source files and pack the flattened list."""

    files = _expand_files(scopes)
    if not files:
        return []
    return partition_to_max_size(base, files)


def partition_packages(base: Sequence[str], scopes: Sequence[str], roots: Sequence[Path] = ()) -> list[Batch]:
    """Translate scopes to package paths and pack them."""

    packages = [package_path(scope, roots) for scope in scopes]
    if not packages:
        return []
    return partition_to_max_size(base, packages)


def partition_files_by_package(
    base: Sequence[str],
    scopes: Sequence[str],
    roots: Sequence[Path] = (),
) -> list[Batch]:
    """Emit one batch per scope holding that scope's files; empty scopes are skipped."""

    batches: list[Batch] = []
    for scope in scopes:
        files = source_files(scope)
        if files:
            batches.append([*base, *files])
    return batches


def partition_single_directory(
    base: Sequence[str],
    scopes: Sequence[str],
    roots: Sequence[Path] = (),
) -> list[Batch]:
    return [[*base, scope] for scope in scopes]


PartitionFunction = Callable[[Sequence[str], Sequence[str], Sequence[Path]], list[Batch]]

_STRATEGIES: Final[dict[PartitionStrategy, PartitionFunction]] = {
    PartitionStrategy.DIRECTORIES: partition_directories,
    PartitionStrategy.FILES: partition_files,
    PartitionStrategy.PACKAGES: partition_packages,
    PartitionStrategy.FILES_BY_PACKAGE: partition_files_by_package,
    PartitionStrategy.SINGLE_DIRECTORY: partition_single_directory,
}


def partition(
    strategy: PartitionStrategy,
    base: Sequence[str],
    scopes: Sequence[str],
    *,
    roots: Sequence[Path] = (),
) -> list[Batch]:
    """Split ``scopes`` into batches using ``strategy``.

    Args:
        strategy: Grouping strategy configured for the tool.
        base: Tool command tokens.
        scopes: Resolved scopes in order.
        roots: Package roots used by the package strategy.

    Returns:
        list[Batch]: Independently executable command lines.

    Raises:
        PackagePathError: If the package strategy meets an absolute scope
            outside every root.
    """

    return _STRATEGIES[strategy](base, scopes, roots)


__all__ = [
    "Batch",
    "MAX_COMMAND_BYTES",
    "SizePartitioner",
    "package_path",
    "partition",
    "partition_directories",
    "partition_files",
    "partition_files_by_package",
    "partition_packages",
    "partition_single_directory",
    "partition_to_max_size",
]
