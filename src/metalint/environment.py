# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Toolchain environment helpers: ``PATH`` augmentation and package roots."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

GOPATH_ENV: Final[str] = "GOPATH"
GOBIN_ENV: Final[str] = "GOBIN"
PATH_ENV: Final[str] = "PATH"
_DEFAULT_GOPATH_DIR: Final[str] = "go"
_BIN_DIR: Final[str] = "bin"
_SRC_DIR: Final[str] = "src"


def gopath_entries(env: Mapping[str, str] | None = None) -> list[Path]:
    """Return the GOPATH entries, defaulting to ``~/go`` when unset.

    Args:
        env: Environment mapping to read; defaults to ``os.environ``.

    Returns:
        list[Path]: One path per non-empty GOPATH entry.
    """

    source = os.environ if env is None else env
    raw = source.get(GOPATH_ENV, "")
    entries = [Path(entry) for entry in raw.split(os.pathsep) if entry]
    return entries or [Path.home() / _DEFAULT_GOPATH_DIR]


def package_roots(env: Mapping[str, str] | None = None) -> list[Path]:
    """Return ``<gopath>/src`` for every GOPATH entry."""

    return [entry / _SRC_DIR for entry in gopath_entries(env)]


def augment_path(env: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return a copy of ``env`` whose ``PATH`` can find installed tools.

    ``$GOBIN`` (when set) and each ``<gopath>/bin`` are prepended to ``PATH``
    in that order, skipping directories already present.

    Args:
        env: Environment mapping to extend; defaults to ``os.environ``.

    Returns:
        dict[str, str]: New environment mapping suitable for ``subprocess``.
    """

    updated = dict(os.environ if env is None else env)
    existing = [entry for entry in updated.get(PATH_ENV, "").split(os.pathsep) if entry]
    prefix: list[str] = []
    gobin = updated.get(GOBIN_ENV)
    if gobin:
        prefix.append(gobin)
    prefix.extend(str(entry / _BIN_DIR) for entry in gopath_entries(updated))
    additions = [entry for entry in dict.fromkeys(prefix) if entry not in existing]
    updated[PATH_ENV] = os.pathsep.join([*additions, *existing])
    return updated


__all__ = ["augment_path", "gopath_entries", "package_roots"]
