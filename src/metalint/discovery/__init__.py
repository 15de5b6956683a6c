# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Target discovery."""

from __future__ import annotations

from .paths import PathFilter, ResolvedTargets, collect_source_files, resolve_scopes, resolve_targets

__all__ = ["PathFilter", "ResolvedTargets", "collect_source_files", "resolve_scopes", "resolve_targets"]
