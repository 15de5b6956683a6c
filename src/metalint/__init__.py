# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run many static-analysis tools concurrently and merge their reports."""

from __future__ import annotations

from .core.models import Issue
from .core.severity import ExitStatus, Severity
from .engine import LintEngine, LintRun
from .errors import MetalintError

__all__ = [
    "ExitStatus",
    "Issue",
    "LintEngine",
    "LintRun",
    "MetalintError",
    "Severity",
]
