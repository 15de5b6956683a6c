# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data types shared by every metalint stage."""

from __future__ import annotations

from .models import Issue, IssueKey
from .severity import ExitStatus, Severity
from .templating import Vars

__all__ = ["ExitStatus", "Issue", "IssueKey", "Severity", "Vars"]
