# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Partitioning, process execution and output parsing."""

from __future__ import annotations

from .parser import OutputParser
from .partition import MAX_COMMAND_BYTES, partition, partition_to_max_size
from .process import run_with_deadline
from .scheduler import ISSUE_QUEUE_CAPACITY, Invocation, Scheduler

__all__ = [
    "ISSUE_QUEUE_CAPACITY",
    "Invocation",
    "MAX_COMMAND_BYTES",
    "OutputParser",
    "Scheduler",
    "partition",
    "partition_to_max_size",
    "run_with_deadline",
]
