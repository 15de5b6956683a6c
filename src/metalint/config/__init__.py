# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders."""

from __future__ import annotations

from ..errors import ConfigError
from .loader import ConfigLoader, load_config, merge_overrides
from .models import SORT_KEYS, SORT_NONE, Config, OutputFormat, parse_duration

__all__ = [
    "Config",
    "ConfigError",
    "ConfigLoader",
    "OutputFormat",
    "SORT_KEYS",
    "SORT_NONE",
    "load_config",
    "merge_overrides",
    "parse_duration",
]
