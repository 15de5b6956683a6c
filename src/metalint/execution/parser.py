# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn raw tool output into :class:`Issue` objects."""

from __future__ import annotations

import os
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Final

from ..catalog.models import Tool
from ..core.models import Issue
from ..core.paths import display_path
from ..core.templating import Vars
from ..errors import OutputParseError

PATH_GROUP: Final[str] = "path"
LINE_GROUP: Final[str] = "line"
COL_GROUP: Final[str] = "col"
MESSAGE_GROUP: Final[str] = "message"

_INTEGER: Final[re.Pattern[str]] = re.compile(r"[+-]?\d+")


def _parse_int(tool: str, group: str, value: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise OutputParseError(tool, group, value)
    return int(value)


def fix_path(path: str, directory: str | None = None) -> str:
    """Return ``path`` as reported relative to the working directory.

    Args:
        path: Path captured from tool output.
        directory: Directory the tool ran in when it did not run in the
            current working directory.

    Returns:
        str: Path relative to the current working directory, or the raw
        capture when it cannot be normalised.
    """

    if not path:
        return path
    if not os.path.isabs(path) and directory is not None:
        path = os.path.join(directory, path)
    return display_path(path)


@dataclass(slots=True)
class OutputParser:
    """Apply a tool's compiled pattern to combined process output.

    Every named group of a match is bound as a variable for the tool's
    message override. The ``path``, ``line``, ``col`` and ``message`` groups
    also populate the corresponding issue fields.
    """

    tool: Tool
    variables: Vars = field(default_factory=Vars)

    def parse(self, output: bytes | str, *, directory: str | None = None) -> Iterator[Issue]:
        """Yield one issue per pattern match, in output order.

        Args:
            output: Combined stdout and stderr of a finished invocation.
            directory: Directory the tool ran in, when it changed directory.

        Yields:
            Issue: Parsed issue with overrides applied.

        Raises:
            OutputParseError: If a ``line`` or ``col`` capture is not an integer.
        """

        regex = self.tool.regex
        if regex is None:
            return
        text = output.decode("utf-8", errors="replace") if isinstance(output, bytes) else output
        for match in regex.finditer(text):
            yield self._issue_from_match(match, directory)

    def _issue_from_match(self, match: re.Match[str], directory: str | None) -> Issue:
        tool = self.tool.name
        captured = {name: value for name, value in match.groupdict().items() if value is not None}
        match_vars = self.variables.with_values(captured)
        path = fix_path(captured.get(PATH_GROUP, ""), directory)
        line = 1
        col = 0
        if LINE_GROUP in captured:
            line = max(1, _parse_int(tool, LINE_GROUP, captured[LINE_GROUP]))
        if COL_GROUP in captured:
            col = max(0, _parse_int(tool, COL_GROUP, captured[COL_GROUP]))
        message = captured.get(MESSAGE_GROUP, "")
        if self.tool.message_override is not None:
            message = match_vars.replace(self.tool.message_override)
        return Issue(
            tool_names=(tool,),
            severity=self.tool.severity,
            path=path,
            line=line,
            col=col,
            message=message,
        )


__all__ = ["OutputParser", "fix_path"]
