# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Placeholder interpolation for tool commands and message overrides."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Final

_PLACEHOLDER: Final[re.Pattern[str]] = re.compile(r"\{(?P<name>\w+)(?P<default>=[^}]*)?\}")


class Vars(dict[str, str]):
    """Mapping of substitution variables with ``{name}`` interpolation.

    ``{name}`` expands to the variable value. ``{name=text}`` expands to
    ``text`` when the variable is non-empty and to nothing otherwise, which
    lets a command template toggle a flag such as ``{tests=-t}``.
    Placeholders naming unknown variables are left as written.
    """

    def copy(self) -> Vars:
        """Return a shallow copy that is still a :class:`Vars`."""

        return Vars(self)

    def with_values(self, values: Mapping[str, str]) -> Vars:
        """Return a copy of these variables updated with ``values``.

        Args:
            values: Additional variables layered on top of the current ones.

        Returns:
            Vars: New mapping; the receiver is left untouched.
        """

        merged = self.copy()
        merged.update(values)
        return merged

    def replace(self, template: str) -> str:
        """Interpolate every known placeholder in ``template``.

        Args:
            template: Text containing ``{name}`` or ``{name=text}`` placeholders.

        Returns:
            str: Template with known placeholders substituted in a single pass.
        """

        def _substitute(match: re.Match[str]) -> str:
            name = match.group("name")
            if name not in self:
                return match.group(0)
            value = self[name]
            default = match.group("default")
            if default is None:
                return value
            return default[1:] if value else ""

        return _PLACEHOLDER.sub(_substitute, template)


def references(template: str, name: str) -> bool:
    """Return ``True`` when ``template`` contains a placeholder for ``name``."""

    return any(match.group("name") == name for match in _PLACEHOLDER.finditer(template))


__all__ = ["Vars", "references"]
