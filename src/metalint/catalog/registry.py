# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registry of tool definitions and resolution of the enabled tool set."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Final

from ..core.severity import DEFAULT_SEVERITY, Severity
from ..errors import ConfigError
from .builtin import BUILTIN_TOOLS, DEFAULT_MESSAGE_OVERRIDES, DEFAULT_SEVERITIES
from .models import AstCheck, PartitionStrategy, Tool, ToolDefinition, ToolKind
from .patterns import compile_pattern

if TYPE_CHECKING:
    from ..config.models import Config

_SPEC_SEPARATOR: Final[str] = ":"


def parse_linter_spec(
    name: str,
    spec: str,
    *,
    base: ToolDefinition | None = None,
) -> ToolDefinition:
    """Build a definition from a ``COMMAND:PATTERN`` specification.

    The command is everything before the first ``:``; the pattern may itself
    contain colons. When ``base`` is supplied (overriding a catalog tool) its
    partition strategy and other attributes are kept.

    Args:
        name: Tool name the specification defines.
        spec: ``COMMAND:PATTERN`` text.
        base: Existing definition being overridden, if any.

    Returns:
        ToolDefinition: Definition for ``name``.

    Raises:
        ConfigError: If ``spec`` lacks a command or pattern.
    """

    command, sep, pattern = spec.partition(_SPEC_SEPARATOR)
    if not sep or not command.strip() or not pattern:
        raise ConfigError(f"invalid linter {spec!r}: expected COMMAND:PATTERN")
    if base is not None:
        return base.model_copy(update={"command": command.strip(), "pattern": pattern})
    return ToolDefinition(
        name=name,
        command=command.strip(),
        pattern=pattern,
        partition=PartitionStrategy.DIRECTORIES,
        default_enabled=True,
    )


def split_named_spec(spec: str) -> tuple[str, str]:
    """Split a command-line ``NAME:COMMAND:PATTERN`` entry into name and rest."""

    name, sep, rest = spec.partition(_SPEC_SEPARATOR)
    if not sep or not name.strip():
        raise ConfigError(f"invalid linter {spec!r}: expected NAME:COMMAND:PATTERN")
    return name.strip(), rest


class ToolRegistry:
    """Hold tool definitions keyed by name.

    External tools are stored as :class:`ToolDefinition` values. In-process
    checks are registered separately with :meth:`register_check` and resolve
    to ``AST`` tools.
    """

    def __init__(self, definitions: Iterable[ToolDefinition] = ()) -> None:
        self._definitions: dict[str, ToolDefinition] = {}
        self._checks: dict[str, tuple[AstCheck, bool]] = {}
        for definition in definitions:
            self.register(definition)

    @classmethod
    def builtin(cls) -> ToolRegistry:
        """Return a registry pre-populated with the built-in catalog."""

        return cls(BUILTIN_TOOLS)

    def register(self, definition: ToolDefinition, *, replace: bool = True) -> None:
        """Register ``definition``, replacing any tool with the same name.

        Args:
            definition: Tool definition to add.
            replace: When ``False`` an existing name raises instead.

        Raises:
            ConfigError: If ``replace`` is ``False`` and the name is taken.
        """

        if not replace and definition.name in self:
            raise ConfigError(f"tool {definition.name!r} is already registered")
        self._checks.pop(definition.name, None)
        self._definitions[definition.name] = definition

    def register_check(self, name: str, check: AstCheck, *, default_enabled: bool = False) -> None:
        """Register an in-process check that receives the resolved scopes."""

        self._definitions.pop(name, None)
        self._checks[name] = (check, default_enabled)

    def register_specs(self, specs: Mapping[str, str]) -> None:
        """Register custom ``COMMAND:PATTERN`` specifications keyed by tool name."""

        for name, spec in specs.items():
            self.register(parse_linter_spec(name, spec, base=self._definitions.get(name)))

    def get(self, name: str) -> ToolDefinition | None:
        return self._definitions.get(name)

    def names(self) -> list[str]:
        """Return every registered tool name in sorted order."""

        return sorted({*self._definitions, *self._checks})

    def definitions(self) -> list[ToolDefinition]:
        return [self._definitions[name] for name in sorted(self._definitions)]

    def __contains__(self, name: object) -> bool:
        return name in self._definitions or name in self._checks

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._definitions) + len(self._checks)

    def configured(self, config: Config) -> ToolRegistry:
        """Return a copy extended with the tools declared in ``config``.

        ``define`` tables are registered first, then ``linters`` specs, so a
        spec can override the command and pattern of a defined tool.
        """

        registry = ToolRegistry()
        registry._definitions = dict(self._definitions)
        registry._checks = dict(self._checks)
        for definition in config.define.values():
            registry.register(definition)
        registry.register_specs(config.linters)
        return registry

    def _default_enabled(self, name: str) -> bool:
        if name in self._checks:
            return self._checks[name][1]
        return self._definitions[name].default_enabled

    def _is_fast(self, name: str) -> bool:
        if name in self._checks:
            return True
        return self._definitions[name].is_fast

    def select(self, config: Config) -> list[str]:
        """Return the sorted names of the tools enabled by ``config``.

        The base set is empty with ``disable_all``, every tool with
        ``enable_all`` and the default-enabled tools otherwise. ``enable``
        adds to it, ``disable`` removes from it and ``fast`` keeps only fast
        tools.

        Args:
            config: Effective configuration.

        Returns:
            list[str]: Enabled tool names.

        Raises:
            ConfigError: If ``enable`` or ``disable`` names an unknown tool.
        """

        unknown = sorted({name for name in (*config.enable, *config.disable) if name not in self})
        if unknown:
            raise ConfigError(f"unknown linter(s): {', '.join(unknown)}")
        if config.disable_all:
            selected: set[str] = set()
        elif config.enable_all:
            selected = set(self.names())
        else:
            selected = {name for name in self.names() if self._default_enabled(name)}
        selected.update(config.enable)
        selected.difference_update(config.disable)
        if config.fast:
            selected = {name for name in selected if self._is_fast(name)}
        return sorted(selected)

    def resolve(self, config: Config) -> list[Tool]:
        """Compile the enabled tools into :class:`Tool` values.

        Severity comes from ``config.severity``, then the definition, then the
        catalog default. Message overrides come from ``config.message_override``,
        then the definition, then the catalog default.

        Args:
            config: Effective configuration.

        Returns:
            list[Tool]: Resolved tools sorted by name.

        Raises:
            ConfigError: If an unknown tool is enabled.
            PatternError: If a tool's output pattern fails to compile.
        """

        registry = self.configured(config)
        tools: list[Tool] = []
        for name in registry.select(config):
            severity = config.severity.get(name)
            if name in registry._checks:
                check, _ = registry._checks[name]
                tools.append(
                    Tool(name=name, kind=ToolKind.AST, severity=severity or DEFAULT_SEVERITY, check=check),
                )
                continue
            definition = registry._definitions[name]
            tools.append(
                Tool(
                    name=name,
                    kind=definition.kind,
                    command=definition.command,
                    regex=compile_pattern(name, definition.pattern),
                    partition=definition.partition,
                    severity=severity or _definition_severity(definition),
                    message_override=config.message_override.get(name)
                    or definition.message_override
                    or DEFAULT_MESSAGE_OVERRIDES.get(name),
                    accepts_recursive=definition.accepts_recursive,
                ),
            )
        return tools


def _definition_severity(definition: ToolDefinition) -> Severity:
    if definition.severity is not None:
        return definition.severity
    return DEFAULT_SEVERITIES.get(definition.name, DEFAULT_SEVERITY)


__all__ = ["ToolRegistry", "parse_linter_spec", "split_named_spec"]
