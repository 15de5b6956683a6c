# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint orchestration: resolve targets, plan invocations and stream issues."""

from __future__ import annotations

import shlex
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .catalog.models import PATH_VARIABLE, Tool, ToolKind
from .catalog.registry import ToolRegistry
from .config.models import Config
from .core.logging import Logger
from .core.models import Issue
from .core.severity import ExitStatus
from .core.templating import Vars
from .discovery.paths import ResolvedTargets, collect_source_files, is_recursive, resolve_targets
from .environment import augment_path, package_roots
from .errors import ConfigError, InvocationError
from .execution.partition import partition
from .execution.scheduler import Invocation, Scheduler
from .pipeline.chain import IssuePipeline
from .pipeline.directives import Directive, DirectiveRegistry

_CHDIR_PATH: Final[str] = "."


def split_command(tool: Tool, command: str) -> list[str]:
    """Split an interpolated command line into arguments.

    Raises:
        ConfigError: If the command has unbalanced quotes or is empty.
    """

    try:
        args = shlex.split(command)
    except ValueError as exc:
        raise ConfigError(f"invalid command for {tool.name} {command!r}: {exc}") from exc
    if not args:
        raise ConfigError(f"invalid command for {tool.name}: {command!r}")
    return args


@dataclass(slots=True)
class LintRun:
    """Result of :meth:`LintEngine.run`.

    Iterating the run drives the whole lint; :attr:`errors`,
    :attr:`status` and :meth:`unmatched_directives` are complete once the
    issue stream has been exhausted.
    """

    issues: Iterator[Issue]
    scheduler: Scheduler
    pipeline: IssuePipeline
    tools: list[Tool] = field(default_factory=list)
    scopes: tuple[str, ...] = ()
    report_unmatched: bool = False

    def __iter__(self) -> Iterator[Issue]:
        return self.issues

    @property
    def errors(self) -> list[InvocationError]:
        return self.scheduler.errors

    @property
    def status(self) -> ExitStatus:
        """Return the exit status bitmask for the issues seen so far."""

        status = self.pipeline.reducer.status
        if self.scheduler.errors:
            status |= ExitStatus.FAILURE
        return status

    def unmatched_directives(self) -> list[Directive]:
        if not self.report_unmatched:
            return []
        return self.pipeline.directives.unmatched()


class LintEngine:
    """Coordinate the resolver, partitioner, scheduler and issue pipeline.

    Args:
        config: Effective configuration.
        registry: Tool registry; defaults to the built-in catalog.
        env: Environment for tool processes; defaults to ``os.environ`` with
            the toolchain binary directories added to ``PATH``.
        roots: Package roots for the package partition strategy.
        logger: Logger for debug output.
    """

    def __init__(
        self,
        config: Config,
        registry: ToolRegistry | None = None,
        *,
        env: Mapping[str, str] | None = None,
        roots: Sequence[Path] | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.config = config
        self.registry = registry if registry is not None else ToolRegistry.builtin()
        self.env = dict(env) if env is not None else augment_path()
        self.roots = list(roots) if roots is not None else package_roots(self.env)
        self.logger = logger or Logger(debug_enabled=config.debug)

    def tools(self) -> list[Tool]:
        """Return the enabled tools for the configuration."""

        return self.registry.resolve(self.config)

    def plan(self, tools: Sequence[Tool], targets: ResolvedTargets) -> list[Invocation]:
        """Turn every tool into one or more invocations.

        Args:
            tools: Enabled tools.
            targets: Resolved scopes.

        Returns:
            list[Invocation]: Work for the scheduler.

        Raises:
            PackagePathError: If a package-partitioned tool meets an absolute
                scope outside every package root.
            ConfigError: If a command line cannot be split.
        """

        variables = self.config.tool_vars()
        invocations: list[Invocation] = []
        for tool in tools:
            match tool.kind:
                case ToolKind.AST:
                    invocations.append(
                        Invocation(
                            tool=tool,
                            scope=" ".join(targets.scopes),
                            scopes=targets.scopes,
                            variables=variables,
                        ),
                    )
                case ToolKind.DIRECTORY | ToolKind.PACKAGE | ToolKind.FILE:
                    invocations.extend(self._plan_external(tool, self._scopes_for(tool, targets), variables))
        return invocations

    def _scopes_for(self, tool: Tool, targets: ResolvedTargets) -> tuple[str, ...]:
        if tool.accepts_recursive and not self.config.vendor and targets.recursive:
            return targets.recursive
        return targets.scopes

    def _plan_external(self, tool: Tool, scopes: Sequence[str], variables: Vars) -> list[Invocation]:
        if tool.uses_path_placeholder:
            planned: list[Invocation] = []
            for scope in scopes:
                chdir = self.config.vendor or not is_recursive(scope)
                command = variables.with_values({PATH_VARIABLE: _CHDIR_PATH if chdir else scope}).replace(tool.command)
                planned.append(
                    Invocation(
                        tool=tool,
                        scope=scope,
                        args=tuple(split_command(tool, command)),
                        directory=scope if chdir else None,
                        variables=variables,
                    ),
                )
            return planned
        base = split_command(tool, variables.replace(tool.command))
        return [
            Invocation(
                tool=tool,
                scope=" ".join(batch[len(base) :]),
                args=tuple(batch),
                variables=variables,
            )
            for batch in partition(tool.partition, base, scopes, roots=self.roots)
        ]

    def run(self, targets: Sequence[str]) -> LintRun:
        """Start a lint of ``targets``.

        Target resolution, tool resolution and planning happen immediately so
        fatal errors surface here. Tool processes start when the returned run
        is iterated.

        Args:
            targets: Paths from the command line; empty means ``.``.

        Returns:
            LintRun: Lazily evaluated run.

        Raises:
            MetalintError: On path resolution, configuration, pattern or
                package path failures.
        """

        config = self.config
        resolved = resolve_targets(targets, config.skip, self.logger)
        for scope in resolved.scopes:
            self.logger.debug(f"linting path {scope}")
        tools = self.tools()
        self.logger.debug(f"enabled linters: {', '.join(tool.name for tool in tools)}")
        invocations = self.plan(tools, resolved)
        directives = DirectiveRegistry()
        if config.warn_unmatched_directive:
            directives.preload(collect_source_files(resolved.scopes))
        scheduler = Scheduler(
            concurrency=config.concurrency,
            deadline=config.deadline,
            env=self.env,
            logger=self.logger,
        )
        pipeline = IssuePipeline(config=config, directives=directives)
        return LintRun(
            issues=pipeline.process(scheduler.run(invocations)),
            scheduler=scheduler,
            pipeline=pipeline,
            tools=tools,
            scopes=resolved.scopes,
            report_unmatched=config.warn_unmatched_directive,
        )


__all__ = ["LintEngine", "LintRun", "split_command"]
