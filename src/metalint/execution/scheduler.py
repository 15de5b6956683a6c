# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Concurrent execution of tool invocations feeding one bounded issue queue."""

from __future__ import annotations

import os
import queue
import threading
from collections.abc import Iterable, Iterator, Mapping, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Final

from ..catalog.models import Tool, ToolKind
from ..core.logging import Logger
from ..core.models import Issue
from ..core.templating import Vars
from ..errors import InvocationError, MetalintError
from .parser import OutputParser
from .process import expand_globs, resolve_executable, run_with_deadline

# Producers block once this many issues are waiting for the consumer.
ISSUE_QUEUE_CAPACITY: Final[int] = 10_000
_PUT_POLL_SECONDS: Final[float] = 0.1


@dataclass(frozen=True, slots=True)
class Invocation:
    """One unit of scheduled work: a tool applied to one batch of scopes.

    ``args`` is the command line before executable resolution and wildcard
    expansion. ``directory`` is set when the process must run inside a scope
    directory instead of the current working directory.
    """

    tool: Tool
    scope: str
    args: tuple[str, ...] = ()
    scopes: tuple[str, ...] = ()
    directory: str | None = None
    variables: Vars = field(default_factory=Vars)


@dataclass(frozen=True, slots=True)
class _Fatal:
    error: MetalintError


_DONE: Final[object] = object()


class Scheduler:
    """Run invocations under a global concurrency bound.

    The thread pool is sized to ``concurrency`` and acts as the global
    semaphore. Each invocation gets its own deadline, measured from process
    launch. Issues flow through a bounded queue to the single consumer that
    iterates :meth:`run`. Per-invocation failures are collected in
    :attr:`errors`; fatal errors are re-raised in the consumer.
    """

    def __init__(
        self,
        *,
        concurrency: int,
        deadline: float,
        env: Mapping[str, str] | None = None,
        logger: Logger | None = None,
        capacity: int = ISSUE_QUEUE_CAPACITY,
    ) -> None:
        self._concurrency = concurrency
        self._deadline = deadline
        self._env = env
        self._logger = logger or Logger()
        self._capacity = capacity
        self._errors: list[InvocationError] = []
        self._errors_lock = threading.Lock()

    @property
    def errors(self) -> list[InvocationError]:
        """Return the per-invocation errors collected so far."""

        with self._errors_lock:
            return list(self._errors)

    def run(self, invocations: Sequence[Invocation]) -> Iterator[Issue]:
        """Execute ``invocations`` concurrently and yield their issues.

        Issues from one invocation arrive in output order; there is no
        ordering across invocations.

        Args:
            invocations: Work to execute.

        Yields:
            Issue: Parsed issues as invocations complete.

        Raises:
            MetalintError: If an invocation hits a fatal error.
        """

        issues: queue.Queue[object] = queue.Queue(maxsize=self._capacity)
        stop = threading.Event()
        executor = ThreadPoolExecutor(max_workers=self._concurrency, thread_name_prefix="metalint")
        futures: list[Future[None]] = [
            executor.submit(self._execute, invocation, issues, stop) for invocation in invocations
        ]
        closer = threading.Thread(target=self._close_when_done, args=(futures, issues, stop), daemon=True)
        closer.start()
        try:
            while True:
                item = issues.get()
                if item is _DONE:
                    break
                if isinstance(item, _Fatal):
                    raise item.error
                if isinstance(item, Issue):
                    yield item
        finally:
            stop.set()
            executor.shutdown(wait=False, cancel_futures=True)

    def _close_when_done(self, futures: Sequence[Future[None]], issues: queue.Queue[object], stop: threading.Event) -> None:
        for future in futures:
            if future.cancelled():
                continue
            try:
                future.result()
            except Exception as exc:  # noqa: BLE001 - surfaced to the consumer as fatal
                self._put(issues, _Fatal(MetalintError(f"internal error: {exc}")), stop)
        self._put(issues, _DONE, stop)

    @staticmethod
    def _put(issues: queue.Queue[object], item: object, stop: threading.Event) -> bool:
        while not stop.is_set():
            try:
                issues.put(item, timeout=_PUT_POLL_SECONDS)
                return True
            except queue.Full:
                continue
        return False

    def _execute(self, invocation: Invocation, issues: queue.Queue[object], stop: threading.Event) -> None:
        if stop.is_set():
            return
        try:
            for issue in self._issues_for(invocation):
                if not self._put(issues, issue, stop):
                    return
        except InvocationError as exc:
            self._logger.debug(f"{invocation.tool.name} failed on {invocation.scope}: {exc}")
            with self._errors_lock:
                self._errors.append(exc)
        except MetalintError as exc:
            self._put(issues, _Fatal(exc), stop)

    def _issues_for(self, invocation: Invocation) -> Iterable[Issue]:
        tool = invocation.tool
        match tool.kind:
            case ToolKind.AST:
                if tool.check is None:
                    return ()
                return list(tool.check(invocation.scopes))
            case ToolKind.DIRECTORY | ToolKind.PACKAGE | ToolKind.FILE:
                return self._run_external(invocation)

    def _run_external(self, invocation: Invocation) -> Iterator[Issue]:
        tool = invocation.tool
        directory = invocation.directory or os.getcwd()
        resolved = resolve_executable(invocation.args, tool=tool.name, env=self._env)
        args = [resolved[0], *expand_globs(resolved[1:], directory)]
        self._logger.debug(f"executing {' '.join(args)}")
        result = run_with_deadline(
            args,
            tool=tool.name,
            scope=invocation.scope,
            deadline=self._deadline,
            cwd=invocation.directory,
            env=self._env,
        )
        if result.returncode != 0:
            self._logger.debug(f"{tool.name} exited with status {result.returncode}")
        self._logger.debug(f"{tool.name} took {result.elapsed:.3f}s")
        parser = OutputParser(tool, invocation.variables)
        return parser.parse(result.output, directory=invocation.directory)


__all__ = ["ISSUE_QUEUE_CAPACITY", "Invocation", "Scheduler"]
