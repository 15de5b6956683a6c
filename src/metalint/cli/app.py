# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line entry point: ``metalint lint``, ``install`` and ``tools``."""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from ..catalog.install import InstallOptions, install_tools
from ..catalog.registry import ToolRegistry
from ..config.loader import load_config, merge_overrides
from ..config.models import Config
from ..core.logging import Logger
from ..core.severity import ExitStatus
from ..engine import LintEngine
from ..environment import augment_path
from ..errors import MetalintError
from ..reporting import render
from .overrides import LintFlags, build_overrides

app = typer.Typer(
    name="metalint",
    help="Run many Go analysis tools concurrently and merge their reports.",
    add_completion=False,
)


def _load(config_file: Path | None, logger: Logger) -> Config:
    try:
        return load_config(config_file)
    except MetalintError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=int(ExitStatus.FAILURE)) from exc


@app.command("lint")
def lint_command(
    paths: list[str] | None = typer.Argument(None, help="Directories to lint; use dir/... to recurse."),
    config_file: Path | None = typer.Option(None, "--config", help="TOML or JSON configuration file."),
    enable: list[str] | None = typer.Option(None, "--enable", "-E", help="Enable a linter (repeatable)."),
    disable: list[str] | None = typer.Option(None, "--disable", "-D", help="Disable a linter (repeatable)."),
    enable_all: bool = typer.Option(False, "--enable-all", help="Enable all linters."),
    disable_all: bool = typer.Option(False, "--disable-all", help="Disable all linters."),
    linter: list[str] | None = typer.Option(
        None,
        "--linter",
        help="Define a linter as NAME:COMMAND:PATTERN (repeatable).",
    ),
    message_overrides: list[str] | None = typer.Option(
        None,
        "--message-overrides",
        help="Override a linter's message as LINTER:MESSAGE (repeatable).",
    ),
    severity: list[str] | None = typer.Option(
        None,
        "--severity",
        help="Map a linter to a severity as LINTER:SEVERITY (repeatable).",
    ),
    fast: bool = typer.Option(False, "--fast", help="Only run fast linters."),
    concurrency: int | None = typer.Option(None, "--concurrency", "-j", help="Number of concurrent linters."),
    deadline: str | None = typer.Option(None, "--deadline", help="Per-invocation deadline such as 30s or 1m."),
    sort: list[str] | None = typer.Option(
        None,
        "--sort",
        help="Sort key: none, path, line, column, severity, message or linter (repeatable).",
    ),
    exclude: list[str] | None = typer.Option(None, "--exclude", "-e", help="Exclude issues matching REGEX."),
    include: list[str] | None = typer.Option(None, "--include", "-I", help="Only keep issues matching REGEX."),
    skip: list[str] | None = typer.Option(None, "--skip", "-s", help="Skip directories with this name."),
    aggregate: bool = typer.Option(False, "--aggregate", help="Merge issues reported by several linters."),
    errors_only: bool = typer.Option(False, "--errors", help="Only show errors."),
    vendor: bool = typer.Option(False, "--vendor", help="Skip vendor directories."),
    tests: bool = typer.Option(False, "--tests", "-t", help="Include test files for linters that support it."),
    warn_unmatched: bool = typer.Option(
        False,
        "--warn-unmatched-nolint",
        help="Warn about nolint directives that suppress nothing.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Write issues as a JSON array."),
    checkstyle: bool = typer.Option(False, "--checkstyle", help="Write issues as checkstyle XML."),
    output_format: str | None = typer.Option(None, "--format", help="Text line template."),
    cyclo_over: int | None = typer.Option(None, "--cyclo-over", help="Report functions above this complexity."),
    line_length: int | None = typer.Option(None, "--line-length", help="Report lines longer than this."),
    min_confidence: float | None = typer.Option(None, "--min-confidence", help="Minimum golint confidence."),
    min_occurrences: int | None = typer.Option(None, "--min-occurrences", help="Minimum goconst occurrences."),
    min_const_length: int | None = typer.Option(None, "--min-const-length", help="Minimum goconst length."),
    dupl_threshold: int | None = typer.Option(None, "--dupl-threshold", help="Minimum dupl token sequence."),
    debug: bool = typer.Option(False, "--debug", "-d", help="Show debug output."),
    emoji: bool = typer.Option(False, "--emoji/--no-emoji", help="Toggle emoji in log output."),
) -> None:
    """Lint PATHS with every enabled linter and report the merged issues."""

    logger = Logger(debug_enabled=debug, use_emoji=emoji)
    flags = LintFlags(
        enable=list(enable or []),
        disable=list(disable or []),
        linters=list(linter or []),
        message_overrides=list(message_overrides or []),
        severity=list(severity or []),
        sort=list(sort or []),
        exclude=list(exclude or []),
        include=list(include or []),
        skip=list(skip or []),
        enable_all=enable_all,
        disable_all=disable_all,
        fast=fast,
        aggregate=aggregate,
        errors_only=errors_only,
        vendor=vendor,
        tests=tests,
        warn_unmatched_directive=warn_unmatched,
        debug=debug,
        json_output=json_output,
        checkstyle=checkstyle,
        concurrency=concurrency,
        deadline=deadline,
        format=output_format,
        cyclo_over=cyclo_over,
        line_length=line_length,
        min_confidence=min_confidence,
        min_occurrences=min_occurrences,
        min_const_length=min_const_length,
        dupl_threshold=dupl_threshold,
    )
    base = _load(config_file, logger)
    try:
        config = merge_overrides(base, build_overrides(flags, base))
        logger.debug_enabled = config.debug
        run = LintEngine(config, logger=logger).run(list(paths or []))
    except MetalintError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=int(ExitStatus.FAILURE)) from exc

    try:
        render(run, config, sys.stdout, color=sys.stdout.isatty())
    except MetalintError as exc:
        logger.fail(str(exc))
        run.pipeline.reducer.record_failure()
    except OSError as exc:
        logger.fail(f"failed to write report: {exc}")
        run.pipeline.reducer.record_failure()
    for error in run.errors:
        logger.warn(str(error))
    for directive in run.unmatched_directives():
        logger.warn(directive.describe())
    raise typer.Exit(code=int(run.status))


@app.command("install")
def install_command(
    config_file: Path | None = typer.Option(None, "--config", help="Configuration declaring extra linters."),
    update: bool = typer.Option(False, "--update", "-u", help="Install the latest release of pinned tools."),
    force: bool = typer.Option(False, "--force", "-f", help="Force rebuilding of tools."),
    download_only: bool = typer.Option(False, "--download-only", help="Download without installing."),
    debug: bool = typer.Option(False, "--debug", "-d", help="Show debug output."),
    emoji: bool = typer.Option(False, "--emoji/--no-emoji", help="Toggle emoji in log output."),
) -> None:
    """Install every catalog linter that declares an install source."""

    logger = Logger(debug_enabled=debug, use_emoji=emoji)
    config = _load(config_file, logger)
    registry = ToolRegistry.builtin().configured(config)
    report = install_tools(
        registry.definitions(),
        InstallOptions(update=update, force=force, download_only=download_only, verbose=debug),
        env=augment_path(),
        logger=logger,
    )
    if not report.ok:
        logger.fail(f"failed to install the following linters: {', '.join(report.failed)}")
        raise typer.Exit(code=int(ExitStatus.FAILURE))
    logger.ok(f"installed {len(report.installed)} linter(s)")


@app.command("tools")
def tools_command(
    config_file: Path | None = typer.Option(None, "--config", help="Configuration declaring extra linters."),
) -> None:
    """List the linter catalog with commands and output patterns."""

    logger = Logger()
    config = _load(config_file, logger)
    registry = ToolRegistry.builtin().configured(config)
    table = Table(title="Linters", box=box.SIMPLE)
    for column in ("Name", "Default", "Fast", "Partition", "Command", "Pattern"):
        table.add_column(column)
    for definition in registry.definitions():
        table.add_row(
            definition.name,
            "yes" if definition.default_enabled else "no",
            "yes" if definition.is_fast else "no",
            definition.partition.value,
            definition.command,
            definition.pattern,
        )
    Console(soft_wrap=True).print(table)


def main() -> None:
    """Run the ``metalint`` application."""

    app()


__all__ = ["app", "main"]
