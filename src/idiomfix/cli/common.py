"""Helpers shared by the CLI commands: settings, linter construction and output."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from idiomfix.config import Settings, load_settings
from idiomfix.core.annotations import AnnotationTypeService
from idiomfix.core.engine import ConfigurationError, Linter
from idiomfix.core.languages import is_supported_path
from idiomfix.models import FileReport
from idiomfix.presets import resolve_idioms

console = Console()
error_console = Console(stderr=True)

EXIT_CONFIGURATION_ERROR = 2
_SKIPPED_DIRECTORIES = frozenset({"node_modules", ".git"})


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


def configuration_failed(message: str) -> typer.Exit:
    error_console.print(f"[red]Configuration error:[/red] {message}")
    return typer.Exit(EXIT_CONFIGURATION_ERROR)


def resolve_settings(
    preset: str | None,
    rules: Sequence[str] | None,
    type_info: bool | None,
    verbose: bool,
) -> Settings:
    """Environment settings with the command-line options layered on top."""
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        raise configuration_failed(str(exc)) from exc

    overrides: dict[str, object] = {}
    if preset is not None:
        overrides["preset"] = preset
        overrides["rules"] = []
    if rules:
        overrides["rules"] = list(rules)
    if type_info is not None:
        overrides["type_info"] = type_info
    if verbose:
        overrides["log_level"] = "DEBUG"
    settings = settings.model_copy(update=overrides)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )
    return settings


def build_linter(settings: Settings) -> Linter:
    try:
        idioms = resolve_idioms(settings.preset, settings.rules)
        return Linter(idioms, AnnotationTypeService() if settings.type_info else None)
    except ConfigurationError as exc:
        raise configuration_failed(str(exc)) from exc


def collect_files(paths: Iterable[Path]) -> list[Path]:
    """Expand directories into the JavaScript/TypeScript files below them. Explicit files are kept as given."""
    files: list[Path] = []
    for path in paths:
        if not path.is_dir():
            files.append(path)
            continue
        for candidate in sorted(path.rglob("*")):
            if not candidate.is_file() or not is_supported_path(candidate):
                continue
            if _SKIPPED_DIRECTORIES.intersection(candidate.relative_to(path).parts):
                continue
            files.append(candidate)
    return files


def render_reports(reports: Sequence[FileReport], output_format: OutputFormat) -> None:
    if output_format == OutputFormat.JSON:
        payload = [report.model_dump(mode="json", exclude={"fixed_text"}) for report in reports]
        typer.echo(json.dumps(payload, indent=2))
        return

    table = Table(show_lines=False)
    table.add_column("file", overflow="fold")
    table.add_column("line", no_wrap=True)
    table.add_column("rule", no_wrap=True)
    table.add_column("message")
    table.add_column("fix", no_wrap=True)
    total = 0
    fixable = 0
    for report in reports:
        for diagnostic in report.diagnostics:
            total += 1
            if diagnostic.fix is not None:
                fixable += 1
                fix = "auto"
            elif diagnostic.suggestions:
                fix = "suggestion"
            else:
                fix = ""
            table.add_row(
                report.path or "<source>",
                f"{diagnostic.start.line}:{diagnostic.start.column}",
                diagnostic.rule_id,
                diagnostic.message,
                fix,
            )
    if total:
        console.print(table)
    console.print(f"({total} problem(s), {fixable} fixable)")
