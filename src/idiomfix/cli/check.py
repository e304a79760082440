from pathlib import Path
from typing import Annotated

import typer

from idiomfix.cli.common import (
    OutputFormat,
    build_linter,
    collect_files,
    error_console,
    render_reports,
    resolve_settings,
)
from idiomfix.models import FileReport


def check(
    paths: Annotated[list[Path], typer.Argument(help="Files or directories to check.")],
    preset: Annotated[str | None, typer.Option(help="Rule preset (see `idiomfix rules`).")] = None,
    rule: Annotated[
        list[str] | None, typer.Option("--rule", "-r", help="Enable only this rule. May be repeated.")
    ] = None,
    type_info: Annotated[
        bool | None, typer.Option("--type-info/--no-type-info", help="Use type annotations in the source.")
    ] = None,
    fix: Annotated[bool, typer.Option(help="Apply automatic fixes in place.")] = False,
    output_format: Annotated[OutputFormat, typer.Option("--format", help="Output format.")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log at DEBUG level.")] = False,
) -> None:
    """Check JavaScript/TypeScript files for legacy idioms."""
    settings = resolve_settings(preset, rule, type_info, verbose)
    linter = build_linter(settings)

    reports: list[FileReport] = []
    failed = False
    for path in collect_files(paths):
        try:
            report = linter.fix_file(path) if fix else linter.lint_file(path)
        except (ValueError, OSError) as exc:
            error_console.print(f"[red]Error:[/red] {exc}")
            failed = True
            continue
        reports.append(report)

    render_reports(reports, output_format)
    if failed or any(report.diagnostics for report in reports):
        raise typer.Exit(1)
