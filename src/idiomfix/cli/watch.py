import asyncio
import contextlib
from pathlib import Path
from typing import Annotated

import typer

from idiomfix.cli.common import OutputFormat, build_linter, console, error_console, render_reports, resolve_settings
from idiomfix.watcher.watchfiles_adapter import WatchfilesWatcher


def watch(
    directory: Annotated[Path, typer.Argument(help="Directory to watch.")] = Path("."),
    preset: Annotated[str | None, typer.Option(help="Rule preset (see `idiomfix rules`).")] = None,
    rule: Annotated[
        list[str] | None, typer.Option("--rule", "-r", help="Enable only this rule. May be repeated.")
    ] = None,
    type_info: Annotated[
        bool | None, typer.Option("--type-info/--no-type-info", help="Use type annotations in the source.")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log at DEBUG level.")] = False,
) -> None:
    """Re-check files under DIRECTORY whenever they change."""
    if not directory.is_dir():
        error_console.print(f"[red]Not a directory:[/red] {directory}")
        raise typer.Exit(1)
    settings = resolve_settings(preset, rule, type_info, verbose)
    linter = build_linter(settings)

    async def _on_change(paths: set[Path]) -> None:
        reports = []
        for path in sorted(paths):
            try:
                reports.append(linter.lint_file(path))
            except (ValueError, OSError) as exc:
                error_console.print(f"[red]Error:[/red] {exc}")
        render_reports(reports, OutputFormat.TABLE)

    async def _run() -> None:
        watcher = WatchfilesWatcher(directory, _on_change)
        await watcher.start()
        console.print(f"[green]Watching[/green] {directory} (Ctrl+C to stop)")
        try:
            await watcher.wait()
        finally:
            await watcher.stop()

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(_run())
