"""End-to-end tests: the CLI over a small project tree and the watcher on a real directory."""

import asyncio
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from idiomfix.cli.app import app
from idiomfix.watcher.watchfiles_adapter import WatchfilesWatcher

runner = CliRunner()

UTIL_JS = """\
export function last(items) {
  return items[items.length - 1];
}

export function hasTag(tags, tag) {
  return tags.indexOf(tag) !== -1;
}
"""

CONFIG_TS = """\
export function port(value?: number) {
  return value !== null && value !== undefined ? value : 8080;
}

export const started = new Date().getTime();
"""


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "util.js").write_text(UTIL_JS, encoding="utf-8")
    (tmp_path / "src" / "config.ts").write_text(CONFIG_TS, encoding="utf-8")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "dep.js").write_text("a[a.length - 1];\n", encoding="utf-8")
    return tmp_path


def test_check_then_fix_project(project: Path) -> None:
    result = runner.invoke(app, ["check", str(project), "--preset", "all", "--format", "json"])
    assert result.exit_code == 1
    found = {
        (Path(report["path"]).name, diagnostic["rule_id"])
        for report in json.loads(result.stdout)
        for diagnostic in report["diagnostics"]
    }
    assert found == {
        ("util.js", "prefer-array-at"),
        ("util.js", "prefer-includes"),
        ("config.ts", "prefer-nullish-coalescing"),
        ("config.ts", "prefer-date-now"),
    }

    result = runner.invoke(app, ["check", str(project), "--preset", "all", "--fix"])
    assert result.exit_code == 0
    util = (project / "src" / "util.js").read_text(encoding="utf-8")
    assert "return items.at(-1);" in util
    assert "return tags.includes(tag);" in util
    config = (project / "src" / "config.ts").read_text(encoding="utf-8")
    assert "return value ?? 8080;" in config
    assert "export const started = Date.now();" in config
    assert (project / "node_modules" / "dep.js").read_text(encoding="utf-8") == "a[a.length - 1];\n"


@pytest.mark.asyncio
async def test_watcher_reports_written_file(tmp_path: Path) -> None:
    changed: asyncio.Queue[set[Path]] = asyncio.Queue()

    async def _on_change(paths: set[Path]) -> None:
        await changed.put(paths)

    watcher = WatchfilesWatcher(tmp_path, _on_change)
    await watcher.start()
    try:
        await asyncio.sleep(0.5)
        target = tmp_path / "app.js"
        target.write_text("x[x.length - 1];\n", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignored\n", encoding="utf-8")
        paths = await asyncio.wait_for(changed.get(), timeout=10)
    finally:
        await watcher.stop()

    assert {path.name for path in paths} == {"app.js"}
