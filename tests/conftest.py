"""Shared fixtures and helpers for tests."""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from idiomfix.core.engine import Linter
from idiomfix.core.matching import Idiom
from idiomfix.core.ports.type_service import TypeService
from idiomfix.core.syntax import NodeKind, SourceFile, SyntaxNode, parse_source
from idiomfix.models import FileReport

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------

ParseFn = Callable[..., SourceFile]
FindFn = Callable[..., SyntaxNode]
LintFn = Callable[..., FileReport]
FixFn = Callable[..., str]


@pytest.fixture
def parse() -> ParseFn:
    """Parse a snippet; JavaScript unless a language is given."""

    def _parse(code: str, language: str = "javascript") -> SourceFile:
        return parse_source(code, language)

    return _parse


@pytest.fixture
def find() -> FindFn:
    """Return the first node (pre-order) of a kind, optionally with the given source text."""

    def _find(source: SourceFile, kind: NodeKind, text: str | None = None) -> SyntaxNode:
        for node in source.walk():
            if node.kind == kind and (text is None or source.text_of(node) == text):
                return node
        raise LookupError(f"No {kind} node with text {text!r}")

    return _find


@pytest.fixture
def lint() -> LintFn:
    """Lint a snippet with the given idioms."""

    def _lint(
        idioms: Idiom | Sequence[Idiom],
        code: str,
        language: str = "javascript",
        type_service: TypeService | None = None,
    ) -> FileReport:
        enabled = [idioms] if isinstance(idioms, Idiom) else list(idioms)
        return Linter(enabled, type_service).lint_text(code, language)

    return _lint


@pytest.fixture
def fix() -> FixFn:
    """Apply the automatic fixes of the given idioms until stable and return the new text."""

    def _fix(
        idioms: Idiom | Sequence[Idiom],
        code: str,
        language: str = "javascript",
        type_service: TypeService | None = None,
    ) -> str:
        enabled = [idioms] if isinstance(idioms, Idiom) else list(idioms)
        report = Linter(enabled, type_service).fix_text(code, language)
        assert report.fixed_text is not None
        return report.fixed_text

    return _fix
