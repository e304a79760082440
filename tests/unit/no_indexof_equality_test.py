"""Tests for no-indexof-equality."""

import pytest

from idiomfix.core.annotations import AnnotationTypeService
from idiomfix.rules import NO_INDEXOF_EQUALITY


@pytest.fixture
def types() -> AnnotationTypeService:
    return AnnotationTypeService()


def test_requires_type_information() -> None:
    assert NO_INDEXOF_EQUALITY.requires_types is True


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("ok = s.indexOf('a') === 0;", "ok = s.startsWith('a');"),
        ("ok = 0 == s.indexOf(prefix);", "ok = s.startsWith(prefix);"),
    ],
)
def test_strings_use_starts_with(fix, types, code: str, expected: str) -> None:
    declaration = "const s: string = read();\n"
    assert fix(NO_INDEXOF_EQUALITY, declaration + code, "ts", types) == declaration + expected


def test_arrays_use_direct_access(lint, fix, types) -> None:
    code = "const xs: number[] = load();\nok = xs.indexOf(3) === 0;"
    report = lint(NO_INDEXOF_EQUALITY, code, "ts", types)
    assert report.diagnostics[0].message == "Use direct array access `xs[0] === 3` instead of `indexOf() === 0`"
    assert fix(NO_INDEXOF_EQUALITY, code, "ts", types).endswith("ok = xs[0] === 3;")


@pytest.mark.parametrize(
    "code",
    [
        "const xs: number[] = load();\nok = xs.indexOf(item) === 0;",
        "const xs: number[] = load();\nok = xs.indexOf(3) === 1;",
        "const s: string = read();\nok = s.indexOf('a') !== 0;",
        "const s: string = read();\nok = s.indexOf(/a/) === 0;",
        "const s: string = read();\nok = s.indexOf('a', 1) === 0;",
        "ok = unknown.indexOf('a') === 0;",
    ],
)
def test_no_finding(lint, types, code: str) -> None:
    assert lint(NO_INDEXOF_EQUALITY, code, "ts", types).diagnostics == []
